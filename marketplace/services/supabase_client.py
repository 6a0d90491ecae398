"""Supabase client construction and the listings table repository."""

from typing import Optional
from pydantic import ValidationError
from supabase import create_client, Client
from supabase.client import ClientOptions

from marketplace.models.listing import Listing, ListingDraft
from marketplace.utils.config import MarketplaceConfig
from marketplace.utils.errors import ListingNotFoundError, SupabaseError, extract_service_message
from marketplace.utils.logging import get_structured_logger, log_timing, mask_email

logger = get_structured_logger(__name__)


def create_supabase_client(url: Optional[str] = None, key: Optional[str] = None) -> Client:
    """
    Create a Supabase client handle.

    Called once per request by the endpoints and passed explicitly to the
    repository and media store; there is no module-level client.
    """
    if not url or not key:
        env_url, env_key = MarketplaceConfig.require_supabase_credentials()
        url = url or env_url
        key = key or env_key

    options = ClientOptions(
        auto_refresh_token=False,
        persist_session=False,
    )

    client = create_client(url, key, options)
    logger.debug("Supabase client initialized", url=url)
    return client


class ListingRepository:
    """Query/insert access to the listings table."""

    def __init__(self, client: Client, table: Optional[str] = None):
        self.client = client
        self.table = table or MarketplaceConfig.LISTINGS_TABLE

    def _query(self):
        return self.client.table(self.table)

    @staticmethod
    def _to_listing(row: dict) -> Listing:
        try:
            return Listing.model_validate(row)
        except ValidationError as e:
            raise SupabaseError(f"Malformed listing row {row.get('id')}: {e}")

    async def list_available(self) -> list[Listing]:
        """All available listings, newest first."""
        with log_timing("listings.list_available", logger=logger, table=self.table):
            try:
                result = (
                    self._query()
                    .select("*")
                    .eq("is_available", True)
                    .order("created_at", desc=True)
                    .execute()
                )
            except Exception as e:
                raise SupabaseError(
                    f"Failed to fetch listings: {e}",
                    service_message=extract_service_message(e),
                )

        rows = result.data if result.data else []
        listings = []
        for row in rows:
            try:
                listings.append(self._to_listing(row))
            except SupabaseError as e:
                logger.warning("Skipping malformed listing row", listing_id=row.get("id"), error=str(e))
        return listings

    async def get_by_id(self, listing_id: str) -> Optional[Listing]:
        """Get listing by ID, or None when no row matches."""
        with log_timing("listings.get_by_id", logger=logger, listing_id=listing_id):
            try:
                result = self._query().select("*").eq("id", listing_id).limit(1).execute()
            except Exception as e:
                raise SupabaseError(
                    f"Failed to get listing: {e}",
                    service_message=extract_service_message(e),
                )

        if result.data and len(result.data) > 0:
            return self._to_listing(result.data[0])
        return None

    async def require(self, listing_id: str) -> Listing:
        """Get listing by ID or raise ListingNotFoundError."""
        listing = await self.get_by_id(listing_id)
        if listing is None:
            raise ListingNotFoundError(listing_id)
        return listing

    async def insert(self, draft: ListingDraft) -> Listing:
        """Insert a new listing and return the stored row."""
        record = draft.to_record()
        with log_timing("listings.insert", logger=logger, contact_email=mask_email(record["contact_email"])):
            try:
                result = self._query().insert(record).execute()
            except Exception as e:
                raise SupabaseError(
                    f"Failed to create listing: {e}",
                    service_message=extract_service_message(e),
                )

        if result.data and len(result.data) > 0:
            return self._to_listing(result.data[0])
        raise SupabaseError("Failed to create listing: no data returned")
