"""Browse view - one-shot fetch of available listings plus client-side search/filter."""

from typing import Iterable, Optional

from marketplace.models.listing import Listing
from marketplace.services.default_images import resolve_display_image
from marketplace.services.suggestions import get_suggestions
from marketplace.services.supabase_client import ListingRepository
from marketplace.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

EMPTY_SNAPSHOT_MESSAGE = "No storage units available at the moment."
NO_MATCHES_MESSAGE = "No units match your search criteria."


def filter_listings(
    snapshot: Iterable[Listing],
    search_term: Optional[str] = None,
    selected_type: Optional[str] = None,
) -> list[Listing]:
    """
    Apply the search and type filters to a snapshot.

    The search term (trimmed) matches the city case-insensitively or the zip
    code as-is. The type must match exactly. Both filters are ANDed; an empty
    value places no constraint.
    """
    filtered = list(snapshot)

    term = (search_term or "").strip()
    if term:
        lowered = term.lower()
        filtered = [
            listing for listing in filtered
            if lowered in listing.location_city.lower() or term in listing.location_zip
        ]

    if selected_type:
        filtered = [listing for listing in filtered if listing.unit_type == selected_type]

    return filtered


def available_unit_types(snapshot: Iterable[Listing]) -> list[str]:
    """Distinct unit types present in the snapshot, first-seen order."""
    return list(dict.fromkeys(listing.unit_type for listing in snapshot))


def listing_card(listing: Listing) -> dict:
    """Serializable summary of a listing for the browse grid."""
    card = listing.model_dump(mode="json")
    card["display_image_url"] = resolve_display_image(listing)
    return card


class BrowseView:
    """
    Browse state over a listing snapshot.

    ``visible_listings`` is re-derived from the snapshot every time the
    snapshot, search term or selected type changes.
    """

    def __init__(self, repository: ListingRepository):
        self.repository = repository
        self.all_listings: list[Listing] = []
        self.search_term = ""
        self.selected_type = ""
        self.loading = False
        self.loaded = False
        self.visible_listings: list[Listing] = []

    def _recompute(self) -> None:
        self.visible_listings = filter_listings(self.all_listings, self.search_term, self.selected_type)

    async def load(self) -> list[Listing]:
        """Fetch the snapshot once; on error log and fall back to no listings."""
        self.loading = True
        try:
            self.all_listings = await self.repository.list_available()
            logger.info("Fetched listings snapshot", count=len(self.all_listings))
        except Exception as e:
            logger.error("Error fetching listings", exc_info=True, error=str(e))
            self.all_listings = []
        finally:
            self.loading = False
            self.loaded = True

        self._recompute()
        return self.visible_listings

    def set_search_term(self, search_term: Optional[str]) -> list[Listing]:
        self.search_term = search_term or ""
        self._recompute()
        return self.visible_listings

    def set_selected_type(self, selected_type: Optional[str]) -> list[Listing]:
        self.selected_type = selected_type or ""
        self._recompute()
        return self.visible_listings

    @property
    def unit_types(self) -> list[str]:
        return available_unit_types(self.all_listings)

    @property
    def suggestions(self) -> list[str]:
        return get_suggestions(self.search_term)

    @property
    def empty_message(self) -> Optional[str]:
        if self.loading or self.visible_listings:
            return None
        if not self.all_listings:
            return EMPTY_SNAPSHOT_MESSAGE
        return NO_MATCHES_MESSAGE

    def cards(self) -> list[dict]:
        return [listing_card(listing) for listing in self.visible_listings]

    def to_dict(self) -> dict:
        """Observable browse state for the listings endpoint."""
        return {
            "loading": self.loading,
            "search": self.search_term,
            "type": self.selected_type,
            "listings": self.cards(),
            "total": len(self.visible_listings),
            "unit_types": self.unit_types,
            "suggestions": self.suggestions,
            "empty_message": self.empty_message,
        }
