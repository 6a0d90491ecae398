"""Detail view for a single listing."""

from typing import Optional

from marketplace.models.listing import Listing
from marketplace.services.default_images import get_default_image, resolve_display_image
from marketplace.services.supabase_client import ListingRepository
from marketplace.utils.errors import ListingNotFoundError
from marketplace.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

BACK_LINK = "/"


class DetailView:
    """Loads one listing; any miss or failure becomes the not-found state."""

    def __init__(self, repository: ListingRepository):
        self.repository = repository
        self.listing: Optional[Listing] = None
        self.loading = False
        self.not_found = False

    async def load(self, listing_id: Optional[str]) -> Optional[Listing]:
        self.loading = True
        self.listing = None
        try:
            if not listing_id:
                raise ListingNotFoundError("")
            self.listing = await self.repository.require(listing_id)
        except ListingNotFoundError:
            logger.info("Listing not found", listing_id=listing_id)
        except Exception as e:
            logger.error("Error fetching listing", exc_info=True, listing_id=listing_id, error=str(e))
        finally:
            self.loading = False

        self.not_found = self.listing is None
        return self.listing

    @property
    def display_image_url(self) -> Optional[str]:
        return resolve_display_image(self.listing) if self.listing else None

    @property
    def fallback_image_url(self) -> Optional[str]:
        # swapped in by the page when display_image_url fails to load
        return get_default_image(self.listing.unit_type) if self.listing else None

    def to_dict(self) -> dict:
        if self.not_found or self.listing is None:
            return {"not_found": True, "back_link": BACK_LINK}

        return {
            "not_found": False,
            "listing": self.listing.model_dump(mode="json"),
            "display_image_url": self.display_image_url,
            "fallback_image_url": self.fallback_image_url,
            "back_link": BACK_LINK,
        }
