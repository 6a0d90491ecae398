"""Listing submission flow: optional image upload, then a single insert."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel

from marketplace.models.listing import Listing
from marketplace.models.submission import ImageUpload, ListingForm
from marketplace.services.media_store import MediaStore
from marketplace.services.supabase_client import ListingRepository
from marketplace.utils.config import MarketplaceConfig
from marketplace.utils.errors import user_facing_message
from marketplace.utils.logging import get_structured_logger, mask_sensitive_data

logger = get_structured_logger(__name__)


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class SubmissionResult(BaseModel):
    """Outcome of one submit attempt."""
    status: SubmissionStatus
    listing: Optional[Listing] = None
    error: Optional[str] = None
    redirect_to: Optional[str] = None
    redirect_after_seconds: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.status == SubmissionStatus.SUCCESS


class SubmissionFlow:
    """
    idle -> submitting -> success | failed.

    A failed attempt lands back in idle with ``error`` set so the lister can
    resubmit. Success is terminal and carries the redirect to the browse page.
    """

    def __init__(self, repository: ListingRepository, media_store: MediaStore):
        self.repository = repository
        self.media_store = media_store
        self.status = SubmissionStatus.IDLE
        self.error: Optional[str] = None

    async def submit(self, form: ListingForm, image: Optional[ImageUpload] = None) -> SubmissionResult:
        """Upload the image (if any), then insert the listing."""
        if self.status in (SubmissionStatus.SUBMITTING, SubmissionStatus.SUCCESS):
            raise RuntimeError(f"Cannot submit while {self.status.value}")

        self.status = SubmissionStatus.SUBMITTING
        self.error = None
        uploaded_path: Optional[str] = None
        stage = "upload"

        try:
            image_url = None
            if image is not None:
                uploaded_path, image_url = await self.media_store.upload_image(
                    image.filename, image.content, image.content_type
                )

            stage = "insert"
            listing = await self.repository.insert(form.to_draft(image_url=image_url))
        except Exception as e:
            self.error = user_facing_message(e)
            logger.error(
                "Listing submission failed",
                error=mask_sensitive_data(str(e)),
                stage=stage,
            )
            if uploaded_path:
                logger.warning(
                    "Uploaded image orphaned by failed insert",
                    bucket=self.media_store.bucket,
                    path=uploaded_path,
                )
            failed = SubmissionResult(status=SubmissionStatus.FAILED, error=self.error)
            self.status = SubmissionStatus.IDLE
            return failed

        self.status = SubmissionStatus.SUCCESS
        logger.info("Listing submitted", listing_id=listing.id, has_image=image_url is not None)
        return SubmissionResult(
            status=SubmissionStatus.SUCCESS,
            listing=listing,
            redirect_to=MarketplaceConfig.SUBMISSION_REDIRECT_PATH,
            redirect_after_seconds=MarketplaceConfig.SUBMISSION_REDIRECT_DELAY_SECONDS,
        )
