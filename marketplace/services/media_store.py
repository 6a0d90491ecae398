"""Supabase Storage wrapper for listing images."""

from typing import Optional
from supabase import Client
from ulid import ULID

from marketplace.utils.config import MarketplaceConfig
from marketplace.utils.errors import MediaStoreError, extract_service_message
from marketplace.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)


def generate_image_path(filename: str, bucket: Optional[str] = None) -> str:
    """
    Random object path that keeps the original file extension.

    Collisions are not retried; a ULID is unique enough for this.
    """
    bucket = bucket or MarketplaceConfig.IMAGE_BUCKET
    extension = filename.rsplit(".", 1)[-1]
    return f"{bucket}/{ULID()}.{extension}"


class MediaStore:
    """Upload + public URL access to one storage bucket."""

    def __init__(self, client: Client, bucket: Optional[str] = None):
        self.client = client
        self.bucket = bucket or MarketplaceConfig.IMAGE_BUCKET

    def _bucket(self):
        return self.client.storage.from_(self.bucket)

    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Upload bytes to ``path``; returns the path on success."""
        with log_timing("media.upload", logger=logger, bucket=self.bucket, path=path, size_bytes=len(content)):
            try:
                self._bucket().upload(path, content, {"content-type": content_type})
            except Exception as e:
                raise MediaStoreError(
                    f"Failed to upload image: {e}",
                    service_message=extract_service_message(e),
                )
        return path

    def get_public_url(self, path: str) -> str:
        """Public URL of an uploaded object."""
        try:
            url = self._bucket().get_public_url(path)
        except Exception as e:
            raise MediaStoreError(
                f"Failed to get public URL: {e}",
                service_message=extract_service_message(e),
            )
        if not url:
            raise MediaStoreError(f"No public URL returned for {path}")
        return url

    async def upload_image(self, filename: str, content: bytes, content_type: str) -> tuple[str, str]:
        """Upload under a random name; returns (path, public_url)."""
        path = generate_image_path(filename, self.bucket)
        await self.upload(path, content, content_type)
        public_url = self.get_public_url(path)
        logger.info("Uploaded listing image", bucket=self.bucket, path=path)
        return path, public_url
