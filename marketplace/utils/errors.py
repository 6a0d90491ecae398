"""Error handling utilities."""

from typing import Optional


GENERIC_SUBMISSION_ERROR = "Failed to submit listing. Please try again."


class MarketplaceError(Exception):
    """Base exception for the storage marketplace backend."""
    pass


class ConfigurationError(MarketplaceError):
    """Required configuration is missing."""
    pass


class SupabaseError(MarketplaceError):
    """Supabase operation error."""

    def __init__(self, message: str, service_message: Optional[str] = None):
        super().__init__(message)
        self.service_message = service_message


class MediaStoreError(SupabaseError):
    """Supabase Storage upload or URL error."""
    pass


class ListingNotFoundError(MarketplaceError):
    """No listing exists for the requested identifier."""

    def __init__(self, listing_id: str):
        super().__init__(f"Listing not found: {listing_id}")
        self.listing_id = listing_id


class ImageValidationError(MarketplaceError):
    """Uploaded image was rejected before reaching storage."""
    pass


def extract_service_message(error: BaseException) -> Optional[str]:
    """
    Pull the human-readable message out of a Supabase client exception.

    postgrest's APIError exposes ``.message``; storage3 raises with a dict
    payload carrying a ``message`` key. Anything else falls back to str().
    """
    if isinstance(error, SupabaseError) and error.service_message:
        return error.service_message

    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message

    if error.args and isinstance(error.args[0], dict):
        payload_message = error.args[0].get("message")
        if payload_message:
            return str(payload_message)

    text = str(error)
    return text or None


def user_facing_message(error: BaseException, fallback: str = GENERIC_SUBMISSION_ERROR) -> str:
    """Convert any error into the single message shown to the user."""
    return extract_service_message(error) or fallback
