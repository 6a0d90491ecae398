"""Application configuration read from environment variables."""

import os
from typing import Optional

from marketplace.utils.errors import ConfigurationError


SERVICE_NAME = "storage-marketplace"
SITE_TITLE = "Storage Marketplace - Rent Storage Units"
SITE_DESCRIPTION = "Find and rent storage units for boats, vehicles, and more"


class MarketplaceConfig:
    """Centralized marketplace configuration."""

    LISTINGS_TABLE = os.environ.get("LISTINGS_TABLE", "listings")
    IMAGE_BUCKET = os.environ.get("IMAGE_BUCKET", "unit-images")
    SUGGESTION_LIMIT = int(os.environ.get("SUGGESTION_LIMIT", "8"))
    SUBMISSION_REDIRECT_PATH = "/"
    SUBMISSION_REDIRECT_DELAY_SECONDS = float(
        os.environ.get("SUBMISSION_REDIRECT_DELAY_SECONDS", "2")
    )

    @staticmethod
    def supabase_url() -> Optional[str]:
        """Supabase project URL (read at call time so tests can override it)."""
        return os.environ.get("SUPABASE_URL", "").strip() or None

    @staticmethod
    def supabase_key() -> Optional[str]:
        """Public anon key, falling back to the service role key."""
        key = os.environ.get("SUPABASE_ANON_KEY") or os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
        return key.strip() if key else None

    @classmethod
    def require_supabase_credentials(cls) -> tuple[str, str]:
        """Return (url, key) or raise listing every missing variable."""
        url = cls.supabase_url()
        key = cls.supabase_key()

        missing = []
        if not url:
            missing.append("SUPABASE_URL")
        if not key:
            missing.append("SUPABASE_ANON_KEY")
        if missing:
            raise ConfigurationError(
                f"Missing Supabase environment variables: {', '.join(missing)}"
            )
        return url, key
