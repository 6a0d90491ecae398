"""Shared pytest fixtures and configuration."""

import os
import pytest
from unittest.mock import MagicMock

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("LOG_FORMAT", "text")

from marketplace.models.listing import Listing
from tests.utils.factories import create_listing_data
from tests.utils.fakes import FakeSupabaseClient


@pytest.fixture
def mock_supabase_client():
    """MagicMock Supabase client whose query chain returns itself."""
    client = MagicMock()
    query = MagicMock()
    for method in ("select", "eq", "order", "limit", "insert"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=[])
    client.table.return_value = query
    client.query = query
    return client


@pytest.fixture
def fake_supabase():
    """In-memory Supabase client."""
    return FakeSupabaseClient()


@pytest.fixture
def listing_factory():
    """Build Listing models from factory rows."""
    def _make(**overrides) -> Listing:
        return Listing.model_validate(create_listing_data(**overrides))
    return _make


@pytest.fixture
def sample_snapshot(listing_factory):
    """Mixed snapshot: two Austin listings, one Dallas listing."""
    return [
        listing_factory(location_city="Austin", location_zip="78701", unit_type="Garage"),
        listing_factory(location_city="Dallas", location_zip="75201", unit_type="Warehouse"),
        listing_factory(location_city="AUSTIN", location_zip="78702", unit_type="Boat Storage"),
    ]


@pytest.fixture(scope="function")
def reset_environment():
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
