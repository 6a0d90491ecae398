"""End-to-end flows over the in-memory Supabase client."""

import pytest

from marketplace.models.submission import ImageUpload, ListingForm
from marketplace.services.browse import BrowseView
from marketplace.services.detail import DetailView
from marketplace.services.media_store import MediaStore
from marketplace.services.submission import SubmissionFlow, SubmissionStatus
from marketplace.services.supabase_client import ListingRepository
from tests.utils.factories import create_form_data


@pytest.fixture
def repository(fake_supabase):
    return ListingRepository(fake_supabase)


@pytest.fixture
def media_store(fake_supabase):
    return MediaStore(fake_supabase)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_submitted_listing_is_browsable_and_viewable(repository, media_store):
    """Large Garage in Austin, no image: stored available, visible, fetchable."""
    form = ListingForm.model_validate(create_form_data())

    result = await SubmissionFlow(repository, media_store).submit(form)
    assert result.status == SubmissionStatus.SUCCESS

    detail = DetailView(repository)
    fetched = await detail.load(result.listing.id)
    assert fetched.image_url is None
    assert fetched.is_available is True
    assert fetched.title == "Large Garage"
    assert fetched.price_per_month == 150.0
    assert fetched.size_sq_ft == 200

    browse = BrowseView(repository)
    await browse.load()
    assert [listing.id for listing in browse.visible_listings] == [result.listing.id]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_browse_newest_first(repository, media_store):
    flow_titles = ["First", "Second", "Third"]
    for title in flow_titles:
        form = ListingForm.model_validate(create_form_data(title=title))
        await SubmissionFlow(repository, media_store).submit(form)

    browse = BrowseView(repository)
    await browse.load()

    assert [listing.title for listing in browse.visible_listings] == ["Third", "Second", "First"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_upload_failure_leaves_no_record(fake_supabase, repository, media_store):
    fake_supabase.fail_upload = "storage unavailable"
    form = ListingForm.model_validate(create_form_data(title="Never Stored"))
    image = ImageUpload(filename="a.jpg", content=b"jpg", content_type="image/jpeg")

    result = await SubmissionFlow(repository, media_store).submit(form, image)

    assert result.status == SubmissionStatus.FAILED
    assert result.error == "storage unavailable"
    browse = BrowseView(repository)
    await browse.load()
    assert all(listing.title != "Never Stored" for listing in browse.all_listings)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_insert_failure_orphans_uploaded_image(fake_supabase, repository, media_store):
    fake_supabase.fail_insert = "insert rejected"
    form = ListingForm.model_validate(create_form_data())
    image = ImageUpload(filename="a.jpg", content=b"jpg", content_type="image/jpeg")

    result = await SubmissionFlow(repository, media_store).submit(form, image)

    assert result.status == SubmissionStatus.FAILED
    # no compensating delete
    assert len(fake_supabase.objects["unit-images"]) == 1
    assert fake_supabase.tables.get("listings", []) == []


@pytest.mark.integration
@pytest.mark.asyncio
async def test_detail_for_unknown_id_is_not_found(repository):
    view = DetailView(repository)

    assert await view.load("00000000-0000-0000-0000-000000000000") is None
    assert view.not_found is True
