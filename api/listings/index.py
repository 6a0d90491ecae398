"""Listings endpoint: browse (GET) and submit (POST)."""

import asyncio
from http.server import BaseHTTPRequestHandler

from pydantic import ValidationError

from marketplace.models.listing import UnitType
from marketplace.models.submission import ImageUpload, ListingForm
from marketplace.services.browse import BrowseView
from marketplace.services.media_store import MediaStore
from marketplace.services.submission import SubmissionFlow
from marketplace.services.supabase_client import ListingRepository, create_supabase_client
from marketplace.utils.errors import ConfigurationError, ImageValidationError
from marketplace.utils.http import (
    correlation_id_from,
    query_params,
    read_json_body,
    send_json,
    validation_errors,
)
from marketplace.utils.logging import correlation_context, get_structured_logger
from marketplace.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
logger = get_structured_logger(__name__)


def browse_listings(search: str, unit_type: str) -> dict:
    """Fetch the snapshot and apply the filters."""
    repository = ListingRepository(create_supabase_client())
    view = BrowseView(repository)
    asyncio.run(view.load())
    view.set_search_term(search)
    view.set_selected_type(unit_type)

    payload = view.to_dict()
    payload["form_unit_types"] = UnitType.choices()
    return payload


def submit_listing(form: ListingForm, image=None):
    """Run the submission flow against a fresh client."""
    client = create_supabase_client()
    flow = SubmissionFlow(ListingRepository(client), MediaStore(client))
    return asyncio.run(flow.submit(form, image))


class handler(BaseHTTPRequestHandler):
    """Vercel serverless function handler for /api/listings."""

    def do_GET(self):
        """Browse available listings."""
        params = query_params(self)
        with correlation_context(correlation_id_from(self)):
            try:
                payload = browse_listings(params.get("search", ""), params.get("type", ""))
            except ConfigurationError as e:
                logger.error("Listings endpoint misconfigured", error=str(e))
                send_json(self, 500, {"error": "service not configured"})
                return
            except Exception as e:
                logger.error("Error browsing listings", exc_info=True, error=str(e))
                send_json(self, 500, {"error": "internal server error"})
                return

            send_json(self, 200, payload)

    def do_POST(self):
        """Submit a new listing."""
        with correlation_context(correlation_id_from(self)):
            try:
                body = read_json_body(self)
            except ValueError as e:
                send_json(self, 400, {"ok": False, "error": f"invalid request body: {e}"})
                return

            image_payload = body.pop("image", None)
            try:
                form = ListingForm.model_validate(body)
                image = ImageUpload.from_payload(image_payload) if image_payload else None
            except ValidationError as e:
                send_json(self, 422, {"ok": False, "errors": validation_errors(e)})
                return
            except ImageValidationError as e:
                send_json(self, 422, {"ok": False, "errors": [{"field": "image", "message": str(e)}]})
                return

            try:
                result = submit_listing(form, image)
            except ConfigurationError as e:
                logger.error("Listings endpoint misconfigured", error=str(e))
                send_json(self, 500, {"ok": False, "error": "service not configured"})
                return
            except Exception as e:
                logger.error("Error submitting listing", exc_info=True, error=str(e))
                send_json(self, 500, {"ok": False, "error": "internal server error"})
                return

            if not result.ok:
                send_json(self, 502, {
                    "ok": False,
                    "status": result.status.value,
                    "error": result.error,
                })
                return

            send_json(self, 201, {
                "ok": True,
                "status": result.status.value,
                "listing": result.listing.model_dump(mode="json"),
                "redirect": {
                    "location": result.redirect_to,
                    "delay_seconds": result.redirect_after_seconds,
                },
            })
