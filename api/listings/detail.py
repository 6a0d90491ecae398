"""Listing detail endpoint."""

import asyncio
from http.server import BaseHTTPRequestHandler

from marketplace.services.detail import BACK_LINK, DetailView
from marketplace.services.supabase_client import ListingRepository, create_supabase_client
from marketplace.utils.http import correlation_id_from, query_params, send_json
from marketplace.utils.logging import correlation_context, get_structured_logger
from marketplace.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
logger = get_structured_logger(__name__)


def load_detail(listing_id: str) -> DetailView:
    view = DetailView(ListingRepository(create_supabase_client()))
    asyncio.run(view.load(listing_id))
    return view


class handler(BaseHTTPRequestHandler):
    """GET /api/listings/detail?id=<listing id>"""

    def do_GET(self):
        listing_id = query_params(self).get("id", "")
        with correlation_context(correlation_id_from(self)):
            try:
                view = load_detail(listing_id)
            except Exception as e:
                # client construction failed; still render not-found
                logger.error("Error loading listing detail", exc_info=True, listing_id=listing_id, error=str(e))
                send_json(self, 404, {"not_found": True, "back_link": BACK_LINK})
                return

            send_json(self, 404 if view.not_found else 200, view.to_dict())
