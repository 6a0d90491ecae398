"""Location autocomplete endpoint."""

from http.server import BaseHTTPRequestHandler

from marketplace.services.suggestions import get_suggestions
from marketplace.utils.http import query_params, send_json


class handler(BaseHTTPRequestHandler):
    """GET /api/suggestions?q=<prefix>"""

    def do_GET(self):
        query = query_params(self).get("q", "")
        send_json(self, 200, {"query": query, "suggestions": get_suggestions(query)})
