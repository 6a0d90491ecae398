"""Health check endpoint."""

from http.server import BaseHTTPRequestHandler

from marketplace.utils.config import SERVICE_NAME, SITE_DESCRIPTION, SITE_TITLE
from marketplace.utils.http import send_json


class handler(BaseHTTPRequestHandler):
    """Health check handler for Vercel serverless function."""

    def do_GET(self):
        """Handle GET request."""
        send_json(self, 200, {
            "status": "ok",
            "service": SERVICE_NAME,
            "site": {"title": SITE_TITLE, "description": SITE_DESCRIPTION},
        })

    def do_POST(self):
        """Handle POST request (same as GET for health check)."""
        self.do_GET()
