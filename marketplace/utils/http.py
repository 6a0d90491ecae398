"""Helpers shared by the serverless HTTP handlers."""

import json
from http.server import BaseHTTPRequestHandler
from typing import Any, Optional
from urllib.parse import parse_qs, urlsplit

from pydantic import ValidationError

from marketplace.utils.logging_config import LoggingConfig


def send_json(request: BaseHTTPRequestHandler, status: int, payload: Any) -> None:
    """Write a JSON response."""
    body = json.dumps(payload).encode('utf-8')
    request.send_response(status)
    request.send_header('Content-Type', 'application/json')
    request.send_header('Content-Length', str(len(body)))
    request.end_headers()
    request.wfile.write(body)


def query_params(request: BaseHTTPRequestHandler) -> dict[str, str]:
    """First value of each query string parameter."""
    parsed = parse_qs(urlsplit(request.path).query, keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items() if values}


def read_json_body(request: BaseHTTPRequestHandler) -> dict:
    """
    Parse the request body as a JSON object.

    Raises ValueError for malformed JSON or a non-object body.
    """
    content_length = int(request.headers.get('Content-Length', 0) or 0)
    raw_body = request.rfile.read(content_length).decode('utf-8') if content_length > 0 else ""
    if not raw_body:
        return {}

    body = json.loads(raw_body)
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body


def correlation_id_from(request: BaseHTTPRequestHandler) -> Optional[str]:
    return request.headers.get(LoggingConfig.LOG_CORRELATION_ID_HEADER)


def validation_errors(error: ValidationError) -> list[dict]:
    """Flatten pydantic errors into [{field, message}]."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "body",
            "message": err["msg"],
        }
        for err in error.errors()
    ]
