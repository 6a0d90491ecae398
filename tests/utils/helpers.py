"""Test helper functions."""

import base64
import json
from io import BytesIO
from typing import Any, Dict, Optional


class MockSocket:
    """Socket stand-in that feeds a raw request and captures the response."""

    def __init__(self, raw_request: bytes):
        self.raw_request = raw_request
        self.sent = b""

    def makefile(self, *args, **kwargs):
        return BytesIO(self.raw_request)

    def sendall(self, data):
        self.sent += bytes(data)

    def close(self):
        pass


def build_raw_request(
    method: str,
    path: str,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> bytes:
    """Serialize an HTTP/1.0 request."""
    if body is None:
        payload = b""
    elif isinstance(body, (bytes, bytearray)):
        payload = bytes(body)
    elif isinstance(body, str):
        payload = body.encode("utf-8")
    else:
        payload = json.dumps(body).encode("utf-8")

    lines = [f"{method} {path} HTTP/1.0"]
    all_headers = {"Host": "localhost"}
    if payload:
        all_headers["Content-Type"] = "application/json"
        all_headers["Content-Length"] = str(len(payload))
    all_headers.update(headers or {})
    lines.extend(f"{name}: {value}" for name, value in all_headers.items())

    return ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8") + payload


def call_handler(
    handler_class,
    method: str,
    path: str,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> tuple[int, Dict[str, str], Any]:
    """
    Run a BaseHTTPRequestHandler over one request.

    Returns (status, headers, parsed JSON body).
    """
    sock = MockSocket(build_raw_request(method, path, body, headers))
    handler_class(sock, ("127.0.0.1", 8000), None)

    head, _, raw_body = sock.sent.partition(b"\r\n\r\n")
    status_line, *header_lines = head.decode("iso-8859-1").split("\r\n")
    status = int(status_line.split(" ")[1])
    response_headers = {}
    for line in header_lines:
        name, _, value = line.partition(":")
        response_headers[name.strip()] = value.strip()

    return status, response_headers, json.loads(raw_body) if raw_body else None


def encode_image(filename: str = "unit.jpg", content: bytes = b"\xff\xd8\xff\xe0fake-jpeg", content_type: str = "image/jpeg") -> dict:
    """JSON image object as the submission form sends it."""
    return {
        "filename": filename,
        "content_type": content_type,
        "content": base64.b64encode(content).decode("ascii"),
    }
