"""Test helper functions."""

import json
from datetime import datetime, timedelta, timezone
from io import BytesIO
from typing import Any, Dict, Optional, Tuple

FROZEN_NOW = datetime(2024, 12, 9, 12, 0, 0, tzinfo=timezone.utc)


def iso_from_now(**delta) -> str:
    """ISO timestamp relative to FROZEN_NOW, e.g. iso_from_now(hours=12)."""
    return (FROZEN_NOW + timedelta(**delta)).isoformat().replace("+00:00", "Z")


class MockSocket:
    """Minimal socket: serves one raw request and records what is sent back."""

    def __init__(self, raw_request: bytes):
        self.raw_request = raw_request
        self.sent = bytearray()

    def makefile(self, mode, *args, **kwargs):
        return BytesIO(self.raw_request)

    def sendall(self, data):
        self.sent.extend(data)

    def close(self):
        pass


def build_raw_request(
    method: str,
    path: str,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> bytes:
    """Serialize an HTTP/1.1 request; dict/list bodies are JSON-encoded."""
    if body is None:
        payload = b""
    elif isinstance(body, (bytes, str)):
        payload = body.encode("utf-8") if isinstance(body, str) else body
    else:
        payload = json.dumps(body).encode("utf-8")

    headers = dict(headers or {})
    if payload:
        headers.setdefault("Content-Type", "application/json")
        headers.setdefault("Content-Length", str(len(payload)))

    lines = [f"{method} {path} HTTP/1.1", "Host: localhost"]
    for name, value in headers.items():
        lines.append(f"{name}: {value}")
    return ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8") + payload


def parse_raw_response(raw: bytes) -> Tuple[int, Dict[str, str], Any]:
    """Split a raw HTTP response into (status, headers, decoded JSON body)."""
    head, _, body = bytes(raw).partition(b"\r\n\r\n")
    lines = head.decode("iso-8859-1").split("\r\n")
    status = int(lines[0].split(" ")[1])
    headers = {}
    for line in lines[1:]:
        name, _, value = line.partition(":")
        headers[name.strip()] = value.strip()
    return status, headers, json.loads(body) if body else None


def call_handler(
    handler_class,
    method: str,
    path: str,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> Tuple[int, Dict[str, str], Any]:
    """Run one request through a BaseHTTPRequestHandler subclass."""
    sock = MockSocket(build_raw_request(method, path, body, headers))
    handler_class(sock, ("127.0.0.1", 8000), None)
    return parse_raw_response(sock.sent)
