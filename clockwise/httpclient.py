"""A minimal HTTPS GET that checks the status and skips the headers."""

from __future__ import annotations

import socket
import ssl
from typing import BinaryIO

STATUS_LIMIT = 31
TIMEOUT_SECONDS = 10


class HttpError(Exception):
    """Raised when a request cannot be sent or gets an unexpected reply."""


def read_response_body(stream: BinaryIO) -> bytes:
    """Check for a ``200 OK`` status, skip the headers and return the body."""
    status = stream.readline().split(b"\r", 1)[0][:STATUS_LIMIT]
    if b"200 OK" not in status:
        raise HttpError(f"Unexpected response: {status.decode('latin-1')}")
    while True:
        line = stream.readline()
        if not line:
            raise HttpError("Invalid response")
        if line in (b"\r\n", b"\n"):
            break
    return stream.read()


def http_get(host: str, path: str, port: int = 443) -> bytes:
    """GET ``path`` from ``host`` over TLS without certificate checks."""
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    try:
        raw = socket.create_connection((host, port), timeout=TIMEOUT_SECONDS)
    except OSError as error:
        raise HttpError("Connection failed") from error
    with context.wrap_socket(raw, server_hostname=host) as conn:
        request = (f"GET {path} HTTP/1.1\r\nHost: {host}\r\n"
                   "Connection: close\r\n\r\n").encode()
        try:
            conn.sendall(request)
        except OSError as error:
            raise HttpError("Failed to send request") from error
        with conn.makefile("rb") as stream:
            return read_response_body(stream)