"""Request context middleware: request id and access log line.

Forwards a sane client-supplied request id (or issues one), stores it in
the request state for audit entries and echoes it on the response. One
INFO line per request records method, path, status and duration.
Raw ASGI so streaming responses are not buffered.
"""

import re
import secrets
import time
from typing import Callable

from app.shared.logging import get_logger

logger = get_logger("app.access")

REQUEST_ID_MAX_LENGTH = 64
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)


def _header(scope: dict, name: bytes) -> str | None:
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1")
    return None


def request_id_from(raw: str | None) -> str:
    """Keep a client id only if it is safe to log; otherwise issue a new one."""
    if raw and _REQUEST_ID_RE.match(raw.strip()):
        return raw.strip()
    return secrets.token_hex(8)


def RequestContextMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Attach request_id to scope state and log each request. Raw ASGI."""
    header_key = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = request_id_from(_header(scope, header_key))
        scope.setdefault("state", {})["request_id"] = request_id
        started = time.perf_counter()
        status_holder = {"status": 500}

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                status_holder["status"] = message["status"]
                headers = list(message.get("headers", []))
                headers.append((header_name.encode(), request_id.encode()))
                message["headers"] = headers
            await send(message)

        try:
            await app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "%s %s -> %d (%.1f ms) [%s]",
                scope.get("method"),
                scope.get("path"),
                status_holder["status"],
                (time.perf_counter() - started) * 1000,
                request_id,
            )

    return asgi_app
