"""Security headers middleware.

Adds hardening headers to every response and marks API responses as
non-cacheable, since they carry tenant data and session state.
Raw ASGI (no BaseHTTPMiddleware).
"""

from typing import Callable

BASE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "same-origin",
}
API_HEADERS = {"Cache-Control": "no-store"}
HSTS_HEADER = ("Strict-Transport-Security", "max-age=31536000; includeSubDomains")


def SecurityHeadersMiddleware(
    app: Callable, api_prefix: str = "/api", hsts: bool = False
) -> Callable:
    """Set security headers on all responses; HSTS only when served over HTTPS."""
    base = dict(BASE_HEADERS)
    if hsts:
        base[HSTS_HEADER[0]] = HSTS_HEADER[1]
    base_list = [(k.lower().encode(), v.encode()) for k, v in base.items()]
    api_list = [(k.lower().encode(), v.encode()) for k, v in API_HEADERS.items()]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        extra = base_list + (api_list if scope.get("path", "").startswith(api_prefix) else [])

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                present = {name.lower() for name, _ in headers}
                headers.extend(h for h in extra if h[0] not in present)
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
