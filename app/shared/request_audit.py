"""Shared helpers for audit logging: derive request metadata from Starlette Request."""

from __future__ import annotations

from typing import Any

from starlette.requests import Request

from app.shared.utils.normalization import MASK

# Masked when the lowercased key contains any of these (Password2, confirmPassword, apiToken)
_SENSITIVE_FRAGMENTS = ("password", "pwd", "token", "secret")
_SENSITIVE_KEYS = frozenset({"pass", "authorization", "auth"})


def _is_sensitive(key: Any) -> bool:
    name = str(key).lower()
    return name in _SENSITIVE_KEYS or any(part in name for part in _SENSITIVE_FRAGMENTS)


def _trusts_proxy(request: Request) -> bool:
    app = request.scope.get("app")
    settings = getattr(app.state, "settings", None) if app is not None else None
    return bool(settings is not None and settings.trust_proxy)


def get_audit_request_context(request: Request) -> tuple[str | None, str | None, str | None]:
    """Return (request_id, ip_address, user_agent) for audit log entries.

    Single source of truth for deriving client identity from the request:
    request_id from request state, IP from request.client.host, user_agent
    from header. X-Forwarded-For (first hop) replaces the peer
    address only when the TRUST_PROXY setting is on.
    """
    request_id = getattr(request.state, "request_id", None)
    ip_address = request.client.host if request.client else None
    if _trusts_proxy(request):
        forwarded = request.headers.get("X-Forwarded-For")
        ip_address = (forwarded.split(",")[0].strip() if forwarded else None) or ip_address
    user_agent = request.headers.get("User-Agent")
    return (request_id, ip_address, user_agent)


def request_summary(request: Request, status: int) -> dict[str, Any]:
    """Return the status/method/path/ip/userAgent block stored in ERROR audits."""
    request_id, ip_address, user_agent = get_audit_request_context(request)
    summary: dict[str, Any] = {
        "status": status,
        "method": request.method,
        "path": request.url.path,
        "ip": ip_address,
        "userAgent": user_agent,
    }
    if request_id:
        summary["requestId"] = request_id
    return summary


def redact(value: Any) -> Any:
    """Return a copy of a JSON-like body with credential-looking keys masked."""
    if isinstance(value, dict):
        return {
            key: MASK if _is_sensitive(key) else redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact(item) for item in value]
    return value
