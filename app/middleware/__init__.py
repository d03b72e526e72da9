"""HTTP middleware: request context (id + access log) and security headers.

Applied in main app; order matters (first added = outermost).
"""

from app.middleware.request_context import RequestContextMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestContextMiddleware",
    "SecurityHeadersMiddleware",
]
