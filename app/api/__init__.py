"""HTTP API: router, dependencies and endpoint modules."""

from app.api.router import api_router

__all__ = ["api_router"]
