"""Core: config, lifespan, exception handlers, sessions and tenant context."""

from app.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
