"""ASGI entry point for the tenant records service.

create_app() wires the process-wide services onto app.state, then the
lifespan, error handlers, middleware and the /api router. Settings are
read when create_app() runs, not at import, so tests can adjust the
environment first.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import api_router
from app.core.config import get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import build_services, create_lifespan
from app.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from app.shared.logging import setup_logging


def create_app() -> FastAPI:
    """Build the application with services from the current settings."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    build_services(app, settings)

    register_exception_handlers(app)

    # Middleware: first added = innermost. Request context is outermost so every line carries the id.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.session_cookie_secure)
    app.add_middleware(RequestContextMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
