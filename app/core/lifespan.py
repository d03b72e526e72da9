"""Application services and lifespan: construction, startup and shutdown.

Service objects (database, audit writer/logger, session store, password
hasher, photo storage) are built once per app by build_services() and kept
on app.state, where request dependencies read them. Building them does not
touch the network; the lifespan performs the startup work (audit table
layout detection) and the shutdown work (sessions cleared, pool disposed).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.services.audit_logger import AuditLogger
from app.core.config import Settings
from app.core.session_store import InMemorySessionStore
from app.core.tenant_context import TenantContextResolver
from app.infrastructure.external.storage.photo_storage import LocalPhotoStorage
from app.infrastructure.persistence.database import Database
from app.infrastructure.security.password import BcryptPasswordHasher
from app.infrastructure.services.sql_audit_writer import SqlAuditWriter

logger = logging.getLogger(__name__)


def build_services(app: FastAPI, settings: Settings) -> None:
    """Construct the process-wide service objects and attach them to app.state."""
    database = Database.from_settings(settings)
    audit_writer = SqlAuditWriter(database, table_name=settings.audit_table_name)
    audit_logger = AuditLogger(audit_writer)
    session_store = InMemorySessionStore(settings.session_max_age_seconds)
    password_setup_store = InMemorySessionStore(settings.password_setup_max_age_seconds)

    app.state.settings = settings
    app.state.database = database
    app.state.audit_writer = audit_writer
    app.state.audit_logger = audit_logger
    app.state.session_store = session_store
    app.state.password_setup_store = password_setup_store
    app.state.password_hasher = BcryptPasswordHasher(settings.bcrypt_rounds)
    app.state.photo_storage = LocalPhotoStorage(settings.upload_dir)
    app.state.tenant_context_resolver = TenantContextResolver(
        session_store, audit_logger, cookie_name=settings.session_cookie_name
    )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: detect the audit table layout (a failure is logged and the
    writer retries detection on its first write). Shutdown: clear sessions,
    dispose the SQL engine.
    """
    database: Database = app.state.database
    audit_writer: SqlAuditWriter = app.state.audit_writer

    # ---- Startup ----
    if database.configured:
        try:
            await audit_writer.detect()
        except Exception:
            logger.warning(
                "Audit table layout detection failed; will retry on first write",
                exc_info=True,
            )
    else:
        logger.warning("DATABASE_URL is not set; persistence endpoints will return 503")

    yield

    # ---- Shutdown ----
    app.state.session_store.clear()
    app.state.password_setup_store.clear()
    logger.info("Sessions cleared")
    await database.dispose()
