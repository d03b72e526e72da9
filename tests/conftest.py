"""Pytest configuration and fixtures for tenant-records.

HTTP tests run against app.main.create_app() over httpx ASGITransport with
no database: repositories are replaced through app.dependency_overrides and
the services on app.state (audit writer, hasher, sessions, photo storage)
with in-memory fakes. All imports use app.*.
"""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_client_repo, get_tenant_repo, get_user_repo
from app.application.dtos.auth import TenantContext
from app.application.services.audit_logger import AuditLogger
from app.core.config import get_settings
from app.core.session_store import InMemorySessionStore
from app.core.tenant_context import TenantContextResolver
from app.infrastructure.external.storage.photo_storage import LocalPhotoStorage
from app.infrastructure.persistence.database import Database
from app.main import create_app
from tests.fakes import (
    TENANT_A,
    TENANT_B,
    FakeClientRepository,
    FakePasswordHasher,
    FakeTenantRepository,
    FakeUserRepository,
    RecordingAuditWriter,
)


@pytest.fixture
def audit_writer() -> RecordingAuditWriter:
    return RecordingAuditWriter()


@pytest.fixture
def audit_logger(audit_writer: RecordingAuditWriter) -> AuditLogger:
    return AuditLogger(audit_writer)


@pytest.fixture
def hasher() -> FakePasswordHasher:
    return FakePasswordHasher()


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore(max_age_seconds=3600)


@pytest.fixture
def setup_store() -> InMemorySessionStore:
    return InMemorySessionStore(max_age_seconds=600)


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def client_repo() -> FakeClientRepository:
    return FakeClientRepository()


@pytest.fixture
def tenant_repo() -> FakeTenantRepository:
    return FakeTenantRepository((TENANT_A, "Acme Holdings"), (TENANT_B, "Beta Ltd"))


@pytest.fixture
def app(
    tmp_path: Path,
    audit_writer: RecordingAuditWriter,
    audit_logger: AuditLogger,
    hasher: FakePasswordHasher,
    session_store: InMemorySessionStore,
    setup_store: InMemorySessionStore,
    user_repo: FakeUserRepository,
    client_repo: FakeClientRepository,
    tenant_repo: FakeTenantRepository,
) -> FastAPI:
    """FastAPI app with fakes in place of Postgres, bcrypt and the audit table."""
    application = create_app()
    cookie_name = application.state.settings.session_cookie_name
    application.state.audit_writer = audit_writer
    application.state.audit_logger = audit_logger
    application.state.password_hasher = hasher
    application.state.session_store = session_store
    application.state.password_setup_store = setup_store
    application.state.photo_storage = LocalPhotoStorage(str(tmp_path / "uploads"))
    application.state.tenant_context_resolver = TenantContextResolver(
        session_store, audit_logger, cookie_name=cookie_name
    )
    application.dependency_overrides[get_user_repo] = lambda: user_repo
    application.dependency_overrides[get_client_repo] = lambda: client_repo
    application.dependency_overrides[get_tenant_repo] = lambda: tenant_repo
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin(user_repo: FakeUserRepository) -> TenantContext:
    """An active user of TENANT_A with password 'secret-pw'."""
    user_id = user_repo.seed(
        TENANT_A,
        FirstName="Ada",
        LastName="Admin",
        Email="ada@acme.test",
        Active=1,
        Password="hashed:secret-pw",
    )
    row = user_repo.rows[user_id]
    return TenantContext(
        user_id=user_id,
        email=row["Email"],
        tenant_id=TENANT_A,
        tenant_user_id=row["TenantUserId"],
    )


@pytest.fixture
def login_as(client: AsyncClient, session_store: InMemorySessionStore):
    """Open a server-side session for a context and put its cookie on the client."""

    def _login(context: TenantContext) -> str:
        token = session_store.create(context.to_session())
        client.cookies.set(get_settings().session_cookie_name, token)
        return token

    return _login


@pytest.fixture
def authed_client(client: AsyncClient, admin: TenantContext, login_as) -> AsyncClient:
    """Client logged in as the TENANT_A admin."""
    login_as(admin)
    return client


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL and a migrated schema (alembic upgrade head).
    Skips when Postgres is not configured. Use @pytest.mark.requires_db to mark
    tests that need this fixture; run without DB via: pytest -m 'not requires_db'.
    """
    database = Database.from_settings(get_settings())
    if not database.configured:
        pytest.skip("Postgres not configured: set DATABASE_URL, then run: alembic upgrade head")
    async with database.engine.connect() as conn:
        trans = await conn.begin()
        session = AsyncSession(bind=conn, expire_on_commit=False)
        try:
            yield session
        finally:
            await session.close()
            await trans.rollback()
    await database.dispose()
