"""FastAPI dependencies (composition root).

Process-wide services live on app.state (see app.core.lifespan); request
scoped objects (DB session, repositories, services) are built here. Tests
replace repositories through app.dependency_overrides and services by
assigning app.state attributes.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from app.application.dtos.auth import TenantContext
from app.application.services.audit_logger import AuditLogger
from app.application.services.auth_service import SessionAuthenticator
from app.application.services.record_service import RecordService
from app.application.services.tenant_service import TenantService
from app.core.config import Settings, get_settings
from app.core.session_store import InMemorySessionStore
from app.domain.exceptions import ValidationException
from app.domain.record_fields import CLIENT_ENTITY, USER_ENTITY
from app.infrastructure.external.storage.photo_storage import LocalPhotoStorage
from app.infrastructure.persistence.repositories import (
    ClientRepository,
    TenantRepository,
    UserRepository,
)
from app.infrastructure.security.password import BcryptPasswordHasher

_FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_audit_logger(request: Request) -> AuditLogger:
    return request.app.state.audit_logger


def get_session_store(request: Request) -> InMemorySessionStore:
    return request.app.state.session_store


def get_password_setup_store(request: Request) -> InMemorySessionStore:
    return request.app.state.password_setup_store


def get_password_hasher(request: Request) -> BcryptPasswordHasher:
    return request.app.state.password_hasher


def get_photo_storage(request: Request) -> LocalPhotoStorage:
    return request.app.state.photo_storage


async def get_db_transactional(request: Request) -> AsyncIterator[AsyncSession]:
    """Database session for the request: commits on success, rolls back on exception.

    Raises SqlNotConfiguredException (503) when DATABASE_URL is not set.
    """
    async with request.app.state.database.session() as session:
        yield session


async def get_tenant_context(request: Request) -> TenantContext:
    """Require a live session with a tenant; 401 (audited) otherwise."""
    return await request.app.state.tenant_context_resolver.resolve(request)


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
AuditLoggerDep = Annotated[AuditLogger, Depends(get_audit_logger)]
SessionStoreDep = Annotated[InMemorySessionStore, Depends(get_session_store)]
PasswordSetupStoreDep = Annotated[InMemorySessionStore, Depends(get_password_setup_store)]
HasherDep = Annotated[BcryptPasswordHasher, Depends(get_password_hasher)]
PhotoStorageDep = Annotated[LocalPhotoStorage, Depends(get_photo_storage)]
DbDep = Annotated[AsyncSession, Depends(get_db_transactional)]
TenantContextDep = Annotated[TenantContext, Depends(get_tenant_context)]


def get_user_repo(db: DbDep) -> UserRepository:
    return UserRepository(db)


def get_client_repo(db: DbDep) -> ClientRepository:
    return ClientRepository(db)


def get_tenant_repo(db: DbDep) -> TenantRepository:
    return TenantRepository(db)


def get_user_service(
    repo: Annotated[UserRepository, Depends(get_user_repo)],
    audit_logger: AuditLoggerDep,
    hasher: HasherDep,
    settings: SettingsDep,
) -> RecordService:
    return RecordService(
        USER_ENTITY, repo, audit_logger, hasher, max_attempts=settings.tenant_code_max_attempts
    )


def get_client_service(
    repo: Annotated[ClientRepository, Depends(get_client_repo)],
    audit_logger: AuditLoggerDep,
    hasher: HasherDep,
    settings: SettingsDep,
) -> RecordService:
    return RecordService(
        CLIENT_ENTITY, repo, audit_logger, hasher, max_attempts=settings.tenant_code_max_attempts
    )


def get_tenant_service(
    repo: Annotated[TenantRepository, Depends(get_tenant_repo)],
    audit_logger: AuditLoggerDep,
    settings: SettingsDep,
) -> TenantService:
    return TenantService(repo, audit_logger, max_attempts=settings.tenant_code_max_attempts)


def get_authenticator(
    users: Annotated[UserRepository, Depends(get_user_repo)],
    hasher: HasherDep,
    sessions: SessionStoreDep,
    setup_tokens: PasswordSetupStoreDep,
    audit_logger: AuditLoggerDep,
) -> SessionAuthenticator:
    return SessionAuthenticator(users, hasher, sessions, audit_logger, setup_tokens=setup_tokens)


UserServiceDep = Annotated[RecordService, Depends(get_user_service)]
ClientServiceDep = Annotated[RecordService, Depends(get_client_service)]
TenantServiceDep = Annotated[TenantService, Depends(get_tenant_service)]
AuthenticatorDep = Annotated[SessionAuthenticator, Depends(get_authenticator)]


async def read_submitted(request: Request) -> tuple[dict[str, Any], UploadFile | None]:
    """Read a record body sent as JSON or as a (multipart) form.

    The parsed fields are kept on request.state so error audits can include
    them (redacted). A multipart file field named "photo" is returned
    separately.

    Returns:
        (fields, photo upload or None)
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    photo: UploadFile | None = None
    if content_type in _FORM_TYPES:
        form = await request.form()
        fields: dict[str, Any] = {}
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key == "photo" and value.filename:
                    photo = value
            else:
                fields[key] = value
    else:
        raw = await request.body()
        if not raw.strip():
            fields = {}
        else:
            try:
                fields = await request.json()
            except ValueError as e:
                raise ValidationException("Request body must be valid JSON") from e
            if not isinstance(fields, dict):
                raise ValidationException("Request body must be a JSON object")
    request.state.submitted = fields
    return fields, photo


@asynccontextmanager
async def stored_photo(
    storage: LocalPhotoStorage, ctx: TenantContext, photo: UploadFile | None
) -> AsyncIterator[str | None]:
    """Persist an uploaded photo under the caller's tenant for the body of the block.

    Yields the tenant-relative path (None when nothing was uploaded). When the
    block raises, the stored file is removed again so a rejected create or
    update leaves no orphan on disk.
    """
    relative_path = None
    if photo is not None:
        data = await photo.read()
        if data:
            relative_path = await storage.save(ctx.tenant_id, photo.filename, data)
    try:
        yield relative_path
    except Exception:
        if relative_path is not None:
            await storage.delete(relative_path)
        raise
