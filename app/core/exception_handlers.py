"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses with a {"error": message} body. Route misses
(404) and server errors (5xx) are also written to the audit trail as
TableName "HTTP", ActionType ERROR.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.application.dtos.audit import AuditEntry
from app.core.config import get_settings
from app.domain.enums import AuditActionType
from app.domain.exceptions import RecordsException
from app.shared.request_audit import redact, request_summary

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "RESOURCE_NOT_FOUND": 404,
    "CONFLICT": 409,
    "DUPLICATE_EMAIL": 409,
    "TENANT_CODE_EXHAUSTED": 409,
    "TENANT_USER_ID_EXHAUSTED": 409,
    "PERSISTENCE_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
}

_UNAUDITED_PREFIXES = ("/.well-known",)


async def _audit_http_error(request: Request, status: int, message: str | None = None) -> None:
    """Write an ERROR audit entry for a route miss or server error (never raises)."""
    if request.url.path.startswith(_UNAUDITED_PREFIXES):
        return
    audit_logger = getattr(request.app.state, "audit_logger", None)
    if audit_logger is None:
        return
    summary: dict[str, Any] = request_summary(request, status)
    if message is not None:
        summary["message"] = message
    submitted = getattr(request.state, "submitted", None)
    if submitted is not None:
        summary["body"] = redact(submitted)
    context = None
    resolver = getattr(request.app.state, "tenant_context_resolver", None)
    if resolver is not None:
        context = resolver.peek(request)
    await audit_logger.log(
        AuditEntry(
            action=AuditActionType.ERROR,
            table_name="HTTP",
            user_id=context.user_id if context else None,
            tenant_id=context.tenant_id if context else None,
            tenant_user_id=context.tenant_user_id if context else None,
            message=summary,
        )
    )


async def _records_exception_handler(
    request: Request, exc: RecordsException
) -> JSONResponse:
    """Return {"error": message} with the status mapped from error_code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
        await _audit_http_error(request, status, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return {"error": detail}; audit route misses."""
    if exc.status_code == 404:
        await _audit_http_error(request, 404)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    await _audit_http_error(request, 500, str(exc))
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(status_code=500, content={"error": detail})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: RecordsException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(RecordsException, _records_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
