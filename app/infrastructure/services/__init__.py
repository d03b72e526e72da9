"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.sql_audit_writer import (
    AuditTableShape,
    SqlAuditWriter,
    detect_shape,
)

__all__ = [
    "AuditTableShape",
    "SqlAuditWriter",
    "detect_shape",
]
