"""Audit writer that adapts to the deployed layout of the Audit table.

Deployments differ in which tenant columns the audit table carries
(CompanyId/CompanyUserId, TenantId/TenantUserId or neither) and in the
name of the timestamp column (ActionDate or CreatedDate). The layout is
detected once, at startup, by inspecting the table; every later write
uses that one insert shape. Writes run on their own connection and
transaction so a failing audit insert cannot roll back the request's work.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Integer, column, inspect, table

from app.application.dtos.audit import AuditEntry
from app.domain.enums import AuditColumnLayout
from app.infrastructure.persistence.database import Database
from app.shared.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_LAYOUT_COLUMNS: tuple[tuple[AuditColumnLayout, str, str], ...] = (
    (AuditColumnLayout.COMPANY, "CompanyId", "CompanyUserId"),
    (AuditColumnLayout.TENANT, "TenantId", "TenantUserId"),
)
_TIMESTAMP_COLUMNS = ("ActionDate", "CreatedDate")
_BASE_COLUMNS = ("UserId", "TableName", "ActionType", "Message")


@dataclass(frozen=True)
class AuditTableShape:
    """Detected insert shape: actual column names as the database spells them."""

    layout: AuditColumnLayout
    tenant_column: str | None
    tenant_user_column: str | None
    timestamp_column: str | None
    base_columns: dict[str, str]
    integer_user_id: bool = False


def detect_shape(
    columns: Iterable[str], integer_columns: Iterable[str] = ()
) -> AuditTableShape:
    """Pick the best-matching insert shape for the given column names.

    Matching is case-insensitive (unquoted Postgres identifiers are folded
    to lower case). The Company pair is preferred over the Tenant pair when
    a table has both, since those tables were migrated by adding columns.

    Args:
        columns: Column names reported by the database.
        integer_columns: Those of columns whose type is an Integer type;
            UserId is then written as an int instead of text.

    Returns:
        The shape; layout NONE when neither identifier pair is complete.
    """
    by_lower = {name.lower(): name for name in columns}
    layout = AuditColumnLayout.NONE
    tenant_column = tenant_user_column = None
    for candidate, id_col, user_col in _LAYOUT_COLUMNS:
        if id_col.lower() in by_lower and user_col.lower() in by_lower:
            layout = candidate
            tenant_column = by_lower[id_col.lower()]
            tenant_user_column = by_lower[user_col.lower()]
            break
    timestamp_column = next(
        (by_lower[name.lower()] for name in _TIMESTAMP_COLUMNS if name.lower() in by_lower),
        None,
    )
    base_columns = {name: by_lower.get(name.lower(), name) for name in _BASE_COLUMNS}
    integer_user_id = base_columns["UserId"].lower() in {name.lower() for name in integer_columns}
    return AuditTableShape(
        layout, tenant_column, tenant_user_column, timestamp_column, base_columns, integer_user_id
    )


def encode_message(entry: AuditEntry, shape: AuditTableShape) -> str:
    """Serialize the Message payload; keep tenant identity in it when there are no columns."""
    payload: dict[str, Any] = dict(entry.message)
    if shape.layout == AuditColumnLayout.NONE:
        if entry.tenant_id is not None:
            payload.setdefault("TenantId", entry.tenant_id)
        if entry.tenant_user_id is not None:
            payload.setdefault("TenantUserId", entry.tenant_user_id)
    return json.dumps(payload, default=str)


class SqlAuditWriter:
    """Appends AuditEntry rows using the detected table shape.

    Args:
        database: Shared Database service (its engine is used directly).
        table_name: Audit table name.
    """

    def __init__(self, database: Database, table_name: str = "Audit") -> None:
        self.database = database
        self.table_name = table_name
        self.shape: AuditTableShape | None = None

    async def detect(self) -> AuditTableShape:
        """Inspect the audit table and fix the insert shape for this process."""
        table_name = self.table_name

        def _columns(sync_conn: Any) -> list[dict[str, Any]]:
            return inspect(sync_conn).get_columns(table_name)

        async with self.database.engine.connect() as conn:
            columns = await conn.run_sync(_columns)
        self.shape = detect_shape(
            [col["name"] for col in columns],
            [col["name"] for col in columns if isinstance(col["type"], Integer)],
        )
        logger.info(
            "Audit table %s layout: %s (timestamp column: %s)",
            self.table_name,
            self.shape.layout.value,
            self.shape.timestamp_column or "server default",
        )
        return self.shape

    @staticmethod
    def _user_id_value(user_id: Any, shape: AuditTableShape) -> int | str | None:
        if user_id is None:
            return None
        return int(user_id) if shape.integer_user_id else str(user_id)

    def build_values(self, entry: AuditEntry, shape: AuditTableShape) -> dict[str, Any]:
        cols = shape.base_columns
        values: dict[str, Any] = {
            cols["UserId"]: self._user_id_value(entry.user_id, shape),
            cols["TableName"]: entry.table_name,
            cols["ActionType"]: entry.action.value,
            cols["Message"]: encode_message(entry, shape),
        }
        if shape.tenant_column and shape.tenant_user_column:
            values[shape.tenant_column] = entry.tenant_id
            values[shape.tenant_user_column] = entry.tenant_user_id
        if shape.timestamp_column:
            values[shape.timestamp_column] = utc_now()
        return values

    async def write(self, entry: AuditEntry) -> None:
        """Insert one row. Detects the shape first if startup detection failed."""
        shape = self.shape or await self.detect()
        values = self.build_values(entry, shape)
        stmt = table(self.table_name, *(column(name) for name in values)).insert().values(values)
        async with self.database.engine.begin() as conn:
            await conn.execute(stmt)
