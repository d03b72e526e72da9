"""Best-effort audit logging and audit payload composition.

Services describe what happened; AuditLogger hands it to the configured
writer. A failing audit write is logged locally and never propagated, so
it cannot fail or block the operation being audited.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from app.shared.logging import get_logger

if TYPE_CHECKING:
    from app.application.dtos.audit import AuditEntry
    from app.application.interfaces.services import IAuditWriter

logger = get_logger(__name__)


def _json_or_none(values: dict[str, Any] | None) -> str | None:
    if values is None:
        return None
    return json.dumps(values, default=str)


def build_message(
    *,
    note: str | None = None,
    context: dict[str, Any] | None = None,
    existing: dict[str, Any] | None = None,
    updated: dict[str, Any] | None = None,
    changes: dict[str, Any] | None = None,
    entity_id: Any = None,
) -> dict[str, Any]:
    """Compose the Message payload.

    ExistingValue and UpdatedValue hold JSON-encoded strings (or null), the
    format existing report tooling reads. Changes carries the structured
    diff for updates.

    Args:
        note: Short free-form marker (e.g. "PASSWORD_CHANGE").
        context: Free-form keys merged at the top level.
        existing: Values before the operation (already masked).
        updated: Values after the operation (already masked).
        changes: Diff as {field: {"old", "new"}}.
        entity_id: Id of the record concerned.

    Returns:
        Dict ready to be JSON-encoded into the Message column.
    """
    message: dict[str, Any] = dict(context or {})
    if note is not None:
        message["Note"] = note
    message["ExistingValue"] = _json_or_none(existing)
    message["UpdatedValue"] = _json_or_none(updated)
    if changes is not None:
        message["Changes"] = changes
    if entity_id is not None:
        message["EntityId"] = entity_id
    return message


class AuditLogger:
    """Facade over an IAuditWriter that never raises."""

    def __init__(self, writer: IAuditWriter) -> None:
        self.writer = writer

    async def log(self, entry: AuditEntry) -> None:
        try:
            await self.writer.write(entry)
        except Exception:
            logger.warning(
                "Audit write failed (%s on %s)",
                entry.action.value,
                entry.table_name,
                exc_info=True,
            )
