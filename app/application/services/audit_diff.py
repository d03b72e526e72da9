"""Before/after diffs and masked snapshots for audit payloads.

A field is reported as changed only when its normalized string form
differs: bits compare as "0"/"1", dates as YYYY-MM-DD, everything else as
plain text with None read as "". Provenance columns are never diffed and
credential values never leave this module unmasked.
"""

from collections.abc import Mapping
from typing import Any

from app.domain.enums import FieldKind
from app.domain.record_fields import IMMUTABLE_FIELDS
from app.shared.utils.datetime import to_ymd
from app.shared.utils.normalization import MASK, bit_from, mask, norm_str, text_or_none


def comparable(kind: FieldKind, value: Any) -> str:
    """Return the string form two values are compared by."""
    if kind == FieldKind.BIT:
        return str(bit_from(value))
    if kind == FieldKind.DATE:
        return to_ymd(value) or ""
    return norm_str(value)


def recorded(kind: FieldKind, value: Any) -> Any:
    """Return the value as it is written into the audit payload."""
    if kind == FieldKind.BIT:
        return bit_from(value)
    if kind == FieldKind.DATE:
        return to_ymd(value)
    if kind == FieldKind.SECRET:
        return mask(value)
    return text_or_none(value)


def compute_diff(
    before: Mapping[str, Any],
    after: Mapping[str, Any],
    kinds: Mapping[str, FieldKind],
) -> dict[str, dict[str, Any]]:
    """Compute the changed fields between a stored row and submitted values.

    Only fields present in ``after`` are considered (merge semantics). A
    submitted non-empty secret always counts as changed since the stored
    hash cannot be compared with plaintext; both sides are masked.

    Args:
        before: Current column values keyed by column name.
        after: Submitted (already normalized) values keyed by column name.
        kinds: Column name -> normalization kind; unknown columns are text.

    Returns:
        ``{column: {"old": ..., "new": ...}}`` for each changed column.
    """
    changes: dict[str, dict[str, Any]] = {}
    for name, new_value in after.items():
        if name in IMMUTABLE_FIELDS:
            continue
        kind = kinds.get(name, FieldKind.TEXT)
        old_value = before.get(name)
        if kind == FieldKind.SECRET:
            if new_value not in (None, ""):
                changes[name] = {"old": MASK, "new": MASK}
            continue
        if comparable(kind, old_value) != comparable(kind, new_value):
            changes[name] = {
                "old": recorded(kind, old_value),
                "new": recorded(kind, new_value),
            }
    return changes


def masked_snapshot(
    values: Mapping[str, Any], kinds: Mapping[str, FieldKind]
) -> dict[str, Any]:
    """Return all values in audit form, with credential columns masked."""
    return {
        name: recorded(kinds.get(name, FieldKind.TEXT), value)
        for name, value in values.items()
    }


def changed_values(
    changes: Mapping[str, Mapping[str, Any]],
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a diff into (existing, updated) value maps."""
    existing = {name: change["old"] for name, change in changes.items()}
    updated = {name: change["new"] for name, change in changes.items()}
    return existing, updated
