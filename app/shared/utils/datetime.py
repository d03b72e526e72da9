"""
UTC datetime and calendar-date utilities.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
Date-only record fields are parsed leniently: an unparsable value becomes
None and a warning is logged, never an error.
"""

from datetime import UTC, date, datetime
from typing import Any

from app.shared.logging import get_logger

logger = get_logger(__name__)


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def date_or_none(value: Any, field: str | None = None) -> date | None:
    """
    Parse a date-only value.

    Accepts date/datetime instances and ISO strings ("2024-03-01",
    "2024-03-01T10:00:00Z"). Empty input gives None silently; anything
    else that does not parse gives None with a warning.

    Args:
        value: Raw submitted value
        field: Field name, used only in the warning

    Returns:
        The calendar date or None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        logger.warning("Unparsable date for %s: %r; storing null", field or "field", text)
        return None


def to_ymd(value: Any) -> str | None:
    """
    Format a date-like value as YYYY-MM-DD.

    Returns:
        The formatted date, or None when the value is empty or unparsable
    """
    parsed = date_or_none(value)
    return parsed.isoformat() if parsed else None
