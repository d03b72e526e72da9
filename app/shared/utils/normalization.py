"""Normalization of submitted record values (bits, text, secrets)."""

from typing import Any

# Fixed token that replaces credential values in audit payloads.
MASK = "********"

_TRUTHY = frozenset({"true", "on", "1", "yes", "y"})


def bit_from(value: Any) -> int:
    """Coerce a submitted value to a 0/1 bit.

    True and the strings "true", "on", "1", "yes", "y" (case-insensitive,
    surrounding whitespace ignored) give 1; everything else gives 0.
    """
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, int):
        return 1 if value == 1 else 0
    if value is None:
        return 0
    return 1 if str(value).strip().lower() in _TRUTHY else 0


def norm_str(value: Any) -> str:
    """Return the plain string form of a value; None becomes ''."""
    if value is None:
        return ""
    return str(value)


def text_or_none(value: Any) -> str | None:
    """Return the value as a string, or None when it is missing."""
    if value is None:
        return None
    return str(value)


def mask(value: Any) -> str | None:
    """Replace a credential value with the mask token; None stays None."""
    if value is None:
        return None
    return MASK
