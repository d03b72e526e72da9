"""Unit tests for value normalization and date helpers."""

from datetime import UTC, date, datetime

import pytest

from app.shared.utils.datetime import date_or_none, ensure_utc, to_ymd
from app.shared.utils.normalization import MASK, bit_from, mask, norm_str, text_or_none


@pytest.mark.parametrize("value", [True, "true", "TRUE", " on ", "1", 1, "yes"])
def test_bit_from_truthy(value: object) -> None:
    assert bit_from(value) == 1


@pytest.mark.parametrize("value", [False, "false", "off", "0", 0, 2, None, "", "maybe"])
def test_bit_from_falsy(value: object) -> None:
    assert bit_from(value) == 0


def test_text_helpers() -> None:
    assert norm_str(None) == ""
    assert norm_str(5) == "5"
    assert text_or_none(None) is None
    assert text_or_none(0) == "0"


def test_mask_keeps_none() -> None:
    assert mask("secret") == MASK
    assert mask(None) is None


def test_date_or_none_accepts_iso_forms() -> None:
    assert date_or_none("2024-03-01") == date(2024, 3, 1)
    assert date_or_none("2024-03-01T23:00:00Z") == date(2024, 3, 1)
    assert date_or_none(datetime(2024, 3, 1, 10)) == date(2024, 3, 1)
    assert date_or_none("  ") is None


def test_date_or_none_unparsable_logs_warning(caplog: pytest.LogCaptureFixture) -> None:
    assert date_or_none("31/02/2024", field="DateOfBirth") is None
    assert "DateOfBirth" in caplog.text


def test_to_ymd() -> None:
    assert to_ymd(date(2001, 2, 3)) == "2001-02-03"
    assert to_ymd(None) is None


def test_ensure_utc() -> None:
    naive = datetime(2024, 1, 1, 12, 0)
    assert ensure_utc(naive).tzinfo == UTC
    assert ensure_utc(None) is None
