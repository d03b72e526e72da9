"""Unit tests for audit diffs and masked snapshots."""

from datetime import date, datetime

from app.application.services.audit_diff import (
    changed_values,
    compute_diff,
    masked_snapshot,
)
from app.domain.enums import FieldKind
from app.domain.record_fields import CLIENT_ENTITY
from app.shared.utils.normalization import MASK

KINDS = CLIENT_ENTITY.kinds


def test_only_changed_fields_are_reported() -> None:
    before = {"FirstName": "Carl", "City": "Oslo", "Active": 0}
    after = {"FirstName": "Carl", "City": "Bergen", "Active": "0"}
    assert compute_diff(before, after, KINDS) == {"City": {"old": "Oslo", "new": "Bergen"}}


def test_active_change_recorded_as_bits() -> None:
    """Scenario: Active 0 -> 1 is the whole diff."""
    assert compute_diff({"Active": 0}, {"Active": "on"}, KINDS) == {
        "Active": {"old": 0, "new": 1}
    }


def test_truthy_spellings_do_not_count_as_change() -> None:
    for spelling in (True, "true", "on", "1", 1):
        assert compute_diff({"Active": 1}, {"Active": spelling}, KINDS) == {}


def test_created_date_is_never_diffed() -> None:
    before = {"CreatedDate": datetime(2020, 1, 1), "TenantId": "00ab"}
    after = {"CreatedDate": "2024-05-05", "TenantId": "ffff"}
    assert compute_diff(before, after, KINDS) == {}


def test_dates_compare_by_calendar_day() -> None:
    before = {"DateOfBirth": date(1990, 4, 1)}
    assert compute_diff(before, {"DateOfBirth": "1990-04-01T08:30:00Z"}, KINDS) == {}
    assert compute_diff(before, {"DateOfBirth": date(1990, 4, 2)}, KINDS) == {
        "DateOfBirth": {"old": "1990-04-01", "new": "1990-04-02"}
    }


def test_none_and_empty_text_are_equal() -> None:
    assert compute_diff({"Comments": None}, {"Comments": ""}, KINDS) == {}


def test_unsubmitted_fields_are_ignored() -> None:
    assert compute_diff({"FirstName": "A", "LastName": "B"}, {"LastName": "B"}, KINDS) == {}


def test_secret_is_masked_on_both_sides() -> None:
    changes = compute_diff({"Password": "$2b$old"}, {"Password": "plain"}, KINDS)
    assert changes == {"Password": {"old": MASK, "new": MASK}}
    assert compute_diff({"Password": "$2b$old"}, {"Password": None}, KINDS) == {}


def test_masked_snapshot_hides_secret_and_normalizes() -> None:
    snapshot = masked_snapshot(
        {"Email": "a@b.test", "Password": "pw", "Active": "yes", "DateOfBirth": None},
        KINDS,
    )
    assert snapshot == {
        "Email": "a@b.test",
        "Password": MASK,
        "Active": 1,
        "DateOfBirth": None,
    }


def test_unknown_columns_compare_as_text() -> None:
    assert compute_diff({"TenantName": "A"}, {"TenantName": "B"}, {}) == {
        "TenantName": {"old": "A", "new": "B"}
    }


def test_changed_values_split() -> None:
    existing, updated = changed_values(
        {"City": {"old": "Oslo", "new": "Bergen"}, "Active": {"old": 0, "new": 1}}
    )
    assert existing == {"City": "Oslo", "Active": 0}
    assert updated == {"City": "Bergen", "Active": 1}


def test_bit_kind_lookup() -> None:
    assert KINDS["Active"] == FieldKind.BIT
    assert KINDS["DateOfBirth"] == FieldKind.DATE
