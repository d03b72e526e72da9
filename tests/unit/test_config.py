"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings
from app.domain.exceptions import SqlNotConfiguredException
from app.infrastructure.persistence.database import Database


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.bcrypt_rounds == 10
    assert settings.session_cookie_name == "sid"
    assert settings.tenant_code_max_attempts == 100
    assert settings.audit_table_name == "Audit"
    assert settings.trust_proxy is False
    assert settings.password_setup_cookie_name == "pwsetup"


def test_samesite_is_normalized() -> None:
    assert Settings(_env_file=None, session_cookie_samesite="Strict").session_cookie_samesite == "strict"


@pytest.mark.parametrize(
    "overrides",
    [
        {"bcrypt_rounds": 3},
        {"bcrypt_rounds": 32},
        {"session_max_age_seconds": 0},
        {"password_setup_max_age_seconds": 0},
        {"tenant_code_max_attempts": 0},
        {"session_cookie_samesite": "sometimes"},
    ],
)
def test_invalid_values_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


async def test_missing_database_url_fails_on_first_use() -> None:
    database = Database("")
    assert not database.configured
    with pytest.raises(SqlNotConfiguredException):
        async with database.session():
            pass
