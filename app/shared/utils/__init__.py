"""Shared utilities: datetime, generators, normalization."""

from app.shared.utils.datetime import date_or_none, ensure_utc, to_ymd, utc_now
from app.shared.utils.generators import (
    generate_session_token,
    generate_tenant_code,
    generate_tenant_user_id,
    generate_upload_name,
)
from app.shared.utils.normalization import MASK, bit_from, mask, norm_str, text_or_none

__all__ = [
    "MASK",
    "bit_from",
    "date_or_none",
    "ensure_utc",
    "generate_session_token",
    "generate_tenant_code",
    "generate_tenant_user_id",
    "generate_upload_name",
    "mask",
    "norm_str",
    "text_or_none",
    "to_ymd",
    "utc_now",
]
