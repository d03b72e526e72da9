"""Health check endpoint. No dependencies; used for liveness probes."""

import time

from fastapi import APIRouter

from app.schemas.health import HealthResponse
from app.shared.utils.datetime import utc_now

router = APIRouter()

_STARTED = time.monotonic()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok, process uptime in seconds and the current time."""
    return HealthResponse(uptime=round(time.monotonic() - _STARTED, 3), now=utc_now())
