"""Health check API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    ok: bool = Field(default=True, description="Service status")
    uptime: float = Field(..., description="Seconds since the process started")
    now: datetime = Field(..., description="Current server time (UTC)")
