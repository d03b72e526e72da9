"""Tests for GET /api/profile."""

from httpx import AsyncClient

from app.application.dtos.auth import TenantContext
from tests.fakes import TENANT_A


async def test_profile_returns_current_user(
    authed_client: AsyncClient, admin: TenantContext
) -> None:
    response = await authed_client.get("/api/profile")
    assert response.status_code == 200
    data = response.json()
    assert data["Id"] == admin.user_id
    assert data["FirstName"] == "Ada"
    assert data["TenantId"] == TENANT_A
    assert "Password" not in data


async def test_profile_requires_session(client: AsyncClient) -> None:
    response = await client.get("/api/profile")
    assert response.status_code == 401
