"""Tests for /api/users: tenant scoping, create/update/delete, password change, photos."""

import json
from pathlib import Path

from httpx import AsyncClient

from app.application.dtos.auth import TenantContext
from app.domain.enums import AuditActionType
from app.shared.utils.normalization import MASK
from tests.fakes import TENANT_A, TENANT_B, FakeUserRepository, RecordingAuditWriter


async def test_list_users_requires_session_and_audits_rejection(
    client: AsyncClient, audit_writer: RecordingAuditWriter
) -> None:
    response = await client.get("/api/users")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
    errors = audit_writer.of(AuditActionType.ERROR, "HTTP")
    assert len(errors) == 1
    assert errors[0].message["status"] == 401
    assert errors[0].message["path"] == "/api/users"


async def test_list_users_is_scoped_to_caller_tenant(
    authed_client: AsyncClient, user_repo: FakeUserRepository
) -> None:
    user_repo.seed(TENANT_B, FirstName="Other", LastName="Tenant", Email="o@beta.test")
    user_repo.seed(TENANT_A, FirstName="Bob", LastName="Builder", Email="bob@acme.test")

    response = await authed_client.get("/api/users")

    assert response.status_code == 200
    rows = response.json()
    assert {row["TenantId"] for row in rows} == {TENANT_A}
    assert [row["Email"] for row in rows] == ["bob@acme.test", "ada@acme.test"]
    assert all("Password" not in row for row in rows)


async def test_get_me_returns_own_record(
    authed_client: AsyncClient, admin: TenantContext
) -> None:
    response = await authed_client.get("/api/users/me")
    assert response.status_code == 200
    assert response.json()["Id"] == admin.user_id
    assert response.json()["Email"] == "ada@acme.test"


async def test_get_other_tenant_user_returns_404(
    authed_client: AsyncClient, user_repo: FakeUserRepository
) -> None:
    other_id = user_repo.seed(TENANT_B, FirstName="O", LastName="T", Email="o@beta.test")
    response = await authed_client.get(f"/api/users/{other_id}")
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


async def test_create_user_uses_session_tenant_and_masks_password(
    authed_client: AsyncClient,
    admin: TenantContext,
    user_repo: FakeUserRepository,
    audit_writer: RecordingAuditWriter,
) -> None:
    """TenantId in the body is ignored; the audit never sees the plaintext password."""
    response = await authed_client.post(
        "/api/users",
        json={
            "FirstName": "Cleo",
            "LastName": "Clerk",
            "Email": "cleo@acme.test",
            "Password": "pw-123",
            "Password2": "pw-123",
            "TenantId": TENANT_B,
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["tenantUserId"].startswith(f"{TENANT_A}:")
    row = user_repo.rows[body["id"]]
    assert row["TenantId"] == TENANT_A
    assert row["Active"] == 0
    assert row["Password"] == "hashed:pw-123"
    assert row["CreatedBy"] == admin.tenant_user_id

    created = audit_writer.of(AuditActionType.CREATE, "Users")
    assert len(created) == 1
    updated_value = json.loads(created[0].message["UpdatedValue"])
    assert updated_value["Password"] == MASK
    assert updated_value["TenantUserId"] == body["tenantUserId"]
    assert "pw-123" not in json.dumps(created[0].message)


async def test_create_user_missing_required_fields_returns_400(
    authed_client: AsyncClient,
) -> None:
    response = await authed_client.post("/api/users", json={"FirstName": "Only"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: LastName, Email"}


async def test_create_user_duplicate_email_returns_409(
    authed_client: AsyncClient, admin: TenantContext
) -> None:
    response = await authed_client.post(
        "/api/users",
        json={"FirstName": "Ada", "LastName": "Again", "Email": admin.email},
    )
    assert response.status_code == 409
    assert response.json() == {"error": "Email is already registered"}


async def test_create_user_with_photo_upload(
    authed_client: AsyncClient, user_repo: FakeUserRepository
) -> None:
    """Multipart form: the photo lands under the caller's tenant and can be fetched back."""
    response = await authed_client.post(
        "/api/users",
        data={"FirstName": "Pia", "LastName": "Photo", "Email": "pia@acme.test", "Active": "on"},
        files={"photo": ("face.PNG", b"\x89PNG fake image", "image/png")},
    )

    assert response.status_code == 201
    row = user_repo.rows[response.json()["id"]]
    assert row["Active"] == 1
    assert row["Photo"].startswith(f"{TENANT_A}/")
    assert row["Photo"].endswith(".png")

    photo = await authed_client.get(f"/api/photos/{row['Photo']}")
    assert photo.status_code == 200
    assert photo.content == b"\x89PNG fake image"


async def test_rejected_create_leaves_no_photo_behind(
    authed_client: AsyncClient, admin: TenantContext, tmp_path: Path
) -> None:
    response = await authed_client.post(
        "/api/users",
        data={"FirstName": "Ada", "LastName": "Again", "Email": admin.email},
        files={"photo": ("face.png", b"\x89PNG fake image", "image/png")},
    )
    assert response.status_code == 409
    tenant_dir = tmp_path / "uploads" / TENANT_A
    assert not tenant_dir.exists() or list(tenant_dir.iterdir()) == []


async def test_rejected_update_leaves_no_photo_behind(
    authed_client: AsyncClient,
    admin: TenantContext,
    user_repo: FakeUserRepository,
    tmp_path: Path,
) -> None:
    response = await authed_client.put(
        f"/api/users/{admin.user_id}",
        data={"FirstName": ""},
        files={"photo": ("face.png", b"\x89PNG fake image", "image/png")},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Required fields cannot be empty: FirstName"}
    assert user_repo.rows[admin.user_id]["FirstName"] == "Ada"
    tenant_dir = tmp_path / "uploads" / TENANT_A
    assert not tenant_dir.exists() or list(tenant_dir.iterdir()) == []


async def test_photo_of_other_tenant_returns_404(authed_client: AsyncClient) -> None:
    response = await authed_client.get(f"/api/photos/{TENANT_B}/anything.png")
    assert response.status_code == 404


async def test_update_user_reports_changed_fields(
    authed_client: AsyncClient,
    admin: TenantContext,
    user_repo: FakeUserRepository,
    audit_writer: RecordingAuditWriter,
) -> None:
    response = await authed_client.put(
        f"/api/users/{admin.user_id}",
        json={"Comments": "Team lead", "FirstName": "Ada", "Active": "true"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "changed": 1}
    assert user_repo.rows[admin.user_id]["Comments"] == "Team lead"
    updates = audit_writer.of(AuditActionType.UPDATE, "Users")
    assert updates[-1].message["Changes"] == {"Comments": {"old": None, "new": "Team lead"}}


async def test_update_user_post_alias_and_no_op(
    authed_client: AsyncClient,
    admin: TenantContext,
    user_repo: FakeUserRepository,
    audit_writer: RecordingAuditWriter,
) -> None:
    """POST /users/{id} behaves like PUT; an unchanged submission writes nothing."""
    writes_before = user_repo.writes
    response = await authed_client.post(
        f"/api/users/{admin.user_id}", json={"FirstName": "Ada", "Active": 1}
    )
    assert response.status_code == 200
    assert response.json() == {"success": True, "changed": 0}
    assert user_repo.writes == writes_before
    assert audit_writer.of(AuditActionType.UPDATE) == []


async def test_change_password_mismatch_returns_400(authed_client: AsyncClient) -> None:
    response = await authed_client.patch(
        "/api/users/5/password", json={"Password": "x", "Password2": "y"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Passwords do not match"}


async def test_change_own_password_marks_self(
    authed_client: AsyncClient, admin: TenantContext, user_repo: FakeUserRepository
) -> None:
    response = await authed_client.patch(
        f"/api/users/{admin.user_id}/password",
        json={"Password": "new-pw", "Password2": "new-pw"},
    )
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert user_repo.rows[admin.user_id]["Password"] == "hashed:new-pw"
    assert user_repo.rows[admin.user_id]["UpdatedBy"] == "self"


async def test_change_other_users_password_records_actor(
    authed_client: AsyncClient, admin: TenantContext, user_repo: FakeUserRepository
) -> None:
    colleague = user_repo.seed(TENANT_A, FirstName="C", LastName="D", Email="c@acme.test")
    stranger = user_repo.seed(TENANT_B, FirstName="S", LastName="T", Email="s@beta.test")

    ok = await authed_client.patch(
        f"/api/users/{colleague}/password", json={"Password": "pw", "Password2": "pw"}
    )
    denied = await authed_client.patch(
        f"/api/users/{stranger}/password", json={"Password": "pw", "Password2": "pw"}
    )

    assert ok.status_code == 200
    assert user_repo.rows[colleague]["UpdatedBy"] == admin.tenant_user_id
    assert denied.status_code == 404
    assert user_repo.rows[stranger]["Password"] is None


async def test_delete_user(
    authed_client: AsyncClient,
    user_repo: FakeUserRepository,
    audit_writer: RecordingAuditWriter,
) -> None:
    victim = user_repo.seed(TENANT_A, FirstName="V", LastName="W", Email="v@acme.test")
    response = await authed_client.delete(f"/api/users/{victim}")
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert victim not in user_repo.rows
    assert len(audit_writer.of(AuditActionType.DELETE, "Users")) == 1
