"""Tests for auth endpoints: login outcomes, session cookie, logout, first-login password."""

from httpx import AsyncClient

from app.application.dtos.auth import TenantContext
from app.core.session_store import InMemorySessionStore
from app.domain.enums import AuditActionType
from tests.fakes import (
    TENANT_A,
    FakePasswordHasher,
    FakeUserRepository,
    RecordingAuditWriter,
)


async def test_login_unknown_email_returns_401_and_one_failed_login_audit(
    client: AsyncClient,
    audit_writer: RecordingAuditWriter,
    hasher: FakePasswordHasher,
) -> None:
    """Unknown email: generic 401 body, a dummy hash comparison, one FAILED_LOGIN row."""
    response = await client.post(
        "/api/auth/login", json={"email": "nobody@nowhere.test", "password": "whatever"}
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}
    assert hasher.dummy_calls == 1
    failed = audit_writer.of(AuditActionType.FAILED_LOGIN)
    assert len(failed) == 1
    assert failed[0].table_name == "Auth"
    assert "whatever" not in str(failed[0].message)


async def test_login_wrong_password_and_disabled_user_look_the_same(
    client: AsyncClient, admin: TenantContext, user_repo: FakeUserRepository
) -> None:
    """Wrong password and disabled account both give the generic 401."""
    wrong = await client.post(
        "/api/auth/login", json={"email": admin.email, "password": "not-it"}
    )
    user_repo.rows[admin.user_id]["Active"] = 0
    disabled = await client.post(
        "/api/auth/login", json={"email": admin.email, "password": "secret-pw"}
    )
    assert wrong.status_code == disabled.status_code == 401
    assert wrong.json() == disabled.json() == {"error": "Invalid credentials"}


async def test_login_missing_fields_returns_400(client: AsyncClient) -> None:
    response = await client.post("/api/auth/login", json={"email": "a@b.test"})
    assert response.status_code == 400
    assert response.json() == {"error": "Email and password required"}


async def test_login_success_sets_cookie_and_rotates_token(
    client: AsyncClient,
    admin: TenantContext,
    session_store: InMemorySessionStore,
    audit_writer: RecordingAuditWriter,
) -> None:
    """Successful login issues a token different from the one the request carried."""
    old_token = session_store.create({"note": "anonymous"})
    client.cookies.set("sid", old_token)

    response = await client.post(
        "/api/auth/login", json={"email": admin.email, "password": "secret-pw"}
    )

    assert response.status_code == 200
    assert response.json() == {"ok": True, "id": admin.user_id, "redirectUrl": "/home"}
    new_token = response.cookies.get("sid")
    assert new_token and new_token != old_token
    assert session_store.get(old_token) is None
    assert session_store.get(new_token)["tenantId"] == TENANT_A
    set_cookie = response.headers["set-cookie"].lower()
    assert "httponly" in set_cookie
    assert new_token not in response.text
    assert len(audit_writer.of(AuditActionType.LOGIN, "Auth")) == 1


async def test_login_honours_relative_redirect_only(
    client: AsyncClient, admin: TenantContext
) -> None:
    relative = await client.post(
        "/api/auth/login",
        json={"email": admin.email, "password": "secret-pw", "redirectTo": "/clients"},
    )
    external = await client.post(
        "/api/auth/login",
        json={"email": admin.email, "password": "secret-pw", "redirectTo": "//evil.test"},
    )
    assert relative.json()["redirectUrl"] == "/clients"
    assert external.json()["redirectUrl"] == "/home"


async def test_login_without_stored_password_requires_password_change(
    client: AsyncClient,
    user_repo: FakeUserRepository,
    session_store: InMemorySessionStore,
    setup_store: InMemorySessionStore,
) -> None:
    """No stored hash: {changePassword, userId}, no session, only a setup cookie."""
    user_id = user_repo.seed(
        TENANT_A, FirstName="New", LastName="User", Email="new@acme.test", Active=1
    )
    response = await client.post(
        "/api/auth/login", json={"email": "new@acme.test", "password": "anything"}
    )
    assert response.status_code == 200
    assert response.json() == {"changePassword": True, "userId": user_id}
    assert response.cookies.get("sid") is None
    assert len(session_store) == 0
    setup_token = response.cookies.get("pwsetup")
    assert setup_store.get(setup_token) == {"userId": user_id}
    assert setup_token not in response.text


async def test_first_login_change_password_then_login(
    client: AsyncClient, user_repo: FakeUserRepository
) -> None:
    user_id = user_repo.seed(
        TENANT_A, FirstName="New", LastName="User", Email="new@acme.test", Active=1
    )
    login = await client.post(
        "/api/auth/login", json={"email": "new@acme.test", "password": "anything"}
    )
    client.cookies.set("pwsetup", login.cookies["pwsetup"])

    response = await client.post(
        "/api/auth/change-password", json={"password": "fresh-pw", "password2": "fresh-pw"}
    )
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert user_repo.rows[user_id]["Password"] == "hashed:fresh-pw"
    assert user_repo.rows[user_id]["UpdatedBy"] == "self"

    again = await client.post(
        "/api/auth/change-password", json={"password": "other-pw", "password2": "other-pw"}
    )
    assert again.status_code == 401
    assert user_repo.rows[user_id]["Password"] == "hashed:fresh-pw"

    login = await client.post(
        "/api/auth/login", json={"email": "new@acme.test", "password": "fresh-pw"}
    )
    assert login.json()["ok"] is True


async def test_first_login_password_needs_setup_cookie(
    client: AsyncClient, user_repo: FakeUserRepository
) -> None:
    """A userId in the body is ignored; without the setup cookie nothing changes."""
    user_id = user_repo.seed(
        TENANT_A, FirstName="New", LastName="User", Email="new@acme.test", Active=1
    )
    response = await client.post(
        "/api/auth/change-password",
        json={"userId": user_id, "password": "taken-over", "password2": "taken-over"},
    )
    assert response.status_code == 401
    assert user_repo.rows[user_id].get("Password") is None


async def test_first_login_password_rejects_disabled_user(
    client: AsyncClient,
    user_repo: FakeUserRepository,
    setup_store: InMemorySessionStore,
) -> None:
    user_id = user_repo.seed(
        TENANT_A, FirstName="Off", LastName="User", Email="off@acme.test", Active=0
    )
    client.cookies.set("pwsetup", setup_store.create({"userId": user_id}))
    response = await client.post(
        "/api/auth/change-password", json={"password": "pw", "password2": "pw"}
    )
    assert response.status_code == 401
    assert user_repo.rows[user_id].get("Password") is None


async def test_logout_destroys_session_and_audits(
    client: AsyncClient,
    admin: TenantContext,
    login_as,
    session_store: InMemorySessionStore,
    audit_writer: RecordingAuditWriter,
) -> None:
    token = login_as(admin)
    response = await client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert session_store.get(token) is None
    logouts = audit_writer.of(AuditActionType.LOGOUT)
    assert len(logouts) == 1
    assert logouts[0].tenant_id == TENANT_A
    assert logouts[0].user_id == admin.user_id


async def test_logout_without_session_is_ok(client: AsyncClient) -> None:
    response = await client.get("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"ok": True}
