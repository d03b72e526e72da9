"""Auth API: session login, logout and first-login password setup.

The session token travels only in an HTTP-only cookie; the response body
never contains it.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.api.dependencies import AuthenticatorDep, SettingsDep
from app.application.dtos.auth import InvalidCredentials, MustSetPassword
from app.core.config import Settings
from app.domain.exceptions import AuthenticationException
from app.schemas.auth import (
    ChangePasswordRequiredResponse,
    FirstLoginPasswordRequest,
    LoginRequest,
    LoginResponse,
    OkResponse,
)
from app.schemas.user import SuccessResponse

router = APIRouter()


def _redirect_target(requested: str | None, default: str) -> str:
    """Only same-site relative paths are honoured (no open redirects)."""
    if requested and requested.startswith("/") and not requested.startswith("//"):
        return requested
    return default


_SETUP_COOKIE_PATH = "/api/auth"


def _set_session_cookie(response: JSONResponse, settings: Settings, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,  # type: ignore[arg-type]
        path="/",
    )


@router.post(
    "/login",
    responses={
        200: {"model": LoginResponse | ChangePasswordRequiredResponse},
        400: {"description": "Email and password required"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    request: Request,
    body: LoginRequest,
    authenticator: AuthenticatorDep,
    settings: SettingsDep,
) -> JSONResponse:
    """Log in with email and password.

    A user that has never set a password gets {changePassword: true, userId},
    no session, and a short-lived one-time setup cookie; the client continues
    with POST /auth/change-password.
    """
    outcome = await authenticator.login(
        body.email, body.password, request.cookies.get(settings.session_cookie_name)
    )
    if isinstance(outcome, InvalidCredentials):
        raise AuthenticationException("Invalid credentials")
    if isinstance(outcome, MustSetPassword):
        payload = ChangePasswordRequiredResponse(user_id=outcome.user_id)
        response = JSONResponse(payload.model_dump(by_alias=True))
        response.set_cookie(
            key=settings.password_setup_cookie_name,
            value=outcome.setup_token,
            max_age=settings.password_setup_max_age_seconds,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite=settings.session_cookie_samesite,  # type: ignore[arg-type]
            path=_SETUP_COOKIE_PATH,
        )
        return response
    payload_ok = LoginResponse(
        id=outcome.context.user_id,
        redirect_url=_redirect_target(body.redirect_to, settings.login_redirect_url),
    )
    response = JSONResponse(payload_ok.model_dump(by_alias=True))
    _set_session_cookie(response, settings, outcome.token)
    return response


@router.api_route("/logout", methods=["GET", "POST"], response_model=OkResponse)
async def logout(
    request: Request,
    authenticator: AuthenticatorDep,
    settings: SettingsDep,
) -> JSONResponse:
    """Destroy the session and clear the cookie. Succeeds for anonymous callers too."""
    await authenticator.logout(request.cookies.get(settings.session_cookie_name))
    response = JSONResponse(OkResponse().model_dump())
    response.delete_cookie(settings.session_cookie_name, path="/")
    return response


@router.post("/change-password", response_model=SuccessResponse)
async def change_password_first_login(
    request: Request,
    body: FirstLoginPasswordRequest,
    authenticator: AuthenticatorDep,
    settings: SettingsDep,
) -> JSONResponse:
    """Set the first password of the user named by the setup cookie from login."""
    await authenticator.set_first_password(
        request.cookies.get(settings.password_setup_cookie_name), body.password, body.password2
    )
    response = JSONResponse(SuccessResponse().model_dump())
    response.delete_cookie(settings.password_setup_cookie_name, path=_SETUP_COOKIE_PATH)
    return response
