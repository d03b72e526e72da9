"""Auth API schemas."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Request body for login. Email is looked up globally (no tenant code)."""

    model_config = ConfigDict(extra="ignore")

    email: str | None = Field(default=None, validation_alias=AliasChoices("email", "Email"))
    password: str | None = Field(
        default=None, validation_alias=AliasChoices("password", "Password")
    )
    redirect_to: str | None = Field(
        default=None,
        validation_alias=AliasChoices("redirectTo", "redirect_to"),
        description="Relative path to go to after login (defaults to LOGIN_REDIRECT_URL)",
    )


class LoginResponse(BaseModel):
    """Successful login; the session cookie is set on the response."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    id: int
    redirect_url: str = Field(alias="redirectUrl")


class ChangePasswordRequiredResponse(BaseModel):
    """Login for a user without a password: no session, client must set one."""

    model_config = ConfigDict(populate_by_name=True)

    change_password: bool = Field(default=True, alias="changePassword")
    user_id: int = Field(alias="userId")


class FirstLoginPasswordRequest(BaseModel):
    """Request body for POST /auth/change-password (first login only).

    The user is identified by the setup cookie from login, not by the body.
    """

    model_config = ConfigDict(extra="ignore")

    password: str | None = Field(
        default=None, validation_alias=AliasChoices("password", "Password")
    )
    password2: str | None = Field(
        default=None, validation_alias=AliasChoices("password2", "Password2")
    )


class OkResponse(BaseModel):
    """Generic acknowledgement."""

    ok: bool = True
