"""User and client record API schemas."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PasswordChangeRequest(BaseModel):
    """Request body for PATCH /users/{id}/password."""

    password: str | None = Field(
        default=None, validation_alias=AliasChoices("Password", "password")
    )
    password2: str | None = Field(
        default=None, validation_alias=AliasChoices("Password2", "password2")
    )


class RecordCreatedResponse(BaseModel):
    """Response for record creation (201)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    tenant_user_id: str = Field(alias="tenantUserId")


class RecordUpdatedResponse(BaseModel):
    """Response for record update; changed is the number of fields that differed."""

    success: bool = True
    changed: int


class SuccessResponse(BaseModel):
    """Generic success acknowledgement."""

    success: bool = True
