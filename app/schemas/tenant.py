"""Tenant API schemas."""

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field


class TenantWriteRequest(BaseModel):
    """Request body for creating or renaming a tenant. TenantId is never accepted."""

    model_config = ConfigDict(extra="ignore")

    tenant_name: str | None = Field(
        default=None,
        max_length=200,
        validation_alias=AliasChoices("TenantName", "tenantName", "name"),
    )


class TenantResponse(BaseModel):
    """Tenant as returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    tenant_id: str = Field(alias="TenantId")
    tenant_name: str = Field(alias="TenantName")


class TenantAdminRequest(BaseModel):
    """Bootstrap input: a new tenant plus its first user (no password yet)."""

    tenant_name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
