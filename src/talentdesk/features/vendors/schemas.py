"""Pydantic models for the vendors feature."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class VendorCreateRequest(BaseModel):
    """Request body for creating a vendor."""

    name: str = Field(min_length=1, max_length=200)
    contact_name: str | None = None
    contact_email: EmailStr | None = None
    phone: str | None = Field(None, max_length=40)
    website: str | None = None


class VendorUpdateRequest(BaseModel):
    """Partial update; omitted fields are left unchanged, null clears optional ones."""

    name: str | None = Field(None, min_length=1, max_length=200)
    contact_name: str | None = None
    contact_email: EmailStr | None = None
    phone: str | None = Field(None, max_length=40)
    website: str | None = None

    @field_validator("name")
    @classmethod
    def reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class VendorResponse(BaseModel):
    """Vendor as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    contact_name: str | None = None
    contact_email: str | None = None
    phone: str | None = None
    website: str | None = None
    created_by: str
    created_at: datetime
    updated_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: object) -> str:
        return str(value)
