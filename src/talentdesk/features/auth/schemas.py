"""Pydantic models for the auth feature."""

from pydantic import BaseModel, Field

from src.talentdesk.services.database.models import UserRole


class UpdateProfileRequest(BaseModel):
    """Request body for updating the current user's profile."""

    name: str = Field(min_length=1, max_length=100, description="Display name")


class UpdateRoleRequest(BaseModel):
    """Request body for changing a user's role."""

    role: UserRole = Field(description="New role for the user")
