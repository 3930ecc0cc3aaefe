"""Data models for authentication."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from src.talentdesk.services.database.models import UserRole


class IdentityUser(BaseModel):
    """
    User returned by the Supabase token verification call.

    Attributes:
        id: Supabase user id
        email: User email, absent for some OAuth/phone sign-ins
        user_metadata: Additional profile metadata (name, full_name, avatar_url, etc.)
    """

    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = {}

    @property
    def display_name(self) -> str:
        """Name for a newly provisioned record: metadata name, email local part, or "User"."""
        name = self.user_metadata.get("name") or self.user_metadata.get("full_name")
        if name:
            return name
        if self.email:
            return self.email.split("@")[0]
        return "User"


class AuthenticatedUser(BaseModel):
    """
    Local user record attached to the request after authentication.

    Example:
        >>> user = AuthenticatedUser(
        ...     id="665f1c2e9b1e8a3d4c5b6a70",
        ...     uid="123e4567-e89b-12d3-a456-426614174000",
        ...     email="user@example.com",
        ...     name="user",
        ...     role=UserRole.USER,
        ... )
    """

    id: str | None = None
    uid: str
    email: str | None = None
    name: str
    role: UserRole = UserRole.USER
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, user: Any) -> "AuthenticatedUser":
        """Build from a stored user document."""
        return cls(
            id=str(user.id) if user.id is not None else None,
            uid=user.uid,
            email=user.email,
            name=user.name,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
