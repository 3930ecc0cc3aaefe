"""Beanie document models for MongoDB collections."""

from datetime import datetime, timezone
from enum import Enum

from beanie import Document, Indexed
from pydantic import Field
from pymongo import ASCENDING, IndexModel


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class UserRole(str, Enum):
    """Roles a local user record can hold."""

    USER = "user"
    ADMIN = "admin"


class JobStatus(str, Enum):
    """Job posting lifecycle status."""

    OPEN = "open"
    CLOSED = "closed"


class User(Document):
    """
    Local user record linked to a Supabase identity.

    Identity lives in Supabase; the record is created on the first
    authenticated request and re-linked by email when the Supabase id changes.
    Uniqueness of ``uid`` and ``email`` is enforced by the collection indexes;
    the email index only covers string values, so any number of records
    without an email can coexist.
    """

    uid: Indexed(str, unique=True)  # Supabase user id
    email: str | None = None
    name: str = "User"
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "users"
        indexes = [
            IndexModel(
                [("email", ASCENDING)],
                name="email_unique",
                unique=True,
                partialFilterExpression={"email": {"$type": "string"}},
            ),
        ]


class Resume(Document):
    """Resume owned by a single user."""

    owner_uid: Indexed(str)
    title: str
    summary: str | None = None
    content: str = ""
    skills: list[str] = Field(default_factory=list)
    file_url: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "resumes"


class Job(Document):
    """Job posting, optionally sourced through a vendor."""

    title: str
    company: str
    location: str | None = None
    description: str = ""
    employment_type: str | None = None
    status: JobStatus = JobStatus.OPEN
    vendor_id: str | None = None
    created_by: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "jobs"


class Vendor(Document):
    """Staffing vendor supplying candidates or job postings."""

    name: Indexed(str)
    contact_name: str | None = None
    contact_email: str | None = None
    phone: str | None = None
    website: str | None = None
    created_by: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "vendors"


DOCUMENT_MODELS = [User, Resume, Job, Vendor]
