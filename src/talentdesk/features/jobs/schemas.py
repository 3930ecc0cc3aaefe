"""Pydantic models for the jobs feature."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.talentdesk.services.database.models import JobStatus


class JobCreateRequest(BaseModel):
    """Request body for creating a job posting."""

    title: str = Field(min_length=1, max_length=200)
    company: str = Field(min_length=1, max_length=200)
    location: str | None = None
    description: str = ""
    employment_type: str | None = Field(None, description="e.g. full_time, contract")
    status: JobStatus = JobStatus.OPEN
    vendor_id: str | None = None


class JobUpdateRequest(BaseModel):
    """Partial update; omitted fields are left unchanged, null clears optional ones."""

    title: str | None = Field(None, min_length=1, max_length=200)
    company: str | None = Field(None, min_length=1, max_length=200)
    location: str | None = None
    description: str | None = None
    employment_type: str | None = None
    status: JobStatus | None = None
    vendor_id: str | None = None

    @field_validator("title", "company", "description", "status")
    @classmethod
    def reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class JobResponse(BaseModel):
    """Job posting as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    company: str
    location: str | None = None
    description: str = ""
    employment_type: str | None = None
    status: JobStatus
    vendor_id: str | None = None
    created_by: str
    created_at: datetime
    updated_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: object) -> str:
        return str(value)
