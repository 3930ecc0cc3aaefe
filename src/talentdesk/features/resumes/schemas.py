"""Pydantic models for the resumes feature."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResumeCreateRequest(BaseModel):
    """Request body for creating a resume."""

    title: str = Field(min_length=1, max_length=200)
    summary: str | None = Field(None, max_length=2000)
    content: str = ""
    skills: list[str] = Field(default_factory=list)
    file_url: str | None = None


class ResumeUpdateRequest(BaseModel):
    """Partial update; omitted fields are left unchanged, null clears optional ones."""

    title: str | None = Field(None, min_length=1, max_length=200)
    summary: str | None = Field(None, max_length=2000)
    content: str | None = None
    skills: list[str] | None = None
    file_url: str | None = None

    @field_validator("title", "content", "skills")
    @classmethod
    def reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class ResumeResponse(BaseModel):
    """Resume as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_uid: str
    title: str
    summary: str | None = None
    content: str = ""
    skills: list[str] = []
    file_url: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: object) -> str:
        return str(value)
