"""Report-related Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from securezone.models.user import UserRole

from .common import strip_required


class ReportCreate(BaseModel):
    """Schema for submitting a new incident report."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1, max_length=255)
    image_url: str | None = Field(None, max_length=512, description="Reference to an uploaded image")
    is_anonymous: bool = False
    tags: Any = Field(None, description="List of tag names or a comma-separated string")

    @field_validator("title", "description", "location")
    @classmethod
    def _require_text(cls, value: str) -> str:
        return strip_required(value)


class TagsUpdate(BaseModel):
    """Replacement tag set; shape is checked by the tag parser."""

    tags: Any = Field(None, description="List of tag names or a comma-separated string")


class TagResponse(BaseModel):
    """Single tag attached to a report."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class ReportAuthor(BaseModel):
    """Author block shown with a report; ``username`` may be masked."""

    id: int | None
    username: str
    role: UserRole | None = None


class ReportResponse(BaseModel):
    """Schema for report information returned by the API."""

    id: int
    title: str
    description: str
    location: str
    image_url: str | None
    is_anonymous: bool
    is_flagged: bool
    upvotes: int
    downvotes: int
    created_at: datetime | None
    user: ReportAuthor
    tags: list[TagResponse] = []
