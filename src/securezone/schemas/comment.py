"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import strip_required


class CommentCreate(BaseModel):
    """Schema for posting a comment."""

    content: str = Field(..., min_length=1, max_length=2000)

    @field_validator("content")
    @classmethod
    def _require_text(cls, value: str) -> str:
        return strip_required(value)


class CommentAuthor(BaseModel):
    """Author block shown with a comment."""

    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: int
    content: str
    created_at: datetime | None
    report_id: int
    user: CommentAuthor

    model_config = ConfigDict(from_attributes=True)
