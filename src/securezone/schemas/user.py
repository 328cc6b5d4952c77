"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from securezone.models.user import UserRole

from .common import strip_required


class SignupRequest(BaseModel):
    """Schema for account registration."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=64)

    @field_validator("username")
    @classmethod
    def _normalize_username(cls, value: str) -> str:
        return strip_required(value).lower()


class LoginRequest(BaseModel):
    """Credentials presented at login."""

    email: EmailStr
    password: str


class ProfileUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    username: str | None = Field(None, min_length=1, max_length=64)
    password: str | None = Field(None, min_length=1, max_length=255)

    @field_validator("username")
    @classmethod
    def _normalize_username(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return strip_required(value).lower()


class UsernameRequest(BaseModel):
    """Target of an admin action, addressed by username."""

    username: str = Field(..., min_length=1)

    @field_validator("username")
    @classmethod
    def _normalize_username(cls, value: str) -> str:
        return strip_required(value).lower()


class UserResponse(BaseModel):
    """Public view of an account. The password is never serialized."""

    id: int
    email: str
    username: str
    role: UserRole
    is_banned: bool
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Message plus the affected account."""

    message: str
    user: UserResponse


class LoginResponse(AuthResponse):
    """Login result carrying the bearer token."""

    access_token: str
    token_type: str = "bearer"
