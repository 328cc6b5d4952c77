"""Pydantic schemas for the SecureZone API."""

from .comment import CommentCreate, CommentResponse
from .report import ReportCreate, ReportResponse, TagResponse, TagsUpdate
from .user import (
    AuthResponse,
    LoginRequest,
    LoginResponse,
    ProfileUpdate,
    SignupRequest,
    UsernameRequest,
    UserResponse,
)
from .vote import MyVoteResponse, VoteCreate, VoteResponse

__all__ = [
    "AuthResponse",
    "CommentCreate",
    "CommentResponse",
    "LoginRequest",
    "LoginResponse",
    "MyVoteResponse",
    "ProfileUpdate",
    "ReportCreate",
    "ReportResponse",
    "SignupRequest",
    "TagResponse",
    "TagsUpdate",
    "UserResponse",
    "UsernameRequest",
    "VoteCreate",
    "VoteResponse",
]
