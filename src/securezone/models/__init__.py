"""SQLAlchemy models for the SecureZone application."""

from .comment import Comment
from .report import Report
from .tag import Tag
from .user import User, UserRole
from .vote import Vote, VoteType

__all__ = [
    "Comment",
    "Report",
    "Tag",
    "User", "UserRole",
    "Vote", "VoteType",
]
