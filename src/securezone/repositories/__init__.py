"""Data access helpers wrapping a SQLAlchemy session."""

from .comment_repo import CommentRepository
from .report_repo import ReportRepository
from .tag_repo import TagRepository
from .user_repo import UserRepository
from .vote_repo import VoteRepository

__all__ = [
    "CommentRepository",
    "ReportRepository",
    "TagRepository",
    "UserRepository",
    "VoteRepository",
]
