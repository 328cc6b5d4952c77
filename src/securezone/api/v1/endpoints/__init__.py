"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .auth import router as auth_router
from .comments import router as comments_router
from .moderation import router as moderation_router
from .reports import router as reports_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "admin_router",
    "auth_router",
    "comments_router",
    "moderation_router",
    "reports_router",
    "users_router",
    "votes_router",
]
