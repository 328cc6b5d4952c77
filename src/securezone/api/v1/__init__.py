"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    auth_router,
    comments_router,
    moderation_router,
    reports_router,
    users_router,
    votes_router,
)

__all__ = [
    "admin_router",
    "auth_router",
    "comments_router",
    "moderation_router",
    "reports_router",
    "users_router",
    "votes_router",
]
