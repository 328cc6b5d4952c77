"""Shared API dependencies for authentication and service access."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from securezone.core.errors import ForbiddenError, UnauthorizedError
from securezone.core.security import decode_access_token
from securezone.db.session import get_db
from securezone.models import User, UserRole
from securezone.repositories.user_repo import UserRepository
from securezone.services.tags import TagSynchronizer
from securezone.services.votes import VoteLedger

# Missing credentials are reported through UnauthorizedError, not HTTPBearer's default.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Resolve the caller from the bearer token.

    Raises:
        UnauthorizedError: If the token is missing, invalid or names an unknown user.
    """
    if credentials is None:
        raise UnauthorizedError("Could not validate credentials")
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise UnauthorizedError("Could not validate credentials")
    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_active_user(current_user: CurrentUserDep) -> User:
    """Return the caller, rejecting banned accounts before any mutation."""
    if current_user.is_banned:
        raise ForbiddenError("Your account has been banned")
    return current_user


ActiveUserDep = Annotated[User, Depends(get_active_user)]


def require_roles(*roles: UserRole) -> Callable[[User], User]:
    """Build a dependency admitting only active users holding one of ``roles``."""

    def _check(current_user: ActiveUserDep) -> User:
        if current_user.role not in roles:
            raise ForbiddenError("Access denied")
        return current_user

    return _check


AdminDep = Annotated[User, Depends(require_roles(UserRole.ADMIN))]
StaffDep = Annotated[User, Depends(require_roles(UserRole.ADMIN, UserRole.MODERATOR))]


def get_vote_ledger(request: Request) -> VoteLedger:
    """Return the ledger constructed by the application factory."""
    return request.app.state.vote_ledger


def get_tag_synchronizer(request: Request) -> TagSynchronizer:
    """Return the tag synchronizer constructed by the application factory."""
    return request.app.state.tag_synchronizer


VoteLedgerDep = Annotated[VoteLedger, Depends(get_vote_ledger)]
TagSynchronizerDep = Annotated[TagSynchronizer, Depends(get_tag_synchronizer)]
