"""Account services: signup, login, profile updates and admin actions."""

from __future__ import annotations

import logging
import secrets

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from securezone.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from securezone.models.user import User, UserRole
from securezone.repositories.user_repo import UserRepository
from securezone.repositories.vote_repo import VoteRepository
from securezone.services.votes import VoteLedger

logger = logging.getLogger(__name__)


def signup(db: Session, *, email: str, password: str, username: str) -> User:
    """Register a NORMAL account.

    Raises:
        ConflictError: If the email or (case-insensitive) username is taken.
    """
    users = UserRepository(db)
    if users.get_by_email(email) is not None:
        raise ConflictError("Email already exists")
    if users.get_by_username(username) is not None:
        raise ConflictError("Username already taken")
    user = users.create(email=email, username=username, password=password)
    db.commit()
    logger.info("registered user %s (%s)", user.id, user.username)
    return user


def authenticate(db: Session, *, email: str, password: str) -> User:
    """Return the account matching the credentials.

    Raises:
        UnauthorizedError: If the email is unknown or the password differs.
        ForbiddenError: If the account is banned.
    """
    user = UserRepository(db).get_by_email(email)
    if user is None or not secrets.compare_digest(user.password, password):
        logger.info("failed login for %s", email)
        raise UnauthorizedError("Invalid email or password")
    if user.is_banned:
        raise ForbiddenError("Your account has been banned")
    return user


def get_profile(db: Session, email: str) -> User:
    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise NotFoundError("User not found")
    return user


def update_profile(
    db: Session,
    user: User,
    *,
    username: str | None = None,
    password: str | None = None,
) -> User:
    """Change username and/or password for an active account."""
    if user.is_banned:
        raise ForbiddenError("Your account has been banned")
    if username and username.lower() != user.username.lower():
        if UserRepository(db).get_by_username(username) is not None:
            raise ConflictError("Username already taken")
        user.username = username.lower()
    if password:
        user.password = password
    db.commit()
    db.refresh(user)
    return user


def _get_target(db: Session, username: str) -> User:
    target = UserRepository(db).get_by_username(username)
    if target is None:
        logger.info("admin action on unknown user %s", username)
        raise NotFoundError("User not found")
    return target


def ban_user(db: Session, username: str) -> User:
    """Ban a non-admin account."""
    target = _get_target(db, username)
    if target.role == UserRole.ADMIN:
        raise ForbiddenError("Cannot ban an admin")
    target.is_banned = True
    db.commit()
    logger.info("banned user %s", target.username)
    return target


def promote_to_moderator(db: Session, username: str) -> User:
    """Grant the MODERATOR role to a non-admin account."""
    target = _get_target(db, username)
    if target.role == UserRole.ADMIN:
        raise ForbiddenError("Cannot change admin role")
    target.role = UserRole.MODERATOR
    db.commit()
    logger.info("promoted user %s to moderator", target.username)
    return target


def delete_user(db: Session, ledger: VoteLedger, username: str) -> None:
    """Delete a non-admin account with its reports, comments and votes.

    The user's votes on other reports are retracted through the ledger so the
    counters of those reports stay equal to their vote rows.
    """
    target = _get_target(db, username)
    if target.role == UserRole.ADMIN:
        raise ForbiddenError("Cannot delete an admin")

    # Casts starting after this commit see the ban under the report lock.
    target.is_banned = True
    db.commit()

    votes = VoteRepository(db)
    while True:
        touched = set(votes.report_ids_for_user(target.id))
        with ledger.locks.hold_many(touched):
            # A cast admitted before the ban may have committed on a report we
            # do not hold yet.
            if not set(votes.report_ids_for_user(target.id)) <= touched:
                db.rollback()
                continue
            try:
                removed = ledger.retract_all_by_user(db, target.id)
                db.delete(target)
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                logger.error("deleting user %s rolled back", username, exc_info=True)
                raise
            break
    logger.info("deleted user %s and retracted %d vote(s)", username, removed)


def list_users(db: Session) -> list[User]:
    return UserRepository(db).list_all()
