"""Data access helpers for working with users."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from securezone.models.user import User, UserRole

__all__ = ["UserRepository"]


class UserRepository:
    """Identity lookup and account persistence."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: int, *, refresh: bool = False) -> User | None:
        """Return a user by id; ``refresh`` re-reads the row over any cached state."""
        return self.session.get(User, user_id, populate_existing=refresh)

    def get_by_email(self, email: str) -> User | None:
        return self.session.execute(select(User).where(User.email == email)).scalars().first()

    def get_by_username(self, username: str) -> User | None:
        """Return the user whose username matches case-insensitively."""
        stmt = select(User).where(func.lower(User.username) == username.lower())
        return self.session.execute(stmt).scalars().first()

    def list_all(self) -> list[User]:
        return list(self.session.execute(select(User).order_by(User.id)).scalars())

    def create(
        self,
        *,
        email: str,
        username: str,
        password: str,
        role: UserRole = UserRole.NORMAL,
    ) -> User:
        """Insert a new account and flush so the id is populated."""
        user = User(email=email, username=username.lower(), password=password, role=role)
        self.session.add(user)
        self.session.flush()
        return user
