"""SQLAlchemy models for registered users."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Enum, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from securezone.db.session import Base

if TYPE_CHECKING:
    from .comment import Comment
    from .report import Report
    from .vote import Vote


class UserRole(str, enum.Enum):
    """Account roles; MODERATOR and ADMIN are the privileged ones."""

    NORMAL = "NORMAL"
    MODERATOR = "MODERATOR"
    ADMIN = "ADMIN"


class User(Base):
    """Registered account.

    Usernames are stored lower-cased so uniqueness is case-insensitive.
    """

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    # Stored as plaintext; credential hashing is not part of this service.
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", native_enum=False),
        nullable=False,
        default=UserRole.NORMAL,
    )
    is_banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    reports: Mapped[list[Report]] = relationship(
        "Report",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    votes: Mapped[list[Vote]] = relationship(
        "Vote",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

