"""SQLAlchemy models for incident reports."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from securezone.db.session import Base

if TYPE_CHECKING:
    from .comment import Comment
    from .tag import Tag
    from .user import User
    from .vote import Vote


class Report(Base):
    """Incident report submitted by a user.

    ``upvotes`` and ``downvotes`` are denormalized aggregates of the report's
    vote rows and are only ever changed by the vote ledger.
    """

    __tablename__ = "incident_report"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_flagged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )

    # Owner is fixed at creation.
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user: Mapped[User] = relationship("User", back_populates="reports")
    votes: Mapped[list[Vote]] = relationship(
        "Vote",
        back_populates="report",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    tags: Mapped[list[Tag]] = relationship(
        "Tag",
        back_populates="report",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Tag.id",
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="report",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Comment.id",
    )
