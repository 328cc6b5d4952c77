"""Models capturing voting interactions on reports."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from securezone.db.session import Base

if TYPE_CHECKING:
    from .report import Report
    from .user import User


class VoteType(str, enum.Enum):
    """Direction of a vote."""

    UPVOTE = "UPVOTE"
    DOWNVOTE = "DOWNVOTE"


class Vote(Base):
    """Per-user vote on a report."""

    __tablename__ = "vote"
    __table_args__ = (
        # At most one vote per (user, report).
        UniqueConstraint("user_id", "report_id", name="uq_vote_user_report"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    report_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("incident_report.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Plain string column so a corrupt value can be read back and rejected.
    vote_type: Mapped[str] = mapped_column(String(16), nullable=False)

    user: Mapped[User] = relationship("User", back_populates="votes")
    report: Mapped[Report] = relationship("Report", back_populates="votes")
