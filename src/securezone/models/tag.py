"""Free-text tags annotating a report."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from securezone.db.session import Base

if TYPE_CHECKING:
    from .report import Report


class Tag(Base):
    """One tag row; a report's tag set is replaced wholesale, never patched."""

    __tablename__ = "tag"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    report_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("incident_report.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    report: Mapped[Report] = relationship("Report", back_populates="tags")
