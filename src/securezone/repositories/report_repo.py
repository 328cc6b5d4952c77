"""Data access helpers for working with reports."""
from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from securezone.models.report import Report

__all__ = ["ReportRepository"]


class ReportRepository:
    """Thin wrapper around database access for report entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, report_id: int) -> Report | None:
        """Return a report by identifier with its author and tags loaded."""
        stmt = (
            select(Report)
            .where(Report.id == report_id)
            .options(selectinload(Report.user), selectinload(Report.tags))
        )
        return self.session.execute(stmt).scalars().first()

    def get_for_update(self, report_id: int) -> Report | None:
        """Return a report while holding its row lock until the transaction ends.

        Backends without row locks (SQLite) ignore ``FOR UPDATE``; callers also
        hold the in-process report lock.
        """
        stmt = select(Report).where(Report.id == report_id).with_for_update()
        return self.session.execute(stmt).scalars().first()

    def list_recent(self) -> list[Report]:
        """Return all reports newest first."""
        stmt = (
            select(Report)
            .options(selectinload(Report.user), selectinload(Report.tags))
            .order_by(Report.created_at.desc(), Report.id.desc())
        )
        return list(self.session.execute(stmt).scalars())

    def list_for_moderation(self) -> list[Report]:
        """Return all reports with flagged ones first, newest first within each group."""
        stmt = (
            select(Report)
            .options(selectinload(Report.user), selectinload(Report.tags))
            .order_by(Report.is_flagged.desc(), Report.created_at.desc(), Report.id.desc())
        )
        return list(self.session.execute(stmt).scalars())

    def create(
        self,
        *,
        user_id: int,
        title: str,
        description: str,
        location: str,
        image_url: str | None = None,
        is_anonymous: bool = False,
    ) -> Report:
        """Insert a new report and return the persisted ORM instance."""
        report = Report(
            user_id=user_id,
            title=title,
            description=description,
            location=location,
            image_url=image_url,
            is_anonymous=is_anonymous,
            upvotes=0,
            downvotes=0,
        )
        self.session.add(report)
        self.session.flush()
        return report

    def apply_counter_delta(self, report_id: int, upvote_delta: int, downvote_delta: int) -> None:
        """Shift the vote counters by relative amounts in a single UPDATE."""
        if not upvote_delta and not downvote_delta:
            return
        stmt = (
            update(Report)
            .where(Report.id == report_id)
            .values(
                upvotes=Report.upvotes + upvote_delta,
                downvotes=Report.downvotes + downvote_delta,
            )
            .execution_options(synchronize_session=False)
        )
        self.session.execute(stmt)

    def set_counters(self, report_id: int, upvotes: int, downvotes: int) -> None:
        """Overwrite both counters; only used when recounting from vote rows."""
        stmt = (
            update(Report)
            .where(Report.id == report_id)
            .values(upvotes=upvotes, downvotes=downvotes)
            .execution_options(synchronize_session=False)
        )
        self.session.execute(stmt)

    def delete(self, report: Report) -> None:
        self.session.delete(report)
        self.session.flush()

    def reload(self, report: Report) -> Report:
        """Discard cached state so counters and tags reflect the database."""
        self.session.expire(report)
        self.session.refresh(report)
        return report
