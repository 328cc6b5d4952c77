"""Report lifecycle services and read-time presentation."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from securezone.core.errors import ForbiddenError, NotFoundError
from securezone.models.report import Report
from securezone.models.user import User
from securezone.repositories.report_repo import ReportRepository
from securezone.repositories.tag_repo import TagRepository
from securezone.schemas.report import ReportAuthor, ReportCreate, ReportResponse, TagResponse
from securezone.services.tags import TagSynchronizer
from securezone.services.visibility import capabilities_of, display_name, is_privileged

logger = logging.getLogger(__name__)


def to_report_response(report: Report, requester: User | None) -> ReportResponse:
    """Serialize a report, masking the author for unprivileged requesters."""
    privileged = is_privileged(capabilities_of(requester))
    masked = report.is_anonymous and not privileged
    return ReportResponse(
        id=report.id,
        title=report.title,
        description=report.description,
        location=report.location,
        image_url=report.image_url,
        is_anonymous=report.is_anonymous,
        is_flagged=report.is_flagged,
        upvotes=report.upvotes,
        downvotes=report.downvotes,
        created_at=report.created_at,
        user=ReportAuthor(
            id=None if masked else report.user_id,
            username=display_name(report, requester),
            role=None if masked else report.user.role,
        ),
        tags=[TagResponse.model_validate(tag) for tag in report.tags],
    )


def create_report(
    db: Session,
    author: User,
    payload: ReportCreate,
    tag_synchronizer: TagSynchronizer,
) -> Report:
    """Persist a new report and its initial tags in one transaction.

    Raises:
        ForbiddenError: If the author is banned.
        ValidationError: If the tag input has an unsupported shape.
    """
    if author.is_banned:
        raise ForbiddenError("Your account has been banned")
    names = tag_synchronizer.parse(payload.tags)
    reports = ReportRepository(db)
    try:
        report = reports.create(
            user_id=author.id,
            title=payload.title,
            description=payload.description,
            location=payload.location,
            image_url=payload.image_url,
            is_anonymous=payload.is_anonymous,
        )
        TagRepository(db).insert_many(report.id, names)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("creating report for user %s rolled back", author.id, exc_info=True)
        raise
    logger.info("user %s created report %s", author.id, report.id)
    return reports.reload(report)


def get_report(db: Session, report_id: int) -> Report:
    report = ReportRepository(db).get_by_id(report_id)
    if report is None:
        raise NotFoundError("Report not found")
    return report


def list_reports(db: Session) -> list[Report]:
    """Return every report, newest first."""
    return ReportRepository(db).list_recent()


def list_reports_for_moderation(db: Session) -> list[Report]:
    return ReportRepository(db).list_for_moderation()


def flag_report(db: Session, report_id: int) -> Report:
    """Mark a report as false information."""
    report = get_report(db, report_id)
    report.is_flagged = True
    db.commit()
    logger.info("flagged report %s", report_id)
    return report


def delete_report(db: Session, report_id: int) -> None:
    """Delete a report together with its votes, tags and comments."""
    reports = ReportRepository(db)
    report = get_report(db, report_id)
    try:
        reports.delete(report)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("deleting report %s rolled back", report_id, exc_info=True)
        raise
    logger.info("deleted report %s", report_id)


def can_edit_tags(report: Report, requester: User) -> bool:
    """Owners and privileged users may replace a report's tags."""
    return report.user_id == requester.id or is_privileged(capabilities_of(requester))
