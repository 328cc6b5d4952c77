"""Comment services."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from securezone.core.errors import ForbiddenError
from securezone.models.comment import Comment
from securezone.models.user import User
from securezone.repositories.comment_repo import CommentRepository
from securezone.services.reports import get_report

logger = logging.getLogger(__name__)


def list_comments(db: Session, report_id: int) -> list[Comment]:
    get_report(db, report_id)
    return CommentRepository(db).list_for_report(report_id)


def add_comment(db: Session, author: User, report_id: int, content: str) -> Comment:
    """Append a comment to an existing report."""
    if author.is_banned:
        raise ForbiddenError("Your account has been banned")
    get_report(db, report_id)
    comment = CommentRepository(db).create(user_id=author.id, report_id=report_id, content=content)
    db.commit()
    db.refresh(comment)
    logger.info("user %s commented on report %s", author.id, report_id)
    return comment
