"""Data access helpers for comments."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from securezone.models.comment import Comment

__all__ = ["CommentRepository"]


class CommentRepository:
    """Persistence for append-only comments."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_report(self, report_id: int) -> list[Comment]:
        """Return a report's comments oldest first."""
        stmt = (
            select(Comment)
            .where(Comment.report_id == report_id)
            .options(selectinload(Comment.user))
            .order_by(Comment.id)
        )
        return list(self.session.execute(stmt).scalars())

    def create(self, *, user_id: int, report_id: int, content: str) -> Comment:
        comment = Comment(user_id=user_id, report_id=report_id, content=content)
        self.session.add(comment)
        self.session.flush()
        return comment
