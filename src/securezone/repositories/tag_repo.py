"""Data access helpers for report tags."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from securezone.models.tag import Tag

__all__ = ["TagRepository"]


class TagRepository:
    """Persistence for tag rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def delete_all(self, report_id: int) -> None:
        self.session.execute(delete(Tag).where(Tag.report_id == report_id))

    def insert_many(self, report_id: int, names: Sequence[str]) -> list[Tag]:
        """Insert one row per name, keeping input order."""
        tags = [Tag(report_id=report_id, name=name) for name in names]
        self.session.add_all(tags)
        self.session.flush()
        return tags

    def list_for_report(self, report_id: int) -> list[Tag]:
        stmt = select(Tag).where(Tag.report_id == report_id).order_by(Tag.id)
        return list(self.session.execute(stmt).scalars())
