"""Tag synchronizer: wholesale replacement of a report's tag set."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from securezone.core.errors import NotFoundError, SecureZoneError, ValidationError
from securezone.models.report import Report
from securezone.repositories.report_repo import ReportRepository
from securezone.repositories.tag_repo import TagRepository
from securezone.services.locks import ReportLockRegistry

logger = logging.getLogger(__name__)

__all__ = ["TagSynchronizer", "parse_tags"]


def parse_tags(raw_tags: Any, *, max_length: int | None = None) -> list[str]:
    """Normalize loosely-typed tag input into an ordered list of names.

    A list or tuple is trimmed element-wise; a string is split on commas and
    each part trimmed. Empty names are dropped, duplicates are kept. ``None``
    means no tags.

    Raises:
        ValidationError: If the input is neither a string nor a sequence of
            strings, or a name exceeds ``max_length``.
    """
    if raw_tags is None:
        return []
    if isinstance(raw_tags, str):
        parts = raw_tags.split(",")
    elif isinstance(raw_tags, (list, tuple)):
        if not all(isinstance(item, str) for item in raw_tags):
            raise ValidationError("Tags must be strings")
        parts = list(raw_tags)
    else:
        raise ValidationError("Tags must be a list of strings or a comma-separated string")

    names = [part.strip() for part in parts]
    names = [name for name in names if name]
    if max_length is not None:
        for name in names:
            if len(name) > max_length:
                raise ValidationError(f"Tag '{name[:20]}' exceeds {max_length} characters")
    return names


class TagSynchronizer:
    """Replace tag rows for a report inside a single transaction."""

    def __init__(self, locks: ReportLockRegistry, max_length: int | None = None) -> None:
        self.locks = locks
        self.max_length = max_length

    def parse(self, raw_tags: Any) -> list[str]:
        return parse_tags(raw_tags, max_length=self.max_length)

    def replace_tags(self, db: Session, report_id: int, raw_tags: Any) -> Report:
        """Delete all of a report's tags and insert the parsed ones in order.

        An empty parse result clears the tag set. Readers never see the gap
        between the delete and the insert because both commit together.

        Raises:
            ValidationError: If ``raw_tags`` has an unsupported shape.
            NotFoundError: If the report does not exist.
        """
        names = self.parse(raw_tags)
        with self.locks.hold(report_id):
            reports = ReportRepository(db)
            try:
                report = reports.get_for_update(report_id)
                if report is None:
                    raise NotFoundError("Report not found")
                tags = TagRepository(db)
                tags.delete_all(report_id)
                tags.insert_many(report_id, names)
                db.commit()
            except SecureZoneError:
                db.rollback()
                raise
            except SQLAlchemyError:
                db.rollback()
                logger.error("tag replace on report %s rolled back", report_id, exc_info=True)
                raise
            reports.reload(report)

        logger.info("replaced tags on report %s with %d tag(s)", report_id, len(names))
        return report
