"""Vote ledger: per-user vote rows and the report counters derived from them."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from securezone.core.errors import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    SecureZoneError,
    UnauthorizedError,
    ValidationError,
)
from securezone.models.report import Report
from securezone.models.vote import VoteType
from securezone.repositories.report_repo import ReportRepository
from securezone.repositories.user_repo import UserRepository
from securezone.repositories.vote_repo import VoteRepository
from securezone.services.locks import ReportLockRegistry

logger = logging.getLogger(__name__)

__all__ = ["VoteEffect", "VoteLedger", "VoteResult"]


class VoteEffect(str, enum.Enum):
    """How a cast changed the caller's vote."""

    CAST = "cast"
    RETRACTED = "retracted"
    SWITCHED = "switched"


_MESSAGES = {
    (VoteEffect.CAST, VoteType.UPVOTE): "Report upvoted",
    (VoteEffect.CAST, VoteType.DOWNVOTE): "Report downvoted",
    (VoteEffect.RETRACTED, VoteType.UPVOTE): "Upvote removed",
    (VoteEffect.RETRACTED, VoteType.DOWNVOTE): "Downvote removed",
    (VoteEffect.SWITCHED, VoteType.UPVOTE): "Changed to upvote",
    (VoteEffect.SWITCHED, VoteType.DOWNVOTE): "Changed to downvote",
}


@dataclass(frozen=True)
class VoteResult:
    """Updated report plus the transition that was applied."""

    report: Report
    effect: VoteEffect
    vote_type: VoteType

    @property
    def message(self) -> str:
        return _MESSAGES[(self.effect, self.vote_type)]


def _counter_delta(vote_type: VoteType, step: int) -> tuple[int, int]:
    if vote_type is VoteType.UPVOTE:
        return step, 0
    return 0, step


class VoteLedger:
    """Apply vote intents while keeping report counters equal to the vote rows.

    Every cast runs as one transaction under the report's lock: the vote row
    change and the relative counter update commit together or not at all.
    """

    def __init__(self, locks: ReportLockRegistry) -> None:
        self.locks = locks

    def cast_vote(
        self,
        db: Session,
        user_id: int,
        report_id: int,
        vote_type: VoteType | str,
    ) -> VoteResult:
        """Cast, retract or switch ``user_id``'s vote on ``report_id``.

        Args:
            db: Session owned by the caller; it is committed or rolled back here.
            user_id: Acting user.
            report_id: Target report.
            vote_type: Requested direction.

        Returns:
            The refreshed report and the effect of the call.

        Raises:
            UnauthorizedError: If the user does not exist.
            ForbiddenError: If the user is banned.
            NotFoundError: If the report does not exist.
            InvalidStateError: If the stored vote has an unknown kind.
        """
        try:
            vote_type = VoteType(vote_type)
        except ValueError as err:
            raise ValidationError(f"Unknown vote type: {vote_type!r}") from err
        with self.locks.hold(report_id):
            try:
                effect = self._apply(db, user_id, report_id, vote_type)
                db.commit()
            except SecureZoneError:
                db.rollback()
                raise
            except SQLAlchemyError:
                db.rollback()
                logger.error(
                    "vote on report %s by user %s rolled back",
                    report_id,
                    user_id,
                    exc_info=True,
                )
                raise
            reports = ReportRepository(db)
            report = reports.get_by_id(report_id)
            if report is None:  # pragma: no cover - deleted between commit and reload
                raise NotFoundError("Report not found")
            reports.reload(report)

        logger.info(
            "vote %s on report %s by user %s: %s",
            vote_type.value,
            report_id,
            user_id,
            effect.value,
        )
        return VoteResult(report=report, effect=effect, vote_type=vote_type)

    def _apply(
        self,
        db: Session,
        user_id: int,
        report_id: int,
        vote_type: VoteType,
    ) -> VoteEffect:
        # Re-read so a ban committed by another session is seen under the lock.
        user = UserRepository(db).get_by_id(user_id, refresh=True)
        if user is None:
            raise UnauthorizedError("User not authenticated")
        if user.is_banned:
            logger.info("banned user %s attempted to vote on report %s", user_id, report_id)
            raise ForbiddenError("Your account has been banned")

        reports = ReportRepository(db)
        if reports.get_for_update(report_id) is None:
            logger.info("vote on missing report %s", report_id)
            raise NotFoundError("Report not found")

        votes = VoteRepository(db)
        existing = votes.find(user_id, report_id)

        if existing is None:
            votes.create(user_id, report_id, vote_type)
            reports.apply_counter_delta(report_id, *_counter_delta(vote_type, 1))
            return VoteEffect.CAST

        if existing.vote_type == vote_type.value:
            votes.delete(existing)
            reports.apply_counter_delta(report_id, *_counter_delta(vote_type, -1))
            return VoteEffect.RETRACTED

        try:
            previous = VoteType(existing.vote_type)
        except ValueError as err:
            logger.warning(
                "vote %s on report %s has unrecognised kind %r",
                existing.id,
                report_id,
                existing.vote_type,
            )
            raise InvalidStateError("Invalid vote type") from err

        votes.update_kind(existing, vote_type)
        old_up, old_down = _counter_delta(previous, -1)
        new_up, new_down = _counter_delta(vote_type, 1)
        reports.apply_counter_delta(report_id, old_up + new_up, old_down + new_down)
        return VoteEffect.SWITCHED

    def get_user_vote(self, db: Session, user_id: int, report_id: int) -> VoteType | None:
        """Return the kind of vote ``user_id`` holds on ``report_id``."""
        vote = VoteRepository(db).find(user_id, report_id)
        if vote is None:
            return None
        try:
            return VoteType(vote.vote_type)
        except ValueError as err:
            raise InvalidStateError("Invalid vote type") from err

    def retract_all_by_user(self, db: Session, user_id: int) -> int:
        """Delete every vote held by ``user_id`` and back out its counter effect.

        Runs inside the caller's transaction; the caller commits and holds the
        locks for the affected reports.

        Returns:
            Number of vote rows removed.
        """
        votes = VoteRepository(db)
        reports = ReportRepository(db)
        removed = 0
        for vote in votes.list_by_user(user_id):
            try:
                kind = VoteType(vote.vote_type)
            except ValueError:
                logger.warning("dropping vote %s with unrecognised kind %r", vote.id, vote.vote_type)
            else:
                reports.apply_counter_delta(vote.report_id, *_counter_delta(kind, -1))
            votes.delete(vote)
            removed += 1
        return removed

    def recount(self, db: Session, report_id: int) -> Report:
        """Rebuild a report's counters from its vote rows and commit."""
        with self.locks.hold(report_id):
            reports = ReportRepository(db)
            try:
                if reports.get_for_update(report_id) is None:
                    raise NotFoundError("Report not found")
                counts = VoteRepository(db).count_by_kind(report_id)
                reports.set_counters(
                    report_id,
                    counts.get(VoteType.UPVOTE.value, 0),
                    counts.get(VoteType.DOWNVOTE.value, 0),
                )
                db.commit()
            except (SecureZoneError, SQLAlchemyError):
                db.rollback()
                raise
            report = reports.get_by_id(report_id)
            if report is None:  # pragma: no cover - deleted between commit and reload
                raise NotFoundError("Report not found")
            return reports.reload(report)
