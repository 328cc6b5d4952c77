"""Data access helpers for the vote ledger."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from securezone.models.vote import Vote, VoteType

__all__ = ["VoteRepository"]


class VoteRepository:
    """Persistence for per-user vote rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(self, user_id: int, report_id: int) -> Vote | None:
        """Return the vote a user holds on a report, if any."""
        stmt = select(Vote).where(Vote.user_id == user_id, Vote.report_id == report_id)
        return self.session.execute(stmt).scalars().first()

    def create(self, user_id: int, report_id: int, vote_type: VoteType) -> Vote:
        vote = Vote(user_id=user_id, report_id=report_id, vote_type=vote_type.value)
        self.session.add(vote)
        self.session.flush()
        return vote

    def update_kind(self, vote: Vote, vote_type: VoteType) -> Vote:
        vote.vote_type = vote_type.value
        self.session.flush()
        return vote

    def delete(self, vote: Vote) -> None:
        self.session.delete(vote)
        self.session.flush()

    def list_by_user(self, user_id: int) -> list[Vote]:
        stmt = select(Vote).where(Vote.user_id == user_id).order_by(Vote.report_id)
        return list(self.session.execute(stmt).scalars())

    def report_ids_for_user(self, user_id: int) -> list[int]:
        stmt = select(Vote.report_id).where(Vote.user_id == user_id).order_by(Vote.report_id)
        return list(self.session.execute(stmt).scalars())

    def count_by_kind(self, report_id: int) -> dict[str, int]:
        """Return ``{vote_type: count}`` for every kind stored against a report."""
        stmt = (
            select(Vote.vote_type, func.count())
            .where(Vote.report_id == report_id)
            .group_by(Vote.vote_type)
        )
        return {kind: count for kind, count in self.session.execute(stmt).all()}
