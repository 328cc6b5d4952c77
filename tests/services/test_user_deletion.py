"""Deleting a user while that user's votes are still arriving."""

from __future__ import annotations

import threading

from securezone.core.errors import ForbiddenError
from securezone.models import Report, User, VoteType
from securezone.repositories.report_repo import ReportRepository
from securezone.repositories.vote_repo import VoteRepository
from securezone.services import users as user_service
from securezone.services.locks import ReportLockRegistry
from securezone.services.votes import VoteLedger


def _seed(sessions) -> tuple[int, int, int]:
    """Create bob with an upvote on report X, plus an untouched report Y."""
    with sessions() as db:
        owner = User(email="owner@example.com", username="owner", password="pw")
        bob = User(email="bob@example.com", username="bob", password="pw")
        db.add_all([owner, bob])
        db.flush()
        x = Report(user_id=owner.id, title="X", description="x", location="x", upvotes=0, downvotes=0)
        y = Report(user_id=owner.id, title="Y", description="y", location="y", upvotes=0, downvotes=0)
        db.add_all([x, y])
        db.commit()
        bob_id, x_id, y_id = bob.id, x.id, y.id

    ledger = VoteLedger(ReportLockRegistry())
    with sessions() as db:
        ledger.cast_vote(db, bob_id, x_id, VoteType.UPVOTE)
    return bob_id, x_id, y_id


def _assert_counters_match(sessions, report_id: int) -> None:
    with sessions() as db:
        report = db.get(Report, report_id)
        counts = VoteRepository(db).count_by_kind(report_id)
        assert report.upvotes == counts.get("UPVOTE", 0)
        assert report.downvotes == counts.get("DOWNVOTE", 0)


def test_cast_during_deletion_is_rejected(file_sessions, monkeypatch) -> None:
    bob_id, x_id, y_id = _seed(file_sessions)
    ledger = VoteLedger(ReportLockRegistry())
    original = VoteRepository.list_by_user
    outcome: list[BaseException | None] = []

    def list_then_vote(self, user_id):
        listed = original(self, user_id)
        if not outcome:

            def cast() -> None:
                with file_sessions() as other:
                    try:
                        ledger.cast_vote(other, bob_id, y_id, VoteType.UPVOTE)
                        outcome.append(None)
                    except ForbiddenError as exc:
                        outcome.append(exc)

            thread = threading.Thread(target=cast)
            thread.start()
            thread.join(timeout=30)
        return listed

    monkeypatch.setattr(VoteRepository, "list_by_user", list_then_vote)

    with file_sessions() as db:
        user_service.delete_user(db, ledger, "bob")

    assert len(outcome) == 1
    assert isinstance(outcome[0], ForbiddenError)
    with file_sessions() as db:
        assert db.get(User, bob_id) is None
        assert db.get(Report, y_id).upvotes == 0
        assert db.get(Report, x_id).upvotes == 0
    _assert_counters_match(file_sessions, x_id)
    _assert_counters_match(file_sessions, y_id)


def test_vote_committed_after_first_listing_is_retracted(file_sessions, monkeypatch) -> None:
    bob_id, x_id, y_id = _seed(file_sessions)
    ledger = VoteLedger(ReportLockRegistry())
    original = VoteRepository.report_ids_for_user
    calls = 0

    def ids_then_late_vote(self, user_id):
        nonlocal calls
        ids = original(self, user_id)
        calls += 1
        if calls == 1:
            # Same writes as a cast that passed its ban check before the ban.
            with file_sessions() as other:
                VoteRepository(other).create(bob_id, y_id, VoteType.UPVOTE)
                ReportRepository(other).apply_counter_delta(y_id, 1, 0)
                other.commit()
        return ids

    monkeypatch.setattr(VoteRepository, "report_ids_for_user", ids_then_late_vote)

    with file_sessions() as db:
        user_service.delete_user(db, ledger, "bob")

    assert calls == 4
    with file_sessions() as db:
        assert db.get(User, bob_id) is None
        assert db.get(Report, y_id).upvotes == 0
        assert VoteRepository(db).count_by_kind(y_id) == {}
    _assert_counters_match(file_sessions, x_id)
    _assert_counters_match(file_sessions, y_id)


def test_deletion_alongside_other_voters(file_sessions) -> None:
    voter_count = 4
    _, x_id, _ = _seed(file_sessions)
    with file_sessions() as db:
        others = [
            User(email=f"v{i}@example.com", username=f"v{i}", password="pw")
            for i in range(voter_count)
        ]
        db.add_all(others)
        db.commit()
        other_ids = [user.id for user in others]
    ledger = VoteLedger(ReportLockRegistry())
    barrier = threading.Barrier(voter_count + 1)
    errors: list[BaseException] = []

    def vote(user_id: int) -> None:
        barrier.wait()
        with file_sessions() as db:
            try:
                ledger.cast_vote(db, user_id, x_id, VoteType.DOWNVOTE)
            except Exception as exc:  # collected and asserted on below
                errors.append(exc)

    def delete() -> None:
        barrier.wait()
        with file_sessions() as db:
            try:
                user_service.delete_user(db, ledger, "bob")
            except Exception as exc:  # collected and asserted on below
                errors.append(exc)

    threads = [threading.Thread(target=vote, args=(uid,)) for uid in other_ids]
    threads.append(threading.Thread(target=delete))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert errors == []
    with file_sessions() as db:
        report = db.get(Report, x_id)
        assert (report.upvotes, report.downvotes) == (0, voter_count)
    _assert_counters_match(file_sessions, x_id)
