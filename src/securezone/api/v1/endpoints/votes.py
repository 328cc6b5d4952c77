"""Vote-related endpoints for the SecureZone API."""

from fastapi import APIRouter

from securezone.api.v1.dependencies import (
    ActiveUserDep,
    CurrentUserDep,
    SessionDep,
    VoteLedgerDep,
)
from securezone.models import User, VoteType
from securezone.schemas.vote import MyVoteResponse, VoteCreate, VoteResponse
from securezone.services import reports as report_service
from securezone.services.votes import VoteResult

router = APIRouter(tags=["votes"])


def _to_response(result: VoteResult, requester: User) -> VoteResponse:
    return VoteResponse(
        effect=result.effect,
        message=result.message,
        report=report_service.to_report_response(result.report, requester),
    )


@router.post("/votes", response_model=VoteResponse)
async def cast_vote(
    vote_data: VoteCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
    ledger: VoteLedgerDep,
) -> VoteResponse:
    """Cast, retract or switch a vote on a report."""
    result = ledger.cast_vote(db, current_user.id, vote_data.report_id, vote_data.vote_type)
    return _to_response(result, current_user)


@router.post("/reports/{report_id}/upvote", response_model=VoteResponse)
async def upvote_report(
    report_id: int,
    current_user: ActiveUserDep,
    db: SessionDep,
    ledger: VoteLedgerDep,
) -> VoteResponse:
    """Toggle an upvote; switches an existing downvote."""
    result = ledger.cast_vote(db, current_user.id, report_id, VoteType.UPVOTE)
    return _to_response(result, current_user)


@router.post("/reports/{report_id}/downvote", response_model=VoteResponse)
async def downvote_report(
    report_id: int,
    current_user: ActiveUserDep,
    db: SessionDep,
    ledger: VoteLedgerDep,
) -> VoteResponse:
    """Toggle a downvote; switches an existing upvote."""
    result = ledger.cast_vote(db, current_user.id, report_id, VoteType.DOWNVOTE)
    return _to_response(result, current_user)


@router.get("/votes/{report_id}/my-vote", response_model=MyVoteResponse)
async def get_my_vote(
    report_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    ledger: VoteLedgerDep,
) -> MyVoteResponse:
    """Get current user's vote on a specific report."""
    return MyVoteResponse(vote_type=ledger.get_user_vote(db, current_user.id, report_id))
