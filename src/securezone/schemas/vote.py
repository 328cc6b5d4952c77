"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field

from securezone.models.vote import VoteType
from securezone.services.votes import VoteEffect

from .report import ReportResponse


class VoteCreate(BaseModel):
    """Schema for casting a vote."""

    report_id: int
    vote_type: VoteType = Field(..., description="UPVOTE or DOWNVOTE")


class VoteResponse(BaseModel):
    """Outcome of a vote cast together with the updated report."""

    effect: VoteEffect
    message: str
    report: ReportResponse


class MyVoteResponse(BaseModel):
    """The caller's current vote on a report, if any."""

    vote_type: VoteType | None
