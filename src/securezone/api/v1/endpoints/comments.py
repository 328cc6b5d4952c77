"""Comment endpoints nested under reports."""

from fastapi import APIRouter, status

from securezone.api.v1.dependencies import ActiveUserDep, CurrentUserDep, SessionDep
from securezone.schemas.comment import CommentCreate, CommentResponse
from securezone.services import comments as comment_service

router = APIRouter(prefix="/reports/{report_id}/comments", tags=["comments"])


@router.get("", response_model=list[CommentResponse])
async def list_comments(
    report_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[CommentResponse]:
    return [
        CommentResponse.model_validate(comment)
        for comment in comment_service.list_comments(db, report_id)
    ]


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    report_id: int,
    payload: CommentCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> CommentResponse:
    comment = comment_service.add_comment(db, current_user, report_id, payload.content)
    return CommentResponse.model_validate(comment)
