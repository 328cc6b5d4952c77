"""Report endpoints for the SecureZone API."""

from fastapi import APIRouter, status

from securezone.api.v1.dependencies import (
    ActiveUserDep,
    CurrentUserDep,
    SessionDep,
    StaffDep,
    TagSynchronizerDep,
)
from securezone.core.errors import ForbiddenError
from securezone.schemas.common import MessageResponse
from securezone.schemas.report import ReportCreate, ReportResponse, TagsUpdate
from securezone.services import reports as report_service

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def create_report(
    payload: ReportCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
    tag_synchronizer: TagSynchronizerDep,
) -> ReportResponse:
    """Submit a new incident report."""
    report = report_service.create_report(db, current_user, payload, tag_synchronizer)
    return report_service.to_report_response(report, current_user)


@router.get("", response_model=list[ReportResponse])
async def list_reports(current_user: CurrentUserDep, db: SessionDep) -> list[ReportResponse]:
    """List all reports newest first, masking anonymous authors where required."""
    return [
        report_service.to_report_response(report, current_user)
        for report in report_service.list_reports(db)
    ]


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report(
    report_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ReportResponse:
    report = report_service.get_report(db, report_id)
    return report_service.to_report_response(report, current_user)


@router.put("/{report_id}/tags", response_model=ReportResponse)
async def replace_tags(
    report_id: int,
    payload: TagsUpdate,
    current_user: ActiveUserDep,
    db: SessionDep,
    tag_synchronizer: TagSynchronizerDep,
) -> ReportResponse:
    """Replace the report's tag set; only the owner or staff may do this."""
    report = report_service.get_report(db, report_id)
    if not report_service.can_edit_tags(report, current_user):
        raise ForbiddenError("Only the report owner or a moderator can edit tags")
    report = tag_synchronizer.replace_tags(db, report_id, payload.tags)
    return report_service.to_report_response(report, current_user)


@router.put("/{report_id}/flag", response_model=MessageResponse)
async def flag_report(report_id: int, staff: StaffDep, db: SessionDep) -> MessageResponse:
    report_service.flag_report(db, report_id)
    return MessageResponse(message="Report flagged as false information")


@router.delete("/{report_id}", response_model=MessageResponse)
async def delete_report(report_id: int, staff: StaffDep, db: SessionDep) -> MessageResponse:
    report_service.delete_report(db, report_id)
    return MessageResponse(message="Report deleted successfully")
