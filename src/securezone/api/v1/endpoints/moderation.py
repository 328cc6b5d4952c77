"""Moderation queue endpoints."""

from fastapi import APIRouter

from securezone.api.v1.dependencies import SessionDep, StaffDep
from securezone.schemas.report import ReportResponse
from securezone.services import reports as report_service

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.get("/reports", response_model=list[ReportResponse])
async def moderation_reports(staff: StaffDep, db: SessionDep) -> list[ReportResponse]:
    """List every report for review, flagged ones first, authors unmasked."""
    return [
        report_service.to_report_response(report, staff)
        for report in report_service.list_reports_for_moderation(db)
    ]
