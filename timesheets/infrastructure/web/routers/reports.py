"""
Reports router.
Payroll as JSON and as summary / detail CSV downloads.
"""

from typing import Optional
from datetime import date
from fastapi import APIRouter, Query, Response

from timesheets.domain.models.value_objects import DatePreset, WeekStart
from timesheets.domain.services.payroll_service import PayrollReport
from timesheets.domain.models.profile import Actor
from timesheets.infrastructure.auth import CurrentActor
from timesheets.infrastructure.export.payroll_csv import (
    payroll_summary_csv,
    payroll_detail_csv,
    summary_filename,
    detail_filename,
)
from timesheets.infrastructure.web.dependencies import (
    TimeEntryRepo, ProfileRepo, ProjectRepo, get_default_week_start,
)
from timesheets.application.use_cases.payroll_use_cases import GeneratePayrollUseCase
from timesheets.application.dto.payroll_dto import PayrollRequestDTO, PayrollReportResponseDTO


router = APIRouter()

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


async def _generate(
    actor: Actor,
    repository,
    profile_repository,
    project_repository,
    start: Optional[date],
    end: Optional[date],
    preset: Optional[DatePreset],
    week_start: Optional[WeekStart],
    report_status: str,
    project_id: Optional[str],
    contractor_id: Optional[str],
) -> PayrollReport:
    request = PayrollRequestDTO(
        start=start,
        end=end,
        preset=preset,
        week_start=week_start or get_default_week_start(),
        status=report_status,
        project_id=project_id,
        contractor_id=contractor_id,
    )
    use_case = GeneratePayrollUseCase(repository, profile_repository, project_repository)
    return await use_case.execute(actor, request)


def _csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/payroll", response_model=PayrollReportResponseDTO)
async def payroll_report(
    actor: CurrentActor,
    repository: TimeEntryRepo,
    profile_repository: ProfileRepo,
    project_repository: ProjectRepo,
    start: Optional[date] = Query(None, description="First day; defaults to last month"),
    end: Optional[date] = Query(None, description="Last day; defaults to last month"),
    preset: Optional[DatePreset] = Query(None),
    week_start: Optional[WeekStart] = Query(None),
    report_status: str = Query("approved", alias="status", description="A status or 'all'"),
    project_id: Optional[str] = Query(None),
    contractor_id: Optional[str] = Query(None),
):
    """
    Hours and pay grouped by contractor and by project.
    Pay always uses each entry's rate snapshot.
    """
    report = await _generate(
        actor, repository, profile_repository, project_repository,
        start, end, preset, week_start, report_status, project_id, contractor_id,
    )
    return PayrollReportResponseDTO.from_report(report)


@router.get("/payroll/summary.csv")
async def payroll_summary_export(
    actor: CurrentActor,
    repository: TimeEntryRepo,
    profile_repository: ProfileRepo,
    project_repository: ProjectRepo,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    preset: Optional[DatePreset] = Query(None),
    week_start: Optional[WeekStart] = Query(None),
    report_status: str = Query("approved", alias="status"),
    project_id: Optional[str] = Query(None),
    contractor_id: Optional[str] = Query(None),
):
    """Summary CSV: one row per contractor, then one row per project."""
    report = await _generate(
        actor, repository, profile_repository, project_repository,
        start, end, preset, week_start, report_status, project_id, contractor_id,
    )
    return _csv_response(payroll_summary_csv(report), summary_filename(report))


@router.get("/payroll/detail.csv")
async def payroll_detail_export(
    actor: CurrentActor,
    repository: TimeEntryRepo,
    profile_repository: ProfileRepo,
    project_repository: ProjectRepo,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    preset: Optional[DatePreset] = Query(None),
    week_start: Optional[WeekStart] = Query(None),
    report_status: str = Query("approved", alias="status"),
    project_id: Optional[str] = Query(None),
    contractor_id: Optional[str] = Query(None),
):
    """Detail CSV: one row per time entry."""
    report = await _generate(
        actor, repository, profile_repository, project_repository,
        start, end, preset, week_start, report_status, project_id, contractor_id,
    )
    return _csv_response(payroll_detail_csv(report), detail_filename(report))
