"""
Dashboard router.
"""

from fastapi import APIRouter

from timesheets.infrastructure.auth import CurrentActor
from timesheets.infrastructure.web.dependencies import TimeEntryRepo, ProjectRepo, get_default_week_start
from timesheets.application.use_cases.time_entry_use_cases import DashboardUseCase
from timesheets.application.dto.time_entry_dto import DashboardResponseDTO


router = APIRouter()


@router.get("", response_model=DashboardResponseDTO)
async def get_dashboard(actor: CurrentActor, repository: TimeEntryRepo, project_repository: ProjectRepo):
    """Own recent entries and week/month totals; team totals for managers and admins."""
    use_case = DashboardUseCase(repository, project_repository, week_start=get_default_week_start())
    return await use_case.execute(actor)
