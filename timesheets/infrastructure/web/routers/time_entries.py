"""
Time tracking router.
Weekly timesheets, submission, the scoped entry list and admin deletion.
"""

from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Query, Response, status

from timesheets.domain.models.time_entry import TimeEntryStatus
from timesheets.domain.models.value_objects import DatePreset, WeekStart
from timesheets.infrastructure.auth import CurrentActor
from timesheets.infrastructure.web.dependencies import (
    DbSession, TimeEntryRepo, ProfileRepo, ProjectRepo, get_default_week_start,
)
from timesheets.application.use_cases.time_entry_use_cases import (
    SaveWeekUseCase,
    SubmitWeekUseCase,
    GetWeekUseCase,
    WeekQuery,
    ListTimeEntriesUseCase,
    DeleteTimeEntryUseCase,
)
from timesheets.application.dto.time_entry_dto import (
    SaveWeekRequestDTO,
    SubmitWeekRequestDTO,
    ListTimeEntriesRequestDTO,
    TimeEntryListResponseDTO,
    WeekViewResponseDTO,
    SubmitWeekResponseDTO,
)


router = APIRouter()


@router.get("", response_model=TimeEntryListResponseDTO)
async def list_time_entries(
    actor: CurrentActor,
    repository: TimeEntryRepo,
    profile_repository: ProfileRepo,
    project_repository: ProjectRepo,
    start: Optional[date] = Query(None, description="First day (inclusive)"),
    end: Optional[date] = Query(None, description="Last day (inclusive)"),
    preset: Optional[DatePreset] = Query(None, description="Named range when start/end are omitted"),
    week_start: Optional[WeekStart] = Query(None, description="Week convention for week presets"),
    entry_status: Optional[List[TimeEntryStatus]] = Query(None, alias="status", description="Statuses to include"),
    user_id: Optional[str] = Query(None, description="Only this user's entries"),
    project_id: Optional[str] = Query(None, description="Only this project's entries"),
    limit: int = Query(500, ge=1, le=5000),
):
    """
    Entries visible to the caller: the whole org for admins, own and direct
    reports' entries for managers, own entries for contractors.
    Filters narrow that set, they never widen it.
    """
    request = ListTimeEntriesRequestDTO(
        start=start,
        end=end,
        preset=preset,
        week_start=week_start or get_default_week_start(),
        status=entry_status,
        user_id=user_id,
        project_id=project_id,
        limit=limit,
    )
    use_case = ListTimeEntriesUseCase(repository, profile_repository, project_repository)
    return await use_case.execute(actor, request)


@router.get("/week", response_model=WeekViewResponseDTO)
async def get_week(
    actor: CurrentActor,
    repository: TimeEntryRepo,
    profile_repository: ProfileRepo,
    project_repository: ProjectRepo,
    day: Optional[date] = Query(None, description="Any day of the week; defaults to today"),
    week_start: Optional[WeekStart] = Query(None, description="sunday or monday"),
    user_id: Optional[str] = Query(None, description="Someone else's week, if visible to the caller"),
):
    """A week of entries with per-day and week totals."""
    query = WeekQuery(
        day=day or date.today(),
        week_start=week_start or get_default_week_start(),
        user_id=user_id,
    )
    use_case = GetWeekUseCase(repository, profile_repository, project_repository)
    return await use_case.execute(actor, query)


@router.put("/week", response_model=WeekViewResponseDTO)
async def save_week(
    request: SaveWeekRequestDTO,
    actor: CurrentActor,
    session: DbSession,
    repository: TimeEntryRepo,
    profile_repository: ProfileRepo,
    project_repository: ProjectRepo,
):
    """
    Save the lines of a week in one transaction.

    - lines with an **id** update that entry (or delete it when **delete** is set)
    - lines without an id create draft entries
    - **submit** submits the week after saving
    Submitted and approved entries cannot be changed.
    """
    use_case = SaveWeekUseCase(session, repository, profile_repository, project_repository)
    return await use_case.execute(actor, request)


@router.post("/week/submit", response_model=SubmitWeekResponseDTO)
async def submit_week(
    request: SubmitWeekRequestDTO,
    actor: CurrentActor,
    session: DbSession,
    repository: TimeEntryRepo,
    project_repository: ProjectRepo,
):
    """Submit every draft or rejected entry of your week for approval."""
    return await SubmitWeekUseCase(session, repository, project_repository).execute(actor, request)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_time_entry(
    entry_id: str,
    actor: CurrentActor,
    session: DbSession,
    repository: TimeEntryRepo,
):
    """Delete an entry that is not approved (admin only)."""
    await DeleteTimeEntryUseCase(session, repository).execute(actor, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
