"""
Approvals router.
The review queue and the week-level approve / reject / resolve batches.
"""

from typing import Optional
from datetime import date
from fastapi import APIRouter, Query

from timesheets.domain.models.value_objects import WeekStart
from timesheets.infrastructure.auth import CurrentActor
from timesheets.infrastructure.web.dependencies import (
    DbSession, TimeEntryRepo, ProfileRepo, ProjectRepo, get_default_week_start,
)
from timesheets.application.use_cases.approval_use_cases import (
    ApproveWeekUseCase,
    RejectWeekUseCase,
    ResolveWeekUseCase,
    ListApprovalsUseCase,
)
from timesheets.application.dto.approval_dto import (
    WeekGroupRequestDTO,
    ResolveWeekRequestDTO,
    ListApprovalsRequestDTO,
    BatchResultDTO,
    ApprovalQueueResponseDTO,
)


router = APIRouter()


@router.get("", response_model=ApprovalQueueResponseDTO)
async def list_pending_approvals(
    actor: CurrentActor,
    repository: TimeEntryRepo,
    profile_repository: ProfileRepo,
    project_repository: ProjectRepo,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    user_id: Optional[str] = Query(None),
    week_start_day: Optional[WeekStart] = Query(None, description="Week convention used for grouping"),
):
    """Submitted entries the caller may approve, grouped by user and week."""
    request = ListApprovalsRequestDTO(
        start=start,
        end=end,
        user_id=user_id,
        week_start_day=week_start_day or get_default_week_start(),
    )
    use_case = ListApprovalsUseCase(repository, profile_repository, project_repository)
    return await use_case.execute(actor, request)


@router.post("/approve", response_model=BatchResultDTO)
async def approve_week(
    request: WeekGroupRequestDTO,
    actor: CurrentActor,
    session: DbSession,
    repository: TimeEntryRepo,
    profile_repository: ProfileRepo,
):
    """
    Approve every submitted entry of a user's week.
    Approving twice is harmless: the second call reports 0 affected rows.
    """
    return await ApproveWeekUseCase(session, repository, profile_repository).execute(actor, request)


@router.post("/reject", response_model=BatchResultDTO)
async def reject_week(
    request: WeekGroupRequestDTO,
    actor: CurrentActor,
    session: DbSession,
    repository: TimeEntryRepo,
    profile_repository: ProfileRepo,
):
    """Send every submitted entry of a user's week back for correction."""
    return await RejectWeekUseCase(session, repository, profile_repository).execute(actor, request)


@router.post("/resolve", response_model=BatchResultDTO)
async def resolve_week(
    request: ResolveWeekRequestDTO,
    actor: CurrentActor,
    session: DbSession,
    repository: TimeEntryRepo,
    profile_repository: ProfileRepo,
):
    """
    Reject **rejected_entry_ids** and approve the rest of the week.
    Either both happen or neither does.
    """
    return await ResolveWeekUseCase(session, repository, profile_repository).execute(actor, request)
