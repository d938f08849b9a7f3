"""
Approval use cases for the application layer.
Week-level approve / reject / resolve batches and the approval queue.
"""

import logging
from typing import Dict, List, Tuple

from sqlalchemy.orm import Session

from timesheets.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from timesheets.application.use_cases.time_entry_use_cases import project_names_for, profile_names_for
from timesheets.application.dto.approval_dto import (
    WeekGroupRequestDTO, ResolveWeekRequestDTO, ListApprovalsRequestDTO,
    BatchResultDTO, ApprovalGroupDTO, ApprovalQueueResponseDTO,
)
from timesheets.application.dto.time_entry_dto import TimeEntryResponseDTO
from timesheets.domain.models.base import AuthorizationError, ConflictError, EntityNotFoundError
from timesheets.domain.models.profile import Actor, Profile
from timesheets.domain.models.time_entry import TimeEntry, TimeEntryStatus
from timesheets.domain.models.value_objects import DateRange
from timesheets.domain.events.timesheet_events import WeekApproved, WeekRejected
from timesheets.domain.repositories.time_entry_repository import TimeEntryRepository
from timesheets.domain.repositories.profile_repository import ProfileRepository
from timesheets.domain.repositories.project_repository import ProjectRepository
from timesheets.domain.services.hours_service import sum_hours


logger = logging.getLogger(__name__)


class _WeekBatchUseCase(CommandUseCase):
    """Shared target resolution for the batch processors."""

    def __init__(
        self,
        session: Session,
        time_entry_repository: TimeEntryRepository,
        profile_repository: ProfileRepository,
    ):
        super().__init__(session)
        self.time_entry_repository = time_entry_repository
        self.profile_repository = profile_repository

    def _authorized_target(self, actor: Actor, request: WeekGroupRequestDTO) -> Tuple[Profile, DateRange]:
        """Load the target and check approval rights before anything is written."""
        date_range = request.date_range()
        target = self.profile_repository.get_by_id(actor.org_id, request.user_id)
        if target is None:
            raise EntityNotFoundError("Profile", request.user_id)
        if not self.policy.can_approve(actor, target):
            raise AuthorizationError("You can only approve time for your direct reports")
        return target, date_range

    def _result(self, request: WeekGroupRequestDTO, approved: int = 0, rejected: int = 0) -> BatchResultDTO:
        return BatchResultDTO(
            user_id=request.user_id,
            week_start=request.week_start,
            week_end=request.week_end,
            approved=approved,
            rejected=rejected,
            affected=approved + rejected,
        )


class ApproveWeekUseCase(_WeekBatchUseCase):
    """
    Approve every submitted entry of a user's week.
    Approving an already approved week changes nothing and reports 0 rows.
    """

    async def _execute_command_logic(self, actor: Actor, request: WeekGroupRequestDTO) -> BatchResultDTO:
        target, date_range = self._authorized_target(actor, request)

        approved = self.time_entry_repository.approve_week(
            actor.org_id, target.id, date_range,
            approved_by=actor.id,
            owner_rate=target.hourly_rate,
        )
        logger.info(f"{actor.id} approved {approved} entries of {target.id} for {date_range.start}..{date_range.end}")
        if approved:
            self.record_event(WeekApproved(
                org_id=actor.org_id, user_id=target.id, approved_by=actor.id,
                week_start=date_range.start, week_end=date_range.end, affected=approved,
            ))
        return self._result(request, approved=approved)


class RejectWeekUseCase(_WeekBatchUseCase):
    """Send every submitted entry of a user's week back for correction."""

    async def _execute_command_logic(self, actor: Actor, request: WeekGroupRequestDTO) -> BatchResultDTO:
        target, date_range = self._authorized_target(actor, request)

        rejected = self.time_entry_repository.reject_week(actor.org_id, target.id, date_range)
        logger.info(f"{actor.id} rejected {rejected} entries of {target.id} for {date_range.start}..{date_range.end}")
        if rejected:
            self.record_event(WeekRejected(
                org_id=actor.org_id, user_id=target.id, rejected_by=actor.id,
                week_start=date_range.start, week_end=date_range.end, affected=rejected,
            ))
        return self._result(request, rejected=rejected)


class ResolveWeekUseCase(_WeekBatchUseCase):
    """
    Mixed decision: reject the listed entries and approve the rest of the group.
    Both updates commit together or not at all.
    """

    async def _execute_command_logic(self, actor: Actor, request: ResolveWeekRequestDTO) -> BatchResultDTO:
        target, date_range = self._authorized_target(actor, request)

        rejected_ids = set(request.rejected_entry_ids)
        submitted_ids = set(self.time_entry_repository.find_submitted_ids(actor.org_id, target.id, date_range))

        unknown = rejected_ids - submitted_ids
        if unknown:
            raise ConflictError(
                f"Entries are not awaiting approval in this week: {', '.join(sorted(unknown))}"
            )

        rejected = 0
        if rejected_ids:
            rejected = self.time_entry_repository.reject_week(
                actor.org_id, target.id, date_range, only_ids=rejected_ids
            )
            if rejected != len(rejected_ids):
                raise ConflictError("Entries changed while they were being reviewed, please reload")

        approved = self.time_entry_repository.approve_week(
            actor.org_id, target.id, date_range,
            approved_by=actor.id,
            owner_rate=target.hourly_rate,
            exclude_ids=rejected_ids,
        )
        logger.info(
            f"{actor.id} resolved week {date_range.start}..{date_range.end} of {target.id}: "
            f"{approved} approved, {rejected} rejected"
        )

        if approved:
            self.record_event(WeekApproved(
                org_id=actor.org_id, user_id=target.id, approved_by=actor.id,
                week_start=date_range.start, week_end=date_range.end, affected=approved,
            ))
        if rejected:
            self.record_event(WeekRejected(
                org_id=actor.org_id, user_id=target.id, rejected_by=actor.id,
                week_start=date_range.start, week_end=date_range.end,
                entry_ids=sorted(rejected_ids), affected=rejected,
            ))
        return self._result(request, approved=approved, rejected=rejected)


class ListApprovalsUseCase(QueryUseCase[ListApprovalsRequestDTO, ApprovalQueueResponseDTO]):
    """Submitted entries the actor may approve, grouped by user and week."""

    def __init__(
        self,
        time_entry_repository: TimeEntryRepository,
        profile_repository: ProfileRepository,
        project_repository: ProjectRepository,
    ):
        super().__init__()
        self.time_entry_repository = time_entry_repository
        self.profile_repository = profile_repository
        self.project_repository = project_repository

    async def _execute_business_logic(self, actor: Actor, request: ListApprovalsRequestDTO) -> ApprovalQueueResponseDTO:
        self.policy.require(self.policy.can_view_team(actor), "Only managers and admins review time")

        date_range = None
        if request.start or request.end:
            date_range = DateRange(request.start or request.end, request.end or request.start)

        entries = self.time_entry_repository.find_visible(
            self.policy.visible_scope(actor),
            date_range=date_range,
            statuses=[TimeEntryStatus.SUBMITTED],
            user_id=request.user_id,
        )

        owners = {p.id: p for p in self.profile_repository.get_many(actor.org_id, {e.user_id for e in entries})}
        approvable = [
            e for e in entries
            if e.user_id in owners and self.policy.can_approve(actor, owners[e.user_id])
        ]

        groups: Dict[Tuple[str, DateRange], List[TimeEntry]] = {}
        for entry in approvable:
            week = DateRange.week_of(entry.entry_date, request.week_start_day)
            groups.setdefault((entry.user_id, week), []).append(entry)

        project_names = project_names_for(self.project_repository, actor.org_id, approvable)
        user_names = profile_names_for(self.profile_repository, actor.org_id, owners.keys())

        result = []
        for (user_id, week), group in groups.items():
            group.sort(key=lambda e: (e.entry_date, e.time_in is None, e.time_in))
            result.append(ApprovalGroupDTO(
                user_id=user_id,
                user_name=user_names.get(user_id, user_id),
                week_start=week.start,
                week_end=week.end,
                entry_count=len(group),
                total_hours=sum_hours(e.hours_worked for e in group),
                entries=[
                    TimeEntryResponseDTO.from_domain(e, project_name=project_names.get(e.project_id))
                    for e in group
                ],
            ))

        result.sort(key=lambda g: (g.week_start, g.user_name.lower()))
        return ApprovalQueueResponseDTO(groups=result, total_groups=len(result))
