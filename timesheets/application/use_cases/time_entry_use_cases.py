"""
Time Entry use cases for the application layer.
Weekly timesheet editing, submission, listing and admin deletion.
"""

from typing import List, Optional, Dict, Iterable
from datetime import date
from decimal import Decimal
from dataclasses import dataclass

from sqlalchemy.orm import Session

from timesheets.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from timesheets.application.dto.time_entry_dto import (
    TimeEntryLineDTO, SaveWeekRequestDTO, SubmitWeekRequestDTO, ListTimeEntriesRequestDTO,
    TimeEntryResponseDTO, TimeEntryListResponseDTO, WeekViewResponseDTO, DayTotalDTO,
    SubmitWeekResponseDTO, DashboardResponseDTO,
)
from timesheets.domain.models.base import (
    AuthorizationError, BusinessRuleViolation, EntityNotFoundError, ValidationError,
)
from timesheets.domain.models.profile import Actor, Profile
from timesheets.domain.models.time_entry import TimeEntry, TimeEntryStatus
from timesheets.domain.models.value_objects import DateRange, DatePreset, WeekStart
from timesheets.domain.events.timesheet_events import WeekSubmitted
from timesheets.domain.repositories.time_entry_repository import TimeEntryRepository
from timesheets.domain.repositories.profile_repository import ProfileRepository
from timesheets.domain.repositories.project_repository import ProjectRepository
from timesheets.domain.services.hours_service import sum_hours
from timesheets.domain.services.membership_service import MembershipService


def project_names_for(project_repository: ProjectRepository, org_id: str, entries: Iterable[TimeEntry]) -> Dict[str, str]:
    projects = project_repository.get_many(org_id, {e.project_id for e in entries if e.project_id})
    return {p.id: p.name for p in projects}


def profile_names_for(profile_repository: ProfileRepository, org_id: str, user_ids: Iterable[str]) -> Dict[str, str]:
    return {p.id: p.display_name for p in profile_repository.get_many(org_id, user_ids)}


def week_status(entries: List[TimeEntry]) -> str:
    """Single status of a week, 'mixed' when entries disagree."""
    statuses = {TimeEntryStatus(e.status).value for e in entries}
    if not statuses:
        return "empty"
    if len(statuses) == 1:
        return statuses.pop()
    return "mixed"


def build_week_view(
    user_id: str,
    week: DateRange,
    entries: List[TimeEntry],
    project_names: Dict[str, str]
) -> WeekViewResponseDTO:
    """Week grid with per-day and week totals computed from the entries."""
    by_day: Dict[date, List[Decimal]] = {day: [] for day in week.days}
    for entry in entries:
        by_day.setdefault(entry.entry_date, []).append(entry.hours_worked)

    return WeekViewResponseDTO(
        user_id=user_id,
        start=week.start,
        end=week.end,
        entries=[
            TimeEntryResponseDTO.from_domain(e, project_name=project_names.get(e.project_id))
            for e in entries
        ],
        day_totals=[DayTotalDTO(entry_date=day, hours=sum_hours(by_day[day])) for day in sorted(by_day)],
        week_total=sum_hours(e.hours_worked for e in entries),
        status=week_status(entries),
        is_locked=bool(entries) and not any(e.is_editable for e in entries),
    )


def _is_blank(line: TimeEntryLineDTO) -> bool:
    return not (line.project_id or line.time_in or line.time_out or line.notes)


class _WeekOwnerMixin:
    """Resolves whose week a request acts on."""

    profile_repository: ProfileRepository

    def _resolve_owner(self, actor: Actor, user_id: Optional[str]) -> Profile:
        owner_id = user_id or actor.id
        owner = self.profile_repository.get_by_id(actor.org_id, owner_id)
        if owner is None:
            raise EntityNotFoundError("Profile", owner_id)
        if owner.id != actor.id and not actor.is_admin:
            raise AuthorizationError("You can only edit your own timesheet")
        if not owner.is_active:
            raise BusinessRuleViolation("Inactive profiles cannot log time")
        return owner


class SaveWeekUseCase(_WeekOwnerMixin, CommandUseCase[SaveWeekRequestDTO, WeekViewResponseDTO]):
    """
    Create, update and delete the lines of a week in one transaction.
    Optionally submits the week afterwards.
    """

    def __init__(
        self,
        session: Session,
        time_entry_repository: TimeEntryRepository,
        profile_repository: ProfileRepository,
        project_repository: ProjectRepository,
    ):
        super().__init__(session)
        self.time_entry_repository = time_entry_repository
        self.profile_repository = profile_repository
        self.project_repository = project_repository
        self.membership_service = MembershipService(project_repository)

    async def _execute_command_logic(self, actor: Actor, request: SaveWeekRequestDTO) -> WeekViewResponseDTO:
        owner = self._resolve_owner(actor, request.user_id)
        week = request.week()

        existing = {e.id: e for e in self.time_entry_repository.find_for_user(actor.org_id, owner.id, week)}

        kept_lines = [line for line in request.lines if not line.delete]
        self.membership_service.ensure_can_log(owner.to_actor(), [line.project_id for line in kept_lines])

        for line in request.lines:
            if line.id:
                entry = existing.get(line.id)
                if entry is None:
                    raise EntityNotFoundError("TimeEntry", line.id)
                self.policy.require(self.policy.can_edit_entry(actor, entry))

                if line.delete:
                    entry.ensure_editable()
                    self.time_entry_repository.delete(actor.org_id, entry.id)
                    continue

                entry.update(
                    project_id=line.project_id,
                    entry_date=line.entry_date,
                    time_in=line.time_in,
                    time_out=line.time_out,
                    lunch_hours=line.lunch_hours,
                    mileage=line.mileage,
                    notes=line.notes,
                )
                entry.fill_rate_snapshot(owner.hourly_rate)
                self.time_entry_repository.save(entry)

            elif not line.delete and not _is_blank(line):
                entry = TimeEntry.create(
                    org_id=actor.org_id,
                    user_id=owner.id,
                    entry_date=line.entry_date,
                    owner_rate=owner.hourly_rate,
                    project_id=line.project_id,
                    time_in=line.time_in,
                    time_out=line.time_out,
                    lunch_hours=line.lunch_hours,
                    mileage=line.mileage,
                    notes=line.notes,
                )
                self.time_entry_repository.save(entry)

        if request.submit:
            submitted = submit_week(self.time_entry_repository, actor.org_id, owner.id, week)
            if submitted:
                self.record_event(WeekSubmitted(
                    org_id=actor.org_id, user_id=owner.id,
                    week_start=week.start, week_end=week.end, affected=submitted,
                ))

        entries = self.time_entry_repository.find_for_user(actor.org_id, owner.id, week)
        return build_week_view(owner.id, week, entries, project_names_for(self.project_repository, actor.org_id, entries))


def submit_week(repository: TimeEntryRepository, org_id: str, user_id: str, week: DateRange) -> int:
    """
    Move the week's draft/rejected entries to submitted.
    Every one of them needs a project, otherwise nothing is submitted.
    """
    pending = [
        e for e in repository.find_for_user(org_id, user_id, week)
        if e.is_editable
    ]
    missing_project = [e for e in pending if not e.project_id]
    if missing_project:
        day = min(e.entry_date for e in missing_project)
        raise ValidationError(f"Entry on {day.isoformat()} needs a project before submitting", "project_id")

    return repository.submit_week(org_id, user_id, week)


class SubmitWeekUseCase(CommandUseCase[SubmitWeekRequestDTO, SubmitWeekResponseDTO]):
    """Submit the actor's own week."""

    def __init__(
        self,
        session: Session,
        time_entry_repository: TimeEntryRepository,
        project_repository: ProjectRepository,
    ):
        super().__init__(session)
        self.time_entry_repository = time_entry_repository
        self.project_repository = project_repository

    async def _execute_command_logic(self, actor: Actor, request: SubmitWeekRequestDTO) -> SubmitWeekResponseDTO:
        if not actor.is_active:
            raise BusinessRuleViolation("Inactive profiles cannot submit time")

        week = request.week()
        submitted = submit_week(self.time_entry_repository, actor.org_id, actor.id, week)
        if submitted:
            self.record_event(WeekSubmitted(
                org_id=actor.org_id, user_id=actor.id,
                week_start=week.start, week_end=week.end, affected=submitted,
            ))

        entries = self.time_entry_repository.find_for_user(actor.org_id, actor.id, week)
        return SubmitWeekResponseDTO(
            start=week.start,
            end=week.end,
            submitted=submitted,
            week=build_week_view(actor.id, week, entries, project_names_for(self.project_repository, actor.org_id, entries)),
        )


@dataclass
class WeekQuery:
    day: date
    week_start: WeekStart = WeekStart.SUNDAY
    user_id: Optional[str] = None


class GetWeekUseCase(QueryUseCase[WeekQuery, WeekViewResponseDTO]):
    """A user's week with live totals. Defaults to the actor's own week."""

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

    async def _execute_business_logic(self, actor: Actor, request: WeekQuery) -> WeekViewResponseDTO:
        week = DateRange.week_of(request.day, request.week_start)
        user_id = request.user_id or actor.id

        if user_id != actor.id:
            owner = self.profile_repository.get_by_id(actor.org_id, user_id)
            if owner is None or not self.policy.can_view_profile(actor, owner):
                raise AuthorizationError("You can't view this timesheet")

        entries = self.time_entry_repository.find_for_user(actor.org_id, user_id, week)
        return build_week_view(user_id, week, entries, project_names_for(self.project_repository, actor.org_id, entries))


class ListTimeEntriesUseCase(QueryUseCase[ListTimeEntriesRequestDTO, TimeEntryListResponseDTO]):
    """Entries visible to the actor."""

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

    async def _execute_business_logic(self, actor: Actor, request: ListTimeEntriesRequestDTO) -> TimeEntryListResponseDTO:
        date_range = request.to_date_range()
        entries = list_visible_entries(
            self.time_entry_repository,
            self.policy.visible_scope(actor),
            date_range,
            request.status,
            user_id=request.user_id,
            project_id=request.project_id,
            limit=request.limit,
        )

        project_names = project_names_for(self.project_repository, actor.org_id, entries)
        user_names = profile_names_for(self.profile_repository, actor.org_id, {e.user_id for e in entries})

        return TimeEntryListResponseDTO(
            entries=[
                TimeEntryResponseDTO.from_domain(
                    e,
                    project_name=project_names.get(e.project_id),
                    user_name=user_names.get(e.user_id),
                )
                for e in entries
            ],
            total=len(entries),
            total_hours=sum_hours(e.hours_worked for e in entries),
            start=date_range.start if date_range else None,
            end=date_range.end if date_range else None,
        )


def list_visible_entries(
    repository: TimeEntryRepository,
    scope,
    date_range: Optional[DateRange] = None,
    statuses=None,
    user_id: Optional[str] = None,
    project_id: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[TimeEntry]:
    """The scoped query: org always, then the role's row filter, then the caller's filters."""
    return repository.find_visible(
        scope,
        date_range=date_range,
        statuses=statuses,
        user_id=user_id,
        project_id=project_id,
        limit=limit,
    )


class DeleteTimeEntryUseCase(CommandUseCase[str, bool]):
    """Admin deletion of an entry that is not approved."""

    def __init__(self, session: Session, time_entry_repository: TimeEntryRepository):
        super().__init__(session)
        self.time_entry_repository = time_entry_repository

    async def _execute_command_logic(self, actor: Actor, entry_id: str) -> bool:
        entry = self.time_entry_repository.get_by_id(actor.org_id, entry_id)
        if entry is None:
            raise EntityNotFoundError("TimeEntry", entry_id)

        self.policy.require(self.policy.can_delete_entry(actor, entry), "Only admins can delete time entries")
        entry.ensure_deletable()
        return self.time_entry_repository.delete(actor.org_id, entry_id)


class DashboardUseCase(QueryUseCase[date, DashboardResponseDTO]):
    """Own recent entries and totals; team totals for approvers."""

    RECENT_LIMIT = 10

    def __init__(
        self,
        time_entry_repository: TimeEntryRepository,
        project_repository: ProjectRepository,
        week_start: WeekStart = WeekStart.SUNDAY,
    ):
        super().__init__()
        self.time_entry_repository = time_entry_repository
        self.project_repository = project_repository
        self.week_start = week_start

    async def _execute_business_logic(self, actor: Actor, today: Optional[date]) -> DashboardResponseDTO:
        today = today or date.today()
        week = DateRange.from_preset(DatePreset.CURRENT_WEEK, self.week_start, today)
        month = DateRange.from_preset(DatePreset.CURRENT_MONTH, self.week_start, today)
        scope = self.policy.visible_scope(actor)
        repo = self.time_entry_repository

        recent = repo.find_visible(scope, user_id=actor.id, limit=self.RECENT_LIMIT)
        own_week = repo.find_for_user(actor.org_id, actor.id, week)
        own_month = repo.find_for_user(actor.org_id, actor.id, month)
        project_names = project_names_for(self.project_repository, actor.org_id, recent)

        result = DashboardResponseDTO(
            recent_entries=[TimeEntryResponseDTO.from_domain(e, project_name=project_names.get(e.project_id)) for e in recent],
            week_start=week.start,
            week_end=week.end,
            week_hours=sum_hours(e.hours_worked for e in own_week),
            month_start=month.start,
            month_end=month.end,
            month_hours=sum_hours(e.hours_worked for e in own_month),
            status_counts=repo.count_by_status(scope.own_only(), month),
        )

        if self.policy.can_view_team(actor):
            team_week = repo.find_visible(scope, date_range=week)
            team_month = repo.find_visible(scope, date_range=month)
            pending = repo.find_visible(scope, statuses=[TimeEntryStatus.SUBMITTED])
            result.team_week_hours = sum_hours(e.hours_worked for e in team_week)
            result.team_month_hours = sum_hours(e.hours_worked for e in team_month)
            result.pending_approvals = len([e for e in pending if e.user_id != actor.id])

        return result

