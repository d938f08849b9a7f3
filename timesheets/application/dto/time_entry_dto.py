"""
Time Entry DTOs for the application layer.
Data Transfer Objects for weekly timesheets.
"""

from typing import Optional, List
from datetime import datetime, date
from decimal import Decimal
from pydantic import Field, validator

from timesheets.domain.models.base import ValidationError
from timesheets.domain.models.time_entry import TimeEntry, TimeEntryStatus
from timesheets.domain.models.value_objects import DateRange, WeekStart

from .base_dto import RequestDTO, ResponseDTO, DateRangeRequestDTO, NotesMixin, strip_or_none


MAX_LINES_PER_WEEK = 100


# Request DTOs
class TimeEntryLineDTO(RequestDTO, NotesMixin):
    """One line of the weekly timesheet grid."""

    id: Optional[str] = Field(default=None, description="Existing entry id; omit to create")
    entry_date: date = Field(description="Day worked")
    project_id: Optional[str] = Field(default=None, description="Project worked on")
    time_in: Optional[str] = Field(default=None, description="HH:MM")
    time_out: Optional[str] = Field(default=None, description="HH:MM")
    lunch_hours: Decimal = Field(default=Decimal("0"), ge=0, description="Unpaid break in hours")
    mileage: Decimal = Field(default=Decimal("0"), ge=0, description="Mileage")
    delete: bool = Field(default=False, description="Remove this draft line")

    @validator("project_id", "time_in", "time_out")
    def blank_to_none(cls, v):
        return strip_or_none(v)


class SaveWeekRequestDTO(RequestDTO):
    """Save the lines of one week, optionally submitting them."""

    week_start: date = Field(description="Any day of the target week")
    week_start_day: WeekStart = Field(default=WeekStart.SUNDAY, description="Week convention")
    user_id: Optional[str] = Field(default=None, description="Owner, for admins writing on someone's behalf")
    lines: List[TimeEntryLineDTO] = Field(default_factory=list, max_length=MAX_LINES_PER_WEEK)
    submit: bool = Field(default=False, description="Submit the week after saving")

    def week(self) -> DateRange:
        return DateRange.week_of(self.week_start, self.week_start_day)

    def validate_request(self) -> None:
        week = self.week()
        for line in self.lines:
            if not week.contains(line.entry_date):
                raise ValidationError(
                    f"Entry date {line.entry_date.isoformat()} is outside the week "
                    f"{week.start.isoformat()} - {week.end.isoformat()}",
                    "entry_date"
                )


class SubmitWeekRequestDTO(RequestDTO):
    """Submit every draft or rejected entry of the week."""

    week_start: date = Field(description="Any day of the target week")
    week_start_day: WeekStart = Field(default=WeekStart.SUNDAY, description="Week convention")

    def week(self) -> DateRange:
        return DateRange.week_of(self.week_start, self.week_start_day)


class ListTimeEntriesRequestDTO(DateRangeRequestDTO):
    """Filters for the scoped entry list."""

    status: Optional[List[TimeEntryStatus]] = Field(default=None, description="Statuses to include")
    user_id: Optional[str] = Field(default=None, description="Only this user's entries")
    project_id: Optional[str] = Field(default=None, description="Only this project's entries")
    limit: Optional[int] = Field(default=500, ge=1, le=5000)


# Response DTOs
class TimeEntryResponseDTO(ResponseDTO):
    """A time entry with its computed hours."""

    id: str
    org_id: str
    user_id: str
    project_id: Optional[str] = None
    project_name: Optional[str] = None
    user_name: Optional[str] = None
    entry_date: date
    time_in: Optional[str] = None
    time_out: Optional[str] = None
    lunch_hours: Decimal
    mileage: Decimal
    notes: Optional[str] = None
    status: TimeEntryStatus
    hours_worked: Decimal
    hourly_rate_snapshot: Optional[Decimal] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    is_editable: bool
    warnings: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(
        cls,
        entry: TimeEntry,
        project_name: Optional[str] = None,
        user_name: Optional[str] = None,
        include_rate: bool = True
    ) -> "TimeEntryResponseDTO":
        return cls(
            id=entry.id,
            org_id=entry.org_id,
            user_id=entry.user_id,
            project_id=entry.project_id,
            project_name=project_name,
            user_name=user_name,
            entry_date=entry.entry_date,
            time_in=entry.time_in.strftime("%H:%M") if entry.time_in else None,
            time_out=entry.time_out.strftime("%H:%M") if entry.time_out else None,
            lunch_hours=entry.lunch_hours,
            mileage=entry.mileage,
            notes=entry.notes,
            status=entry.status,
            hours_worked=entry.hours_worked,
            hourly_rate_snapshot=entry.hourly_rate_snapshot if include_rate else None,
            approved_by=entry.approved_by,
            approved_at=entry.approved_at,
            is_editable=entry.is_editable,
            warnings=entry.warnings,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )


class TimeEntryListResponseDTO(ResponseDTO):
    """Scoped list of entries."""

    entries: List[TimeEntryResponseDTO]
    total: int
    total_hours: Decimal
    start: Optional[date] = None
    end: Optional[date] = None


class DayTotalDTO(ResponseDTO):
    """Hours of one day of the week."""

    entry_date: date
    hours: Decimal


class WeekViewResponseDTO(ResponseDTO):
    """A user's week with live totals."""

    user_id: str
    start: date
    end: date
    entries: List[TimeEntryResponseDTO]
    day_totals: List[DayTotalDTO]
    week_total: Decimal
    status: str = Field(description="empty, draft, submitted, approved, rejected or mixed")
    is_locked: bool = Field(description="True when no entry of the week can be edited")


class SubmitWeekResponseDTO(ResponseDTO):
    """Outcome of a week submission."""

    start: date
    end: date
    submitted: int
    week: Optional[WeekViewResponseDTO] = None


class DashboardResponseDTO(ResponseDTO):
    """Home page numbers."""

    recent_entries: List[TimeEntryResponseDTO]
    week_start: date
    week_end: date
    week_hours: Decimal
    month_start: date
    month_end: date
    month_hours: Decimal
    status_counts: dict
    pending_approvals: Optional[int] = None
    team_week_hours: Optional[Decimal] = None
    team_month_hours: Optional[Decimal] = None
