"""
Approval DTOs for the application layer.
"""

from typing import Optional, List
from datetime import date
from decimal import Decimal
from pydantic import Field

from timesheets.domain.models.value_objects import DateRange, WeekStart

from .base_dto import RequestDTO, ResponseDTO
from .time_entry_dto import TimeEntryResponseDTO


class WeekGroupRequestDTO(RequestDTO):
    """The (user, week) group a batch acts on."""

    user_id: str = Field(min_length=1, description="Owner of the entries")
    week_start: date = Field(description="First day of the group (inclusive)")
    week_end: date = Field(description="Last day of the group (inclusive)")

    def date_range(self) -> DateRange:
        return DateRange(self.week_start, self.week_end)

    def validate_request(self) -> None:
        self.date_range()


class ResolveWeekRequestDTO(WeekGroupRequestDTO):
    """Approve the group except the listed entries, which are rejected."""

    rejected_entry_ids: List[str] = Field(default_factory=list, description="Entries to send back")


class ListApprovalsRequestDTO(RequestDTO):
    """Filters for the approval queue."""

    start: Optional[date] = None
    end: Optional[date] = None
    user_id: Optional[str] = None
    week_start_day: WeekStart = Field(default=WeekStart.SUNDAY)


class BatchResultDTO(ResponseDTO):
    """Rows changed by a batch."""

    user_id: str
    week_start: date
    week_end: date
    approved: int = 0
    rejected: int = 0
    affected: int = 0


class ApprovalGroupDTO(ResponseDTO):
    """Submitted entries of one user for one week."""

    user_id: str
    user_name: str
    week_start: date
    week_end: date
    entry_count: int
    total_hours: Decimal
    entries: List[TimeEntryResponseDTO]


class ApprovalQueueResponseDTO(ResponseDTO):
    """Pending groups in the actor's scope."""

    groups: List[ApprovalGroupDTO]
    total_groups: int
