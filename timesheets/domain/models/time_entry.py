"""
TimeEntry domain model.
One worked shift of a user on a project, moving through the approval workflow.

    draft ──submit──> submitted ──approve──> approved
      ^                   │
      │                 reject
      └──save── rejected <┘

Approved entries never change again.
"""

from dataclasses import dataclass
from datetime import datetime, date, time
from decimal import Decimal
from enum import Enum
from typing import Optional, List

from timesheets.domain.models.base import (
    BaseEntity,
    ValidationError,
    ConflictError,
    EntryLockedError,
)
from timesheets.domain.models.value_objects import to_decimal, quantize_2
from timesheets.domain.services.hours_service import parse_time, compute_hours, entry_warnings


class TimeEntryStatus(str, Enum):
    """Time entry status."""
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


EDITABLE_STATUSES = (TimeEntryStatus.DRAFT, TimeEntryStatus.REJECTED)
LOCKED_STATUSES = (TimeEntryStatus.SUBMITTED, TimeEntryStatus.APPROVED)


def _non_negative(value, field_name: str) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount < 0:
        raise ValidationError(f"{field_name.replace('_', ' ').capitalize()} cannot be negative", field_name)
    return quantize_2(amount)


@dataclass(eq=False)
class TimeEntry(BaseEntity):
    """TimeEntry entity."""

    org_id: str = ""
    user_id: str = ""
    project_id: Optional[str] = None
    entry_date: Optional[date] = None
    time_in: Optional[time] = None
    time_out: Optional[time] = None
    lunch_hours: Decimal = Decimal("0")
    mileage: Decimal = Decimal("0")
    notes: Optional[str] = None
    status: TimeEntryStatus = TimeEntryStatus.DRAFT
    hourly_rate_snapshot: Optional[Decimal] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None

    def __post_init__(self):
        super().__post_init__()
        self.status = TimeEntryStatus(self.status)
        self.time_in = parse_time(self.time_in, "time_in")
        self.time_out = parse_time(self.time_out, "time_out")
        self.lunch_hours = _non_negative(self.lunch_hours, "lunch_hours")
        self.mileage = _non_negative(self.mileage, "mileage")
        if self.hourly_rate_snapshot is not None:
            self.hourly_rate_snapshot = quantize_2(to_decimal(self.hourly_rate_snapshot))
        self.validate()

    def validate(self) -> None:
        """Validate time entry state."""
        if not self.org_id:
            raise ValidationError("Time entry must belong to an organization", "org_id")
        if not self.user_id:
            raise ValidationError("Time entry must belong to a user", "user_id")
        if self.entry_date is None:
            raise ValidationError("Entry date is required", "entry_date")
        if self.notes and len(self.notes) > 2000:
            raise ValidationError("Notes too long (max 2000 characters)", "notes")

    @classmethod
    def create(cls, org_id: str, user_id: str, entry_date: date, owner_rate: Optional[Decimal] = None, **fields) -> "TimeEntry":
        """New draft entry; the owner's current rate becomes the snapshot."""
        return cls(
            org_id=org_id,
            user_id=user_id,
            entry_date=entry_date,
            hourly_rate_snapshot=owner_rate,
            status=TimeEntryStatus.DRAFT,
            **fields
        )

    # Derived values

    @property
    def hours_worked(self) -> Decimal:
        return compute_hours(self.time_in, self.time_out, self.lunch_hours)

    @property
    def pay(self) -> Decimal:
        rate = self.hourly_rate_snapshot or Decimal("0")
        return quantize_2(self.hours_worked * rate)

    @property
    def warnings(self) -> List[str]:
        return entry_warnings(self.time_in, self.time_out)

    @property
    def is_editable(self) -> bool:
        return self.status in EDITABLE_STATUSES

    @property
    def is_approved(self) -> bool:
        return self.status == TimeEntryStatus.APPROVED

    # Transitions

    def ensure_editable(self) -> None:
        if self.status in LOCKED_STATUSES:
            raise EntryLockedError(self.id, self.status.value)

    def update(
        self,
        project_id: Optional[str] = None,
        time_in=None,
        time_out=None,
        lunch_hours=None,
        mileage=None,
        notes: Optional[str] = None,
        entry_date: Optional[date] = None,
    ) -> None:
        """
        Replace the editable fields of the line; the day moves only when given.
        A rejected entry goes back to draft. The rate snapshot is left alone.
        """
        self.ensure_editable()

        if entry_date is not None:
            self.entry_date = entry_date
        self.project_id = project_id
        self.time_in = parse_time(time_in, "time_in")
        self.time_out = parse_time(time_out, "time_out")
        self.lunch_hours = _non_negative(lunch_hours, "lunch_hours")
        self.mileage = _non_negative(mileage, "mileage")
        self.notes = notes
        self.validate()

        if self.status == TimeEntryStatus.REJECTED:
            self.status = TimeEntryStatus.DRAFT
        self.mark_as_updated()

    def fill_rate_snapshot(self, owner_rate: Optional[Decimal]) -> None:
        """Set the snapshot if it is still empty. A written snapshot is never replaced."""
        if self.hourly_rate_snapshot is None and owner_rate is not None:
            self.hourly_rate_snapshot = quantize_2(to_decimal(owner_rate))

    def submit(self) -> None:
        """draft/rejected -> submitted. A project is required."""
        self.ensure_editable()
        if not self.project_id:
            raise ValidationError("A project is required before submitting", "project_id")
        self.status = TimeEntryStatus.SUBMITTED
        self.mark_as_updated()

    def approve(self, approver_id: str, owner_rate: Optional[Decimal] = None) -> None:
        """submitted -> approved. Fills a missing snapshot with the owner's current rate."""
        if self.status != TimeEntryStatus.SUBMITTED:
            raise ConflictError(f"Only submitted entries can be approved (entry is {self.status.value})")
        self.fill_rate_snapshot(owner_rate)
        self.status = TimeEntryStatus.APPROVED
        self.approved_by = approver_id
        self.approved_at = datetime.utcnow()
        self.mark_as_updated()

    def reject(self) -> None:
        """submitted -> rejected."""
        if self.status != TimeEntryStatus.SUBMITTED:
            raise ConflictError(f"Only submitted entries can be rejected (entry is {self.status.value})")
        self.status = TimeEntryStatus.REJECTED
        self.approved_by = None
        self.approved_at = None
        self.mark_as_updated()

    def ensure_deletable(self) -> None:
        if self.is_approved:
            raise EntryLockedError(self.id, self.status.value)
