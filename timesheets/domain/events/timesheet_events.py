"""
Domain events raised by the timesheet workflow.
They are written to the audit log by the event handlers.
"""

from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field
from datetime import date

from .base import DomainEvent


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class WeekSubmitted(DomainEvent):
    """A user submitted their entries of a week for approval."""

    org_id: str = ""
    user_id: str = ""
    week_start: Optional[date] = None
    week_end: Optional[date] = None
    affected: int = 0

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "org_id": self.org_id,
            "user_id": self.user_id,
            "week_start": _iso(self.week_start),
            "week_end": _iso(self.week_end),
            "affected": self.affected,
        }


@dataclass
class WeekApproved(DomainEvent):
    """An approver approved the submitted entries of a user's week."""

    org_id: str = ""
    user_id: str = ""
    approved_by: str = ""
    week_start: Optional[date] = None
    week_end: Optional[date] = None
    affected: int = 0

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "org_id": self.org_id,
            "user_id": self.user_id,
            "approved_by": self.approved_by,
            "week_start": _iso(self.week_start),
            "week_end": _iso(self.week_end),
            "affected": self.affected,
        }


@dataclass
class WeekRejected(DomainEvent):
    """An approver sent entries of a user's week back for correction."""

    org_id: str = ""
    user_id: str = ""
    rejected_by: str = ""
    week_start: Optional[date] = None
    week_end: Optional[date] = None
    entry_ids: List[str] = field(default_factory=list)
    affected: int = 0

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "org_id": self.org_id,
            "user_id": self.user_id,
            "rejected_by": self.rejected_by,
            "week_start": _iso(self.week_start),
            "week_end": _iso(self.week_end),
            "entry_ids": list(self.entry_ids),
            "affected": self.affected,
        }


@dataclass
class ProfileRateChanged(DomainEvent):
    """A profile's hourly rate changed. Existing entries keep their snapshot."""

    org_id: str = ""
    profile_id: str = ""
    changed_by: str = ""
    old_rate: Optional[str] = None
    new_rate: Optional[str] = None

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "org_id": self.org_id,
            "profile_id": self.profile_id,
            "changed_by": self.changed_by,
            "old_rate": self.old_rate,
            "new_rate": self.new_rate,
        }


@dataclass
class ProfileInvited(DomainEvent):
    """An admin invited a new member to the organization."""

    org_id: str = ""
    profile_id: str = ""
    email: str = ""
    role: str = ""
    invited_by: str = ""
    project_ids: List[str] = field(default_factory=list)

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "org_id": self.org_id,
            "profile_id": self.profile_id,
            "email": self.email,
            "role": self.role,
            "invited_by": self.invited_by,
            "project_ids": list(self.project_ids),
        }
