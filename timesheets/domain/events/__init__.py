"""
Domain events for the application.
Audit trail of the timesheet workflow.
"""

from .base import DomainEvent, EventHandler, EventDispatcher, get_event_dispatcher, publish_event
from .timesheet_events import (
    WeekSubmitted,
    WeekApproved,
    WeekRejected,
    ProfileRateChanged,
    ProfileInvited,
)

__all__ = [
    "DomainEvent",
    "EventHandler",
    "EventDispatcher",
    "get_event_dispatcher",
    "publish_event",
    "WeekSubmitted",
    "WeekApproved",
    "WeekRejected",
    "ProfileRateChanged",
    "ProfileInvited",
]
