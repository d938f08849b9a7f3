"""
Event handlers for the audit trail.
Writes timesheet and profile transitions to the ``timesheets.audit`` logger.
"""

import json
import logging

from timesheets.domain.events.base import EventHandler, DomainEvent
from timesheets.domain.events.timesheet_events import (
    WeekSubmitted,
    WeekApproved,
    WeekRejected,
    ProfileRateChanged,
    ProfileInvited,
)


logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("timesheets.audit")

AUDITED_EVENTS = (WeekSubmitted, WeekApproved, WeekRejected, ProfileRateChanged, ProfileInvited)


class AuditLogHandler(EventHandler):
    """One structured audit line per audited event."""

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, AUDITED_EVENTS)

    async def handle(self, event: DomainEvent) -> None:
        payload = event.to_dict()
        audit_logger.info(
            f"{event.event_type} {json.dumps(payload['data'], sort_keys=True, default=str)}",
            extra={"event_id": payload["event_id"], "event_type": event.event_type},
        )


class EventLogHandler(EventHandler):
    """Debug trace of every dispatched event."""

    async def handle(self, event: DomainEvent) -> None:
        logger.debug(f"Event handled: {event.event_type} (ID: {event.event_id})")
