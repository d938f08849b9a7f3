"""
Infrastructure event handlers.
Handles domain events and writes the audit trail.
"""

from .audit_handlers import AuditLogHandler, EventLogHandler
from .event_setup import setup_event_handlers, initialize_event_system

__all__ = [
    "AuditLogHandler",
    "EventLogHandler",
    "setup_event_handlers",
    "initialize_event_system",
]
