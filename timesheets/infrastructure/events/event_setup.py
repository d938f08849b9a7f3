"""
Event system setup and configuration.
Registers all event handlers with the event dispatcher.
"""

import logging
from timesheets.domain.events.base import get_event_dispatcher
from .audit_handlers import AuditLogHandler, EventLogHandler

logger = logging.getLogger(__name__)


def setup_event_handlers():
    """Set up and register all event handlers."""

    dispatcher = get_event_dispatcher()
    if "global" in dispatcher.get_registered_handlers():
        logger.debug("Event handlers already registered")
        return

    # Audited events are picked by AuditLogHandler.can_handle
    dispatcher.register_global_handler(AuditLogHandler())
    dispatcher.register_global_handler(EventLogHandler())

    logger.info("Event handlers registered successfully")

    registered = dispatcher.get_registered_handlers()
    for event_type, handlers in registered.items():
        logger.info(f"Event {event_type}: {', '.join(handlers)} handlers")


def initialize_event_system():
    """Initialize the complete event system."""
    try:
        setup_event_handlers()
        logger.info("Event system initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize event system: {str(e)}")
        raise
