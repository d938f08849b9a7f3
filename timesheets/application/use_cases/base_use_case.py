"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, TypeVar, Generic, List
from datetime import datetime

from sqlalchemy.orm import Session

from timesheets.domain.models.base import DomainException, ValidationError
from timesheets.domain.models.profile import Actor
from timesheets.domain.events.base import DomainEvent, publish_event
from timesheets.domain.services.authorization_policy import AuthorizationPolicy, get_authorization_policy


logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


class BaseUseCase(ABC, Generic[T, R]):
    """
    Base class for all use cases.
    Every use case runs for an explicit acting user.
    """

    def __init__(self, policy: Optional[AuthorizationPolicy] = None):
        self.policy = policy or get_authorization_policy()
        self.execution_start: Optional[datetime] = None
        self.execution_end: Optional[datetime] = None

    async def execute(self, actor: Actor, request: T = None) -> R:
        """
        Execute the use case. Domain exceptions propagate to the caller.
        """
        self.execution_start = datetime.utcnow()
        name = self.__class__.__name__

        if actor is None:
            raise ValidationError("User authentication required")

        try:
            await self._validate_request(request)
            result = await self._execute_business_logic(actor, request)
        except DomainException as exc:
            logger.info(f"{name} rejected for {actor.id}: [{exc.code}] {exc.message}")
            raise
        except Exception:
            logger.exception(f"{name} failed for {actor.id}")
            raise
        finally:
            self.execution_end = datetime.utcnow()

        elapsed = (self.execution_end - self.execution_start).total_seconds()
        logger.debug(f"{name} completed for {actor.id} in {elapsed:.3f}s")
        return result

    async def _validate_request(self, request: T) -> None:
        """
        Validate the request. Override in subclasses if needed.
        """
        if request is not None and hasattr(request, 'validate_request'):
            request.validate_request()

    @abstractmethod
    async def _execute_business_logic(self, actor: Actor, request: T) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
        pass


class QueryUseCase(BaseUseCase[T, R]):
    """
    Base class for query use cases (read operations).
    """
    pass


class CommandUseCase(BaseUseCase[T, R]):
    """
    Base class for command use cases (write operations).
    One transaction per execution: commit at the end, roll back on any error.
    Domain events are published only after the commit.
    """

    def __init__(self, session: Session, policy: Optional[AuthorizationPolicy] = None):
        super().__init__(policy)
        self.session = session
        self.events: List[DomainEvent] = []

    async def _execute_business_logic(self, actor: Actor, request: T) -> R:
        """
        Execute command with transaction handling.
        """
        try:
            result = await self._execute_command_logic(actor, request)
            self.session.commit()
        except Exception:
            self.session.rollback()
            self.events.clear()
            raise

        await self._publish_events()
        return result

    @abstractmethod
    async def _execute_command_logic(self, actor: Actor, request: T) -> R:
        """Execute the command logic. Must be implemented by subclasses."""
        pass

    def record_event(self, event: DomainEvent) -> None:
        self.events.append(event)

    def collect_events(self, entity: Any) -> None:
        """Move events raised by an entity into this command."""
        self.events.extend(entity.pull_events())

    async def _publish_events(self) -> None:
        """Publish collected domain events."""
        events, self.events = self.events, []
        for event in events:
            await publish_event(event)
