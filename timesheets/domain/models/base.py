"""
Base entity and value objects for the domain layer.
This module contains the foundational classes for all domain entities
and the exception taxonomy shared by every layer.
"""

from datetime import datetime
from typing import Optional, Any, List
from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Provides common attributes and behavior for all entities.
    """

    id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    # Domain events raised by the entity, collected by the use case
    _events: List[Any] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        """Initialize entity after creation."""
        if self.created_at is None:
            self.created_at = datetime.utcnow()
        if self.updated_at is None:
            self.updated_at = datetime.utcnow()

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def mark_as_updated(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.utcnow()

    def add_event(self, event: Any) -> None:
        """Add a domain event."""
        self._events.append(event)

    def pull_events(self) -> List[Any]:
        """Get and clear all domain events."""
        events = self._events.copy()
        self._events.clear()
        return events

    @property
    def is_new(self) -> bool:
        """Check if entity is new (not persisted)."""
        return self.id is None

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when input or entity validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class AuthorizationError(DomainException):
    """Exception raised when the acting user lacks scope for a target."""

    def __init__(self, message: str = "You don't have permission to perform this action"):
        super().__init__(message, "AUTHORIZATION_ERROR")


class ConflictError(DomainException):
    """Exception raised when the target is already locked or already handled."""

    def __init__(self, message: str):
        super().__init__(message, "CONFLICT")


class EntryLockedError(ConflictError):
    """Exception raised when a submitted or approved time entry is mutated."""

    def __init__(self, entry_id: Optional[str], status: str):
        super().__init__(f"Time entry is {status} and can no longer be edited")
        self.entry_id = entry_id
        self.status = status


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class TransientStoreError(DomainException):
    """Exception raised when the store is unreachable; the user may retry."""

    def __init__(self, message: str = "The data store is temporarily unavailable, please retry"):
        super().__init__(message, "TRANSIENT_ERROR")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.
    Value objects are immutable and are compared by their values.
    """

    def __post_init__(self):
        """Validate value object after creation."""
        self.validate()

    @abstractmethod
    def validate(self) -> None:
        """Validate the value object's state."""
        pass
