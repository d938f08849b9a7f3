"""
Domain models for the timesheet and payroll engine.
This module exports all domain entities and value objects.
"""

# Base classes
from .base import (
    BaseEntity,
    ValueObject,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    AuthorizationError,
    ConflictError,
    EntryLockedError,
    EntityNotFoundError,
    TransientStoreError,
)

# Value Objects
from .value_objects import DateRange, DatePreset, WeekStart, week_bounds

# Domain entities
from .organization import Organization
from .profile import Profile, Role, Actor, is_profile_complete
from .project import Project, ProjectMembership
from .time_entry import TimeEntry, TimeEntryStatus

__all__ = [
    "BaseEntity",
    "ValueObject",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "AuthorizationError",
    "ConflictError",
    "EntryLockedError",
    "EntityNotFoundError",
    "TransientStoreError",
    "DateRange",
    "DatePreset",
    "WeekStart",
    "week_bounds",
    "Organization",
    "Profile",
    "Role",
    "Actor",
    "is_profile_complete",
    "Project",
    "ProjectMembership",
    "TimeEntry",
    "TimeEntryStatus",
]
