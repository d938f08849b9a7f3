"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .organization_repository import OrganizationRepository
from .profile_repository import ProfileRepository
from .project_repository import ProjectRepository
from .time_entry_repository import TimeEntryRepository

__all__ = [
    "OrganizationRepository",
    "ProfileRepository",
    "ProjectRepository",
    "TimeEntryRepository",
]
