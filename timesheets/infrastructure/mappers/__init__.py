"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .profile_mapper import ProfileMapper
from .project_mapper import ProjectMapper, ProjectMembershipMapper, OrganizationMapper
from .time_entry_mapper import TimeEntryMapper

__all__ = [
    "ProfileMapper",
    "ProjectMapper",
    "ProjectMembershipMapper",
    "OrganizationMapper",
    "TimeEntryMapper",
]
