"""
Infrastructure repositories module.
Contains SQLAlchemy implementations of domain repositories.
"""

from .organization_repository import SQLAlchemyOrganizationRepository
from .profile_repository import SQLAlchemyProfileRepository
from .project_repository import SQLAlchemyProjectRepository
from .time_entry_repository import SQLAlchemyTimeEntryRepository

__all__ = [
    "SQLAlchemyOrganizationRepository",
    "SQLAlchemyProfileRepository",
    "SQLAlchemyProjectRepository",
    "SQLAlchemyTimeEntryRepository",
]
