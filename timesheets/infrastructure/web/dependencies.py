"""
Shared FastAPI dependencies for the routers.
One SQLAlchemy session per request; repositories are built on top of it.
"""

from typing import Annotated
from fastapi import Depends
from sqlalchemy.orm import Session

from timesheets.config import get_settings
from timesheets.domain.models.value_objects import WeekStart
from timesheets.infrastructure.db.database import get_db
from timesheets.infrastructure.repositories.time_entry_repository import SQLAlchemyTimeEntryRepository
from timesheets.infrastructure.repositories.profile_repository import SQLAlchemyProfileRepository
from timesheets.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository


DbSession = Annotated[Session, Depends(get_db)]


def get_time_entry_repository(session: DbSession) -> SQLAlchemyTimeEntryRepository:
    """Dependency to get time entry repository."""
    return SQLAlchemyTimeEntryRepository(session)


def get_profile_repository(session: DbSession) -> SQLAlchemyProfileRepository:
    """Dependency to get profile repository."""
    return SQLAlchemyProfileRepository(session)


def get_project_repository(session: DbSession) -> SQLAlchemyProjectRepository:
    """Dependency to get project repository."""
    return SQLAlchemyProjectRepository(session)


def get_default_week_start() -> WeekStart:
    return WeekStart(get_settings().default_week_start)


TimeEntryRepo = Annotated[SQLAlchemyTimeEntryRepository, Depends(get_time_entry_repository)]
ProfileRepo = Annotated[SQLAlchemyProfileRepository, Depends(get_profile_repository)]
ProjectRepo = Annotated[SQLAlchemyProjectRepository, Depends(get_project_repository)]
