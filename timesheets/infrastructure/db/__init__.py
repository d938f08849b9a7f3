"""
Database infrastructure for the timesheets service.
"""

from .database import engine, SessionLocal, get_db, Base
from .models import (
    OrganizationModel,
    ProfileModel,
    ProjectModel,
    ProjectMemberModel,
    TimeEntryModel,
    create_all_tables,
    drop_all_tables,
)

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "Base",
    "OrganizationModel",
    "ProfileModel",
    "ProjectModel",
    "ProjectMemberModel",
    "TimeEntryModel",
    "create_all_tables",
    "drop_all_tables",
]
