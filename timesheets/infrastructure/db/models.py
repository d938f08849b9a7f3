"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

import uuid

from sqlalchemy import (
    Column, String, DateTime, Text, Boolean, Time,
    Numeric, Date, ForeignKey, Index, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from timesheets.infrastructure.db.database import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


# Identity provider ids and our own ids are uuid strings
ID = String(36)


class OrganizationModel(Base):
    """Tenant table."""
    __tablename__ = "organizations"

    id = Column(ID, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ProfileModel(Base):
    """Members of an organization. The id is the identity provider's user id."""
    __tablename__ = "profiles"

    id = Column(ID, primary_key=True, default=generate_uuid)
    org_id = Column(ID, ForeignKey("organizations.id"), nullable=False)
    role = Column(String(20), nullable=False, default="contractor")
    full_name = Column(String(255))
    email = Column(String(255))
    hourly_rate = Column(Numeric(10, 2))
    is_active = Column(Boolean, nullable=False, default=True)
    manager_id = Column(ID, ForeignKey("profiles.id"))
    phone = Column(String(50))
    address = Column(Text)
    onboarding_completed_at = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    manager = relationship("ProfileModel", remote_side=[id])

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'manager', 'contractor')", name="ck_profiles_role"),
        CheckConstraint("hourly_rate IS NULL OR hourly_rate >= 0", name="ck_profiles_rate"),
        CheckConstraint("manager_id IS NULL OR manager_id <> id", name="ck_profiles_not_own_manager"),
        Index("idx_profiles_org", "org_id"),
        Index("idx_profiles_org_manager", "org_id", "manager_id"),
        Index("idx_profiles_org_email", "org_id", "email"),
    )


class ProjectModel(Base):
    """Projects time is logged against."""
    __tablename__ = "projects"

    id = Column(ID, primary_key=True, default=generate_uuid)
    org_id = Column(ID, ForeignKey("organizations.id"), nullable=False)
    name = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    week_start = Column(String(10), nullable=False, default="sunday")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    members = relationship("ProjectMemberModel", back_populates="project")

    __table_args__ = (
        CheckConstraint("week_start IN ('sunday', 'monday')", name="ck_projects_week_start"),
        Index("idx_projects_org_active", "org_id", "is_active"),
    )


class ProjectMemberModel(Base):
    """Contractor access to a project."""
    __tablename__ = "project_members"

    id = Column(ID, primary_key=True, default=generate_uuid)
    org_id = Column(ID, ForeignKey("organizations.id"), nullable=False)
    project_id = Column(ID, ForeignKey("projects.id"), nullable=False)
    profile_id = Column(ID, ForeignKey("profiles.id"), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    project = relationship("ProjectModel", back_populates="members")

    __table_args__ = (
        UniqueConstraint("project_id", "profile_id", name="uq_project_members_project_profile"),
        Index("idx_project_members_profile", "org_id", "profile_id", "is_active"),
    )


class TimeEntryModel(Base):
    """Worked shifts."""
    __tablename__ = "time_entries"

    id = Column(ID, primary_key=True, default=generate_uuid)
    org_id = Column(ID, ForeignKey("organizations.id"), nullable=False)
    user_id = Column(ID, ForeignKey("profiles.id"), nullable=False)
    project_id = Column(ID, ForeignKey("projects.id"))

    entry_date = Column(Date, nullable=False)
    time_in = Column(Time)
    time_out = Column(Time)
    lunch_hours = Column(Numeric(5, 2), nullable=False, default=0)
    mileage = Column(Numeric(10, 2), nullable=False, default=0)
    notes = Column(Text)

    status = Column(String(20), nullable=False, default="draft")
    hourly_rate_snapshot = Column(Numeric(10, 2))
    approved_by = Column(ID, ForeignKey("profiles.id"))
    approved_at = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'submitted', 'approved', 'rejected')",
            name="ck_time_entries_status"
        ),
        CheckConstraint("lunch_hours >= 0", name="ck_time_entries_lunch"),
        CheckConstraint("mileage >= 0", name="ck_time_entries_mileage"),
        Index("idx_time_entries_org_user_date", "org_id", "user_id", "entry_date"),
        Index("idx_time_entries_org_status_date", "org_id", "status", "entry_date"),
        Index("idx_time_entries_project", "project_id"),
    )


def create_all_tables(engine) -> None:
    """Create every table on ``engine``."""
    Base.metadata.create_all(bind=engine)


def drop_all_tables(engine) -> None:
    """Drop every table on ``engine``."""
    Base.metadata.drop_all(bind=engine)
