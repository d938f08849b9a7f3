"""
Project DTOs for the application layer.
"""

from typing import Optional, List
from datetime import datetime
from pydantic import Field, validator

from timesheets.domain.models.project import Project, ProjectMembership
from timesheets.domain.models.value_objects import WeekStart

from .base_dto import RequestDTO, ResponseDTO, strip_or_none


# Request DTOs
class CreateProjectRequestDTO(RequestDTO):
    """DTO for project creation requests."""

    name: str = Field(max_length=255, description="Project name")
    week_start: WeekStart = Field(default=WeekStart.SUNDAY, description="Reporting week convention")
    is_active: bool = Field(default=True)

    @validator("name")
    def clean_name(cls, v):
        return (v or "").strip()


class UpdateProjectRequestDTO(RequestDTO):
    """Rename, toggle or change the week convention of a project."""

    name: Optional[str] = Field(default=None, max_length=255)
    week_start: Optional[WeekStart] = Field(default=None)
    is_active: Optional[bool] = Field(default=None)

    @validator("name")
    def clean_name(cls, v):
        return strip_or_none(v)


class SetMembershipRequestDTO(RequestDTO):
    """Assign (active) or unassign (inactive) a profile."""

    is_active: bool = Field(default=True)


# Response DTOs
class ProjectResponseDTO(ResponseDTO):
    """DTO for project responses."""

    id: str
    org_id: str
    name: str
    is_active: bool
    week_start: WeekStart
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectResponseDTO":
        return cls(
            id=project.id,
            org_id=project.org_id,
            name=project.name,
            is_active=project.is_active,
            week_start=project.week_start,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class LoggableProjectsResponseDTO(ResponseDTO):
    """Projects the actor can log against. ``has_access`` is False for an empty list."""

    projects: List[ProjectResponseDTO]
    has_access: bool


class MembershipResponseDTO(ResponseDTO):
    """Project membership row."""

    id: str
    project_id: str
    profile_id: str
    is_active: bool
    full_name: Optional[str] = None

    @classmethod
    def from_domain(cls, membership: ProjectMembership, full_name: Optional[str] = None) -> "MembershipResponseDTO":
        return cls(
            id=membership.id,
            project_id=membership.project_id,
            profile_id=membership.profile_id,
            is_active=membership.is_active,
            full_name=full_name,
        )
