"""
Project domain model.
Projects entries are logged against, and the memberships granting contractors access.
"""

from dataclasses import dataclass
from typing import Optional

from timesheets.domain.models.base import BaseEntity, ValidationError
from timesheets.domain.models.value_objects import WeekStart


def _clean_name(name: Optional[str]) -> str:
    return (name or "").strip()


@dataclass(eq=False)
class Project(BaseEntity):
    """Project entity."""

    org_id: str = ""
    name: str = ""
    is_active: bool = True
    week_start: WeekStart = WeekStart.SUNDAY

    def __post_init__(self):
        super().__post_init__()
        self.name = _clean_name(self.name)
        self.week_start = self._parse_week_start(self.week_start)
        self.validate()

    @staticmethod
    def _parse_week_start(value) -> WeekStart:
        if isinstance(value, WeekStart):
            return value
        if not value:
            return WeekStart.SUNDAY
        try:
            return WeekStart(str(value).strip().lower())
        except ValueError:
            raise ValidationError("week_start must be 'sunday' or 'monday'", "week_start")

    def validate(self) -> None:
        """Validate project state."""
        if not self.org_id:
            raise ValidationError("Project must belong to an organization", "org_id")
        if len(self.name) < 2:
            raise ValidationError("Project name must be at least 2 characters", "name")
        if len(self.name) > 255:
            raise ValidationError("Project name too long (max 255 characters)", "name")

    def rename(self, name: str) -> None:
        self.name = _clean_name(name)
        self.validate()
        self.mark_as_updated()

    def change_week_start(self, week_start) -> None:
        self.week_start = self._parse_week_start(week_start)
        self.mark_as_updated()

    def activate(self) -> None:
        self.is_active = True
        self.mark_as_updated()

    def deactivate(self) -> None:
        self.is_active = False
        self.mark_as_updated()


@dataclass(eq=False)
class ProjectMembership(BaseEntity):
    """
    Grants a contractor access to log time on a project.
    Unique per (project_id, profile_id); toggled rather than deleted.
    """

    org_id: str = ""
    project_id: str = ""
    profile_id: str = ""
    is_active: bool = True

    def __post_init__(self):
        super().__post_init__()
        self.validate()

    def validate(self) -> None:
        if not self.org_id:
            raise ValidationError("Membership must belong to an organization", "org_id")
        if not self.project_id:
            raise ValidationError("Project is required", "project_id")
        if not self.profile_id:
            raise ValidationError("Profile is required", "profile_id")

    def set_active(self, is_active: bool) -> None:
        self.is_active = bool(is_active)
        self.mark_as_updated()
