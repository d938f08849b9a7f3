"""
Unit tests for the Project and ProjectMembership entities.
"""

import pytest

from timesheets.domain.models.base import ValidationError
from timesheets.domain.models.project import Project, ProjectMembership
from timesheets.domain.models.value_objects import WeekStart


class TestProject:
    """Test cases for Project."""

    def test_defaults_to_sunday_weeks(self):
        project = Project(org_id="org-1", name="Alpha")
        assert project.week_start == WeekStart.SUNDAY

    def test_accepts_enum_member(self):
        project = Project(org_id="org-1", name="Alpha", week_start=WeekStart.MONDAY)
        assert project.week_start == WeekStart.MONDAY

    def test_parses_loose_strings(self):
        project = Project(org_id="org-1", name="Alpha", week_start=" Monday ")
        assert project.week_start == WeekStart.MONDAY

        project.change_week_start(WeekStart.SUNDAY)
        assert project.week_start == WeekStart.SUNDAY

    def test_rejects_unknown_week_start(self):
        with pytest.raises(ValidationError) as exc_info:
            Project(org_id="org-1", name="Alpha", week_start="friday")
        assert exc_info.value.field == "week_start"

    def test_name_is_trimmed_and_checked(self):
        assert Project(org_id="org-1", name="  Alpha  ").name == "Alpha"
        with pytest.raises(ValidationError):
            Project(org_id="org-1", name=" A ")

    def test_deactivate(self):
        project = Project(org_id="org-1", name="Alpha")
        project.deactivate()
        assert project.is_active is False


class TestProjectMembership:

    def test_requires_project_and_profile(self):
        with pytest.raises(ValidationError):
            ProjectMembership(org_id="org-1", project_id="", profile_id="u1")
