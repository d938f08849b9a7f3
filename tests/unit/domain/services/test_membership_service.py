"""
Unit tests for project membership resolution.
"""

import pytest
from unittest.mock import Mock

from timesheets.domain.models.base import AuthorizationError
from timesheets.domain.models.profile import Actor, Role
from timesheets.domain.models.project import Project
from timesheets.domain.services.membership_service import MembershipService


@pytest.fixture
def repository():
    repo = Mock()
    repo.find_by_org.return_value = [
        Project(id="p1", org_id="org-1", name="Roof"),
        Project(id="p2", org_id="org-1", name="Basement"),
    ]
    repo.find_for_member.return_value = [Project(id="p1", org_id="org-1", name="Roof")]
    return repo


class TestMembershipService:
    """Test cases for MembershipService."""

    def test_managers_get_every_active_project(self, repository):
        service = MembershipService(repository)
        actor = Actor(id="m1", org_id="org-1", role=Role.MANAGER)

        projects = service.resolve_loggable_projects(actor)

        assert [p.id for p in projects] == ["p1", "p2"]
        repository.find_by_org.assert_called_once_with("org-1", active_only=True)

    def test_contractors_get_member_projects(self, repository):
        service = MembershipService(repository)
        actor = Actor(id="c1", org_id="org-1", role=Role.CONTRACTOR)

        assert [p.id for p in service.resolve_loggable_projects(actor)] == ["p1"]
        repository.find_for_member.assert_called_once_with("org-1", "c1", active_only=True)
        assert service.can_log_on_project(actor, "p1")
        assert not service.can_log_on_project(actor, "p2")
        assert not service.can_log_on_project(actor, None)

    def test_inactive_actor_has_no_projects(self, repository):
        service = MembershipService(repository)
        actor = Actor(id="c1", org_id="org-1", role=Role.ADMIN, is_active=False)

        assert service.resolve_loggable_projects(actor) == []
        repository.find_by_org.assert_not_called()

    def test_ensure_can_log(self, repository):
        service = MembershipService(repository)
        actor = Actor(id="c1", org_id="org-1", role=Role.CONTRACTOR)

        service.ensure_can_log(actor, ["p1", None, "p1"])
        with pytest.raises(AuthorizationError):
            service.ensure_can_log(actor, ["p1", "p2"])

    def test_ensure_can_log_without_projects_skips_lookup(self, repository):
        service = MembershipService(repository)
        service.ensure_can_log(Actor(id="c1", org_id="org-1", role=Role.CONTRACTOR), [None])
        repository.find_for_member.assert_not_called()
