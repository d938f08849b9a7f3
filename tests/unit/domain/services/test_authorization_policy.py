"""
Unit tests for the authorization policy.
"""

import pytest
from datetime import date

from timesheets.domain.models.base import AuthorizationError
from timesheets.domain.models.profile import Profile, Role
from timesheets.domain.models.time_entry import TimeEntry
from timesheets.domain.services.authorization_policy import AuthorizationPolicy, ScopeKind


@pytest.fixture
def policy():
    return AuthorizationPolicy()


@pytest.fixture
def people():
    admin = Profile(id="admin", org_id="org-1", role=Role.ADMIN, full_name="Admin")
    manager = Profile(id="manager", org_id="org-1", role=Role.MANAGER, full_name="Manager")
    report = Profile(id="report", org_id="org-1", manager_id="manager", full_name="Report")
    loner = Profile(id="loner", org_id="org-1", full_name="Loner")
    stranger = Profile(id="stranger", org_id="org-2", role=Role.ADMIN, full_name="Stranger")
    return {p.id: p for p in (admin, manager, report, loner, stranger)}


def entry_of(owner: Profile) -> TimeEntry:
    return TimeEntry(id=f"e-{owner.id}", org_id=owner.org_id, user_id=owner.id, entry_date=date(2024, 3, 4))


class TestVisibleScope:
    """Test cases for row visibility."""

    def test_scope_kinds(self, policy, people):
        assert policy.visible_scope(people["admin"].to_actor()).kind == ScopeKind.ORG
        assert policy.visible_scope(people["manager"].to_actor()).kind == ScopeKind.TEAM
        assert policy.visible_scope(people["report"].to_actor()).kind == ScopeKind.SELF

    def test_inactive_actor_sees_nothing(self, policy, people):
        inactive = Profile(id="gone", org_id="org-1", role=Role.ADMIN, is_active=False)
        scope = policy.visible_scope(inactive.to_actor())
        assert scope.kind == ScopeKind.NONE
        assert not scope.includes("org-1", "gone", None)

    @pytest.mark.parametrize("actor_id,owner_id,visible", [
        ("admin", "report", True),
        ("admin", "loner", True),
        ("admin", "stranger", False),
        ("manager", "manager", True),
        ("manager", "report", True),
        ("manager", "loner", False),
        ("manager", "admin", False),
        ("report", "report", True),
        ("report", "loner", False),
        ("report", "manager", False),
        ("stranger", "report", False),
    ])
    def test_can_view_entry(self, policy, people, actor_id, owner_id, visible):
        owner = people[owner_id]
        assert policy.can_view_entry(people[actor_id].to_actor(), entry_of(owner), owner) is visible

    def test_own_only_narrows_team_scope(self, policy, people):
        scope = policy.visible_scope(people["manager"].to_actor()).own_only()
        assert scope.kind == ScopeKind.SELF
        assert not scope.includes("org-1", "report", "manager")


class TestApproval:
    """Test cases for approval rights."""

    def test_admin_approves_anyone_in_org(self, policy, people):
        admin = people["admin"].to_actor()
        assert policy.can_approve(admin, people["loner"])
        assert policy.can_approve(admin, people["manager"])
        assert policy.can_approve(admin, people["admin"])
        assert not policy.can_approve(admin, people["stranger"])

    def test_manager_approves_direct_reports_only(self, policy, people):
        manager = people["manager"].to_actor()
        assert policy.can_approve(manager, people["report"])
        assert not policy.can_approve(manager, people["loner"])
        assert not policy.can_approve(manager, people["manager"])

    def test_contractor_cannot_approve(self, policy, people):
        assert not policy.can_approve(people["report"].to_actor(), people["report"])


class TestEntryEditing:
    """Test cases for entry edit and delete rights."""

    def test_owner_and_admin_can_edit(self, policy, people):
        entry = entry_of(people["report"])
        assert policy.can_edit_entry(people["report"].to_actor(), entry)
        assert policy.can_edit_entry(people["admin"].to_actor(), entry)
        assert not policy.can_edit_entry(people["manager"].to_actor(), entry)
        assert not policy.can_edit_entry(people["stranger"].to_actor(), entry)

    def test_only_admin_can_delete(self, policy, people):
        entry = entry_of(people["report"])
        assert policy.can_delete_entry(people["admin"].to_actor(), entry)
        assert not policy.can_delete_entry(people["report"].to_actor(), entry)


class TestProfileEditing:
    """Test cases for profile field rights."""

    def test_self_edits_contact_fields(self, policy, people):
        report = people["report"]
        actor = report.to_actor()
        assert policy.can_edit_profile(actor, report, {"full_name", "phone", "address"})
        assert not policy.can_edit_profile(actor, report, {"role"})
        assert not policy.can_edit_profile(actor, report, {"manager_id"})

    def test_self_rate_only_before_onboarding(self, policy, people):
        loner = people["loner"]
        assert policy.can_edit_rate(loner.to_actor(), loner)

        loner.onboarding_completed_at = loner.created_at
        assert not policy.can_edit_rate(loner.to_actor(), loner)

    def test_manager_edits_report_rate(self, policy, people):
        manager = people["manager"].to_actor()
        assert policy.can_edit_profile(manager, people["report"], {"hourly_rate"})
        assert not policy.can_edit_profile(manager, people["loner"], {"hourly_rate"})
        assert not policy.can_edit_profile(manager, people["report"], {"full_name"})

    def test_protected_fields_are_never_editable(self, policy, people):
        admin = people["admin"].to_actor()
        assert not policy.can_edit_profile(admin, people["report"], {"org_id"})
        assert not policy.can_edit_profile(admin, people["report"], {"id"})

    def test_admin_cannot_demote_or_deactivate_self(self, policy, people):
        admin = people["admin"]
        fields = policy.editable_profile_fields(admin.to_actor(), admin)
        assert "role" not in fields
        assert "is_active" not in fields
        assert "hourly_rate" in fields

    def test_manager_link_only_for_contractors(self, policy, people):
        admin = people["admin"].to_actor()
        assert "manager_id" in policy.editable_profile_fields(admin, people["report"])
        assert "manager_id" not in policy.editable_profile_fields(admin, people["manager"])


class TestCapabilities:
    """Test cases for capability flags and guards."""

    def test_contractor_capabilities(self, policy, people):
        caps = policy.capabilities(people["report"].to_actor())
        assert caps["can_view_reports"]
        assert not caps["can_approve"]
        assert not caps["can_invite"]

    def test_admin_capabilities(self, policy, people):
        caps = policy.capabilities(people["admin"].to_actor())
        assert all(caps.values())

    def test_require_raises(self, policy):
        with pytest.raises(AuthorizationError, match="nope"):
            policy.require(False, "nope")
        policy.require(True)
