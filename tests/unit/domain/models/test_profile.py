"""
Unit tests for the Profile domain model.
"""

import pytest
from decimal import Decimal

from timesheets.domain.models.base import ValidationError
from timesheets.domain.models.profile import Profile, Role, normalize_rate, is_profile_complete
from timesheets.domain.events.timesheet_events import ProfileRateChanged


class TestProfile:
    """Test cases for Profile."""

    def test_create_defaults(self):
        profile = Profile(id="p1", org_id="org-1", email="  Pat@Example.COM ")

        assert profile.role == Role.CONTRACTOR
        assert profile.is_active
        assert profile.email == "pat@example.com"
        assert profile.hourly_rate is None

    def test_requires_org(self):
        with pytest.raises(ValidationError):
            Profile(id="p1")

    def test_cannot_be_own_manager(self):
        with pytest.raises(ValidationError) as exc_info:
            Profile(id="p1", org_id="org-1", manager_id="p1")
        assert exc_info.value.field == "manager_id"

    def test_negative_rate_is_invalid(self):
        with pytest.raises(ValidationError):
            Profile(id="p1", org_id="org-1", hourly_rate=Decimal("-1"))

    def test_normalize_rate(self):
        assert normalize_rate("") is None
        assert normalize_rate("42.555") == Decimal("42.56")
        assert normalize_rate(0) == Decimal("0.00")


class TestProfileRate:
    """Rate changes are audited and never touch entries."""

    def test_change_rate_records_event(self):
        profile = Profile(id="p1", org_id="org-1", hourly_rate=Decimal("40"))

        assert profile.change_rate(Decimal("45"), changed_by="admin-1") is True
        events = profile.pull_events()

        assert profile.hourly_rate == Decimal("45.00")
        assert len(events) == 1
        assert isinstance(events[0], ProfileRateChanged)
        assert events[0].old_rate == "40.00"
        assert events[0].new_rate == "45.00"

    def test_same_rate_is_a_no_op(self):
        profile = Profile(id="p1", org_id="org-1", hourly_rate=Decimal("40"))
        assert profile.change_rate("40.00", changed_by="admin-1") is False
        assert profile.pull_events() == []


class TestManagerAssignment:
    """Test cases for manager links."""

    def test_assign_active_manager(self):
        manager = Profile(id="m1", org_id="org-1", role=Role.MANAGER)
        contractor = Profile(id="c1", org_id="org-1")

        contractor.assign_manager(manager)
        assert contractor.manager_id == "m1"

        contractor.assign_manager(None)
        assert contractor.manager_id is None

    def test_manager_from_other_org_is_rejected(self):
        manager = Profile(id="m1", org_id="org-2", role=Role.MANAGER)
        contractor = Profile(id="c1", org_id="org-1")
        with pytest.raises(ValidationError):
            contractor.assign_manager(manager)

    def test_contractor_cannot_manage(self):
        other = Profile(id="c2", org_id="org-1")
        contractor = Profile(id="c1", org_id="org-1")
        with pytest.raises(ValidationError):
            contractor.assign_manager(other)


class TestCompletion:
    """Test cases for profile completion."""

    def test_contractor_needs_positive_rate(self):
        profile = Profile(id="c1", org_id="org-1", full_name="Casey", hourly_rate=Decimal("0"))
        assert not profile.is_complete

        with pytest.raises(ValidationError) as exc_info:
            profile.complete_onboarding()
        assert exc_info.value.field == "hourly_rate"

        profile.change_rate(Decimal("30"), changed_by="c1")
        profile.complete_onboarding()
        assert profile.is_complete
        assert profile.onboarding_completed_at is not None

    def test_manager_needs_no_rate(self):
        profile = Profile(id="m1", org_id="org-1", role=Role.MANAGER, full_name="Morgan")
        assert profile.is_complete

    def test_short_name_is_incomplete(self):
        profile = Profile(id="m1", org_id="org-1", role=Role.MANAGER, full_name="M")
        assert not is_profile_complete(profile)
        assert not is_profile_complete(None)

    def test_inactive_is_incomplete(self):
        profile = Profile(id="m1", org_id="org-1", role=Role.ADMIN, full_name="Morgan", is_active=False)
        assert not profile.is_complete
