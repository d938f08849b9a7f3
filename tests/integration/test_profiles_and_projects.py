"""
Integration tests for profile, invite and project use cases.
"""

from decimal import Decimal

import pytest

from timesheets.application.dto.profile_dto import (
    UpdateProfileRequestDTO, OnboardingRequestDTO, InviteRequestDTO,
)
from timesheets.application.dto.project_dto import (
    CreateProjectRequestDTO, UpdateProjectRequestDTO, SetMembershipRequestDTO,
)
from timesheets.application.use_cases import (
    GetMeUseCase,
    UpdateProfileUseCase,
    ProfileUpdate,
    CompleteOnboardingUseCase,
    InviteUserUseCase,
    ListProjectsUseCase,
    ListLoggableProjectsUseCase,
    CreateProjectUseCase,
    UpdateProjectUseCase,
    ProjectUpdate,
    ListProjectMembersUseCase,
    SetProjectMembershipUseCase,
    MembershipChange,
)
from timesheets.domain.models.base import (
    AuthorizationError, ConflictError, EntityNotFoundError, ValidationError,
)
from timesheets.domain.models.profile import Profile, Role


def update(profile_id, **fields):
    return ProfileUpdate(profile_id, UpdateProfileRequestDTO(**fields))


class TestUpdateProfile:
    """Test cases for UpdateProfileUseCase."""

    async def test_self_edits_contact_details(self, seed, session, profile_repository):
        result = await UpdateProfileUseCase(session, profile_repository).execute(
            seed.report.to_actor(), update(seed.report.id, phone=" 555-0100 ", address="1 Main St")
        )
        assert result.phone == "555-0100"
        assert profile_repository.find_by_id(seed.report.id).address == "1 Main St"

    async def test_contractor_cannot_change_role(self, seed, session, profile_repository):
        with pytest.raises(AuthorizationError, match="role"):
            await UpdateProfileUseCase(session, profile_repository).execute(
                seed.report.to_actor(), update(seed.report.id, role=Role.MANAGER)
            )
        assert profile_repository.find_by_id(seed.report.id).role == Role.CONTRACTOR

    async def test_org_id_is_never_writable(self, seed, session, profile_repository):
        with pytest.raises(AuthorizationError):
            await UpdateProfileUseCase(session, profile_repository).execute(
                seed.admin.to_actor(), update(seed.report.id, org_id=seed.other_org.id)
            )

    async def test_manager_sets_report_rate(self, seed, session, profile_repository):
        result = await UpdateProfileUseCase(session, profile_repository).execute(
            seed.manager.to_actor(), update(seed.report.id, hourly_rate=Decimal("55"))
        )
        assert result.hourly_rate == Decimal("55.00")

    async def test_manager_cannot_set_other_rates(self, seed, session, profile_repository):
        with pytest.raises(AuthorizationError):
            await UpdateProfileUseCase(session, profile_repository).execute(
                seed.manager.to_actor(), update(seed.freelancer.id, hourly_rate=Decimal("55"))
            )

    async def test_negative_rate_is_invalid(self, seed, session, profile_repository):
        with pytest.raises(ValidationError):
            await UpdateProfileUseCase(session, profile_repository).execute(
                seed.admin.to_actor(), update(seed.report.id, hourly_rate=Decimal("-5"))
            )
        assert profile_repository.find_by_id(seed.report.id).hourly_rate == Decimal("50.00")

    async def test_promoting_contractor_clears_manager(self, seed, session, profile_repository):
        result = await UpdateProfileUseCase(session, profile_repository).execute(
            seed.admin.to_actor(), update(seed.report.id, role=Role.MANAGER)
        )
        assert result.role == "manager"
        assert result.manager_id is None

    async def test_manager_must_be_able_to_manage(self, seed, session, profile_repository):
        with pytest.raises(ValidationError) as exc_info:
            await UpdateProfileUseCase(session, profile_repository).execute(
                seed.admin.to_actor(), update(seed.freelancer.id, manager_id=seed.report.id)
            )
        assert exc_info.value.field == "manager_id"

    async def test_demoting_manager_releases_reports(self, seed, session, profile_repository):
        await UpdateProfileUseCase(session, profile_repository).execute(
            seed.admin.to_actor(), update(seed.manager.id, role=Role.CONTRACTOR)
        )

        assert profile_repository.find_by_id(seed.manager.id).role == Role.CONTRACTOR
        assert profile_repository.find_by_id(seed.report.id).manager_id is None
        assert profile_repository.find_direct_reports(seed.org.id, seed.manager.id) == []

    async def test_deactivating_manager_releases_reports(self, seed, session, profile_repository):
        await UpdateProfileUseCase(session, profile_repository).execute(
            seed.admin.to_actor(), update(seed.manager.id, is_active=False)
        )

        assert profile_repository.find_by_id(seed.manager.id).is_active is False
        assert profile_repository.find_by_id(seed.report.id).manager_id is None

    async def test_contact_edit_keeps_reports(self, seed, session, profile_repository):
        await UpdateProfileUseCase(session, profile_repository).execute(
            seed.admin.to_actor(), update(seed.manager.id, phone="555-0199")
        )
        assert profile_repository.find_by_id(seed.report.id).manager_id == seed.manager.id

    async def test_completed_contractor_keeps_positive_rate(self, seed, session, profile_repository):
        use_case = CompleteOnboardingUseCase(session, profile_repository)
        await use_case.execute(seed.report.to_actor(), OnboardingRequestDTO(full_name="Carl Contractor"))

        with pytest.raises(ValidationError):
            await UpdateProfileUseCase(session, profile_repository).execute(
                seed.admin.to_actor(), update(seed.report.id, hourly_rate=None)
            )


class TestOnboarding:
    """Test cases for GetMeUseCase and CompleteOnboardingUseCase."""

    async def test_me_reports_missing_fields(self, seed, session, profile_repository):
        newcomer = profile_repository.save(Profile(org_id=seed.org.id, email="new@acme.test"))
        session.commit()

        me = await GetMeUseCase(profile_repository).execute(newcomer.to_actor())

        assert not me.is_complete
        assert me.missing_fields == ["full_name", "hourly_rate"]
        assert me.permissions["can_approve"] is False

    async def test_contractor_completes_with_rate(self, seed, session, profile_repository):
        newcomer = profile_repository.save(Profile(org_id=seed.org.id, email="new@acme.test"))
        session.commit()

        me = await CompleteOnboardingUseCase(session, profile_repository).execute(
            newcomer.to_actor(),
            OnboardingRequestDTO(full_name="Nina Newcomer", hourly_rate=Decimal("35")),
        )

        assert me.is_complete
        assert me.profile.hourly_rate == Decimal("35.00")
        assert profile_repository.find_by_id(newcomer.id).onboarding_completed_at is not None

    async def test_contractor_without_rate_cannot_complete(self, seed, session, profile_repository):
        newcomer = profile_repository.save(Profile(org_id=seed.org.id, email="new@acme.test"))
        session.commit()

        with pytest.raises(ValidationError) as exc_info:
            await CompleteOnboardingUseCase(session, profile_repository).execute(
                newcomer.to_actor(), OnboardingRequestDTO(full_name="Nina Newcomer")
            )
        assert exc_info.value.field == "hourly_rate"

    async def test_rate_is_locked_after_onboarding(self, seed, session, profile_repository):
        use_case = CompleteOnboardingUseCase(session, profile_repository)
        await use_case.execute(seed.freelancer.to_actor(), OnboardingRequestDTO(full_name="Fran Freelancer"))

        with pytest.raises(AuthorizationError):
            await CompleteOnboardingUseCase(session, profile_repository).execute(
                seed.freelancer.to_actor(),
                OnboardingRequestDTO(full_name="Fran Freelancer", hourly_rate=Decimal("99")),
            )


class TestInvite:
    """Test cases for InviteUserUseCase."""

    def use_case(self, session, profile_repository, project_repository, identity_provider):
        return InviteUserUseCase(
            session, profile_repository, project_repository, identity_provider,
            redirect_to="http://localhost:3000/auth/callback",
        )

    async def test_invite_contractor(self, seed, session, profile_repository, project_repository, identity_provider):
        result = await self.use_case(session, profile_repository, project_repository, identity_provider).execute(
            seed.admin.to_actor(),
            InviteRequestDTO(
                email="New.Person@Example.com",
                full_name="New Person",
                hourly_rate=Decimal("42"),
                manager_id=seed.manager.id,
                project_ids=[seed.project.id, seed.project.id],
            ),
        )

        assert result.invite_sent
        assert result.project_ids == [seed.project.id]
        assert identity_provider.invites[0]["email"] == "new.person@example.com"
        assert identity_provider.invites[0]["redirect_to"] == "http://localhost:3000/auth/callback"

        invited = profile_repository.find_by_id(result.profile.id)
        assert invited.org_id == seed.org.id
        assert invited.manager_id == seed.manager.id
        assert invited.hourly_rate == Decimal("42.00")
        assert [p.id for p in project_repository.find_for_member(seed.org.id, invited.id)] == [seed.project.id]

    async def test_only_admins_invite(self, seed, session, profile_repository, project_repository, identity_provider):
        with pytest.raises(AuthorizationError):
            await self.use_case(session, profile_repository, project_repository, identity_provider).execute(
                seed.manager.to_actor(), InviteRequestDTO(email="x@example.com")
            )
        assert identity_provider.invites == []

    async def test_admin_role_cannot_be_invited(self, seed, session, profile_repository, project_repository, identity_provider):
        with pytest.raises(ValidationError):
            await self.use_case(session, profile_repository, project_repository, identity_provider).execute(
                seed.admin.to_actor(), InviteRequestDTO(email="x@example.com", role=Role.ADMIN)
            )

    async def test_zero_contractor_rate_is_rejected(self, seed, session, profile_repository, project_repository, identity_provider):
        with pytest.raises(ValidationError) as exc_info:
            await self.use_case(session, profile_repository, project_repository, identity_provider).execute(
                seed.admin.to_actor(), InviteRequestDTO(email="x@example.com", hourly_rate=Decimal("0"))
            )
        assert exc_info.value.field == "hourly_rate"

    async def test_invalid_projects_fail_before_inviting(self, seed, session, profile_repository, project_repository, identity_provider):
        with pytest.raises(ValidationError) as exc_info:
            await self.use_case(session, profile_repository, project_repository, identity_provider).execute(
                seed.admin.to_actor(), InviteRequestDTO(email="x@example.com", project_ids=["nope"])
            )
        assert exc_info.value.field == "project_ids"
        assert "nope" in exc_info.value.message
        assert identity_provider.invites == []

    async def test_provider_rejection(self, seed, session, profile_repository, project_repository, identity_provider):
        identity_provider.rejected_emails.add("bad@example.com")
        with pytest.raises(ValidationError) as exc_info:
            await self.use_case(session, profile_repository, project_repository, identity_provider).execute(
                seed.admin.to_actor(), InviteRequestDTO(email="bad@example.com")
            )
        assert exc_info.value.field == "email"

    async def test_profile_of_other_org_conflicts(self, seed, session, profile_repository, project_repository, identity_provider):
        class ExistingUserProvider(type(identity_provider)):
            def invite_user(self, email, redirect_to=None, data=None):
                return seed.outsider.id

        with pytest.raises(ConflictError):
            await self.use_case(session, profile_repository, project_repository, ExistingUserProvider()).execute(
                seed.admin.to_actor(), InviteRequestDTO(email="otto@other-org.com")
            )
        assert profile_repository.find_by_id(seed.outsider.id).org_id == seed.other_org.id


class TestProjects:
    """Test cases for project and membership use cases."""

    async def test_contractor_lists_member_projects(self, seed, project_repository):
        contractor_view = await ListProjectsUseCase(project_repository).execute(seed.report.to_actor())
        admin_view = await ListProjectsUseCase(project_repository).execute(seed.admin.to_actor())

        assert [p.id for p in contractor_view] == [seed.project.id]
        assert {p.id for p in admin_view} == {seed.project.id, seed.side_project.id}

    async def test_loggable_projects(self, seed, session, profile_repository, project_repository):
        loner = profile_repository.save(Profile(org_id=seed.org.id, full_name="Lonely", hourly_rate=Decimal("20")))
        session.commit()

        none = await ListLoggableProjectsUseCase(project_repository).execute(loner.to_actor())
        manager = await ListLoggableProjectsUseCase(project_repository).execute(seed.manager.to_actor())

        assert none.has_access is False
        assert none.projects == []
        assert len(manager.projects) == 2

    async def test_create_and_update_project(self, seed, session, project_repository):
        created = await CreateProjectUseCase(session, project_repository).execute(
            seed.admin.to_actor(), CreateProjectRequestDTO(name="  Warehouse  ", week_start="monday")
        )
        assert created.name == "Warehouse"
        assert created.week_start == "monday"

        updated = await UpdateProjectUseCase(session, project_repository).execute(
            seed.admin.to_actor(), ProjectUpdate(created.id, UpdateProjectRequestDTO(is_active=False))
        )
        assert updated.is_active is False

    async def test_only_admins_manage_projects(self, seed, session, project_repository):
        with pytest.raises(AuthorizationError):
            await CreateProjectUseCase(session, project_repository).execute(
                seed.manager.to_actor(), CreateProjectRequestDTO(name="Warehouse")
            )

    async def test_short_project_name(self, seed, session, project_repository):
        with pytest.raises(ValidationError):
            await CreateProjectUseCase(session, project_repository).execute(
                seed.admin.to_actor(), CreateProjectRequestDTO(name="W")
            )

    async def test_membership_toggle_keeps_one_row(self, seed, session, profile_repository, project_repository):
        use_case = SetProjectMembershipUseCase(session, project_repository, profile_repository)
        change = MembershipChange(seed.project.id, seed.report.id, SetMembershipRequestDTO(is_active=False))

        removed = await use_case.execute(seed.admin.to_actor(), change)
        assert removed.is_active is False
        assert project_repository.find_for_member(seed.org.id, seed.report.id) == []

        readded = await SetProjectMembershipUseCase(session, project_repository, profile_repository).execute(
            seed.admin.to_actor(),
            MembershipChange(seed.project.id, seed.report.id, SetMembershipRequestDTO(is_active=True)),
        )
        assert readded.id == removed.id
        assert len(project_repository.find_members(seed.org.id, seed.project.id, active_only=False)) == 2

    async def test_members_listing(self, seed, profile_repository, project_repository):
        members = await ListProjectMembersUseCase(project_repository, profile_repository).execute(
            seed.manager.to_actor(), seed.project.id
        )
        assert [m.full_name for m in members] == ["Carl Contractor", "Fran Freelancer"]

        with pytest.raises(EntityNotFoundError):
            await ListProjectMembersUseCase(project_repository, profile_repository).execute(
                seed.admin.to_actor(), "missing"
            )
