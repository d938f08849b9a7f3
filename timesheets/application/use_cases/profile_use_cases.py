"""
Profile use cases for the application layer.
Self service, role-aware updates, onboarding and admin invites.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from timesheets.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from timesheets.application.dto.profile_dto import (
    UpdateProfileRequestDTO, OnboardingRequestDTO, InviteRequestDTO,
    ProfileResponseDTO, MeResponseDTO, InviteResponseDTO,
)
from timesheets.domain.models.base import (
    AuthorizationError, ConflictError, EntityNotFoundError, ValidationError,
)
from timesheets.domain.models.profile import Actor, Profile, Role, completion_problems, normalize_rate
from timesheets.domain.models.project import ProjectMembership
from timesheets.domain.events.timesheet_events import ProfileInvited
from timesheets.domain.repositories.profile_repository import ProfileRepository
from timesheets.domain.repositories.project_repository import ProjectRepository
from timesheets.domain.services.identity_provider import IdentityProvider


logger = logging.getLogger(__name__)


def _require_positive_contractor_rate(profile: Profile) -> None:
    if profile.is_contractor and (profile.hourly_rate is None or profile.hourly_rate <= 0):
        raise ValidationError("Contractors need an hourly rate greater than 0", "hourly_rate")


def _load_manager(repository: ProfileRepository, org_id: str, manager_id: str) -> Profile:
    manager = repository.get_by_id(org_id, manager_id)
    if manager is None or not manager.can_manage_reports:
        raise ValidationError("Manager must be an active admin or manager of the organization", "manager_id")
    return manager


def build_me_response(profile: Profile, actor: Actor, policy) -> MeResponseDTO:
    return MeResponseDTO(
        profile=ProfileResponseDTO.from_domain(profile),
        is_complete=profile.is_complete,
        missing_fields=[field for field, _ in completion_problems(profile)],
        permissions=policy.capabilities(actor),
    )


class GetMeUseCase(QueryUseCase[None, MeResponseDTO]):
    """Acting profile with completion state and capability flags."""

    def __init__(self, profile_repository: ProfileRepository):
        super().__init__()
        self.profile_repository = profile_repository

    async def _execute_business_logic(self, actor: Actor, request: None) -> MeResponseDTO:
        profile = self.profile_repository.get_by_id(actor.org_id, actor.id)
        if profile is None:
            raise EntityNotFoundError("Profile", actor.id)
        return build_me_response(profile, actor, self.policy)


class ListProfilesUseCase(QueryUseCase[bool, List[ProfileResponseDTO]]):
    """Profiles in the actor's scope: org for admins, self and reports for managers, self otherwise."""

    def __init__(self, profile_repository: ProfileRepository):
        super().__init__()
        self.profile_repository = profile_repository

    async def _execute_business_logic(self, actor: Actor, include_inactive: Optional[bool]) -> List[ProfileResponseDTO]:
        profiles = self.profile_repository.find_scoped(
            self.policy.visible_scope(actor),
            include_inactive=True if include_inactive is None else include_inactive,
        )
        return [ProfileResponseDTO.from_domain(p) for p in profiles]


@dataclass
class ProfileUpdate:
    profile_id: str
    data: UpdateProfileRequestDTO


class UpdateProfileUseCase(CommandUseCase[ProfileUpdate, ProfileResponseDTO]):
    """
    Partial profile update.
    The policy decides which fields the actor may touch on the target; any
    field outside that set fails the whole request.
    """

    def __init__(self, session: Session, profile_repository: ProfileRepository):
        super().__init__(session)
        self.profile_repository = profile_repository

    async def _execute_command_logic(self, actor: Actor, request: ProfileUpdate) -> ProfileResponseDTO:
        target = self.profile_repository.get_by_id(actor.org_id, request.profile_id)
        if target is None:
            raise EntityNotFoundError("Profile", request.profile_id)

        changes = request.data.changes()
        if not changes:
            return ProfileResponseDTO.from_domain(target)

        if not self.policy.can_edit_profile(actor, target, changes.keys()):
            denied = sorted(set(changes) - self.policy.editable_profile_fields(actor, target))
            raise AuthorizationError(f"You can't change these fields: {', '.join(denied)}")

        for name in ("full_name", "phone", "address"):
            if name in changes:
                setattr(target, name, changes[name])

        if "role" in changes:
            if changes["role"] is None:
                raise ValidationError("Role cannot be empty", "role")
            target.role = Role(changes["role"])
            if not target.is_contractor:
                target.manager_id = None

        if "manager_id" in changes:
            manager_id = changes["manager_id"]
            manager = _load_manager(self.profile_repository, actor.org_id, manager_id) if manager_id else None
            target.assign_manager(manager)

        if "is_active" in changes:
            if changes["is_active"] is None:
                raise ValidationError("is_active cannot be empty", "is_active")
            target.is_active = changes["is_active"]

        if "hourly_rate" in changes:
            target.change_rate(changes["hourly_rate"], changed_by=actor.id)

        if target.onboarding_completed_at is not None:
            _require_positive_contractor_rate(target)

        target.validate()
        target.mark_as_updated()
        self.profile_repository.save(target)
        self.collect_events(target)

        if ("role" in changes or "is_active" in changes) and not target.can_manage_reports:
            self._release_reports(target)

        logger.info(f"Profile {target.id} updated by {actor.id}: {sorted(changes)}")
        return ProfileResponseDTO.from_domain(target)

    def _release_reports(self, former_manager: Profile) -> None:
        """Unlink the direct reports of a profile that can no longer manage anyone."""
        reports = self.profile_repository.find_direct_reports(former_manager.org_id, former_manager.id)
        for report in reports:
            report.assign_manager(None)
            report.mark_as_updated()
            self.profile_repository.save(report)
        if reports:
            logger.info(f"Cleared manager {former_manager.id} from {len(reports)} direct reports")


class CompleteOnboardingUseCase(CommandUseCase[OnboardingRequestDTO, MeResponseDTO]):
    """First-login completion of the acting user's own profile."""

    def __init__(self, session: Session, profile_repository: ProfileRepository):
        super().__init__(session)
        self.profile_repository = profile_repository

    async def _execute_command_logic(self, actor: Actor, request: OnboardingRequestDTO) -> MeResponseDTO:
        profile = self.profile_repository.get_by_id(actor.org_id, actor.id)
        if profile is None:
            raise EntityNotFoundError("Profile", actor.id)

        profile.full_name = request.full_name
        if "phone" in request.model_fields_set:
            profile.phone = request.phone
        if "address" in request.model_fields_set:
            profile.address = request.address

        if request.hourly_rate is not None and normalize_rate(request.hourly_rate) != profile.hourly_rate:
            self.policy.require(
                self.policy.can_edit_rate(actor, profile),
                "Your hourly rate can only be changed by your manager or an admin",
            )
            profile.change_rate(request.hourly_rate, changed_by=actor.id)

        profile.validate()
        profile.complete_onboarding()
        self.profile_repository.save(profile)
        self.collect_events(profile)

        logger.info(f"Profile {profile.id} completed onboarding")
        return build_me_response(profile, actor, self.policy)


class InviteUserUseCase(CommandUseCase[InviteRequestDTO, InviteResponseDTO]):
    """
    Admin invite of a new manager or contractor.
    Inputs are validated before the identity provider is called; the profile
    and its memberships are then written in the same transaction.
    """

    INVITABLE_ROLES = (Role.MANAGER, Role.CONTRACTOR)

    def __init__(
        self,
        session: Session,
        profile_repository: ProfileRepository,
        project_repository: ProjectRepository,
        identity_provider: IdentityProvider,
        redirect_to: Optional[str] = None,
    ):
        super().__init__(session)
        self.profile_repository = profile_repository
        self.project_repository = project_repository
        self.identity_provider = identity_provider
        self.redirect_to = redirect_to

    async def _execute_command_logic(self, actor: Actor, request: InviteRequestDTO) -> InviteResponseDTO:
        self.policy.require(self.policy.can_invite(actor), "Only admins can invite members")

        email = str(request.email).strip().lower()
        role = Role(request.role)
        if role not in self.INVITABLE_ROLES:
            raise ValidationError("Role must be manager or contractor", "role")

        rate = normalize_rate(request.hourly_rate)
        if role == Role.CONTRACTOR and rate is not None and rate <= 0:
            raise ValidationError("Contractors need an hourly rate greater than 0", "hourly_rate")

        manager_id = request.manager_id if role == Role.CONTRACTOR else None
        if manager_id:
            _load_manager(self.profile_repository, actor.org_id, manager_id)

        if request.project_ids:
            valid = {p.id for p in self.project_repository.get_many(actor.org_id, request.project_ids)}
            invalid = [pid for pid in request.project_ids if pid not in valid]
            if invalid:
                raise ValidationError(f"Invalid project(s) for this org: {', '.join(invalid)}", "project_ids")

        user_id = self.identity_provider.invite_user(
            email,
            redirect_to=self.redirect_to,
            data={"org_id": actor.org_id, "full_name": request.full_name, "role": role.value},
        )

        profile = self.profile_repository.find_by_id(user_id)
        if profile is not None and profile.org_id != actor.org_id:
            raise ConflictError("This user already belongs to another organization")

        if profile is None:
            profile = Profile(id=user_id, org_id=actor.org_id, email=email, hourly_rate=rate)
        elif rate is not None:
            profile.change_rate(rate, changed_by=actor.id)
        profile.email = email
        profile.role = role
        if request.full_name:
            profile.full_name = request.full_name
        profile.manager_id = manager_id
        profile.is_active = True
        profile.validate()
        self.profile_repository.save(profile)
        self.collect_events(profile)

        for project_id in request.project_ids:
            membership = self.project_repository.get_membership(project_id, user_id)
            if membership is None:
                membership = ProjectMembership(org_id=actor.org_id, project_id=project_id, profile_id=user_id)
            else:
                membership.set_active(True)
            self.project_repository.save_membership(membership)

        self.record_event(ProfileInvited(
            org_id=actor.org_id,
            profile_id=user_id,
            email=email,
            role=role.value,
            invited_by=actor.id,
            project_ids=list(request.project_ids),
        ))
        logger.info(f"{actor.id} invited {email} as {role.value} ({len(request.project_ids)} projects)")

        return InviteResponseDTO(
            profile=ProfileResponseDTO.from_domain(profile),
            project_ids=list(request.project_ids),
            invite_sent=True,
        )
