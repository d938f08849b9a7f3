"""
Project use cases for the application layer.
Project administration and the memberships that grant contractors access.
"""

import logging
from dataclasses import dataclass
from typing import List

from sqlalchemy.orm import Session

from timesheets.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from timesheets.application.dto.project_dto import (
    CreateProjectRequestDTO, UpdateProjectRequestDTO, SetMembershipRequestDTO,
    ProjectResponseDTO, LoggableProjectsResponseDTO, MembershipResponseDTO,
)
from timesheets.domain.models.base import EntityNotFoundError
from timesheets.domain.models.profile import Actor
from timesheets.domain.models.project import Project, ProjectMembership
from timesheets.domain.repositories.project_repository import ProjectRepository
from timesheets.domain.repositories.profile_repository import ProfileRepository
from timesheets.domain.services.membership_service import MembershipService


logger = logging.getLogger(__name__)


def _get_project(repository: ProjectRepository, org_id: str, project_id: str) -> Project:
    project = repository.get_by_id(org_id, project_id)
    if project is None:
        raise EntityNotFoundError("Project", project_id)
    return project


class ListProjectsUseCase(QueryUseCase[None, List[ProjectResponseDTO]]):
    """Admins and managers see every org project; contractors their member projects."""

    def __init__(self, project_repository: ProjectRepository):
        super().__init__()
        self.project_repository = project_repository

    async def _execute_business_logic(self, actor: Actor, request: None) -> List[ProjectResponseDTO]:
        if not actor.is_active:
            return []
        if self.policy.can_view_team(actor):
            projects = self.project_repository.find_by_org(actor.org_id)
        else:
            projects = self.project_repository.find_for_member(actor.org_id, actor.id, active_only=True)
        return [ProjectResponseDTO.from_domain(p) for p in projects]


class ListLoggableProjectsUseCase(QueryUseCase[None, LoggableProjectsResponseDTO]):
    """Projects the actor may log time against."""

    def __init__(self, project_repository: ProjectRepository):
        super().__init__()
        self.membership_service = MembershipService(project_repository)

    async def _execute_business_logic(self, actor: Actor, request: None) -> LoggableProjectsResponseDTO:
        projects = self.membership_service.resolve_loggable_projects(actor)
        return LoggableProjectsResponseDTO(
            projects=[ProjectResponseDTO.from_domain(p) for p in projects],
            has_access=bool(projects),
        )


class CreateProjectUseCase(CommandUseCase[CreateProjectRequestDTO, ProjectResponseDTO]):
    """Admin creation of a project."""

    def __init__(self, session: Session, project_repository: ProjectRepository):
        super().__init__(session)
        self.project_repository = project_repository

    async def _execute_command_logic(self, actor: Actor, request: CreateProjectRequestDTO) -> ProjectResponseDTO:
        self.policy.require(self.policy.can_manage_projects(actor), "Only admins can manage projects")

        project = Project(
            org_id=actor.org_id,
            name=request.name,
            week_start=request.week_start,
            is_active=request.is_active,
        )
        self.project_repository.save(project)

        logger.info(f"Project {project.id} '{project.name}' created by {actor.id}")
        return ProjectResponseDTO.from_domain(project)


@dataclass
class ProjectUpdate:
    project_id: str
    data: UpdateProjectRequestDTO


class UpdateProjectUseCase(CommandUseCase[ProjectUpdate, ProjectResponseDTO]):
    """Rename, activate/deactivate or change the week convention of a project."""

    def __init__(self, session: Session, project_repository: ProjectRepository):
        super().__init__(session)
        self.project_repository = project_repository

    async def _execute_command_logic(self, actor: Actor, request: ProjectUpdate) -> ProjectResponseDTO:
        self.policy.require(self.policy.can_manage_projects(actor), "Only admins can manage projects")
        project = _get_project(self.project_repository, actor.org_id, request.project_id)
        data = request.data

        if data.name is not None:
            project.rename(data.name)
        if data.week_start is not None:
            project.change_week_start(data.week_start)
        if data.is_active is not None:
            if data.is_active:
                project.activate()
            else:
                project.deactivate()

        self.project_repository.save(project)
        return ProjectResponseDTO.from_domain(project)


class ListProjectMembersUseCase(QueryUseCase[str, List[MembershipResponseDTO]]):
    """Active members of a project."""

    def __init__(self, project_repository: ProjectRepository, profile_repository: ProfileRepository):
        super().__init__()
        self.project_repository = project_repository
        self.profile_repository = profile_repository

    async def _execute_business_logic(self, actor: Actor, project_id: str) -> List[MembershipResponseDTO]:
        self.policy.require(self.policy.can_view_team(actor), "Only managers and admins can view project members")
        _get_project(self.project_repository, actor.org_id, project_id)

        memberships = self.project_repository.find_members(actor.org_id, project_id, active_only=True)
        names = {
            p.id: p.display_name
            for p in self.profile_repository.get_many(actor.org_id, {m.profile_id for m in memberships})
        }
        result = [MembershipResponseDTO.from_domain(m, full_name=names.get(m.profile_id)) for m in memberships]
        result.sort(key=lambda m: (m.full_name or "").lower())
        return result


@dataclass
class MembershipChange:
    project_id: str
    profile_id: str
    data: SetMembershipRequestDTO


class SetProjectMembershipUseCase(CommandUseCase[MembershipChange, MembershipResponseDTO]):
    """Assign or unassign a profile; one row per (project, profile) is kept and toggled."""

    def __init__(
        self,
        session: Session,
        project_repository: ProjectRepository,
        profile_repository: ProfileRepository,
    ):
        super().__init__(session)
        self.project_repository = project_repository
        self.profile_repository = profile_repository

    async def _execute_command_logic(self, actor: Actor, request: MembershipChange) -> MembershipResponseDTO:
        self.policy.require(self.policy.can_manage_projects(actor), "Only admins can manage project members")
        _get_project(self.project_repository, actor.org_id, request.project_id)

        profile = self.profile_repository.get_by_id(actor.org_id, request.profile_id)
        if profile is None:
            raise EntityNotFoundError("Profile", request.profile_id)

        membership = self.project_repository.get_membership(request.project_id, profile.id)
        if membership is None:
            membership = ProjectMembership(
                org_id=actor.org_id,
                project_id=request.project_id,
                profile_id=profile.id,
                is_active=request.data.is_active,
            )
        else:
            membership.set_active(request.data.is_active)
        self.project_repository.save_membership(membership)

        logger.info(
            f"{actor.id} {'assigned' if membership.is_active else 'unassigned'} "
            f"{profile.id} on project {request.project_id}"
        )
        return MembershipResponseDTO.from_domain(membership, full_name=profile.display_name)
