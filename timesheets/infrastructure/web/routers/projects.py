"""
Project management router.
Handles project administration and project membership.
"""

from typing import List
from fastapi import APIRouter, status

from timesheets.infrastructure.auth import CurrentActor
from timesheets.infrastructure.web.dependencies import DbSession, ProjectRepo, ProfileRepo
from timesheets.application.use_cases.project_use_cases import (
    ListProjectsUseCase,
    ListLoggableProjectsUseCase,
    CreateProjectUseCase,
    UpdateProjectUseCase,
    ProjectUpdate,
    ListProjectMembersUseCase,
    SetProjectMembershipUseCase,
    MembershipChange,
)
from timesheets.application.dto.project_dto import (
    CreateProjectRequestDTO,
    UpdateProjectRequestDTO,
    SetMembershipRequestDTO,
    ProjectResponseDTO,
    LoggableProjectsResponseDTO,
    MembershipResponseDTO,
)


router = APIRouter()


@router.get("", response_model=List[ProjectResponseDTO])
async def list_projects(actor: CurrentActor, repository: ProjectRepo):
    """Admins and managers: every org project. Contractors: projects they are assigned to."""
    return await ListProjectsUseCase(repository).execute(actor)


@router.get("/loggable", response_model=LoggableProjectsResponseDTO)
async def list_loggable_projects(actor: CurrentActor, repository: ProjectRepo):
    """Active projects the caller may log time against. ``has_access`` is false when there are none."""
    return await ListLoggableProjectsUseCase(repository).execute(actor)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProjectResponseDTO)
async def create_project(
    request: CreateProjectRequestDTO,
    actor: CurrentActor,
    session: DbSession,
    repository: ProjectRepo,
):
    """
    Create a new project (admin only).

    - **name**: Project name (at least 2 characters)
    - **week_start**: sunday or monday
    - **is_active**: whether time can be logged on it
    """
    return await CreateProjectUseCase(session, repository).execute(actor, request)


@router.patch("/{project_id}", response_model=ProjectResponseDTO)
async def update_project(
    project_id: str,
    request: UpdateProjectRequestDTO,
    actor: CurrentActor,
    session: DbSession,
    repository: ProjectRepo,
):
    """Rename, activate/deactivate or change the week convention (admin only)."""
    use_case = UpdateProjectUseCase(session, repository)
    return await use_case.execute(actor, ProjectUpdate(project_id=project_id, data=request))


@router.get("/{project_id}/members", response_model=List[MembershipResponseDTO])
async def list_project_members(
    project_id: str,
    actor: CurrentActor,
    repository: ProjectRepo,
    profile_repository: ProfileRepo,
):
    """Active members of a project."""
    return await ListProjectMembersUseCase(repository, profile_repository).execute(actor, project_id)


@router.put("/{project_id}/members/{profile_id}", response_model=MembershipResponseDTO)
async def set_project_member(
    project_id: str,
    profile_id: str,
    request: SetMembershipRequestDTO,
    actor: CurrentActor,
    session: DbSession,
    repository: ProjectRepo,
    profile_repository: ProfileRepo,
):
    """Assign (is_active=true) or unassign (is_active=false) a profile (admin only)."""
    use_case = SetProjectMembershipUseCase(session, repository, profile_repository)
    return await use_case.execute(
        actor, MembershipChange(project_id=project_id, profile_id=profile_id, data=request)
    )
