"""
Admin router.
Member invites through the identity provider.
"""

from typing import Annotated
from fastapi import APIRouter, Depends, status

from timesheets.config import get_settings
from timesheets.domain.services.identity_provider import IdentityProvider
from timesheets.infrastructure.auth import CurrentActor, get_identity_provider
from timesheets.infrastructure.web.dependencies import DbSession, ProfileRepo, ProjectRepo
from timesheets.application.use_cases.profile_use_cases import InviteUserUseCase
from timesheets.application.dto.profile_dto import InviteRequestDTO, InviteResponseDTO


router = APIRouter()


@router.post("/invite", status_code=status.HTTP_201_CREATED, response_model=InviteResponseDTO)
async def invite_member(
    request: InviteRequestDTO,
    actor: CurrentActor,
    session: DbSession,
    profile_repository: ProfileRepo,
    project_repository: ProjectRepo,
    identity_provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
):
    """
    Invite a manager or contractor to the organization (admin only).

    - **email**: where the invite is sent
    - **role**: manager or contractor
    - **hourly_rate**: optional; must be greater than 0 for contractors when given
    - **manager_id**: contractors only; an active admin or manager of the org
    - **project_ids**: projects the new member is assigned to
    """
    use_case = InviteUserUseCase(
        session,
        profile_repository,
        project_repository,
        identity_provider,
        redirect_to=get_settings().invite_redirect_url,
    )
    return await use_case.execute(actor, request)
