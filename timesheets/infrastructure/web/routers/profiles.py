"""
Profiles router.
Scoped profile listing and role-aware updates.
"""

from typing import List, Optional
from fastapi import APIRouter, Query

from timesheets.infrastructure.auth import CurrentActor
from timesheets.infrastructure.web.dependencies import DbSession, ProfileRepo
from timesheets.application.use_cases.profile_use_cases import (
    ListProfilesUseCase,
    UpdateProfileUseCase,
    ProfileUpdate,
)
from timesheets.application.dto.profile_dto import UpdateProfileRequestDTO, ProfileResponseDTO


router = APIRouter()


@router.get("", response_model=List[ProfileResponseDTO])
async def list_profiles(
    actor: CurrentActor,
    repository: ProfileRepo,
    include_inactive: Optional[bool] = Query(True, description="Include deactivated profiles"),
):
    """
    Profiles visible to the caller.
    Admins see the organization, managers themselves and their direct reports,
    contractors only themselves.
    """
    return await ListProfilesUseCase(repository).execute(actor, include_inactive)


@router.patch("/{profile_id}", response_model=ProfileResponseDTO)
async def update_profile(
    profile_id: str,
    request: UpdateProfileRequestDTO,
    actor: CurrentActor,
    session: DbSession,
    repository: ProfileRepo,
):
    """
    Update a profile. Only the fields present in the body are applied.

    - admins: any field of any profile in the org (no self role change or deactivation)
    - managers: hourly rate of direct reports
    - everyone: own name, phone and address
    """
    use_case = UpdateProfileUseCase(session, repository)
    return await use_case.execute(actor, ProfileUpdate(profile_id=profile_id, data=request))
