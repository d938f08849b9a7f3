"""
Current user router.
The acting profile, self service updates and onboarding.
"""

from fastapi import APIRouter, status

from timesheets.infrastructure.auth import CurrentActor
from timesheets.infrastructure.web.dependencies import DbSession, ProfileRepo
from timesheets.application.use_cases.profile_use_cases import (
    GetMeUseCase,
    UpdateProfileUseCase,
    ProfileUpdate,
    CompleteOnboardingUseCase,
)
from timesheets.application.dto.profile_dto import (
    UpdateProfileRequestDTO,
    OnboardingRequestDTO,
    ProfileResponseDTO,
    MeResponseDTO,
)


router = APIRouter()


@router.get("", response_model=MeResponseDTO)
async def get_me(actor: CurrentActor, repository: ProfileRepo):
    """
    Acting profile with completion state and capability flags.

    - **missing_fields**: fields keeping the profile from being complete
    - **permissions**: what the UI may offer this user
    """
    return await GetMeUseCase(repository).execute(actor)


@router.patch("", response_model=ProfileResponseDTO)
async def update_me(
    request: UpdateProfileRequestDTO,
    actor: CurrentActor,
    session: DbSession,
    repository: ProfileRepo,
):
    """
    Update your own name and contact details.
    Contractors may set their own hourly rate only until onboarding is completed.
    """
    use_case = UpdateProfileUseCase(session, repository)
    return await use_case.execute(actor, ProfileUpdate(profile_id=actor.id, data=request))


@router.post("/onboarding", status_code=status.HTTP_200_OK, response_model=MeResponseDTO)
async def complete_onboarding(
    request: OnboardingRequestDTO,
    actor: CurrentActor,
    session: DbSession,
    repository: ProfileRepo,
):
    """
    Complete the first-login profile.

    - **full_name**: at least 2 characters
    - **hourly_rate**: required (> 0) for contractors
    """
    return await CompleteOnboardingUseCase(session, repository).execute(actor, request)
