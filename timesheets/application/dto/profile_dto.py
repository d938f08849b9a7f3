"""
Profile DTOs for the application layer.
Data Transfer Objects for profile, onboarding and invite operations.
"""

from typing import Optional, List, Dict
from datetime import datetime
from decimal import Decimal
from pydantic import Field, EmailStr, validator

from timesheets.domain.models.profile import Profile, Role

from .base_dto import RequestDTO, ResponseDTO, strip_or_none


# Request DTOs
class UpdateProfileRequestDTO(RequestDTO):
    """
    Partial profile update.
    Only fields present in the payload are applied.
    """

    full_name: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = Field(default=None, max_length=500)
    hourly_rate: Optional[Decimal] = Field(default=None, description="Hourly rate; null clears it")
    role: Optional[Role] = Field(default=None)
    manager_id: Optional[str] = Field(default=None, description="Manager; null clears it")
    is_active: Optional[bool] = Field(default=None)
    # rejected by the policy when present
    org_id: Optional[str] = Field(default=None)
    id: Optional[str] = Field(default=None)

    @validator("full_name", "phone", "address", "manager_id")
    def clean_text(cls, v):
        return strip_or_none(v)

    def changes(self) -> Dict[str, object]:
        """Fields explicitly sent by the client."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class OnboardingRequestDTO(RequestDTO):
    """First-login profile completion."""

    full_name: str = Field(max_length=255)
    hourly_rate: Optional[Decimal] = Field(default=None)
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = Field(default=None, max_length=500)

    @validator("full_name", "phone", "address")
    def clean_text(cls, v):
        return strip_or_none(v)


class InviteRequestDTO(RequestDTO):
    """Admin invite of a new organization member."""

    email: EmailStr = Field(description="E-mail the invite is sent to")
    full_name: Optional[str] = Field(default=None, max_length=255)
    hourly_rate: Optional[Decimal] = Field(default=None)
    role: Role = Field(default=Role.CONTRACTOR)
    manager_id: Optional[str] = Field(default=None)
    project_ids: List[str] = Field(default_factory=list)

    @validator("full_name", "manager_id")
    def clean_text(cls, v):
        return strip_or_none(v)

    @validator("project_ids")
    def unique_project_ids(cls, v):
        seen = []
        for project_id in v:
            project_id = (project_id or "").strip()
            if project_id and project_id not in seen:
                seen.append(project_id)
        return seen


# Response DTOs
class ProfileResponseDTO(ResponseDTO):
    """Profile as seen by an actor allowed to view it."""

    id: str
    org_id: str
    role: Role
    full_name: Optional[str] = None
    email: Optional[str] = None
    hourly_rate: Optional[Decimal] = None
    is_active: bool
    manager_id: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    onboarding_completed_at: Optional[datetime] = None
    is_complete: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, profile: Profile) -> "ProfileResponseDTO":
        return cls(
            id=profile.id,
            org_id=profile.org_id,
            role=profile.role,
            full_name=profile.full_name,
            email=profile.email,
            hourly_rate=profile.hourly_rate,
            is_active=profile.is_active,
            manager_id=profile.manager_id,
            phone=profile.phone,
            address=profile.address,
            onboarding_completed_at=profile.onboarding_completed_at,
            is_complete=profile.is_complete,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class MeResponseDTO(ResponseDTO):
    """The acting user with completion state and capabilities."""

    profile: ProfileResponseDTO
    is_complete: bool
    missing_fields: List[str]
    permissions: Dict[str, bool]


class InviteResponseDTO(ResponseDTO):
    """Invite outcome."""

    profile: ProfileResponseDTO
    project_ids: List[str]
    invite_sent: bool
