"""
Profile domain model.
A member of an organization: role, manager link and hourly rate.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from timesheets.domain.models.base import BaseEntity, ValidationError
from timesheets.domain.models.value_objects import to_decimal, quantize_2
from timesheets.domain.events.timesheet_events import ProfileRateChanged


class Role(str, Enum):
    """Organization role."""
    ADMIN = "admin"
    MANAGER = "manager"
    CONTRACTOR = "contractor"


APPROVER_ROLES = (Role.ADMIN, Role.MANAGER)


def normalize_rate(value: Union[Decimal, int, float, str, None]) -> Optional[Decimal]:
    """Parse an hourly rate. Empty means no rate; negative rates are invalid."""
    if value is None or value == "":
        return None
    rate = to_decimal(value, "hourly_rate")
    if rate < 0:
        raise ValidationError("Hourly rate cannot be negative", "hourly_rate")
    return quantize_2(rate)


@dataclass(eq=False)
class Profile(BaseEntity):
    """
    Profile entity.
    The id is the identity provider's user id. Profiles are never deleted,
    only deactivated.
    """

    org_id: str = ""
    role: Role = Role.CONTRACTOR
    full_name: Optional[str] = None
    email: Optional[str] = None
    hourly_rate: Optional[Decimal] = None
    is_active: bool = True
    manager_id: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    onboarding_completed_at: Optional[datetime] = None

    def __post_init__(self):
        super().__post_init__()
        self.role = Role(self.role)
        self.hourly_rate = normalize_rate(self.hourly_rate)
        if self.email:
            self.email = self.email.strip().lower()
        self.validate()

    def validate(self) -> None:
        """Validate profile state."""
        if not self.org_id:
            raise ValidationError("Profile must belong to an organization", "org_id")
        if self.manager_id and self.id and self.manager_id == self.id:
            raise ValidationError("A profile cannot be its own manager", "manager_id")
        if self.full_name and len(self.full_name) > 255:
            raise ValidationError("Full name too long (max 255 characters)", "full_name")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER

    @property
    def is_contractor(self) -> bool:
        return self.role == Role.CONTRACTOR

    @property
    def can_manage_reports(self) -> bool:
        """Whether this profile may be somebody's manager."""
        return self.is_active and self.role in APPROVER_ROLES

    @property
    def display_name(self) -> str:
        return self.full_name or self.email or self.id or ""

    @property
    def is_complete(self) -> bool:
        return is_profile_complete(self)

    def change_rate(self, new_rate, changed_by: str) -> bool:
        """
        Set a new hourly rate.
        Existing time entries keep their snapshot; only an audit event is raised.
        Returns True when the rate actually changed.
        """
        rate = normalize_rate(new_rate)
        if rate == self.hourly_rate:
            return False

        old_rate = self.hourly_rate
        self.hourly_rate = rate
        self.mark_as_updated()
        self.add_event(ProfileRateChanged(
            org_id=self.org_id,
            profile_id=self.id,
            changed_by=changed_by,
            old_rate=str(old_rate) if old_rate is not None else None,
            new_rate=str(rate) if rate is not None else None,
        ))
        return True

    def assign_manager(self, manager: Optional["Profile"]) -> None:
        """Link this profile to a manager of the same organization."""
        if manager is None:
            self.manager_id = None
            return
        if manager.id == self.id:
            raise ValidationError("A profile cannot be its own manager", "manager_id")
        if manager.org_id != self.org_id or not manager.can_manage_reports:
            raise ValidationError("Manager must be an active admin or manager of the organization", "manager_id")
        self.manager_id = manager.id

    def complete_onboarding(self) -> None:
        """Mark onboarding done once the completion rules hold."""
        missing = completion_problems(self)
        if missing:
            field_name, message = missing[0]
            raise ValidationError(message, field_name)
        if self.onboarding_completed_at is None:
            self.onboarding_completed_at = datetime.utcnow()
        self.mark_as_updated()

    def to_actor(self) -> "Actor":
        return Actor(
            id=self.id,
            org_id=self.org_id,
            role=self.role,
            manager_id=self.manager_id,
            is_active=self.is_active,
        )


def completion_problems(profile: Profile) -> list:
    """(field, message) pairs that keep a profile from being complete."""
    problems = []
    if not profile.is_active:
        problems.append(("is_active", "Profile is inactive"))
    if len((profile.full_name or "").strip()) < 2:
        problems.append(("full_name", "Full name must be at least 2 characters"))
    if profile.is_contractor and (profile.hourly_rate is None or profile.hourly_rate <= 0):
        problems.append(("hourly_rate", "Contractors need an hourly rate greater than 0"))
    return problems


def is_profile_complete(profile: Optional[Profile]) -> bool:
    """Active, named, and (for contractors) carrying a positive rate."""
    if profile is None:
        return False
    return not completion_problems(profile)


@dataclass(frozen=True)
class Actor:
    """
    The acting user of a request.
    Passed explicitly to every use case.
    """

    id: str
    org_id: str
    role: Role
    manager_id: Optional[str] = None
    is_active: bool = True

    def __post_init__(self):
        object.__setattr__(self, "role", Role(self.role))

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER

    @property
    def is_contractor(self) -> bool:
        return self.role == Role.CONTRACTOR
