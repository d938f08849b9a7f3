"""
Profile mapper for converting between domain entities and database models.
"""

from timesheets.domain.models.profile import Profile, Role
from timesheets.infrastructure.db.models import ProfileModel


class ProfileMapper:
    """Maps between Profile domain entity and ProfileModel database model."""

    FIELDS = (
        "org_id", "full_name", "email", "hourly_rate", "is_active", "manager_id",
        "phone", "address", "onboarding_completed_at", "created_at", "updated_at",
    )

    def domain_to_model(self, profile: Profile) -> ProfileModel:
        model = ProfileModel(id=profile.id)
        self.update_model(model, profile)
        return model

    def update_model(self, model: ProfileModel, profile: Profile) -> None:
        for name in self.FIELDS:
            setattr(model, name, getattr(profile, name))
        model.role = Role(profile.role).value

    def model_to_domain(self, model: ProfileModel) -> Profile:
        return Profile(
            id=model.id,
            org_id=model.org_id,
            role=Role(model.role),
            full_name=model.full_name,
            email=model.email,
            hourly_rate=model.hourly_rate,
            is_active=bool(model.is_active),
            manager_id=model.manager_id,
            phone=model.phone,
            address=model.address,
            onboarding_completed_at=model.onboarding_completed_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
