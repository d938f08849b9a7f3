"""
Profile repository implementation using SQLAlchemy.
"""

from typing import Optional, List, Iterable

from sqlalchemy.orm import Session
from sqlalchemy import func

from timesheets.domain.models.profile import Profile
from timesheets.domain.repositories.profile_repository import ProfileRepository as ProfileRepositoryInterface
from timesheets.domain.services.authorization_policy import EntryScope
from timesheets.infrastructure.db.models import ProfileModel
from timesheets.infrastructure.mappers.profile_mapper import ProfileMapper
from timesheets.infrastructure.repositories.base import new_id, scope_filter, translate_store_errors


class SQLAlchemyProfileRepository(ProfileRepositoryInterface):
    """SQLAlchemy implementation of profile repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ProfileMapper()

    @translate_store_errors
    def save(self, profile: Profile) -> Profile:
        """Insert or update; the id usually comes from the identity provider."""
        model = self.session.get(ProfileModel, profile.id) if profile.id else None

        if model is None:
            if profile.is_new:
                profile.id = new_id()
            model = self.mapper.domain_to_model(profile)
            self.session.add(model)
        else:
            self.mapper.update_model(model, profile)

        self.session.flush()
        return profile

    @translate_store_errors
    def get_by_id(self, org_id: str, profile_id: str) -> Optional[Profile]:
        model = self.session.query(ProfileModel).filter_by(id=profile_id, org_id=org_id).first()
        return self.mapper.model_to_domain(model) if model else None

    @translate_store_errors
    def find_by_id(self, profile_id: str) -> Optional[Profile]:
        model = self.session.get(ProfileModel, profile_id)
        return self.mapper.model_to_domain(model) if model else None

    @translate_store_errors
    def get_by_email(self, org_id: str, email: str) -> Optional[Profile]:
        model = self.session.query(ProfileModel).filter(
            ProfileModel.org_id == org_id,
            func.lower(ProfileModel.email) == (email or "").strip().lower()
        ).first()
        return self.mapper.model_to_domain(model) if model else None

    @translate_store_errors
    def get_many(self, org_id: str, profile_ids: Iterable[str]) -> List[Profile]:
        ids = list({pid for pid in profile_ids if pid})
        if not ids:
            return []
        models = self.session.query(ProfileModel).filter(
            ProfileModel.org_id == org_id,
            ProfileModel.id.in_(ids)
        ).all()
        return [self.mapper.model_to_domain(model) for model in models]

    @translate_store_errors
    def find_scoped(self, scope: EntryScope, include_inactive: bool = True) -> List[Profile]:
        query = self.session.query(ProfileModel).filter(
            scope_filter(scope, ProfileModel.org_id, ProfileModel.id)
        )
        if not include_inactive:
            query = query.filter(ProfileModel.is_active.is_(True))

        models = query.order_by(func.lower(func.coalesce(ProfileModel.full_name, ProfileModel.email))).all()
        return [self.mapper.model_to_domain(model) for model in models]

    @translate_store_errors
    def find_direct_reports(self, org_id: str, manager_id: str) -> List[Profile]:
        models = self.session.query(ProfileModel).filter_by(
            org_id=org_id, manager_id=manager_id
        ).order_by(ProfileModel.full_name).all()
        return [self.mapper.model_to_domain(model) for model in models]
