"""
Organization repository implementation using SQLAlchemy.
"""

from typing import Optional

from sqlalchemy.orm import Session

from timesheets.domain.models.organization import Organization
from timesheets.domain.repositories.organization_repository import OrganizationRepository as OrganizationRepositoryInterface
from timesheets.infrastructure.db.models import OrganizationModel
from timesheets.infrastructure.mappers.project_mapper import OrganizationMapper
from timesheets.infrastructure.repositories.base import new_id, translate_store_errors


class SQLAlchemyOrganizationRepository(OrganizationRepositoryInterface):
    """SQLAlchemy implementation of organization repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = OrganizationMapper()

    @translate_store_errors
    def save(self, organization: Organization) -> Organization:
        if organization.is_new:
            organization.id = new_id()
        self.session.add(self.mapper.domain_to_model(organization))
        self.session.flush()
        return organization

    @translate_store_errors
    def get_by_id(self, org_id: str) -> Optional[Organization]:
        model = self.session.get(OrganizationModel, org_id)
        return self.mapper.model_to_domain(model) if model else None
