"""
Project repository implementation using SQLAlchemy.
"""

from typing import Optional, List, Iterable

from sqlalchemy.orm import Session
from sqlalchemy import func

from timesheets.domain.models.project import Project, ProjectMembership
from timesheets.domain.repositories.project_repository import ProjectRepository as ProjectRepositoryInterface
from timesheets.infrastructure.db.models import ProjectModel, ProjectMemberModel
from timesheets.infrastructure.mappers.project_mapper import ProjectMapper, ProjectMembershipMapper
from timesheets.infrastructure.repositories.base import new_id, translate_store_errors


class SQLAlchemyProjectRepository(ProjectRepositoryInterface):
    """SQLAlchemy implementation of project repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ProjectMapper()
        self.membership_mapper = ProjectMembershipMapper()

    @translate_store_errors
    def save(self, project: Project) -> Project:
        """Save a project entity."""
        model = self.session.get(ProjectModel, project.id) if project.id else None

        if model is None:
            if project.is_new:
                project.id = new_id()
            model = self.mapper.domain_to_model(project)
            self.session.add(model)
        else:
            self.mapper.update_model(model, project)

        self.session.flush()
        return project

    @translate_store_errors
    def get_by_id(self, org_id: str, project_id: str) -> Optional[Project]:
        model = self.session.query(ProjectModel).filter_by(id=project_id, org_id=org_id).first()
        return self.mapper.model_to_domain(model) if model else None

    @translate_store_errors
    def find_by_org(self, org_id: str, active_only: bool = False) -> List[Project]:
        query = self.session.query(ProjectModel).filter(ProjectModel.org_id == org_id)
        if active_only:
            query = query.filter(ProjectModel.is_active.is_(True))

        models = query.order_by(func.lower(ProjectModel.name)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    @translate_store_errors
    def get_many(self, org_id: str, project_ids: Iterable[str]) -> List[Project]:
        ids = list({pid for pid in project_ids if pid})
        if not ids:
            return []
        models = self.session.query(ProjectModel).filter(
            ProjectModel.org_id == org_id,
            ProjectModel.id.in_(ids)
        ).all()
        return [self.mapper.model_to_domain(model) for model in models]

    @translate_store_errors
    def find_for_member(self, org_id: str, profile_id: str, active_only: bool = True) -> List[Project]:
        query = self.session.query(ProjectModel).join(
            ProjectMemberModel, ProjectMemberModel.project_id == ProjectModel.id
        ).filter(
            ProjectModel.org_id == org_id,
            ProjectMemberModel.org_id == org_id,
            ProjectMemberModel.profile_id == profile_id,
        )
        if active_only:
            query = query.filter(
                ProjectMemberModel.is_active.is_(True),
                ProjectModel.is_active.is_(True),
            )

        models = query.order_by(func.lower(ProjectModel.name)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    @translate_store_errors
    def get_membership(self, project_id: str, profile_id: str) -> Optional[ProjectMembership]:
        model = self.session.query(ProjectMemberModel).filter_by(
            project_id=project_id, profile_id=profile_id
        ).first()
        return self.membership_mapper.model_to_domain(model) if model else None

    @translate_store_errors
    def save_membership(self, membership: ProjectMembership) -> ProjectMembership:
        """Upsert on (project_id, profile_id)."""
        model = self.session.query(ProjectMemberModel).filter_by(
            project_id=membership.project_id, profile_id=membership.profile_id
        ).first()

        if model is None:
            if membership.is_new:
                membership.id = new_id()
            model = self.membership_mapper.domain_to_model(membership)
            self.session.add(model)
        else:
            membership.id = model.id
            self.membership_mapper.update_model(model, membership)

        self.session.flush()
        return membership

    @translate_store_errors
    def find_members(self, org_id: str, project_id: str, active_only: bool = True) -> List[ProjectMembership]:
        query = self.session.query(ProjectMemberModel).filter_by(org_id=org_id, project_id=project_id)
        if active_only:
            query = query.filter(ProjectMemberModel.is_active.is_(True))
        return [self.membership_mapper.model_to_domain(model) for model in query.all()]
