"""
Project mapper for converting between domain entities and database models.
"""

from timesheets.domain.models.project import Project, ProjectMembership
from timesheets.domain.models.organization import Organization
from timesheets.domain.models.value_objects import WeekStart
from timesheets.infrastructure.db.models import ProjectModel, ProjectMemberModel, OrganizationModel


class ProjectMapper:
    """Maps between Project domain entity and ProjectModel database model."""

    def domain_to_model(self, project: Project) -> ProjectModel:
        model = ProjectModel(id=project.id)
        self.update_model(model, project)
        return model

    def update_model(self, model: ProjectModel, project: Project) -> None:
        model.org_id = project.org_id
        model.name = project.name
        model.is_active = project.is_active
        model.week_start = WeekStart(project.week_start).value
        model.created_at = project.created_at
        model.updated_at = project.updated_at

    def model_to_domain(self, model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            org_id=model.org_id,
            name=model.name,
            is_active=bool(model.is_active),
            week_start=WeekStart(model.week_start or WeekStart.SUNDAY.value),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class ProjectMembershipMapper:
    """Maps between ProjectMembership and ProjectMemberModel."""

    def domain_to_model(self, membership: ProjectMembership) -> ProjectMemberModel:
        model = ProjectMemberModel(id=membership.id)
        self.update_model(model, membership)
        return model

    def update_model(self, model: ProjectMemberModel, membership: ProjectMembership) -> None:
        model.org_id = membership.org_id
        model.project_id = membership.project_id
        model.profile_id = membership.profile_id
        model.is_active = membership.is_active
        model.created_at = membership.created_at
        model.updated_at = membership.updated_at

    def model_to_domain(self, model: ProjectMemberModel) -> ProjectMembership:
        return ProjectMembership(
            id=model.id,
            org_id=model.org_id,
            project_id=model.project_id,
            profile_id=model.profile_id,
            is_active=bool(model.is_active),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class OrganizationMapper:
    """Maps between Organization and OrganizationModel."""

    def domain_to_model(self, organization: Organization) -> OrganizationModel:
        return OrganizationModel(
            id=organization.id,
            name=organization.name,
            created_at=organization.created_at,
        )

    def model_to_domain(self, model: OrganizationModel) -> Organization:
        return Organization(id=model.id, name=model.name, created_at=model.created_at)
