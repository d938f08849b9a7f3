"""
Project membership resolver.
Decides which projects a profile may log time against.
"""

import logging
from typing import List, Optional

from timesheets.domain.models.base import AuthorizationError
from timesheets.domain.models.profile import Actor, Role
from timesheets.domain.models.project import Project
from timesheets.domain.repositories.project_repository import ProjectRepository


logger = logging.getLogger(__name__)


class MembershipService:
    """Resolves project access from role and active memberships."""

    def __init__(self, project_repository: ProjectRepository):
        self.project_repository = project_repository

    def resolve_loggable_projects(self, actor: Actor) -> List[Project]:
        """
        Active projects the actor may log against.
        Admins and managers get every active project of the org; contractors
        get active projects they hold an active membership on.
        """
        if not actor.is_active:
            return []

        if actor.role in (Role.ADMIN, Role.MANAGER):
            return self.project_repository.find_by_org(actor.org_id, active_only=True)

        return self.project_repository.find_for_member(actor.org_id, actor.id, active_only=True)

    def can_log_on_project(self, actor: Actor, project_id: Optional[str]) -> bool:
        if not project_id:
            return False
        return any(p.id == project_id for p in self.resolve_loggable_projects(actor))

    def ensure_can_log(self, actor: Actor, project_ids) -> None:
        """Raise AuthorizationError if any project is outside the actor's loggable set."""
        wanted = {pid for pid in project_ids if pid}
        if not wanted:
            return

        allowed = {p.id for p in self.resolve_loggable_projects(actor)}
        denied = wanted - allowed
        if denied:
            logger.info(f"Profile {actor.id} denied logging on projects {sorted(denied)}")
            raise AuthorizationError("You don't have access to log time on this project")
