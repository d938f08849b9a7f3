"""
Project repository interface.
Defines the contract for projects and their memberships.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Iterable

from timesheets.domain.models.project import Project, ProjectMembership


class ProjectRepository(ABC):
    """
    Repository interface for Project entity and ProjectMembership rows.
    """

    @abstractmethod
    def save(self, project: Project) -> Project:
        """Insert or update a project."""
        pass

    @abstractmethod
    def get_by_id(self, org_id: str, project_id: str) -> Optional[Project]:
        """
        Find a project of the organization by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def find_by_org(self, org_id: str, active_only: bool = False) -> List[Project]:
        """Projects of the organization ordered by name."""
        pass

    @abstractmethod
    def get_many(self, org_id: str, project_ids: Iterable[str]) -> List[Project]:
        """Projects of the organization among ``project_ids``."""
        pass

    @abstractmethod
    def find_for_member(self, org_id: str, profile_id: str, active_only: bool = True) -> List[Project]:
        """
        Projects the profile holds a membership on.
        With ``active_only`` both the membership and the project must be active.
        """
        pass

    @abstractmethod
    def get_membership(self, project_id: str, profile_id: str) -> Optional[ProjectMembership]:
        """The membership row for a (project, profile) pair, active or not."""
        pass

    @abstractmethod
    def save_membership(self, membership: ProjectMembership) -> ProjectMembership:
        """Insert or update a membership row."""
        pass

    @abstractmethod
    def find_members(self, org_id: str, project_id: str, active_only: bool = True) -> List[ProjectMembership]:
        """Memberships of a project."""
        pass
