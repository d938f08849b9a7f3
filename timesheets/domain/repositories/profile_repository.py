"""
Profile repository interface.
Defines the contract for profile data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Iterable

from timesheets.domain.models.profile import Profile


class ProfileRepository(ABC):
    """
    Repository interface for Profile entity.
    All lookups are bounded by an organization.
    """

    @abstractmethod
    def save(self, profile: Profile) -> Profile:
        """
        Insert or update a profile.
        Returns the saved profile with updated timestamps.
        """
        pass

    @abstractmethod
    def get_by_id(self, org_id: str, profile_id: str) -> Optional[Profile]:
        """
        Find a profile of the organization by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def find_by_id(self, profile_id: str) -> Optional[Profile]:
        """
        Find a profile by its ID across organizations.
        Only used to resolve the acting user from an access token.
        """
        pass

    @abstractmethod
    def get_by_email(self, org_id: str, email: str) -> Optional[Profile]:
        """Find a profile of the organization by e-mail (case-insensitive)."""
        pass

    @abstractmethod
    def get_many(self, org_id: str, profile_ids: Iterable[str]) -> List[Profile]:
        """Profiles of the organization among ``profile_ids``."""
        pass

    @abstractmethod
    def find_scoped(self, scope, include_inactive: bool = True) -> List[Profile]:
        """
        Profiles visible under an EntryScope, ordered by name.
        """
        pass

    @abstractmethod
    def find_direct_reports(self, org_id: str, manager_id: str) -> List[Profile]:
        """Profiles whose manager_id is ``manager_id``."""
        pass
