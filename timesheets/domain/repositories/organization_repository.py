"""
Organization repository interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from timesheets.domain.models.organization import Organization


class OrganizationRepository(ABC):
    """Repository interface for Organization entity."""

    @abstractmethod
    def save(self, organization: Organization) -> Organization:
        """Insert an organization. Organizations are never updated."""
        pass

    @abstractmethod
    def get_by_id(self, org_id: str) -> Optional[Organization]:
        """Find an organization by its ID."""
        pass
