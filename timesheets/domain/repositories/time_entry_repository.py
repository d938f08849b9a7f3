"""Time Entry repository interface.
Defines the contract for time entry persistence and the batch workflow updates.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import List, Optional, Iterable, Dict

from timesheets.domain.models.time_entry import TimeEntry, TimeEntryStatus
from timesheets.domain.models.value_objects import DateRange


class TimeEntryRepository(ABC):
    """
    Repository interface for TimeEntry entity.
    Batch transitions are single conditional updates on the
    (org, user, date range, status) group they target.
    """

    @abstractmethod
    def save(self, time_entry: TimeEntry) -> TimeEntry:
        """
        Insert or update a time entry.
        Returns the saved time entry with updated timestamps.
        """
        pass

    @abstractmethod
    def get_by_id(self, org_id: str, entry_id: str) -> Optional[TimeEntry]:
        """
        Find a time entry of the organization by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def delete(self, org_id: str, entry_id: str) -> bool:
        """Hard delete an entry. Returns True when a row was removed."""
        pass

    @abstractmethod
    def find_visible(
        self,
        scope,
        date_range: Optional[DateRange] = None,
        statuses: Optional[Iterable[TimeEntryStatus]] = None,
        user_id: Optional[str] = None,
        project_id: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[TimeEntry]:
        """
        Entries readable under an EntryScope, newest date first.
        Extra filters only narrow the scope.
        """
        pass

    @abstractmethod
    def find_for_user(self, org_id: str, user_id: str, date_range: DateRange) -> List[TimeEntry]:
        """A user's entries in a date range, ordered by date."""
        pass

    @abstractmethod
    def submit_week(self, org_id: str, user_id: str, date_range: DateRange) -> int:
        """
        draft/rejected -> submitted for every entry of the group that has a project.
        Returns the number of rows changed.
        """
        pass

    @abstractmethod
    def approve_week(
        self,
        org_id: str,
        user_id: str,
        date_range: DateRange,
        approved_by: str,
        owner_rate: Optional[Decimal],
        exclude_ids: Iterable[str] = ()
    ) -> int:
        """
        submitted -> approved for the group, except ``exclude_ids``.
        A null rate snapshot is filled with ``owner_rate``.
        Returns the number of rows changed.
        """
        pass

    @abstractmethod
    def reject_week(
        self,
        org_id: str,
        user_id: str,
        date_range: DateRange,
        only_ids: Optional[Iterable[str]] = None
    ) -> int:
        """
        submitted -> rejected for the group, or only for ``only_ids`` of it.
        Returns the number of rows changed.
        """
        pass

    @abstractmethod
    def find_submitted_ids(self, org_id: str, user_id: str, date_range: DateRange) -> List[str]:
        """IDs of the group's submitted entries."""
        pass

    @abstractmethod
    def count_by_status(self, scope, date_range: Optional[DateRange] = None) -> Dict[str, int]:
        """Entry counts per status under a scope."""
        pass
