"""
Time entry repository implementation using SQLAlchemy.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, List, Iterable, Dict

from sqlalchemy.orm import Session
from sqlalchemy import func, and_, desc

from timesheets.domain.models.time_entry import TimeEntry, TimeEntryStatus
from timesheets.domain.models.value_objects import DateRange
from timesheets.domain.repositories.time_entry_repository import TimeEntryRepository as TimeEntryRepositoryInterface
from timesheets.domain.services.authorization_policy import EntryScope
from timesheets.infrastructure.db.models import TimeEntryModel
from timesheets.infrastructure.mappers.time_entry_mapper import TimeEntryMapper
from timesheets.infrastructure.repositories.base import new_id, scope_filter, translate_store_errors


class SQLAlchemyTimeEntryRepository(TimeEntryRepositoryInterface):
    """SQLAlchemy implementation of time entry repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TimeEntryMapper()
        self.model = TimeEntryModel

    @translate_store_errors
    def save(self, time_entry: TimeEntry) -> TimeEntry:
        """Save a time entry entity."""
        model = None
        if not time_entry.is_new:
            model = self.session.get(TimeEntryModel, time_entry.id)

        if model is None:
            if time_entry.is_new:
                time_entry.id = new_id()
            model = self.mapper.domain_to_model(time_entry)
            self.session.add(model)
        else:
            self.mapper.update_model(model, time_entry)

        self.session.flush()
        return time_entry

    @translate_store_errors
    def get_by_id(self, org_id: str, entry_id: str) -> Optional[TimeEntry]:
        """Get time entry by ID."""
        model = self.session.query(TimeEntryModel).filter_by(id=entry_id, org_id=org_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    @translate_store_errors
    def delete(self, org_id: str, entry_id: str) -> bool:
        """Delete time entry by ID."""
        model = self.session.query(TimeEntryModel).filter_by(id=entry_id, org_id=org_id).first()
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True

    @translate_store_errors
    def find_visible(
        self,
        scope: EntryScope,
        date_range: Optional[DateRange] = None,
        statuses: Optional[Iterable[TimeEntryStatus]] = None,
        user_id: Optional[str] = None,
        project_id: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[TimeEntry]:
        """Entries under the actor's scope, newest first."""
        query = self.session.query(TimeEntryModel).filter(
            scope_filter(scope, TimeEntryModel.org_id, TimeEntryModel.user_id)
        )

        if date_range is not None:
            query = query.filter(TimeEntryModel.entry_date.between(date_range.start, date_range.end))
        if statuses:
            query = query.filter(TimeEntryModel.status.in_([TimeEntryStatus(s).value for s in statuses]))
        if user_id:
            query = query.filter(TimeEntryModel.user_id == user_id)
        if project_id:
            query = query.filter(TimeEntryModel.project_id == project_id)

        query = query.order_by(desc(TimeEntryModel.entry_date), TimeEntryModel.time_in, TimeEntryModel.id)
        if limit:
            query = query.limit(limit)

        return [self.mapper.model_to_domain(model) for model in query.all()]

    @translate_store_errors
    def find_for_user(self, org_id: str, user_id: str, date_range: DateRange) -> List[TimeEntry]:
        """A user's entries in a date range."""
        models = self.session.query(TimeEntryModel).filter(
            self._group_filter(org_id, user_id, date_range)
        ).order_by(TimeEntryModel.entry_date, TimeEntryModel.time_in, TimeEntryModel.created_at).all()

        return [self.mapper.model_to_domain(model) for model in models]

    def _group_filter(self, org_id: str, user_id: str, date_range: DateRange, *extra):
        return and_(
            TimeEntryModel.org_id == org_id,
            TimeEntryModel.user_id == user_id,
            TimeEntryModel.entry_date.between(date_range.start, date_range.end),
            *extra
        )

    def _bulk_update(self, condition, values) -> int:
        """One UPDATE statement; loaded rows are expired so later reads see the new state."""
        count = self.session.query(TimeEntryModel).filter(condition).update(values, synchronize_session=False)
        self.session.expire_all()
        return count

    @translate_store_errors
    def submit_week(self, org_id: str, user_id: str, date_range: DateRange) -> int:
        """draft/rejected -> submitted in one statement."""
        return self._bulk_update(
            self._group_filter(
                org_id, user_id, date_range,
                TimeEntryModel.status.in_([TimeEntryStatus.DRAFT.value, TimeEntryStatus.REJECTED.value]),
                TimeEntryModel.project_id.is_not(None),
            ),
            {
                TimeEntryModel.status: TimeEntryStatus.SUBMITTED.value,
                TimeEntryModel.updated_at: datetime.utcnow(),
            }
        )

    @translate_store_errors
    def approve_week(
        self,
        org_id: str,
        user_id: str,
        date_range: DateRange,
        approved_by: str,
        owner_rate: Optional[Decimal],
        exclude_ids: Iterable[str] = ()
    ) -> int:
        """submitted -> approved in one statement; a null snapshot takes the owner's rate."""
        conditions = [TimeEntryModel.status == TimeEntryStatus.SUBMITTED.value]
        exclude_ids = list(exclude_ids)
        if exclude_ids:
            conditions.append(TimeEntryModel.id.not_in(exclude_ids))

        now = datetime.utcnow()
        values = {
            TimeEntryModel.status: TimeEntryStatus.APPROVED.value,
            TimeEntryModel.approved_by: approved_by,
            TimeEntryModel.approved_at: now,
            TimeEntryModel.updated_at: now,
        }
        if owner_rate is not None:
            values[TimeEntryModel.hourly_rate_snapshot] = func.coalesce(
                TimeEntryModel.hourly_rate_snapshot, owner_rate
            )

        return self._bulk_update(self._group_filter(org_id, user_id, date_range, *conditions), values)

    @translate_store_errors
    def reject_week(
        self,
        org_id: str,
        user_id: str,
        date_range: DateRange,
        only_ids: Optional[Iterable[str]] = None
    ) -> int:
        """submitted -> rejected in one statement; clears the approver fields."""
        conditions = [TimeEntryModel.status == TimeEntryStatus.SUBMITTED.value]
        if only_ids is not None:
            conditions.append(TimeEntryModel.id.in_(list(only_ids)))

        return self._bulk_update(
            self._group_filter(org_id, user_id, date_range, *conditions),
            {
                TimeEntryModel.status: TimeEntryStatus.REJECTED.value,
                TimeEntryModel.approved_by: None,
                TimeEntryModel.approved_at: None,
                TimeEntryModel.updated_at: datetime.utcnow(),
            }
        )

    @translate_store_errors
    def find_submitted_ids(self, org_id: str, user_id: str, date_range: DateRange) -> List[str]:
        rows = self.session.query(TimeEntryModel.id).filter(
            self._group_filter(
                org_id, user_id, date_range,
                TimeEntryModel.status == TimeEntryStatus.SUBMITTED.value,
            )
        ).all()
        return [row[0] for row in rows]

    @translate_store_errors
    def count_by_status(self, scope: EntryScope, date_range: Optional[DateRange] = None) -> Dict[str, int]:
        query = self.session.query(TimeEntryModel.status, func.count(TimeEntryModel.id)).filter(
            scope_filter(scope, TimeEntryModel.org_id, TimeEntryModel.user_id)
        )
        if date_range is not None:
            query = query.filter(TimeEntryModel.entry_date.between(date_range.start, date_range.end))

        counts = {status.value: 0 for status in TimeEntryStatus}
        for status, count in query.group_by(TimeEntryModel.status).all():
            counts[status] = count
        return counts
