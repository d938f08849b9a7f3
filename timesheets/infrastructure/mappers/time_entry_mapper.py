"""
Time entry mapper for converting between domain entities and database models.
"""

from timesheets.domain.models.time_entry import TimeEntry, TimeEntryStatus
from timesheets.infrastructure.db.models import TimeEntryModel


class TimeEntryMapper:
    """Maps between TimeEntry domain entity and TimeEntryModel database model."""

    FIELDS = (
        "org_id", "user_id", "project_id", "entry_date", "time_in", "time_out",
        "lunch_hours", "mileage", "notes", "hourly_rate_snapshot",
        "approved_by", "approved_at", "created_at", "updated_at",
    )

    def domain_to_model(self, time_entry: TimeEntry) -> TimeEntryModel:
        """Convert TimeEntry domain entity to TimeEntryModel."""
        model = TimeEntryModel(id=time_entry.id)
        self.update_model(model, time_entry)
        return model

    def update_model(self, model: TimeEntryModel, time_entry: TimeEntry) -> None:
        """Copy the entity's state onto an existing row."""
        for name in self.FIELDS:
            setattr(model, name, getattr(time_entry, name))
        model.status = TimeEntryStatus(time_entry.status).value

    def model_to_domain(self, model: TimeEntryModel) -> TimeEntry:
        """Convert TimeEntryModel to TimeEntry domain entity."""
        return TimeEntry(
            id=model.id,
            org_id=model.org_id,
            user_id=model.user_id,
            project_id=model.project_id,
            entry_date=model.entry_date,
            time_in=model.time_in,
            time_out=model.time_out,
            lunch_hours=model.lunch_hours,
            mileage=model.mileage,
            notes=model.notes,
            status=TimeEntryStatus(model.status) if model.status else TimeEntryStatus.DRAFT,
            hourly_rate_snapshot=model.hourly_rate_snapshot,
            approved_by=model.approved_by,
            approved_at=model.approved_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
