"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
"""

from typing import Any, Dict, Optional
from datetime import datetime, date
from pydantic import BaseModel, Field, ConfigDict, validator

from timesheets.domain.models.value_objects import DateRange, DatePreset, WeekStart


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
        # Reject unknown fields
        extra="forbid",
    )


class RequestDTO(BaseDTO):
    """Base class for request DTOs."""

    def validate_request(self) -> None:
        """Cross-field checks that need domain errors. Override where needed."""
        pass


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
    )


class DateRangeRequestDTO(RequestDTO):
    """
    A date range given either explicitly or as a named preset.
    Explicit start/end win over the preset.
    """

    start: Optional[date] = Field(default=None, description="First day (inclusive)")
    end: Optional[date] = Field(default=None, description="Last day (inclusive)")
    preset: Optional[DatePreset] = Field(default=None, description="current_week, last_week, current_month or last_month")
    week_start: WeekStart = Field(default=WeekStart.SUNDAY, description="Week convention for week presets")

    def to_date_range(self, default: Optional[DateRange] = None, today: Optional[date] = None) -> Optional[DateRange]:
        """Resolve to a DateRange; an inverted range raises ValidationError."""
        if self.start or self.end:
            start = self.start or self.end
            end = self.end or self.start
            return DateRange(start, end)
        if self.preset:
            return DateRange.from_preset(self.preset, self.week_start, today)
        return default

    def validate_request(self) -> None:
        self.to_date_range()


class HealthCheckResponseDTO(ResponseDTO):
    """Health check response DTO."""

    status: str = Field(description="Service status")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    version: Optional[str] = Field(default=None, description="Application version")
    environment: Optional[str] = Field(default=None, description="Deployment environment")
    dependencies: Optional[Dict[str, str]] = Field(default=None, description="Dependency statuses")


class ErrorResponseDTO(ResponseDTO):
    """Error response DTO."""

    error: str = Field(description="Error type")
    message: str = Field(description="Error message")
    code: str = Field(description="Error category code")
    field: Optional[str] = Field(default=None, description="Offending field, for validation errors")
    details: Optional[Any] = Field(default=None, description="Additional error details")


def strip_or_none(value: Optional[str]) -> Optional[str]:
    """Trim text input; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class NotesMixin(BaseModel):
    """Mixin for notes field."""

    notes: Optional[str] = Field(default=None, max_length=2000, description="Notes")

    @validator("notes")
    def clean_notes(cls, v):
        return strip_or_none(v)
