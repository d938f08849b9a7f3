"""
Value Objects for the domain layer.
Immutable objects that represent values and encapsulate business logic.
"""

from typing import Optional, Union, Tuple
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from datetime import date, timedelta
from dataclasses import dataclass
from enum import Enum

from timesheets.domain.models.base import ValueObject, ValidationError


TWO_PLACES = Decimal("0.01")


def to_decimal(value: Union[Decimal, int, float, str, None], field: str = "value") -> Decimal:
    """Coerce a numeric input to Decimal, treating None as zero."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid number: {value}", field)


def quantize_2(value: Decimal) -> Decimal:
    """Round a decimal to two places, half up."""
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class WeekStart(str, Enum):
    """Reporting week convention of a project."""
    SUNDAY = "sunday"
    MONDAY = "monday"


class DatePreset(str, Enum):
    """Named date ranges offered by reports."""
    CURRENT_WEEK = "current_week"
    LAST_WEEK = "last_week"
    CURRENT_MONTH = "current_month"
    LAST_MONTH = "last_month"


def start_of_week(day: date, week_start: WeekStart = WeekStart.SUNDAY) -> date:
    """First day of the reporting week containing ``day``."""
    week_start = WeekStart(week_start)
    # date.weekday(): Monday=0 .. Sunday=6
    if week_start == WeekStart.MONDAY:
        diff = day.weekday()
    else:
        diff = (day.weekday() + 1) % 7
    return day - timedelta(days=diff)


def week_bounds(day: date, week_start: WeekStart = WeekStart.SUNDAY) -> Tuple[date, date]:
    """Inclusive (start, end) of the reporting week containing ``day``."""
    start = start_of_week(day, week_start)
    return start, start + timedelta(days=6)


def _first_day_of_month(day: date) -> date:
    return day.replace(day=1)


def _last_day_of_month(day: date) -> date:
    next_month = (day.replace(day=28) + timedelta(days=4)).replace(day=1)
    return next_month - timedelta(days=1)


@dataclass(frozen=True)
class DateRange(ValueObject):
    """Inclusive range of calendar days."""

    start: date
    end: date

    def validate(self) -> None:
        """A range must not be inverted."""
        if self.start is None or self.end is None:
            raise ValidationError("Date range requires both start and end", "date_range")
        if self.end < self.start:
            raise ValidationError("End date must be on or after start date", "end")

    def contains(self, day: date) -> bool:
        """Check whether a day falls inside the range."""
        return self.start <= day <= self.end

    @property
    def days(self) -> list:
        """All days of the range in order."""
        return [self.start + timedelta(days=i) for i in range((self.end - self.start).days + 1)]

    @classmethod
    def week_of(cls, day: date, week_start: WeekStart = WeekStart.SUNDAY) -> "DateRange":
        """Reporting week containing ``day``."""
        start, end = week_bounds(day, week_start)
        return cls(start, end)

    @classmethod
    def from_preset(
        cls,
        preset: Union[DatePreset, str],
        week_start: WeekStart = WeekStart.SUNDAY,
        today: Optional[date] = None
    ) -> "DateRange":
        """Resolve a named preset relative to ``today``."""
        today = today or date.today()
        preset = DatePreset(preset)

        if preset == DatePreset.CURRENT_WEEK:
            return cls.week_of(today, week_start)

        if preset == DatePreset.LAST_WEEK:
            return cls.week_of(today - timedelta(days=7), week_start)

        if preset == DatePreset.CURRENT_MONTH:
            return cls(_first_day_of_month(today), _last_day_of_month(today))

        last_month = _first_day_of_month(today) - timedelta(days=1)
        return cls(_first_day_of_month(last_month), _last_day_of_month(last_month))

    @classmethod
    def last_month(cls, today: Optional[date] = None) -> "DateRange":
        """Default payroll period: the previous calendar month."""
        return cls.from_preset(DatePreset.LAST_MONTH, today=today)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}
