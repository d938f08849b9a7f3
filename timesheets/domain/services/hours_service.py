"""
Hours computation for time entries.
Every place that shows or pays worked hours goes through compute_hours.
"""

from datetime import time
from decimal import Decimal
from typing import Optional, Union, List

from timesheets.domain.models.base import ValidationError
from timesheets.domain.models.value_objects import to_decimal, quantize_2


TimeInput = Union[time, str, None]

CROSSES_MIDNIGHT_WARNING = "Time out is before time in; the entry counts as 0 hours"


def parse_time(value: TimeInput, field: str = "time") -> Optional[time]:
    """
    Parse a clock time.
    Accepts a ``datetime.time`` or an ``HH:MM`` / ``HH:MM:SS`` string.
    Empty values are returned as None.
    """
    if value is None:
        return None
    if isinstance(value, time):
        return value

    text = str(value).strip()
    if not text:
        return None

    parts = text.split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        raise ValidationError(f"Invalid time '{value}', expected HH:MM", field)

    hour, minute = int(parts[0]), int(parts[1])
    second = int(parts[2]) if len(parts) == 3 else 0
    try:
        return time(hour, minute, second)
    except ValueError:
        raise ValidationError(f"Invalid time '{value}', expected HH:MM", field)


def _minutes(value: time) -> Decimal:
    return Decimal(value.hour * 60 + value.minute) + Decimal(value.second) / Decimal(60)


def compute_hours(
    time_in: TimeInput,
    time_out: TimeInput,
    lunch_hours: Union[Decimal, int, float, str, None] = None
) -> Decimal:
    """
    Worked hours for a single entry.

    hours = max((out - in) / 60 - lunch, 0), rounded to 2 decimals.
    A missing clock time yields 0 and time_out before time_in yields 0.
    """
    start = parse_time(time_in, "time_in")
    end = parse_time(time_out, "time_out")
    if start is None or end is None:
        return quantize_2(Decimal("0"))

    lunch = to_decimal(lunch_hours, "lunch_hours")

    raw_minutes = _minutes(end) - _minutes(start)
    if raw_minutes < 0:
        raw_minutes = Decimal("0")

    hours = raw_minutes / Decimal(60) - lunch
    if hours < 0:
        hours = Decimal("0")

    return quantize_2(hours)


def entry_warnings(time_in: TimeInput, time_out: TimeInput) -> List[str]:
    """Non-blocking warnings shown next to an entry."""
    start = parse_time(time_in, "time_in")
    end = parse_time(time_out, "time_out")
    if start is not None and end is not None and end < start:
        return [CROSSES_MIDNIGHT_WARNING]
    return []


def sum_hours(values) -> Decimal:
    """Sum already rounded hour values."""
    total = Decimal("0")
    for value in values:
        total += value
    return quantize_2(total)
