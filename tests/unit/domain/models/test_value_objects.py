"""
Unit tests for date ranges and reporting weeks.
"""

import pytest
from datetime import date
from decimal import Decimal

from timesheets.domain.models.base import ValidationError
from timesheets.domain.models.value_objects import (
    DateRange,
    DatePreset,
    WeekStart,
    start_of_week,
    to_decimal,
    quantize_2,
)


class TestWeeks:
    """Test cases for week boundaries."""

    def test_sunday_week(self):
        # Wednesday 2024-03-06
        week = DateRange.week_of(date(2024, 3, 6), WeekStart.SUNDAY)
        assert week == DateRange(date(2024, 3, 3), date(2024, 3, 9))

    def test_monday_week(self):
        week = DateRange.week_of(date(2024, 3, 6), WeekStart.MONDAY)
        assert week == DateRange(date(2024, 3, 4), date(2024, 3, 10))

    def test_sunday_belongs_to_different_weeks(self):
        sunday = date(2024, 3, 10)
        assert start_of_week(sunday, WeekStart.SUNDAY) == sunday
        assert start_of_week(sunday, WeekStart.MONDAY) == date(2024, 3, 4)

    def test_accepts_plain_strings(self):
        assert start_of_week(date(2024, 3, 6), "monday") == date(2024, 3, 4)

    def test_week_has_seven_days(self):
        week = DateRange.week_of(date(2024, 2, 28))
        assert len(week.days) == 7
        assert week.contains(date(2024, 2, 29))


class TestPresets:
    """Test cases for named ranges."""

    TODAY = date(2024, 3, 6)

    def test_current_week(self):
        assert DateRange.from_preset(DatePreset.CURRENT_WEEK, today=self.TODAY) == DateRange(
            date(2024, 3, 3), date(2024, 3, 9)
        )

    def test_last_week(self):
        assert DateRange.from_preset("last_week", WeekStart.MONDAY, self.TODAY) == DateRange(
            date(2024, 2, 26), date(2024, 3, 3)
        )

    def test_current_month(self):
        assert DateRange.from_preset(DatePreset.CURRENT_MONTH, today=self.TODAY) == DateRange(
            date(2024, 3, 1), date(2024, 3, 31)
        )

    def test_last_month_handles_leap_year(self):
        assert DateRange.last_month(self.TODAY) == DateRange(date(2024, 2, 1), date(2024, 2, 29))

    def test_last_month_in_january(self):
        assert DateRange.last_month(date(2024, 1, 15)) == DateRange(date(2023, 12, 1), date(2023, 12, 31))

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            DateRange.from_preset("fortnight", today=self.TODAY)


class TestDateRange:
    """Test cases for range validation."""

    def test_inverted_range_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            DateRange(date(2024, 3, 9), date(2024, 3, 3))
        assert exc_info.value.field == "end"

    def test_single_day_range(self):
        day = date(2024, 3, 3)
        assert DateRange(day, day).days == [day]

    def test_to_dict(self):
        assert DateRange(date(2024, 3, 3), date(2024, 3, 9)).to_dict() == {
            "start": "2024-03-03",
            "end": "2024-03-09",
        }


class TestMoney:
    """Test cases for decimal helpers."""

    def test_half_up_rounding(self):
        assert quantize_2(Decimal("2.675")) == Decimal("2.68")
        assert quantize_2(Decimal("2.665")) == Decimal("2.67")

    def test_to_decimal(self):
        assert to_decimal(None) == Decimal("0")
        assert to_decimal("12.5") == Decimal("12.5")
        assert to_decimal(3) == Decimal("3")

    def test_to_decimal_rejects_garbage(self):
        with pytest.raises(ValidationError):
            to_decimal("abc", "mileage")
