"""
Unit tests for hours computation.
"""

import pytest
from datetime import time
from decimal import Decimal

from timesheets.domain.models.base import ValidationError
from timesheets.domain.services.hours_service import (
    compute_hours,
    entry_warnings,
    parse_time,
    sum_hours,
    CROSSES_MIDNIGHT_WARNING,
)


class TestComputeHours:
    """Test cases for compute_hours."""

    def test_full_day_with_lunch(self):
        assert compute_hours("09:00", "17:00", Decimal("0.5")) == Decimal("7.50")

    def test_rounds_half_up_to_two_places(self):
        # 4h20m = 4.3333...
        assert compute_hours("08:00", "12:20") == Decimal("4.33")
        # 10 minutes = 0.1666...
        assert compute_hours("08:00", "08:10") == Decimal("0.17")

    def test_missing_clock_time_is_zero(self):
        assert compute_hours("09:00", None) == Decimal("0.00")
        assert compute_hours(None, "17:00") == Decimal("0.00")
        assert compute_hours("", "") == Decimal("0.00")

    def test_time_out_before_time_in_is_zero(self):
        assert compute_hours("22:00", "06:00") == Decimal("0.00")

    def test_lunch_longer_than_shift_is_zero(self):
        assert compute_hours("09:00", "10:00", Decimal("2")) == Decimal("0.00")

    def test_accepts_time_objects(self):
        assert compute_hours(time(7, 30), time(16, 0), 1) == Decimal("7.50")

    def test_seconds_are_counted(self):
        assert compute_hours("09:00:00", "09:30:30") == Decimal("0.51")


class TestParseTime:
    """Test cases for parse_time."""

    def test_parses_hh_mm(self):
        assert parse_time("07:05") == time(7, 5)

    def test_blank_is_none(self):
        assert parse_time("  ") is None
        assert parse_time(None) is None

    @pytest.mark.parametrize("value", ["7am", "25:00", "12:60", "12"])
    def test_invalid_values_raise(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_time(value, "time_in")
        assert exc_info.value.field == "time_in"


class TestWarnings:
    """Test cases for entry warnings and totals."""

    def test_crossing_midnight_warns(self):
        assert entry_warnings("22:00", "06:00") == [CROSSES_MIDNIGHT_WARNING]

    def test_normal_shift_has_no_warning(self):
        assert entry_warnings("09:00", "17:00") == []
        assert entry_warnings("09:00", None) == []

    def test_sum_hours(self):
        assert sum_hours([Decimal("7.50"), Decimal("4.33"), Decimal("0.17")]) == Decimal("12.00")
        assert sum_hours([]) == Decimal("0.00")
