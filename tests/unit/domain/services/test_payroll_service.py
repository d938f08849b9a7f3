"""
Unit tests for payroll aggregation.
"""

from datetime import date
from decimal import Decimal

from timesheets.domain.models.time_entry import TimeEntry, TimeEntryStatus
from timesheets.domain.models.value_objects import DateRange
from timesheets.domain.services.payroll_service import PayrollService


PERIOD = DateRange(date(2024, 3, 1), date(2024, 3, 31))


def entry(entry_id, user_id, project_id, day, time_in, time_out, rate, lunch="0"):
    return TimeEntry(
        id=entry_id,
        org_id="org-1",
        user_id=user_id,
        project_id=project_id,
        entry_date=day,
        time_in=time_in,
        time_out=time_out,
        lunch_hours=Decimal(lunch),
        status=TimeEntryStatus.APPROVED,
        hourly_rate_snapshot=rate,
    )


class TestPayrollService:
    """Test cases for PayrollService.aggregate."""

    def setup_method(self):
        self.service = PayrollService()
        self.contractors = {"u1": "Bea", "u2": "Al"}
        self.projects = {"p1": "Roof", "p2": "Basement"}

    def test_single_entry(self):
        report = self.service.aggregate(
            [entry("e1", "u1", "p1", date(2024, 3, 4), "09:00", "17:00", Decimal("50"), lunch="0.5")],
            PERIOD, self.contractors, self.projects,
        )

        assert report.total_hours == Decimal("7.50")
        assert report.total_pay == Decimal("375.00")
        assert report.by_contractor[0].rate == Decimal("50.00")
        assert not report.by_contractor[0].rate_is_mixed
        assert report.by_project[0].project_name == "Roof"
        assert report.details[0].pay == Decimal("375.00")

    def test_groups_and_sorts_by_name(self):
        entries = [
            entry("e1", "u1", "p1", date(2024, 3, 4), "09:00", "13:00", Decimal("50")),
            entry("e2", "u2", "p2", date(2024, 3, 5), "09:00", "11:00", Decimal("30")),
            entry("e3", "u2", "p1", date(2024, 3, 6), "09:00", "10:00", Decimal("30")),
        ]
        report = self.service.aggregate(entries, PERIOD, self.contractors, self.projects)

        assert [r.full_name for r in report.by_contractor] == ["Al", "Bea"]
        assert [r.project_name for r in report.by_project] == ["Basement", "Roof"]

        al = report.by_contractor[0]
        assert al.total_hours == Decimal("3.00")
        assert al.total_pay == Decimal("90.00")
        assert al.entry_count == 2

        roof = report.by_project[1]
        assert roof.total_hours == Decimal("5.00")
        assert roof.total_pay == Decimal("230.00")
        assert report.total_pay == Decimal("290.00")

    def test_rate_change_marks_contractor_rate_as_mixed(self):
        entries = [
            entry("e1", "u1", "p1", date(2024, 3, 4), "09:00", "10:00", Decimal("50")),
            entry("e2", "u1", "p1", date(2024, 3, 5), "09:00", "10:00", Decimal("60")),
        ]
        report = self.service.aggregate(entries, PERIOD, self.contractors, self.projects)

        row = report.by_contractor[0]
        assert row.rate_is_mixed
        assert row.total_pay == Decimal("110.00")

    def test_missing_snapshot_pays_zero(self):
        report = self.service.aggregate(
            [entry("e1", "u1", "p1", date(2024, 3, 4), "09:00", "17:00", None)],
            PERIOD, self.contractors, self.projects,
        )
        assert report.total_hours == Decimal("8.00")
        assert report.total_pay == Decimal("0.00")
        assert report.details[0].hourly_rate_snapshot is None

    def test_totals_add_up(self):
        entries = [
            entry("e1", "u1", "p1", date(2024, 3, 4), "08:00", "12:20", Decimal("33.33")),
            entry("e2", "u2", "p2", date(2024, 3, 4), "08:00", "08:10", Decimal("47.5")),
            entry("e3", "u2", "p1", date(2024, 3, 7), "13:00", "17:45", Decimal("47.5")),
        ]
        report = self.service.aggregate(entries, PERIOD, self.contractors, self.projects)

        assert sum(r.total_hours for r in report.by_contractor) == report.total_hours
        assert sum(r.total_hours for r in report.by_project) == report.total_hours
        assert sum(r.total_pay for r in report.by_contractor) == report.total_pay
        assert sum(d.pay for d in report.details) == report.total_pay

    def test_unknown_names_fall_back_to_ids(self):
        report = self.service.aggregate(
            [entry("e1", "u9", None, date(2024, 3, 4), "09:00", "10:00", Decimal("10"))],
            PERIOD, {}, {},
        )
        assert report.by_contractor[0].full_name == "u9"
        assert report.by_project[0].project_id is None
        assert report.by_project[0].project_name == ""

    def test_empty(self):
        report = self.service.aggregate([], PERIOD, {}, {})
        assert report.is_empty
        assert report.total_pay == Decimal("0.00")
        assert report.status_filter == "approved"
