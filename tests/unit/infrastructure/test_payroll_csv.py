"""
Unit tests for the payroll CSV exports.
"""

import csv
import io
from datetime import date
from decimal import Decimal

from timesheets.domain.models.time_entry import TimeEntry, TimeEntryStatus
from timesheets.domain.models.value_objects import DateRange
from timesheets.domain.services.payroll_service import PayrollService
from timesheets.infrastructure.export.payroll_csv import (
    SUMMARY_HEADER,
    DETAIL_HEADER,
    payroll_summary_csv,
    payroll_detail_csv,
    summary_filename,
    detail_filename,
)


def build_report(contractor_id=None):
    entries = [
        TimeEntry(
            id="e1", org_id="org-1", user_id="u1", project_id="p1",
            entry_date=date(2024, 3, 4), time_in="09:00", time_out="17:00",
            lunch_hours=Decimal("0.5"), status=TimeEntryStatus.APPROVED,
            hourly_rate_snapshot=Decimal("50"),
        ),
        TimeEntry(
            id="e2", org_id="org-1", user_id="u1", project_id="p1",
            entry_date=date(2024, 3, 5), time_in="09:00", time_out="10:00",
            status=TimeEntryStatus.APPROVED, hourly_rate_snapshot=Decimal("60"),
        ),
    ]
    return PayrollService().aggregate(
        entries,
        DateRange(date(2024, 3, 1), date(2024, 3, 31)),
        contractor_names={"u1": "Carl Contractor"},
        project_names={"p1": "Main Street"},
        contractor_id=contractor_id,
    )


def read_rows(content):
    return list(csv.reader(io.StringIO(content)))


class TestPayrollSummaryCsv:
    """Test cases for the summary export."""

    def test_header_and_sections(self):
        rows = read_rows(payroll_summary_csv(build_report()))

        assert rows[0] == SUMMARY_HEADER
        assert len(rows) == 3

        contractor_row = rows[1]
        assert contractor_row[:7] == ["Payroll Summary", "2024-03-01", "2024-03-31", "approved", "All", "All", ""]
        assert contractor_row[7:] == ["By Contractor", "Carl Contractor", "8.50", "mixed", "435.00"]

        project_row = rows[2]
        assert project_row[7:] == ["By Project", "Main Street", "8.50", "", "435.00"]

    def test_selected_contractor_is_named(self):
        rows = read_rows(payroll_summary_csv(build_report(contractor_id="u1")))
        assert rows[1][5] == "Carl Contractor"

    def test_empty_report_has_only_header(self):
        report = PayrollService().aggregate([], DateRange(date(2024, 3, 1), date(2024, 3, 31)), {}, {})
        assert read_rows(payroll_summary_csv(report)) == [SUMMARY_HEADER]


class TestPayrollDetailCsv:
    """Test cases for the detail export."""

    def test_one_row_per_entry(self):
        rows = read_rows(payroll_detail_csv(build_report()))

        assert rows[0] == DETAIL_HEADER
        assert rows[1] == [
            "e1", "2024-03-04", "approved", "Carl Contractor", "u1",
            "Main Street", "p1", "7.50", "50.00", "375.00",
        ]
        assert rows[2][-3:] == ["1.00", "60.00", "60.00"]

    def test_filenames(self):
        report = build_report()
        assert summary_filename(report) == "payroll_summary_2024-03-01_to_2024-03-31.csv"
        assert detail_filename(report) == "payroll_details_2024-03-01_to_2024-03-31.csv"
