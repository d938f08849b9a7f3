"""
CSV serializers for payroll reports.
The summary sheet repeats the report filters on every row so a pasted
row keeps its context.
"""

import csv
import io
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from timesheets.domain.services.payroll_service import PayrollReport


SUMMARY_HEADER = [
    "Report", "Start", "End", "Status", "Project", "Contractor", "",
    "Section", "Name", "Hours", "Rate", "Pay",
]

DETAIL_HEADER = [
    "entry_id", "entry_date", "status", "contractor", "user_id",
    "project", "project_id", "hours", "hourly_rate_snapshot", "pay",
]

MIXED_RATE = "mixed"


def _money(value: Optional[Decimal]) -> str:
    return f"{(value or Decimal('0')):.2f}"


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def _write(header: List[str], rows: Iterable[List[Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow([_stringify(value) for value in row])
    return buffer.getvalue()


def _filter_label(selected: Optional[str], rows, id_attr: str, name_attr: str) -> str:
    if not selected:
        return "All"
    for row in rows:
        if getattr(row, id_attr) == selected:
            return getattr(row, name_attr) or selected
    return selected


def summary_filename(report: PayrollReport) -> str:
    return f"payroll_summary_{report.date_range.start.isoformat()}_to_{report.date_range.end.isoformat()}.csv"


def detail_filename(report: PayrollReport) -> str:
    return f"payroll_details_{report.date_range.start.isoformat()}_to_{report.date_range.end.isoformat()}.csv"


def payroll_summary_csv(report: PayrollReport) -> str:
    """By-contractor rows then by-project rows. A mixed rate prints as 'mixed'."""
    meta = [
        "Payroll Summary",
        report.date_range.start,
        report.date_range.end,
        report.status_filter or "all",
        _filter_label(report.project_id, report.by_project, "project_id", "project_name"),
        _filter_label(report.contractor_id, report.by_contractor, "user_id", "full_name"),
        "",
    ]

    rows = []
    for row in report.by_contractor:
        rate = MIXED_RATE if row.rate_is_mixed else _money(row.rate)
        rows.append(meta + ["By Contractor", row.full_name, _money(row.total_hours), rate, _money(row.total_pay)])
    for row in report.by_project:
        rows.append(meta + ["By Project", row.project_name, _money(row.total_hours), "", _money(row.total_pay)])

    return _write(SUMMARY_HEADER, rows)


def payroll_detail_csv(report: PayrollReport) -> str:
    """One row per entry."""
    rows = [
        [
            d.entry_id,
            d.entry_date,
            d.status,
            d.contractor_name,
            d.user_id,
            d.project_name,
            d.project_id,
            _money(d.hours),
            _money(d.hourly_rate_snapshot),
            _money(d.pay),
        ]
        for d in report.details
    ]
    return _write(DETAIL_HEADER, rows)
