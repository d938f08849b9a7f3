"""Payroll service for aggregating worked hours into pay.
Pay always uses the entry's rate snapshot, never the profile's live rate.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Dict, Optional, Iterable

from timesheets.domain.models.time_entry import TimeEntry, TimeEntryStatus
from timesheets.domain.models.value_objects import DateRange, quantize_2


ZERO = Decimal("0.00")


@dataclass
class PayrollDetailRow:
    """One entry of the report."""
    entry_id: str
    entry_date: date
    status: str
    user_id: str
    contractor_name: str
    project_id: Optional[str]
    project_name: str
    hours: Decimal
    hourly_rate_snapshot: Optional[Decimal]
    pay: Decimal


@dataclass
class ContractorPayrollRow:
    """Totals for one contractor."""
    user_id: str
    full_name: str
    total_hours: Decimal = ZERO
    rate: Decimal = ZERO
    rate_is_mixed: bool = False
    total_pay: Decimal = ZERO
    entry_count: int = 0


@dataclass
class ProjectPayrollRow:
    """Totals for one project. No rate is shown per project."""
    project_id: Optional[str]
    project_name: str
    total_hours: Decimal = ZERO
    total_pay: Decimal = ZERO
    entry_count: int = 0


@dataclass
class PayrollReport:
    """Aggregated payroll for a period."""
    date_range: DateRange
    status_filter: Optional[str]
    project_id: Optional[str] = None
    contractor_id: Optional[str] = None
    by_contractor: List[ContractorPayrollRow] = field(default_factory=list)
    by_project: List[ProjectPayrollRow] = field(default_factory=list)
    details: List[PayrollDetailRow] = field(default_factory=list)
    total_hours: Decimal = ZERO
    total_pay: Decimal = ZERO

    @property
    def entry_count(self) -> int:
        return len(self.details)

    @property
    def is_empty(self) -> bool:
        return not self.details


def _sort_key(name: str, fallback: Optional[str]) -> tuple:
    return ((name or "").lower(), fallback or "")


class PayrollService:
    """
    Domain service for payroll calculations.
    Groups entries by contractor and by project.
    """

    def aggregate(
        self,
        entries: Iterable[TimeEntry],
        date_range: DateRange,
        contractor_names: Dict[str, str],
        project_names: Dict[str, str],
        status_filter: Optional[str] = TimeEntryStatus.APPROVED.value,
        project_id: Optional[str] = None,
        contractor_id: Optional[str] = None
    ) -> PayrollReport:
        """
        Build a payroll report from already scoped entries.
        A null rate snapshot pays 0.
        """
        report = PayrollReport(
            date_range=date_range,
            status_filter=status_filter,
            project_id=project_id,
            contractor_id=contractor_id,
        )

        contractors: Dict[str, ContractorPayrollRow] = {}
        projects: Dict[Optional[str], ProjectPayrollRow] = {}
        total_hours = Decimal("0")
        total_pay = Decimal("0")

        for entry in entries:
            hours = entry.hours_worked
            rate = entry.hourly_rate_snapshot if entry.hourly_rate_snapshot is not None else ZERO
            pay = quantize_2(hours * rate)

            contractor_name = contractor_names.get(entry.user_id) or entry.user_id
            project_name = project_names.get(entry.project_id, "") if entry.project_id else ""

            report.details.append(PayrollDetailRow(
                entry_id=entry.id,
                entry_date=entry.entry_date,
                status=TimeEntryStatus(entry.status).value,
                user_id=entry.user_id,
                contractor_name=contractor_name,
                project_id=entry.project_id,
                project_name=project_name,
                hours=hours,
                hourly_rate_snapshot=entry.hourly_rate_snapshot,
                pay=pay,
            ))

            row = contractors.get(entry.user_id)
            if row is None:
                # the first rate seen is the representative one
                row = ContractorPayrollRow(user_id=entry.user_id, full_name=contractor_name, rate=rate)
                contractors[entry.user_id] = row
            elif rate != row.rate:
                row.rate_is_mixed = True
            row.total_hours += hours
            row.total_pay += pay
            row.entry_count += 1

            project_row = projects.get(entry.project_id)
            if project_row is None:
                project_row = ProjectPayrollRow(project_id=entry.project_id, project_name=project_name)
                projects[entry.project_id] = project_row
            project_row.total_hours += hours
            project_row.total_pay += pay
            project_row.entry_count += 1

            total_hours += hours
            total_pay += pay

        for row in contractors.values():
            row.total_hours = quantize_2(row.total_hours)
            row.total_pay = quantize_2(row.total_pay)
            row.rate = quantize_2(row.rate)
        for project_row in projects.values():
            project_row.total_hours = quantize_2(project_row.total_hours)
            project_row.total_pay = quantize_2(project_row.total_pay)

        report.by_contractor = sorted(contractors.values(), key=lambda r: _sort_key(r.full_name, r.user_id))
        report.by_project = sorted(projects.values(), key=lambda r: _sort_key(r.project_name, r.project_id))
        report.details.sort(key=lambda d: (d.entry_date, d.contractor_name.lower(), d.project_name.lower()))
        report.total_hours = quantize_2(total_hours)
        report.total_pay = quantize_2(total_pay)
        return report
