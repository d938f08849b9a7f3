"""
Payroll DTOs for the application layer.
"""

from typing import Optional, List
from datetime import date
from decimal import Decimal
from pydantic import Field

from timesheets.domain.models.base import ValidationError
from timesheets.domain.models.time_entry import TimeEntryStatus
from timesheets.domain.services.payroll_service import PayrollReport

from .base_dto import ResponseDTO, DateRangeRequestDTO


ALL_STATUSES = "all"


class PayrollRequestDTO(DateRangeRequestDTO):
    """Report filters. Defaults to approved entries of last month."""

    status: str = Field(default=TimeEntryStatus.APPROVED.value, description="A status or 'all'")
    project_id: Optional[str] = Field(default=None)
    contractor_id: Optional[str] = Field(default=None)

    def statuses(self) -> Optional[List[TimeEntryStatus]]:
        if self.status == ALL_STATUSES:
            return None
        return [TimeEntryStatus(self.status)]

    def validate_request(self) -> None:
        super().validate_request()
        if self.status != ALL_STATUSES:
            try:
                TimeEntryStatus(self.status)
            except ValueError:
                raise ValidationError(f"Unknown status '{self.status}'", "status")


class ContractorPayrollDTO(ResponseDTO):
    user_id: str
    full_name: str
    total_hours: Decimal
    rate: Decimal
    rate_is_mixed: bool
    total_pay: Decimal
    entry_count: int


class ProjectPayrollDTO(ResponseDTO):
    project_id: Optional[str] = None
    project_name: str
    total_hours: Decimal
    total_pay: Decimal
    entry_count: int


class PayrollDetailDTO(ResponseDTO):
    entry_id: str
    entry_date: date
    status: str
    user_id: str
    contractor_name: str
    project_id: Optional[str] = None
    project_name: str
    hours: Decimal
    hourly_rate_snapshot: Optional[Decimal] = None
    pay: Decimal


class PayrollReportResponseDTO(ResponseDTO):
    """Payroll report as JSON."""

    start: date
    end: date
    status: str
    project_id: Optional[str] = None
    contractor_id: Optional[str] = None
    by_contractor: List[ContractorPayrollDTO]
    by_project: List[ProjectPayrollDTO]
    details: List[PayrollDetailDTO]
    total_hours: Decimal
    total_pay: Decimal
    entry_count: int

    @classmethod
    def from_report(cls, report: PayrollReport) -> "PayrollReportResponseDTO":
        return cls(
            start=report.date_range.start,
            end=report.date_range.end,
            status=report.status_filter or ALL_STATUSES,
            project_id=report.project_id,
            contractor_id=report.contractor_id,
            by_contractor=[ContractorPayrollDTO(**vars(row)) for row in report.by_contractor],
            by_project=[ProjectPayrollDTO(**vars(row)) for row in report.by_project],
            details=[PayrollDetailDTO(**vars(row)) for row in report.details],
            total_hours=report.total_hours,
            total_pay=report.total_pay,
            entry_count=report.entry_count,
        )
