"""
Payroll use cases for the application layer.
"""

import logging
from datetime import date
from typing import Optional

from timesheets.application.use_cases.base_use_case import QueryUseCase
from timesheets.application.use_cases.time_entry_use_cases import project_names_for, profile_names_for
from timesheets.application.dto.payroll_dto import PayrollRequestDTO, ALL_STATUSES
from timesheets.domain.models.profile import Actor
from timesheets.domain.models.value_objects import DateRange
from timesheets.domain.repositories.time_entry_repository import TimeEntryRepository
from timesheets.domain.repositories.profile_repository import ProfileRepository
from timesheets.domain.repositories.project_repository import ProjectRepository
from timesheets.domain.services.payroll_service import PayrollService, PayrollReport


logger = logging.getLogger(__name__)


class GeneratePayrollUseCase(QueryUseCase[PayrollRequestDTO, PayrollReport]):
    """
    Payroll for a period, built from the actor's scoped entries.
    The report is returned as a domain object so it can be rendered as JSON or CSV.
    """

    def __init__(
        self,
        time_entry_repository: TimeEntryRepository,
        profile_repository: ProfileRepository,
        project_repository: ProjectRepository,
        payroll_service: Optional[PayrollService] = None,
        today: Optional[date] = None,
    ):
        super().__init__()
        self.time_entry_repository = time_entry_repository
        self.profile_repository = profile_repository
        self.project_repository = project_repository
        self.payroll_service = payroll_service or PayrollService()
        self.today = today

    async def _execute_business_logic(self, actor: Actor, request: PayrollRequestDTO) -> PayrollReport:
        request = request or PayrollRequestDTO()
        date_range = request.to_date_range(default=DateRange.last_month(self.today), today=self.today)
        status_filter = None if request.status == ALL_STATUSES else request.status

        contractor_id = request.contractor_id
        if actor.is_contractor:
            if contractor_id and contractor_id != actor.id:
                logger.info(f"Contractor {actor.id} requested payroll of {contractor_id}, returning empty report")
                return self.payroll_service.aggregate(
                    [], date_range, {}, {},
                    status_filter=status_filter,
                    project_id=request.project_id,
                    contractor_id=contractor_id,
                )
            contractor_id = actor.id

        entries = self.time_entry_repository.find_visible(
            self.policy.visible_scope(actor),
            date_range=date_range,
            statuses=request.statuses(),
            user_id=contractor_id,
            project_id=request.project_id,
        )

        report = self.payroll_service.aggregate(
            entries,
            date_range,
            contractor_names=profile_names_for(self.profile_repository, actor.org_id, {e.user_id for e in entries}),
            project_names=project_names_for(self.project_repository, actor.org_id, entries),
            status_filter=status_filter,
            project_id=request.project_id,
            contractor_id=contractor_id,
        )
        logger.debug(
            f"Payroll {date_range.start}..{date_range.end} for {actor.id}: "
            f"{report.entry_count} entries, {report.total_pay} total"
        )
        return report
