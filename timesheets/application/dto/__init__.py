"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import (
    BaseDTO,
    RequestDTO,
    ResponseDTO,
    DateRangeRequestDTO,
    HealthCheckResponseDTO,
    ErrorResponseDTO,
)
from .time_entry_dto import (
    TimeEntryLineDTO,
    SaveWeekRequestDTO,
    SubmitWeekRequestDTO,
    ListTimeEntriesRequestDTO,
    TimeEntryResponseDTO,
    TimeEntryListResponseDTO,
    WeekViewResponseDTO,
    SubmitWeekResponseDTO,
    DashboardResponseDTO,
)
from .approval_dto import (
    WeekGroupRequestDTO,
    ResolveWeekRequestDTO,
    ListApprovalsRequestDTO,
    BatchResultDTO,
    ApprovalGroupDTO,
    ApprovalQueueResponseDTO,
)
from .payroll_dto import PayrollRequestDTO, PayrollReportResponseDTO
from .profile_dto import (
    UpdateProfileRequestDTO,
    OnboardingRequestDTO,
    InviteRequestDTO,
    ProfileResponseDTO,
    MeResponseDTO,
    InviteResponseDTO,
)
from .project_dto import (
    CreateProjectRequestDTO,
    UpdateProjectRequestDTO,
    SetMembershipRequestDTO,
    ProjectResponseDTO,
    LoggableProjectsResponseDTO,
    MembershipResponseDTO,
)
