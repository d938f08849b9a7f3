"""
Application layer use cases.
Business logic for the timesheet approval and payroll engine.
"""

from .base_use_case import BaseUseCase, QueryUseCase, CommandUseCase
from .time_entry_use_cases import (
    SaveWeekUseCase,
    SubmitWeekUseCase,
    GetWeekUseCase,
    WeekQuery,
    ListTimeEntriesUseCase,
    DeleteTimeEntryUseCase,
    DashboardUseCase,
)
from .approval_use_cases import (
    ApproveWeekUseCase,
    RejectWeekUseCase,
    ResolveWeekUseCase,
    ListApprovalsUseCase,
)
from .payroll_use_cases import GeneratePayrollUseCase
from .profile_use_cases import (
    GetMeUseCase,
    ListProfilesUseCase,
    UpdateProfileUseCase,
    ProfileUpdate,
    CompleteOnboardingUseCase,
    InviteUserUseCase,
)
from .project_use_cases import (
    ListProjectsUseCase,
    ListLoggableProjectsUseCase,
    CreateProjectUseCase,
    UpdateProjectUseCase,
    ProjectUpdate,
    ListProjectMembersUseCase,
    SetProjectMembershipUseCase,
    MembershipChange,
)

__all__ = [
    # Base Use Cases
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",

    # Time Entry Use Cases
    "SaveWeekUseCase",
    "SubmitWeekUseCase",
    "GetWeekUseCase",
    "WeekQuery",
    "ListTimeEntriesUseCase",
    "DeleteTimeEntryUseCase",
    "DashboardUseCase",

    # Approval Use Cases
    "ApproveWeekUseCase",
    "RejectWeekUseCase",
    "ResolveWeekUseCase",
    "ListApprovalsUseCase",

    # Payroll Use Cases
    "GeneratePayrollUseCase",

    # Profile Use Cases
    "GetMeUseCase",
    "ListProfilesUseCase",
    "UpdateProfileUseCase",
    "ProfileUpdate",
    "CompleteOnboardingUseCase",
    "InviteUserUseCase",

    # Project Use Cases
    "ListProjectsUseCase",
    "ListLoggableProjectsUseCase",
    "CreateProjectUseCase",
    "UpdateProjectUseCase",
    "ProjectUpdate",
    "ListProjectMembersUseCase",
    "SetProjectMembershipUseCase",
    "MembershipChange",
]
