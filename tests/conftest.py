"""
Shared fixtures: an in-memory database seeded with one organization,
its people and projects, and an API client authenticating with real tokens.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from timesheets.domain.models.organization import Organization
from timesheets.domain.models.profile import Profile, Role
from timesheets.domain.models.project import Project, ProjectMembership
from timesheets.domain.models.time_entry import TimeEntry, TimeEntryStatus
from timesheets.domain.services.identity_provider import IdentityProvider
from timesheets.domain.models.base import ValidationError
from timesheets.infrastructure.auth import JWTHandler, get_identity_provider
from timesheets.infrastructure.db.database import build_engine, get_db
from timesheets.infrastructure.db.models import create_all_tables
from timesheets.infrastructure.repositories.organization_repository import SQLAlchemyOrganizationRepository
from timesheets.infrastructure.repositories.profile_repository import SQLAlchemyProfileRepository
from timesheets.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository
from timesheets.infrastructure.repositories.time_entry_repository import SQLAlchemyTimeEntryRepository


# A Sunday; the seeded week runs 2024-03-03 .. 2024-03-09
WEEK_START = date(2024, 3, 3)
WEEK_END = date(2024, 3, 9)


@dataclass
class Seed:
    org: Organization
    admin: Profile
    manager: Profile
    report: Profile
    freelancer: Profile
    project: Project
    side_project: Project
    other_org: Organization
    outsider: Profile


class FakeIdentityProvider(IdentityProvider):
    """Records invites instead of sending e-mails."""

    def __init__(self):
        self.invites: List[Dict[str, Any]] = []
        self.rejected_emails = set()

    def invite_user(self, email: str, redirect_to: Optional[str] = None, data: Optional[Dict[str, Any]] = None) -> str:
        if email in self.rejected_emails:
            raise ValidationError("Invite rejected by identity provider", "email")
        self.invites.append({"email": email, "redirect_to": redirect_to, "data": data})
        return f"invited-{len(self.invites)}"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    create_all_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    db = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def entry_repository(session):
    return SQLAlchemyTimeEntryRepository(session)


@pytest.fixture
def profile_repository(session):
    return SQLAlchemyProfileRepository(session)


@pytest.fixture
def project_repository(session):
    return SQLAlchemyProjectRepository(session)


@pytest.fixture
def seed(session, profile_repository, project_repository) -> Seed:
    organizations = SQLAlchemyOrganizationRepository(session)

    org = organizations.save(Organization(name="Acme Builders"))
    other_org = organizations.save(Organization(name="Other Co"))

    admin = profile_repository.save(Profile(
        org_id=org.id, role=Role.ADMIN, full_name="Alice Admin", email="alice@acme.test",
    ))
    manager = profile_repository.save(Profile(
        org_id=org.id, role=Role.MANAGER, full_name="Mona Manager", email="mona@acme.test",
    ))
    report = profile_repository.save(Profile(
        org_id=org.id, role=Role.CONTRACTOR, full_name="Carl Contractor", email="carl@acme.test",
        hourly_rate=Decimal("50.00"), manager_id=manager.id,
    ))
    freelancer = profile_repository.save(Profile(
        org_id=org.id, role=Role.CONTRACTOR, full_name="Fran Freelancer", email="fran@acme.test",
        hourly_rate=Decimal("40.00"),
    ))
    outsider = profile_repository.save(Profile(
        org_id=other_org.id, role=Role.ADMIN, full_name="Otto Outsider", email="otto@other.test",
    ))

    project = project_repository.save(Project(org_id=org.id, name="Main Street Build"))
    side_project = project_repository.save(Project(org_id=org.id, name="Side Project"))
    for contractor in (report, freelancer):
        project_repository.save_membership(ProjectMembership(
            org_id=org.id, project_id=project.id, profile_id=contractor.id,
        ))

    session.commit()
    return Seed(
        org=org,
        admin=admin,
        manager=manager,
        report=report,
        freelancer=freelancer,
        project=project,
        side_project=side_project,
        other_org=other_org,
        outsider=outsider,
    )


@pytest.fixture
def make_entry(session, entry_repository, seed):
    """Persist an entry for ``owner``; defaults to a 7.5 hour day on the main project."""

    def _make(
        owner: Profile,
        entry_date: date = WEEK_START,
        status: TimeEntryStatus = TimeEntryStatus.DRAFT,
        project: Optional[Project] = None,
        time_in: str = "09:00",
        time_out: str = "17:00",
        lunch_hours: str = "0.5",
        rate: Optional[Decimal] = None,
    ) -> TimeEntry:
        entry = TimeEntry.create(
            org_id=owner.org_id,
            user_id=owner.id,
            entry_date=entry_date,
            owner_rate=rate if rate is not None else owner.hourly_rate,
            project_id=(project or seed.project).id,
            time_in=time_in,
            time_out=time_out,
            lunch_hours=Decimal(lunch_hours),
        )
        entry.status = status
        entry_repository.save(entry)
        session.commit()
        return entry

    return _make


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture
def app(session, identity_provider):
    from timesheets.main import create_application

    application = create_application()

    def override_get_db():
        yield session

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_identity_provider] = lambda: identity_provider
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    """Bearer headers for a profile, signed like the identity provider signs them."""
    handler = JWTHandler()

    def _headers(profile: Profile) -> Dict[str, str]:
        token = handler.generate_token(profile.id, email=profile.email or "user@example.com")
        return {"Authorization": f"Bearer {token}"}

    return _headers
