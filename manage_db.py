#!/usr/bin/env python3
"""
Database management script for the timesheets backend.
Handles migrations, table creation and demo seeding.
"""

import sys
from decimal import Decimal
from pathlib import Path

from alembic.config import Config
from alembic import command

from timesheets.config import settings
from timesheets.domain.models.organization import Organization
from timesheets.domain.models.profile import Profile, Role
from timesheets.domain.models.project import Project, ProjectMembership
from timesheets.infrastructure.db.database import engine, SessionLocal
from timesheets.infrastructure.db.models import create_all_tables, drop_all_tables
from timesheets.infrastructure.repositories.organization_repository import SQLAlchemyOrganizationRepository
from timesheets.infrastructure.repositories.profile_repository import SQLAlchemyProfileRepository
from timesheets.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository

MIGRATIONS_DIR = Path(__file__).resolve().parent / "timesheets" / "infrastructure" / "db" / "migrations"


def alembic_config() -> Config:
    """Alembic config built in code; no alembic.ini is needed."""
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
    return alembic_cfg


def create_migration(message: str = "Auto-generated migration"):
    """Create a new migration."""
    print(f"Creating migration: {message}")
    command.revision(alembic_config(), message=message, autogenerate=True)


def run_migrations():
    """Run pending migrations."""
    print("Running migrations...")
    command.upgrade(alembic_config(), "head")


def rollback_migration():
    """Rollback last migration."""
    print("Rolling back migration...")
    command.downgrade(alembic_config(), "-1")


def reset_database():
    """Reset database - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        alembic_cfg = alembic_config()
        print("Resetting database...")
        command.downgrade(alembic_cfg, "base")
        command.upgrade(alembic_cfg, "head")
    else:
        print("Database reset cancelled.")


def show_current_revision():
    """Show current database revision."""
    command.current(alembic_config())


def show_history():
    """Show migration history."""
    command.history(alembic_config())


def create_tables():
    """Create tables straight from the models, bypassing migrations."""
    print("Creating tables...")
    create_all_tables(engine)


def drop_tables():
    response = input("This will drop ALL tables. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        drop_all_tables(engine)
        print("Tables dropped.")
    else:
        print("Drop cancelled.")


def seed_demo_data():
    """
    Seed one organization with an admin, a manager, two contractors
    (one reporting to the manager) and a project both contractors can log to.
    Profile ids are placeholders until real identity-provider users sign in.
    """
    session = SessionLocal()
    try:
        organizations = SQLAlchemyOrganizationRepository(session)
        profiles = SQLAlchemyProfileRepository(session)
        projects = SQLAlchemyProjectRepository(session)

        org = organizations.save(Organization(name="Demo Company"))

        admin = profiles.save(Profile(
            org_id=org.id, role=Role.ADMIN, full_name="Ada Admin", email="admin@example.com",
        ))
        manager = profiles.save(Profile(
            org_id=org.id, role=Role.MANAGER, full_name="Morgan Manager", email="manager@example.com",
        ))
        report = profiles.save(Profile(
            org_id=org.id, role=Role.CONTRACTOR, full_name="Casey Contractor",
            email="casey@example.com", hourly_rate=Decimal("50.00"), manager_id=manager.id,
        ))
        freelancer = profiles.save(Profile(
            org_id=org.id, role=Role.CONTRACTOR, full_name="Frankie Freelancer",
            email="frankie@example.com", hourly_rate=Decimal("65.00"),
        ))

        project = projects.save(Project(org_id=org.id, name="Website Redesign"))
        for contractor in (report, freelancer):
            projects.save_membership(ProjectMembership(
                org_id=org.id, project_id=project.id, profile_id=contractor.id,
            ))

        session.commit()
        print(f"Seeded organization {org.id} (admin {admin.id}, manager {manager.id})")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        print("  create [msg]   - Create new migration")
        print("  migrate        - Run pending migrations")
        print("  rollback       - Rollback last migration")
        print("  reset          - Reset database (WARNING: drops all data)")
        print("  current        - Show current revision")
        print("  history        - Show migration history")
        print("  create-tables  - Create tables without migrations")
        print("  drop-tables    - Drop all tables (WARNING: drops all data)")
        print("  seed           - Insert demo organization, profiles and project")
        return

    command_name = sys.argv[1]

    if command_name == "create":
        message = " ".join(sys.argv[2:]) if len(sys.argv) > 2 else "Auto-generated migration"
        create_migration(message)
    elif command_name == "migrate":
        run_migrations()
    elif command_name == "rollback":
        rollback_migration()
    elif command_name == "reset":
        reset_database()
    elif command_name == "current":
        show_current_revision()
    elif command_name == "history":
        show_history()
    elif command_name == "create-tables":
        create_tables()
    elif command_name == "drop-tables":
        drop_tables()
    elif command_name == "seed":
        seed_demo_data()
    else:
        print(f"Unknown command: {command_name}")


if __name__ == "__main__":
    main()
