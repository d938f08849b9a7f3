"""
Infrastructure layer for the timesheet approval and payroll service.

This layer contains the implementation details for external systems integration:
- Database (SQLAlchemy; PostgreSQL in production, SQLite locally)
- Authentication (Supabase Auth tokens and admin invites)
- Audit event handlers
- CSV report exports
- The FastAPI web layer

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
