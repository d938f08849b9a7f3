"""
Domain services for the timesheet and payroll engine.
Import the modules directly, e.g. ``from timesheets.domain.services.hours_service import compute_hours``.
"""
