"""
Report exports.
"""

from .payroll_csv import (
    payroll_summary_csv,
    payroll_detail_csv,
    summary_filename,
    detail_filename,
)

__all__ = [
    "payroll_summary_csv",
    "payroll_detail_csv",
    "summary_filename",
    "detail_filename",
]
