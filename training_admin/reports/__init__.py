"""Dashboard and report aggregations.

Provides:
- Dashboard stats, top performers and recent activity
- Department and module reports with skill gaps
- Department CSV export
"""

from .aggregator import build_dashboard, build_report, export_department_csv


__all__ = [
    "build_dashboard",
    "build_report",
    "export_department_csv",
]
