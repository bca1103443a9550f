"""Per-employee progress tracking.

Provides:
- Progress records per employee, batch and module
- Lifecycle stamping on status changes
- Session review metrics
"""

from .models import EmployeeProgress, TestStatus, TrainingStatus


__all__ = [
    "EmployeeProgress",
    "TestStatus",
    "TrainingStatus",
]
