"""Per-employee progress records.

One record tracks an employee's state on one module within one batch:
- Training status and completion percentage
- Assessment status and score
- Lifecycle timestamps (started, completed, last accessed)
"""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from training_admin.utils import format_datetime, parse_datetime


class TrainingStatus(str, Enum):
    """Module progress status."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TestStatus(str, Enum):
    """Assessment status on a progress record."""

    __test__ = False

    NOT_TAKEN = "not_taken"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"


class EmployeeProgress:
    """Progress of one employee on one module of one batch."""

    def __init__(
        self,
        employee_id: str,
        batch_id: str,
        module_id: str,
        status: TrainingStatus = TrainingStatus.NOT_STARTED,
        progress_percentage: int = 0,
        test_status: TestStatus = TestStatus.NOT_TAKEN,
        test_score: int | None = None,
        started_at: datetime | None = None,
        completed_at: datetime | None = None,
        last_accessed_at: datetime | None = None,
        id: str | None = None,
    ):
        self.id = id or str(uuid4())
        self.employee_id = employee_id
        self.batch_id = batch_id
        self.module_id = module_id
        self.status = TrainingStatus(status)
        self.progress_percentage = progress_percentage
        self.test_status = TestStatus(test_status)
        self.test_score = test_score
        self.started_at = parse_datetime(started_at)
        self.completed_at = parse_datetime(completed_at)
        self.last_accessed_at = parse_datetime(last_accessed_at)

    @property
    def is_completed(self) -> bool:
        return self.status == TrainingStatus.COMPLETED

    @property
    def has_completed_test(self) -> bool:
        return self.test_status == TestStatus.COMPLETED

    @property
    def scored(self) -> bool:
        """Completed assessment with a numeric score."""
        return self.has_completed_test and self.test_score is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EmployeeProgress":
        return cls(
            id=data["id"],
            employee_id=data["employee_id"],
            batch_id=data["batch_id"],
            module_id=data["module_id"],
            status=data.get("status", TrainingStatus.NOT_STARTED.value),
            progress_percentage=int(data.get("progress_percentage") or 0),
            test_status=data.get("test_status", TestStatus.NOT_TAKEN.value),
            test_score=data.get("test_score"),
            started_at=data.get("started_at"),
            completed_at=data.get("completed_at"),
            last_accessed_at=data.get("last_accessed_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "batch_id": self.batch_id,
            "module_id": self.module_id,
            "status": self.status.value,
            "progress_percentage": self.progress_percentage,
            "test_status": self.test_status.value,
            "test_score": self.test_score,
            "started_at": format_datetime(self.started_at),
            "completed_at": format_datetime(self.completed_at),
            "last_accessed_at": format_datetime(self.last_accessed_at),
        }

    def __repr__(self) -> str:
        return (
            f"<EmployeeProgress employee={self.employee_id} "
            f"module={self.module_id} {self.status.value}>"
        )
