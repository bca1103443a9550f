"""Post-training assignment entity."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from training_admin.progress.models import TestStatus
from training_admin.utils import format_datetime, parse_datetime, utc_now


class PostSessionStatus(str, Enum):
    """Follow-up deliverable status."""

    PENDING = "pending"
    SUBMITTED = "submitted"
    REVIEWED = "reviewed"


class PostSessionAssignment:
    """Deliverable tracked per employee/module after a training session."""

    def __init__(
        self,
        batch_id: str,
        employee_id: str,
        module_id: str,
        status: PostSessionStatus = PostSessionStatus.PENDING,
        test_status: TestStatus = TestStatus.NOT_TAKEN,
        notes: str = "",
        due_date: datetime | None = None,
        submitted_at: datetime | None = None,
        assigned_at: datetime | None = None,
        id: str | None = None,
    ):
        self.id = id or str(uuid4())
        self.batch_id = batch_id
        self.employee_id = employee_id
        self.module_id = module_id
        self.status = PostSessionStatus(status)
        self.test_status = TestStatus(test_status)
        self.notes = notes
        self.due_date = parse_datetime(due_date)
        self.submitted_at = parse_datetime(submitted_at)
        self.assigned_at = parse_datetime(assigned_at) or utc_now()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PostSessionAssignment":
        return cls(
            id=data["id"],
            batch_id=data["batch_id"],
            employee_id=data["employee_id"],
            module_id=data["module_id"],
            status=data.get("status", PostSessionStatus.PENDING.value),
            test_status=data.get("test_status", TestStatus.NOT_TAKEN.value),
            notes=data.get("notes") or "",
            due_date=data.get("due_date"),
            submitted_at=data.get("submitted_at"),
            assigned_at=data.get("assigned_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "batch_id": self.batch_id,
            "employee_id": self.employee_id,
            "module_id": self.module_id,
            "assigned_at": format_datetime(self.assigned_at),
            "due_date": format_datetime(self.due_date),
            "submitted_at": format_datetime(self.submitted_at),
            "status": self.status.value,
            "test_status": self.test_status.value,
            "notes": self.notes,
        }

    def __repr__(self) -> str:
        return (
            f"<PostSessionAssignment employee={self.employee_id} "
            f"module={self.module_id} {self.status.value}>"
        )
