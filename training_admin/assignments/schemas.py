"""Pydantic schemas for post-training assignments."""

from datetime import datetime

from pydantic import BaseModel, Field

from training_admin.progress.models import TestStatus

from .models import PostSessionAssignment, PostSessionStatus


# ==============================================================================
# Request Schemas
# ==============================================================================


class CreateAssignmentRequest(BaseModel):
    """Assign a follow-up deliverable to an enrolled employee."""

    batch_id: str = Field(..., min_length=1)
    employee_id: str = Field(..., min_length=1, description="Internal employee id")
    module_id: str = Field(..., min_length=1)
    test_status: TestStatus = TestStatus.NOT_TAKEN
    status: PostSessionStatus = PostSessionStatus.PENDING
    assigned_at: datetime | None = None
    due_date: datetime | None = None
    submitted_at: datetime | None = None
    notes: str = Field("", max_length=5000)


class UpdateAssignmentRequest(BaseModel):
    """Partial assignment update."""

    status: PostSessionStatus | None = None
    test_status: TestStatus | None = None
    due_date: datetime | None = None
    submitted_at: datetime | None = None
    notes: str | None = Field(None, max_length=5000)


# ==============================================================================
# Response Schemas
# ==============================================================================


class AssignmentResponse(BaseModel):
    """Assignment enriched with batch, employee and module labels."""

    id: str
    batch_id: str
    employee_id: str
    module_id: str
    assigned_at: datetime
    due_date: datetime | None = None
    submitted_at: datetime | None = None
    status: PostSessionStatus
    test_status: TestStatus
    notes: str
    batch_title: str = ""
    employee_name: str = ""
    employee_designation: str = ""
    module_title: str = ""
    module_name: str = ""

    @classmethod
    def from_entity(
        cls, entity: PostSessionAssignment, **labels: str
    ) -> "AssignmentResponse":
        return cls(
            id=entity.id,
            batch_id=entity.batch_id,
            employee_id=entity.employee_id,
            module_id=entity.module_id,
            assigned_at=entity.assigned_at,
            due_date=entity.due_date,
            submitted_at=entity.submitted_at,
            status=entity.status,
            test_status=entity.test_status,
            notes=entity.notes,
            **labels,
        )


class AssignmentListResponse(BaseModel):
    items: list[AssignmentResponse]
    total: int


class AssignmentSummary(BaseModel):
    """Counts across all assignments."""

    total: int
    submitted: int = Field(description="Status other than pending")
    reviewed: int
    pending_tests: int = Field(description="Test status other than completed")
