"""Pydantic schemas for progress records.

Request and response models for:
- Progress upserts (create or merge by id)
- Listing filters
- Session review metrics
"""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from .models import EmployeeProgress, TestStatus, TrainingStatus


# ==============================================================================
# Request Schemas
# ==============================================================================


class UpsertProgressRequest(BaseModel):
    """Create a record, or merge fields into the record with ``id``.

    New records need ``employee_id``, ``batch_id`` and ``module_id``.
    """

    id: str | None = Field(None, description="Existing record to update")
    employee_id: str | None = None
    batch_id: str | None = None
    module_id: str | None = None
    status: TrainingStatus | None = None
    progress_percentage: int | None = Field(None, ge=0, le=100)
    test_status: TestStatus | None = None
    test_score: int | None = Field(None, ge=0, le=100)

    @model_validator(mode="after")
    def new_record_has_keys(self) -> "UpsertProgressRequest":
        if self.id is None and not (self.employee_id and self.batch_id and self.module_id):
            raise ValueError(
                "employee_id, batch_id and module_id are required to create a record"
            )
        return self


# ==============================================================================
# Response Schemas
# ==============================================================================


class ProgressResponse(BaseModel):
    """Progress record."""

    id: str
    employee_id: str
    batch_id: str
    module_id: str
    status: TrainingStatus
    progress_percentage: int
    test_status: TestStatus
    test_score: int | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    last_accessed_at: datetime | None = None

    @classmethod
    def entity_fields(cls, entity: EmployeeProgress) -> dict:
        return {
            "id": entity.id,
            "employee_id": entity.employee_id,
            "batch_id": entity.batch_id,
            "module_id": entity.module_id,
            "status": entity.status,
            "progress_percentage": entity.progress_percentage,
            "test_status": entity.test_status,
            "test_score": entity.test_score,
            "started_at": entity.started_at,
            "completed_at": entity.completed_at,
            "last_accessed_at": entity.last_accessed_at,
        }

    @classmethod
    def from_entity(cls, entity: EmployeeProgress, **extra):
        return cls(**cls.entity_fields(entity), **extra)


class ProgressListResponse(BaseModel):
    items: list[ProgressResponse]
    total: int


class SessionMetrics(BaseModel):
    """Derived 0-100 indicators for a completed session."""

    effectiveness: int
    attentiveness: int
    proactiveness: int
    collaboration: int


class SessionReviewResponse(BaseModel):
    """Review of one progress record with context and derived metrics."""

    progress_id: str
    module_title: str
    module_name: str | None = None
    employee_name: str
    team_title: str
    completed_at: datetime | None = None
    score: int | None = None
    progress_percentage: int
    metrics: SessionMetrics
