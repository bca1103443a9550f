"""Pydantic schemas for batches.

Request and response models for:
- Batch creation, updates and publishing
- Membership (employees) and module list replacement
- Batch detail and leaderboard insights
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .models import Batch


# ==============================================================================
# Request Schemas
# ==============================================================================


class CreateBatchRequest(BaseModel):
    """Batch creation request."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    is_published: bool = False
    is_active: bool = True

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class UpdateBatchRequest(BaseModel):
    """Partial batch update; ``is_published`` publishes or unpublishes."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    is_published: bool | None = None
    is_active: bool | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class SetBatchEmployeesRequest(BaseModel):
    """Complete list of employees (internal ids) enrolled in the batch."""

    employee_ids: list[str] = Field(default_factory=list)


class SetBatchModulesRequest(BaseModel):
    """Complete ordered list of modules assigned to the batch."""

    module_ids: list[str] = Field(default_factory=list)


# ==============================================================================
# Response Schemas
# ==============================================================================


class BatchResponse(BaseModel):
    """Batch with membership counts."""

    id: str
    title: str
    description: str
    is_published: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None
    employee_count: int = 0
    module_count: int = 0

    @classmethod
    def from_entity(
        cls, entity: Batch, employee_count: int = 0, module_count: int = 0
    ) -> "BatchResponse":
        return cls(
            id=entity.id,
            title=entity.title,
            description=entity.description,
            is_published=entity.is_published,
            is_active=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            published_at=entity.published_at,
            employee_count=employee_count,
            module_count=module_count,
        )


class BatchListResponse(BaseModel):
    items: list[BatchResponse]
    total: int


class BatchEmployeeEntry(BaseModel):
    """Enrolled employee."""

    employee_id: str
    employee_code: str
    name: str
    designation: str
    department: str
    enrolled_at: datetime


class BatchModuleEntry(BaseModel):
    """Assigned module at its position."""

    module_id: str
    module_name: str
    sub_module_title: str
    order_index: int
    assigned_at: datetime


class BatchDetailResponse(BaseModel):
    batch: BatchResponse
    employees: list[BatchEmployeeEntry]
    modules: list[BatchModuleEntry]


# ==============================================================================
# Insights Schemas
# ==============================================================================


class LatestSession(BaseModel):
    """Most recently completed module of a leaderboard entry."""

    module_id: str
    module_title: str
    module_name: str | None = None
    completed_at: datetime | None = None
    test_score: int | None = None
    progress_percentage: int


class LeaderboardEntry(BaseModel):
    """One enrolled employee's standing within the batch."""

    rank: int
    employee_id: str = Field(description="Internal employee id")
    employee_code: str = Field(description="HR code (internal id when unknown)")
    employee_name: str
    designation: str
    completed_count: int
    total_count: int
    avg_score: int
    progress_percentage: int
    total_time: int = Field(description="Credited training minutes")
    latest_session: LatestSession | None = None


class BatchInsightStats(BaseModel):
    total_employees: int
    average_completion: int
    average_score: int
    total_modules: int


class BatchInsightsResponse(BaseModel):
    batch_id: str
    title: str
    leaderboard: list[LeaderboardEntry]
    stats: BatchInsightStats
