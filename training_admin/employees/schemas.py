"""Pydantic schemas for employees.

Request and response models for:
- Employee creation, updates and bulk import
- Listing rows with completed session counts
- Training profile (aggregate and per-batch progress)
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

from training_admin.progress.schemas import ProgressResponse

from .models import Employee


# ==============================================================================
# Request Schemas
# ==============================================================================


class CreateEmployeeRequest(BaseModel):
    """Employee creation request (also one record of a bulk import)."""

    employee_id: str = Field(..., min_length=1, max_length=50, description="HR code")
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr | Literal[""] = ""
    phone_number: str = Field("", max_length=50)
    designation: str = Field("", max_length=100)
    department: str = Field("", max_length=100)
    date_of_joining: str = Field("", max_length=20, description="YYYY-MM-DD")
    location: str = Field("", max_length=200)
    is_active: bool = True

    @field_validator(
        "employee_id", "name", "email", "designation", "department", mode="before"
    )
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class UpdateEmployeeRequest(BaseModel):
    """Partial employee update."""

    employee_id: str | None = Field(None, min_length=1, max_length=50)
    name: str | None = Field(None, min_length=1, max_length=200)
    email: EmailStr | Literal[""] | None = None
    phone_number: str | None = Field(None, max_length=50)
    designation: str | None = Field(None, max_length=100)
    department: str | None = Field(None, max_length=100)
    date_of_joining: str | None = Field(None, max_length=20)
    location: str | None = Field(None, max_length=200)
    is_active: bool | None = None

    @field_validator(
        "employee_id", "name", "email", "designation", "department", mode="before"
    )
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class ImportEmployeesRequest(BaseModel):
    """Bulk import; all records are created or none."""

    employees: list[CreateEmployeeRequest] = Field(..., min_length=1)


# ==============================================================================
# Response Schemas
# ==============================================================================


class EmployeeResponse(BaseModel):
    """Employee with completed session count."""

    id: str
    employee_id: str
    name: str
    email: str
    phone_number: str
    designation: str
    department: str
    date_of_joining: str
    location: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    sessions_completed: int = 0

    @classmethod
    def from_entity(
        cls, entity: Employee, sessions_completed: int = 0
    ) -> "EmployeeResponse":
        return cls(
            id=entity.id,
            employee_id=entity.employee_id,
            name=entity.name,
            email=entity.email,
            phone_number=entity.phone_number,
            designation=entity.designation,
            department=entity.department,
            date_of_joining=entity.date_of_joining,
            location=entity.location,
            is_active=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            sessions_completed=sessions_completed,
        )


class EmployeeListResponse(BaseModel):
    items: list[EmployeeResponse]
    total: int


class ImportEmployeesResponse(BaseModel):
    imported: int
    items: list[EmployeeResponse]


class ProfileRecord(ProgressResponse):
    """Progress record with its module's title and category."""

    module_title: str | None = None
    module_name: str | None = None


class ProfileBatch(BaseModel):
    """Employee's progress within one batch."""

    batch_id: str
    title: str
    description: str
    completed_count: int
    in_progress_count: int
    not_started_count: int
    average_progress: int
    records: list[ProfileRecord]


class ProfileAggregate(BaseModel):
    completed: int
    total: int
    average_progress: int


class TrainingProfileResponse(BaseModel):
    """Everything an admin sees when opening an employee."""

    employee: EmployeeResponse
    aggregate: ProfileAggregate
    batches: list[ProfileBatch]
