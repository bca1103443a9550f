"""Pydantic schemas for training modules.

Request and response models for:
- Module creation and partial updates
- Attached assessments and their questions
- Listing and filter options
"""

from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .models import Assessment, TrainingModule


# ==============================================================================
# Assessment Schemas
# ==============================================================================


class QuestionSchema(BaseModel):
    """Multiple-choice question; ``answer`` indexes ``options``."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    question: str = Field(..., min_length=1, max_length=1000)
    options: list[str] = Field(..., min_length=1)
    answer: int = Field(..., ge=0, description="Index of the correct option")

    @model_validator(mode="after")
    def answer_indexes_option(self) -> "QuestionSchema":
        if self.answer >= len(self.options):
            raise ValueError(
                f"answer {self.answer} does not index one of "
                f"{len(self.options)} options"
            )
        return self


class AssessmentInput(BaseModel):
    """Assessment fields supplied when creating or updating a module."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    passing_score: int = Field(70, ge=0, le=100)
    duration_minutes: int = Field(30, gt=0)
    questions: list[QuestionSchema] = Field(default_factory=list)

    def question_dicts(self) -> list[dict[str, Any]]:
        return [q.model_dump() for q in self.questions]


class AssessmentResponse(BaseModel):
    """Assessment attached to a module."""

    id: str
    module_id: str
    title: str
    description: str
    passing_score: int
    duration_minutes: int
    questions: list[QuestionSchema]

    @classmethod
    def from_entity(cls, entity: Assessment) -> "AssessmentResponse":
        return cls(
            id=entity.id,
            module_id=entity.module_id,
            title=entity.title,
            description=entity.description,
            passing_score=entity.passing_score,
            duration_minutes=entity.duration_minutes,
            questions=[QuestionSchema(**q) for q in entity.questions],
        )


# ==============================================================================
# Module Schemas
# ==============================================================================


class CreateModuleRequest(BaseModel):
    """Module creation request."""

    module_name: str = Field(..., min_length=1, max_length=200, description="Category")
    sub_module_title: str = Field(..., min_length=1, max_length=300)
    designations: list[str] = Field(default_factory=list)
    content_url: str = Field("", max_length=2000)
    content_type: str = Field("pdf", max_length=50)
    file_name: str = Field("", max_length=500)
    slides_url: str = Field("", max_length=2000)
    has_test: bool = False
    is_active: bool = True
    assessment: AssessmentInput | None = None

    @field_validator("module_name", "sub_module_title", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class UpdateModuleRequest(BaseModel):
    """Partial module update.

    ``assessment`` left out keeps the current assessment, an explicit null
    removes it and an object replaces or creates it.
    """

    module_name: str | None = Field(None, min_length=1, max_length=200)
    sub_module_title: str | None = Field(None, min_length=1, max_length=300)
    designations: list[str] | None = None
    content_url: str | None = Field(None, max_length=2000)
    content_type: str | None = Field(None, max_length=50)
    file_name: str | None = Field(None, max_length=500)
    slides_url: str | None = Field(None, max_length=2000)
    has_test: bool | None = None
    is_active: bool | None = None
    assessment: AssessmentInput | None = None

    @field_validator("module_name", "sub_module_title", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @property
    def assessment_given(self) -> bool:
        return "assessment" in self.model_fields_set


class ModuleResponse(BaseModel):
    """Module with its assessment."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    module_name: str
    designations: list[str]
    sub_module_title: str
    content_url: str
    content_type: str
    file_name: str
    slides_url: str
    has_test: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
    assessment: AssessmentResponse | None = None

    @classmethod
    def from_entity(
        cls, entity: TrainingModule, assessment: Assessment | None = None
    ) -> "ModuleResponse":
        return cls(
            id=entity.id,
            module_name=entity.module_name,
            designations=list(entity.designations),
            sub_module_title=entity.sub_module_title,
            content_url=entity.content_url,
            content_type=entity.content_type,
            file_name=entity.file_name,
            slides_url=entity.slides_url,
            has_test=entity.has_test,
            is_active=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            assessment=AssessmentResponse.from_entity(assessment) if assessment else None,
        )


class ModuleListResponse(BaseModel):
    """Modules matching the listing filters."""

    items: list[ModuleResponse]
    total: int


class ModuleFilterOptions(BaseModel):
    """Values offered by the module filters."""

    module_names: list[str]
    designations: list[str]
