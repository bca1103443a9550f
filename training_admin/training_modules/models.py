"""Entities for training modules and their assessments.

A module is a unit of training content targeted at one or more
designations, optionally followed by a single assessment.
"""

from datetime import datetime
from typing import Any
from uuid import uuid4

from training_admin.utils import format_datetime, parse_datetime, utc_now


def normalize_designations(designations: list[str] | None) -> list[str]:
    """Strip, drop empty and de-duplicate designations preserving order."""
    seen: dict[str, None] = {}
    for designation in designations or []:
        cleaned = designation.strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


class TrainingModule:
    """Training content unit.

    Attributes:
        id: Module ID
        module_name: Category (e.g. "POSH", "Sales Excellence")
        designations: Designations the module targets
        sub_module_title: Title of the content within the category
        content_url: Link to the content
        content_type: pdf, ppt, doc...
        file_name: Original file name of the content
        slides_url: Optional slide deck
        has_test: Whether the module is followed by an assessment
        is_active: Whether the module can be assigned
    """

    def __init__(
        self,
        module_name: str,
        sub_module_title: str,
        designations: list[str] | None = None,
        content_url: str = "",
        content_type: str = "pdf",
        file_name: str = "",
        slides_url: str = "",
        has_test: bool = False,
        is_active: bool = True,
        id: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self.id = id or str(uuid4())
        self.module_name = module_name
        self.sub_module_title = sub_module_title
        self.designations = normalize_designations(designations)
        self.content_url = content_url
        self.content_type = content_type
        self.file_name = file_name
        self.slides_url = slides_url
        self.has_test = has_test
        self.is_active = is_active
        self.created_at = parse_datetime(created_at) or utc_now()
        self.updated_at = parse_datetime(updated_at) or self.created_at

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrainingModule":
        """Build from a state document entry.

        Older documents stored a single ``designation`` string.
        """
        designations = data.get("designations")
        if not isinstance(designations, list):
            legacy = data.get("designation")
            designations = [legacy] if legacy else []

        return cls(
            id=data["id"],
            module_name=data.get("module_name", ""),
            sub_module_title=data.get("sub_module_title", ""),
            designations=designations,
            content_url=data.get("content_url", ""),
            content_type=data.get("content_type", "pdf"),
            file_name=data.get("file_name", ""),
            slides_url=data.get("slides_url", ""),
            has_test=bool(data.get("has_test", False)),
            is_active=bool(data.get("is_active", True)),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a state document entry."""
        return {
            "id": self.id,
            "module_name": self.module_name,
            "designations": list(self.designations),
            "sub_module_title": self.sub_module_title,
            "content_url": self.content_url,
            "content_type": self.content_type,
            "file_name": self.file_name,
            "slides_url": self.slides_url,
            "has_test": self.has_test,
            "is_active": self.is_active,
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<TrainingModule {self.module_name!r}: {self.sub_module_title!r}>"


class Assessment:
    """Assessment attached to a module (at most one per module).

    Questions are ``{"id", "question", "options", "answer"}`` mappings where
    ``answer`` indexes ``options``.
    """

    def __init__(
        self,
        module_id: str,
        title: str,
        description: str = "",
        passing_score: int = 70,
        duration_minutes: int = 30,
        questions: list[dict[str, Any]] | None = None,
        id: str | None = None,
    ):
        self.id = id or str(uuid4())
        self.module_id = module_id
        self.title = title
        self.description = description
        self.passing_score = passing_score
        self.duration_minutes = duration_minutes
        self.questions = [dict(q) for q in questions or []]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Assessment":
        return cls(
            id=data["id"],
            module_id=data["module_id"],
            title=data.get("title", ""),
            description=data.get("description", ""),
            passing_score=int(data.get("passing_score", 70)),
            duration_minutes=int(data.get("duration_minutes", 30)),
            questions=data.get("questions") or [],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "module_id": self.module_id,
            "title": self.title,
            "description": self.description,
            "passing_score": self.passing_score,
            "duration_minutes": self.duration_minutes,
            "questions": [dict(q) for q in self.questions],
        }

    def __repr__(self) -> str:
        return f"<Assessment module={self.module_id} {self.title!r}>"
