"""Entities for batches (training cohorts, "teams") and their memberships.

- Batch: the cohort itself, with draft/published state
- BatchEmployee: enrollment of an employee in a batch
- BatchModule: ordered assignment of a module to a batch
"""

from datetime import datetime
from typing import Any
from uuid import uuid4

from training_admin.utils import format_datetime, parse_datetime, utc_now


class Batch:
    """Training cohort."""

    def __init__(
        self,
        title: str,
        description: str = "",
        is_published: bool = False,
        is_active: bool = True,
        id: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        published_at: datetime | None = None,
    ):
        self.id = id or str(uuid4())
        self.title = title
        self.description = description
        self.is_published = is_published
        self.is_active = is_active
        self.created_at = parse_datetime(created_at) or utc_now()
        self.updated_at = parse_datetime(updated_at) or self.created_at
        self.published_at = parse_datetime(published_at)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Batch":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            description=data.get("description", ""),
            is_published=bool(data.get("is_published", False)),
            is_active=bool(data.get("is_active", True)),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            published_at=data.get("published_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "is_published": self.is_published,
            "is_active": self.is_active,
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
            "published_at": format_datetime(self.published_at),
        }

    def __repr__(self) -> str:
        state = "published" if self.is_published else "draft"
        return f"<Batch {self.title!r} {state}>"


class BatchEmployee:
    """Enrollment of an employee in a batch."""

    def __init__(
        self,
        batch_id: str,
        employee_id: str,
        id: str | None = None,
        enrolled_at: datetime | None = None,
    ):
        self.id = id or str(uuid4())
        self.batch_id = batch_id
        self.employee_id = employee_id
        self.enrolled_at = parse_datetime(enrolled_at) or utc_now()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BatchEmployee":
        return cls(
            id=data["id"],
            batch_id=data["batch_id"],
            employee_id=data["employee_id"],
            enrolled_at=data.get("enrolled_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "batch_id": self.batch_id,
            "employee_id": self.employee_id,
            "enrolled_at": format_datetime(self.enrolled_at),
        }

    def __repr__(self) -> str:
        return f"<BatchEmployee batch={self.batch_id} employee={self.employee_id}>"


class BatchModule:
    """Module assigned to a batch at a position."""

    def __init__(
        self,
        batch_id: str,
        module_id: str,
        order_index: int = 0,
        id: str | None = None,
        assigned_at: datetime | None = None,
    ):
        self.id = id or str(uuid4())
        self.batch_id = batch_id
        self.module_id = module_id
        self.order_index = order_index
        self.assigned_at = parse_datetime(assigned_at) or utc_now()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BatchModule":
        return cls(
            id=data["id"],
            batch_id=data["batch_id"],
            module_id=data["module_id"],
            order_index=int(data.get("order_index", 0)),
            assigned_at=data.get("assigned_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "batch_id": self.batch_id,
            "module_id": self.module_id,
            "order_index": self.order_index,
            "assigned_at": format_datetime(self.assigned_at),
        }

    def __repr__(self) -> str:
        return (
            f"<BatchModule batch={self.batch_id} module={self.module_id} "
            f"#{self.order_index}>"
        )
