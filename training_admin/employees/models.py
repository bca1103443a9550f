"""Employee entity."""

from datetime import datetime
from typing import Any
from uuid import uuid4

from training_admin.utils import format_datetime, parse_datetime, utc_now


UNASSIGNED_DEPARTMENT = "Unassigned"


class Employee:
    """Employee enrolled in training.

    ``id`` is the internal identifier used by every relation;
    ``employee_id`` is the HR code shown to admins (e.g. EMP001).
    """

    def __init__(
        self,
        employee_id: str,
        name: str,
        email: str = "",
        phone_number: str = "",
        designation: str = "",
        department: str = "",
        date_of_joining: str = "",
        location: str = "",
        is_active: bool = True,
        id: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self.id = id or str(uuid4())
        self.employee_id = employee_id
        self.name = name
        self.email = email
        self.phone_number = phone_number
        self.designation = designation
        self.department = department
        self.date_of_joining = date_of_joining
        self.location = location
        self.is_active = is_active
        self.created_at = parse_datetime(created_at) or utc_now()
        self.updated_at = parse_datetime(updated_at) or self.created_at

    @property
    def department_key(self) -> str:
        """Department used for grouping in reports."""
        return self.department or UNASSIGNED_DEPARTMENT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Employee":
        return cls(
            id=data["id"],
            employee_id=data.get("employee_id", ""),
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone_number=data.get("phone_number", ""),
            designation=data.get("designation", ""),
            department=data.get("department", ""),
            date_of_joining=data.get("date_of_joining", ""),
            location=data.get("location", ""),
            is_active=bool(data.get("is_active", True)),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "name": self.name,
            "phone_number": self.phone_number,
            "email": self.email,
            "designation": self.designation,
            "department": self.department,
            "date_of_joining": self.date_of_joining,
            "location": self.location,
            "is_active": self.is_active,
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Employee {self.employee_id} {self.name!r}>"
