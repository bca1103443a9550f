"""Employee roster."""

from .models import UNASSIGNED_DEPARTMENT, Employee


__all__ = ["UNASSIGNED_DEPARTMENT", "Employee"]
