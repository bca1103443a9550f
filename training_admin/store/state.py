"""The training state document.

All collections are plain lists kept in display order (newest first for
collections that prepend). Lookups are linear; collections are small.
"""

from typing import Any

from training_admin.assignments.models import PostSessionAssignment
from training_admin.batches.models import Batch, BatchEmployee, BatchModule
from training_admin.employees.models import Employee
from training_admin.progress.models import EmployeeProgress
from training_admin.training_modules.models import Assessment, TrainingModule


# (document key, attribute, entity class)
COLLECTIONS: list[tuple[str, str, type]] = [
    ("modules", "modules", TrainingModule),
    ("assessments", "assessments", Assessment),
    ("employees", "employees", Employee),
    ("batches", "batches", Batch),
    ("batch_employees", "batch_employees", BatchEmployee),
    ("batch_modules", "batch_modules", BatchModule),
    ("employee_progress", "employee_progress", EmployeeProgress),
    ("post_session_assignments", "post_session_assignments", PostSessionAssignment),
]

# Keys written by earlier versions of the document
LEGACY_KEYS = {
    "tests": "assessments",
    "batchEmployees": "batch_employees",
    "batchModules": "batch_modules",
    "employeeProgress": "employee_progress",
    "postSessionAssignments": "post_session_assignments",
}


class TrainingState:
    """Every collection the console manages."""

    def __init__(
        self,
        modules: list[TrainingModule] | None = None,
        assessments: list[Assessment] | None = None,
        employees: list[Employee] | None = None,
        batches: list[Batch] | None = None,
        batch_employees: list[BatchEmployee] | None = None,
        batch_modules: list[BatchModule] | None = None,
        employee_progress: list[EmployeeProgress] | None = None,
        post_session_assignments: list[PostSessionAssignment] | None = None,
    ):
        self.modules = modules or []
        self.assessments = assessments or []
        self.employees = employees or []
        self.batches = batches or []
        self.batch_employees = batch_employees or []
        self.batch_modules = batch_modules or []
        self.employee_progress = employee_progress or []
        self.post_session_assignments = post_session_assignments or []

    # ==========================================================================
    # Lookups
    # ==========================================================================

    def find_module(self, module_id: str) -> TrainingModule | None:
        return next((m for m in self.modules if m.id == module_id), None)

    def find_assessment_for(self, module_id: str) -> Assessment | None:
        return next((a for a in self.assessments if a.module_id == module_id), None)

    def find_employee(self, employee_id: str) -> Employee | None:
        return next((e for e in self.employees if e.id == employee_id), None)

    def find_batch(self, batch_id: str) -> Batch | None:
        return next((b for b in self.batches if b.id == batch_id), None)

    def find_progress(self, progress_id: str) -> EmployeeProgress | None:
        return next((p for p in self.employee_progress if p.id == progress_id), None)

    def find_assignment(self, assignment_id: str) -> PostSessionAssignment | None:
        return next(
            (a for a in self.post_session_assignments if a.id == assignment_id), None
        )

    def batch_employee_ids(self, batch_id: str) -> list[str]:
        return [be.employee_id for be in self.batch_employees if be.batch_id == batch_id]

    def batch_module_links(self, batch_id: str) -> list[BatchModule]:
        """Module links of a batch in ``order_index`` order."""
        links = [bm for bm in self.batch_modules if bm.batch_id == batch_id]
        return sorted(links, key=lambda bm: bm.order_index)

    def is_enrolled(self, batch_id: str, employee_id: str) -> bool:
        return any(
            be.batch_id == batch_id and be.employee_id == employee_id
            for be in self.batch_employees
        )

    def is_module_in_batch(self, batch_id: str, module_id: str) -> bool:
        return any(
            bm.batch_id == batch_id and bm.module_id == module_id
            for bm in self.batch_modules
        )

    # ==========================================================================
    # Serialization
    # ==========================================================================

    def to_dict(self) -> dict[str, Any]:
        return {
            key: [item.to_dict() for item in getattr(self, attr)]
            for key, attr, _ in COLLECTIONS
        }

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], defaults: "TrainingState | None" = None
    ) -> "TrainingState":
        """Build a state from a stored document merged over ``defaults``.

        Collections missing from the document come from ``defaults``. An
        empty module list also falls back to the default modules.
        """
        data = normalize_document(data)
        defaults = defaults or cls()
        values: dict[str, list] = {}

        for key, attr, entity in COLLECTIONS:
            raw = data.get(key)
            if key == "modules" and not raw:
                raw = None
            if raw is None:
                values[attr] = [item for item in getattr(defaults, attr)]
            else:
                values[attr] = [entity.from_dict(item) for item in raw]

        return cls(**values)

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{attr}={len(getattr(self, attr))}" for _, attr, _ in COLLECTIONS
        )
        return f"<TrainingState {counts}>"


def normalize_document(data: dict[str, Any]) -> dict[str, Any]:
    """Rename legacy collection keys; current keys win over legacy ones."""
    normalized = dict(data)
    for legacy, current in LEGACY_KEYS.items():
        if legacy in normalized:
            value = normalized.pop(legacy)
            normalized.setdefault(current, value)
    return normalized
