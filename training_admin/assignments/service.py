"""Post-training assignment service layer.

Business logic for:
- Assigning follow-up deliverables
- Status changes, submission stamping and review
- Enriched listing and summary counts
"""

import structlog

from training_admin.progress.models import TestStatus
from training_admin.store import DataStore, TrainingState
from training_admin.utils import utc_now

from .models import PostSessionAssignment, PostSessionStatus
from .schemas import (
    AssignmentResponse,
    AssignmentSummary,
    CreateAssignmentRequest,
    UpdateAssignmentRequest,
)


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class AssignmentError(Exception):
    """Base assignment error."""

    def __init__(self, message: str, code: str = "assignment_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class AssignmentNotFoundError(AssignmentError):
    """Assignment does not exist."""

    def __init__(self, message: str = "Assignment not found"):
        super().__init__(message, "assignment_not_found")


class InvalidAssignmentTargetError(AssignmentError):
    """Employee not enrolled in the batch, or module not assigned to it."""

    def __init__(self, message: str = "Employee is not enrolled in this batch"):
        super().__init__(message, "invalid_target")


# ==============================================================================
# Assignment Service
# ==============================================================================


class AssignmentService:
    """Service for post-training assignments."""

    def __init__(self, store: DataStore):
        self.store = store

    # ==========================================================================
    # Queries
    # ==========================================================================

    def enrich(
        self, state: TrainingState, assignment: PostSessionAssignment
    ) -> AssignmentResponse:
        batch = state.find_batch(assignment.batch_id)
        employee = state.find_employee(assignment.employee_id)
        module = state.find_module(assignment.module_id)
        return AssignmentResponse.from_entity(
            assignment,
            batch_title=batch.title if batch else "Unknown Batch",
            employee_name=employee.name if employee else "Unknown Employee",
            employee_designation=employee.designation if employee else "",
            module_title=module.sub_module_title if module else "Module",
            module_name=module.module_name if module else "",
        )

    def to_response(self, assignment: PostSessionAssignment) -> AssignmentResponse:
        return self.enrich(self.store.snapshot(), assignment)

    def list_assignments(
        self,
        test_status: TestStatus | None = None,
        status: PostSessionStatus | None = None,
        search: str | None = None,
    ) -> list[AssignmentResponse]:
        """Enriched assignments, newest first.

        Args:
            test_status: Exact test status
            status: Exact deliverable status
            search: Case-insensitive substring of batch title, employee name
                or module title
        """
        state = self.store.snapshot()
        needle = search.strip().lower() if search else ""
        rows = []
        for assignment in state.post_session_assignments:
            if test_status is not None and assignment.test_status != test_status:
                continue
            if status is not None and assignment.status != status:
                continue
            row = self.enrich(state, assignment)
            if needle and not any(
                needle in value.lower()
                for value in (row.batch_title, row.employee_name, row.module_title)
            ):
                continue
            rows.append(row)
        return rows

    def summary(self) -> AssignmentSummary:
        assignments = self.store.snapshot().post_session_assignments
        return AssignmentSummary(
            total=len(assignments),
            submitted=sum(1 for a in assignments if a.status != PostSessionStatus.PENDING),
            reviewed=sum(1 for a in assignments if a.status == PostSessionStatus.REVIEWED),
            pending_tests=sum(
                1 for a in assignments if a.test_status != TestStatus.COMPLETED
            ),
        )

    # ==========================================================================
    # Mutations
    # ==========================================================================

    async def add_assignment(self, data: CreateAssignmentRequest) -> PostSessionAssignment:
        """Create an assignment at the front of the list.

        Raises:
            InvalidAssignmentTargetError: If the employee is not enrolled in the
                batch or the module is not assigned to it
        """
        async with self.store.transaction() as state:
            if not state.is_enrolled(data.batch_id, data.employee_id):
                raise InvalidAssignmentTargetError
            if not state.is_module_in_batch(data.batch_id, data.module_id):
                raise InvalidAssignmentTargetError("Module is not assigned to this batch")

            assignment = PostSessionAssignment(
                batch_id=data.batch_id,
                employee_id=data.employee_id,
                module_id=data.module_id,
                status=data.status,
                test_status=data.test_status,
                notes=data.notes,
                due_date=data.due_date,
                submitted_at=data.submitted_at,
                assigned_at=data.assigned_at,
            )
            state.post_session_assignments.insert(0, assignment)

        logger.info(
            "assignment_created",
            assignment_id=assignment.id,
            employee_id=assignment.employee_id,
            module_id=assignment.module_id,
        )
        return assignment

    async def update_assignment(
        self, assignment_id: str, data: UpdateAssignmentRequest
    ) -> PostSessionAssignment:
        """Apply a partial update.

        Moving away from pending stamps ``submitted_at`` when it is empty.

        Raises:
            AssignmentNotFoundError: If assignment doesn't exist
        """
        async with self.store.transaction() as state:
            assignment = state.find_assignment(assignment_id)
            if assignment is None:
                raise AssignmentNotFoundError

            updates = data.model_dump(exclude_unset=True)
            for field in ("status", "test_status", "notes"):
                if updates.get(field) is not None:
                    setattr(assignment, field, updates[field])
            for field in ("due_date", "submitted_at"):
                if field in updates:
                    setattr(assignment, field, updates[field])

            if (
                assignment.status != PostSessionStatus.PENDING
                and assignment.submitted_at is None
            ):
                assignment.submitted_at = utc_now()

        logger.info(
            "assignment_updated",
            assignment_id=assignment_id,
            status=assignment.status.value,
            fields=sorted(updates),
        )
        return assignment

    async def review_assignment(self, assignment_id: str) -> PostSessionAssignment:
        """Mark reviewed, stamping ``submitted_at`` when it is empty.

        Raises:
            AssignmentNotFoundError: If assignment doesn't exist
        """
        async with self.store.transaction() as state:
            assignment = state.find_assignment(assignment_id)
            if assignment is None:
                raise AssignmentNotFoundError

            assignment.status = PostSessionStatus.REVIEWED
            assignment.submitted_at = assignment.submitted_at or utc_now()

        logger.info("assignment_reviewed", assignment_id=assignment_id)
        return assignment
