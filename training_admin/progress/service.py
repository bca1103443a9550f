"""Progress service layer.

Business logic for:
- Upserting progress records with lifecycle stamping
- Listing and filtering records
- Session review metrics
"""

import structlog

from training_admin.store import DataStore
from training_admin.utils import clamp_score, utc_now

from .models import EmployeeProgress, TestStatus, TrainingStatus
from .schemas import SessionMetrics, SessionReviewResponse, UpsertProgressRequest


logger = structlog.get_logger(__name__)

FALLBACK_MODULE_TITLE = "Module Session"
FALLBACK_EMPLOYEE_NAME = "Employee"
FALLBACK_TEAM_TITLE = "Team"


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class ProgressError(Exception):
    """Base progress error."""

    def __init__(self, message: str, code: str = "progress_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class ProgressNotFoundError(ProgressError):
    """Progress record does not exist."""

    def __init__(self, message: str = "Progress record not found"):
        super().__init__(message, "progress_not_found")


class NotEnrolledError(ProgressError):
    """Employee not enrolled in the batch, or module not assigned to it."""

    def __init__(self, message: str = "Employee is not enrolled in this batch"):
        super().__init__(message, "not_enrolled")


class DuplicateProgressError(ProgressError):
    """A record already exists for the employee, batch and module."""

    def __init__(
        self, message: str = "Progress already tracked for this employee and module"
    ):
        super().__init__(message, "duplicate_progress")


# ==============================================================================
# Session Metrics
# ==============================================================================


def session_metrics(progress_percentage: int, test_score: int | None) -> SessionMetrics:
    """Derived 0-100 indicators of a session."""
    if test_score is not None:
        effectiveness = clamp_score((test_score + progress_percentage) / 2)
    else:
        effectiveness = clamp_score(progress_percentage)

    attentiveness = clamp_score(effectiveness + 5)
    score_or_effectiveness = test_score if test_score is not None else effectiveness
    proactiveness = clamp_score(effectiveness - 3 + score_or_effectiveness * 0.1)
    collaboration = clamp_score((effectiveness + attentiveness + proactiveness) / 3)

    return SessionMetrics(
        effectiveness=effectiveness,
        attentiveness=attentiveness,
        proactiveness=proactiveness,
        collaboration=collaboration,
    )


# ==============================================================================
# Progress Service
# ==============================================================================


class ProgressService:
    """Service for per-employee progress records."""

    def __init__(self, store: DataStore):
        self.store = store

    def get_progress(self, progress_id: str) -> EmployeeProgress:
        """Get a record.

        Raises:
            ProgressNotFoundError: If record doesn't exist
        """
        record = self.store.snapshot().find_progress(progress_id)
        if record is None:
            raise ProgressNotFoundError
        return record

    def list_progress(
        self,
        batch_id: str | None = None,
        employee_id: str | None = None,
        module_id: str | None = None,
        status: TrainingStatus | None = None,
    ) -> list[EmployeeProgress]:
        return [
            p
            for p in self.store.snapshot().employee_progress
            if (batch_id is None or p.batch_id == batch_id)
            and (employee_id is None or p.employee_id == employee_id)
            and (module_id is None or p.module_id == module_id)
            and (status is None or p.status == status)
        ]

    async def upsert_progress(self, data: UpsertProgressRequest) -> EmployeeProgress:
        """Merge into the record with ``data.id``, or create a new record.

        A new record takes ``data.id`` when one is given, so callers can
        upsert by a client-generated id.

        Moving to in_progress or completed stamps ``started_at``; completing
        stamps ``completed_at`` and sets progress to 100.

        Raises:
            ProgressNotFoundError: If ``data.id`` is unknown and the keys needed
                to create the record are missing
            NotEnrolledError: If a new record's employee or module is not in the batch
            DuplicateProgressError: If a new record duplicates an existing one
        """
        now = utc_now()

        async with self.store.transaction() as state:
            record = state.find_progress(data.id) if data.id is not None else None
            created = record is None
            if created:
                if not (data.employee_id and data.batch_id and data.module_id):
                    raise ProgressNotFoundError
                if not state.is_enrolled(data.batch_id, data.employee_id):
                    raise NotEnrolledError
                if not state.is_module_in_batch(data.batch_id, data.module_id):
                    raise NotEnrolledError("Module is not assigned to this batch")
                if any(
                    p.batch_id == data.batch_id
                    and p.employee_id == data.employee_id
                    and p.module_id == data.module_id
                    for p in state.employee_progress
                ):
                    raise DuplicateProgressError
                record = EmployeeProgress(
                    employee_id=data.employee_id,
                    batch_id=data.batch_id,
                    module_id=data.module_id,
                    id=data.id,
                )
                state.employee_progress.append(record)

            if data.progress_percentage is not None:
                record.progress_percentage = data.progress_percentage
            if data.test_status is not None:
                record.test_status = TestStatus(data.test_status)
            if "test_score" in data.model_fields_set:
                record.test_score = data.test_score

            if data.status is not None:
                record.status = data.status
                if data.status != TrainingStatus.NOT_STARTED:
                    record.started_at = record.started_at or now
                if data.status == TrainingStatus.COMPLETED:
                    record.completed_at = record.completed_at or now
                    record.progress_percentage = 100
            record.last_accessed_at = now

        logger.info(
            "progress_created" if created else "progress_updated",
            progress_id=record.id,
            employee_id=record.employee_id,
            module_id=record.module_id,
            status=record.status.value,
        )
        return record

    def session_review(self, progress_id: str) -> SessionReviewResponse:
        """Context and derived metrics for one session.

        Raises:
            ProgressNotFoundError: If record doesn't exist
        """
        record = self.get_progress(progress_id)
        state = self.store.snapshot()
        module = state.find_module(record.module_id)
        employee = state.find_employee(record.employee_id)
        batch = state.find_batch(record.batch_id)

        return SessionReviewResponse(
            progress_id=record.id,
            module_title=module.sub_module_title if module else FALLBACK_MODULE_TITLE,
            module_name=module.module_name if module else None,
            employee_name=employee.name if employee else FALLBACK_EMPLOYEE_NAME,
            team_title=batch.title if batch else FALLBACK_TEAM_TITLE,
            completed_at=record.completed_at,
            score=record.test_score,
            progress_percentage=record.progress_percentage,
            metrics=session_metrics(record.progress_percentage, record.test_score),
        )
