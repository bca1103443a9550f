"""Batch service layer.

Business logic for:
- Batch CRUD and publishing
- Replacing enrollments and module lists while keeping existing progress
- Batch detail and insights
"""

import structlog

from training_admin.config.settings import Settings
from training_admin.progress.models import EmployeeProgress
from training_admin.store import DataStore, TrainingState
from training_admin.utils import utc_now

from .insights import build_batch_insights
from .models import Batch, BatchEmployee, BatchModule
from .schemas import (
    BatchDetailResponse,
    BatchEmployeeEntry,
    BatchInsightsResponse,
    BatchModuleEntry,
    BatchResponse,
    CreateBatchRequest,
    UpdateBatchRequest,
)


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class BatchError(Exception):
    """Base batch error."""

    def __init__(self, message: str, code: str = "batch_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class BatchNotFoundError(BatchError):
    """Batch does not exist."""

    def __init__(self, message: str = "Batch not found"):
        super().__init__(message, "batch_not_found")


class UnknownReferenceError(BatchError):
    """Referenced employees or modules do not exist."""

    def __init__(self, kind: str, ids: list[str]):
        self.kind = kind
        self.ids = ids
        super().__init__(f"Unknown {kind}: {', '.join(ids)}", "unknown_reference")


# ==============================================================================
# Batch Service
# ==============================================================================


class BatchService:
    """Service for batches and their memberships."""

    def __init__(self, store: DataStore, settings: Settings):
        self.store = store
        self.settings = settings

    # ==========================================================================
    # Queries
    # ==========================================================================

    def get_batch(self, batch_id: str) -> Batch:
        """Get a batch.

        Raises:
            BatchNotFoundError: If batch doesn't exist
        """
        batch = self.store.snapshot().find_batch(batch_id)
        if batch is None:
            raise BatchNotFoundError
        return batch

    def to_response(self, batch: Batch) -> BatchResponse:
        state = self.store.snapshot()
        return BatchResponse.from_entity(
            batch,
            employee_count=len(state.batch_employee_ids(batch.id)),
            module_count=len(state.batch_module_links(batch.id)),
        )

    def list_batches(self) -> list[BatchResponse]:
        return [self.to_response(b) for b in self.store.snapshot().batches]

    def batch_detail(self, batch_id: str) -> BatchDetailResponse:
        """Batch with enrolled employees and ordered modules.

        Raises:
            BatchNotFoundError: If batch doesn't exist
        """
        batch = self.get_batch(batch_id)
        state = self.store.snapshot()

        employees = []
        for enrollment in state.batch_employees:
            if enrollment.batch_id != batch_id:
                continue
            employee = state.find_employee(enrollment.employee_id)
            if employee is None:
                continue
            employees.append(
                BatchEmployeeEntry(
                    employee_id=employee.id,
                    employee_code=employee.employee_id,
                    name=employee.name,
                    designation=employee.designation,
                    department=employee.department,
                    enrolled_at=enrollment.enrolled_at,
                )
            )

        modules = []
        for link in state.batch_module_links(batch_id):
            module = state.find_module(link.module_id)
            if module is None:
                continue
            modules.append(
                BatchModuleEntry(
                    module_id=module.id,
                    module_name=module.module_name,
                    sub_module_title=module.sub_module_title,
                    order_index=link.order_index,
                    assigned_at=link.assigned_at,
                )
            )

        return BatchDetailResponse(
            batch=self.to_response(batch), employees=employees, modules=modules
        )

    def batch_insights(self, batch_id: str) -> BatchInsightsResponse:
        """Leaderboard of the batch.

        Raises:
            BatchNotFoundError: If batch doesn't exist
        """
        batch = self.get_batch(batch_id)
        return build_batch_insights(
            self.store.snapshot(),
            batch,
            minutes_per_completed_module=self.settings.minutes_per_completed_module,
        )

    # ==========================================================================
    # Batch Mutations
    # ==========================================================================

    async def add_batch(self, data: CreateBatchRequest) -> Batch:
        """Create a batch at the front of the list."""
        async with self.store.transaction() as state:
            batch = Batch(
                title=data.title,
                description=data.description,
                is_published=data.is_published,
                is_active=data.is_active,
            )
            if batch.is_published:
                batch.published_at = batch.created_at
            state.batches.insert(0, batch)

        logger.info(
            "batch_created", batch_id=batch.id, is_published=batch.is_published
        )
        return batch

    async def update_batch(self, batch_id: str, data: UpdateBatchRequest) -> Batch:
        """Apply a partial update.

        ``published_at`` is stamped when the batch goes from draft to
        published; unpublishing keeps it.

        Raises:
            BatchNotFoundError: If batch doesn't exist
        """
        async with self.store.transaction() as state:
            batch = state.find_batch(batch_id)
            if batch is None:
                raise BatchNotFoundError

            was_published = batch.is_published
            updates = {
                field: value
                for field, value in data.model_dump(exclude_unset=True).items()
                if value is not None
            }
            for field, value in updates.items():
                setattr(batch, field, value)

            now = utc_now()
            batch.updated_at = now
            if batch.is_published and not was_published:
                batch.published_at = now

        logger.info("batch_updated", batch_id=batch_id, fields=sorted(updates))
        return batch

    async def delete_batch(self, batch_id: str) -> None:
        """Delete a batch with its memberships, records and assignments.

        Raises:
            BatchNotFoundError: If batch doesn't exist
        """
        async with self.store.transaction() as state:
            if state.find_batch(batch_id) is None:
                raise BatchNotFoundError

            state.batches = [b for b in state.batches if b.id != batch_id]
            state.batch_employees = [
                be for be in state.batch_employees if be.batch_id != batch_id
            ]
            state.batch_modules = [
                bm for bm in state.batch_modules if bm.batch_id != batch_id
            ]
            state.employee_progress = [
                p for p in state.employee_progress if p.batch_id != batch_id
            ]
            state.post_session_assignments = [
                a for a in state.post_session_assignments if a.batch_id != batch_id
            ]

        logger.info("batch_deleted", batch_id=batch_id)

    # ==========================================================================
    # Membership
    # ==========================================================================

    async def set_batch_employees(
        self, batch_id: str, employee_ids: list[str]
    ) -> BatchDetailResponse:
        """Replace the batch's enrollment.

        Retained employees keep their enrollment date and progress. New
        employees get a not-started record for every module of the batch.
        Removed employees lose their records and assignments in this batch.

        Raises:
            BatchNotFoundError: If batch doesn't exist
            UnknownReferenceError: If an employee id doesn't exist
        """
        requested = list(dict.fromkeys(employee_ids))

        async with self.store.transaction() as state:
            if state.find_batch(batch_id) is None:
                raise BatchNotFoundError
            unknown = [i for i in requested if state.find_employee(i) is None]
            if unknown:
                raise UnknownReferenceError("employees", unknown)

            current = {
                be.employee_id: be
                for be in state.batch_employees
                if be.batch_id == batch_id
            }
            removed = set(current) - set(requested)
            added = [i for i in requested if i not in current]

            state.batch_employees = [
                be for be in state.batch_employees if be.batch_id != batch_id
            ] + [
                current.get(i) or BatchEmployee(batch_id=batch_id, employee_id=i)
                for i in requested
            ]

            state.employee_progress = [
                p
                for p in state.employee_progress
                if not (p.batch_id == batch_id and p.employee_id in removed)
            ]
            state.post_session_assignments = [
                a
                for a in state.post_session_assignments
                if not (a.batch_id == batch_id and a.employee_id in removed)
            ]

            module_ids = [bm.module_id for bm in state.batch_module_links(batch_id)]
            created = self._ensure_progress(state, batch_id, added, module_ids)

        logger.info(
            "batch_employees_updated",
            batch_id=batch_id,
            added=len(added),
            removed=len(removed),
            progress_created=created,
        )
        return self.batch_detail(batch_id)

    async def set_batch_modules(
        self, batch_id: str, module_ids: list[str]
    ) -> BatchDetailResponse:
        """Replace the batch's ordered module list.

        Retained modules keep their assignment date and records. Every enrolled
        employee gets a not-started record for each new module. Records and
        assignments for removed modules in this batch are dropped.

        Raises:
            BatchNotFoundError: If batch doesn't exist
            UnknownReferenceError: If a module id doesn't exist
        """
        requested = list(dict.fromkeys(module_ids))

        async with self.store.transaction() as state:
            if state.find_batch(batch_id) is None:
                raise BatchNotFoundError
            unknown = [i for i in requested if state.find_module(i) is None]
            if unknown:
                raise UnknownReferenceError("modules", unknown)

            current = {
                bm.module_id: bm for bm in state.batch_modules if bm.batch_id == batch_id
            }
            removed = set(current) - set(requested)
            added = [i for i in requested if i not in current]

            links = []
            for order_index, module_id in enumerate(requested):
                link = current.get(module_id) or BatchModule(
                    batch_id=batch_id, module_id=module_id
                )
                link.order_index = order_index
                links.append(link)
            state.batch_modules = [
                bm for bm in state.batch_modules if bm.batch_id != batch_id
            ] + links

            state.employee_progress = [
                p
                for p in state.employee_progress
                if not (p.batch_id == batch_id and p.module_id in removed)
            ]
            state.post_session_assignments = [
                a
                for a in state.post_session_assignments
                if not (a.batch_id == batch_id and a.module_id in removed)
            ]

            employee_ids = state.batch_employee_ids(batch_id)
            created = self._ensure_progress(state, batch_id, employee_ids, added)

        logger.info(
            "batch_modules_updated",
            batch_id=batch_id,
            added=len(added),
            removed=len(removed),
            progress_created=created,
        )
        return self.batch_detail(batch_id)

    def _ensure_progress(
        self,
        state: TrainingState,
        batch_id: str,
        employee_ids: list[str],
        module_ids: list[str],
    ) -> int:
        """Add not-started records for missing (employee, module) pairs."""
        existing = {
            (p.employee_id, p.module_id)
            for p in state.employee_progress
            if p.batch_id == batch_id
        }
        created = 0
        for employee_id in employee_ids:
            for module_id in module_ids:
                if (employee_id, module_id) in existing:
                    continue
                state.employee_progress.append(
                    EmployeeProgress(
                        employee_id=employee_id,
                        batch_id=batch_id,
                        module_id=module_id,
                    )
                )
                created += 1
        return created
