"""Employee service layer.

Business logic for:
- Employee CRUD with cascading deletes
- Atomic bulk import
- Listing filters and per-employee training profile
"""

from collections import Counter

import structlog

from training_admin.progress.models import TrainingStatus
from training_admin.store import DataStore, TrainingState
from training_admin.utils import rounded_mean, utc_now

from .models import Employee
from .schemas import (
    CreateEmployeeRequest,
    EmployeeResponse,
    ProfileAggregate,
    ProfileBatch,
    ProfileRecord,
    TrainingProfileResponse,
    UpdateEmployeeRequest,
)


logger = structlog.get_logger(__name__)

UNASSIGNED_BATCH_TITLE = "Unassigned Batch"


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class EmployeeError(Exception):
    """Base employee error."""

    def __init__(self, message: str, code: str = "employee_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class EmployeeNotFoundError(EmployeeError):
    """Employee does not exist."""

    def __init__(self, message: str = "Employee not found"):
        super().__init__(message, "employee_not_found")


class DuplicateEmployeeCodeError(EmployeeError):
    """HR code already used by another employee."""

    def __init__(self, employee_code: str):
        self.employee_code = employee_code
        super().__init__(
            f"Employee ID {employee_code} is already in use", "duplicate_employee_id"
        )


# ==============================================================================
# Employee Service
# ==============================================================================


class EmployeeService:
    """Service for the employee roster."""

    def __init__(self, store: DataStore):
        self.store = store

    # ==========================================================================
    # Queries
    # ==========================================================================

    def get_employee(self, employee_id: str) -> Employee:
        """Get an employee by internal id.

        Raises:
            EmployeeNotFoundError: If employee doesn't exist
        """
        employee = self.store.snapshot().find_employee(employee_id)
        if employee is None:
            raise EmployeeNotFoundError
        return employee

    def sessions_completed(self) -> Counter:
        """Completed progress records per employee."""
        return Counter(
            p.employee_id for p in self.store.snapshot().employee_progress if p.is_completed
        )

    def list_employees(
        self,
        search: str | None = None,
        department: str | None = None,
        designation: str | None = None,
        is_active: bool | None = None,
    ) -> list[EmployeeResponse]:
        """List the roster with completed session counts.

        Args:
            search: Case-insensitive substring of name, email or HR code
            department: Exact department
            designation: Exact designation
            is_active: Active flag
        """
        needle = search.strip().lower() if search else ""
        completed = self.sessions_completed()
        rows = []
        for employee in self.store.snapshot().employees:
            if needle and not any(
                needle in value.lower()
                for value in (employee.name, employee.email, employee.employee_id)
            ):
                continue
            if department and employee.department != department:
                continue
            if designation and employee.designation != designation:
                continue
            if is_active is not None and employee.is_active != is_active:
                continue
            rows.append(EmployeeResponse.from_entity(employee, completed[employee.id]))
        return rows

    def to_response(self, employee: Employee) -> EmployeeResponse:
        return EmployeeResponse.from_entity(
            employee, self.sessions_completed()[employee.id]
        )

    def training_profile(self, employee_id: str) -> TrainingProfileResponse:
        """Aggregate and per-batch progress of one employee.

        Raises:
            EmployeeNotFoundError: If employee doesn't exist
        """
        employee = self.get_employee(employee_id)
        state = self.store.snapshot()
        records = [p for p in state.employee_progress if p.employee_id == employee.id]

        aggregate = ProfileAggregate(
            completed=sum(1 for p in records if p.is_completed),
            total=len(records),
            average_progress=rounded_mean(p.progress_percentage for p in records),
        )

        batch_ids = list(dict.fromkeys(p.batch_id for p in records))
        batches = []
        for batch_id in batch_ids:
            batch = state.find_batch(batch_id)
            batch_records = [p for p in records if p.batch_id == batch_id]
            statuses = Counter(p.status for p in batch_records)
            profile_records = []
            for record in batch_records:
                module = state.find_module(record.module_id)
                profile_records.append(
                    ProfileRecord.from_entity(
                        record,
                        module_title=module.sub_module_title if module else None,
                        module_name=module.module_name if module else None,
                    )
                )
            batches.append(
                ProfileBatch(
                    batch_id=batch_id,
                    title=batch.title if batch and batch.title else UNASSIGNED_BATCH_TITLE,
                    description=batch.description if batch else "",
                    completed_count=statuses[TrainingStatus.COMPLETED],
                    in_progress_count=statuses[TrainingStatus.IN_PROGRESS],
                    not_started_count=statuses[TrainingStatus.NOT_STARTED],
                    average_progress=rounded_mean(
                        p.progress_percentage for p in batch_records
                    ),
                    records=profile_records,
                )
            )

        return TrainingProfileResponse(
            employee=EmployeeResponse.from_entity(employee, aggregate.completed),
            aggregate=aggregate,
            batches=batches,
        )

    # ==========================================================================
    # Mutations
    # ==========================================================================

    async def add_employee(self, data: CreateEmployeeRequest) -> Employee:
        """Create an employee at the front of the roster.

        Raises:
            DuplicateEmployeeCodeError: If the HR code is taken
        """
        async with self.store.transaction() as state:
            self._ensure_code_available(state, data.employee_id)
            employee = Employee(**data.model_dump())
            state.employees.insert(0, employee)

        logger.info(
            "employee_created",
            employee_id=employee.id,
            employee_code=employee.employee_id,
        )
        return employee

    async def import_employees(
        self, records: list[CreateEmployeeRequest]
    ) -> list[Employee]:
        """Create many employees, prepended in the given order.

        Raises:
            DuplicateEmployeeCodeError: If any HR code repeats within the
                import or is already taken; nothing is imported then.
        """
        async with self.store.transaction() as state:
            seen: set[str] = set()
            for record in records:
                key = record.employee_id.lower()
                if key in seen:
                    raise DuplicateEmployeeCodeError(record.employee_id)
                seen.add(key)
                self._ensure_code_available(state, record.employee_id)

            employees = [Employee(**record.model_dump()) for record in records]
            state.employees[:0] = employees

        logger.info("employees_imported", count=len(employees))
        return employees

    async def update_employee(
        self, employee_id: str, data: UpdateEmployeeRequest
    ) -> Employee:
        """Apply a partial update.

        Raises:
            EmployeeNotFoundError: If employee doesn't exist
            DuplicateEmployeeCodeError: If the new HR code is taken
        """
        async with self.store.transaction() as state:
            employee = state.find_employee(employee_id)
            if employee is None:
                raise EmployeeNotFoundError

            updates = {
                field: value
                for field, value in data.model_dump(exclude_unset=True).items()
                if value is not None
            }
            if "employee_id" in updates:
                self._ensure_code_available(
                    state, updates["employee_id"], exclude_id=employee.id
                )

            for field, value in updates.items():
                setattr(employee, field, value)
            employee.updated_at = utc_now()

        logger.info("employee_updated", employee_id=employee_id, fields=sorted(updates))
        return employee

    async def delete_employee(self, employee_id: str) -> None:
        """Delete an employee with enrollments, records and assignments.

        Raises:
            EmployeeNotFoundError: If employee doesn't exist
        """
        async with self.store.transaction() as state:
            if state.find_employee(employee_id) is None:
                raise EmployeeNotFoundError

            state.employees = [e for e in state.employees if e.id != employee_id]
            state.batch_employees = [
                be for be in state.batch_employees if be.employee_id != employee_id
            ]
            state.employee_progress = [
                p for p in state.employee_progress if p.employee_id != employee_id
            ]
            state.post_session_assignments = [
                a
                for a in state.post_session_assignments
                if a.employee_id != employee_id
            ]

        logger.info("employee_deleted", employee_id=employee_id)

    def _ensure_code_available(
        self,
        state: TrainingState,
        employee_code: str,
        exclude_id: str | None = None,
    ) -> None:
        key = employee_code.strip().lower()
        for employee in state.employees:
            if employee.id != exclude_id and employee.employee_id.lower() == key:
                raise DuplicateEmployeeCodeError(employee_code)
