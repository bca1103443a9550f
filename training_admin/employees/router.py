"""Employee API endpoints.

Provides routes for:
- Roster listing with filters
- Employee CRUD and bulk import
- Training profile
"""

from fastapi import APIRouter, Query, status

from training_admin.auth.dependencies import CurrentAdmin

from .dependencies import EmployeeServiceDep, handle_employee_error
from .schemas import (
    CreateEmployeeRequest,
    EmployeeListResponse,
    EmployeeResponse,
    ImportEmployeesRequest,
    ImportEmployeesResponse,
    TrainingProfileResponse,
    UpdateEmployeeRequest,
)
from .service import EmployeeError


router = APIRouter(prefix="/v1/employees", tags=["employees"])


@router.get("", response_model=EmployeeListResponse, summary="List employees")
async def list_employees(
    _admin: CurrentAdmin,
    employee_service: EmployeeServiceDep,
    search: str | None = Query(None, description="Name, email or HR code contains"),
    department: str | None = Query(None),
    designation: str | None = Query(None),
    is_active: bool | None = Query(None),
) -> EmployeeListResponse:
    items = employee_service.list_employees(search, department, designation, is_active)
    return EmployeeListResponse(items=items, total=len(items))


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create employee",
    responses={409: {"description": "HR code already in use"}},
)
async def create_employee(
    data: CreateEmployeeRequest,
    _admin: CurrentAdmin,
    employee_service: EmployeeServiceDep,
) -> EmployeeResponse:
    try:
        employee = await employee_service.add_employee(data)
    except EmployeeError as e:
        raise handle_employee_error(e) from e
    return employee_service.to_response(employee)


@router.post(
    "/import",
    response_model=ImportEmployeesResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Import employees",
    responses={409: {"description": "Duplicate HR code; nothing imported"}},
)
async def import_employees(
    data: ImportEmployeesRequest,
    _admin: CurrentAdmin,
    employee_service: EmployeeServiceDep,
) -> ImportEmployeesResponse:
    """Create all given employees, or none of them."""
    try:
        employees = await employee_service.import_employees(data.employees)
    except EmployeeError as e:
        raise handle_employee_error(e) from e
    return ImportEmployeesResponse(
        imported=len(employees),
        items=[EmployeeResponse.from_entity(e) for e in employees],
    )


@router.get("/{employee_id}", response_model=EmployeeResponse, summary="Get employee")
async def get_employee(
    employee_id: str,
    _admin: CurrentAdmin,
    employee_service: EmployeeServiceDep,
) -> EmployeeResponse:
    try:
        employee = employee_service.get_employee(employee_id)
    except EmployeeError as e:
        raise handle_employee_error(e) from e
    return employee_service.to_response(employee)


@router.get(
    "/{employee_id}/profile",
    response_model=TrainingProfileResponse,
    summary="Employee training profile",
)
async def get_training_profile(
    employee_id: str,
    _admin: CurrentAdmin,
    employee_service: EmployeeServiceDep,
) -> TrainingProfileResponse:
    """Aggregate progress plus progress grouped by batch."""
    try:
        return employee_service.training_profile(employee_id)
    except EmployeeError as e:
        raise handle_employee_error(e) from e


@router.patch(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Update employee",
    responses={404: {"description": "Not found"}, 409: {"description": "HR code in use"}},
)
async def update_employee(
    employee_id: str,
    data: UpdateEmployeeRequest,
    _admin: CurrentAdmin,
    employee_service: EmployeeServiceDep,
) -> EmployeeResponse:
    try:
        employee = await employee_service.update_employee(employee_id, data)
    except EmployeeError as e:
        raise handle_employee_error(e) from e
    return employee_service.to_response(employee)


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete employee",
)
async def delete_employee(
    employee_id: str,
    _admin: CurrentAdmin,
    employee_service: EmployeeServiceDep,
) -> None:
    """Delete an employee with enrollments, records and assignments."""
    try:
        await employee_service.delete_employee(employee_id)
    except EmployeeError as e:
        raise handle_employee_error(e) from e
