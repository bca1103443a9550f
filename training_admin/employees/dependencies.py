"""FastAPI dependencies for employees."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .service import EmployeeError, EmployeeService


async def get_employee_service(request: Request) -> EmployeeService:
    """Get employee service from app state."""
    employee_service = getattr(request.app.state, "employee_service", None)
    if employee_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Employee service not available",
        )
    return employee_service


EmployeeServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]


def handle_employee_error(error: EmployeeError) -> HTTPException:
    """Convert employee errors to HTTP exceptions."""
    status_map = {
        "employee_not_found": status.HTTP_404_NOT_FOUND,
        "duplicate_employee_id": status.HTTP_409_CONFLICT,
    }

    return HTTPException(
        status_code=status_map.get(error.code, status.HTTP_400_BAD_REQUEST),
        detail=error.message,
    )
