"""FastAPI dependencies for post-training assignments."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .service import AssignmentError, AssignmentService


async def get_assignment_service(request: Request) -> AssignmentService:
    """Get assignment service from app state."""
    assignment_service = getattr(request.app.state, "assignment_service", None)
    if assignment_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Assignment service not available",
        )
    return assignment_service


AssignmentServiceDep = Annotated[AssignmentService, Depends(get_assignment_service)]


def handle_assignment_error(error: AssignmentError) -> HTTPException:
    """Convert assignment errors to HTTP exceptions."""
    status_map = {
        "assignment_not_found": status.HTTP_404_NOT_FOUND,
        "invalid_target": status.HTTP_422_UNPROCESSABLE_ENTITY,
    }

    status_code = status_map.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTTPException(status_code=status_code, detail=error.message)
