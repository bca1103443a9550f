"""FastAPI dependencies for batches."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .service import BatchError, BatchService


async def get_batch_service(request: Request) -> BatchService:
    """Get batch service from app state."""
    batch_service = getattr(request.app.state, "batch_service", None)
    if batch_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Batch service not available",
        )
    return batch_service


BatchServiceDep = Annotated[BatchService, Depends(get_batch_service)]


def handle_batch_error(error: BatchError) -> HTTPException:
    """Convert batch errors to HTTP exceptions."""
    status_map = {
        "batch_not_found": status.HTTP_404_NOT_FOUND,
        "unknown_reference": status.HTTP_422_UNPROCESSABLE_ENTITY,
    }

    return HTTPException(
        status_code=status_map.get(error.code, status.HTTP_400_BAD_REQUEST),
        detail=error.message,
    )
