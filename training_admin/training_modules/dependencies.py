"""FastAPI dependencies for training modules."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .service import ModuleError, ModuleService


async def get_module_service(request: Request) -> ModuleService:
    """Get module service from app state."""
    module_service = getattr(request.app.state, "module_service", None)
    if module_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Module service not available",
        )
    return module_service


ModuleServiceDep = Annotated[ModuleService, Depends(get_module_service)]


def handle_module_error(error: ModuleError) -> HTTPException:
    """Convert module errors to HTTP exceptions."""
    status_map = {
        "module_not_found": status.HTTP_404_NOT_FOUND,
    }

    return HTTPException(
        status_code=status_map.get(error.code, status.HTTP_400_BAD_REQUEST),
        detail=error.message,
    )
