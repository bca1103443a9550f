"""Training module API endpoints."""

from fastapi import APIRouter, Query, status

from training_admin.auth.dependencies import CurrentAdmin

from .dependencies import ModuleServiceDep, handle_module_error
from .schemas import (
    CreateModuleRequest,
    ModuleFilterOptions,
    ModuleListResponse,
    ModuleResponse,
    UpdateModuleRequest,
)
from .service import ModuleError


router = APIRouter(prefix="/v1/modules", tags=["modules"])


@router.get("", response_model=ModuleListResponse, summary="List modules")
async def list_modules(
    _admin: CurrentAdmin,
    module_service: ModuleServiceDep,
    search: str | None = Query(None, description="Category or title contains"),
    module_name: str | None = Query(None, description="Exact category"),
    designation: str | None = Query(None, description="Targeted designation"),
) -> ModuleListResponse:
    modules = module_service.list_modules(search, module_name, designation)
    items = [
        ModuleResponse.from_entity(m, module_service.get_assessment(m.id))
        for m in modules
    ]
    return ModuleListResponse(items=items, total=len(items))


@router.get(
    "/options",
    response_model=ModuleFilterOptions,
    summary="Module filter options",
)
async def get_filter_options(
    _admin: CurrentAdmin,
    module_service: ModuleServiceDep,
) -> ModuleFilterOptions:
    """Categories, and designations from modules and active employees."""
    return module_service.filter_options()


@router.post(
    "",
    response_model=ModuleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create module",
)
async def create_module(
    data: CreateModuleRequest,
    _admin: CurrentAdmin,
    module_service: ModuleServiceDep,
) -> ModuleResponse:
    """Create a module, with its assessment when given or when ``has_test``."""
    module = await module_service.add_module(data)
    return ModuleResponse.from_entity(module, module_service.get_assessment(module.id))


@router.get("/{module_id}", response_model=ModuleResponse, summary="Get module")
async def get_module(
    module_id: str,
    _admin: CurrentAdmin,
    module_service: ModuleServiceDep,
) -> ModuleResponse:
    try:
        module = module_service.get_module(module_id)
    except ModuleError as e:
        raise handle_module_error(e) from e
    return ModuleResponse.from_entity(module, module_service.get_assessment(module.id))


@router.patch("/{module_id}", response_model=ModuleResponse, summary="Update module")
async def update_module(
    module_id: str,
    data: UpdateModuleRequest,
    _admin: CurrentAdmin,
    module_service: ModuleServiceDep,
) -> ModuleResponse:
    """Partial update.

    Send ``"assessment": null`` to remove the assessment.
    """
    try:
        module = await module_service.update_module(module_id, data)
    except ModuleError as e:
        raise handle_module_error(e) from e
    return ModuleResponse.from_entity(module, module_service.get_assessment(module.id))


@router.delete(
    "/{module_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete module",
)
async def delete_module(
    module_id: str,
    _admin: CurrentAdmin,
    module_service: ModuleServiceDep,
) -> None:
    """Delete a module with its assessment, batch links and records."""
    try:
        await module_service.delete_module(module_id)
    except ModuleError as e:
        raise handle_module_error(e) from e
