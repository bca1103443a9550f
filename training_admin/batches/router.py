"""Batch API endpoints.

Provides routes for:
- Batch CRUD and publishing
- Replacing enrolled employees and assigned modules
- Leaderboard insights
"""

from fastapi import APIRouter, status

from training_admin.auth.dependencies import CurrentAdmin

from .dependencies import BatchServiceDep, handle_batch_error
from .schemas import (
    BatchDetailResponse,
    BatchInsightsResponse,
    BatchListResponse,
    BatchResponse,
    CreateBatchRequest,
    SetBatchEmployeesRequest,
    SetBatchModulesRequest,
    UpdateBatchRequest,
)
from .service import BatchError


router = APIRouter(prefix="/v1/batches", tags=["batches"])


@router.get("", response_model=BatchListResponse, summary="List batches")
async def list_batches(
    _admin: CurrentAdmin,
    batch_service: BatchServiceDep,
) -> BatchListResponse:
    items = batch_service.list_batches()
    return BatchListResponse(items=items, total=len(items))


@router.post(
    "",
    response_model=BatchResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create batch",
)
async def create_batch(
    data: CreateBatchRequest,
    _admin: CurrentAdmin,
    batch_service: BatchServiceDep,
) -> BatchResponse:
    batch = await batch_service.add_batch(data)
    return batch_service.to_response(batch)


@router.get("/{batch_id}", response_model=BatchDetailResponse, summary="Get batch")
async def get_batch(
    batch_id: str,
    _admin: CurrentAdmin,
    batch_service: BatchServiceDep,
) -> BatchDetailResponse:
    """Batch with its employees and ordered modules."""
    try:
        return batch_service.batch_detail(batch_id)
    except BatchError as e:
        raise handle_batch_error(e) from e


@router.patch("/{batch_id}", response_model=BatchResponse, summary="Update batch")
async def update_batch(
    batch_id: str,
    data: UpdateBatchRequest,
    _admin: CurrentAdmin,
    batch_service: BatchServiceDep,
) -> BatchResponse:
    try:
        batch = await batch_service.update_batch(batch_id, data)
    except BatchError as e:
        raise handle_batch_error(e) from e
    return batch_service.to_response(batch)


@router.delete(
    "/{batch_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete batch",
)
async def delete_batch(
    batch_id: str,
    _admin: CurrentAdmin,
    batch_service: BatchServiceDep,
) -> None:
    try:
        await batch_service.delete_batch(batch_id)
    except BatchError as e:
        raise handle_batch_error(e) from e


@router.put(
    "/{batch_id}/employees",
    response_model=BatchDetailResponse,
    summary="Replace enrolled employees",
    responses={422: {"description": "Unknown employee ids"}},
)
async def set_batch_employees(
    batch_id: str,
    data: SetBatchEmployeesRequest,
    _admin: CurrentAdmin,
    batch_service: BatchServiceDep,
) -> BatchDetailResponse:
    """Enroll exactly the given employees; existing progress is kept."""
    try:
        return await batch_service.set_batch_employees(batch_id, data.employee_ids)
    except BatchError as e:
        raise handle_batch_error(e) from e


@router.put(
    "/{batch_id}/modules",
    response_model=BatchDetailResponse,
    summary="Replace assigned modules",
    responses={422: {"description": "Unknown module ids"}},
)
async def set_batch_modules(
    batch_id: str,
    data: SetBatchModulesRequest,
    _admin: CurrentAdmin,
    batch_service: BatchServiceDep,
) -> BatchDetailResponse:
    """Assign exactly the given modules, in order."""
    try:
        return await batch_service.set_batch_modules(batch_id, data.module_ids)
    except BatchError as e:
        raise handle_batch_error(e) from e


@router.get(
    "/{batch_id}/insights",
    response_model=BatchInsightsResponse,
    summary="Batch leaderboard",
)
async def get_batch_insights(
    batch_id: str,
    _admin: CurrentAdmin,
    batch_service: BatchServiceDep,
) -> BatchInsightsResponse:
    try:
        return batch_service.batch_insights(batch_id)
    except BatchError as e:
        raise handle_batch_error(e) from e
