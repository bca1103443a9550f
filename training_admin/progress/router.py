"""Progress tracking API endpoints.

Provides routes for:
- Progress queries with filters
- Progress upserts
- Session review
"""

from fastapi import APIRouter, Query

from training_admin.auth.dependencies import CurrentAdmin

from .dependencies import ProgressServiceDep, handle_progress_error
from .models import TrainingStatus
from .schemas import (
    ProgressListResponse,
    ProgressResponse,
    SessionReviewResponse,
    UpsertProgressRequest,
)
from .service import ProgressError


router = APIRouter(prefix="/v1/progress", tags=["progress"])


@router.get("", response_model=ProgressListResponse, summary="List progress records")
async def list_progress(
    _admin: CurrentAdmin,
    progress_service: ProgressServiceDep,
    batch_id: str | None = Query(None),
    employee_id: str | None = Query(None, description="Internal employee id"),
    module_id: str | None = Query(None),
    status: TrainingStatus | None = Query(None),
) -> ProgressListResponse:
    records = progress_service.list_progress(batch_id, employee_id, module_id, status)
    return ProgressListResponse(
        items=[ProgressResponse.from_entity(r) for r in records],
        total=len(records),
    )


@router.put(
    "",
    response_model=ProgressResponse,
    summary="Create or update a progress record",
    responses={
        404: {"description": "Unknown record id without keys to create it"},
        409: {"description": "Record already exists for this employee and module"},
        422: {"description": "Employee or module not part of the batch"},
    },
)
async def upsert_progress(
    data: UpsertProgressRequest,
    _admin: CurrentAdmin,
    progress_service: ProgressServiceDep,
) -> ProgressResponse:
    """Merge into the record with ``id``, or create a new one.

    Sets ``last_accessed_at`` and stamps lifecycle timestamps on status changes.
    """
    try:
        record = await progress_service.upsert_progress(data)
    except ProgressError as e:
        raise handle_progress_error(e) from e
    return ProgressResponse.from_entity(record)


@router.get(
    "/{progress_id}",
    response_model=ProgressResponse,
    summary="Get progress record",
)
async def get_progress(
    progress_id: str,
    _admin: CurrentAdmin,
    progress_service: ProgressServiceDep,
) -> ProgressResponse:
    try:
        record = progress_service.get_progress(progress_id)
    except ProgressError as e:
        raise handle_progress_error(e) from e
    return ProgressResponse.from_entity(record)


@router.get(
    "/{progress_id}/review",
    response_model=SessionReviewResponse,
    summary="Session review",
)
async def get_session_review(
    progress_id: str,
    _admin: CurrentAdmin,
    progress_service: ProgressServiceDep,
) -> SessionReviewResponse:
    """Session context with effectiveness, attentiveness, proactiveness and
    collaboration indicators."""
    try:
        return progress_service.session_review(progress_id)
    except ProgressError as e:
        raise handle_progress_error(e) from e
