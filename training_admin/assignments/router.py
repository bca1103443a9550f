"""Post-training assignment API endpoints."""

from fastapi import APIRouter, Query, status

from training_admin.auth.dependencies import CurrentAdmin
from training_admin.progress.models import TestStatus

from .dependencies import AssignmentServiceDep, handle_assignment_error
from .models import PostSessionStatus
from .schemas import (
    AssignmentListResponse,
    AssignmentResponse,
    AssignmentSummary,
    CreateAssignmentRequest,
    UpdateAssignmentRequest,
)
from .service import AssignmentError


router = APIRouter(prefix="/v1/assignments", tags=["assignments"])


@router.get("", response_model=AssignmentListResponse, summary="List assignments")
async def list_assignments(
    _admin: CurrentAdmin,
    assignment_service: AssignmentServiceDep,
    test_status: TestStatus | None = Query(None),
    status_filter: PostSessionStatus | None = Query(None, alias="status"),
    search: str | None = Query(None, description="Batch, employee or module text"),
) -> AssignmentListResponse:
    items = assignment_service.list_assignments(test_status, status_filter, search)
    return AssignmentListResponse(items=items, total=len(items))


@router.get("/summary", response_model=AssignmentSummary, summary="Assignment counts")
async def get_summary(
    _admin: CurrentAdmin,
    assignment_service: AssignmentServiceDep,
) -> AssignmentSummary:
    return assignment_service.summary()


@router.post(
    "",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create assignment",
    responses={422: {"description": "Employee or module not part of the batch"}},
)
async def create_assignment(
    data: CreateAssignmentRequest,
    _admin: CurrentAdmin,
    assignment_service: AssignmentServiceDep,
) -> AssignmentResponse:
    try:
        assignment = await assignment_service.add_assignment(data)
    except AssignmentError as e:
        raise handle_assignment_error(e) from e
    return assignment_service.to_response(assignment)


@router.patch(
    "/{assignment_id}",
    response_model=AssignmentResponse,
    summary="Update assignment",
)
async def update_assignment(
    assignment_id: str,
    data: UpdateAssignmentRequest,
    _admin: CurrentAdmin,
    assignment_service: AssignmentServiceDep,
) -> AssignmentResponse:
    """Partial update. Leaving ``pending`` stamps the submission time if unset."""
    try:
        assignment = await assignment_service.update_assignment(assignment_id, data)
    except AssignmentError as e:
        raise handle_assignment_error(e) from e
    return assignment_service.to_response(assignment)


@router.post(
    "/{assignment_id}/review",
    response_model=AssignmentResponse,
    summary="Mark assignment reviewed",
)
async def review_assignment(
    assignment_id: str,
    _admin: CurrentAdmin,
    assignment_service: AssignmentServiceDep,
) -> AssignmentResponse:
    try:
        assignment = await assignment_service.review_assignment(assignment_id)
    except AssignmentError as e:
        raise handle_assignment_error(e) from e
    return assignment_service.to_response(assignment)
