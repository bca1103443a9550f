"""Dashboard and report API endpoints."""

from fastapi import APIRouter
from fastapi.responses import Response

from training_admin.auth.dependencies import CurrentAdmin

from .dependencies import ReportServiceDep
from .schemas import DashboardResponse, ReportResponse


router = APIRouter(prefix="/v1/reports", tags=["reports"])


@router.get("/dashboard", response_model=DashboardResponse, summary="Dashboard")
async def get_dashboard(
    _admin: CurrentAdmin,
    report_service: ReportServiceDep,
) -> DashboardResponse:
    """Headline stats, top performers, quick stats, employees needing
    attention and recent activity."""
    return report_service.dashboard()


@router.get("/overview", response_model=ReportResponse, summary="Training report")
async def get_report(
    _admin: CurrentAdmin,
    report_service: ReportServiceDep,
) -> ReportResponse:
    return report_service.report()


@router.get(
    "/departments.csv",
    response_class=Response,
    summary="Export department summary",
    responses={200: {"content": {"text/csv": {}}}},
)
async def export_departments(
    _admin: CurrentAdmin,
    report_service: ReportServiceDep,
) -> Response:
    return Response(
        content=report_service.department_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="department-summary.csv"'},
    )
