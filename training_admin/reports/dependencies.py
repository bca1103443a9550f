"""FastAPI dependencies for reports."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .service import ReportService


async def get_report_service(request: Request) -> ReportService:
    """Get report service from app state."""
    report_service = getattr(request.app.state, "report_service", None)
    if report_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Report service not available",
        )
    return report_service


ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
