"""Report service: aggregations over the current state snapshot."""

import structlog

from training_admin.config import Settings
from training_admin.store import DataStore
from training_admin.utils import utc_now

from .aggregator import (
    build_dashboard,
    build_report,
    department_summaries,
    export_department_csv,
)
from .schemas import DashboardResponse, ReportResponse


logger = structlog.get_logger(__name__)


class ReportService:
    """Read-only analytics over the training state."""

    def __init__(self, store: DataStore, settings: Settings):
        self.store = store
        self.settings = settings

    def dashboard(self) -> DashboardResponse:
        return build_dashboard(self.store.snapshot(), utc_now(), self.settings)

    def report(self) -> ReportResponse:
        return build_report(self.store.snapshot(), utc_now(), self.settings)

    def department_csv(self) -> str:
        departments = department_summaries(self.store.snapshot())
        logger.info("department_report_exported", departments=len(departments))
        return export_department_csv(departments)
