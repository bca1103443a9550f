"""Pydantic schemas for dashboard and report aggregations."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class AttentionSeverity(str, Enum):
    URGENT = "URGENT"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"


# ==============================================================================
# Dashboard
# ==============================================================================


class DashboardStats(BaseModel):
    total_employees: int
    active_sessions: int
    completion_rate: int
    average_score: int


class TopPerformer(BaseModel):
    employee_id: str
    name: str
    designation: str
    score: int


class QuickStats(BaseModel):
    completed_today: int
    scheduled_this_week: int
    overdue: int


class AttentionItem(BaseModel):
    employee_id: str
    name: str
    issue: str
    severity: AttentionSeverity


class ActivityItem(BaseModel):
    progress_id: str
    employee_id: str
    employee_name: str
    action: str
    module_id: str
    module_title: str
    timestamp: datetime


class DashboardResponse(BaseModel):
    """Headline numbers, leaders, stagnating employees and recent activity."""

    stats: DashboardStats
    top_performers: list[TopPerformer]
    quick_stats: QuickStats
    needs_attention: list[AttentionItem]
    recent_activity: list[ActivityItem]
    generated_at: datetime


# ==============================================================================
# Reports
# ==============================================================================


class ReportSummary(BaseModel):
    total_employees: int
    completion_rate: int
    average_score: int
    at_risk: int


class DepartmentSummary(BaseModel):
    department: str
    employee_count: int
    completion_rate: int
    avg_score: int
    top_module: str


class ModuleSummary(BaseModel):
    module_id: str
    module_name: str
    sub_module_title: str
    assignments: int
    completion_rate: int
    avg_score: int
    struggling_count: int


class ModuleGap(BaseModel):
    module_id: str
    module_name: str
    sub_module_title: str
    avg_score: int
    struggling_count: int


class DepartmentGap(BaseModel):
    department: str
    avg_score: int
    employee_count: int


class SkillGaps(BaseModel):
    modules: list[ModuleGap]
    departments: list[DepartmentGap]


class ReportResponse(BaseModel):
    """Organization-wide training report."""

    summary: ReportSummary
    departments: list[DepartmentSummary]
    modules: list[ModuleSummary]
    skill_gaps: SkillGaps
    generated_at: datetime
