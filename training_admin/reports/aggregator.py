"""Dashboard and report aggregations.

Pure functions over a ``TrainingState`` snapshot. Rates and averages are whole
numbers rounded half-up; an empty denominator yields 0.
"""

import csv
import io
from datetime import UTC, datetime, timedelta

from training_admin.config import Settings
from training_admin.progress.models import EmployeeProgress, TrainingStatus
from training_admin.store import TrainingState
from training_admin.training_modules.models import TrainingModule
from training_admin.utils import ensure_utc_aware, percentage, rounded_mean

from .schemas import (
    ActivityItem,
    AttentionItem,
    AttentionSeverity,
    DashboardResponse,
    DashboardStats,
    DepartmentGap,
    DepartmentSummary,
    ModuleGap,
    ModuleSummary,
    QuickStats,
    ReportResponse,
    ReportSummary,
    SkillGaps,
    TopPerformer,
)


CSV_HEADER = ["Department", "Employees", "Completion Rate", "Average Score", "Top Module"]

STAGNATION_ISSUE = "No recent activity in assigned modules"
PENDING_ISSUE = "Pending assessments due soon"

ACTIVITY_ACTIONS = {
    TrainingStatus.COMPLETED: "completed",
    TrainingStatus.IN_PROGRESS: "continued",
}


class _Tally:
    """Running completion and score counts over progress records."""

    __slots__ = ("total", "completed", "scores")

    def __init__(self) -> None:
        self.total = 0
        self.completed = 0
        self.scores: list[int] = []

    def add(self, record: EmployeeProgress) -> None:
        self.total += 1
        if record.is_completed:
            self.completed += 1
        if record.scored:
            self.scores.append(record.test_score)

    @property
    def completion_rate(self) -> int:
        return percentage(self.completed, self.total)

    @property
    def avg_score(self) -> int:
        return rounded_mean(self.scores)


def _overall(records: list[EmployeeProgress]) -> _Tally:
    tally = _Tally()
    for record in records:
        tally.add(record)
    return tally


# ==============================================================================
# Dashboard
# ==============================================================================


def dashboard_stats(state: TrainingState) -> DashboardStats:
    overall = _overall(state.employee_progress)
    return DashboardStats(
        total_employees=sum(1 for e in state.employees if e.is_active),
        active_sessions=sum(
            1 for r in state.employee_progress if r.status == TrainingStatus.IN_PROGRESS
        ),
        completion_rate=overall.completion_rate,
        average_score=overall.avg_score,
    )


def top_performers(state: TrainingState, limit: int) -> list[TopPerformer]:
    """Highest mean assessment scores per employee."""
    scores: dict[str, list[int]] = {}
    for record in state.employee_progress:
        if not record.scored or state.find_employee(record.employee_id) is None:
            continue
        scores.setdefault(record.employee_id, []).append(record.test_score)

    performers = []
    for employee_id, values in scores.items():
        employee = state.find_employee(employee_id)
        performers.append(
            TopPerformer(
                employee_id=employee_id,
                name=employee.name,
                designation=employee.designation,
                score=rounded_mean(values),
            )
        )
    performers.sort(key=lambda p: -p.score)
    return performers[:limit]


def quick_stats(state: TrainingState, now: datetime) -> QuickStats:
    today = now.astimezone(UTC).date()
    records = state.employee_progress
    return QuickStats(
        completed_today=sum(
            1
            for r in records
            if r.completed_at is not None
            and ensure_utc_aware(r.completed_at).astimezone(UTC).date() == today
        ),
        scheduled_this_week=sum(1 for r in records if r.status == TrainingStatus.NOT_STARTED),
        overdue=sum(1 for r in records if not r.is_completed),
    )


def _is_stagnating(
    records: list[EmployeeProgress], now: datetime, stagnation_hours: int
) -> bool:
    if not records:
        return True
    touched = [r.last_accessed_at for r in records if r.last_accessed_at is not None]
    if not touched:
        return True
    if not any(r.status == TrainingStatus.IN_PROGRESS for r in records):
        return True
    return now - max(touched) > timedelta(hours=stagnation_hours)


def needs_attention(
    state: TrainingState, now: datetime, stagnation_hours: int, limit: int
) -> list[AttentionItem]:
    """Active employees without recent in-progress activity, in roster order."""
    flagged = []
    for employee in state.employees:
        if not employee.is_active:
            continue
        records = [r for r in state.employee_progress if r.employee_id == employee.id]
        if _is_stagnating(records, now, stagnation_hours):
            flagged.append(employee)
        if len(flagged) >= limit:
            break

    items = []
    for index, employee in enumerate(flagged):
        if index == 0:
            issue, severity = STAGNATION_ISSUE, AttentionSeverity.URGENT
        elif index == 1:
            issue, severity = PENDING_ISSUE, AttentionSeverity.HIGH
        else:
            issue, severity = PENDING_ISSUE, AttentionSeverity.MEDIUM
        items.append(
            AttentionItem(
                employee_id=employee.id, name=employee.name, issue=issue, severity=severity
            )
        )
    return items


def recent_activity(state: TrainingState, limit: int) -> list[ActivityItem]:
    touched = [r for r in state.employee_progress if r.last_accessed_at is not None]
    touched.sort(key=lambda r: r.last_accessed_at, reverse=True)

    items = []
    for record in touched[:limit]:
        employee = state.find_employee(record.employee_id)
        module = state.find_module(record.module_id)
        items.append(
            ActivityItem(
                progress_id=record.id,
                employee_id=record.employee_id,
                employee_name=employee.name if employee else "Employee",
                action=ACTIVITY_ACTIONS.get(record.status, "viewed"),
                module_id=record.module_id,
                module_title=module.sub_module_title if module else "Module",
                timestamp=record.last_accessed_at,
            )
        )
    return items


def build_dashboard(
    state: TrainingState, now: datetime, settings: Settings
) -> DashboardResponse:
    now = ensure_utc_aware(now)
    return DashboardResponse(
        stats=dashboard_stats(state),
        top_performers=top_performers(state, settings.top_performers_limit),
        quick_stats=quick_stats(state, now),
        needs_attention=needs_attention(
            state, now, settings.stagnation_hours, settings.needs_attention_limit
        ),
        recent_activity=recent_activity(state, settings.recent_activity_limit),
        generated_at=now,
    )


# ==============================================================================
# Reports
# ==============================================================================


def at_risk_count(state: TrainingState, ratio: float) -> int:
    """Employees whose completed share of their records is below ``ratio``."""
    per_employee: dict[str, _Tally] = {}
    for record in state.employee_progress:
        per_employee.setdefault(record.employee_id, _Tally()).add(record)
    return sum(1 for t in per_employee.values() if t.completed / t.total < ratio)


def _department_tallies(
    state: TrainingState,
) -> dict[str, tuple[int, _Tally, dict[str, _Tally]]]:
    # department -> (employee count, records, records per module name)
    departments: dict[str, tuple[int, _Tally, dict[str, _Tally]]] = {}
    department_of: dict[str, str] = {}
    for employee in state.employees:
        if not employee.is_active:
            continue
        key = employee.department_key
        department_of[employee.id] = key
        count, tally, per_module = departments.get(key, (0, _Tally(), {}))
        departments[key] = (count + 1, tally, per_module)

    for record in state.employee_progress:
        key = department_of.get(record.employee_id)
        if key is None:
            continue
        _, tally, per_module = departments[key]
        tally.add(record)
        module = state.find_module(record.module_id)
        if module is not None:
            per_module.setdefault(module.module_name, _Tally()).add(record)
    return departments


def _top_module(per_module: dict[str, _Tally]) -> str:
    top_name, top_rate = "N/A", 0
    for name, tally in per_module.items():
        if tally.completion_rate > top_rate:
            top_name, top_rate = name, tally.completion_rate
    return top_name


def department_summaries(state: TrainingState) -> list[DepartmentSummary]:
    summaries = [
        DepartmentSummary(
            department=department,
            employee_count=count,
            completion_rate=tally.completion_rate,
            avg_score=tally.avg_score,
            top_module=_top_module(per_module),
        )
        for department, (count, tally, per_module) in _department_tallies(state).items()
    ]
    return sorted(summaries, key=lambda d: -d.completion_rate)


def _module_tallies(state: TrainingState) -> list[tuple[TrainingModule, _Tally]]:
    tallies = {module.id: _Tally() for module in state.modules}
    for record in state.employee_progress:
        if record.module_id in tallies:
            tallies[record.module_id].add(record)
    return [(module, tallies[module.id]) for module in state.modules]


def _struggling(tally: _Tally, threshold: int) -> int:
    return sum(1 for score in tally.scores if score < threshold)


def module_summaries(state: TrainingState, threshold: int) -> list[ModuleSummary]:
    summaries = [
        ModuleSummary(
            module_id=module.id,
            module_name=module.module_name,
            sub_module_title=module.sub_module_title,
            assignments=tally.total,
            completion_rate=tally.completion_rate,
            avg_score=tally.avg_score,
            struggling_count=_struggling(tally, threshold),
        )
        for module, tally in _module_tallies(state)
    ]
    return sorted(summaries, key=lambda m: -m.completion_rate)


def skill_gaps(state: TrainingState, threshold: int) -> SkillGaps:
    """Modules and departments scoring below ``threshold``, weakest first."""
    modules = []
    for module, tally in _module_tallies(state):
        struggling = _struggling(tally, threshold)
        below = bool(tally.scores) and tally.avg_score < threshold
        if struggling > 0 or below:
            modules.append(
                ModuleGap(
                    module_id=module.id,
                    module_name=module.module_name,
                    sub_module_title=module.sub_module_title,
                    avg_score=tally.avg_score,
                    struggling_count=struggling,
                )
            )

    departments = [
        DepartmentGap(department=department, avg_score=tally.avg_score, employee_count=count)
        for department, (count, tally, _) in _department_tallies(state).items()
        if tally.scores and tally.avg_score < threshold
    ]

    return SkillGaps(
        modules=sorted(modules, key=lambda m: m.avg_score),
        departments=sorted(departments, key=lambda d: d.avg_score),
    )


def build_report(state: TrainingState, now: datetime, settings: Settings) -> ReportResponse:
    overall = _overall(state.employee_progress)
    threshold = settings.struggling_score_threshold
    return ReportResponse(
        summary=ReportSummary(
            total_employees=sum(1 for e in state.employees if e.is_active),
            completion_rate=overall.completion_rate,
            average_score=overall.avg_score,
            at_risk=at_risk_count(state, settings.at_risk_completion_ratio),
        ),
        departments=department_summaries(state),
        modules=module_summaries(state, threshold),
        skill_gaps=skill_gaps(state, threshold),
        generated_at=ensure_utc_aware(now),
    )


def export_department_csv(departments: list[DepartmentSummary]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for dept in departments:
        writer.writerow(
            [
                dept.department,
                dept.employee_count,
                f"{dept.completion_rate}%",
                f"{dept.avg_score}%",
                dept.top_module,
            ]
        )
    return buffer.getvalue()
