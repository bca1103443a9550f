"""Batch leaderboard.

Ranks enrolled employees by completed modules, then average assessment
score, then average progress.
"""

from training_admin.progress.models import EmployeeProgress
from training_admin.store import TrainingState
from training_admin.utils import rounded_mean

from .models import Batch
from .schemas import (
    BatchInsightStats,
    BatchInsightsResponse,
    LatestSession,
    LeaderboardEntry,
)


FALLBACK_EMPLOYEE_NAME = "Employee"
FALLBACK_DESIGNATION = "Team Member"
FALLBACK_MODULE_TITLE = "Completed Module"


def _completion_sort_key(record: EmployeeProgress) -> tuple[bool, float]:
    # Newest first; records without completed_at go last
    if record.completed_at is None:
        return (True, 0.0)
    return (False, -record.completed_at.timestamp())


def latest_session(
    state: TrainingState, records: list[EmployeeProgress]
) -> LatestSession | None:
    completed = sorted((r for r in records if r.is_completed), key=_completion_sort_key)
    if not completed:
        return None

    record = completed[0]
    module = state.find_module(record.module_id)
    return LatestSession(
        module_id=record.module_id,
        module_title=module.sub_module_title if module else FALLBACK_MODULE_TITLE,
        module_name=module.module_name if module else None,
        completed_at=record.completed_at,
        test_score=record.test_score,
        progress_percentage=record.progress_percentage,
    )


def leaderboard_entry(
    state: TrainingState,
    batch_id: str,
    employee_id: str,
    minutes_per_completed_module: int,
) -> LeaderboardEntry:
    """Standing of one enrolled employee (rank assigned by the caller)."""
    employee = state.find_employee(employee_id)
    records = [
        p
        for p in state.employee_progress
        if p.batch_id == batch_id and p.employee_id == employee_id
    ]
    completed_count = sum(1 for r in records if r.is_completed)

    return LeaderboardEntry(
        rank=0,
        employee_id=employee_id,
        employee_code=employee.employee_id if employee else employee_id,
        employee_name=employee.name if employee else FALLBACK_EMPLOYEE_NAME,
        designation=employee.designation if employee else FALLBACK_DESIGNATION,
        completed_count=completed_count,
        total_count=len(records),
        # A completed assessment without a score counts as 0
        avg_score=rounded_mean(r.test_score or 0 for r in records if r.has_completed_test),
        progress_percentage=rounded_mean(r.progress_percentage for r in records),
        total_time=completed_count * minutes_per_completed_module,
        latest_session=latest_session(state, records),
    )


def build_batch_insights(
    state: TrainingState,
    batch: Batch,
    minutes_per_completed_module: int = 45,
) -> BatchInsightsResponse:
    """Leaderboard and summary stats for a batch."""
    entries = [
        leaderboard_entry(state, batch.id, employee_id, minutes_per_completed_module)
        for employee_id in state.batch_employee_ids(batch.id)
    ]
    entries.sort(
        key=lambda e: (-e.completed_count, -e.avg_score, -e.progress_percentage)
    )
    for rank, entry in enumerate(entries, start=1):
        entry.rank = rank

    return BatchInsightsResponse(
        batch_id=batch.id,
        title=batch.title,
        leaderboard=entries,
        stats=BatchInsightStats(
            total_employees=len(entries),
            average_completion=rounded_mean(e.progress_percentage for e in entries),
            average_score=rounded_mean(e.avg_score for e in entries),
            total_modules=len(state.batch_module_links(batch.id)),
        ),
    )
