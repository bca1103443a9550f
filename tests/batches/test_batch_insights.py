"""Tests for the batch leaderboard."""

from datetime import timedelta

from training_admin.batches.insights import build_batch_insights
from training_admin.batches.models import Batch, BatchEmployee, BatchModule
from training_admin.employees.models import Employee
from training_admin.progress.models import EmployeeProgress, TestStatus, TrainingStatus
from training_admin.store import TrainingState
from training_admin.store.seed import build_seed_state
from training_admin.utils import utc_now


class TestSeedLeaderboard:
    def test_leadership_batch(self) -> None:
        state = build_seed_state()
        batch = state.find_batch("batch-leadership-2024")

        insights = build_batch_insights(state, batch, minutes_per_completed_module=45)
        marcus, elena = insights.leaderboard

        assert (marcus.rank, marcus.employee_name) == (1, "Marcus Lee")
        assert marcus.completed_count == 1
        assert marcus.total_count == 2
        assert marcus.avg_score == 85
        assert marcus.progress_percentage == 80
        assert marcus.total_time == 45
        assert marcus.latest_session.module_id == "module-soft-communications"

        assert (elena.rank, elena.avg_score, elena.progress_percentage) == (2, 0, 40)
        assert elena.latest_session is None

        assert insights.stats.total_employees == 2
        assert insights.stats.average_completion == 60
        assert insights.stats.average_score == 43
        assert insights.stats.total_modules == 2


def _state_with(records: list[EmployeeProgress], employee_ids: list[str]) -> TrainingState:
    batch = Batch(title="Cohort", id="batch-x")
    return TrainingState(
        batches=[batch],
        employees=[
            Employee(employee_id=f"E{i}", name=f"Person {i}", id=employee_id)
            for i, employee_id in enumerate(employee_ids)
            if employee_id != "ghost"
        ],
        batch_employees=[
            BatchEmployee(batch_id="batch-x", employee_id=e) for e in employee_ids
        ],
        batch_modules=[
            BatchModule(batch_id="batch-x", module_id="m1", order_index=0),
            BatchModule(batch_id="batch-x", module_id="m2", order_index=1),
        ],
        employee_progress=records,
    )


def _record(employee_id: str, module_id: str, **kwargs) -> EmployeeProgress:
    return EmployeeProgress(
        employee_id=employee_id, batch_id="batch-x", module_id=module_id, **kwargs
    )


class TestOrdering:
    def test_score_breaks_completion_tie(self) -> None:
        state = _state_with(
            [
                _record("a", "m1", status=TrainingStatus.COMPLETED, progress_percentage=100,
                        test_status=TestStatus.COMPLETED, test_score=70),
                _record("b", "m1", status=TrainingStatus.COMPLETED, progress_percentage=100,
                        test_status=TestStatus.COMPLETED, test_score=90),
            ],
            ["a", "b"],
        )
        insights = build_batch_insights(state, state.batches[0])
        assert [e.employee_id for e in insights.leaderboard] == ["b", "a"]

    def test_progress_breaks_score_tie(self) -> None:
        state = _state_with(
            [
                _record("a", "m1", status=TrainingStatus.IN_PROGRESS, progress_percentage=10),
                _record("b", "m1", status=TrainingStatus.IN_PROGRESS, progress_percentage=50),
            ],
            ["a", "b"],
        )
        insights = build_batch_insights(state, state.batches[0])
        assert [e.rank for e in insights.leaderboard] == [1, 2]
        assert insights.leaderboard[0].employee_id == "b"

    def test_completed_test_without_score_counts_zero(self) -> None:
        state = _state_with(
            [
                _record("a", "m1", test_status=TestStatus.COMPLETED, test_score=80),
                _record("a", "m2", test_status=TestStatus.COMPLETED),
            ],
            ["a"],
        )
        entry = build_batch_insights(state, state.batches[0]).leaderboard[0]
        assert entry.avg_score == 40

    def test_latest_session_is_newest_completion(self) -> None:
        now = utc_now()
        state = _state_with(
            [
                _record("a", "m1", status=TrainingStatus.COMPLETED,
                        completed_at=now - timedelta(hours=5)),
                _record("a", "m2", status=TrainingStatus.COMPLETED,
                        completed_at=now - timedelta(hours=1)),
            ],
            ["a"],
        )
        entry = build_batch_insights(state, state.batches[0]).leaderboard[0]
        assert entry.latest_session.module_id == "m2"
        # Neither module is in the catalog
        assert entry.latest_session.module_title == "Completed Module"

    def test_unknown_employee_fallbacks(self) -> None:
        state = _state_with([], ["ghost"])
        entry = build_batch_insights(state, state.batches[0]).leaderboard[0]

        assert entry.employee_name == "Employee"
        assert entry.designation == "Team Member"
        assert entry.employee_code == "ghost"
        assert entry.total_count == 0
        assert entry.progress_percentage == 0

    def test_empty_batch(self) -> None:
        state = _state_with([], [])
        insights = build_batch_insights(state, state.batches[0])
        assert insights.leaderboard == []
        assert insights.stats.average_score == 0
