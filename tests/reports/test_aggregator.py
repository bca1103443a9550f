"""Tests for dashboard and report aggregation."""

from datetime import UTC, datetime, timedelta

import pytest

from training_admin.config import Settings
from training_admin.employees.models import Employee
from training_admin.progress.models import EmployeeProgress, TestStatus, TrainingStatus
from training_admin.reports import build_dashboard, build_report, export_department_csv
from training_admin.reports.aggregator import (
    CSV_HEADER,
    needs_attention,
    quick_stats,
    skill_gaps,
    top_performers,
)
from training_admin.reports.schemas import AttentionSeverity, DepartmentSummary
from training_admin.store import TrainingState
from training_admin.store.seed import build_seed_state
from training_admin.training_modules.models import TrainingModule


NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)


@pytest.fixture
def seed_state() -> TrainingState:
    return build_seed_state(now=NOW)


@pytest.fixture
def report_settings() -> Settings:
    return Settings(environment="testing")


def _record(employee_id: str, module_id: str = "m1", **kwargs) -> EmployeeProgress:
    return EmployeeProgress(
        employee_id=employee_id, batch_id="b1", module_id=module_id, **kwargs
    )


def _scored(employee_id: str, module_id: str, score: int) -> EmployeeProgress:
    return _record(
        employee_id,
        module_id,
        status=TrainingStatus.COMPLETED,
        progress_percentage=100,
        test_status=TestStatus.COMPLETED,
        test_score=score,
    )


class TestDashboard:
    def test_stats(self, seed_state: TrainingState, report_settings: Settings) -> None:
        stats = build_dashboard(seed_state, NOW, report_settings).stats

        assert stats.total_employees == 12
        assert stats.active_sessions == 5
        assert stats.completion_rate == 31
        assert stats.average_score == 88

    def test_top_performers(self, seed_state: TrainingState) -> None:
        performers = top_performers(seed_state, limit=5)
        assert [(p.name, p.score) for p in performers] == [
            ("Emily Rogers", 92),
            ("Victor Huang", 88),
            ("Marcus Lee", 85),
        ]

    def test_zero_score_ranks(self) -> None:
        state = TrainingState(
            employees=[Employee(employee_id="E1", name="Zero", id="e1")],
            employee_progress=[_scored("e1", "m1", 0), _scored("ghost", "m1", 90)],
        )
        performers = top_performers(state, limit=5)
        assert [(p.employee_id, p.score) for p in performers] == [("e1", 0)]

    def test_quick_stats(self, seed_state: TrainingState) -> None:
        stats = quick_stats(seed_state, NOW)

        assert stats.completed_today == 0
        assert stats.scheduled_this_week == 4
        assert stats.overdue == 9

    def test_completed_today_uses_utc_date(self) -> None:
        state = TrainingState(
            employee_progress=[
                _record("e1", status=TrainingStatus.COMPLETED,
                        completed_at=NOW.replace(hour=0, minute=5)),
                _record("e2", status=TrainingStatus.COMPLETED,
                        completed_at=NOW - timedelta(hours=13)),
            ]
        )
        assert quick_stats(state, NOW).completed_today == 1

    def test_needs_attention(self, seed_state: TrainingState) -> None:
        items = needs_attention(seed_state, NOW, stagnation_hours=72, limit=3)

        assert [(i.name, i.severity) for i in items] == [
            ("Jordan Blake", AttentionSeverity.URGENT),
            ("Priya Mehta", AttentionSeverity.HIGH),
            ("Devon Carter", AttentionSeverity.MEDIUM),
        ]
        assert items[0].issue == "No recent activity in assigned modules"
        assert items[1].issue == "Pending assessments due soon"

    def test_stale_in_progress_flagged(self) -> None:
        state = TrainingState(
            employees=[
                Employee(employee_id="E1", name="Stale", id="e1"),
                Employee(employee_id="E2", name="Fresh", id="e2"),
                Employee(employee_id="E3", name="Gone", id="e3", is_active=False),
            ],
            employee_progress=[
                _record("e1", status=TrainingStatus.IN_PROGRESS,
                        last_accessed_at=NOW - timedelta(hours=80)),
                _record("e2", status=TrainingStatus.IN_PROGRESS,
                        last_accessed_at=NOW - timedelta(hours=10)),
            ],
        )
        items = needs_attention(state, NOW, stagnation_hours=72, limit=3)
        assert [i.employee_id for i in items] == ["e1"]

    def test_completed_only_counts_as_stagnating(self) -> None:
        state = TrainingState(
            employees=[Employee(employee_id="E1", name="Done", id="e1")],
            employee_progress=[
                _record("e1", status=TrainingStatus.COMPLETED,
                        last_accessed_at=NOW - timedelta(hours=1)),
            ],
        )
        assert len(needs_attention(state, NOW, stagnation_hours=72, limit=3)) == 1

    def test_recent_activity(
        self, seed_state: TrainingState, report_settings: Settings
    ) -> None:
        activity = build_dashboard(seed_state, NOW, report_settings).recent_activity

        assert [a.progress_id for a in activity] == [
            "progress-2",
            "progress-7",
            "progress-3",
            "progress-11",
            "progress-9",
            "progress-12",
        ]
        first = activity[0]
        assert first.action == "continued"
        assert first.employee_name == "Marcus Lee"
        assert first.module_title == "Growth Reporting Playbook"
        assert activity[-1].action == "completed"


class TestReport:
    def test_summary(self, seed_state: TrainingState, report_settings: Settings) -> None:
        summary = build_report(seed_state, NOW, report_settings).summary

        assert summary.total_employees == 12
        assert summary.completion_rate == 31
        assert summary.average_score == 88
        assert summary.at_risk == 6

    def test_departments(
        self, seed_state: TrainingState, report_settings: Settings
    ) -> None:
        departments = build_report(seed_state, NOW, report_settings).departments

        assert [d.department for d in departments] == [
            "IT",
            "Legal",
            "Sales",
            "Executive",
            "Operations",
            "Marketing",
            "Customer Success",
            "Finance",
            "Product",
            "Engineering",
        ]
        sales = departments[2]
        assert sales.employee_count == 2
        assert sales.completion_rate == 40
        # (85 + 92) / 2 = 88.5
        assert sales.avg_score == 89
        assert sales.top_module == "Soft Communications"
        assert departments[3].top_module == "N/A"

    def test_modules(self, seed_state: TrainingState, report_settings: Settings) -> None:
        modules = build_report(seed_state, NOW, report_settings).modules

        assert [(m.module_name, m.completion_rate) for m in modules[:4]] == [
            ("DEI Foundations", 100),
            ("Soft Communications", 50),
            ("Advanced Negotiation", 50),
            ("Data Privacy", 50),
        ]
        negotiation = modules[2]
        assert negotiation.assignments == 2
        assert negotiation.avg_score == 92
        assert negotiation.struggling_count == 0

    def test_seed_has_no_skill_gaps(
        self, seed_state: TrainingState, report_settings: Settings
    ) -> None:
        gaps = build_report(seed_state, NOW, report_settings).skill_gaps
        assert gaps.modules == []
        assert gaps.departments == []

    def test_skill_gaps(self) -> None:
        state = TrainingState(
            modules=[
                TrainingModule("Strong", "Strong Basics", id="m1"),
                TrainingModule("Mixed", "Mixed Basics", id="m2"),
                TrainingModule("Weak", "Weak Basics", id="m3"),
            ],
            employees=[
                Employee(employee_id="E1", name="A", department="Ops", id="e1"),
                Employee(employee_id="E2", name="B", department="Ops", id="e2"),
                Employee(employee_id="E3", name="C", id="e3"),
            ],
            employee_progress=[
                _scored("e1", "m1", 95),
                _scored("e1", "m2", 60),
                _scored("e2", "m2", 90),
                _scored("e3", "m3", 50),
            ],
        )

        gaps = skill_gaps(state, threshold=70)

        assert [(g.module_id, g.avg_score, g.struggling_count) for g in gaps.modules] == [
            ("m3", 50, 1),
            ("m2", 75, 1),
        ]
        assert [(g.department, g.avg_score) for g in gaps.departments] == [
            ("Unassigned", 50)
        ]

    def test_empty_state(self, report_settings: Settings) -> None:
        report = build_report(TrainingState(), NOW, report_settings)

        assert report.summary.completion_rate == 0
        assert report.summary.average_score == 0
        assert report.summary.at_risk == 0
        assert report.departments == []


class TestCsvExport:
    def test_rows(self, seed_state: TrainingState, report_settings: Settings) -> None:
        departments = build_report(seed_state, NOW, report_settings).departments

        lines = export_department_csv(departments).splitlines()

        assert lines[0] == ",".join(CSV_HEADER)
        assert lines[1] == "IT,1,100%,0%,DEI Foundations"
        assert len(lines) == 11

    def test_quotes_commas(self) -> None:
        csv_text = export_department_csv(
            [
                DepartmentSummary(
                    department="Research, Labs",
                    employee_count=3,
                    completion_rate=67,
                    avg_score=71,
                    top_module="N/A",
                )
            ]
        )
        assert csv_text.splitlines()[1] == '"Research, Labs",3,67%,71%,N/A'
