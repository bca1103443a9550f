"""Tests for ModuleService."""

import pytest
from pydantic import ValidationError

from training_admin.config import Settings
from training_admin.store import DataStore
from training_admin.training_modules.models import TrainingModule, normalize_designations
from training_admin.training_modules.schemas import (
    AssessmentInput,
    CreateModuleRequest,
    QuestionSchema,
    UpdateModuleRequest,
)
from training_admin.training_modules.service import (
    ModuleService,
    TrainingModuleNotFoundError,
)


@pytest.fixture
def module_service(store: DataStore, settings: Settings) -> ModuleService:
    return ModuleService(store, settings)


def test_normalize_designations() -> None:
    assert normalize_designations([" Manager ", "", "CXO", "Manager"]) == [
        "Manager",
        "CXO",
    ]
    assert normalize_designations(None) == []


def test_legacy_designation_string() -> None:
    module = TrainingModule.from_dict(
        {"id": "m", "module_name": "A", "sub_module_title": "B", "designation": "CXO"}
    )
    assert module.designations == ["CXO"]


def test_question_answer_must_index_option() -> None:
    with pytest.raises(ValidationError):
        QuestionSchema(question="Pick one", options=["a", "b"], answer=2)


class TestQueries:
    def test_list_in_display_order(self, module_service: ModuleService) -> None:
        modules = module_service.list_modules()
        assert len(modules) == 11
        assert modules[0].id == "module-soft-communications"

    def test_search_matches_category_or_title(self, module_service: ModuleService) -> None:
        by_title = module_service.list_modules(search="phishing")
        assert [m.id for m in by_title] == ["module-cybersecurity-101"]

        by_category = module_service.list_modules(search="ADVANCED NEGOTIATION")
        assert [m.id for m in by_category] == ["module-advanced-negotiation"]

    def test_filter_by_designation(self, module_service: ModuleService) -> None:
        ids = {m.id for m in module_service.list_modules(designation="CXO")}
        assert ids == {"module-leadership-essentials", "module-data-privacy"}

    def test_filter_options(self, module_service: ModuleService) -> None:
        options = module_service.filter_options()
        assert options.module_names[0] == "Soft Communications"
        assert len(options.module_names) == 11
        assert options.designations == sorted(options.designations)
        assert "Senior Executive" in options.designations

    def test_unknown_module(self, module_service: ModuleService) -> None:
        with pytest.raises(TrainingModuleNotFoundError):
            module_service.get_module("missing")


class TestMutations:
    @pytest.mark.asyncio
    async def test_add_prepends_with_default_assessment(
        self, module_service: ModuleService
    ) -> None:
        module = await module_service.add_module(
            CreateModuleRequest(
                module_name=" Compliance ",
                sub_module_title="Anti-Bribery",
                designations=["Manager", "Manager", " "],
                has_test=True,
            )
        )

        assert module_service.list_modules()[0].id == module.id
        assert module.module_name == "Compliance"
        assert module.designations == ["Manager"]

        assessment = module_service.get_assessment(module.id)
        assert assessment.title == "Anti-Bribery - Assessment"
        assert assessment.passing_score == 70
        assert assessment.duration_minutes == 30
        assert assessment.questions == []

    @pytest.mark.asyncio
    async def test_add_without_test(self, module_service: ModuleService) -> None:
        module = await module_service.add_module(
            CreateModuleRequest(module_name="Wellness", sub_module_title="Sleep")
        )
        assert module_service.get_assessment(module.id) is None

    @pytest.mark.asyncio
    async def test_update_keeps_assessment_when_omitted(
        self, module_service: ModuleService
    ) -> None:
        before = module_service.get_assessment("module-soft-communications")
        await module_service.update_module(
            "module-soft-communications", UpdateModuleRequest(sub_module_title="Renamed")
        )
        after = module_service.get_assessment("module-soft-communications")
        assert after is before
        assert module_service.get_module("module-soft-communications").sub_module_title == (
            "Renamed"
        )

    @pytest.mark.asyncio
    async def test_update_replaces_assessment_keeping_id(
        self, module_service: ModuleService
    ) -> None:
        before_id = module_service.get_assessment("module-posh-basics").id
        await module_service.update_module(
            "module-posh-basics",
            UpdateModuleRequest(
                assessment=AssessmentInput(title="New Quiz", passing_score=80)
            ),
        )
        after = module_service.get_assessment("module-posh-basics")
        assert after.id == before_id
        assert after.title == "New Quiz"
        assert after.passing_score == 80

    @pytest.mark.asyncio
    async def test_update_null_assessment_removes_it(
        self, module_service: ModuleService
    ) -> None:
        await module_service.update_module(
            "module-posh-basics", UpdateModuleRequest.model_validate({"assessment": None})
        )
        assert module_service.get_assessment("module-posh-basics") is None

    @pytest.mark.asyncio
    async def test_delete_cascades(self, module_service: ModuleService, store: DataStore) -> None:
        await module_service.delete_module("module-soft-communications")
        state = store.snapshot()

        assert state.find_module("module-soft-communications") is None
        assert state.find_assessment_for("module-soft-communications") is None
        assert not any(
            bm.module_id == "module-soft-communications" for bm in state.batch_modules
        )
        assert not any(
            p.module_id == "module-soft-communications" for p in state.employee_progress
        )
        assert not any(
            a.module_id == "module-soft-communications"
            for a in state.post_session_assignments
        )

    @pytest.mark.asyncio
    async def test_delete_unknown(self, module_service: ModuleService) -> None:
        with pytest.raises(TrainingModuleNotFoundError):
            await module_service.delete_module("missing")
