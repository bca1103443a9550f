"""Tests for BatchService."""

import pytest

from training_admin.batches.schemas import CreateBatchRequest, UpdateBatchRequest
from training_admin.batches.service import (
    BatchNotFoundError,
    BatchService,
    UnknownReferenceError,
)
from training_admin.config import Settings
from training_admin.progress.models import TrainingStatus
from training_admin.store import DataStore


LEADERSHIP = "batch-leadership-2024"
SALES = "batch-sales-2024"
MANAGER = "employee-manager-01"
SR_EXEC = "employee-sr-exec-01"


@pytest.fixture
def batch_service(store: DataStore, settings: Settings) -> BatchService:
    return BatchService(store, settings)


def _records(store: DataStore, batch_id: str) -> list:
    return [p for p in store.snapshot().employee_progress if p.batch_id == batch_id]


class TestQueries:
    def test_list_counts(self, batch_service: BatchService) -> None:
        batches = batch_service.list_batches()
        assert len(batches) == 5

        leadership = next(b for b in batches if b.id == LEADERSHIP)
        assert leadership.employee_count == 2
        assert leadership.module_count == 2

    def test_detail(self, batch_service: BatchService) -> None:
        detail = batch_service.batch_detail(LEADERSHIP)

        assert [e.name for e in detail.employees] == ["Marcus Lee", "Elena Rodriguez"]
        assert [m.sub_module_title for m in detail.modules] == [
            "Executive Presence and Leadership Communication",
            "Growth Reporting Playbook",
        ]
        assert detail.employees[0].employee_code == "EMP003"

    def test_unknown_batch(self, batch_service: BatchService) -> None:
        with pytest.raises(BatchNotFoundError):
            batch_service.batch_detail("missing")


class TestBatchMutations:
    @pytest.mark.asyncio
    async def test_add_published_stamps_published_at(
        self, batch_service: BatchService
    ) -> None:
        batch = await batch_service.add_batch(
            CreateBatchRequest(title="  Autumn Cohort  ", is_published=True)
        )

        assert batch.title == "Autumn Cohort"
        assert batch.published_at == batch.created_at
        assert batch_service.list_batches()[0].id == batch.id

    @pytest.mark.asyncio
    async def test_add_draft(self, batch_service: BatchService) -> None:
        batch = await batch_service.add_batch(CreateBatchRequest(title="Draft"))
        assert batch.published_at is None

    @pytest.mark.asyncio
    async def test_publish_stamps_once(self, batch_service: BatchService) -> None:
        published = await batch_service.update_batch(
            SALES, UpdateBatchRequest(is_published=True)
        )
        first_stamp = published.published_at
        assert first_stamp is not None

        await batch_service.update_batch(SALES, UpdateBatchRequest(title="Renamed"))
        assert batch_service.get_batch(SALES).published_at == first_stamp

    @pytest.mark.asyncio
    async def test_unpublish_keeps_timestamp(self, batch_service: BatchService) -> None:
        before = batch_service.get_batch(LEADERSHIP).published_at
        batch = await batch_service.update_batch(
            LEADERSHIP, UpdateBatchRequest(is_published=False)
        )
        assert batch.is_published is False
        assert batch.published_at == before

    @pytest.mark.asyncio
    async def test_delete_cascades(
        self, batch_service: BatchService, store: DataStore
    ) -> None:
        await batch_service.delete_batch(LEADERSHIP)
        state = store.snapshot()

        assert state.find_batch(LEADERSHIP) is None
        assert state.batch_employee_ids(LEADERSHIP) == []
        assert state.batch_module_links(LEADERSHIP) == []
        assert _records(store, LEADERSHIP) == []
        assert not any(
            a.batch_id == LEADERSHIP for a in state.post_session_assignments
        )

    @pytest.mark.asyncio
    async def test_delete_unknown(self, batch_service: BatchService) -> None:
        with pytest.raises(BatchNotFoundError):
            await batch_service.delete_batch("missing")


class TestMembership:
    @pytest.mark.asyncio
    async def test_resave_keeps_progress(
        self, batch_service: BatchService, store: DataStore
    ) -> None:
        before = {p.id: p.status for p in _records(store, LEADERSHIP)}

        await batch_service.set_batch_employees(LEADERSHIP, [MANAGER, SR_EXEC])

        after = {p.id: p.status for p in _records(store, LEADERSHIP)}
        assert after == before

    @pytest.mark.asyncio
    async def test_new_employee_gets_records_for_every_module(
        self, batch_service: BatchService, store: DataStore
    ) -> None:
        detail = await batch_service.set_batch_employees(
            LEADERSHIP, [MANAGER, SR_EXEC, "employee-it-01"]
        )

        assert len(detail.employees) == 3
        new_records = [
            p for p in _records(store, LEADERSHIP) if p.employee_id == "employee-it-01"
        ]
        assert {p.module_id for p in new_records} == {
            "module-soft-communications",
            "module-digital-marketing",
        }
        assert all(p.status == TrainingStatus.NOT_STARTED for p in new_records)

    @pytest.mark.asyncio
    async def test_existing_partial_record_kept_on_fill(
        self, batch_service: BatchService, store: DataStore
    ) -> None:
        # Elena has a record only for the first module
        await batch_service.set_batch_employees(LEADERSHIP, [MANAGER, SR_EXEC])
        elena = [p for p in _records(store, LEADERSHIP) if p.employee_id == SR_EXEC]
        assert len(elena) == 1

        await batch_service.set_batch_modules(
            LEADERSHIP,
            ["module-soft-communications", "module-digital-marketing"],
        )
        elena = [p for p in _records(store, LEADERSHIP) if p.employee_id == SR_EXEC]
        assert len(elena) == 1

    @pytest.mark.asyncio
    async def test_removed_employee_loses_records_and_assignments(
        self, batch_service: BatchService, store: DataStore
    ) -> None:
        await batch_service.set_batch_employees(LEADERSHIP, [MANAGER])
        state = store.snapshot()

        assert state.batch_employee_ids(LEADERSHIP) == [MANAGER]
        assert not any(p.employee_id == SR_EXEC for p in _records(store, LEADERSHIP))
        assert not any(
            a.employee_id == SR_EXEC and a.batch_id == LEADERSHIP
            for a in state.post_session_assignments
        )

    @pytest.mark.asyncio
    async def test_unknown_employee_rejected(
        self, batch_service: BatchService, store: DataStore
    ) -> None:
        with pytest.raises(UnknownReferenceError) as exc_info:
            await batch_service.set_batch_employees(LEADERSHIP, [MANAGER, "ghost"])

        assert exc_info.value.ids == ["ghost"]
        assert store.snapshot().batch_employee_ids(LEADERSHIP) == [MANAGER, SR_EXEC]

    @pytest.mark.asyncio
    async def test_modules_reordered_and_filled(
        self, batch_service: BatchService, store: DataStore
    ) -> None:
        detail = await batch_service.set_batch_modules(
            LEADERSHIP, ["module-data-privacy", "module-soft-communications"]
        )

        assert [(m.module_id, m.order_index) for m in detail.modules] == [
            ("module-data-privacy", 0),
            ("module-soft-communications", 1),
        ]
        records = _records(store, LEADERSHIP)
        assert not any(p.module_id == "module-digital-marketing" for p in records)
        privacy = [p for p in records if p.module_id == "module-data-privacy"]
        assert {p.employee_id for p in privacy} == {MANAGER, SR_EXEC}

    @pytest.mark.asyncio
    async def test_duplicate_ids_collapse(self, batch_service: BatchService) -> None:
        detail = await batch_service.set_batch_modules(
            SALES, ["module-crm-mastery", "module-crm-mastery"]
        )
        assert len(detail.modules) == 1

    @pytest.mark.asyncio
    async def test_unknown_module_rejected(self, batch_service: BatchService) -> None:
        with pytest.raises(UnknownReferenceError):
            await batch_service.set_batch_modules(LEADERSHIP, ["module-nope"])
