"""Tests for state document repositories."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from training_admin.store import (
    CassandraStateRepository,
    CorruptStateError,
    FileStateRepository,
    StateStorageError,
)


class TestFileStateRepository:
    @pytest.mark.asyncio
    async def test_missing_document(self, repository: FileStateRepository) -> None:
        assert await repository.load("nothing-here") is None

    @pytest.mark.asyncio
    async def test_save_and_load(self, repository: FileStateRepository) -> None:
        await repository.save("doc", {"employees": [{"id": "e1"}]})
        assert await repository.load("doc") == {"employees": [{"id": "e1"}]}
        assert repository.path_for("doc").name == "doc.json"

    @pytest.mark.asyncio
    async def test_save_replaces_without_leftovers(
        self, repository: FileStateRepository
    ) -> None:
        await repository.save("doc", {"version": 1})
        await repository.save("doc", {"version": 2})
        assert await repository.load("doc") == {"version": 2}
        assert [p.name for p in repository.state_dir.iterdir()] == ["doc.json"]

    @pytest.mark.asyncio
    async def test_corrupt_json(self, repository: FileStateRepository) -> None:
        repository.state_dir.mkdir(parents=True)
        repository.path_for("doc").write_text("{not json", encoding="utf-8")
        with pytest.raises(CorruptStateError):
            await repository.load("doc")

    @pytest.mark.asyncio
    async def test_non_object_document(self, repository: FileStateRepository) -> None:
        repository.state_dir.mkdir(parents=True)
        repository.path_for("doc").write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(CorruptStateError):
            await repository.load("doc")


class TestCassandraStateRepository:
    @pytest.fixture
    def session(self) -> MagicMock:
        session = MagicMock()
        session.prepare.side_effect = lambda cql: cql
        session.aexecute = AsyncMock()
        return session

    def test_prepares_statements(self, session: MagicMock) -> None:
        CassandraStateRepository(session, "training_admin")
        assert session.prepare.call_count == 2
        statements = [c.args[0] for c in session.prepare.call_args_list]
        assert all("training_admin.state_documents" in s for s in statements)

    @pytest.mark.asyncio
    async def test_load_row(self, session: MagicMock) -> None:
        result = MagicMock()
        result.one.return_value = MagicMock(payload='{"batches": []}')
        session.aexecute.return_value = result

        repo = CassandraStateRepository(session, "training_admin")
        assert await repo.load("training-admin-data") == {"batches": []}
        assert session.aexecute.await_args.args[1] == ["training-admin-data"]

    @pytest.mark.asyncio
    async def test_load_missing_row(self, session: MagicMock) -> None:
        result = MagicMock()
        result.one.return_value = None
        session.aexecute.return_value = result

        repo = CassandraStateRepository(session, "training_admin")
        assert await repo.load("training-admin-data") is None

    @pytest.mark.asyncio
    async def test_save_serializes_payload(self, session: MagicMock) -> None:
        repo = CassandraStateRepository(session, "training_admin")
        await repo.save("key", {"modules": []})

        key, payload, updated_at = session.aexecute.await_args.args[1]
        assert key == "key"
        assert payload == '{"modules":[]}'
        assert updated_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_driver_failure_wrapped(self, session: MagicMock) -> None:
        session.aexecute.side_effect = RuntimeError("no hosts available")
        repo = CassandraStateRepository(session, "training_admin")

        with pytest.raises(StateStorageError) as exc_info:
            await repo.save("key", {})
        assert exc_info.value.key == "key"
