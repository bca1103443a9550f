"""Persistence backends for whole-state documents.

A state document is a JSON object stored under a key. Two backends:
- FileStateRepository: one ``<key>.json`` file per key in a directory
- CassandraStateRepository: one row per key in ``state_documents``
"""

import asyncio
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import orjson
import structlog

from training_admin.utils import utc_now


logger = structlog.get_logger(__name__)


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

STATE_DOCUMENTS_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.state_documents (
    storage_key TEXT PRIMARY KEY,
    payload TEXT,
    updated_at TIMESTAMP
)
"""

STATE_TABLES_CQL = [
    STATE_DOCUMENTS_TABLE_CQL,
]


# ==============================================================================
# Errors
# ==============================================================================


class StateStorageError(Exception):
    """Raised when a state document cannot be read or written."""

    def __init__(self, message: str, key: str | None = None):
        self.message = message
        self.key = key
        super().__init__(message)


class CorruptStateError(StateStorageError):
    """Stored document exists but is not a JSON object."""


def decode_document(raw: str | bytes, key: str) -> dict[str, Any]:
    try:
        payload = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise CorruptStateError(f"Stored document is not valid JSON: {e}", key) from e
    if not isinstance(payload, dict):
        raise CorruptStateError("Stored document is not a JSON object", key)
    return payload


# ==============================================================================
# Repositories
# ==============================================================================


class StateRepository(ABC):
    """Key/document storage for state documents."""

    backend: str = "unknown"

    @abstractmethod
    async def load(self, key: str) -> dict[str, Any] | None:
        """Return the stored document, or None if there is none.

        Raises:
            CorruptStateError: If the stored document cannot be decoded
            StateStorageError: If the backend fails
        """

    @abstractmethod
    async def save(self, key: str, payload: dict[str, Any]) -> None:
        """Replace the stored document."""


class FileStateRepository(StateRepository):
    """Stores each document as ``<state_dir>/<key>.json``.

    Writes go to a temporary file in the same directory that is then
    moved into place.
    """

    backend = "file"

    def __init__(self, state_dir: str | Path):
        self.state_dir = Path(state_dir)

    def path_for(self, key: str) -> Path:
        return self.state_dir / f"{key}.json"

    async def load(self, key: str) -> dict[str, Any] | None:
        return await asyncio.to_thread(self._read, key)

    async def save(self, key: str, payload: dict[str, Any]) -> None:
        await asyncio.to_thread(self._write, key, payload)

    def _read(self, key: str) -> dict[str, Any] | None:
        path = self.path_for(key)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StateStorageError(f"Failed to read {path}: {e}", key) from e
        return decode_document(raw, key)

    def _write(self, key: str, payload: dict[str, Any]) -> None:
        path = self.path_for(key)
        try:
            self.state_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.state_dir, prefix=f".{key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StateStorageError(f"Failed to write {path}: {e}", key) from e


class CassandraStateRepository(StateRepository):
    """Stores documents in the ``state_documents`` table.

    Uses prepared statements and ``session.aexecute()`` from
    cassandra-asyncio-driver.
    """

    backend = "cassandra"

    def __init__(self, session, keyspace: str):
        self.session = session
        self.keyspace = keyspace
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        self._get_document = self.session.prepare(f"""
            SELECT payload FROM {self.keyspace}.state_documents
            WHERE storage_key = ?
        """)
        self._put_document = self.session.prepare(f"""
            INSERT INTO {self.keyspace}.state_documents
            (storage_key, payload, updated_at)
            VALUES (?, ?, ?)
        """)

    async def load(self, key: str) -> dict[str, Any] | None:
        try:
            result = await self.session.aexecute(self._get_document, [key])
        except Exception as e:
            logger.error("state_document_read_failed", storage_key=key, error=str(e))
            raise StateStorageError(f"Failed to read document {key}: {e}", key) from e

        row = result.one()
        if row is None or row.payload is None:
            return None
        return decode_document(row.payload, key)

    async def save(self, key: str, payload: dict[str, Any]) -> None:
        document = orjson.dumps(payload).decode()
        try:
            await self.session.aexecute(
                self._put_document, [key, document, utc_now()]
            )
        except Exception as e:
            logger.error("state_document_write_failed", storage_key=key, error=str(e))
            raise StateStorageError(f"Failed to write document {key}: {e}", key) from e
