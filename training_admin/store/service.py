"""Live training state and its persistence.

DataStore owns the single in-memory TrainingState. Mutations run inside
``transaction()``, which serializes writers and persists the document
when the block exits cleanly.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog

from training_admin.store.repository import (
    CorruptStateError,
    StateRepository,
)
from training_admin.store.seed import build_seed_state
from training_admin.store.state import TrainingState


logger = structlog.get_logger(__name__)


class DataStore:
    """In-memory state document backed by a StateRepository."""

    def __init__(self, repository: StateRepository, storage_key: str):
        self.repository = repository
        self.storage_key = storage_key
        self._state: TrainingState | None = None
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._state is not None

    async def load(self, seed: bool = True) -> TrainingState:
        """Load the stored document, seeding it when absent.

        A stored document is merged over the defaults. An unreadable document
        is left untouched and the defaults are used for this process.
        """
        defaults = build_seed_state() if seed else TrainingState()

        try:
            document = await self.repository.load(self.storage_key)
        except CorruptStateError as e:
            logger.error(
                "state_document_unreadable",
                storage_key=self.storage_key,
                error=e.message,
            )
            self._state = defaults
            return self._state

        if document is None:
            self._state = defaults
            await self._persist()
            logger.info(
                "state_document_initialized",
                storage_key=self.storage_key,
                seeded=seed,
            )
            return self._state

        self._state = TrainingState.from_dict(document, defaults=defaults)
        logger.info("state_document_loaded", storage_key=self.storage_key)
        return self._state

    def snapshot(self) -> TrainingState:
        """Current state for read-only use."""
        if self._state is None:
            raise RuntimeError("DataStore.load() has not been called")
        return self._state

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[TrainingState]:
        """Serialize a mutation and persist it on success.

        If the block or the save raises, the live state is restored to what
        it was on entry and the error propagates.
        """
        async with self._lock:
            state = self.snapshot()
            before = state.to_dict()
            try:
                yield state
                await self._persist()
            except BaseException:
                self._state = TrainingState.from_dict(before)
                logger.warning(
                    "state_transaction_rolled_back", storage_key=self.storage_key
                )
                raise

    async def _persist(self) -> None:
        await self.repository.save(self.storage_key, self.snapshot().to_dict())
        logger.debug("state_persisted", storage_key=self.storage_key)
