"""State document storage.

Provides:
- TrainingState: every collection the console manages
- StateRepository backends (file, Cassandra)
- DataStore: the live state with transactional persistence
"""

from training_admin.store.repository import (
    CassandraStateRepository,
    CorruptStateError,
    FileStateRepository,
    StateRepository,
    StateStorageError,
)
from training_admin.store.seed import build_seed_document, build_seed_state
from training_admin.store.service import DataStore
from training_admin.store.state import TrainingState


__all__ = [
    "CassandraStateRepository",
    "CorruptStateError",
    "DataStore",
    "FileStateRepository",
    "StateRepository",
    "StateStorageError",
    "TrainingState",
    "build_seed_document",
    "build_seed_state",
]
