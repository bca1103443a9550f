"""Shared fixtures: isolated apps and stores over temporary directories."""

import os
import tempfile


# Importing the app module configures logging from the environment
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="training-admin-logs-"))

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from training_admin.config import Settings  # noqa: E402
from training_admin.main import create_app  # noqa: E402
from training_admin.store import DataStore, FileStateRepository  # noqa: E402


ADMIN_EMAIL = "admin@company.com"
ADMIN_PASSWORD = "CorrectHorse9"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing state and logs at a temporary directory."""
    return Settings(
        environment="testing",
        storage_backend="file",
        state_dir=str(tmp_path / "state"),
        log_dir=str(tmp_path / "logs"),
        log_level="WARNING",
        log_requests=False,
        seed_demo_data=True,
    )


@pytest.fixture
def client(settings: Settings):
    """Test client with the app's lifespan running."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    """Sign up the admin and return a bearer header."""
    response = client.post(
        "/v1/auth/signup", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def repository(tmp_path) -> FileStateRepository:
    return FileStateRepository(tmp_path / "state")


@pytest_asyncio.fixture
async def store(repository: FileStateRepository) -> DataStore:
    """Data store loaded with the demo data."""
    data_store = DataStore(repository, "training-admin-data")
    await data_store.load(seed=True)
    return data_store
