# tests/conftest.py
import pytest
from unittest.mock import MagicMock
from pathlib import Path

from drivenav.config import Settings, get_settings
from drivenav.memory import InMemoryStorageClient


@pytest.fixture
def mock_settings():
    """
    Provides a mock of the application settings for testing.
    This avoids the need for environment variables during tests.
    """
    settings = MagicMock(spec=Settings)
    settings.STORAGE_PROVIDER = "memory"
    settings.LOG_LEVEL = "INFO"
    settings.GDRIVE_CREDENTIALS_JSON = None
    settings.GDRIVE_TOKEN_JSON = None
    settings.GDRIVE_ROOT_FOLDER_ID = "root"
    settings.GDRIVE_PAGE_SIZE = 100
    settings.HTTP_TIMEOUT_SECONDS = 5.0
    settings.FETCH_RATE_LIMIT_REQUESTS = None
    settings.FETCH_RATE_LIMIT_WAIT_MS = 0
    settings.FETCH_RATE_LIMIT = ()
    settings.BASE_DIR = Path("/tmp")
    settings.LOG_FILE = Path("/tmp/drivenav.log")
    return settings


@pytest.fixture
def mock_storage_client():
    """Fixture for a mock storage client."""
    return MagicMock()


@pytest.fixture
def store():
    """An empty in-memory drive with only the root folder."""
    return InMemoryStorageClient()


@pytest.fixture(autouse=True)
def patch_settings_class(monkeypatch, mock_settings):
    """
    This autouse fixture automatically replaces the `Settings` class constructor.
    Any part of the app code that calls `Settings()` during a test run will
    receive the `mock_settings` instance instead of a real settings object.
    """
    # The cache may hold a real instance created during test collection.
    get_settings.cache_clear()
    monkeypatch.setattr("drivenav.config.Settings", lambda *args, **kwargs: mock_settings)
    yield
    get_settings.cache_clear()
