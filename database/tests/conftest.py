"""
Shared fixtures and test configuration for database tests
"""

from pathlib import Path

import pytest
import pytest_asyncio

from database.initialize_db import DatabaseManager
from database.settings import DatabaseSettings

SETTINGS_ENV_VARS = (
    "SIDANDTOS_DB_PATH",
    "SIDANDTOS_DB_JOURNAL_MODE",
    "SIDANDTOS_DB_FOREIGN_KEYS",
    "SIDANDTOS_DB_CONNECT_RETRIES",
    "SIDANDTOS_DB_RETRY_DELAY_S",
    "SIDANDTOS_LOG_LEVEL",
    "SIDANDTOS_LOG_DIR",
)


class FeedbackRecorder:
    """Collects feedback lines instead of printing them"""

    def __init__(self):
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)

    def contains(self, fragment: str) -> bool:
        return any(fragment in message for message in self.messages)


@pytest.fixture
def temp_db_dir(tmp_path) -> Path:
    """Temporary directory for test databases"""
    return tmp_path


@pytest.fixture
def clean_env(monkeypatch):
    """Remove database settings overrides from the environment"""
    for name in SETTINGS_ENV_VARS:
        # setenv first so teardown also removes values loaded during the test
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def db_settings(temp_db_dir) -> DatabaseSettings:
    """Settings pointing at a not-yet-existing nested database path"""
    return DatabaseSettings(db_path=temp_db_dir / "data" / "sidandtos.db", retry_delay_s=0)


@pytest.fixture
def feedback() -> FeedbackRecorder:
    return FeedbackRecorder()


@pytest.fixture
def error_feedback() -> FeedbackRecorder:
    return FeedbackRecorder()


@pytest_asyncio.fixture
async def db_manager(db_settings, feedback, error_feedback):
    """Manager with an open connection and no schema yet"""
    manager = DatabaseManager(db_settings, feedback, error_feedback)
    await manager.open()
    yield manager
    await manager.close()


@pytest_asyncio.fixture
async def initialized_manager(db_manager):
    """Manager with an open connection and the schema created"""
    await db_manager.init_database()
    return db_manager
