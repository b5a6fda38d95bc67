"""Pytest configuration and shared fixtures."""
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from chat_room_api.app.core.config import Settings
from chat_room_api.app.core.db import Store
from chat_room_api.app.main import create_app
from chat_room_api.app.services.message_service import MessageBoard
from chat_room_api.app.services.participant_service import ParticipantRegistry


class FakeClock:
    """Controllable replacement for ``time.time``."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest_asyncio.fixture
async def store(tmp_path):
    """Return an opened store backed by a temporary database."""
    store = Store(str(tmp_path / "chat.db"))
    await store.open()
    yield store
    await store.close()


@pytest.fixture
def board(store, clock):
    return MessageBoard(store, clock=clock)


@pytest.fixture
def registry(store, board, clock):
    return ParticipantRegistry(store, board, clock=clock)


@pytest.fixture
def test_settings():
    return Settings(sweeper_enabled=False, log_level="WARNING")


@pytest.fixture
def client(tmp_path, test_settings):
    """Return a test client for an app using a temporary database."""
    app = create_app(config=test_settings, store=Store(str(tmp_path / "api.db")))
    with TestClient(app) as test_client:
        yield test_client


async def count_rows(store: Store, table: str) -> int:
    row = await store.fetchone(f"SELECT COUNT(*) AS count FROM {table}")
    return row["count"]
