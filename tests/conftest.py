from datetime import datetime, timezone

import pytest

from recall.infrastructure.stores.memory import InMemoryCardStore
from recall.infrastructure.stores.sqlite import SqliteCardStore

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """A fixed review time so schedules are deterministic."""
    return T0


@pytest.fixture
def memory_store():
    return InMemoryCardStore()


@pytest.fixture(params=["memory", "sqlite"])
def store(request):
    """Runs a test once against every CardStore implementation."""
    if request.param == "memory":
        yield InMemoryCardStore()
    else:
        s = SqliteCardStore(":memory:")
        yield s
        s.close()


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config/db files
    monkeypatch.setenv("HOME", str(home))
    for var in ("RECALL_BACKEND", "RECALL_DB_PATH", "RECALL_PORT", "RECALL_HOST", "RECALL_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    return home
