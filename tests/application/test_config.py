from pathlib import Path

from recall.application.config import AppConfig, resolve_config
from recall.application.factory import get_card_store
from recall.infrastructure.stores.memory import InMemoryCardStore
from recall.infrastructure.stores.sqlite import SqliteCardStore


def test_defaults(mock_home):
    config = resolve_config()

    assert config.backend == "sqlite"
    assert config.db_path == mock_home / ".local/share/recall/recall.db"
    assert config.host == "127.0.0.1"
    assert config.port == 8777


def test_toml_file_is_read(mock_home):
    cfg = mock_home / ".config/recall/config.toml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text('backend = "memory"\nport = 9001\n')

    config = resolve_config()

    assert config.backend == "memory"
    assert config.port == 9001


def test_dotfile_fallback(mock_home):
    (mock_home / ".recall.toml").write_text("port = 9002\n")

    assert resolve_config().port == 9002


def test_env_overrides_toml(mock_home, monkeypatch):
    cfg = mock_home / ".config/recall/config.toml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text("port = 9001\n")
    monkeypatch.setenv("RECALL_PORT", "9100")

    assert resolve_config().port == 9100


def test_cli_overrides_env(mock_home, monkeypatch):
    monkeypatch.setenv("RECALL_BACKEND", "sqlite")

    config = resolve_config({"backend": "memory", "port": None})

    assert config.backend == "memory"
    assert config.port == 8777


def test_db_path_expands_user(mock_home):
    config = AppConfig(db_path="~/cards.db")
    assert config.db_path == Path(mock_home) / "cards.db"


def test_factory_memory_backend(mock_home):
    store = get_card_store(resolve_config({"backend": "memory"}))
    assert isinstance(store, InMemoryCardStore)


def test_factory_sqlite_backend(mock_home, tmp_path):
    db = tmp_path / "data" / "recall.db"

    store = get_card_store(resolve_config({"db_path": db}))
    try:
        assert isinstance(store, SqliteCardStore)
        assert db.exists()
    finally:
        store.close()
