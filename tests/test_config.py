"""Configのテスト"""

import logging
from pathlib import Path

import pytest

from desktodo.config import DEFAULT_CONFIG_PATH, Config
from desktodo.logger import setup_logger


def test_from_yaml(tmp_path):
    config_file = tmp_path / "app_config.yaml"
    config_file.write_text(
        "storage:\n"
        "  data_dir: ~/custom-todo\n"
        "  lock_timeout_seconds: 2.5\n"
        "server:\n"
        "  port: 9000\n"
        "log:\n"
        "  level: DEBUG\n",
        encoding="utf-8",
    )

    config = Config.from_yaml(config_file)

    assert config.data_dir == Path("~/custom-todo").expanduser()
    assert config.storage.lock_timeout_seconds == 2.5
    assert config.server.host == "127.0.0.1"
    assert config.server.port == 9000
    assert config.log_level == "DEBUG"
    assert config.log_file == "logs/todo_desk.log"


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("TODO_APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODO_APP_PORT", "9100")

    config = Config.from_env()

    assert config.data_dir == tmp_path
    assert config.server.port == 9100
    assert config.storage.lock_timeout_seconds == 10.0


def test_defaults_use_home_directory():
    config = Config()
    assert config.data_dir is None
    assert config.server.host == "127.0.0.1"


def test_load_falls_back_to_env(monkeypatch, tmp_path):
    monkeypatch.setenv("TODO_APP_LOG_LEVEL", "WARNING")
    config = Config.load(tmp_path / "missing.yaml")
    assert config.log_level == "WARNING"


def test_bundled_config_file_is_valid():
    config = Config.from_yaml(DEFAULT_CONFIG_PATH)
    assert config.data_dir is None
    assert config.server.port == 8765


@pytest.fixture
def restore_logging():
    yield
    for name in ("desktodo", "uvicorn", "uvicorn.error", "uvicorn.access"):
        target = logging.getLogger(name)
        for handler in list(target.handlers):
            target.removeHandler(handler)
            handler.close()
        target.propagate = True
        target.setLevel(logging.NOTSET)


def test_setup_logger_writes_package_logs(tmp_path, restore_logging):
    log_file = tmp_path / "logs" / "todo_desk.log"
    logger = setup_logger(log_level="debug", log_file=str(log_file))

    assert logger.name == "desktodo"
    assert logger.level == logging.DEBUG
    logging.getLogger("desktodo.todo.storage").warning("tasks file unreadable")
    for handler in logger.handlers:
        handler.flush()

    assert "tasks file unreadable" in log_file.read_text(encoding="utf-8")


def test_setup_logger_is_idempotent(tmp_path, restore_logging):
    log_file = tmp_path / "todo_desk.log"
    setup_logger(log_file=str(log_file))
    logger = setup_logger(log_level="bogus", log_file=str(log_file))

    assert len(logger.handlers) == 2
    assert logger.level == logging.INFO
    assert logging.getLogger("uvicorn.access").propagate is True


def test_setup_logger_console_only(restore_logging):
    logger = setup_logger(log_file="")
    assert [type(h) for h in logger.handlers] == [logging.StreamHandler]


def test_cors_origins_from_yaml_and_env(monkeypatch, tmp_path):
    config_file = tmp_path / "app_config.yaml"
    config_file.write_text(
        "server:\n  cors_origins:\n    - http://localhost:5173\n", encoding="utf-8"
    )
    assert Config.from_yaml(config_file).server.cors_origins == ["http://localhost:5173"]

    monkeypatch.setenv("TODO_APP_CORS_ORIGINS", "tauri://localhost, http://localhost:1420")
    assert Config.from_env().server.cors_origins == ["tauri://localhost", "http://localhost:1420"]


def test_default_cors_origins_exclude_wildcard():
    assert "*" not in Config().server.cors_origins
    assert "tauri://localhost" in Config().server.cors_origins
