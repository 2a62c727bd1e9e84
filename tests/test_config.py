# tests/test_config.py

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from tasks_api.config import Settings, load_settings
from tasks_api.observability.logging import JsonFormatter

ENV_VARS = ("HOST", "PORT", "TASKS_STORE", "TASKS_DATA_FILE", "DB_PATH", "LOG_LEVEL", "LOG_DIR")


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = load_settings()
    assert s.port == 3000
    assert s.store == "file"
    assert s.data_file == Path("./data/tasks.json")
    assert s.log_dir == Path("./logs")


def test_env_overrides(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("TASKS_STORE", "SQLite")
    clean_env.setenv("DB_PATH", str(tmp_path / "x.db"))
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("LOG_DIR", "")

    s = load_settings()
    assert s.port == 8080
    assert s.store == "sqlite"
    assert s.db_path == tmp_path / "x.db"
    assert s.log_level == "DEBUG"
    assert s.log_dir is None


def test_bad_port_falls_back_to_default(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("PORT", "not-a-port")
    assert load_settings().port == 3000


def test_unknown_store_rejected() -> None:
    with pytest.raises(ValueError):
        Settings(store="postgres")


def test_json_formatter_includes_extras() -> None:
    record = logging.LogRecord("tasks_api.tasks", logging.INFO, __file__, 1, "task.create", None, None)
    record.category = "tasks"
    record.task_id = 3

    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "task.create"
    assert payload["level"] == "INFO"
    assert payload["category"] == "tasks"
    assert payload["task_id"] == 3
    assert "pathname" not in payload


def test_json_formatter_leads_with_event_and_skips_builtin_attrs() -> None:
    logger = logging.getLogger("tasks_api.test")
    record = logger.makeRecord(
        logger.name, logging.WARNING, __file__, 1, "store.load_failed", None, None,
        extra={"category": "store", "event": "store.load_failed", "source": "memory"},
    )

    payload = json.loads(JsonFormatter().format(record))
    assert list(payload)[:5] == ["ts", "level", "logger", "event", "category"]
    assert payload["source"] == "memory"
    assert payload["ts"].endswith("Z")
    for builtin in ("process", "thread", "lineno", "funcName", "args"):
        assert builtin not in payload
