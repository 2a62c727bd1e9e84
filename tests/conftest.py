# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List

import pytest
from fastapi.testclient import TestClient

from tasks_api.app.main import create_app
from tasks_api.config import Settings
from tasks_api.domain.task_models import Task
from tasks_api.infra.store.task_repo_memory import InMemoryTaskRepo


def seed_tasks() -> List[Task]:
    return [
        Task(id=1, title="Read docs", done=False, created_at="2025-11-06T08:01:00.000Z"),
        Task(id=2, title="Write API", done=True, created_at="2025-11-06T08:02:00.000Z"),
        Task(id=3, title="Test coverage", done=False, created_at="2025-11-06T08:03:00.000Z"),
        Task(id=4, title="Fix bug", done=True, created_at="2025-11-06T08:04:00.000Z"),
        Task(id=5, title="Deploy project", done=False, created_at="2025-11-06T08:05:00.000Z"),
    ]


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing every path into the per-test tmp dir, no log file."""
    return Settings(
        data_file=tmp_path / "tasks.json",
        db_path=tmp_path / "tasks.db",
        log_dir=None,
    )


@pytest.fixture()
def repo() -> InMemoryTaskRepo:
    return InMemoryTaskRepo()


@pytest.fixture()
def seeded_repo() -> InMemoryTaskRepo:
    return InMemoryTaskRepo(seed_tasks())


@pytest.fixture()
def client(settings: Settings, repo: InMemoryTaskRepo) -> Iterator[TestClient]:
    with TestClient(create_app(settings, repo=repo)) as c:
        yield c


@pytest.fixture()
def seeded_client(settings: Settings, seeded_repo: InMemoryTaskRepo) -> Iterator[TestClient]:
    with TestClient(create_app(settings, repo=seeded_repo)) as c:
        yield c
