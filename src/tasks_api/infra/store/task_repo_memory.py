from __future__ import annotations
from typing import List, Optional

from tasks_api.domain.task_models import Task
from tasks_api.infra.store.snapshot import decode_snapshot_or_empty, encode_snapshot


class InMemoryTaskRepo:
    """
    In-memory snapshot store for tests.
    Keeps the serialized text rather than live objects, so it goes through
    the same encode/decode path as the file and SQLite repos.
    """
    def __init__(self, tasks: Optional[List[Task]] = None):
        self.snapshot: Optional[str] = encode_snapshot(tasks) if tasks is not None else None
        self.saves = 0

    async def load(self) -> List[Task]:
        if self.snapshot is None:
            return []
        return decode_snapshot_or_empty(self.snapshot, source="memory")

    async def save(self, tasks: List[Task]) -> None:
        self.snapshot = encode_snapshot(tasks)
        self.saves += 1
