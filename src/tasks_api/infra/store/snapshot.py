"""
Snapshot (de)serialization shared by every TaskRepo.

The whole collection is one pretty-printed JSON array with camelCase keys.
Encoding is deterministic so that save(load()) rewrites identical bytes.
"""
from __future__ import annotations

import json
import logging
from typing import List, Protocol

from pydantic import ValidationError

from tasks_api.domain.task_models import Task

logger = logging.getLogger("tasks_api.store")


class TaskRepo(Protocol):
    async def load(self) -> List[Task]: ...

    async def save(self, tasks: List[Task]) -> None: ...


def encode_snapshot(tasks: List[Task]) -> str:
    records = [t.model_dump(by_alias=True) for t in tasks]
    return json.dumps(records, indent=2, ensure_ascii=False)


def _warn_load_failed(source: str, error: str, **fields) -> None:
    logger.warning(
        "store.load_failed",
        extra={"category": "store", "event": "store.load_failed", "source": source, "error": error, **fields},
    )


def decode_snapshot(text: str, source: str = "snapshot") -> List[Task]:
    """
    Parse a snapshot. A document that is not a JSON array raises ValueError;
    inside a valid array, records that do not validate as Task are dropped
    one by one (with a warning) and the rest are kept.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("snapshot is not a JSON array")
    tasks: List[Task] = []
    for index, item in enumerate(data):
        try:
            tasks.append(Task.model_validate(item))
        except ValidationError as e:
            _warn_load_failed(source, str(e), index=index)
    return tasks


def decode_snapshot_or_empty(text: str, source: str) -> List[Task]:
    # Undecodable content reads as an empty collection; the warning is the only trace.
    try:
        return decode_snapshot(text, source=source)
    except ValueError as e:
        _warn_load_failed(source, str(e))
        return []
