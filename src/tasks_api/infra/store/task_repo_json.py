from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import List, Union

from tasks_api.domain.task_models import Task
from tasks_api.infra.store.snapshot import decode_snapshot_or_empty, encode_snapshot

logger = logging.getLogger("tasks_api.store")


class JsonFileTaskRepo:
    """
    Snapshot store backed by a single JSON file.

    Every load reads the whole file; every save rewrites it. A missing or
    unreadable file is an empty collection.
    """
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def load(self) -> List[Task]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(
                "store.load_failed",
                extra={"category": "store", "event": "store.load_failed", "source": str(self.path), "error": str(e)},
            )
            return []
        return decode_snapshot_or_empty(raw, source=str(self.path))

    async def save(self, tasks: List[Task]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # write-then-replace so readers never see a torn file
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(encode_snapshot(tasks), encoding="utf-8")
        os.replace(tmp, self.path)
