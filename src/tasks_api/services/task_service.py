import logging
import re
from typing import List, Tuple

from tasks_api.domain.errors import TaskNotFoundError, TaskValidationError
from tasks_api.domain.task_models import Task, TaskCreate, TaskPage, TaskQuery, TaskUpdate, next_task_id, utc_timestamp
from tasks_api.infra.store.snapshot import TaskRepo
from tasks_api.services.task_query import run_task_query

logger = logging.getLogger("tasks_api.tasks")

_ID_RE = re.compile(r"-?[0-9]+")


def parse_task_id(raw: str) -> int:
    raw = raw.strip()
    if not _ID_RE.fullmatch(raw):
        raise TaskValidationError("invalid id")
    return int(raw)


class TaskService:
    """
    Load-mutate-save over a snapshot TaskRepo.

    Nothing is cached between calls. Two overlapping mutations can race and
    the later save wins.
    """
    def __init__(self, repo: TaskRepo):
        self.repo = repo

    async def _find(self, task_id: int) -> Tuple[List[Task], int]:
        tasks = await self.repo.load()
        for idx, task in enumerate(tasks):
            if task.id == task_id:
                return tasks, idx
        logger.info("task.not_found", extra={"category": "tasks", "event": "task.not_found", "task_id": task_id})
        raise TaskNotFoundError(task_id)

    async def list_tasks(self, query: TaskQuery) -> TaskPage:
        tasks = await self.repo.load()
        return run_task_query(tasks, query)

    async def get_task(self, task_id: int) -> Task:
        tasks, idx = await self._find(task_id)
        return tasks[idx]

    async def create_task(self, data: TaskCreate) -> Task:
        tasks = await self.repo.load()
        task = Task(id=next_task_id(tasks), title=data.title, done=False, created_at=utc_timestamp())
        tasks.append(task)
        await self.repo.save(tasks)
        logger.info("task.create", extra={"category": "tasks", "event": "task.create", "task_id": task.id, "title": task.title})
        return task

    async def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        tasks, idx = await self._find(task_id)
        changes = data.model_dump(include=data.model_fields_set)
        task = tasks[idx].model_copy(update=changes)
        tasks[idx] = task
        await self.repo.save(tasks)
        logger.info(
            "task.update",
            extra={"category": "tasks", "event": "task.update", "task_id": task_id, "fields": sorted(changes)},
        )
        return task

    async def delete_task(self, task_id: int) -> None:
        tasks, _ = await self._find(task_id)
        survivors = [t for t in tasks if t.id != task_id]
        await self.repo.save(survivors)
        logger.info("task.delete", extra={"category": "tasks", "event": "task.delete", "task_id": task_id})
