from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError
from enum import Enum
from datetime import datetime, timezone
from typing import Iterable, List, Optional

TITLE_REQUIRED = "title is required (non-empty string)"
TITLE_INVALID = "title must be non-empty string when provided"
DONE_INVALID = "done must be boolean when provided"


class SortField(str, Enum):
    id = "id"
    title = "title"
    done = "done"
    created_at = "createdAt"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class Task(BaseModel):
    # camelCase on the wire and in the snapshot
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    done: bool = False
    created_at: str = Field(alias="createdAt")


class TaskCreate(BaseModel):
    title: str = Field(default="", validate_default=True)

    @field_validator("title", mode="before")
    @classmethod
    def _title_required(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise PydanticCustomError("title_required", TITLE_REQUIRED)
        return v.strip()


class TaskUpdate(BaseModel):
    """
    Partial update. Only fields present in the request body are applied;
    an explicit null counts as present (and is rejected).
    """
    title: Optional[str] = None
    done: Optional[bool] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title_non_empty(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise PydanticCustomError("title_invalid", TITLE_INVALID)
        return v.strip()

    @field_validator("done", mode="before")
    @classmethod
    def _done_boolean(cls, v):
        if not isinstance(v, bool):
            raise PydanticCustomError("done_invalid", DONE_INVALID)
        return v


class TaskQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    done: Optional[bool] = None
    search: Optional[str] = None
    sort: Optional[SortField] = None
    order: SortOrder = SortOrder.asc
    limit: Optional[int] = None
    page: int = 1


class TaskPage(BaseModel):
    total: int
    count: int
    page: int
    data: List[Task]


def next_task_id(tasks: Iterable[Task]) -> int:
    return max((t.id for t in tasks), default=0) + 1


def utc_timestamp() -> str:
    # 2025-11-06T08:01:00.000Z
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
