from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import String, Text, DateTime
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from tasks_api.domain.task_models import Task
from tasks_api.infra.store.snapshot import decode_snapshot_or_empty, encode_snapshot
from tasks_api.infra.store.sqlite import make_sessionmaker

logger = logging.getLogger("tasks_api.store")


class Base(DeclarativeBase):
    pass


class SnapshotRow(Base):
    __tablename__ = "snapshots"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SQLiteTaskRepo:
    """
    Key/value snapshot store: the whole collection lives in one row as the
    same JSON text the file repo writes.
    """
    def __init__(self, engine: AsyncEngine, key: str = "tasks"):
        self.engine = engine
        self.sessionmaker = make_sessionmaker(engine)
        self.key = key
        self._schema_ready = False

    async def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._schema_ready = True

    async def load(self) -> List[Task]:
        source = f"sqlite:{self.key}"
        try:
            await self._ensure_schema()
            async with self.sessionmaker() as session:
                row = await session.get(SnapshotRow, self.key)
                payload = row.payload if row else None
        except SQLAlchemyError as e:
            logger.warning(
                "store.load_failed",
                extra={"category": "store", "event": "store.load_failed", "source": source, "error": str(e)},
            )
            return []
        if payload is None:
            return []
        return decode_snapshot_or_empty(payload, source=source)

    async def save(self, tasks: List[Task]) -> None:
        await self._ensure_schema()
        payload = encode_snapshot(tasks)
        now = datetime.now(timezone.utc)
        async with self.sessionmaker() as session:
            row = await session.get(SnapshotRow, self.key)
            if row is None:
                session.add(SnapshotRow(key=self.key, payload=payload, updated_at=now))
            else:
                row.payload = payload
                row.updated_at = now
            await session.commit()
