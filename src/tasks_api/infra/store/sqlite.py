from __future__ import annotations
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from sqlalchemy.pool import NullPool
from pathlib import Path

def make_sqlite_url(db_path: str) -> str:
    # db_path like "./data/tasks.db"
    p = Path(db_path).resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{p.as_posix()}"

def make_engine(sqlite_url: str) -> AsyncEngine:
    # one connection per snapshot read/write; nothing pooled across event loops
    return create_async_engine(sqlite_url, poolclass=NullPool)

def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)
