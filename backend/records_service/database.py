"""
Records Service - Database Session Management
==============================================

What:  Async SQLAlchemy engine, session factory, and the per-request session
       dependency.
How:   DatabaseSessionManager owns one AsyncEngine (the connection pool). The
       app factory stores it on `app.state.db`; get_db_session() opens one
       AsyncSession per request from it.
When:  The manager is built by create_app(); sessions are created per request.

Connection Pooling:
    pool_size / max_overflow:  bound on concurrently checked-out connections
    pool_timeout:              how long an acquire waits when the pool is exhausted
    pool_pre_ping:             validates connections before use
    pool_recycle=3600:         recycles connections every hour

    A session checks out a connection at its first statement and returns it to
    the pool when the session closes.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from records_service.config import DatabaseSettings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for the ORM models; owns the shared metadata."""
    pass


class DatabaseSessionManager:
    """Owns the async engine and hands out sessions bound to it."""

    def __init__(self, db_settings: DatabaseSettings):
        url = make_url(db_settings.url)
        engine_kwargs = {"pool_pre_ping": True, "pool_recycle": 3600}
        # SQLite picks its own pool class, which takes no sizing arguments
        if url.get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=db_settings.pool_size,
                max_overflow=db_settings.max_overflow,
                pool_timeout=db_settings.pool_timeout,
            )

        self.url = url
        self.engine = create_async_engine(url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session that rolls back on error and always closes.

        Closing returns the underlying connection to the pool, on success,
        on a client error raised mid-request and on database failures alike.
        """
        session = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def ping(self) -> None:
        """Run SELECT 1; raises if the database cannot be reached."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/records")
        async def list_records(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    manager: DatabaseSessionManager = request.app.state.db
    async with manager.session() as session:
        yield session
