"""Database Session Manager — async engine with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions raised inside a session map to StorageError (core/errors.py)
    - SQLite connections run in WAL mode with a busy timeout: writers queue on the
      database lock instead of failing, and never wait forever

Design Decisions:
    - One manager instance built in the lifespan and injected into BillStore
      (ADR: no ambient module-level handles; tests build their own)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - create_schema on startup: a fresh local install works without running alembic
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from app.core.errors import StorageError
from app.db.base import Base
import app.models  # noqa: F401

logger = logging.getLogger(__name__)


def _enable_sqlite_wal(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class DatabaseSessionManager:
    """Manages async database sessions with rollback, error mapping, and health checks."""

    def __init__(self, database_url: str, busy_timeout_seconds: float = 30.0):
        connect_args = {}
        if database_url.startswith("sqlite"):
            connect_args["timeout"] = busy_timeout_seconds
        self.engine = create_async_engine(
            database_url,
            connect_args=connect_args,
            pool_pre_ping=True,
        )
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_wal)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    async def create_schema(self) -> None:
        """Create missing tables. Existing tables are left untouched."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(
        self, operation: str = "query",
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error during {operation}: {e}")
            raise StorageError("Integrity constraint violated", operation)
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error during {operation}: {e}")
            raise StorageError("Connection or operational error", operation)
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error during {operation}: {e}")
            raise StorageError("Database driver error", operation)
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error during {operation}: {e}")
            raise StorageError("Database operation failed", operation)
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session("health_check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
