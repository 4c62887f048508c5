"""Database Session Manager — async engine, per-request sessions, rollback on failure.

Invariants:
    - One AsyncSession per request (get_db); always closed, rolled back on any
      SQLAlchemy exception
    - SQLAlchemy exceptions escaping a request surface as DatabaseError (503)
    - Sessions use expire_on_commit=False so generated ids and loaded attributes
      stay readable after save_changes()

Design Decisions:
    - Singleton db_manager initialized in the lifespan, disposed on shutdown
    - Pool sizing only applies to server databases; SQLite URLs (local runs,
      tests) get the dialect's default pool
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from cityinfo.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_ERROR_MAP: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict[str, Any]:
    """Keyword arguments for create_async_engine, by backend."""
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    for exc_type, message, operation in _ERROR_MAP:
        if isinstance(exc, exc_type):
            return DatabaseError(message, operation)
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = to_database_error(e)
            logger.error(f"{error.message}: {e}", extra={"error_code": error.code})
            raise error from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
