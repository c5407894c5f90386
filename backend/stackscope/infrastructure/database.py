"""Database Session Manager — pooled, read-only async sessions for the website store.

Invariants:
    - The API never writes: sessions are opened without autoflush and nothing
      commits; close() on exit discards the open transaction
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py), labelled
      with the store operation that was running
    - One AsyncSession per concurrent store call; sessions are never shared across tasks
    - Connection pool uses pool_pre_ping for stale connection detection

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - Pool checkout timeouts get their own message: under load the pool, not the
      database, is usually what ran out
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, OperationalError, SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from stackscope.core.errors import DatabaseError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Hands out read-only sessions from a shared pool and maps driver failures."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(
        self, operation: str = "read",
    ) -> AsyncGenerator[AsyncSession, None]:
        """Read-only session; failures surface as DatabaseError(operation)."""
        session = self._session_factory()
        try:
            yield session
        except PoolTimeoutError as e:
            logger.error(f"DB pool exhausted during {operation}: {e}")
            raise DatabaseError("Connection pool exhausted", operation)
        except OperationalError as e:
            logger.error(f"DB operational error during {operation}: {e}")
            raise DatabaseError("Connection or operational error", operation)
        except DBAPIError as e:
            logger.error(f"DB driver error during {operation}: {e}")
            raise DatabaseError("Database driver error", operation)
        except SQLAlchemyError as e:
            logger.error(f"SQLAlchemy error during {operation}: {e}")
            raise DatabaseError("Database operation failed", operation)
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session("health check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


def get_db_manager() -> DatabaseSessionManager:
    """FastAPI dependency for the session manager (the store opens its own sessions)."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager
