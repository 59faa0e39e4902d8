"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - IntegrityError maps to ConflictError, every other SQLAlchemy error to DatabaseError
    - unit_of_work is the only place services commit; it rolls back on any
      exception raised inside the block, domain errors included

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - An existing engine can be bound instead of a URL (tests share one
      in-memory engine between fixtures and the HTTP client)
    - Constraint violations surface as 409 not 503: a lost race is the caller's
      to retry, not an outage
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from tandem.core.errors import ConflictError, DatabaseError, ErrorContext
from tandem.infrastructure.observability import context_extra

logger = logging.getLogger(__name__)


@asynccontextmanager
async def unit_of_work(
    db: AsyncSession, conflict_message: str,
    context: ErrorContext | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """Commit everything done inside the block, or roll all of it back.

    A constraint violation, at flush or at commit, means a concurrent writer
    got there first and becomes ConflictError carrying `context`.
    """
    context = context or ErrorContext()
    try:
        yield db
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(
            f"Unit of work lost a uniqueness race: {e.orig}",
            extra=context_extra(context),
        )
        raise ConflictError(conflict_message, context) from e
    except Exception:
        await db.rollback()
        raise


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str | None = None, pool_size: int = 20,
        max_overflow: int = 10, *, engine: AsyncEngine | None = None,
    ):
        if engine is None:
            if database_url is None:
                raise ValueError("database_url or engine is required")
            engine_kwargs = {"pool_pre_ping": True}
            if not database_url.startswith("sqlite"):
                engine_kwargs.update(
                    pool_size=pool_size, max_overflow=max_overflow,
                    pool_recycle=3600,
                )
            engine = create_async_engine(database_url, **engine_kwargs)
        self.engine = engine
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise ConflictError("Integrity constraint violated")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
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


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
