"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - Pool acquisition waits at most pool_timeout seconds, then PoolExhaustedError
    - All SQLAlchemy exceptions mapped to core/errors.py types by map_database_error
    - Driver messages are logged here and never copied into the mapped error

Design Decisions:
    - db_manager initialized on startup: FastAPI lifespan manages lifecycle,
      dispose_db() releases the pool on shutdown
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Integrity errors classified by SQLSTATE first (PostgreSQL), MySQL errno
      second, message text last (SQLite has neither)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy import text

from ministry_api.core.errors import (
    ConflictError, DatabaseError, ErrorContext, PoolExhaustedError,
    RecordValidationError, RegistryError,
)

logger = logging.getLogger(__name__)

DUPLICATE_KEY = "duplicate_key"
FOREIGN_KEY = "foreign_key"
NOT_NULL = "not_null"

_SQLSTATES = {"23505": DUPLICATE_KEY, "23503": FOREIGN_KEY, "23502": NOT_NULL}
_MYSQL_ERRNOS = {
    1062: DUPLICATE_KEY, 1451: FOREIGN_KEY, 1452: FOREIGN_KEY, 1048: NOT_NULL,
}
_MESSAGE_MARKERS = (
    ("unique constraint", DUPLICATE_KEY),
    ("duplicate", DUPLICATE_KEY),
    ("foreign key constraint", FOREIGN_KEY),
    ("not null constraint", NOT_NULL),
)


def classify_integrity_error(exc: IntegrityError) -> str | None:
    """Return DUPLICATE_KEY, FOREIGN_KEY, NOT_NULL, or None when unrecognized."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in _SQLSTATES:
        return _SQLSTATES[sqlstate]
    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int) and args[0] in _MYSQL_ERRNOS:
        return _MYSQL_ERRNOS[args[0]]
    message = str(orig).lower()
    for marker, kind in _MESSAGE_MARKERS:
        if marker in message:
            return kind
    return None


def map_database_error(
    exc: SQLAlchemyError, operation: str,
    context: ErrorContext | None = None,
) -> RegistryError:
    """Translate a SQLAlchemy exception into a client-safe registry error."""
    ctx = context or ErrorContext()
    ctx.operation = operation
    if isinstance(exc, PoolTimeoutError):
        logger.error(
            f"DB pool exhausted during {operation}: {exc}",
            extra={"operation": operation, "resource": ctx.resource},
        )
        return PoolExhaustedError(context=ctx)
    if isinstance(exc, IntegrityError):
        kind = classify_integrity_error(exc)
        logger.warning(
            f"DB integrity error ({kind}) during {operation}: {exc.orig}",
            extra={"operation": operation, "resource": ctx.resource},
        )
        if kind == DUPLICATE_KEY:
            return ConflictError(
                "A record with the same unique value already exists", ctx,
            )
        if kind == FOREIGN_KEY and operation == "delete":
            return ConflictError(
                "Record is still referenced by other records", ctx,
            )
        if kind == FOREIGN_KEY:
            return RecordValidationError(
                "Referenced record does not exist", context=ctx,
            )
        if kind == NOT_NULL:
            return RecordValidationError(
                "A required value is missing", context=ctx,
            )
        return ConflictError("Integrity constraint violated", ctx)
    if isinstance(exc, OperationalError):
        logger.error(f"DB operational error during {operation}: {exc}", exc_info=exc)
        return DatabaseError("Connection or operational error", operation, ctx)
    if isinstance(exc, DBAPIError):
        logger.error(f"DB driver error during {operation}: {exc}", exc_info=exc)
        return DatabaseError("Database driver error", operation, ctx)
    logger.error(f"SQLAlchemy error during {operation}: {exc}", exc_info=exc)
    return DatabaseError("Database operation failed", operation, ctx)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 10, max_overflow: int = 5,
        pool_timeout: float = 10.0, pool_recycle: int = 3600,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_pre_ping=True,
            pool_recycle=pool_recycle,
        )
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
        except SQLAlchemyError as e:
            await session.rollback()
            raise map_database_error(e, "session") from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (RegistryError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Initialized on startup by the lifespan handler
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def dispose_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
