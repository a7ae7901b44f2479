"""Query Executor — runs bound statements on a pooled session and returns Records.

Invariants:
    - Statements are SQLAlchemy Core constructs; every value travels as a bound parameter
    - fetch_* never commit; execute() commits on success and rolls back on failure
    - Every SQLAlchemyError leaves this module as a core/errors.py type
    - Rows are returned as plain dicts (Records), never as Row objects

Design Decisions:
    - Thin wrapper over AsyncSession: the engine depends on three methods,
      tests swap the session for an in-memory SQLite one
"""

import logging
from dataclasses import dataclass
from typing import Any, AsyncGenerator

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from ministry_api.core.errors import ErrorContext
from ministry_api.infrastructure.database import get_db, map_database_error

logger = logging.getLogger(__name__)

Record = dict[str, Any]


@dataclass(frozen=True)
class WriteResult:
    """Outcome of an INSERT/UPDATE/DELETE."""
    rowcount: int
    inserted_id: int | None = None


class QueryExecutor:
    """Executes statements for one request on one pooled session."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def fetch_all(
        self, statement: Executable, context: ErrorContext | None = None,
    ) -> list[Record]:
        try:
            result = await self._session.execute(statement)
            return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise map_database_error(e, "query", context) from e

    async def fetch_one(
        self, statement: Executable, context: ErrorContext | None = None,
    ) -> Record | None:
        rows = await self.fetch_all(statement, context)
        return rows[0] if rows else None

    async def execute(
        self, statement: Executable, operation: str = "write",
        context: ErrorContext | None = None,
    ) -> WriteResult:
        try:
            result = await self._session.execute(statement)
            inserted_id = None
            if operation == "insert":
                key = result.inserted_primary_key
                inserted_id = key[0] if key else None
            rowcount = result.rowcount
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise map_database_error(e, operation, context) from e
        logger.debug(
            f"{operation} affected {rowcount} row(s)",
            extra={"operation": operation},
        )
        return WriteResult(rowcount=rowcount, inserted_id=inserted_id)


async def get_executor(
    db: AsyncSession = Depends(get_db),
) -> AsyncGenerator[QueryExecutor, None]:
    """FastAPI dependency: one QueryExecutor per request."""
    yield QueryExecutor(db)
