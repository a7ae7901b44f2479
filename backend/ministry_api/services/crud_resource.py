"""CRUD Resource — one generic engine serving List/Get/Create/Update/Delete for any descriptor.

Invariants:
    - Identifiers are parsed as integers and always bound as parameters, never formatted into SQL
    - Values are bound parameters of SQLAlchemy Core insert()/update() constructs
    - Zero rows matched by an id-targeted Get/Update/Delete -> ResourceNotFoundError
    - Integer ids outside the column range are reported not found without a query
    - Write-only columns (User.password) are never selected by reads
    - Hooks run before the primary statement: at most one extra round trip

Design Decisions:
    - Descriptor + hooks instead of one class per resource: the seven
      resources differ only in field lists and two referential rules
    - WritePlan is the unit hooks refine (values to store, message context),
      so a hook can both validate and transform without engine branches
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Sequence

from sqlalchemy import delete, insert, select, update

from ministry_api.core.entity_descriptor import (
    EntityDescriptor, cleared_required, drop_defaultable_nulls,
    extract_writable, fits_integer_column, format_message, missing_required,
    parse_record_id,
)
from ministry_api.core.errors import (
    ErrorContext, RecordValidationError, ResourceNotFoundError,
)
from ministry_api.db.tables import build_table
from ministry_api.infrastructure.query_executor import QueryExecutor, Record

logger = logging.getLogger(__name__)


@dataclass
class WritePlan:
    """Values about to be written, refined by before_write hooks."""
    values: dict[str, Any]
    record_id: int | None = None
    message_context: dict[str, Any] = field(default_factory=dict)

    @property
    def is_update(self) -> bool:
        return self.record_id is not None


WriteHook = Callable[[QueryExecutor, WritePlan], Awaitable[None]]
DeleteHook = Callable[[QueryExecutor, int], Awaitable[None]]


class CrudResource:
    """Generic CRUD engine for one EntityDescriptor."""

    def __init__(
        self,
        descriptor: EntityDescriptor,
        before_write: Sequence[WriteHook] = (),
        before_delete: Sequence[DeleteHook] = (),
    ):
        self.descriptor = descriptor
        self.table = build_table(descriptor)
        self._pk = self.table.c[descriptor.primary_key]
        self._readable = [
            c for c in self.table.c
            if c.name not in descriptor.write_only_fields
        ]
        self._before_write = tuple(before_write)
        self._before_delete = tuple(before_delete)

    # ─── Reads ──────────────────────────────────────────────────

    async def list_all(
        self, executor: QueryExecutor,
        limit: int | None = None, offset: int = 0,
    ) -> list[Record]:
        statement = select(*self._readable).order_by(self._pk)
        if limit is not None:
            statement = statement.limit(limit)
        if offset:
            statement = statement.offset(offset)
        return await executor.fetch_all(statement, self._context())

    async def get(self, executor: QueryExecutor, raw_id: Any) -> Record:
        record_id = self._parse_id(raw_id)
        record = await executor.fetch_one(
            select(*self._readable).where(self._pk == record_id),
            self._context(record_id),
        )
        if record is None:
            raise self._not_found(record_id)
        return record

    # ─── Writes ─────────────────────────────────────────────────

    async def create(
        self, executor: QueryExecutor, body: Mapping[str, Any],
    ) -> dict[str, Any]:
        values = extract_writable(self.descriptor, body)
        missing = missing_required(self.descriptor, values)
        if missing:
            raise RecordValidationError(
                f"Missing required fields: {', '.join(missing)}",
                fields=missing, context=self._context(),
            )
        plan = WritePlan(values=drop_defaultable_nulls(self.descriptor, values))
        await self._run_write_hooks(executor, plan)

        result = await executor.execute(
            insert(self.table).values(**plan.values),
            operation="insert", context=self._context(),
        )
        logger.info(
            f"{self.descriptor.label} created",
            extra={"resource": self.descriptor.name, "record_id": result.inserted_id},
        )
        message = format_message(
            self.descriptor.created_message, self.descriptor,
            **{**plan.values, **plan.message_context},
        )
        return {"message": message, "id": result.inserted_id}

    async def update(
        self, executor: QueryExecutor, raw_id: Any, body: Mapping[str, Any],
    ) -> dict[str, Any]:
        record_id = self._parse_id(raw_id)
        values = extract_writable(self.descriptor, body)
        if not values:
            raise RecordValidationError(
                "No updatable fields supplied",
                context=self._context(record_id),
            )
        cleared = cleared_required(self.descriptor, values)
        if cleared:
            raise RecordValidationError(
                f"Required fields cannot be empty: {', '.join(cleared)}",
                fields=cleared, context=self._context(record_id),
            )
        plan = WritePlan(values=values, record_id=record_id)
        await self._run_write_hooks(executor, plan)

        result = await executor.execute(
            update(self.table).where(self._pk == record_id).values(**plan.values),
            operation="update", context=self._context(record_id),
        )
        if result.rowcount == 0:
            raise self._not_found(record_id)
        logger.info(
            f"{self.descriptor.label} updated",
            extra={"resource": self.descriptor.name, "record_id": record_id},
        )
        return {"message": format_message(
            self.descriptor.updated_message, self.descriptor,
            **{**plan.values, **plan.message_context},
        )}

    async def delete(self, executor: QueryExecutor, raw_id: Any) -> dict[str, Any]:
        record_id = self._parse_id(raw_id)
        for hook in self._before_delete:
            await hook(executor, record_id)

        result = await executor.execute(
            delete(self.table).where(self._pk == record_id),
            operation="delete", context=self._context(record_id),
        )
        if result.rowcount == 0:
            raise self._not_found(record_id)
        logger.info(
            f"{self.descriptor.label} deleted",
            extra={"resource": self.descriptor.name, "record_id": record_id},
        )
        return {"message": format_message(
            self.descriptor.deleted_message, self.descriptor,
        )}

    # ─── Helpers ────────────────────────────────────────────────

    async def _run_write_hooks(
        self, executor: QueryExecutor, plan: WritePlan,
    ) -> None:
        for hook in self._before_write:
            await hook(executor, plan)

    def _parse_id(self, raw_id: Any) -> int:
        record_id = parse_record_id(raw_id)
        if record_id is None:
            raise RecordValidationError(
                f"Invalid {self.descriptor.label} id: must be an integer",
                fields=[self.descriptor.primary_key],
                context=self._context(),
            )
        if not fits_integer_column(record_id):
            # no stored row can carry a key outside the column range
            raise self._not_found(record_id)
        return record_id

    def _not_found(self, record_id: int) -> ResourceNotFoundError:
        logger.info(
            f"{self.descriptor.label} {record_id} not found",
            extra={"resource": self.descriptor.name, "record_id": record_id},
        )
        return ResourceNotFoundError(
            self.descriptor.label, record_id, self._context(record_id),
        )

    def _context(self, record_id: int | None = None) -> ErrorContext:
        return ErrorContext(resource=self.descriptor.name, record_id=record_id)
