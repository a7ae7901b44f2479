"""Reference Checks — pluggable hooks enforcing cross-resource references in the handler layer.

Invariants:
    - require_reference: the referenced row must exist before a write stores the reference
    - An update that does not touch the reference field skips the lookup
    - forbid_referenced_delete: a row still referenced by children cannot be deleted
    - Lookups bind the identifier as a parameter, like every other statement
    - Out-of-range ids are rejected as unknown references without a lookup
    - Error context names the resource being written, not the referenced one

Design Decisions:
    - Unknown reference -> RecordValidationError (400), not 404: the request
      body is wrong, the addressed resource exists
    - Delete guard -> ConflictError (409), matching the storage-level RESTRICT FK
"""

import logging

from sqlalchemy import func, select

from ministry_api.core.entity_descriptor import (
    EntityDescriptor, fits_integer_column, parse_record_id,
)
from ministry_api.core.errors import ConflictError, ErrorContext, RecordValidationError
from ministry_api.db.tables import build_table
from ministry_api.infrastructure.query_executor import QueryExecutor
from ministry_api.services.crud_resource import DeleteHook, WriteHook, WritePlan

logger = logging.getLogger(__name__)


def require_reference(
    owner: EntityDescriptor,
    field: str,
    target: EntityDescriptor,
    label_column: str = "name",
    context_key: str | None = None,
) -> WriteHook:
    """Hook: ``owner.field`` must hold the id of an existing ``target`` row.

    The referenced row's ``label_column`` is published to the message
    context under ``context_key`` (default ``<target>_name``).
    """
    table = build_table(target)
    key = context_key or f"{target.name.lower()}_name"

    async def check_reference(executor: QueryExecutor, plan: WritePlan) -> None:
        if plan.is_update and field not in plan.values:
            return
        context = ErrorContext(resource=owner.name, record_id=plan.record_id)
        raw = plan.values.get(field)
        ref_id = parse_record_id(raw)
        if ref_id is None:
            raise RecordValidationError(
                f"Invalid or missing {field}", fields=[field], context=context,
            )
        row = None
        if fits_integer_column(ref_id):
            row = await executor.fetch_one(
                select(table.c[label_column]).where(
                    table.c[target.primary_key] == ref_id,
                ),
                context,
            )
        if row is None:
            logger.info(
                f"Rejected {owner.label} write: {target.label} {ref_id} does not exist",
                extra={"resource": owner.name, "record_id": plan.record_id},
            )
            raise RecordValidationError(
                f"Invalid {target.label.lower()} reference: {ref_id}",
                fields=[field], context=context,
            )
        plan.values[field] = ref_id
        plan.message_context[key] = row[label_column]

    return check_reference


def forbid_referenced_delete(
    parent: EntityDescriptor, child: EntityDescriptor, field: str,
) -> DeleteHook:
    """Hook: refuse to delete a ``parent`` row while ``child`` rows point at it."""
    child_table = build_table(child)

    async def guard_delete(executor: QueryExecutor, record_id: int) -> None:
        row = await executor.fetch_one(
            select(func.count().label("references"))
            .select_from(child_table)
            .where(child_table.c[field] == record_id),
            ErrorContext(resource=parent.name, record_id=record_id),
        )
        count = row["references"] if row else 0
        if count:
            raise ConflictError(
                f"{parent.label} is still referenced by {count} "
                f"{child.label.lower()} record(s)",
                ErrorContext(resource=parent.name, record_id=record_id),
            )

    return guard_delete
