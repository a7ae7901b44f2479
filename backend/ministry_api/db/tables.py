"""Tables — SQLAlchemy Core Table objects generated from the resource descriptors.

Invariants:
    - One Table per descriptor in ALL_ENTITIES, registered on db/base.py metadata
    - Primary key is an autoincrement Integer named by the descriptor
    - FieldSpec.references becomes a ForeignKey to the referenced table's primary key
    - Deleting a referenced row is RESTRICTed at the storage layer

Design Decisions:
    - Core tables over ORM classes: the engine works on generic Records,
      a mapped class per resource would only be boilerplate
    - DECIMAL maps to Numeric(asdecimal=False) so JSON responses carry plain numbers
"""

from sqlalchemy import (
    Column, Date, ForeignKey, Integer, MetaData, Numeric, String, Table, Text,
)
from sqlalchemy.types import TypeEngine

from ministry_api.core.entities import ALL_ENTITIES
from ministry_api.core.entity_descriptor import EntityDescriptor, FieldSpec, FieldType
from ministry_api.db.base import metadata

DEFAULT_STRING_LENGTH = 255


def column_type(spec: FieldSpec) -> TypeEngine:
    """SQLAlchemy type for a descriptor field."""
    if spec.sql_type == FieldType.STRING:
        return String(spec.max_length or DEFAULT_STRING_LENGTH)
    if spec.sql_type == FieldType.TEXT:
        return Text()
    if spec.sql_type == FieldType.INTEGER:
        return Integer()
    if spec.sql_type == FieldType.DECIMAL:
        return Numeric(12, 2, asdecimal=False)
    if spec.sql_type == FieldType.DATE:
        return Date()
    raise ValueError(f"Unsupported field type: {spec.sql_type}")


def _primary_keys() -> dict[str, str]:
    return {d.table_name: d.primary_key for d in ALL_ENTITIES}


def build_table(
    descriptor: EntityDescriptor, target: MetaData = metadata,
) -> Table:
    """Build (or fetch, if already registered) the Table for a descriptor."""
    if descriptor.table_name in target.tables:
        return target.tables[descriptor.table_name]

    primary_keys = _primary_keys()
    columns = [
        Column(descriptor.primary_key, Integer, primary_key=True, autoincrement=True),
    ]
    for spec in descriptor.fields:
        args = [column_type(spec)]
        if spec.references:
            args.append(ForeignKey(
                f"{spec.references}.{primary_keys[spec.references]}",
                ondelete="RESTRICT",
            ))
        columns.append(Column(
            spec.name, *args,
            nullable=not spec.required,
            unique=spec.unique or None,
        ))
    return Table(descriptor.table_name, target, *columns)


TABLES: dict[str, Table] = {
    descriptor.name: build_table(descriptor) for descriptor in ALL_ENTITIES
}
