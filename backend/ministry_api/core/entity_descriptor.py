"""Entity Descriptors — static metadata that drives the generic CRUD engine.

Invariants:
    - Descriptors are frozen dataclasses, built once at import and never mutated
    - Field order in a descriptor is the column order of the table
    - The primary key is never listed in ``fields`` (it is generated by the database)
    - Every helper here is pure: no IO, no SQL text

Design Decisions:
    - FieldType is a str Enum instead of SQLAlchemy types: core stays free of
      db/ imports, db/tables.py and schemas/records.py translate it
    - Message templates live on the descriptor so the engine has no
      per-resource branches
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class FieldType(str, Enum):
    """Column types a descriptor field can declare."""
    STRING = "string"
    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"
    DATE = "date"


@dataclass(frozen=True)
class FieldSpec:
    """One writable column of a resource."""
    name: str
    sql_type: FieldType = FieldType.STRING
    required: bool = False
    defaultable: bool = True
    unique: bool = False
    write_only: bool = False
    references: str | None = None
    max_length: int | None = None

    def __post_init__(self):
        if self.required and self.defaultable:
            # required fields can never fall back to the storage default
            object.__setattr__(self, "defaultable", False)


@dataclass(frozen=True)
class EntityDescriptor:
    """Table, primary key and ordered fields of one resource."""
    name: str
    table_name: str
    primary_key: str
    fields: tuple[FieldSpec, ...]
    path: str = ""
    label: str = ""
    created_message: str = "{label} created successfully"
    updated_message: str = "{label} updated successfully"
    deleted_message: str = "{label} deleted successfully"
    _index: dict[str, FieldSpec] = field(
        default_factory=dict, init=False, repr=False, compare=False,
    )

    def __post_init__(self):
        if not self.path:
            object.__setattr__(self, "path", self.table_name)
        if not self.label:
            object.__setattr__(self, "label", self.name)
        self._index.update({f.name: f for f in self.fields})

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.required)

    @property
    def write_only_fields(self) -> frozenset[str]:
        return frozenset(f.name for f in self.fields if f.write_only)

    def get_field(self, name: str) -> FieldSpec | None:
        return self._index.get(name)


# ─── Pure helpers used by the engine ────────────────────────────

_INTEGER = re.compile(r"[+-]?[0-9]+")

# Range of the Integer columns (signed 32-bit) every key and reference is stored in
INTEGER_MIN = -(2**31)
INTEGER_MAX = 2**31 - 1


def parse_record_id(raw: Any) -> int | None:
    """Parse a path identifier as an integer. Returns None when it is not one."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _INTEGER.fullmatch(raw.strip()):
        return int(raw)
    return None


def fits_integer_column(value: int) -> bool:
    """True when ``value`` can be bound to an Integer column without overflow."""
    return INTEGER_MIN <= value <= INTEGER_MAX


def extract_writable(
    descriptor: EntityDescriptor, body: Mapping[str, Any],
) -> dict[str, Any]:
    """Keep only the descriptor's fields, in descriptor order. Unknown keys are dropped."""
    return {
        name: body[name] for name in descriptor.field_names if name in body
    }


def missing_required(
    descriptor: EntityDescriptor, values: Mapping[str, Any],
) -> list[str]:
    """Required fields that are absent, null or blank."""
    return [
        name for name in descriptor.required_fields
        if _is_blank(values.get(name))
    ]


def cleared_required(
    descriptor: EntityDescriptor, values: Mapping[str, Any],
) -> list[str]:
    """Required fields a partial update tries to set to null or blank."""
    return [
        name for name in descriptor.required_fields
        if name in values and _is_blank(values[name])
    ]


def drop_defaultable_nulls(
    descriptor: EntityDescriptor, values: Mapping[str, Any],
) -> dict[str, Any]:
    """Omit null values of defaultable fields so the storage default applies."""
    return {
        name: value for name, value in values.items()
        if value is not None or not descriptor.get_field(name).defaultable
    }


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def format_message(template: str, descriptor: EntityDescriptor, **values: Any) -> str:
    """Fill a message template. Unknown placeholders render as empty strings."""
    context: dict[str, Any] = {"label": descriptor.label}
    context.update(values)
    return template.format_map(_BlankDefault(context))


class _BlankDefault(dict):
    def __missing__(self, key: str) -> str:
        return ""
