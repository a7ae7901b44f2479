"""Record Schemas — Pydantic payload models generated from resource descriptors.

Invariants:
    - One payload model per descriptor; every field optional so the engine reports
      missing required fields itself (one error shape for routes and direct calls)
    - Types follow FieldType: integer -> int, decimal -> float, date -> date, string/text -> str
    - Blank strings for non-string fields are read as "not provided" (null)
    - Unknown keys are ignored, matching the engine's extract_writable
    - Numbers sent for string fields are accepted as text
    - Integers outside the Integer column range are rejected before any statement is built

Design Decisions:
    - pydantic.create_model over seven hand-written classes: the descriptor
      stays the single place a field is declared
"""

from datetime import date
from functools import lru_cache
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, create_model

from ministry_api.core.entity_descriptor import (
    INTEGER_MAX, INTEGER_MIN, EntityDescriptor, FieldSpec, FieldType,
)

_PYTHON_TYPES: dict[FieldType, type] = {
    FieldType.STRING: str,
    FieldType.TEXT: str,
    FieldType.INTEGER: int,
    FieldType.DECIMAL: float,
    FieldType.DATE: date,
}


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class RecordPayload(BaseModel):
    """Base for generated payload models."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    def to_values(self) -> dict[str, Any]:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


def _field_annotation(spec: FieldSpec) -> Any:
    python_type = _PYTHON_TYPES[spec.sql_type]
    if python_type is str:
        return Annotated[str | None, Field(max_length=spec.max_length)]
    if python_type is int:
        return Annotated[
            int | None, BeforeValidator(_blank_to_none),
            Field(ge=INTEGER_MIN, le=INTEGER_MAX),
        ]
    return Annotated[python_type | None, BeforeValidator(_blank_to_none)]


@lru_cache
def payload_model(descriptor: EntityDescriptor) -> type[RecordPayload]:
    """Generated request-body model for a descriptor (cached per descriptor)."""
    fields = {
        spec.name: (_field_annotation(spec), None) for spec in descriptor.fields
    }
    return create_model(
        f"{descriptor.name}Payload", __base__=RecordPayload, **fields,
    )


class CreatedResponse(BaseModel):
    """201 body for a successful create."""
    message: str
    id: int | None = None


class MessageResponse(BaseModel):
    """200 body for update, delete and login."""
    message: str
