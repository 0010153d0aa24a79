"""
Declarative field descriptors.

A `FieldSchema` is the single table that drives validation for one entity: a read-only
mapping from field name to `FieldDescriptor`. Schemas are built once at import time
(see `schemas/entities.py`) and shared by every request without locking.

Example:
    DEPENDENTE_FIELDS = make_schema(
        nome=FieldDescriptor(type=FieldType.STRING, required=True),
        cpf=FieldDescriptor(type=FieldType.STRING, required=False, unique=True),
        porte=FieldDescriptor(type=FieldType.STRING, required=False, enum_values=("P", "M", "G", "GG")),
    )
"""

import re
from datetime import datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    DATETIME = "datetime"


def matches_type(field_type: FieldType, value: Any) -> bool:
    """
    Runtime type check used by the validator and by descriptor defaults.

    - bool is never a number (True == 1 would otherwise slip through enum checks)
    - datetime accepts the wire form (str, parsed later against `format`) or an
      already-parsed datetime
    """
    if field_type is FieldType.STRING:
        return isinstance(value, str)
    if field_type is FieldType.NUMBER:
        return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)
    if field_type is FieldType.BOOLEAN:
        return isinstance(value, bool)
    if field_type is FieldType.OBJECT:
        return isinstance(value, Mapping)
    if field_type is FieldType.ARRAY:
        return isinstance(value, (list, tuple))
    if field_type is FieldType.DATETIME:
        return isinstance(value, (str, datetime))
    return False


class FieldDescriptor(BaseModel):
    """
    Rules for one field of one entity.

    `max_length` and `pattern` constrain the raw string as received, before any
    normalization hook runs. `pattern` must match the whole value.

    `default` counts as declared only when passed explicitly, so `default=None` is a
    legitimate default distinct from "no default" (see `has_default`).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: FieldType
    required: bool = False
    unique: bool = False
    format: Optional[str] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    default: Any = None
    enum_values: Optional[tuple[Any, ...]] = None
    nested_fields: Optional[Mapping[str, "FieldDescriptor"]] = None

    @field_validator("nested_fields", mode="after")
    @classmethod
    def _freeze_nested(cls, value):
        if value is None:
            return None
        return MappingProxyType(dict(value))

    @field_validator("pattern", mode="after")
    @classmethod
    def _compile_pattern(cls, value):
        if value is not None:
            try:
                re.compile(value)
            except re.error as exc:
                raise ValueError(f"invalid pattern {value!r}: {exc}") from exc
        return value

    @model_validator(mode="after")
    def _check_consistency(self) -> "FieldDescriptor":
        if self.format is not None and self.type is not FieldType.DATETIME:
            raise ValueError("format applies only to datetime fields")
        if (self.max_length is not None or self.pattern is not None) and self.type is not FieldType.STRING:
            raise ValueError("max_length and pattern apply only to string fields")
        if self.nested_fields is not None and self.type not in (FieldType.OBJECT, FieldType.ARRAY):
            raise ValueError("nested_fields applies only to object/array fields")
        if self.has_default and self.default is not None and not matches_type(self.type, self.default):
            raise ValueError(f"default {self.default!r} is not a {self.type.value}")
        if self.has_default and self.enum_values is not None and self.default not in self.enum_values:
            raise ValueError(f"default {self.default!r} is not one of {self.enum_values}")
        return self

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set


FieldDescriptor.model_rebuild()

# Read-only mapping: field name -> FieldDescriptor
FieldSchema = Mapping[str, FieldDescriptor]


def make_schema(**fields: FieldDescriptor) -> FieldSchema:
    """
    Freeze keyword-ordered descriptors into a FieldSchema.

    Declaration order is preserved; the validator reports the first failing field in
    that order.
    """
    return MappingProxyType(dict(fields))
