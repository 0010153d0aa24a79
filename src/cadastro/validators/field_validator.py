"""
Schema-driven payload validation.

`validate_payload` walks a FieldSchema in declaration order and, for each field:

    1. presence   -> absent: inject default / fail "required" / omit
    2. type       -> "type"
    3. format     -> strings: max_length / pattern; datetimes: parsed with the
                     descriptor's strptime format. Either way, "format"
    4. enum       -> "enum" (with the allowed values)
    5. nested     -> recursive, failures carry a dotted path ("endereco.cep", "enderecos.1.cep")
    6. unique     -> asks the repository for another *active* record, else "duplicate"

The first failing field is reported (fail-fast). Keys the schema does not declare are
dropped from the normalized payload.
"""

import copy
import re
from datetime import datetime
from typing import Any, Iterator, Mapping, Optional, Protocol

from ..exceptions import DuplicateError, FailureReason, ValidationFailure
from ..schemas.fields import FieldDescriptor, FieldSchema, FieldType, matches_type

# Marks a key missing from the payload, as opposed to a key explicitly set to None
_ABSENT = object()


class UniquenessLookup(Protocol):
    async def has_active_duplicate(self, field: str, value: Any, exclude_id: Any = None) -> bool:
        ...


def _join(prefix: str, name) -> str:
    return f"{prefix}.{name}" if prefix else str(name)


def _parse_datetime(path: str, descriptor: FieldDescriptor, value) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        if descriptor.format:
            return datetime.strptime(value, descriptor.format)
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise ValidationFailure(
            path, FailureReason.FORMAT, detail=f"expected {descriptor.format or 'ISO 8601'}"
        ) from exc


def _check_string(path: str, descriptor: FieldDescriptor, value: str) -> None:
    if descriptor.max_length is not None and len(value) > descriptor.max_length:
        raise ValidationFailure(
            path, FailureReason.FORMAT, detail=f"at most {descriptor.max_length} characters"
        )
    if descriptor.pattern is not None and re.fullmatch(descriptor.pattern, value) is None:
        raise ValidationFailure(path, FailureReason.FORMAT, detail="does not match the expected format")


def _check_nested(path: str, descriptor: FieldDescriptor, value):
    if descriptor.type is FieldType.OBJECT:
        return check_fields(value, descriptor.nested_fields, prefix=path)

    items = []
    for index, item in enumerate(value):
        items.append(check_fields(item, descriptor.nested_fields, prefix=_join(path, index)))
    return items


def _check_value(path: str, descriptor: FieldDescriptor, value):
    """Steps 2-5 for one present, non-null value. Returns the normalized value."""
    if not matches_type(descriptor.type, value):
        raise ValidationFailure(
            path, FailureReason.TYPE, detail=f"expected {descriptor.type.value}, got {type(value).__name__}"
        )

    if descriptor.type is FieldType.STRING:
        _check_string(path, descriptor, value)

    if descriptor.type is FieldType.DATETIME:
        value = _parse_datetime(path, descriptor, value)

    if descriptor.enum_values is not None and value not in descriptor.enum_values:
        raise ValidationFailure(path, FailureReason.ENUM, allowed=descriptor.enum_values)

    if descriptor.nested_fields is not None:
        return _check_nested(path, descriptor, value)
    if descriptor.type is FieldType.ARRAY:
        return list(value)
    if descriptor.type is FieldType.OBJECT:
        return dict(value)
    return value


def _iter_checked(
    payload: Mapping[str, Any],
    schema: FieldSchema,
    *,
    prefix: str,
    partial: bool,
) -> Iterator[tuple[str, FieldDescriptor, Any, bool]]:
    """
    Yield (name, descriptor, normalized value, is_default) field by field.

    Failures are raised while iterating, so callers that interleave their own checks
    (uniqueness) keep the declaration-order fail-fast behaviour.
    """
    if not isinstance(payload, Mapping):
        raise ValidationFailure(prefix, FailureReason.TYPE, detail="expected object")

    for name, descriptor in schema.items():
        path = _join(prefix, name)
        value = payload.get(name, _ABSENT)

        if value is _ABSENT:
            if partial:
                continue
            if descriptor.has_default:
                yield name, descriptor, copy.deepcopy(descriptor.default), True
                continue
            if descriptor.required:
                raise ValidationFailure(path, FailureReason.REQUIRED)
            continue

        if value is None:
            if descriptor.required:
                raise ValidationFailure(path, FailureReason.REQUIRED)
            if descriptor.has_default:
                yield name, descriptor, copy.deepcopy(descriptor.default), True
                continue
            # explicit clear of an optional field
            yield name, descriptor, None, False
            continue

        yield name, descriptor, _check_value(path, descriptor, value), False


def check_fields(
    payload: Mapping[str, Any],
    schema: FieldSchema,
    *,
    prefix: str = "",
    partial: bool = False,
) -> dict[str, Any]:
    """
    Structural validation only (steps 1-5). Used for nested objects and when no
    repository is at hand.
    """
    return {
        name: value
        for name, _descriptor, value, _is_default in _iter_checked(payload, schema, prefix=prefix, partial=partial)
    }


async def validate_payload(
    payload: Mapping[str, Any],
    schema: FieldSchema,
    repository: Optional[UniquenessLookup] = None,
    record_id: Any = None,
    *,
    partial: bool = False,
) -> dict[str, Any]:
    """
    Validate `payload` against `schema` and return the normalized payload.

    Args:
        payload: incoming field -> value mapping.
        schema: the entity's FieldSchema.
        repository: consulted for `unique` fields; without it uniqueness is not checked.
        record_id: the record being updated, excluded from the uniqueness lookup.
        partial: skip absent fields entirely (no defaults, no "required"), for updates.

    Raises:
        ValidationFailure: first failing field, with `field` and `reason`.
        DuplicateError: another active record holds a unique value.
    """
    normalized: dict[str, Any] = {}
    for name, descriptor, value, is_default in _iter_checked(payload, schema, prefix="", partial=partial):
        if descriptor.unique and repository is not None and value is not None and not is_default:
            if await repository.has_active_duplicate(name, value, exclude_id=record_id):
                raise DuplicateError(name, detail="another active record already holds this value")
        normalized[name] = value
    return normalized
