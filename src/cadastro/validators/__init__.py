from .field_validator import UniquenessLookup, check_fields, validate_payload
from .normalizers import (
    Normalizer,
    apply_normalizers,
    format_decimal,
    format_digits,
    format_object,
    format_string,
)

__all__ = [
    "UniquenessLookup",
    "check_fields",
    "validate_payload",
    "Normalizer",
    "format_string",
    "format_digits",
    "format_decimal",
    "format_object",
    "apply_normalizers",
]
