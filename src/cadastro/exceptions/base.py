"""
Custom exceptions for validation and repository operations.

Every condition the core reports is a distinct subclass of `RepositoryError` so the
calling layer can branch on type (or on `error_code`) without parsing messages.
Transport status codes are the caller's concern; nothing here knows about HTTP.
"""

from enum import Enum
from typing import Any, Iterable


class FailureReason(str, Enum):
    """Machine-readable reason codes carried by ValidationFailure."""
    REQUIRED = "required"
    TYPE = "type"
    FORMAT = "format"
    ENUM = "enum"
    DUPLICATE = "duplicate"


# canonical repository-level exception

class RepositoryError(Exception):
    """
    Base exception for validation/repository errors.

    - message: human-friendly message
    - fields: optional list of field names related to the error (e.g., ['cpf'])
    - constraint: optional DB constraint name (for logs only)
    - error_code: canonical short code (e.g., 'duplicate', 'not_found') used by callers
    - retryable: True only for transient storage conditions
    """

    retryable = False

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict for the calling layer:
            {"detail": "...", "code": "duplicate", "fields": ["cpf"]}
        The constraint name is deliberately left out.
        """
        payload: dict[str, Any] = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload


class ValidationFailure(RepositoryError):
    """
    The payload does not satisfy the entity's field schema.

    `field` is the dotted path of the first failing field, `reason` a FailureReason,
    `allowed` the accepted values for enum failures.
    """

    def __init__(self, field: str, reason: FailureReason, *, detail: str | None = None,
                 allowed: Iterable[Any] | None = None, constraint: str | None = None):
        reason = FailureReason(reason)
        message = f"Field '{field}' failed '{reason.value}' check"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, fields=[field], constraint=constraint, error_code=reason.value)
        self.field = field
        self.reason = reason
        self.detail = detail
        self.allowed = list(allowed) if allowed is not None else None

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["field"] = self.field
        if self.allowed is not None:
            payload["allowed"] = list(self.allowed)
        return payload


class DuplicateError(ValidationFailure):
    """Another active record already holds this value in a unique field."""

    def __init__(self, field: str, *, detail: str | None = None, constraint: str | None = None):
        super().__init__(field, FailureReason.DUPLICATE, detail=detail, constraint=constraint)


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Not found", *, record_id: Any = None):
        super().__init__(message, error_code="not_found")
        self.record_id = record_id


class InvalidFilterError(RepositoryError):
    """A filter referenced a column the entity does not have."""

    def __init__(self, message: str, *, keys: Iterable[str]):
        keys = list(keys)
        super().__init__(message, fields=keys, error_code="invalid_filter")
        self.keys = keys


class InvalidFieldError(RepositoryError):
    """Raised when a payload handed to the repository carries unknown or managed fields."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


class StorageUnavailableError(RepositoryError):
    """The backend could not complete the operation (timeout, lost connection). Retry with backoff."""

    retryable = True

    def __init__(self, message: str = "Storage unavailable"):
        super().__init__(message, error_code="storage_unavailable")


__all__ = [
    "FailureReason",
    "RepositoryError",
    "ValidationFailure",
    "DuplicateError",
    "NotFoundError",
    "InvalidFilterError",
    "InvalidFieldError",
    "StorageUnavailableError",
]
