import logging
from enum import Enum
from typing import Type
from sqlalchemy.exc import IntegrityError
from .base import RepositoryError

logger = logging.getLogger(__name__)

# =================================================================================================================
# Constraint-specific exceptions (internal labels, never raised to callers)
# =================================================================================================================


class ConstraintViolationError(RepositoryError):
    """Base for integrity/constraint violations."""
    pass


class UniqueConstraintError(ConstraintViolationError):
    """Unique constraint / partial unique index on active rows."""
    pass


class NotNullConstraintError(ConstraintViolationError):
    pass


class ForeignKeyConstraintError(ConstraintViolationError):
    pass


class CheckConstraintError(ConstraintViolationError):
    pass


class UnknownIntegrityError(ConstraintViolationError):
    pass


# =================================================================================================================
# Postgres error code mapping
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_EXCEPTION_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION: UniqueConstraintError,
    PostgresErrorCodes.NOT_NULL_VIOLATION: NotNullConstraintError,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION: ForeignKeyConstraintError,
    PostgresErrorCodes.CHECK_VIOLATION: CheckConstraintError,
}

_MESSAGE_KEYWORDS: list[tuple[Type[ConstraintViolationError], tuple[str, ...]]] = [
    (UniqueConstraintError, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (NotNullConstraintError, ("not null constraint", "not null", "null value in column")),
    (ForeignKeyConstraintError, ("foreign key constraint", "foreign key", "is not present in table")),
    (CheckConstraintError, ("check constraint", "check failed")),
]


# =================================================================================================================
# Classifiers
# =================================================================================================================

def _pgcode_of(orig) -> str | None:
    # psycopg exposes `pgcode`; asyncpg (wrapped by SQLAlchemy) exposes `sqlstate`
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _classify_from_postgres_diag(orig) -> tuple[Type[ConstraintViolationError] | None, str | None]:
    pgcode = _pgcode_of(orig)
    if not pgcode:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else getattr(orig, "constraint_name", None)

    try:
        exception_class = PGCODE_EXCEPTION_MAP[PostgresErrorCodes(pgcode)]
    except ValueError:
        logger.warning(
            "Unknown Postgres integrity error code encountered",
            extra={"pgcode": pgcode, "constraint_name": constraint_name},
        )
        return UnknownIntegrityError, constraint_name

    logger.debug("Postgres integrity diagnostic", extra={"pgcode": pgcode, "constraint_name": constraint_name})
    return exception_class, constraint_name


def _classify_from_generic_message(msg: str) -> tuple[Type[ConstraintViolationError], None]:
    """
    Fallback for SQLite and drivers without SQLSTATE codes.
    """
    normalized = (msg or "").lower()
    for exception_class, keywords in _MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return exception_class, None

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": normalized[:200]})
    return UnknownIntegrityError, None


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolationError], str | None]:
    """
    Classify a SQLAlchemy IntegrityError into a ConstraintViolationError subclass.

    Returns:
        (ExceptionClass, constraint_name or None)
    """
    orig = exc.orig
    exception_class, constraint_name = _classify_from_postgres_diag(orig)
    if exception_class is not None:
        return exception_class, constraint_name
    return _classify_from_generic_message(str(orig) if orig is not None else str(exc))
