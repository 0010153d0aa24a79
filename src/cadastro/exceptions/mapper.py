"""
Map SQL-level errors to app-level errors.

Two levels, as in integrity_classifier.py:
    - internal labels (UniqueConstraintError, NotNullConstraintError, ...) describe what
      the database rejected;
    - public errors (DuplicateError, StorageUnavailableError, RepositoryError) are what
      repository callers catch.

| Constraint-level (internal) | → | App-level (external)                              |
| --------------------------- | - | ------------------------------------------------- |
| `UniqueConstraintError`     | → | `DuplicateError` (reason "duplicate")             |
| `NotNullConstraintError`    | → | `ValidationFailure` (reason "required")           |
| `ForeignKeyConstraintError` | → | `RepositoryError("... referenced record ...")`    |
| `CheckConstraintError`      | → | `RepositoryError("... business rule ...")`        |
| timeouts / lost connections | → | `StorageUnavailableError` (retryable)             |
"""
import re
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
    CheckConstraintError,
)
from .base import (
    DuplicateError,
    FailureReason,
    RepositoryError,
    StorageUnavailableError,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

# Errors that mean "the backend could not answer", not "the request was wrong".
_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError, TimeoutError)

# -----------------------
# Column extraction helpers
# -----------------------

_COLUMN_PATTERNS = (
    # Postgres: 'null value in column "nome" of relation ...'
    re.compile(r'null value in column "(?P<cols>[^"]+)"', re.IGNORECASE),
    # Postgres: 'DETAIL:  Key (cpf_cnpj)=(12345678900) already exists.'
    re.compile(r'key \((?P<cols>[^)]+)\)=', re.IGNORECASE),
    # SQLite: 'UNIQUE constraint failed: associado.cpf_cnpj'
    re.compile(r'UNIQUE constraint failed: (?P<cols>.+)$', re.IGNORECASE),
    # SQLite: 'NOT NULL constraint failed: associado.nome'
    re.compile(r'NOT NULL constraint failed: (?P<cols>.+)$', re.IGNORECASE),
)


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of column names from the DB message (Postgres, SQLite).
    """
    msg = str(exc.orig) if exc.orig is not None else str(exc)
    for pattern in _COLUMN_PATTERNS:
        m = pattern.search(msg)
        if m:
            return [c.split(".")[-1].strip().strip('"') for c in re.split(r",\s*", m.group("cols"))]
    return None


# -----------------------
# Mapper
# -----------------------

def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> None:
    """
    Map a SQLAlchemy IntegrityError to an app-level exception and raise it.
    """
    exc_cls, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"
    field = ",".join(columns) if columns else (constraint_name or "")

    if exc_cls is UniqueConstraintError:
        # expected when two writers race past the validator's uniqueness check
        logger.info(
            "mapper.duplicate_detected",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        raise DuplicateError(
            field, detail=f"{model_part} already has an active record with this value", constraint=constraint_name
        ) from exc

    if exc_cls is NotNullConstraintError:
        logger.info(
            "mapper.not_null_violation",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        raise ValidationFailure(
            field, FailureReason.REQUIRED, detail=f"{model_part} column may not be null", constraint=constraint_name
        ) from exc

    if exc_cls is ForeignKeyConstraintError:
        logger.info(
            "mapper.foreign_key_violation",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        raise RepositoryError(
            f"{model_part} referenced record not found", fields=columns, constraint=constraint_name
        ) from exc

    if exc_cls is CheckConstraintError:
        logger.debug(
            "mapper.check_constraint_failure",
            extra={"model": model_part, "raw": str(exc.orig), "constraint": constraint_name},
        )
        raise RepositoryError(
            f"{model_part} business rule violated (check constraint).", constraint=constraint_name
        ) from exc

    logger.warning("mapper.unknown_integrity_error", extra={"model": model_part, "constraint": constraint_name})
    raise RepositoryError(f"{model_part} database integrity error.") from exc


def is_storage_unavailable(exc: BaseException) -> bool:
    if isinstance(exc, _UNAVAILABLE_ERRORS):
        return True
    return isinstance(exc, DBAPIError) and bool(exc.connection_invalidated)


async def _rollback_quietly(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("Failed to rollback session", extra={"model": model_name})


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None) -> AsyncIterator[None]:
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__):
            ... DB ops that may raise ...

    App-level errors raised inside the block pass through untouched. Anything else
    rolls the session back and is re-raised as a mapped app-level error.
    asyncio.CancelledError is a BaseException and is never intercepted.
    """
    try:
        yield
    except RepositoryError:
        raise
    except IntegrityError as exc:
        await _rollback_quietly(db, model_name)
        raise_mapped_integrity_error(exc, model_name)
    except Exception as exc:
        await _rollback_quietly(db, model_name)
        if is_storage_unavailable(exc):
            logger.warning(
                "db.storage_unavailable",
                extra={"model": model_name, "error_type": type(exc).__name__},
            )
            raise StorageUnavailableError(f"Storage unavailable while operating on {model_name or 'database'}") from exc

        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}") from exc
