# cadastro/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # App-level errors (ValidationFailure, NotFoundError, ...)
# │   ├── integrity_classifier.py    # SQL-level / DB-specific errors
# │   └── mapper.py                  # Map SQL-level errors to app-level errors + db_error_handler

from .base import (
    FailureReason,
    RepositoryError,
    ValidationFailure,
    DuplicateError,
    NotFoundError,
    InvalidFilterError,
    InvalidFieldError,
    StorageUnavailableError,
)

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
