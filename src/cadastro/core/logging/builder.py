# src/cadastro/core/logging/builder.py
"""
Logging builder: assemble a dictConfig mapping from Settings and apply it.

  - make_dict_config(settings): pure, returns the mapping (easy to assert on in tests)
  - setup_logging(settings): creates LOG_DIR when file logging is on, applies the config
    and installs ActorFilter on the root logger as a safety net for `%(actor)s`.

Handler selection:
| LOG_TO_STDOUT | LOG_DIR set | Active handlers              |
| ------------- | ----------- | ---------------------------- |
| true          | any         | console + error_console      |
| false         | no          | console + error_console      |
| false         | yes         | console + file + error_file  |
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config

from cadastro.utils.logging import get_project_name
from cadastro.config.settings import Settings

from .formatters import JsonFormatter, ColorFormatter
from .filters import ActorFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)


def _file_logging_enabled(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping.

    Includes formatters ("standard", "json"), filters ("actor", "redact"), the handlers
    chosen by `_file_logging_enabled`, and loggers for root and sqlalchemy.engine.
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "fmt": "%(asctime)s | %(levelname)s | %(name)s | %(actor)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "actor": {"()": ActorFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _file_logging_enabled(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            # SQL echo can contain CPF values in bound parameters; keep it opt-in
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging from settings. Safe to call more than once (dictConfig replaces
    the previous handlers).
    """
    if _file_logging_enabled(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    root = logging.getLogger()
    if not any(isinstance(f, ActorFilter) for f in root.filters):
        root.addFilter(ActorFilter())
