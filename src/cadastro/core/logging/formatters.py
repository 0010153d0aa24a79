# src/cadastro/core/logging/formatters.py
"""
Custom logging formatters.

  - JsonFormatter: one JSON object per line, for log collectors. Carries service, env,
    version and the acting operator, plus any `extra` attached to the record.

  - ColorFormatter: compact ANSI-colored lines for a developer terminal.

The builder (dictConfig) picks one of them from `settings.LOG_FORMAT`.
"""

import json
import logging
from typing import Any
from logging import LogRecord
from cadastro.utils.logging import get_project_version

PROJECT_VERSION = get_project_version()

# LogRecord attributes that are not user-supplied extras
_RESERVED = set(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "actor"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    - Base fields: timestamp, level, logger, message, pathname, lineno.
    - Observability fields: service, env, version, actor.
    - exc_info / stack_info when present.
    - Extras (`logger.info("...", extra={...})`); values that json cannot encode are
      stringified so formatting never raises.
    """

    def __init__(self, *, env: str | None = None, service: str = "cadastro-core", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "actor": getattr(record, "actor", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED or key in log_record or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                log_record[key] = value
            except (TypeError, ValueError):
                log_record[key] = str(value)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Development-friendly colored formatter: TIMESTAMP | LEVEL | LOGGER | ACTOR | MESSAGE.
    """

    COLOR_CODES = {
        "DEBUG": "\033[36m",       # cyan
        "INFO": "\033[32m",        # green
        "WARNING": "\033[33m",     # yellow
        "ERROR": "\033[31m",       # red
        "CRITICAL": "\033[1;41m",  # bold on red
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        line = (
            f"{self.formatTime(record, self.datefmt)} | "
            f"{color}{record.levelname:<8}{reset} | "
            f"{record.name} | "
            f"{getattr(record, 'actor', '-')} | "
            f"{record.getMessage()}"
        )
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line
