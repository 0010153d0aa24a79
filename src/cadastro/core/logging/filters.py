# src/cadastro/core/logging/filters.py
"""
Logging filters

Actor filter and helpers for logging.

Every write in this system is stamped with the operator that performed it
(`created_by` / `updated_by`). The same identity is useful on log lines, so that
"who inserted this associado" can be answered from the logs as well as from the row.

- The acting operator is kept in a `contextvars.ContextVar`, which survives `await`
  boundaries and stays isolated between concurrent requests sharing one event loop.
- `ActorFilter` copies it onto each `LogRecord` as `record.actor` ("-" when unset) so
  formatters can reference `%(actor)s` without KeyError.
- `RedactFilter` masks personal identifiers (CPF, CNPJ, RG) passed through `extra`.

Usage:
    with acting_as("MARIA"):
        await repository.insert(payload, actor="MARIA")   # logs carry actor=MARIA
"""

import logging
from logging import LogRecord
import contextvars
from contextlib import contextmanager
from typing import Iterator

_actor_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "actor", default=None
)


def set_actor(actor: str | None) -> contextvars.Token:
    """
    Set the acting operator for the current context and return the reset token.
    """
    return _actor_ctx.set(actor)


def reset_actor(token: contextvars.Token) -> None:
    _actor_ctx.reset(token)


def get_actor() -> str | None:
    return _actor_ctx.get()


@contextmanager
def acting_as(actor: str | None) -> Iterator[None]:
    """
    Scope the acting operator to a block; the previous value is restored on exit.
    """
    token = set_actor(actor)
    try:
        yield
    finally:
        reset_actor(token)


class ActorFilter(logging.Filter):
    """
    Stamp `record.actor` on every record.

    Precedence: an explicit `extra={"actor": ...}`, then the contextvar, then "-".
    Always returns True; this filter only annotates.
    """

    def filter(self, record: LogRecord) -> bool:
        record.actor = getattr(record, "actor", None) or get_actor() or "-"
        return True


class RedactFilter(logging.Filter):
    """
    Mask sensitive attributes attached to a record via `extra`.

    Only attribute names are matched, so callers should log keys, not payloads.
    """

    SENSITIVE = {"cpf", "cpf_cnpj", "rg"}
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
