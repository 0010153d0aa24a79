"""
Declarative base, shared audit columns and the active-only uniqueness helper.

Every entity table carries the same five audit columns plus an integer `id`.
Records are never deleted: `ativo=False` is the only "deleted" state, and uniqueness
is enforced only among active rows through partial unique indexes.
"""

from datetime import datetime
from typing import Mapping

from sqlalchemy import Boolean, DateTime, Index, Integer, String, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    pass


# Naming convention for constraints and indexes
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}


AUDIT_COLUMNS = frozenset({"ativo", "created_by", "created_at", "updated_by", "updated_at"})
IDENTITY_COLUMN = "id"


class AuditMixin:
    """
    Identity and audit columns present on every entity.

    - created_at: set once by the database on insert
    - updated_at: set on insert and refreshed by every update/toggle
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Soft-delete flag; toggled, never removed
    ativo: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    created_by: Mapped[str] = mapped_column(String(100), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    updated_by: Mapped[str | None] = mapped_column(String(100), nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id!r}, ativo={self.ativo!r})>"


def active_unique_indexes(table_name: str, fields: Mapping) -> tuple[Index, ...]:
    """
    Build one partial unique index per `unique` field of a schema, restricted to active rows.

    This is what closes the race between the validator's uniqueness query and the
    insert: two writers can both pass the check, but only one row can land.
    """
    return tuple(
        Index(
            f"uq_{table_name}_{name}_ativo",
            name,
            unique=True,
            postgresql_where=text("ativo"),
            sqlite_where=text("ativo = 1"),
        )
        for name, descriptor in fields.items()
        if descriptor.unique
    )
