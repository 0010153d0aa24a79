from .base import Base, AuditMixin, AUDIT_COLUMNS, IDENTITY_COLUMN, active_unique_indexes

__all__ = [
    "Base",
    "AuditMixin",
    "AUDIT_COLUMNS",
    "IDENTITY_COLUMN",
    "active_unique_indexes",
]
