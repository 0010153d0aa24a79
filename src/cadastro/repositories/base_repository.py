"""
Generic repository shared by every entity.

One class, parameterized by an ORM model and the entity's column set, covers filtered
lookup, lookup by id, insert, update and soft activation/deactivation. There is no
hand-written per-entity query code: entities differ only in their EntityDescriptor
(see `entities/registry.py`).

Records are never deleted. `ativo` is the soft-delete flag and `toggle_active` is the
only way to change it.

Like the rest of the data layer, methods `flush()` and `refresh()` but never `commit()`:
the unit of work belongs to the caller (see `database.session.session_scope`).
"""
import logging
import time
from typing import Any, Generic, Iterable, Mapping, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.engine import ScalarResult
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from ..database.base import AUDIT_COLUMNS, IDENTITY_COLUMN, Base
from ..exceptions import InvalidFieldError, InvalidFilterError, NotFoundError
from ..exceptions.mapper import db_error_handler
from ..validators.column_validators import find_managed_keys, find_unknown_keys
from ..validators.normalizers import Normalizer, apply_normalizers

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class EntityRepository(Generic[ModelType]):
    """
    Generic CRUD repository over a single entity type.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.

    Column names coming from callers (filter keys, payload keys) are checked against
    `columns` before any SQL is built. Only `writable` columns may be set through
    `insert`/`update`; `id` and the audit columns are managed here.
    """

    def __init__(
        self,
        model: Type[ModelType],
        db: AsyncSession,
        *,
        columns: Iterable[str] | None = None,
        writable: Iterable[str] | None = None,
        normalizers: Mapping[str, Normalizer] | None = None,
    ):
        """
        Args:
            model: The SQLAlchemy model class (not an instance), e.g. Associado.
            db: The async database session; the repository holds nothing else.
            columns: Every column a filter may reference. Defaults to the table's columns.
            writable: Columns a payload may set. Defaults to `columns` minus id/audit.
            normalizers: Per-field hooks applied before insert/update.
        """
        self.model = model
        self.db = db
        if columns is None:
            columns = (column.name for column in model.__table__.columns)
        self.columns = frozenset(columns)
        if writable is None:
            writable = self.columns - AUDIT_COLUMNS - {IDENTITY_COLUMN}
        self.writable = frozenset(writable)
        self.normalizers = dict(normalizers or {})

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # =================================================================================================================
    # Column whitelisting
    # =================================================================================================================

    def _check_filter_keys(self, filters: Mapping[str, Any], operation: str) -> None:
        unknown = find_unknown_keys(self.columns, filters)
        if unknown:
            # INFO: client-level error; expected input problem -> no stack trace
            logger.info(
                "repo.filter.invalid_keys",
                extra={"model": self.model_name, "operation": operation, "invalid_keys": sorted(unknown)},
            )
            raise InvalidFilterError(
                f"Unknown filter key(s) for {self.model_name}: {', '.join(unknown)}", keys=unknown
            )

    def _prepare_payload(self, payload: Mapping[str, Any], operation: str) -> dict[str, Any]:
        """
        Reject unknown and managed keys, then run the normalization hooks.
        """
        unknown = find_unknown_keys(self.columns, payload)
        managed = find_managed_keys(self.columns - self.writable, payload)
        rejected = unknown + managed
        if rejected:
            logger.info(
                "repo.payload.invalid_fields",
                extra={"model": self.model_name, "operation": operation, "invalid_fields": sorted(rejected)},
            )
            raise InvalidFieldError(
                f"Field(s) not writable on {self.model_name}: {', '.join(rejected)}", fields=rejected
            )
        return apply_normalizers(payload, self.normalizers)

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def filtered_find(self, filters: Mapping[str, Any] | None = None) -> ScalarResult[ModelType]:
        """
        Find every record whose columns equal all the given values.

        Args:
            filters: column name -> value, combined with AND. An empty mapping matches
                every record, active or not. A None value matches NULL.

        Returns:
            A single-pass result of model instances, ordered by id. It may be empty.

        Raises:
            InvalidFilterError: a key is not a column of this entity.
            StorageUnavailableError: the backend could not answer.
        """
        filters = dict(filters or {})
        self._check_filter_keys(filters, "filtered_find")

        logger.debug(
            "repo.filtered_find.start",
            extra={"model": self.model_name, "operation": "filtered_find", "filter_keys": sorted(filters)},
        )
        start = time.perf_counter()

        async with db_error_handler(self.db, self.model_name):
            # Example: SELECT * FROM dependente WHERE associado_id = :a AND ativo = true ORDER BY id
            query = select(self.model).filter_by(**filters).order_by(self.model.id)
            result = await self.db.execute(query)

            logger.debug(
                "repo.filtered_find.success",
                extra={"model": self.model_name, "operation": "filtered_find", "duration_ms": _elapsed_ms(start)},
            )
            return result.scalars()

    async def find_active(self, filters: Mapping[str, Any] | None = None) -> ScalarResult[ModelType]:
        """
        `filtered_find` restricted to active records. A caller-supplied `ativo` is overridden.
        """
        return await self.filtered_find({**(filters or {}), "ativo": True})

    async def find_by_id(self, record_id: Any) -> ModelType:
        """
        Get a record by id, active or inactive.

        Raises:
            NotFoundError: no record has this id.
        """
        async with db_error_handler(self.db, self.model_name):
            entity = await self.db.get(self.model, record_id)

        if entity is None:
            logger.info(
                "repo.find_by_id.not_found",
                extra={"model": self.model_name, "operation": "find_by_id", "id": record_id},
            )
            raise NotFoundError(f"{self.model_name} with id {record_id} not found", record_id=record_id)
        return entity

    async def has_active_duplicate(self, field: str, value: Any, exclude_id: Any = None) -> bool:
        """
        True when another *active* record holds `value` in `field`.

        The value goes through the field's normalization hook first, so it is compared in
        the form it would be stored in. `exclude_id` leaves the record being updated out.
        """
        self._check_filter_keys({field: value}, "has_active_duplicate")
        normalize = self.normalizers.get(field)
        if normalize is not None:
            value = normalize(value)

        async with db_error_handler(self.db, self.model_name):
            column = getattr(self.model, field)
            query = select(self.model.id).where(column == value, self.model.ativo.is_(True))
            if exclude_id is not None:
                query = query.where(self.model.id != exclude_id)
            result = await self.db.execute(query.limit(1))
            return result.scalar_one_or_none() is not None

    # =================================================================================================================
    # Write Operations
    # =================================================================================================================

    async def insert(self, payload: Mapping[str, Any], actor: str) -> ModelType:
        """
        Persist a new active record.

        Logging:
        - DEBUG: start event with the provided keys (never values).
        - INFO: expected client errors (invalid fields, duplicate via storage).
        - INFO: success event with created id and duration_ms.

        Raises:
            InvalidFieldError: the payload names unknown or managed columns.
            DuplicateError: another active record holds a unique value (storage-level check).
            StorageUnavailableError: the backend could not answer.
        """
        logger.debug(
            "repo.insert.start",
            extra={"model": self.model_name, "operation": "insert", "provided_keys": sorted(payload)},
        )
        data = self._prepare_payload(payload, "insert")
        start = time.perf_counter()

        async with db_error_handler(self.db, self.model_name):
            entity = self.model(**data, ativo=True, created_by=actor)
            self.db.add(entity)
            # flush for the generated id, refresh for the server-side timestamps
            await self.db.flush()
            await self.db.refresh(entity)

            logger.info(
                "repo.insert.success",
                extra={
                    "model": self.model_name,
                    "operation": "insert",
                    "id": entity.id,
                    "duration_ms": _elapsed_ms(start),
                },
            )
            return entity

    async def update(self, record_id: Any, payload: Mapping[str, Any], actor: str) -> ModelType:
        """
        Overlay the given fields on an existing record.

        Fields absent from `payload` keep their stored value; a field explicitly set to
        None is cleared. `ativo` is not writable here, use `toggle_active`.

        Raises:
            NotFoundError: no record has this id.
            InvalidFieldError: the payload names unknown or managed columns.
            DuplicateError: the new values collide with another active record.
        """
        logger.debug(
            "repo.update.start",
            extra={"model": self.model_name, "operation": "update", "id": record_id, "provided_keys": sorted(payload)},
        )
        data = self._prepare_payload(payload, "update")
        start = time.perf_counter()

        async with db_error_handler(self.db, self.model_name):
            entity = await self.db.get(self.model, record_id)
            if entity is None:
                logger.info(
                    "repo.update.not_found",
                    extra={"model": self.model_name, "operation": "update", "id": record_id},
                )
                raise NotFoundError(f"{self.model_name} with id {record_id} not found", record_id=record_id)

            for key, value in data.items():
                setattr(entity, key, value)
            entity.updated_by = actor
            entity.updated_at = func.now()

            await self.db.flush()
            await self.db.refresh(entity)

            logger.info(
                "repo.update.success",
                extra={
                    "model": self.model_name,
                    "operation": "update",
                    "id": record_id,
                    "updated_keys": sorted(data),
                    "duration_ms": _elapsed_ms(start),
                },
            )
            return entity

    async def toggle_active(self, record_id: Any, actor: str) -> ModelType:
        """
        Flip `ativo` on a record and stamp who did it.

        Reactivating a record whose unique value is now held by another active record
        raises DuplicateError (enforced by the partial unique indexes).

        Raises:
            NotFoundError: no record has this id.
        """
        start = time.perf_counter()

        async with db_error_handler(self.db, self.model_name):
            entity = await self.db.get(self.model, record_id)
            if entity is None:
                logger.info(
                    "repo.toggle_active.not_found",
                    extra={"model": self.model_name, "operation": "toggle_active", "id": record_id},
                )
                raise NotFoundError(f"{self.model_name} with id {record_id} not found", record_id=record_id)

            entity.ativo = not entity.ativo
            entity.updated_by = actor
            entity.updated_at = func.now()

            await self.db.flush()
            await self.db.refresh(entity)

            logger.info(
                "repo.toggle_active.success",
                extra={
                    "model": self.model_name,
                    "operation": "toggle_active",
                    "id": record_id,
                    "ativo": entity.ativo,
                    "duration_ms": _elapsed_ms(start),
                },
            )
            return entity
