"""
Entity service: validator + repository, composed the same way for every entity.

    service = EntityService(get_descriptor("associado"), db)
    associado = await service.create(payload, actor="MARIA")

Writes run inside `acting_as(actor)` so every log line they emit carries the operator.
Nothing here commits; wrap calls in `session_scope()` (or commit yourself).
"""
import logging
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings, get_settings
from ..core.logging import acting_as
from ..entities.registry import EntityDescriptor
from ..exceptions import NotFoundError, ValidationFailure
from ..validators.field_validator import validate_payload

logger = logging.getLogger(__name__)


class EntityService:
    def __init__(self, descriptor: EntityDescriptor, db: AsyncSession, *, settings: Settings | None = None):
        self.descriptor = descriptor
        self.settings = settings or get_settings()
        self.repository = descriptor.repository(db)

    def _actor(self, actor: str | None) -> str:
        return actor or self.settings.DEFAULT_ACTOR

    def _check_not_empty(self, records: list) -> list:
        if not records and self.settings.LIST_EMPTY_AS_NOT_FOUND:
            raise NotFoundError(f"No {self.descriptor.name} matches the given filters")
        return records

    async def _validate(self, payload: Mapping[str, Any], operation: str, **kwargs) -> dict[str, Any]:
        try:
            return await validate_payload(payload, self.descriptor.fields, self.repository, **kwargs)
        except ValidationFailure as exc:
            logger.info(
                "service.validation_failed",
                extra={
                    "entity": self.descriptor.name,
                    "operation": operation,
                    "field": exc.field,
                    "reason": exc.reason.value,
                },
            )
            raise

    # --- Reads ---

    async def list_all(self, filters: Mapping[str, Any] | None = None) -> list:
        """Every record matching `filters`, active or not."""
        records = list(await self.repository.filtered_find(filters))
        return self._check_not_empty(records)

    async def list_active(self, filters: Mapping[str, Any] | None = None) -> list:
        records = list(await self.repository.find_active(filters))
        return self._check_not_empty(records)

    async def get(self, record_id: Any):
        return await self.repository.find_by_id(record_id)

    # --- Writes ---

    async def create(self, payload: Mapping[str, Any], actor: str | None = None):
        """
        Validate the full payload (defaults, required fields, uniqueness) and insert it.

        Raises:
            ValidationFailure / DuplicateError: the payload is rejected; nothing is written.
        """
        actor = self._actor(actor)
        with acting_as(actor):
            data = await self._validate(payload, "create")
            return await self.repository.insert(data, actor)

    async def update(self, record_id: Any, payload: Mapping[str, Any], actor: str | None = None):
        """
        Validate only the fields present in `payload` and overlay them on the record.

        The record itself is excluded from the uniqueness lookup, so re-sending its own
        cpf is not a duplicate.

        Raises:
            NotFoundError: checked before validation.
            ValidationFailure / DuplicateError: the payload is rejected; nothing is written.
        """
        actor = self._actor(actor)
        with acting_as(actor):
            await self.repository.find_by_id(record_id)
            data = await self._validate(payload, "update", record_id=record_id, partial=True)
            return await self.repository.update(record_id, data, actor)

    async def toggle_active(self, record_id: Any, actor: str | None = None):
        actor = self._actor(actor)
        with acting_as(actor):
            return await self.repository.toggle_active(record_id, actor)
