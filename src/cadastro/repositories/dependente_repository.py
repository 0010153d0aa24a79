"""
Dependent-specific queries on top of the generic repository.
"""

from sqlalchemy.engine import ScalarResult

from ..models.dependente import Dependente
from .base_repository import EntityRepository


class DependenteRepository(EntityRepository[Dependente]):
    """
    Repository for Dependente.

    Inherits every generic operation and its constructor; adds the per-member listing
    used when a member's record is opened. Built through the registry:

        repo = get_descriptor("dependente").repository(db)
    """

    async def find_by_associado(self, associado_id: int, *, only_active: bool = True) -> ScalarResult[Dependente]:
        """Dependents of one member, active only unless `only_active=False`."""
        filters = {"associado_id": associado_id}
        if only_active:
            return await self.find_active(filters)
        return await self.filtered_find(filters)
