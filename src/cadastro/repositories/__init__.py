"""
Repository layer.

Usage:
    from cadastro.repositories import EntityRepository, DependenteRepository
"""

from .base_repository import EntityRepository
from .dependente_repository import DependenteRepository

__all__ = [
    "EntityRepository",
    "DependenteRepository",
]
