"""Concrete repository implementations using SQLModel."""

from .category import SQLModelCostCategoryRepository
from .cost import SQLModelCostRepository

__all__ = [
    "SQLModelCostCategoryRepository",
    "SQLModelCostRepository",
]
