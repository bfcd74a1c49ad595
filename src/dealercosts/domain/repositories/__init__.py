"""Repository protocol definitions for domain layer."""

from .category import CostCategoryRepository
from .cost import CostRepository

__all__ = [
    "CostCategoryRepository",
    "CostRepository",
]
