"""SQLModel table exports."""

from .category import CostCategory
from .cost import CostFrequency, CostRecord, CostStatus, CostType, VAT_RATE, clamp_currency

__all__ = [
    "CostCategory",
    "CostFrequency",
    "CostRecord",
    "CostStatus",
    "CostType",
    "VAT_RATE",
    "clamp_currency",
]
