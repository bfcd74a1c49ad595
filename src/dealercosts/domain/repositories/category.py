"""Cost category repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.category import CostCategory


class CostCategoryRepository(Protocol):
    """Repository for managing cost categories."""

    def get_by_name(self, name: str, *, dealer_id: str) -> Optional[CostCategory]:
        """Retrieve a category by name."""
        ...

    def list_all(self, *, dealer_id: str) -> list[CostCategory]:
        """List all categories."""
        ...

    def create(self, category: CostCategory, *, dealer_id: str) -> CostCategory:
        """Create a new category."""
        ...

    def ensure_defaults(self, *, dealer_id: str) -> list[CostCategory]:
        """Seed the default categories when the dealer has none."""
        ...
