"""Cost record repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.cost import CostRecord


class CostRepository(Protocol):
    """Repository for managing dealership cost records."""

    def get_by_id(self, cost_id: int, *, dealer_id: str) -> Optional[CostRecord]:
        """Retrieve a cost by ID."""
        ...

    def list_all(
        self,
        *,
        dealer_id: str,
        category: Optional[str] = None,
        status: Optional[str] = None,
        cost_type: Optional[str] = None,
        frequency: Optional[str] = None,
    ) -> list[CostRecord]:
        """List costs, newest first, optionally filtered."""
        ...

    def create(self, cost: CostRecord, *, dealer_id: str) -> CostRecord:
        """Create a new cost."""
        ...

    def update(self, cost: CostRecord, *, dealer_id: str) -> CostRecord:
        """Update an existing cost."""
        ...

    def delete(self, cost_id: int, *, dealer_id: str) -> None:
        """Delete a cost by ID."""
        ...
