"""SQLModel implementation of the cost record repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from sqlmodel import Session, col, select

from ...models.cost import CostRecord


class SQLModelCostRepository:
    """SQLModel-based cost repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, cost_id: int, *, dealer_id: str) -> Optional[CostRecord]:
        """Retrieve a cost by ID."""
        with self.session_factory() as session:
            return session.exec(
                select(CostRecord).where(CostRecord.id == cost_id, CostRecord.dealer_id == dealer_id)
            ).first()

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
        with self.session_factory() as session:
            statement = select(CostRecord).where(CostRecord.dealer_id == dealer_id)
            if category:
                statement = statement.where(CostRecord.category == category)
            if status:
                statement = statement.where(CostRecord.status == status)
            if cost_type:
                statement = statement.where(CostRecord.cost_type == cost_type)
            if frequency:
                statement = statement.where(CostRecord.frequency == frequency)
            statement = statement.order_by(col(CostRecord.created_at).desc(), col(CostRecord.id).desc())
            return list(session.exec(statement).all())

    def create(self, cost: CostRecord, *, dealer_id: str) -> CostRecord:
        """Create a new cost."""
        with self.session_factory() as session:
            cost.dealer_id = dealer_id
            session.add(cost)
            session.commit()
            session.refresh(cost)
            return cost

    def update(self, cost: CostRecord, *, dealer_id: str) -> CostRecord:
        """Update an existing cost."""
        if cost.id is None:
            raise ValueError("Cannot update a cost that has not been saved")
        with self.session_factory() as session:
            existing = session.exec(
                select(CostRecord).where(CostRecord.id == cost.id, CostRecord.dealer_id == dealer_id)
            ).first()
            if existing is None:
                raise LookupError(f"Cost {cost.id} not found for dealer {dealer_id}")
            for name, value in cost.model_dump(exclude={"id", "dealer_id", "created_at"}).items():
                setattr(existing, name, value)
            existing.updated_at = datetime.now(timezone.utc)
            session.add(existing)
            session.commit()
            session.refresh(existing)
            return existing

    def delete(self, cost_id: int, *, dealer_id: str) -> None:
        """Delete a cost by ID."""
        with self.session_factory() as session:
            cost = session.exec(
                select(CostRecord).where(CostRecord.id == cost_id, CostRecord.dealer_id == dealer_id)
            ).first()
            if cost:
                session.delete(cost)
                session.commit()
