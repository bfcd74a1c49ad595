"""SQLModel implementation of the cost category repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...constants.categories import DEFAULT_COST_CATEGORIES
from ...models.category import CostCategory


class SQLModelCostCategoryRepository:
    """SQLModel-based cost category repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_name(self, name: str, *, dealer_id: str) -> Optional[CostCategory]:
        """Retrieve a category by name."""
        with self.session_factory() as session:
            statement = select(CostCategory).where(
                CostCategory.name == name, CostCategory.dealer_id == dealer_id
            )
            return session.exec(statement).first()

    def list_all(self, *, dealer_id: str) -> list[CostCategory]:
        """List all categories."""
        with self.session_factory() as session:
            statement = (
                select(CostCategory)
                .where(CostCategory.dealer_id == dealer_id)
                .order_by(CostCategory.name)  # type: ignore
            )
            return list(session.exec(statement).all())

    def create(self, category: CostCategory, *, dealer_id: str) -> CostCategory:
        """Create a new category."""
        with self.session_factory() as session:
            category.dealer_id = dealer_id
            session.add(category)
            session.commit()
            session.refresh(category)
            return category

    def ensure_defaults(self, *, dealer_id: str) -> list[CostCategory]:
        """Seed the default categories when the dealer has none."""
        existing = self.list_all(dealer_id=dealer_id)
        if existing:
            return existing
        with self.session_factory() as session:
            for entry in DEFAULT_COST_CATEGORIES:
                session.add(CostCategory(dealer_id=dealer_id, is_default=True, **entry))
            session.commit()
        return self.list_all(dealer_id=dealer_id)
