"""Pytest configuration and shared fixtures for DealerCosts tests.

This module provides database fixtures, cost record factories, and helper utilities
for testing the projection engine, repositories, and services without touching the
real application database.
"""

from __future__ import annotations

import tempfile
from datetime import date, datetime
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from dealercosts.infra.database import create_session_factory
from dealercosts.models import CostCategory, CostRecord  # noqa: F401 - registers tables

DEALER_ID = "dealer-test"

# Fixed reference instant used by projection tests: windows run
# 2024-01-01 00:00 -> 2024-04-01 23:59:59.999999 (92 days) and
# 2024-01-01 00:00 -> 2025-01-01 23:59:59.999999 (367 days).
REFERENCE_NOW = datetime(2024, 1, 1, 9, 30)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what repositories expect (Callable -> context manager)."""

    return create_session_factory(db_engine)


@pytest.fixture
def dealer_id() -> str:
    return DEALER_ID


@pytest.fixture
def reference_now() -> datetime:
    return REFERENCE_NOW


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def cost_factory():
    """Factory for unsaved cost records with sensible defaults.

    Returns:
        Callable: Function that builds CostRecord instances
    """

    counter = {"next_id": 1}

    def _create_cost(
        amount: float = 100.0,
        *,
        description: str | None = None,
        cost_type: str = "recurring",
        frequency: str | None = "monthly",
        has_vat: bool = False,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
        due_date: date | None = None,
        status: str = "active",
        category: str = "Other",
        notes: str | None = None,
        with_id: bool = True,
    ) -> CostRecord:
        """Build a cost record.

        Args:
            amount: Base amount before VAT
            cost_type: recurring | one_time | miscellaneous
            frequency: weekly | monthly | quarterly | annual | None
            with_id: Assign a sequential id (as if loaded from the database)

        Returns:
            CostRecord: Unsaved record
        """
        cost_id = None
        if with_id:
            cost_id = counter["next_id"]
            counter["next_id"] += 1
        return CostRecord(
            id=cost_id,
            dealer_id=DEALER_ID,
            description=description or f"Cost {cost_id or 'new'}",
            amount=amount,
            has_vat=has_vat,
            cost_type=cost_type,
            frequency=frequency,
            category=category,
            start_date=start_date,
            end_date=end_date,
            due_date=due_date,
            status=status,
            notes=notes,
        )

    return _create_cost


# =============================================================================
# Helpers
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Value produced by the code under test
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 penny)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert abs(actual - expected) < tolerance, (
        f"Expected {expected}, got {actual} (diff {abs(actual - expected)})"
    )
