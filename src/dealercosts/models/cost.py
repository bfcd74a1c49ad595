"""SQLModel definitions for dealership cost records."""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Optional

from sqlmodel import Field, SQLModel

# UK VAT, applied to the base amount when a cost is VAT-able
VAT_RATE = 0.20


class CostType(str, Enum):
    """Classification deciding which projection path a record takes."""

    RECURRING = "recurring"
    ONE_TIME = "one_time"
    MISCELLANEOUS = "miscellaneous"


class CostFrequency(str, Enum):
    """Billing cadence of a recurring cost."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


class CostStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    COMPLETED = "completed"


def clamp_currency(value: Any) -> float:
    """Coerce a stored amount to a non-negative, 2-decimal float.

    Missing, non-numeric, non-finite and negative values all become ``0.0``.
    """

    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return round(amount, 2)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CostRecord(SQLModel, table=True):
    """A business cost tracked by a dealership.

    ``vat_amount`` and ``total_amount`` are derived from ``amount`` and
    ``has_vat`` on every read; they are never stored independently.
    """

    __tablename__: ClassVar[str] = "dealership_cost"

    id: Optional[int] = Field(default=None, primary_key=True)
    dealer_id: str = Field(default="default", nullable=False, index=True, max_length=64)
    description: str = Field(nullable=False, max_length=255)
    amount: float = Field(default=0.0, nullable=False, description="Base amount before VAT")
    has_vat: bool = Field(default=False, nullable=False)
    cost_type: str = Field(default=CostType.RECURRING.value, nullable=False, max_length=32)
    frequency: Optional[str] = Field(default=None, max_length=32, index=True)
    category: str = Field(default="Other", nullable=False, max_length=64, index=True)
    start_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None)
    due_date: Optional[date] = Field(default=None)
    status: str = Field(default=CostStatus.ACTIVE.value, nullable=False, max_length=32)
    notes: Optional[str] = Field(default=None)
    is_paid: bool = Field(default=False, nullable=False)
    paid_date: Optional[date] = Field(default=None)
    payment_method: Optional[str] = Field(default=None, max_length=64)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    @property
    def base_amount(self) -> float:
        return clamp_currency(self.amount)

    @property
    def vat_amount(self) -> float:
        """VAT at the fixed 20% rate, or zero for VAT-exempt costs."""
        if not self.has_vat:
            return 0.0
        return round(self.base_amount * VAT_RATE, 2)

    @property
    def total_amount(self) -> float:
        return round(self.base_amount + self.vat_amount, 2)
