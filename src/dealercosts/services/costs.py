"""Cost entry: validation, VAT derivation and persistence of cost records."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Optional

from ..domain.repositories.cost import CostRepository
from ..logging_config import get_logger
from ..models.cost import VAT_RATE, CostFrequency, CostRecord, CostStatus, CostType
from .proration import coerce_enum, parse_record_date

logger = get_logger(__name__)


class CostValidationError(ValueError):
    """Raised when submitted cost data cannot be stored."""


def round_currency(amount: float) -> float:
    """Round to pence."""
    return round(amount, 2)


def calculate_vat(amount: float, has_vat: bool) -> tuple[float, float]:
    """Return ``(vat_amount, total_amount)`` for a base amount."""

    vat = round_currency(amount * VAT_RATE) if has_vat else 0.0
    return vat, round_currency(amount + vat)


def _parse_amount(raw: Any) -> float:
    try:
        amount = float(raw)
    except (TypeError, ValueError) as exc:
        raise CostValidationError(f"Amount must be a number, got {raw!r}") from exc
    if not math.isfinite(amount) or amount <= 0:
        raise CostValidationError("Amount must be greater than zero")
    return round_currency(amount)


def _parse_optional_date(raw: Any, field_name: str) -> Optional[date]:
    parsed = parse_record_date(raw)
    if parsed is None:
        return None
    if not isinstance(parsed, datetime):
        raise CostValidationError(f"{field_name} is not a valid date: {raw!r}")
    return parsed.date()


def build_cost(
    *,
    description: str,
    amount: Any,
    category: str,
    cost_type: CostType | str,
    frequency: CostFrequency | str | None = None,
    has_vat: bool = False,
    start_date: Any = None,
    end_date: Any = None,
    due_date: Any = None,
    notes: Optional[str] = None,
    payment_method: Optional[str] = None,
    status: CostStatus | str = CostStatus.ACTIVE,
) -> CostRecord:
    """Validate submitted fields and return an unsaved :class:`CostRecord`.

    Raises:
        CostValidationError: on missing required fields, a non-positive amount,
            an unknown enum value, a frequency on a one-off cost (or none on a
            recurring cost), or a validity interval that ends before it starts.
    """

    description = (description or "").strip()
    category = (category or "").strip()
    if not description or not category:
        raise CostValidationError("Missing required fields: description and category")

    parsed_type = coerce_enum(CostType, cost_type)
    if parsed_type is None:
        raise CostValidationError(f"Unknown cost type: {cost_type!r}")

    parsed_frequency = coerce_enum(CostFrequency, frequency) if frequency else None
    if frequency and parsed_frequency is None:
        raise CostValidationError(f"Unknown frequency: {frequency!r}")
    if parsed_type is CostType.RECURRING and parsed_frequency is None:
        raise CostValidationError("Recurring costs need a frequency")
    if parsed_type is not CostType.RECURRING and parsed_frequency is not None:
        raise CostValidationError("Only recurring costs can have a frequency")

    parsed_status = coerce_enum(CostStatus, status)
    if parsed_status is None:
        raise CostValidationError(f"Unknown status: {status!r}")

    start = _parse_optional_date(start_date, "start_date")
    end = _parse_optional_date(end_date, "end_date")
    if start and end and start > end:
        raise CostValidationError("start_date must not be after end_date")

    return CostRecord(
        description=description,
        amount=_parse_amount(amount),
        has_vat=bool(has_vat),
        cost_type=parsed_type.value,
        frequency=parsed_frequency.value if parsed_frequency else None,
        category=category,
        start_date=start,
        end_date=end,
        due_date=_parse_optional_date(due_date, "due_date"),
        status=parsed_status.value,
        notes=(notes or None),
        payment_method=(payment_method or None),
    )


def save_cost(
    repo: CostRepository,
    *,
    dealer_id: str,
    existing: CostRecord | None = None,
    **fields: Any,
) -> CostRecord:
    """Centralize cost creation/update.

    ``fields`` are the keyword arguments of :func:`build_cost`. When
    ``existing`` is given its id is kept and the row is updated in place.
    """

    cost = build_cost(**fields)
    if existing is not None and existing.id is not None:
        cost.id = existing.id
        cost.created_at = existing.created_at
        cost.is_paid = existing.is_paid
        cost.paid_date = existing.paid_date
        saved = repo.update(cost, dealer_id=dealer_id)
        logger.info("Updated cost", extra={"cost_id": saved.id, "dealer_id": dealer_id})
        return saved

    saved = repo.create(cost, dealer_id=dealer_id)
    logger.info(
        "Created cost",
        extra={"cost_id": saved.id, "dealer_id": dealer_id, "total_amount": saved.total_amount},
    )
    return saved
