"""Effective contribution of a single cost record to a projection window.

Recurring costs are amortized by frequency: the record's amount is multiplied by
the number of billing periods the window spans, rounded up. One-time and
miscellaneous costs that carry a validity interval are pro-rated by how much of
that interval overlaps the window.

Every function here is total: malformed amounts become zero, malformed dates
resolve to "no overlap", unknown frequencies fall back to the full amount.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, TypeVar

from ..logging_config import get_logger
from ..models.cost import CostFrequency, CostType, clamp_currency
from .windows import ProjectionWindow, days_between, start_of_day

logger = get_logger(__name__)

DAYS_PER_WEEK = 7
# Average Gregorian month length (365.25 / 12, rounded)
DAYS_PER_MONTH = 30.44
# Average Gregorian quarter length (365.25 / 4, rounded)
DAYS_PER_QUARTER = 91.31
# Windows at least this long bill an annual cost in full, shorter ones bill a quarter of it.
# Only the two standard windows (~92 and ~366 days) are expected on either side.
YEARLY_WINDOW_THRESHOLD_DAYS = 300
QUARTERS_PER_YEAR = 4

_E = TypeVar("_E", bound=Enum)


@dataclass(slots=True)
class ProratedInfo:
    """How a dated cost's validity interval overlapped the window."""

    overlap_days: int
    total_days: int
    percentage: float
    period_start: datetime
    period_end: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "overlap_days": self.overlap_days,
            "total_days": self.total_days,
            "percentage": self.percentage,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
        }


@dataclass(slots=True)
class EffectiveCostResult:
    """Audit line: what a record costs on its own versus inside a window."""

    record: Any
    effective_amount: float
    original_amount: float
    is_prorated: bool
    prorated_info: Optional[ProratedInfo] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": getattr(self.record, "id", None),
            "description": getattr(self.record, "description", ""),
            "effective_amount": self.effective_amount,
            "original_amount": self.original_amount,
            "is_prorated": self.is_prorated,
            "prorated_info": self.prorated_info.to_dict() if self.prorated_info else None,
        }


class _Malformed:
    """Marker for a date value that was present but could not be parsed."""


MALFORMED = _Malformed()


def coerce_enum(enum_cls: type[_E], value: Any) -> Optional[_E]:
    """Map a raw stored value onto ``enum_cls``; ``None`` when unrecognized."""

    if isinstance(value, enum_cls):
        return value
    if value is None:
        return None
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return None


def parse_record_date(value: Any) -> datetime | None | _Malformed:
    """Normalize a stored record date to midnight of that day.

    Returns ``None`` for an absent value and :data:`MALFORMED` for a value that
    is present but not a valid date.
    """

    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return start_of_day(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return start_of_day(datetime.fromisoformat(text))
        except ValueError:
            try:
                return start_of_day(date.fromisoformat(text[:10]))
            except ValueError:
                return MALFORMED
    return MALFORMED


def record_total(record: Any) -> float:
    """VAT-inclusive amount of ``record``, clamped to a non-negative value."""

    return clamp_currency(getattr(record, "total_amount", None))


def is_recurring(record: Any) -> bool:
    return coerce_enum(CostType, getattr(record, "cost_type", None)) is CostType.RECURRING


def frequency_multiplier(frequency: Optional[CostFrequency], window: ProjectionWindow) -> float:
    """Number of times a recurring charge is billed inside ``window``.

    ``None`` (an unrecognized frequency) bills once.
    """

    window_days = window.days
    if frequency is CostFrequency.WEEKLY:
        return math.ceil(window_days / DAYS_PER_WEEK)
    if frequency is CostFrequency.MONTHLY:
        return math.ceil(window_days / DAYS_PER_MONTH)
    if frequency is CostFrequency.QUARTERLY:
        return math.ceil(window_days / DAYS_PER_QUARTER)
    if frequency is CostFrequency.ANNUAL:
        if window_days >= YEARLY_WINDOW_THRESHOLD_DAYS:
            return 1
        return 1 / QUARTERS_PER_YEAR
    return 1


def recurring_effective_amount(record: Any, window: ProjectionWindow) -> float:
    """Amount a recurring record contributes to ``window``.

    The record's own validity interval is not consulted; a recurring cost is
    assumed live for the whole window.
    """

    amount = record_total(record)
    raw_frequency = getattr(record, "frequency", None)
    frequency = coerce_enum(CostFrequency, raw_frequency)
    multiplier = frequency_multiplier(frequency, window)
    effective = amount * multiplier
    if frequency is None:
        logger.debug(
            "Cost %r has unrecognized frequency %r; using full amount %.2f",
            getattr(record, "description", ""),
            raw_frequency,
            amount,
        )
    else:
        logger.debug(
            "Cost %r (%s): %s x %.2f = %.2f over %d days",
            getattr(record, "description", ""),
            frequency.value,
            multiplier,
            amount,
            effective,
            window.days,
        )
    return effective


def _validity_overlap(record: Any, window: ProjectionWindow) -> tuple[float, Optional[ProratedInfo]]:
    """Return (proportion, info) for a record carrying a validity interval.

    The interval end date is inclusive: a record that starts and ends on the
    same day inside the window overlaps it by one day. A proportion of ``0.0``
    with no info means the interval misses the window or could not be read.
    """

    start = parse_record_date(getattr(record, "start_date", None))
    end = parse_record_date(getattr(record, "end_date", None))
    if not isinstance(start, datetime) or not isinstance(end, datetime):
        return 0.0, None

    overlap_start = max(start, window.start)
    overlap_end = min(end, window.end)
    if overlap_start.date() > overlap_end.date():
        return 0.0, None

    total_days = max(1.0, days_between(start, end))
    overlap_days = max(1.0, days_between(overlap_start, overlap_end))
    proportion = overlap_days / total_days
    info = ProratedInfo(
        overlap_days=math.ceil(overlap_days),
        total_days=math.ceil(total_days),
        percentage=proportion * 100,
        period_start=overlap_start,
        period_end=overlap_end,
    )
    return proportion, info


def has_validity_interval(record: Any) -> bool:
    """True when both interval ends are present (parseable or not)."""

    start = parse_record_date(getattr(record, "start_date", None))
    end = parse_record_date(getattr(record, "end_date", None))
    return start is not None and end is not None


def dated_effective_amount(record: Any, window: ProjectionWindow) -> float:
    """Amount a one-time/miscellaneous record contributes to ``window``.

    Undated records count in full. Dated records are scaled by the share of
    their validity interval that falls inside the window.
    """

    amount = record_total(record)
    if not has_validity_interval(record):
        logger.debug(
            "Cost %r: undated one-off cost, using full amount %.2f",
            getattr(record, "description", ""),
            amount,
        )
        return amount

    proportion, info = _validity_overlap(record, window)
    if info is None:
        logger.debug("Cost %r: no overlap with window, returning 0", getattr(record, "description", ""))
        return 0.0

    effective = amount * proportion
    logger.debug(
        "Cost %r: %d of %d days overlap (%.4f), %.2f -> %.2f",
        getattr(record, "description", ""),
        info.overlap_days,
        info.total_days,
        proportion,
        amount,
        effective,
    )
    return effective


def compute_effective_amount(record: Any, window: ProjectionWindow) -> float:
    """Dispatch ``record`` to the recurring or the dated proration rule."""

    if is_recurring(record):
        return recurring_effective_amount(record, window)
    return dated_effective_amount(record, window)


def compute_effective_cost(record: Any, window: ProjectionWindow) -> EffectiveCostResult:
    """Like :func:`compute_effective_amount` but keeps the audit details.

    ``is_prorated`` is only ever set for dated one-time/miscellaneous records
    whose effective amount differs from their own total. Recurring records are
    scaled by frequency, not pro-rated, so they are never flagged even when
    they carry validity dates.
    """

    original = record_total(record)
    effective = compute_effective_amount(record, window)
    info: Optional[ProratedInfo] = None
    if not is_recurring(record) and has_validity_interval(record):
        _, info = _validity_overlap(record, window)
    is_prorated = info is not None and effective != original
    return EffectiveCostResult(
        record=record,
        effective_amount=effective,
        original_amount=original,
        is_prorated=is_prorated,
        prorated_info=info if is_prorated else None,
    )
