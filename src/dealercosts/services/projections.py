"""Quarterly and yearly cost projections with an auditable breakdown."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Optional

from ..logging_config import get_logger
from ..models.cost import CostFrequency, CostStatus
from .aggregation import PROJECTED_FREQUENCIES, aggregate_by_frequency
from .proration import EffectiveCostResult, coerce_enum, is_recurring
from .windows import ProjectionWindow, quarter_window, reference_day, year_window

logger = get_logger(__name__)


@dataclass(slots=True)
class BucketTotals:
    """Effective totals of the three projected frequency buckets."""

    weekly: float = 0.0
    monthly: float = 0.0
    annual: float = 0.0

    @property
    def total(self) -> float:
        return self.weekly + self.monthly + self.annual

    def to_dict(self) -> dict[str, float]:
        return {"weekly": self.weekly, "monthly": self.monthly, "annual": self.annual}


@dataclass(slots=True)
class ProjectionBreakdown:
    quarterly: BucketTotals = field(default_factory=BucketTotals)
    yearly: BucketTotals = field(default_factory=BucketTotals)


@dataclass(slots=True)
class ProjectionDetails:
    """Per-record audit lines, keyed by bucket name within each window."""

    quarterly: dict[str, list[EffectiveCostResult]] = field(default_factory=dict)
    yearly: dict[str, list[EffectiveCostResult]] = field(default_factory=dict)


@dataclass(slots=True)
class ProjectionResult:
    """Output of :func:`project`."""

    reference: datetime
    quarter_window: ProjectionWindow
    year_window: ProjectionWindow
    quarterly: float = 0.0
    yearly: float = 0.0
    breakdown: ProjectionBreakdown = field(default_factory=ProjectionBreakdown)
    details: ProjectionDetails = field(default_factory=ProjectionDetails)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form for JSON or tabular export."""

        def _window(window: ProjectionWindow) -> dict[str, Any]:
            return {
                "start": window.start.isoformat(),
                "end": window.end.isoformat(),
                "days": window.days,
            }

        def _details(buckets: dict[str, list[EffectiveCostResult]]) -> dict[str, list[dict]]:
            return {name: [item.to_dict() for item in items] for name, items in buckets.items()}

        return {
            "reference": self.reference.isoformat(),
            "windows": {
                "quarterly": _window(self.quarter_window),
                "yearly": _window(self.year_window),
            },
            "quarterly": self.quarterly,
            "yearly": self.yearly,
            "breakdown": {
                "quarterly": self.breakdown.quarterly.to_dict(),
                "yearly": self.breakdown.yearly.to_dict(),
            },
            "details": {
                "quarterly": _details(self.details.quarterly),
                "yearly": _details(self.details.yearly),
            },
        }


def _bucket_window(
    records: list[Any], window: ProjectionWindow
) -> tuple[BucketTotals, dict[str, list[EffectiveCostResult]]]:
    totals = BucketTotals()
    details: dict[str, list[EffectiveCostResult]] = {}
    for frequency in PROJECTED_FREQUENCIES:
        aggregate = aggregate_by_frequency(records, frequency, window)
        setattr(totals, frequency.value, aggregate.total)
        details[frequency.value] = aggregate.items
    return totals, details


def filter_by_status(records: Iterable[Any], statuses: Iterable[CostStatus | str]) -> list[Any]:
    """Keep only records whose status is one of ``statuses``."""

    wanted = {coerce_enum(CostStatus, status) for status in statuses}
    wanted.discard(None)
    return [
        record for record in records if coerce_enum(CostStatus, getattr(record, "status", None)) in wanted
    ]


def project(
    records: Iterable[Any],
    now: date | datetime | None = None,
    *,
    statuses: Optional[Iterable[CostStatus | str]] = None,
) -> ProjectionResult:
    """Forecast next-quarter and next-year costs from a snapshot of records.

    Only recurring weekly, monthly and annual costs count towards the totals;
    quarterly-billed and one-off costs are left out. Records of
    every status are included unless ``statuses`` narrows them.

    The result depends only on ``records`` and the calendar day of ``now``
    (default: today), so repeated calls on the same day agree exactly.
    """

    snapshot = list(records or [])
    if statuses is not None:
        snapshot = filter_by_status(snapshot, statuses)

    reference = reference_day(now)
    quarter = quarter_window(reference)
    year = year_window(reference)

    quarterly_totals, quarterly_details = _bucket_window(snapshot, quarter)
    yearly_totals, yearly_details = _bucket_window(snapshot, year)

    result = ProjectionResult(
        reference=reference,
        quarter_window=quarter,
        year_window=year,
        quarterly=quarterly_totals.total,
        yearly=yearly_totals.total,
        breakdown=ProjectionBreakdown(quarterly=quarterly_totals, yearly=yearly_totals),
        details=ProjectionDetails(quarterly=quarterly_details, yearly=yearly_details),
    )
    logger.debug(
        "Projected %d records from %s: quarterly %.2f over %d days, yearly %.2f over %d days",
        len(snapshot),
        reference.date().isoformat(),
        result.quarterly,
        quarter.days,
        result.yearly,
        year.days,
    )
    return result


def excluded_records(records: Iterable[Any]) -> list[Any]:
    """Records that never reach the headline totals (quarterly-billed or one-off)."""

    return [
        record
        for record in records
        if not is_recurring(record)
        or coerce_enum(CostFrequency, getattr(record, "frequency", None)) not in PROJECTED_FREQUENCIES
    ]
