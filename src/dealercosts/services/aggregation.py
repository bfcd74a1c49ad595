"""Per-frequency sums of effective cost amounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from ..models.cost import CostFrequency
from .proration import (
    EffectiveCostResult,
    coerce_enum,
    compute_effective_cost,
    is_recurring,
    record_total,
)
from .windows import ProjectionWindow

# Frequencies summed into the quarterly/yearly projections. Quarterly-billed
# recurring costs and all one-off costs are left out of the headline totals.
PROJECTED_FREQUENCIES = (CostFrequency.WEEKLY, CostFrequency.MONTHLY, CostFrequency.ANNUAL)


@dataclass(slots=True)
class FrequencyAggregate:
    """Total effective amount of one frequency bucket, with its line items."""

    frequency: CostFrequency
    total: float = 0.0
    items: list[EffectiveCostResult] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)


def records_for_frequency(records: Iterable[Any], frequency: CostFrequency) -> list[Any]:
    """Recurring records billed at ``frequency``."""

    return [
        record
        for record in records
        if is_recurring(record)
        and coerce_enum(CostFrequency, getattr(record, "frequency", None)) is frequency
    ]


def aggregate_by_frequency(
    records: Iterable[Any], target_frequency: CostFrequency | str, window: ProjectionWindow
) -> FrequencyAggregate:
    """Sum the effective amounts of recurring records billed at ``target_frequency``."""

    frequency = coerce_enum(CostFrequency, target_frequency)
    if frequency is None:
        raise ValueError(f"Unknown cost frequency: {target_frequency!r}")

    aggregate = FrequencyAggregate(frequency=frequency)
    for record in records_for_frequency(records, frequency):
        result = compute_effective_cost(record, window)
        aggregate.items.append(result)
        aggregate.total += result.effective_amount
    return aggregate


@dataclass(slots=True)
class CostTotal:
    """Undiscounted sum of record totals for one (frequency, cost type) group."""

    frequency: str | None
    cost_type: str
    total: float
    count: int


def summarize_totals(records: Iterable[Any]) -> list[CostTotal]:
    """Group records by (frequency, cost type) and sum their VAT-inclusive totals.

    Groups come back in first-seen order. Unlike the projections, nothing is
    excluded and nothing is scaled.
    """

    groups: dict[tuple[str | None, str], CostTotal] = {}
    for record in records:
        frequency = getattr(record, "frequency", None)
        cost_type = getattr(record, "cost_type", None)
        key = (
            getattr(frequency, "value", frequency),
            str(getattr(cost_type, "value", cost_type) or ""),
        )
        group = groups.get(key)
        if group is None:
            group = groups[key] = CostTotal(frequency=key[0], cost_type=key[1], total=0.0, count=0)
        group.total = round(group.total + record_total(record), 2)
        group.count += 1
    return list(groups.values())
