"""Tests for frequency bucket aggregation and summary totals."""

from __future__ import annotations

import pytest

from dealercosts.models import CostFrequency
from dealercosts.services.aggregation import (
    aggregate_by_frequency,
    records_for_frequency,
    summarize_totals,
)
from dealercosts.services.windows import quarter_window, year_window
from tests.conftest import REFERENCE_NOW, assert_float_equal


class TestAggregateByFrequency:
    """Sums effective amounts of recurring records with one frequency."""

    def test_sums_matching_records_only(self, cost_factory):
        records = [
            cost_factory(100.0, frequency="monthly"),
            cost_factory(50.0, frequency="monthly", has_vat=True),
            cost_factory(10.0, frequency="weekly"),
        ]

        aggregate = aggregate_by_frequency(records, CostFrequency.MONTHLY, quarter_window(REFERENCE_NOW))

        assert aggregate.frequency is CostFrequency.MONTHLY
        assert aggregate.count == 2
        assert_float_equal(aggregate.total, (100.0 + 60.0) * 4)

    def test_accepts_string_frequency(self, cost_factory):
        records = [cost_factory(1200.0, frequency="annual")]

        aggregate = aggregate_by_frequency(records, "annual", year_window(REFERENCE_NOW))

        assert aggregate.total == 1200.0

    def test_one_off_costs_never_match(self, cost_factory):
        records = [
            cost_factory(500.0, cost_type="one_time", frequency="monthly"),
            cost_factory(80.0, cost_type="miscellaneous", frequency="monthly"),
        ]

        aggregate = aggregate_by_frequency(records, "monthly", quarter_window(REFERENCE_NOW))

        assert aggregate.total == 0.0
        assert aggregate.items == []

    def test_empty_input(self):
        aggregate = aggregate_by_frequency([], "weekly", quarter_window(REFERENCE_NOW))
        assert aggregate.total == 0.0
        assert aggregate.count == 0

    def test_unknown_target_frequency_raises(self, cost_factory):
        with pytest.raises(ValueError, match="Unknown cost frequency"):
            aggregate_by_frequency([cost_factory()], "daily", quarter_window(REFERENCE_NOW))

    def test_items_keep_audit_lines(self, cost_factory):
        cost = cost_factory(10.0, frequency="weekly", description="Valeting")

        aggregate = aggregate_by_frequency([cost], "weekly", quarter_window(REFERENCE_NOW))

        [item] = aggregate.items
        assert item.record is cost
        assert item.original_amount == 10.0
        assert item.effective_amount == 140.0
        assert item.is_prorated is False


def test_records_for_frequency_ignores_case(cost_factory):
    weekly = cost_factory(frequency="Weekly")
    assert records_for_frequency([weekly], CostFrequency.WEEKLY) == [weekly]


class TestSummarizeTotals:
    """Undiscounted totals grouped by frequency and cost type."""

    def test_groups_in_first_seen_order(self, cost_factory):
        records = [
            cost_factory(100.0, frequency="monthly"),
            cost_factory(20.0, cost_type="one_time", frequency=None),
            cost_factory(50.0, frequency="monthly", has_vat=True),
            cost_factory(300.0, frequency="quarterly"),
        ]

        totals = summarize_totals(records)

        assert [(t.frequency, t.cost_type) for t in totals] == [
            ("monthly", "recurring"),
            (None, "one_time"),
            ("quarterly", "recurring"),
        ]
        assert totals[0].count == 2
        assert totals[0].total == 160.0
        assert totals[1].total == 20.0
        assert totals[2].total == 300.0

    def test_nothing_is_excluded_or_scaled(self, cost_factory):
        records = [
            cost_factory(99.99, frequency="weekly", has_vat=True, status="inactive"),
            cost_factory(0.01, frequency="weekly"),
        ]

        [total] = summarize_totals(records)

        assert total.count == 2
        assert total.total == 120.0

    def test_empty(self):
        assert summarize_totals([]) == []
