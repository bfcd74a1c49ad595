"""Tests for projection window construction."""

from __future__ import annotations

from datetime import date, datetime, time, timezone

from dealercosts.services.windows import (
    ProjectionWindow,
    add_months,
    days_between,
    quarter_window,
    reference_day,
    standard_windows,
    year_window,
)


class TestAddMonths:
    def test_simple_shift(self):
        assert add_months(date(2024, 1, 15), 3) == date(2024, 4, 15)

    def test_crosses_year_boundary(self):
        assert add_months(date(2024, 11, 10), 3) == date(2025, 2, 10)

    def test_saturates_at_calendar_limits(self):
        assert add_months(date(9999, 12, 1), 3) == date.max
        assert add_months(date(1, 1, 15), -1) == date.min

    def test_clamps_to_end_of_short_month(self):
        """Nov 30 + 3 months lands on the last day of February."""
        assert add_months(date(2023, 11, 30), 3) == date(2024, 2, 29)
        assert add_months(date(2024, 2, 29), 12) == date(2025, 2, 28)


class TestStandardWindows:
    def test_reference_day_is_start_of_day(self):
        assert reference_day(datetime(2024, 1, 1, 17, 45)) == datetime(2024, 1, 1)

    def test_quarter_window_bounds(self):
        window = quarter_window(datetime(2024, 1, 1, 9, 30))

        assert window.start == datetime(2024, 1, 1, 0, 0)
        assert window.end == datetime.combine(date(2024, 4, 1), time.max)
        assert window.days == 92

    def test_year_window_bounds(self):
        window = year_window(date(2024, 1, 1))

        assert window.start == datetime(2024, 1, 1)
        assert window.end.date() == date(2025, 1, 1)
        assert window.days == 367

    def test_standard_windows_keys(self):
        windows = standard_windows(date(2024, 6, 1))

        assert set(windows) == {"quarterly", "yearly"}
        assert windows["quarterly"].days < 300 <= windows["yearly"].days

    def test_default_now_is_today(self):
        window = quarter_window()
        assert window.start.date() == date.today()


class TestProjectionWindow:
    def test_dates_are_widened_to_whole_days(self):
        window = ProjectionWindow(date(2024, 2, 1), date(2024, 2, 29))

        assert window.start == datetime(2024, 2, 1)
        assert window.end == datetime.combine(date(2024, 2, 29), time.max)
        assert window.days == 29

    def test_datetimes_are_kept_exactly(self):
        window = ProjectionWindow(datetime(2024, 1, 1), datetime(2024, 3, 31))
        assert window.days == 90

    def test_aware_bounds_become_naive(self):
        window = ProjectionWindow(
            datetime(2024, 1, 1, tzinfo=timezone.utc),
            datetime(2024, 3, 31, tzinfo=timezone.utc),
        )

        assert window.start == datetime(2024, 1, 1)
        assert window.end == datetime(2024, 3, 31)
        assert window.days == 90

    def test_days_never_below_one(self):
        moment = datetime(2024, 1, 1)
        assert ProjectionWindow(moment, moment).days == 1


def test_days_between_is_fractional():
    assert days_between(datetime(2024, 1, 1), datetime(2024, 1, 2, 12)) == 1.5
