"""Tests for utility functions."""

import pytest

from weekly_timetable.utils import (
    longest_run,
    max_daily_periods,
    parse_day_index,
    period_key,
    run_through,
)


class TestParseDayIndex:
    """Tests for parse_day_index function."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Monday", 0),
            ("friday", 4),
            (" Tuesday ", 1),
            ("thu", 3),
            (2, 2),
            ("Saturday", None),
            ("", None),
            (5, None),
            (True, None),
        ],
    )
    def test_parse(self, value, expected):
        assert parse_day_index(value) == expected


class TestPeriodKey:
    """Tests for period_key function."""

    def test_format(self):
        assert period_key(3) == "Period 3"


class TestRuns:
    """Tests for run length helpers."""

    def test_longest_run_empty(self):
        assert longest_run(set()) == 0

    def test_longest_run_with_gap(self):
        assert longest_run({1, 2, 4, 5}) == 2

    def test_longest_run_full_day(self):
        assert longest_run([5, 3, 1, 2, 4]) == 5

    def test_run_through_joins_neighbours(self):
        assert run_through({1, 3}, 2) == 3

    def test_run_through_isolated(self):
        assert run_through({1, 5}, 3) == 1


class TestMaxDailyPeriods:
    """Tests for max_daily_periods function."""

    @pytest.mark.parametrize(
        "daily,consecutive,expected",
        [
            (5, 5, 5),
            (5, 1, 3),
            (5, 2, 4),
            (4, 4, 4),
            (3, 3, 3),
            (2, 1, 2),
        ],
    )
    def test_capacity(self, daily, consecutive, expected):
        assert max_daily_periods(daily, consecutive) == expected
