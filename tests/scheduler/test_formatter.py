"""Tests for ResultFormatter class."""

import pytest

from weekly_timetable.models import Day, Slot
from weekly_timetable.scheduler.constants import FAILURE_MESSAGES
from weekly_timetable.scheduler.formatter import ResultFormatter
from weekly_timetable.scheduler.models import (
    Assignment,
    ScheduleStatistics,
    SearchOutcome,
    SearchStatus,
    Timetable,
)


@pytest.fixture
def formatter(sample_problem):
    return ResultFormatter(sample_problem)


@pytest.fixture
def small_timetable(sample_problem):
    return Timetable(
        sample_problem,
        [
            Assignment("c1", Slot(Day.MONDAY, 1), "s1", "f1"),
            Assignment("c2", Slot(Day.MONDAY, 1), "s4", "f2"),
            Assignment("c2", Slot(Day.FRIDAY, 5), "s6", "f1"),
        ],
    )


class TestResultFormatter:
    """Tests for ResultFormatter class."""

    def test_grid_shape(self, formatter, small_timetable):
        grid = formatter.build_grid(small_timetable)
        assert list(grid) == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
        assert list(grid["Monday"]) == ["CS101", "CS202"]
        assert list(grid["Monday"]["CS101"]) == [f"Period {p}" for p in range(1, 6)]

    def test_cells_use_names(self, formatter, small_timetable):
        grid = formatter.build_grid(small_timetable)
        assert grid["Monday"]["CS101"]["Period 1"] == {
            "subject": "Algorithms",
            "faculty": "Dr. Alan Turing",
        }
        assert grid["Friday"]["CS202"]["Period 5"]["subject"] == "Intro to AI"

    def test_empty_and_blocked_cells_are_none(self, formatter, small_timetable):
        grid = formatter.build_grid(small_timetable)
        assert grid["Monday"]["CS101"]["Period 2"] is None
        assert grid["Wednesday"]["CS101"]["Period 3"] is None

    def test_solved_statistics(self, formatter, small_timetable):
        outcome = SearchOutcome(status=SearchStatus.SOLVED, timetable=small_timetable)
        result = formatter.format(outcome)

        assert result.is_solved
        assert result.failure is None
        assert result.statistics.total_assignments == 3
        assert result.statistics.by_day["Monday"] == 2
        assert result.statistics.by_day["Tuesday"] == 0
        assert result.statistics.faculty_load == {
            "Dr. Alan Turing": 2,
            "Dr. Grace Hopper": 1,
            "Dr. Ada Lovelace": 0,
        }

    @pytest.mark.parametrize(
        "status",
        [SearchStatus.INFEASIBLE, SearchStatus.BUDGET_EXCEEDED, SearchStatus.CANCELLED],
    )
    def test_failure_has_no_grid(self, formatter, status):
        stats = ScheduleStatistics(nodes_expanded=7)
        outcome = SearchOutcome(status=status, statistics=stats, reasons=["because"])
        result = formatter.format(outcome)

        assert result.timetable is None
        assert result.failure.kind is status
        assert result.failure.message == FAILURE_MESSAGES[status]
        assert result.failure.reasons == ["because"]
        assert result.statistics.nodes_expanded == 7

    def test_solved_without_timetable_raises(self, formatter):
        with pytest.raises(ValueError):
            formatter.format(SearchOutcome(status=SearchStatus.SOLVED))

    def test_to_dict(self, formatter, small_timetable):
        result = formatter.format(
            SearchOutcome(status=SearchStatus.SOLVED, timetable=small_timetable)
        )
        data = result.to_dict()
        assert data["status"] == "solved"
        assert data["failure"] is None
        assert data["timetable"]["Monday"]["CS202"]["Period 1"]["faculty"] == "Dr. Grace Hopper"
        assert data["statistics"]["total_assignments"] == 3
