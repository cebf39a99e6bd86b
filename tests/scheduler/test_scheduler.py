"""Tests for TimetableScheduler and generate_timetable."""

import threading

import pytest

from weekly_timetable.exceptions import ValidationError
from weekly_timetable.scheduler import (
    SearchStatus,
    TimetableScheduler,
    generate_timetable,
)


class TestTimetableScheduler:
    """Tests for TimetableScheduler class."""

    def test_rejects_non_positive_budget(self):
        with pytest.raises(ValueError):
            TimetableScheduler(node_budget=0)

    def test_precheck_failure_skips_search(self, overloaded_problem):
        result = TimetableScheduler().schedule(overloaded_problem)

        assert result.status is SearchStatus.INFEASIBLE
        assert result.statistics.nodes_expanded == 0
        assert result.failure.reasons

    def test_search_proven_infeasible(self, period_clash_problem):
        result = TimetableScheduler().schedule(period_clash_problem)

        assert result.status is SearchStatus.INFEASIBLE
        assert result.timetable is None
        assert result.failure.reasons == [
            "Exhaustive search found no assignment satisfying all hard constraints"
        ]
        assert result.statistics.nodes_expanded > 0

    def test_budget_exceeded(self, blackout_problem):
        result = TimetableScheduler(node_budget=3).schedule(blackout_problem)

        assert result.status is SearchStatus.BUDGET_EXCEEDED
        assert result.timetable is None
        assert result.statistics.nodes_expanded == 3

    def test_cancelled_before_start(self, sample_problem):
        cancel = threading.Event()
        cancel.set()
        result = TimetableScheduler().schedule(sample_problem, cancel_event=cancel)

        assert result.status is SearchStatus.CANCELLED
        assert result.failure.kind is SearchStatus.CANCELLED
        assert result.timetable is None

    def test_scheduler_is_reusable(self, sample_problem, blackout_problem):
        scheduler = TimetableScheduler()
        first = scheduler.schedule(sample_problem)
        scheduler.schedule(blackout_problem)
        again = scheduler.schedule(sample_problem)
        assert first.timetable == again.timetable


class TestGenerateTimetable:
    """Tests for generate_timetable function."""

    def test_accepts_dictionary(self, sample_data):
        result = generate_timetable(sample_data)

        assert result.is_solved
        assert result.statistics.total_assignments == 20
        assert result.timetable["Wednesday"]["CS101"]["Period 3"] is None

    def test_accepts_problem(self, sample_problem):
        assert generate_timetable(sample_problem).is_solved

    def test_invalid_input_raises(self, sample_data):
        sample_data["faculty"].append(dict(sample_data["faculty"][0]))
        with pytest.raises(ValidationError) as exc_info:
            generate_timetable(sample_data)
        assert any("Duplicate faculty id 'f1'" in e for e in exc_info.value.errors)
