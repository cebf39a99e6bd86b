"""Test fixtures for weekly timetable tests."""

import pytest

from weekly_timetable.config import sample_problem_data
from weekly_timetable.models import ScheduleProblem


def build_problem_data(faculty, classes):
    """Build a problem dictionary from compact tuples.

    Args:
        faculty: [(id, maxHoursPerDay, maxConsecutiveHours), ...]
        classes: [(id, [(subject_id, faculty_id, weeklyHours), ...], [(day, period), ...]), ...]
            Class names are the upper-cased id, subject names the title-cased id.
    """
    return {
        "faculty": [
            {
                "id": faculty_id,
                "name": f"Teacher {faculty_id.upper()}",
                "maxHoursPerDay": daily,
                "maxConsecutiveHours": consecutive,
            }
            for faculty_id, daily, consecutive in faculty
        ],
        "classes": [
            {
                "id": class_id,
                "name": class_id.upper(),
                "subjects": [
                    {
                        "id": subject_id,
                        "name": subject_id.title(),
                        "facultyId": faculty_id,
                        "weeklyHours": hours,
                    }
                    for subject_id, faculty_id, hours in subjects
                ],
                "unavailableSlots": [{"day": day, "period": period} for day, period in blackouts],
            }
            for class_id, subjects, blackouts in classes
        ],
    }


@pytest.fixture
def make_problem_data():
    """Factory building a problem dictionary from compact tuples."""
    return build_problem_data


@pytest.fixture
def make_problem():
    """Factory building a validated ScheduleProblem from compact tuples."""

    def _make(faculty, classes):
        return ScheduleProblem.from_dict(build_problem_data(faculty, classes))

    return _make


@pytest.fixture
def sample_data():
    """The built-in sample roster in problem-file shape."""
    return sample_problem_data()


@pytest.fixture
def sample_problem(sample_data):
    return ScheduleProblem.from_dict(sample_data)


@pytest.fixture
def single_subject_problem(make_problem):
    """One class, one subject filling all 25 slots, faculty allowed 5 per day."""
    return make_problem(
        faculty=[("f1", 5, 5)],
        classes=[("c1", [("s1", "f1", 25)], [])],
    )


@pytest.fixture
def overloaded_problem(make_problem):
    """Same as single_subject_problem, but the faculty may teach only 4 per day."""
    return make_problem(
        faculty=[("f1", 4, 4)],
        classes=[("c1", [("s1", "f1", 25)], [])],
    )


@pytest.fixture
def blackout_problem(make_problem):
    """24 periods in one class with Wednesday P3 blocked."""
    return make_problem(
        faculty=[("f1", 2, 2), ("f2", 2, 2), ("f3", 2, 2), ("f4", 2, 2)],
        classes=[
            (
                "c1",
                [
                    ("math", "f1", 6),
                    ("physics", "f2", 6),
                    ("chemistry", "f3", 6),
                    ("biology", "f4", 6),
                ],
                [("Wednesday", 3)],
            )
        ],
    )


@pytest.fixture
def shared_faculty_problem(make_problem):
    """Two classes sharing one faculty member allowed 3 periods per day."""
    return make_problem(
        faculty=[("f1", 3, 3)],
        classes=[
            ("c1", [("a1", "f1", 5)], []),
            ("c2", [("b1", "f1", 5)], []),
        ],
    )


@pytest.fixture
def shared_faculty_overloaded_problem(make_problem):
    """Two classes needing 20 periods from a faculty member capped at 15 per week."""
    return make_problem(
        faculty=[("f1", 3, 3)],
        classes=[
            ("c1", [("a1", "f1", 10)], []),
            ("c2", [("b1", "f1", 10)], []),
        ],
    )


@pytest.fixture
def consecutive_trap_problem(make_problem):
    """Infeasible only because of the consecutive limit.

    The class is open on Monday P1-P2 alone and both subjects are taught by a
    faculty member who may not teach two periods in a row. The precheck passes;
    the search lookahead rules it out before the first decision.
    """
    blocked = [
        (day, period)
        for day in ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
        for period in range(1, 6)
        if not (day == "Monday" and period <= 2)
    ]
    return make_problem(
        faculty=[("f1", 2, 1)],
        classes=[("c1", [("a", "f1", 1), ("b", "f1", 1)], blocked)],
    )


@pytest.fixture
def alternating_periods_problem(make_problem):
    """Tight but feasible: f0 must take P1, P3 and P5 on every day.

    f0 may teach 3 periods a day, never two in a row, and needs 15 per week.
    f1 fills 5 of the P2/P4 gaps. Value ordering tries f1 first at each
    day's P1, which only lookahead on the consecutive limit rules out.
    """
    return make_problem(
        faculty=[("f0", 3, 1), ("f1", 2, 1)],
        classes=[("c1", [("a", "f0", 15), ("b", "f1", 5)], [])],
    )


@pytest.fixture
def period_clash_problem(make_problem):
    """Infeasible, but every counting argument passes.

    Both classes are open on Monday P1-P3 only. In each class a faculty member
    limited to non-consecutive periods must take P1 and P3, which leaves P2 of
    both classes to f1, who cannot teach two classes at once.
    """
    blocked = [
        (day, period)
        for day in ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
        for period in range(1, 6)
        if not (day == "Monday" and period <= 3)
    ]
    return make_problem(
        faculty=[("f0", 2, 1), ("f1", 5, 5), ("f2", 2, 1)],
        classes=[
            ("c1", [("a", "f0", 2), ("c", "f1", 1)], blocked),
            ("c2", [("b", "f2", 2), ("d", "f1", 1)], blocked),
        ],
    )
