"""Tests for validators."""

from weekly_timetable.models import Day, Faculty, SchoolClass, Slot, Subject
from weekly_timetable.validators import (
    validate_faculty,
    validate_name,
    validate_problem,
    validate_slot,
    validate_subject,
)


def _faculty(id="f1", name="Dr. A", daily=4, consecutive=2):
    return Faculty(id, name, daily, consecutive)


def _class(id="c1", name="CS101", subjects=(), unavailable=frozenset()):
    return SchoolClass(id, name, tuple(subjects), frozenset(unavailable))


class TestValidateName:
    """Tests for validate_name function."""

    def test_valid(self):
        assert validate_name("CS101", "Class 'c1'") == (True, None)

    def test_blank(self):
        is_valid, message = validate_name("   ", "Class 'c1'")
        assert not is_valid
        assert "empty name" in message


class TestValidateFaculty:
    """Tests for validate_faculty function."""

    def test_valid(self):
        assert validate_faculty(_faculty())[0]

    def test_zero_daily_limit(self):
        is_valid, message = validate_faculty(_faculty(daily=0, consecutive=0))
        assert not is_valid
        assert "maxHoursPerDay" in message

    def test_zero_consecutive_limit(self):
        is_valid, message = validate_faculty(_faculty(consecutive=0))
        assert not is_valid
        assert "maxConsecutiveHours" in message

    def test_consecutive_above_daily(self):
        is_valid, message = validate_faculty(_faculty(daily=2, consecutive=3))
        assert not is_valid
        assert "exceeds" in message


class TestValidateSubject:
    """Tests for validate_subject function."""

    def test_valid(self):
        subject = Subject("s1", "Algorithms", "f1", 4)
        assert validate_subject(subject, "CS101", {"f1"})[0]

    def test_non_positive_hours(self):
        subject = Subject("s1", "Algorithms", "f1", 0)
        is_valid, message = validate_subject(subject, "CS101", {"f1"})
        assert not is_valid
        assert "weeklyHours" in message

    def test_unknown_faculty(self):
        subject = Subject("s1", "Algorithms", "f9", 4)
        is_valid, message = validate_subject(subject, "CS101", {"f1"})
        assert not is_valid
        assert "unknown faculty 'f9'" in message


class TestValidateSlot:
    """Tests for validate_slot function."""

    def test_inside_grid(self):
        assert validate_slot(Slot(Day.MONDAY, 5), "CS101")[0]

    def test_outside_grid(self):
        is_valid, message = validate_slot(Slot(Day.MONDAY, 6), "CS101")
        assert not is_valid
        assert "outside 1-5" in message


class TestValidateProblem:
    """Tests for validate_problem function."""

    def test_valid_problem(self):
        subject = Subject("s1", "Algorithms", "f1", 4)
        assert validate_problem([_faculty()], [_class(subjects=[subject])]) == []

    def test_duplicate_ids(self):
        subject = Subject("s1", "Algorithms", "f1", 1)
        errors = validate_problem(
            [_faculty(), _faculty(name="Dr. B")],
            [
                _class(subjects=[subject]),
                _class(name="CS102", subjects=[subject]),
            ],
        )
        assert "Duplicate faculty id 'f1'" in errors
        assert "Duplicate class id 'c1'" in errors
        assert "Duplicate subject id 's1'" in errors

    def test_duplicate_class_names(self):
        errors = validate_problem(
            [_faculty()],
            [
                _class(subjects=[Subject("s1", "A", "f1", 1)]),
                _class(id="c2", subjects=[Subject("s2", "B", "f1", 1)]),
            ],
        )
        assert "Duplicate class name 'CS101'" in errors

    def test_class_without_subjects(self):
        errors = validate_problem([_faculty()], [_class()])
        assert errors == ["Class 'CS101' has no subjects"]

    def test_oversized_demand_is_not_a_validation_error(self):
        subject = Subject("s1", "Algorithms", "f1", 30)
        assert validate_problem([_faculty()], [_class(subjects=[subject])]) == []
