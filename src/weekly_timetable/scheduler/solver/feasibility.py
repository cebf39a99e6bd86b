"""Necessary-condition checks that prove infeasibility before searching."""

import logging

from ...constants import PERIODS
from ...models import WEEKDAYS, ScheduleProblem, Slot
from ...utils import max_daily_periods

logger = logging.getLogger(__name__)


class FeasibilityPrecheck:
    """Counting arguments that rule out a solution without search.

    Every check is a necessary condition, so a reported reason is a proof of
    infeasibility. Passing all checks proves nothing.
    """

    def __init__(self, problem: ScheduleProblem):
        self.problem = problem

    def check(self) -> list[str]:
        """Run all checks.

        Returns:
            Reasons the problem is infeasible (empty if none were found)
        """
        reasons: list[str] = []
        reasons.extend(self._check_class_capacity())
        reasons.extend(self._check_subject_capacity())
        reasons.extend(self._check_faculty_capacity())
        for reason in reasons:
            logger.warning(f"Infeasible: {reason}")
        return reasons

    def _check_class_capacity(self) -> list[str]:
        """A class cannot need more periods than it has open slots."""
        reasons = []
        for school_class in self.problem.classes:
            demand = school_class.total_weekly_hours
            available = len(school_class.open_slots)
            if demand > available:
                reasons.append(
                    f"Class '{school_class.name}' needs {demand} periods "
                    f"but has only {available} available slots"
                )
        return reasons

    def _check_subject_capacity(self) -> list[str]:
        """A subject gets at most min(open periods, faculty daily capacity) per day."""
        reasons = []
        for school_class in self.problem.classes:
            for subject in school_class.subjects:
                faculty = self.problem.faculty_for(subject)
                per_day = max_daily_periods(
                    faculty.max_hours_per_day, faculty.max_consecutive_hours
                )
                capacity = sum(
                    min(per_day, self._open_periods(school_class, day))
                    for day in WEEKDAYS
                )
                if subject.weekly_hours > capacity:
                    reasons.append(
                        f"Subject '{subject.name}' in class '{school_class.name}' needs "
                        f"{subject.weekly_hours} periods but at most {capacity} fit "
                        f"under {faculty.name}'s daily limits"
                    )
        return reasons

    def _check_faculty_capacity(self) -> list[str]:
        """A faculty member's weekly load must fit its daily limits."""
        reasons = []
        for faculty in self.problem.faculty:
            subjects = self.problem.subjects_of_faculty(faculty.id)
            demand = sum(s.weekly_hours for s in subjects)
            if demand == 0:
                continue

            per_day = max_daily_periods(faculty.max_hours_per_day, faculty.max_consecutive_hours)
            classes = {self.problem.class_of_subject[s.id].id for s in subjects}
            capacity = 0
            for day in WEEKDAYS:
                # Periods in which at least one of its classes is open
                usable = {
                    period
                    for period in PERIODS
                    for class_id in classes
                    if self.problem.class_by_id[class_id].is_available(Slot(day, period))
                }
                capacity += min(per_day, len(usable))

            if demand > capacity:
                reasons.append(
                    f"Faculty '{faculty.name}' must teach {demand} periods per week "
                    f"but daily limits allow at most {capacity}"
                )
        return reasons

    @staticmethod
    def _open_periods(school_class, day) -> int:
        return sum(1 for period in PERIODS if school_class.is_available(Slot(day, period)))
