"""Soft constraint implementations for the scheduler.

Soft constraints are preferences that should be satisfied when possible.
Violations result in penalty scores but do not invalidate the timetable.
"""

import math
from typing import TYPE_CHECKING

from ...constants import DAYS_PER_WEEK
from ...models import WEEKDAYS, Day, Subject
from ..constants import DISTRIBUTION_CAP_MARGIN
from ..models import Timetable
from .base import ConstraintBase, Violation

if TYPE_CHECKING:
    from ..conflicts import ConflictTracker


class SoftConstraints(ConstraintBase):
    """
    Even distribution of each subject's periods across the week.

    The balancer works at two levels:
    - Imbalance: periods already on a day minus the fair share
      (``weeklyHours / 5``). Value ordering uses it only to break ties
      between otherwise equal subjects.
    - Cap: ``ceil(weeklyHours / 5) + 1`` periods per day. Periods above the cap
      are penalized in the final score.

    Neither level ever rejects a placement.
    """

    @staticmethod
    def fair_share(subject: Subject) -> float:
        """Expected periods per day if the subject were spread perfectly."""
        return subject.weekly_hours / DAYS_PER_WEEK

    @staticmethod
    def day_pace(subject: Subject) -> int:
        """Periods per day of a perfectly even spread, rounded up."""
        return math.ceil(subject.weekly_hours / DAYS_PER_WEEK)

    @staticmethod
    def day_cap(subject: Subject) -> int:
        """Soft cap on periods of one subject in a single day."""
        return SoftConstraints.day_pace(subject) + DISTRIBUTION_CAP_MARGIN

    def imbalance(self, subject: Subject, day: Day, tracker: "ConflictTracker") -> float:
        """Periods already on ``day`` relative to the fair share (lower is better)."""
        return tracker.placed_on_day(subject.id, day) - self.fair_share(subject)

    def audit(self, timetable: Timetable) -> list[Violation]:
        """Report every (subject, day) pair above the soft cap."""
        violations = []
        for school_class in self.problem.classes:
            for subject in school_class.subjects:
                cap = self.day_cap(subject)
                day_counts = timetable.subject_day_counts(subject.id)
                for day in WEEKDAYS:
                    excess = day_counts[day] - cap
                    if excess > 0:
                        violations.append(
                            Violation(
                                "distribution",
                                f"Subject '{subject.name}' in '{school_class.name}' has "
                                f"{day_counts[day]} periods on {day.display_name} (cap {cap})",
                                excess,
                            )
                        )
        return violations

    def penalty(self, timetable: Timetable) -> int:
        """Total periods above the soft cap over all subjects and days."""
        return sum(v.amount for v in self.audit(timetable))
