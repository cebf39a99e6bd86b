"""Hard constraint implementations for the scheduler.

Hard constraints are mandatory requirements that must never be violated.
A timetable violating any hard constraint is considered invalid.
"""

from collections import defaultdict
from typing import TYPE_CHECKING

from ...models import Day, ScheduleProblem, Slot
from ...utils import longest_run, run_through
from ..models import Assignment, ConstraintKind, Timetable
from .base import ConstraintBase, Violation

if TYPE_CHECKING:
    from ..conflicts import ConflictTracker


class HardConstraints(ConstraintBase):
    """
    Implementation of all hard constraints.

    Hard Constraints:
    - Class slot exclusivity: one lesson per (class, day, period)
    - Faculty slot exclusivity: one class per (faculty, day, period)
    - Daily load: periods per faculty per day <= maxHoursPerDay
    - Consecutive load: longest daily run per faculty <= maxConsecutiveHours
    - Blackout: no lesson in a class's unavailable slots
    - Quota: periods per subject never exceed weeklyHours, and equal it
      in a complete timetable
    """

    def __init__(self, problem: ScheduleProblem):
        super().__init__(problem)
        self._placement_checks = [
            (ConstraintKind.REFERENCE, self._references_match),
            (ConstraintKind.BLACKOUT, self._respects_blackout),
            (ConstraintKind.CLASS_SLOT_CONFLICT, self._class_slot_free),
            (ConstraintKind.FACULTY_SLOT_CONFLICT, self._faculty_slot_free),
            (ConstraintKind.QUOTA_EXCEEDED, self._within_quota),
            (ConstraintKind.DAILY_LOAD, self._within_daily_load),
            (ConstraintKind.CONSECUTIVE_LOAD, self._within_consecutive_load),
        ]

    def can_place(self, assignment: Assignment, tracker: "ConflictTracker") -> bool:
        """Check whether an assignment can be added to the partial timetable.

        Stops at the first failing constraint.

        Args:
            assignment: Candidate assignment
            tracker: Current partial timetable

        Returns:
            True if every hard constraint holds with the candidate included
        """
        return all(check(assignment, tracker) for _, check in self._placement_checks)

    def check_placement(
        self, assignment: Assignment, tracker: "ConflictTracker"
    ) -> list[ConstraintKind]:
        """List every hard constraint the candidate assignment would break."""
        return [kind for kind, check in self._placement_checks if not check(assignment, tracker)]

    def violated_constraints(self, timetable: Timetable) -> set[ConstraintKind]:
        """Audit a complete timetable and return the kinds of violated constraints."""
        return {ConstraintKind(v.kind) for v in self.audit(timetable)}

    def audit(self, timetable: Timetable) -> list[Violation]:
        """Audit a complete timetable against every hard constraint."""
        violations: list[Violation] = []
        violations.extend(self._audit_references(timetable))
        violations.extend(self._audit_slot_exclusivity(timetable))
        violations.extend(self._audit_faculty_loads(timetable))
        violations.extend(self._audit_quotas(timetable))
        return violations

    # Placement predicates

    def _references_match(self, assignment: Assignment, tracker: "ConflictTracker") -> bool:
        """The subject belongs to the class and is taught by the given faculty."""
        subject = self._subject_by_id.get(assignment.subject_id)
        if subject is None or subject.faculty_id != assignment.faculty_id:
            return False
        owner = self.problem.class_of_subject[subject.id]
        return owner.id == assignment.class_id

    def _respects_blackout(self, assignment: Assignment, tracker: "ConflictTracker") -> bool:
        return self._class_by_id[assignment.class_id].is_available(assignment.slot)

    def _class_slot_free(self, assignment: Assignment, tracker: "ConflictTracker") -> bool:
        return not tracker.is_decided(assignment.class_id, assignment.slot)

    def _faculty_slot_free(self, assignment: Assignment, tracker: "ConflictTracker") -> bool:
        return tracker.is_faculty_free(assignment.faculty_id, assignment.slot)

    def _within_quota(self, assignment: Assignment, tracker: "ConflictTracker") -> bool:
        return tracker.remaining(assignment.subject_id) > 0

    def _within_daily_load(self, assignment: Assignment, tracker: "ConflictTracker") -> bool:
        faculty = self._faculty_by_id[assignment.faculty_id]
        load = tracker.get_faculty_daily_load(assignment.faculty_id, assignment.day)
        return load + 1 <= faculty.max_hours_per_day

    def _within_consecutive_load(
        self, assignment: Assignment, tracker: "ConflictTracker"
    ) -> bool:
        faculty = self._faculty_by_id[assignment.faculty_id]
        periods = tracker.get_faculty_periods(assignment.faculty_id, assignment.day)
        return run_through(periods, assignment.period) <= faculty.max_consecutive_hours

    # Full-timetable audits

    def _audit_references(self, timetable: Timetable) -> list[Violation]:
        violations = []
        for assignment in timetable:
            subject = self._subject_by_id.get(assignment.subject_id)
            owner = self.problem.class_of_subject.get(assignment.subject_id)
            if (
                subject is None
                or owner is None
                or owner.id != assignment.class_id
                or subject.faculty_id != assignment.faculty_id
            ):
                violations.append(
                    Violation(
                        ConstraintKind.REFERENCE.value,
                        f"Assignment at {assignment.slot} does not match its class/subject/faculty",
                    )
                )
            school_class = self._class_by_id.get(assignment.class_id)
            if school_class is not None and not school_class.is_available(assignment.slot):
                violations.append(
                    Violation(
                        ConstraintKind.BLACKOUT.value,
                        f"Class '{school_class.name}' scheduled in unavailable slot {assignment.slot}",
                    )
                )
        return violations

    def _audit_slot_exclusivity(self, timetable: Timetable) -> list[Violation]:
        violations = []
        class_slots: dict[tuple[str, Slot], int] = defaultdict(int)
        faculty_slots: dict[tuple[str, Slot], int] = defaultdict(int)
        for assignment in timetable:
            class_slots[(assignment.class_id, assignment.slot)] += 1
            faculty_slots[(assignment.faculty_id, assignment.slot)] += 1

        for (class_id, slot), count in class_slots.items():
            if count > 1:
                violations.append(
                    Violation(
                        ConstraintKind.CLASS_SLOT_CONFLICT.value,
                        f"Class '{class_id}' has {count} lessons at {slot}",
                        count - 1,
                    )
                )
        for (faculty_id, slot), count in faculty_slots.items():
            if count > 1:
                violations.append(
                    Violation(
                        ConstraintKind.FACULTY_SLOT_CONFLICT.value,
                        f"Faculty '{faculty_id}' teaches {count} classes at {slot}",
                        count - 1,
                    )
                )
        return violations

    def _audit_faculty_loads(self, timetable: Timetable) -> list[Violation]:
        violations = []
        day_periods: dict[tuple[str, Day], set[int]] = defaultdict(set)
        for assignment in timetable:
            day_periods[(assignment.faculty_id, assignment.day)].add(assignment.period)

        for (faculty_id, day), periods in day_periods.items():
            faculty = self._faculty_by_id.get(faculty_id)
            if faculty is None:
                continue
            load = len(periods)
            if load > faculty.max_hours_per_day:
                violations.append(
                    Violation(
                        ConstraintKind.DAILY_LOAD.value,
                        f"Faculty '{faculty.name}' teaches {load} periods on "
                        f"{day.display_name} (max {faculty.max_hours_per_day})",
                        load - faculty.max_hours_per_day,
                    )
                )
            run = longest_run(periods)
            if run > faculty.max_consecutive_hours:
                violations.append(
                    Violation(
                        ConstraintKind.CONSECUTIVE_LOAD.value,
                        f"Faculty '{faculty.name}' teaches {run} consecutive periods on "
                        f"{day.display_name} (max {faculty.max_consecutive_hours})",
                        run - faculty.max_consecutive_hours,
                    )
                )
        return violations

    def _audit_quotas(self, timetable: Timetable) -> list[Violation]:
        violations = []
        counts = timetable.subject_counts()
        for school_class in self.problem.classes:
            for subject in school_class.subjects:
                count = counts.get(subject.id, 0)
                if count > subject.weekly_hours:
                    violations.append(
                        Violation(
                            ConstraintKind.QUOTA_EXCEEDED.value,
                            f"Subject '{subject.name}' in '{school_class.name}' has {count} "
                            f"periods (needs {subject.weekly_hours})",
                            count - subject.weekly_hours,
                        )
                    )
                elif count < subject.weekly_hours:
                    violations.append(
                        Violation(
                            ConstraintKind.QUOTA_UNMET.value,
                            f"Subject '{subject.name}' in '{school_class.name}' has {count} "
                            f"periods (needs {subject.weekly_hours})",
                            subject.weekly_hours - count,
                        )
                    )
        return violations
