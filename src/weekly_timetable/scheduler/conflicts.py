"""Conflict tracking for timetable generation."""

from collections import defaultdict

from ..exceptions import InternalConsistencyError
from ..models import Day, ScheduleProblem, Slot
from .models import Assignment, Timetable


class ConflictTracker:
    """Tracks the partial timetable and the counters the search depends on.

    This class maintains the state of one search run:
    - class_schedule: Which assignment fills each (class, slot)
    - faculty_schedule: Which assignment occupies each (faculty, slot)
    - faculty_day_periods: Periods each faculty teaches on each day
    - subject_placed: Periods placed so far per subject
    - subject_day_placed: Periods placed per (subject, day)
    - empty_cells: (class, slot) cells deliberately left empty

    Every mutation has an exact inverse (``reserve``/``release`` and
    ``mark_empty``/``unmark_empty``) so the search can backtrack in place.
    All state is private to the run.
    """

    def __init__(self, problem: ScheduleProblem) -> None:
        self.problem = problem
        # (class_id, slot) -> assignment
        self.class_schedule: dict[tuple[str, Slot], Assignment] = {}
        # (faculty_id, slot) -> assignment
        self.faculty_schedule: dict[tuple[str, Slot], Assignment] = {}
        # (faculty_id, day) -> set of periods
        self.faculty_day_periods: dict[tuple[str, Day], set[int]] = defaultdict(set)
        # subject_id -> periods placed
        self.subject_placed: dict[str, int] = defaultdict(int)
        # (subject_id, day) -> periods placed
        self.subject_day_placed: dict[tuple[str, Day], int] = defaultdict(int)
        # (class_id, slot) decided as empty
        self.empty_cells: set[tuple[str, Slot]] = set()

        self._class_remaining: dict[str, int] = {
            c.id: c.total_weekly_hours for c in problem.classes
        }
        self._class_undecided: dict[str, int] = {
            c.id: len(c.open_slots) for c in problem.classes
        }
        self._faculty_remaining: dict[str, int] = defaultdict(int)
        for school_class in problem.classes:
            for subject in school_class.subjects:
                self._faculty_remaining[subject.faculty_id] += subject.weekly_hours

    # Queries

    def is_decided(self, class_id: str, slot: Slot) -> bool:
        """Check if a (class, slot) cell already holds a lesson or an empty mark."""
        key = (class_id, slot)
        return key in self.class_schedule or key in self.empty_cells

    def is_faculty_free(self, faculty_id: str, slot: Slot) -> bool:
        return (faculty_id, slot) not in self.faculty_schedule

    def get_faculty_daily_load(self, faculty_id: str, day: Day) -> int:
        """Periods the faculty teaches on a day."""
        return len(self.faculty_day_periods.get((faculty_id, day), ()))

    def get_faculty_periods(self, faculty_id: str, day: Day) -> set[int]:
        return self.faculty_day_periods.get((faculty_id, day), set())

    def placed(self, subject_id: str) -> int:
        return self.subject_placed.get(subject_id, 0)

    def placed_on_day(self, subject_id: str, day: Day) -> int:
        return self.subject_day_placed.get((subject_id, day), 0)

    def remaining(self, subject_id: str) -> int:
        """Periods a subject still needs to reach its weekly quota."""
        subject = self.problem.subject_by_id[subject_id]
        return subject.weekly_hours - self.placed(subject_id)

    def class_remaining(self, class_id: str) -> int:
        return self._class_remaining[class_id]

    def class_undecided(self, class_id: str) -> int:
        """Open cells of a class that are neither filled nor marked empty."""
        return self._class_undecided[class_id]

    def class_slack(self, class_id: str) -> int:
        """Open cells the class can still afford to leave empty."""
        return self._class_undecided[class_id] - self._class_remaining[class_id]

    def faculty_remaining(self, faculty_id: str) -> int:
        return self._faculty_remaining.get(faculty_id, 0)

    def is_complete(self) -> bool:
        """Every open cell of every class has been decided."""
        return all(count == 0 for count in self._class_undecided.values())

    # Mutations

    def reserve(self, assignment: Assignment) -> None:
        """Commit an assignment.

        Raises:
            InternalConsistencyError: If the class cell or the faculty slot
                is already taken
        """
        class_key = (assignment.class_id, assignment.slot)
        faculty_key = (assignment.faculty_id, assignment.slot)
        if class_key in self.class_schedule or class_key in self.empty_cells:
            raise InternalConsistencyError(
                f"Class '{assignment.class_id}' already decided at {assignment.slot}"
            )
        if faculty_key in self.faculty_schedule:
            raise InternalConsistencyError(
                f"Faculty '{assignment.faculty_id}' already teaching at {assignment.slot}"
            )

        self.class_schedule[class_key] = assignment
        self.faculty_schedule[faculty_key] = assignment
        self.faculty_day_periods[(assignment.faculty_id, assignment.day)].add(assignment.period)
        self.subject_placed[assignment.subject_id] += 1
        self.subject_day_placed[(assignment.subject_id, assignment.day)] += 1
        self._class_remaining[assignment.class_id] -= 1
        self._class_undecided[assignment.class_id] -= 1
        self._faculty_remaining[assignment.faculty_id] -= 1

    def release(self, assignment: Assignment) -> None:
        """Undo a previous ``reserve``."""
        class_key = (assignment.class_id, assignment.slot)
        if self.class_schedule.get(class_key) != assignment:
            raise InternalConsistencyError(
                f"Releasing an assignment that is not committed: {assignment}"
            )

        del self.class_schedule[class_key]
        del self.faculty_schedule[(assignment.faculty_id, assignment.slot)]
        self.faculty_day_periods[(assignment.faculty_id, assignment.day)].discard(
            assignment.period
        )
        self.subject_placed[assignment.subject_id] -= 1
        self.subject_day_placed[(assignment.subject_id, assignment.day)] -= 1
        self._class_remaining[assignment.class_id] += 1
        self._class_undecided[assignment.class_id] += 1
        self._faculty_remaining[assignment.faculty_id] += 1

    def mark_empty(self, class_id: str, slot: Slot) -> None:
        """Decide that a class has no lesson in a slot."""
        key = (class_id, slot)
        if key in self.class_schedule or key in self.empty_cells:
            raise InternalConsistencyError(f"Class '{class_id}' already decided at {slot}")
        if self.class_slack(class_id) <= 0:
            raise InternalConsistencyError(
                f"Class '{class_id}' has no slack left to leave {slot} empty"
            )
        self.empty_cells.add(key)
        self._class_undecided[class_id] -= 1

    def unmark_empty(self, class_id: str, slot: Slot) -> None:
        """Undo a previous ``mark_empty``."""
        self.empty_cells.remove((class_id, slot))
        self._class_undecided[class_id] += 1

    def to_timetable(self) -> Timetable:
        """Snapshot the committed assignments as an immutable Timetable."""
        return Timetable(self.problem, list(self.class_schedule.values()))
