"""Variable and value ordering for the backtracking search."""

from collections import defaultdict
from dataclasses import dataclass, field

from ...constants import PERIODS
from ...models import WEEKDAYS, Day, Faculty, ScheduleProblem, SchoolClass, Slot, Subject
from ..conflicts import ConflictTracker
from ..constraints import HardConstraints, SoftConstraints
from ..models import Assignment


class LeaveEmpty:
    """Value meaning "no lesson in this cell"."""

    def __repr__(self) -> str:
        return "LEAVE_EMPTY"


LEAVE_EMPTY = LeaveEmpty()

CellValue = Subject | LeaveEmpty


@dataclass
class Decision:
    """The next cell to fill and its candidate values, best first."""

    school_class: SchoolClass
    slot: Slot
    values: list[CellValue] = field(default_factory=list)


@dataclass
class Selection:
    """Result of inspecting a search state.

    Exactly one of ``decision`` and ``dead_end`` is set, unless the state is
    complete, in which case both are None.
    """

    decision: Decision | None = None
    dead_end: str | None = None


class SearchHeuristics:
    """Most-constrained-first variable ordering with lookahead pruning.

    Variables are undecided (class, slot) cells. For every cell the legal
    subjects are computed with ``HardConstraints.can_place``; the cell with the
    fewest options is chosen, ties broken by earliest day, earliest period,
    largest remaining class demand, then class order.

    While scanning, the state is rejected early when:
    - a cell has no option at all
    - a class has less undecided cells than remaining demand
    - a faculty member's remaining demand exceeds what still fits its days
    - a subject's remaining demand exceeds what still fits its days

    What still fits a day counts only periods where the faculty member is
    free, one of its classes has an undecided cell, and a lesson keeps every
    run within the consecutive limit, capped by the unused daily hours.
    """

    def __init__(
        self,
        problem: ScheduleProblem,
        hard: HardConstraints,
        soft: SoftConstraints,
        balance: bool = True,
    ):
        self.problem = problem
        self.hard = hard
        self.soft = soft
        self.balance = balance
        # faculty_id -> [(class, subject ids it teaches there)]
        self._teaching: dict[str, list[tuple[SchoolClass, list[str]]]] = defaultdict(list)
        for school_class in problem.classes:
            by_faculty: dict[str, list[str]] = defaultdict(list)
            for subject in school_class.subjects:
                by_faculty[subject.faculty_id].append(subject.id)
            for faculty_id, subject_ids in by_faculty.items():
                self._teaching[faculty_id].append((school_class, subject_ids))

    def legal_subjects(
        self, school_class: SchoolClass, slot: Slot, tracker: ConflictTracker
    ) -> list[Subject]:
        """Subjects of the class that can legally take this cell now."""
        return [
            subject
            for subject in school_class.subjects
            if tracker.remaining(subject.id) > 0
            and self.hard.can_place(
                Assignment(school_class.id, slot, subject.id, subject.faculty_id), tracker
            )
        ]

    def select(self, tracker: ConflictTracker) -> Selection:
        """Pick the next decision, or explain why the state is a dead end."""
        best: Decision | None = None
        best_key: tuple | None = None
        # (subject_id, day) -> cells that can take the subject now
        reachable: dict[tuple[str, Day], int] = defaultdict(int)

        for school_class in self.problem.classes:
            if tracker.class_undecided(school_class.id) == 0:
                continue

            slack = tracker.class_slack(school_class.id)
            if slack < 0:
                return Selection(
                    dead_end=f"class '{school_class.name}' has more demand than open cells"
                )
            demand = tracker.class_remaining(school_class.id)

            for slot in school_class.open_slots:
                if tracker.is_decided(school_class.id, slot):
                    continue

                legal = self.legal_subjects(school_class, slot, tracker)
                for subject in legal:
                    reachable[(subject.id, slot.day)] += 1

                options = len(legal) + (1 if slack > 0 else 0)
                if options == 0:
                    return Selection(
                        dead_end=f"no option for class '{school_class.name}' at {slot}"
                    )

                key = (options, slot.day.value, slot.period, -demand, school_class.order)
                if best_key is None or key < best_key:
                    best_key = key
                    best = Decision(school_class, slot, legal)

        dead_end = self._check_reachability(tracker, reachable)
        if dead_end:
            return Selection(dead_end=dead_end)

        if best is None:
            return Selection()

        best.values = self.order_values(best.school_class, best.slot, best.values, tracker)
        return Selection(decision=best)

    def order_values(
        self,
        school_class: SchoolClass,
        slot: Slot,
        legal: list[Subject],
        tracker: ConflictTracker,
    ) -> list[CellValue]:
        """Order the legal subjects of a cell, best first.

        Least faculty slack for the day first, then largest remaining weekly
        demand, then (with balancing) lowest imbalance against the fair share,
        then subject order. Leaving the cell empty comes after every subject
        and is offered only while the class has slack.
        """
        day = slot.day

        def sort_key(subject: Subject) -> tuple:
            faculty = self.problem.faculty_for(subject)
            faculty_slack = faculty.max_hours_per_day - tracker.get_faculty_daily_load(
                faculty.id, day
            )
            key: tuple = (faculty_slack, -tracker.remaining(subject.id))
            if self.balance:
                key += (self.soft.imbalance(subject, day, tracker),)
            return key + (subject.order,)

        ordered: list[CellValue] = sorted(legal, key=sort_key)
        if tracker.class_slack(school_class.id) > 0:
            ordered.append(LEAVE_EMPTY)
        return ordered

    def day_capacity(self, faculty: Faculty, day: Day, tracker: ConflictTracker) -> int:
        """More lessons the faculty member can still teach on a day."""
        placed = tracker.get_faculty_periods(faculty.id, day)
        candidates = {
            period
            for period in PERIODS
            if period not in placed and self._has_open_cell(faculty.id, Slot(day, period), tracker)
        }
        fits = self._max_additional(placed, candidates, faculty.max_consecutive_hours)
        return min(fits, faculty.max_hours_per_day - len(placed))

    def _has_open_cell(self, faculty_id: str, slot: Slot, tracker: ConflictTracker) -> bool:
        for school_class, subject_ids in self._teaching[faculty_id]:
            if (
                school_class.is_available(slot)
                and not tracker.is_decided(school_class.id, slot)
                and any(tracker.remaining(s) > 0 for s in subject_ids)
            ):
                return True
        return False

    @staticmethod
    def _max_additional(placed: set[int], candidates: set[int], max_run: int) -> int:
        """Most candidate periods that can join ``placed`` with no run over ``max_run``."""
        # run length ending at the current period -> most periods added so far
        best = {0: 0}
        for period in PERIODS:
            step: dict[int, int] = {}
            for run, added in best.items():
                if period in placed:
                    moves = [(run + 1, added)] if run < max_run else []
                else:
                    moves = [(0, added)]
                    if period in candidates and run < max_run:
                        moves.append((run + 1, added + 1))
                for next_run, next_added in moves:
                    if step.get(next_run, -1) < next_added:
                        step[next_run] = next_added
            best = step
        return max(best.values(), default=0)

    def _check_reachability(
        self, tracker: ConflictTracker, reachable: dict[tuple[str, Day], int]
    ) -> str | None:
        capacity: dict[tuple[str, Day], int] = {}
        for faculty in self.problem.faculty:
            remaining = tracker.faculty_remaining(faculty.id)
            if remaining <= 0:
                continue
            for day in WEEKDAYS:
                capacity[(faculty.id, day)] = self.day_capacity(faculty, day, tracker)
            total = sum(capacity[(faculty.id, day)] for day in WEEKDAYS)
            if remaining > total:
                return (
                    f"faculty '{faculty.name}' needs {remaining} more periods "
                    f"but has capacity for {total}"
                )

        for school_class in self.problem.classes:
            for subject in school_class.subjects:
                remaining = tracker.remaining(subject.id)
                if remaining <= 0:
                    continue
                fits = sum(
                    min(
                        reachable.get((subject.id, day), 0),
                        capacity[(subject.faculty_id, day)],
                    )
                    for day in WEEKDAYS
                )
                if remaining > fits:
                    return (
                        f"subject '{subject.name}' needs {remaining} more periods "
                        f"but only {fits} still fit"
                    )
        return None
