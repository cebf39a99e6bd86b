"""Data models for the timetable search and its results."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ..constants import PERIODS
from ..models import WEEKDAYS, Day, ScheduleProblem, SchoolClass, Slot


class ConstraintKind(str, Enum):
    """Hard constraints checked for every placement and in the final audit."""

    CLASS_SLOT_CONFLICT = "class_slot_conflict"
    FACULTY_SLOT_CONFLICT = "faculty_slot_conflict"
    DAILY_LOAD = "daily_load"
    CONSECUTIVE_LOAD = "consecutive_load"
    BLACKOUT = "blackout"
    QUOTA_EXCEEDED = "quota_exceeded"
    QUOTA_UNMET = "quota_unmet"
    REFERENCE = "reference"


class SearchStatus(str, Enum):
    """Terminal outcome of a scheduling run."""

    SOLVED = "solved"
    INFEASIBLE = "infeasible"
    BUDGET_EXCEEDED = "budget_exceeded"
    CANCELLED = "cancelled"

    @property
    def is_failure(self) -> bool:
        return self is not SearchStatus.SOLVED


class CellState(str, Enum):
    """Content of a timetable cell that holds no lesson."""

    EMPTY = "empty"
    BLOCKED = "blocked"


@dataclass(frozen=True)
class Assignment:
    """A committed (class, slot) -> (subject, faculty) binding."""

    class_id: str
    slot: Slot
    subject_id: str
    faculty_id: str

    @property
    def day(self) -> Day:
        return self.slot.day

    @property
    def period(self) -> int:
        return self.slot.period

    def to_dict(self) -> dict[str, Any]:
        """Convert assignment to dictionary."""
        return {
            "class_id": self.class_id,
            "day": self.slot.day.display_name,
            "period": self.slot.period,
            "subject_id": self.subject_id,
            "faculty_id": self.faculty_id,
        }


class Timetable:
    """Immutable set of assignments covering every class's every slot.

    A cell either holds an ``Assignment`` or a ``CellState`` (empty, or
    blocked by the class's unavailable slots).
    """

    def __init__(self, problem: ScheduleProblem, assignments: list[Assignment]):
        self.problem = problem
        self._assignments = tuple(
            sorted(
                assignments,
                key=lambda a: (
                    problem.class_by_id[a.class_id].order,
                    a.slot.key,
                ),
            )
        )
        self._cells: dict[tuple[str, Slot], Assignment] = {}
        for assignment in self._assignments:
            self._cells[(assignment.class_id, assignment.slot)] = assignment

    @property
    def assignments(self) -> tuple[Assignment, ...]:
        return self._assignments

    def __len__(self) -> int:
        return len(self._assignments)

    def __iter__(self):
        return iter(self._assignments)

    def cell(self, class_id: str, slot: Slot) -> Assignment | CellState:
        """Get the content of one (class, slot) cell."""
        assignment = self._cells.get((class_id, slot))
        if assignment is not None:
            return assignment
        school_class = self.problem.class_by_id[class_id]
        if not school_class.is_available(slot):
            return CellState.BLOCKED
        return CellState.EMPTY

    def subject_counts(self) -> dict[str, int]:
        """Assigned periods per subject over the whole week."""
        counts: dict[str, int] = defaultdict(int)
        for assignment in self._assignments:
            counts[assignment.subject_id] += 1
        return dict(counts)

    def subject_day_counts(self, subject_id: str) -> dict[Day, int]:
        """Assigned periods of one subject on each day."""
        counts = {day: 0 for day in WEEKDAYS}
        for assignment in self._assignments:
            if assignment.subject_id == subject_id:
                counts[assignment.day] += 1
        return counts

    def grid(self, school_class: SchoolClass) -> dict[Day, dict[int, Assignment | CellState]]:
        """Day -> period -> cell for one class."""
        return {
            day: {
                slot.period: self.cell(school_class.id, slot)
                for slot in (Slot(day, p) for p in PERIODS)
            }
            for day in WEEKDAYS
        }


@dataclass
class ScheduleStatistics:
    """Statistics about a scheduling run."""

    nodes_expanded: int = 0
    backtracks: int = 0
    max_depth: int = 0
    total_assignments: int = 0
    distribution_penalty: int = 0
    by_day: dict[str, int] = field(default_factory=dict)
    faculty_load: dict[str, int] = field(default_factory=dict)
    solver_time_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "nodes_expanded": self.nodes_expanded,
            "backtracks": self.backtracks,
            "max_depth": self.max_depth,
            "total_assignments": self.total_assignments,
            "distribution_penalty": self.distribution_penalty,
            "by_day": self.by_day,
            "faculty_load": self.faculty_load,
            "solver_time_seconds": self.solver_time_seconds,
        }


@dataclass
class SearchOutcome:
    """Raw result of the search engine, before formatting.

    ``timetable`` is set only when ``status`` is SOLVED.
    """

    status: SearchStatus
    timetable: Timetable | None = None
    statistics: ScheduleStatistics = field(default_factory=ScheduleStatistics)
    reasons: list[str] = field(default_factory=list)


@dataclass
class FailureDescriptor:
    """Structured description of a failed run."""

    kind: SearchStatus
    message: str
    reasons: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "reasons": self.reasons,
        }


@dataclass
class ScheduleResult:
    """Result of the scheduling process, as handed to the presentation layer.

    Exactly one of ``timetable`` and ``failure`` is set.
    """

    status: SearchStatus
    timetable: dict[str, dict[str, dict[str, dict[str, str] | None]]] | None = None
    failure: FailureDescriptor | None = None
    statistics: ScheduleStatistics = field(default_factory=ScheduleStatistics)
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def is_solved(self) -> bool:
        return self.status is SearchStatus.SOLVED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status.value,
            "generation_date": self.generation_date,
            "timetable": self.timetable,
            "failure": self.failure.to_dict() if self.failure else None,
            "statistics": self.statistics.to_dict(),
        }
