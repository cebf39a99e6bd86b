"""Backtracking search over partial timetables."""

import logging
import threading
import time
from dataclasses import dataclass, field

from ...exceptions import InternalConsistencyError
from ...models import ScheduleProblem, SchoolClass, Slot
from ..conflicts import ConflictTracker
from ..constants import CANCEL_CHECK_INTERVAL, DEFAULT_NODE_BUDGET
from ..constraints import HardConstraints, SoftConstraints
from ..models import Assignment, ScheduleStatistics, SearchOutcome, SearchStatus
from .ordering import LEAVE_EMPTY, CellValue, SearchHeuristics

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """One decision point on the search stack."""

    school_class: SchoolClass
    slot: Slot
    values: list[CellValue]
    next_index: int = 0
    applied: CellValue | None = field(default=None)


class BacktrackingSearch:
    """Depth-first search with most-constrained-first ordering.

    State is the set of placed assignments and the remaining demand, both held
    in a ``ConflictTracker``. Each step picks the most constrained undecided
    cell, tries its candidate values in order, and on a dead end undoes the
    most recent decision and moves to its next value. Unwinding past the first
    decision proves the problem infeasible.

    The search is iterative so the depth is not bounded by the interpreter's
    recursion limit. It is deterministic: identical input gives an identical
    timetable.
    """

    def __init__(
        self,
        problem: ScheduleProblem,
        node_budget: int = DEFAULT_NODE_BUDGET,
        time_limit: float | None = None,
        balance: bool = True,
        cancel_event: threading.Event | None = None,
    ):
        """
        Initialize the search.

        Args:
            problem: Validated problem snapshot.
            node_budget: Maximum node expansions before giving up.
            time_limit: Optional wall-clock limit in seconds.
            balance: Use the distribution balancer in value ordering.
            cancel_event: Optional token; when set, the run stops as CANCELLED.
        """
        if node_budget < 1:
            raise ValueError(f"node_budget must be positive, got {node_budget}")
        self.problem = problem
        self.node_budget = node_budget
        self.time_limit = time_limit
        self.cancel_event = cancel_event
        self.hard = HardConstraints(problem)
        self.soft = SoftConstraints(problem)
        self.heuristics = SearchHeuristics(problem, self.hard, self.soft, balance=balance)

    def run(self) -> SearchOutcome:
        """Run the search to a terminal state."""
        tracker = ConflictTracker(self.problem)
        stats = ScheduleStatistics()
        stack: list[_Frame] = []
        start = time.perf_counter()

        logger.info(
            f"Starting search over {len(self.problem.classes)} classes "
            f"(budget {self.node_budget} nodes)"
        )

        status = self._search(tracker, stack, stats, start)
        stats.solver_time_seconds = round(time.perf_counter() - start, 4)

        if status is not SearchStatus.SOLVED:
            logger.info(
                f"Search ended {status.value} after {stats.nodes_expanded} nodes, "
                f"{stats.backtracks} backtracks"
            )
            return SearchOutcome(status=status, statistics=stats)

        timetable = tracker.to_timetable()
        violations = self.hard.audit(timetable)
        if violations:
            raise InternalConsistencyError(
                "Search reported a solution that violates hard constraints",
                [v.message for v in violations],
            )

        stats.total_assignments = len(timetable)
        stats.distribution_penalty = self.soft.penalty(timetable)
        logger.info(
            f"Solved with {stats.total_assignments} assignments after "
            f"{stats.nodes_expanded} nodes, {stats.backtracks} backtracks "
            f"({stats.solver_time_seconds}s)"
        )
        return SearchOutcome(status=SearchStatus.SOLVED, timetable=timetable, statistics=stats)

    def _search(
        self,
        tracker: ConflictTracker,
        stack: list[_Frame],
        stats: ScheduleStatistics,
        start: float,
    ) -> SearchStatus:
        while True:
            if stats.nodes_expanded % CANCEL_CHECK_INTERVAL == 0:
                status = self._poll(start)
                if status is not None:
                    return status

            selection = self.heuristics.select(tracker)

            if selection.decision is None and selection.dead_end is None:
                if not tracker.is_complete():
                    raise InternalConsistencyError("Search stopped with undecided cells")
                return SearchStatus.SOLVED

            if selection.decision is not None:
                decision = selection.decision
                stack.append(_Frame(decision.school_class, decision.slot, decision.values))
                stats.max_depth = max(stats.max_depth, len(stack))
            else:
                logger.debug(f"Dead end at depth {len(stack)}: {selection.dead_end}")

            if stats.nodes_expanded >= self.node_budget:
                logger.warning(f"Node budget of {self.node_budget} exhausted")
                return SearchStatus.BUDGET_EXCEEDED

            # Advance to the next untried value, unwinding exhausted frames
            while stack:
                frame = stack[-1]
                if frame.applied is not None:
                    self._undo(tracker, frame)
                    stats.backtracks += 1

                if frame.next_index < len(frame.values):
                    value = frame.values[frame.next_index]
                    frame.next_index += 1
                    self._apply(tracker, frame, value)
                    stats.nodes_expanded += 1
                    break

                stack.pop()
            else:
                return SearchStatus.INFEASIBLE

    def _apply(self, tracker: ConflictTracker, frame: _Frame, value: CellValue) -> None:
        if value is LEAVE_EMPTY:
            tracker.mark_empty(frame.school_class.id, frame.slot)
        else:
            assignment = Assignment(frame.school_class.id, frame.slot, value.id, value.faculty_id)
            if not self.hard.can_place(assignment, tracker):
                raise InternalConsistencyError(
                    f"Candidate {value.name} at {frame.slot} is no longer legal",
                    [k.value for k in self.hard.check_placement(assignment, tracker)],
                )
            tracker.reserve(assignment)
        frame.applied = value

    def _undo(self, tracker: ConflictTracker, frame: _Frame) -> None:
        value = frame.applied
        if value is LEAVE_EMPTY:
            tracker.unmark_empty(frame.school_class.id, frame.slot)
        else:
            tracker.release(
                Assignment(frame.school_class.id, frame.slot, value.id, value.faculty_id)
            )
        frame.applied = None

    def _poll(self, start: float) -> SearchStatus | None:
        """Check the cancel token and the clock."""
        if self.cancel_event is not None and self.cancel_event.is_set():
            logger.warning("Search cancelled")
            return SearchStatus.CANCELLED
        if self.time_limit is not None and time.perf_counter() - start > self.time_limit:
            logger.warning(f"Time limit of {self.time_limit}s exceeded")
            return SearchStatus.BUDGET_EXCEEDED
        return None
