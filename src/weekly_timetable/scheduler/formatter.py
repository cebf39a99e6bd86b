"""Conversion of search outcomes into the external result structure."""

import logging
from collections import defaultdict

from ..constants import PERIODS
from ..models import WEEKDAYS, ScheduleProblem
from ..utils import period_key
from .constants import FAILURE_MESSAGES
from .models import (
    Assignment,
    FailureDescriptor,
    ScheduleResult,
    SearchOutcome,
    SearchStatus,
    Timetable,
)

logger = logging.getLogger(__name__)

TimetableGrid = dict[str, dict[str, dict[str, dict[str, str] | None]]]


class ResultFormatter:
    """Builds a ``ScheduleResult`` from a ``SearchOutcome``.

    A solved outcome becomes a grid keyed day -> class name -> "Period N",
    each cell holding ``{"subject", "faculty"}`` names or None for a cell
    that is empty or blocked. Any other outcome becomes a failure descriptor;
    no grid is emitted for it.
    """

    def __init__(self, problem: ScheduleProblem):
        self.problem = problem

    def format(self, outcome: SearchOutcome) -> ScheduleResult:
        if outcome.status is SearchStatus.SOLVED:
            if outcome.timetable is None:
                raise ValueError("A solved outcome must carry a timetable")
            return self._format_solved(outcome)
        return self._format_failure(outcome)

    def build_grid(self, timetable: Timetable) -> TimetableGrid:
        """Day -> class name -> period key -> cell."""
        class_grids = {c.id: timetable.grid(c) for c in self.problem.classes}
        grid: TimetableGrid = {}
        for day in WEEKDAYS:
            day_grid = {}
            for school_class in self.problem.classes:
                cells = class_grids[school_class.id][day]
                day_grid[school_class.name] = {
                    period_key(period): self._cell(cells[period]) for period in PERIODS
                }
            grid[day.display_name] = day_grid
        return grid

    def _cell(self, content) -> dict[str, str] | None:
        if not isinstance(content, Assignment):
            return None
        return {
            "subject": self.problem.subject_by_id[content.subject_id].name,
            "faculty": self.problem.faculty_by_id[content.faculty_id].name,
        }

    def _format_solved(self, outcome: SearchOutcome) -> ScheduleResult:
        timetable = outcome.timetable
        stats = outcome.statistics

        by_day: dict[str, int] = {day.display_name: 0 for day in WEEKDAYS}
        faculty_load: dict[str, int] = defaultdict(int)
        for assignment in timetable:
            by_day[assignment.day.display_name] += 1
            faculty_load[self.problem.faculty_by_id[assignment.faculty_id].name] += 1

        stats.by_day = by_day
        stats.faculty_load = {f.name: faculty_load.get(f.name, 0) for f in self.problem.faculty}
        stats.total_assignments = len(timetable)

        return ScheduleResult(
            status=SearchStatus.SOLVED,
            timetable=self.build_grid(timetable),
            statistics=stats,
        )

    def _format_failure(self, outcome: SearchOutcome) -> ScheduleResult:
        failure = FailureDescriptor(
            kind=outcome.status,
            message=FAILURE_MESSAGES[outcome.status],
            reasons=list(outcome.reasons),
        )
        logger.info(f"Formatting failure result: {outcome.status.value}")
        return ScheduleResult(
            status=outcome.status,
            failure=failure,
            statistics=outcome.statistics,
        )
