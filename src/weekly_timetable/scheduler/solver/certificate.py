"""Independent feasibility check using the OR-Tools CP-SAT solver.

The model states the same hard constraints as ``HardConstraints`` in a
different formalism. It is used to confirm the backtracking engine's verdict,
never to produce the timetable handed to callers.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from ortools.sat.python import cp_model

from ...constants import PERIODS
from ...models import WEEKDAYS, Day, ScheduleProblem
from ..constants import DEFAULT_VERIFY_TIME_LIMIT

logger = logging.getLogger(__name__)


class Verdict(str, Enum):
    """Outcome of the CP-SAT cross-check."""

    FEASIBLE = "feasible"
    INFEASIBLE = "infeasible"
    UNKNOWN = "unknown"


@dataclass
class VerificationResult:
    """Verdict of the cross-check and how long it took."""

    verdict: Verdict
    solver_status: str
    wall_time_seconds: float

    def agrees_with(self, solved: bool) -> bool:
        """Check if the verdict matches a backtracking result (True = solved)."""
        if self.verdict is Verdict.UNKNOWN:
            return True
        return (self.verdict is Verdict.FEASIBLE) == solved


class CpSatVerifier:
    """Builds and solves a CP-SAT model of the hard constraints."""

    def __init__(self, problem: ScheduleProblem, time_limit: float = DEFAULT_VERIFY_TIME_LIMIT):
        self.problem = problem
        self.time_limit = time_limit
        self.model = cp_model.CpModel()
        # (class_id, subject_id, day, period) -> BoolVar
        self.x: dict[tuple[str, str, Day, int], cp_model.IntVar] = {}

    def build(self) -> cp_model.CpModel:
        """Build the complete CP-SAT model."""
        self._create_variables()
        self._add_class_slot_constraints()
        self._add_quota_constraints()
        self._add_faculty_constraints()
        return self.model

    def verify(self) -> VerificationResult:
        """Solve the model and report whether a timetable exists."""
        if not self.x:
            self.build()

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = self.time_limit
        solver.parameters.num_workers = 1
        solver.parameters.log_search_progress = False

        logger.info(f"Starting CP-SAT cross-check with {len(self.x)} variables...")
        status = solver.Solve(self.model)

        if status in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            verdict = Verdict.FEASIBLE
        elif status == cp_model.INFEASIBLE:
            verdict = Verdict.INFEASIBLE
        else:
            verdict = Verdict.UNKNOWN
            logger.warning(f"CP-SAT returned status: {solver.StatusName(status)}")

        logger.info(f"CP-SAT verdict: {verdict.value}")
        return VerificationResult(
            verdict=verdict,
            solver_status=solver.StatusName(status),
            wall_time_seconds=solver.WallTime(),
        )

    def _create_variables(self) -> None:
        """One boolean per subject and open slot of its class."""
        for school_class in self.problem.classes:
            for subject in school_class.subjects:
                for slot in school_class.open_slots:
                    key = (school_class.id, subject.id, slot.day, slot.period)
                    self.x[key] = self.model.NewBoolVar(
                        f"x_{school_class.id}_{subject.id}_{slot.day.name}_{slot.period}"
                    )

    def _add_class_slot_constraints(self) -> None:
        """At most one subject per (class, day, period)."""
        for school_class in self.problem.classes:
            for slot in school_class.open_slots:
                cell_vars = [
                    self.x[(school_class.id, s.id, slot.day, slot.period)]
                    for s in school_class.subjects
                ]
                if len(cell_vars) > 1:
                    self.model.AddAtMostOne(cell_vars)

    def _add_quota_constraints(self) -> None:
        """Every subject gets exactly its weekly hours."""
        for school_class in self.problem.classes:
            for subject in school_class.subjects:
                subject_vars = [
                    var for key, var in self.x.items()
                    if key[0] == school_class.id and key[1] == subject.id
                ]
                self.model.Add(sum(subject_vars) == subject.weekly_hours)

    def _add_faculty_constraints(self) -> None:
        """Single allocation, daily load and consecutive load per faculty."""
        for faculty in self.problem.faculty:
            subject_ids = {s.id for s in self.problem.subjects_of_faculty(faculty.id)}
            if not subject_ids:
                continue

            for day in WEEKDAYS:
                # Occupancy of each period: sum of the faculty's lessons then
                busy: dict[int, list] = {period: [] for period in PERIODS}
                for (class_id, subject_id, var_day, period), var in self.x.items():
                    if var_day == day and subject_id in subject_ids:
                        busy[period].append(var)

                for period_vars in busy.values():
                    if len(period_vars) > 1:
                        self.model.AddAtMostOne(period_vars)

                day_vars = [var for period_vars in busy.values() for var in period_vars]
                if not day_vars:
                    continue
                self.model.Add(sum(day_vars) <= faculty.max_hours_per_day)

                # Any window of (k + 1) consecutive periods holds at most k lessons
                window = faculty.max_consecutive_hours + 1
                for first in range(PERIODS[0], PERIODS[-1] - window + 2):
                    window_vars = [
                        var
                        for period in range(first, first + window)
                        for var in busy[period]
                    ]
                    if window_vars:
                        self.model.Add(sum(window_vars) <= faculty.max_consecutive_hours)
