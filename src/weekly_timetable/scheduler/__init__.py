"""Weekly timetable scheduling by backtracking search.

Main classes:
- TimetableScheduler: precheck, search and result formatting
- BacktrackingSearch: the search engine
- CpSatVerifier: independent OR-Tools CP-SAT feasibility check

Usage:
    from weekly_timetable.scheduler import TimetableScheduler

    scheduler = TimetableScheduler(node_budget=200_000)
    result = scheduler.schedule(problem)
"""

from .conflicts import ConflictTracker
from .constants import DEFAULT_NODE_BUDGET, DEFAULT_TIME_LIMIT, DEFAULT_VERIFY_TIME_LIMIT
from .constraints import HardConstraints, SoftConstraints
from .formatter import ResultFormatter
from .models import (
    Assignment,
    CellState,
    ConstraintKind,
    FailureDescriptor,
    ScheduleResult,
    ScheduleStatistics,
    SearchOutcome,
    SearchStatus,
    Timetable,
)
from .scheduler import TimetableScheduler, generate_timetable
from .solver import BacktrackingSearch, CpSatVerifier, FeasibilityPrecheck, Verdict

__all__ = [
    # Main scheduler
    "TimetableScheduler",
    "generate_timetable",
    # Engine
    "BacktrackingSearch",
    "ConflictTracker",
    "FeasibilityPrecheck",
    "CpSatVerifier",
    "Verdict",
    "HardConstraints",
    "SoftConstraints",
    "ResultFormatter",
    # Models
    "Assignment",
    "CellState",
    "ConstraintKind",
    "FailureDescriptor",
    "ScheduleResult",
    "ScheduleStatistics",
    "SearchOutcome",
    "SearchStatus",
    "Timetable",
    # Constants
    "DEFAULT_NODE_BUDGET",
    "DEFAULT_TIME_LIMIT",
    "DEFAULT_VERIFY_TIME_LIMIT",
]
