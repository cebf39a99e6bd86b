"""Main scheduler: problem -> precheck -> search -> formatted result."""

import logging
import threading
from typing import Any

from ..models import ScheduleProblem
from .constants import DEFAULT_NODE_BUDGET, DEFAULT_TIME_LIMIT
from .formatter import ResultFormatter
from .models import ScheduleResult, ScheduleStatistics, SearchOutcome, SearchStatus
from .solver import BacktrackingSearch, FeasibilityPrecheck

logger = logging.getLogger(__name__)


class TimetableScheduler:
    """
    Weekly timetable generator.

    Runs the cheap feasibility precheck, then the backtracking search, and
    formats the outcome. The problem snapshot is never mutated, so one
    scheduler can serve any number of requests.
    """

    def __init__(
        self,
        node_budget: int = DEFAULT_NODE_BUDGET,
        time_limit: float | None = DEFAULT_TIME_LIMIT,
        balance: bool = True,
    ):
        """
        Initialize the scheduler.

        Args:
            node_budget: Maximum node expansions per run.
            time_limit: Optional wall-clock limit per run, in seconds.
            balance: Spread each subject's periods evenly across the week.
        """
        if node_budget < 1:
            raise ValueError(f"node_budget must be positive, got {node_budget}")
        self.node_budget = node_budget
        self.time_limit = time_limit
        self.balance = balance

    def schedule(
        self,
        problem: ScheduleProblem,
        cancel_event: threading.Event | None = None,
    ) -> ScheduleResult:
        """
        Generate a timetable for a validated problem.

        Args:
            problem: Validated problem snapshot.
            cancel_event: Optional token; setting it stops the run as CANCELLED.

        Returns:
            ScheduleResult holding either the timetable or a failure descriptor

        Raises:
            InternalConsistencyError: If the search produced an invalid state
        """
        logger.info(
            f"Scheduling {len(problem.classes)} classes and "
            f"{len(problem.faculty)} faculty members"
        )
        formatter = ResultFormatter(problem)

        reasons = FeasibilityPrecheck(problem).check()
        if reasons:
            logger.warning(f"Problem is infeasible ({len(reasons)} reasons found before search)")
            return formatter.format(
                SearchOutcome(
                    status=SearchStatus.INFEASIBLE,
                    statistics=ScheduleStatistics(),
                    reasons=reasons,
                )
            )

        search = BacktrackingSearch(
            problem,
            node_budget=self.node_budget,
            time_limit=self.time_limit,
            balance=self.balance,
            cancel_event=cancel_event,
        )
        outcome = search.run()

        if outcome.status is SearchStatus.INFEASIBLE:
            outcome.reasons.append(
                "Exhaustive search found no assignment satisfying all hard constraints"
            )

        result = formatter.format(outcome)
        logger.info(f"Scheduling finished: {result.status.value}")
        return result


def generate_timetable(
    data: ScheduleProblem | dict[str, Any],
    node_budget: int = DEFAULT_NODE_BUDGET,
    time_limit: float | None = DEFAULT_TIME_LIMIT,
    balance: bool = True,
    cancel_event: threading.Event | None = None,
) -> ScheduleResult:
    """
    Generate a timetable from a problem or its dictionary form.

    Raises:
        ValidationError: If the input is malformed
    """
    problem = data if isinstance(data, ScheduleProblem) else ScheduleProblem.from_dict(data)
    scheduler = TimetableScheduler(node_budget=node_budget, time_limit=time_limit, balance=balance)
    return scheduler.schedule(problem, cancel_event=cancel_event)
