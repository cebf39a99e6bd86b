"""Constants for timetable search."""

from .models import SearchStatus

# Node expansions allowed before a run gives up with BUDGET_EXCEEDED
DEFAULT_NODE_BUDGET = 200_000

# Wall-clock limit in seconds (None means only the node budget applies)
DEFAULT_TIME_LIMIT: float | None = None

# Time limit for the CP-SAT cross-check, in seconds
DEFAULT_VERIFY_TIME_LIMIT = 10.0

# The clock and the cancel token are polled every N expansions
CANCEL_CHECK_INTERVAL = 256

# Soft cap per subject per day is ceil(weeklyHours / 5) + margin
DISTRIBUTION_CAP_MARGIN = 1

# User-facing messages per failure kind
FAILURE_MESSAGES = {
    SearchStatus.INFEASIBLE: "Constraints cannot be satisfied: no valid timetable exists.",
    SearchStatus.BUDGET_EXCEEDED: (
        "Search budget exceeded before feasibility could be decided. "
        "Retry with a larger budget or relaxed constraints."
    ),
    SearchStatus.CANCELLED: "Search was cancelled before it finished.",
}
