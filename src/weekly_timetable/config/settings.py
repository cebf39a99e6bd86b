"""Solver settings read from the optional ``solver`` block of a problem file."""

import dataclasses
from dataclasses import dataclass
from typing import Any, Self

from ..exceptions import ConfigError
from ..scheduler.constants import DEFAULT_NODE_BUDGET, DEFAULT_TIME_LIMIT


@dataclass(frozen=True)
class SolverSettings:
    """Tuning knobs for one scheduling run.

    Attributes:
        node_budget: Maximum node expansions before BUDGET_EXCEEDED
        time_limit: Optional wall-clock limit in seconds
        balance_distribution: Spread subjects evenly across the week
    """

    node_budget: int = DEFAULT_NODE_BUDGET
    time_limit: float | None = DEFAULT_TIME_LIMIT
    balance_distribution: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Self:
        """Create settings from a ``solver`` block (camelCase or snake_case keys).

        Raises:
            ConfigError: If a value has the wrong type or range
        """
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("'solver' must be an object")

        node_budget = data.get("node_budget", data.get("nodeBudget", DEFAULT_NODE_BUDGET))
        time_limit = data.get("time_limit", data.get("timeLimit", DEFAULT_TIME_LIMIT))
        balance = data.get(
            "balance_distribution", data.get("balanceDistribution", True)
        )

        if isinstance(node_budget, bool) or not isinstance(node_budget, int) or node_budget < 1:
            raise ConfigError(f"node_budget must be a positive integer, got {node_budget!r}")
        if time_limit is not None:
            if isinstance(time_limit, bool) or not isinstance(time_limit, (int, float)):
                raise ConfigError(f"time_limit must be a number, got {time_limit!r}")
            if time_limit <= 0:
                raise ConfigError(f"time_limit must be positive, got {time_limit!r}")
        if not isinstance(balance, bool):
            raise ConfigError(f"balance_distribution must be true or false, got {balance!r}")

        return cls(
            node_budget=node_budget,
            time_limit=float(time_limit) if time_limit is not None else None,
            balance_distribution=balance,
        )

    def with_overrides(self, **overrides: Any) -> Self:
        """Copy with every non-None override applied (CLI options win)."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)
