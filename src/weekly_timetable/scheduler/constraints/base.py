"""Base class for constraint implementations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models import ScheduleProblem
    from ..models import Timetable


@dataclass(frozen=True)
class Violation:
    """One constraint violation found in a timetable.

    Attributes:
        kind: Constraint identifier (a ConstraintKind value for hard constraints)
        message: Human-readable description
        amount: Size of the violation (e.g., periods over a limit)
    """

    kind: str
    message: str
    amount: int = 1


class ConstraintBase(ABC):
    """Abstract base class for constraint implementations."""

    def __init__(self, problem: "ScheduleProblem"):
        """
        Initialize constraint handler.

        Args:
            problem: Validated problem snapshot the constraints refer to.
        """
        self.problem = problem
        self._subject_by_id = problem.subject_by_id
        self._faculty_by_id = problem.faculty_by_id
        self._class_by_id = problem.class_by_id

    @abstractmethod
    def audit(self, timetable: "Timetable") -> list[Violation]:
        """
        Check a complete timetable.

        Args:
            timetable: Timetable to check.

        Returns:
            Every violation found, in a deterministic order.
        """
        pass
