"""Constraint implementations for the scheduler."""

from .base import ConstraintBase, Violation
from .hard import HardConstraints
from .soft import SoftConstraints

__all__ = [
    "ConstraintBase",
    "HardConstraints",
    "SoftConstraints",
    "Violation",
]
