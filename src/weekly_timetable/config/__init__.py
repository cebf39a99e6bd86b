"""Configuration loading for the timetable generator."""

from .defaults import DEFAULT_CLASSES, DEFAULT_FACULTY, sample_problem_data
from .loader import DEFAULT_PROBLEM_FILE, ConfigLoader, write_problem
from .settings import SolverSettings

__all__ = [
    "ConfigLoader",
    "SolverSettings",
    "DEFAULT_PROBLEM_FILE",
    "DEFAULT_FACULTY",
    "DEFAULT_CLASSES",
    "sample_problem_data",
    "write_problem",
]
