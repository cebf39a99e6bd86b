"""Weekly Timetable - constraint-based timetable generation for schools.

This module builds a weekly class timetable (Monday to Friday, five periods a
day) that meets every subject's weekly hours while respecting each faculty
member's daily and consecutive teaching limits and each class's blocked slots.

Example usage:
    from weekly_timetable import ScheduleProblem, TimetableScheduler

    problem = ScheduleProblem.from_dict(data)
    result = TimetableScheduler().schedule(problem)

    if result.is_solved:
        print(result.timetable["Monday"]["CS101"]["Period 1"])
    else:
        print(result.failure.message)

    # Export to JSON
    from weekly_timetable.exporters import JSONExporter
    exporter = JSONExporter()
    exporter.export(result, "timetable.json")
"""

from .config import ConfigLoader, SolverSettings, sample_problem_data
from .exceptions import (
    ConfigError,
    InternalConsistencyError,
    TimetableError,
    ValidationError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .models import Day, Faculty, ScheduleProblem, SchoolClass, Slot, Subject
from .scheduler import (
    ScheduleResult,
    SearchStatus,
    TimetableScheduler,
    generate_timetable,
)

__version__ = "0.1.0"

__all__ = [
    # Main scheduler
    "TimetableScheduler",
    "generate_timetable",
    "ScheduleResult",
    "SearchStatus",
    # Models
    "Day",
    "Slot",
    "Faculty",
    "Subject",
    "SchoolClass",
    "ScheduleProblem",
    # Configuration
    "ConfigLoader",
    "SolverSettings",
    "sample_problem_data",
    # Exporters
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "TimetableError",
    "ValidationError",
    "ConfigError",
    "InternalConsistencyError",
]
