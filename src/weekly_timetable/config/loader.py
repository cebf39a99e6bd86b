"""Problem file loader."""

import json
import logging
from pathlib import Path
from typing import Any

from ..exceptions import ConfigError
from ..models import ScheduleProblem
from .settings import SolverSettings

logger = logging.getLogger(__name__)

# File looked up when the loader is given a directory
DEFAULT_PROBLEM_FILE = "timetable.json"


class ConfigLoader:
    """Loads a problem file and its solver settings.

    Expected shape::

        {
            "faculty": [{"id", "name", "maxHoursPerDay", "maxConsecutiveHours"}],
            "classes": [{"id", "name", "subjects": [...], "unavailableSlots": [...]}],
            "solver": {"node_budget", "time_limit", "balance_distribution"}
        }
    """

    def __init__(self, path: Path | str):
        """
        Initialize the loader.

        Args:
            path: Problem file, or a directory containing ``timetable.json``.
        """
        path = Path(path)
        if path.is_dir():
            found = self._get_path(path, DEFAULT_PROBLEM_FILE)
            if found is None:
                raise ConfigError(f"No {DEFAULT_PROBLEM_FILE} found", str(path))
            path = found
        self.path = path
        self._data: dict[str, Any] | None = None

    @staticmethod
    def _get_path(config_dir: Path, filename: str) -> Path | None:
        """Get path to config file if it exists."""
        path = config_dir / filename
        return path if path.exists() else None

    @property
    def data(self) -> dict[str, Any]:
        """Raw JSON content, read once."""
        if self._data is None:
            self._data = self._read()
        return self._data

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            raise ConfigError("File not found", str(self.path))
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON at line {e.lineno}: {e.msg}", str(self.path)) from e
        except OSError as e:
            raise ConfigError(f"Cannot read file: {e.strerror}", str(self.path)) from e

        if not isinstance(data, dict):
            raise ConfigError("Top level must be an object", str(self.path))
        for key in ("faculty", "classes"):
            if key not in data:
                raise ConfigError(f"Missing '{key}' section", str(self.path))

        logger.debug(f"Loaded configuration from {self.path}")
        return data

    def load_problem(self) -> ScheduleProblem:
        """Build the validated problem snapshot.

        Raises:
            ConfigError: If the file cannot be read
            ValidationError: If the content is invalid
        """
        problem = ScheduleProblem.from_dict(self.data)
        logger.info(
            f"Loaded {len(problem.faculty)} faculty and {len(problem.classes)} classes "
            f"from {self.path.name}"
        )
        return problem

    def load_settings(self) -> SolverSettings:
        """Solver settings from the optional ``solver`` block."""
        try:
            return SolverSettings.from_dict(self.data.get("solver"))
        except ConfigError as e:
            raise ConfigError(e.message, str(self.path)) from e


def write_problem(data: dict[str, Any], path: Path | str) -> Path:
    """Write a problem in file shape as indented JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    return path
