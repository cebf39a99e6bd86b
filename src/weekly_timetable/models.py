"""Domain model for the weekly timetable generator.

Entities are immutable. A ``ScheduleProblem`` is built once per generation
request from the configuration snapshot and is read-only while the search runs.
"""

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Any, Self

from .constants import DAY_NAMES, PERIODS
from .exceptions import ValidationError
from .utils import parse_day_index
from .validators import validate_problem


class Day(Enum):
    """Days of the teaching week."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4

    @property
    def display_name(self) -> str:
        """Name used in output ("Monday")."""
        return DAY_NAMES[self.value]

    @classmethod
    def parse(cls, value: "str | int | Day") -> "Day":
        """Parse a day from a name, abbreviation or index.

        Raises:
            ValidationError: If the value is not a working day
        """
        if isinstance(value, Day):
            return value
        index = parse_day_index(value)
        if index is None:
            raise ValidationError(f"Unknown day: '{value}'")
        return cls(index)


WEEKDAYS = list(Day)


@dataclass(frozen=True)
class Slot:
    """A (day, period) coordinate in the weekly grid."""

    day: Day
    period: int

    @property
    def key(self) -> tuple[int, int]:
        """Sort key: day first, then period."""
        return (self.day.value, self.period)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a Slot from ``{"day": "Wednesday", "period": 3}``."""
        try:
            return cls(day=Day.parse(data["day"]), period=int(data["period"]))
        except KeyError as e:
            raise ValidationError(f"Unavailable slot is missing '{e.args[0]}'") from e
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid unavailable slot {data!r}") from e

    def to_dict(self) -> dict[str, Any]:
        return {"day": self.day.display_name, "period": self.period}

    def __str__(self) -> str:
        return f"{self.day.display_name} P{self.period}"


def all_slots() -> list[Slot]:
    """Every slot of the week, ordered by day then period."""
    return [Slot(day, period) for day in WEEKDAYS for period in PERIODS]


def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Read the first key present, so camelCase and snake_case both work."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def _require_int(data: dict[str, Any], entity: str, *keys: str) -> int:
    value = _pick(data, *keys)
    if value is None:
        raise ValidationError(f"{entity} is missing '{keys[0]}'")
    if isinstance(value, bool):
        raise ValidationError(f"{entity} has a non-integer '{keys[0]}': {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{entity} has a non-integer '{keys[0]}': {value!r}") from e
    if number != value and not isinstance(value, str):
        raise ValidationError(f"{entity} has a non-integer '{keys[0]}': {value!r}")
    return number


@dataclass(frozen=True)
class Faculty:
    """A teacher with daily and consecutive teaching limits."""

    id: str
    name: str
    max_hours_per_day: int
    max_consecutive_hours: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a Faculty from a dictionary (camelCase or snake_case keys)."""
        label = f"Faculty '{data.get('name') or data.get('id') or '?'}'"
        return cls(
            id=str(_pick(data, "id", default="")),
            name=str(_pick(data, "name", default="")),
            max_hours_per_day=_require_int(data, label, "maxHoursPerDay", "max_hours_per_day"),
            max_consecutive_hours=_require_int(
                data, label, "maxConsecutiveHours", "max_consecutive_hours"
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "maxHoursPerDay": self.max_hours_per_day,
            "maxConsecutiveHours": self.max_consecutive_hours,
        }


@dataclass(frozen=True)
class Subject:
    """A subject taught to one class by one faculty member.

    Attributes:
        id: Unique identifier
        name: Display name
        faculty_id: Reference to the teaching Faculty
        weekly_hours: Exact number of periods required per week
        order: Position within the owning class (tie-breaking)
    """

    id: str
    name: str
    faculty_id: str
    weekly_hours: int
    order: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any], order: int = 0) -> Self:
        """Create a Subject from a dictionary (camelCase or snake_case keys)."""
        label = f"Subject '{data.get('name') or data.get('id') or '?'}'"
        return cls(
            id=str(_pick(data, "id", default="")),
            name=str(_pick(data, "name", default="")),
            faculty_id=str(_pick(data, "facultyId", "faculty_id", default="")),
            weekly_hours=_require_int(data, label, "weeklyHours", "weekly_hours"),
            order=order,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "facultyId": self.faculty_id,
            "weeklyHours": self.weekly_hours,
        }


@dataclass(frozen=True)
class SchoolClass:
    """A class (student cohort) with its subjects and blackout slots."""

    id: str
    name: str
    subjects: tuple[Subject, ...] = ()
    unavailable_slots: frozenset[Slot] = frozenset()
    order: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any], order: int = 0) -> Self:
        """Create a SchoolClass from a dictionary (camelCase or snake_case keys)."""
        subjects = _pick(data, "subjects", default=[]) or []
        slots = _pick(data, "unavailableSlots", "unavailable_slots", default=[]) or []
        return cls(
            id=str(_pick(data, "id", default="")),
            name=str(_pick(data, "name", default="")),
            subjects=tuple(Subject.from_dict(s, order=i) for i, s in enumerate(subjects)),
            unavailable_slots=frozenset(Slot.from_dict(s) for s in slots),
            order=order,
        )

    @cached_property
    def open_slots(self) -> list[Slot]:
        """Slots that can hold a lesson, ordered by day then period."""
        return [slot for slot in all_slots() if slot not in self.unavailable_slots]

    @property
    def total_weekly_hours(self) -> int:
        return sum(s.weekly_hours for s in self.subjects)

    def is_available(self, slot: Slot) -> bool:
        return slot not in self.unavailable_slots

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "subjects": [s.to_dict() for s in self.subjects],
            "unavailableSlots": [
                s.to_dict() for s in sorted(self.unavailable_slots, key=lambda s: s.key)
            ],
        }


@dataclass(frozen=True)
class ScheduleProblem:
    """Validated, immutable input snapshot for one generation request.

    Raises:
        ValidationError: On construction, listing every problem found
    """

    faculty: tuple[Faculty, ...]
    classes: tuple[SchoolClass, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "faculty", tuple(self.faculty))
        object.__setattr__(self, "classes", tuple(self.classes))
        errors = validate_problem(self.faculty, self.classes)
        if errors:
            raise ValidationError(errors)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a problem from ``{"faculty": [...], "classes": [...]}``."""
        faculty = data.get("faculty", [])
        classes = data.get("classes", [])
        if not isinstance(faculty, list) or not isinstance(classes, list):
            raise ValidationError("'faculty' and 'classes' must be lists")
        return cls(
            faculty=tuple(Faculty.from_dict(f) for f in faculty),
            classes=tuple(SchoolClass.from_dict(c, order=i) for i, c in enumerate(classes)),
        )

    @cached_property
    def faculty_by_id(self) -> dict[str, Faculty]:
        return {f.id: f for f in self.faculty}

    @cached_property
    def class_by_id(self) -> dict[str, SchoolClass]:
        return {c.id: c for c in self.classes}

    @cached_property
    def subject_by_id(self) -> dict[str, Subject]:
        return {s.id: s for c in self.classes for s in c.subjects}

    @cached_property
    def class_of_subject(self) -> dict[str, SchoolClass]:
        return {s.id: c for c in self.classes for s in c.subjects}

    def faculty_for(self, subject: Subject) -> Faculty:
        """Faculty teaching a subject (references are validated)."""
        return self.faculty_by_id[subject.faculty_id]

    def subjects_of_faculty(self, faculty_id: str) -> list[Subject]:
        return [
            s for c in self.classes for s in c.subjects if s.faculty_id == faculty_id
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "faculty": [f.to_dict() for f in self.faculty],
            "classes": [c.to_dict() for c in self.classes],
        }
