"""Validation logic for timetable input data."""

from typing import TYPE_CHECKING, Iterable

from .constants import MAX_PERIOD, MIN_PERIOD

if TYPE_CHECKING:
    from .models import Faculty, SchoolClass, Slot, Subject


def validate_name(name: str, entity: str) -> tuple[bool, str | None]:
    """Validate a display name.

    Args:
        name: Name to validate
        entity: Entity description for the error message

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not name or not str(name).strip():
        return False, f"{entity} has an empty name"
    return True, None


def validate_faculty(faculty: "Faculty") -> tuple[bool, str | None]:
    """Validate a faculty member's teaching limits.

    Both bounds must be at least 1 and the consecutive limit may not exceed
    the daily limit.

    Args:
        faculty: Faculty to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    label = f"Faculty '{faculty.name or faculty.id}'"

    if faculty.max_hours_per_day < 1:
        return False, f"{label}: maxHoursPerDay must be at least 1, got {faculty.max_hours_per_day}"

    if faculty.max_consecutive_hours < 1:
        return False, (
            f"{label}: maxConsecutiveHours must be at least 1, "
            f"got {faculty.max_consecutive_hours}"
        )

    if faculty.max_consecutive_hours > faculty.max_hours_per_day:
        return False, (
            f"{label}: maxConsecutiveHours ({faculty.max_consecutive_hours}) "
            f"exceeds maxHoursPerDay ({faculty.max_hours_per_day})"
        )

    return True, None


def validate_subject(
    subject: "Subject", class_name: str, faculty_ids: set[str]
) -> tuple[bool, str | None]:
    """Validate a subject's hours and faculty reference.

    Args:
        subject: Subject to validate
        class_name: Owning class name for the error message
        faculty_ids: Known faculty identifiers

    Returns:
        Tuple of (is_valid, error_message)
    """
    label = f"Subject '{subject.name or subject.id}' in class '{class_name}'"

    if subject.weekly_hours <= 0:
        return False, f"{label}: weeklyHours must be positive, got {subject.weekly_hours}"

    if subject.faculty_id not in faculty_ids:
        return False, f"{label}: unknown faculty '{subject.faculty_id}'"

    return True, None


def validate_slot(slot: "Slot", class_name: str) -> tuple[bool, str | None]:
    """Validate that an unavailable slot lies inside the grid."""
    if not MIN_PERIOD <= slot.period <= MAX_PERIOD:
        return False, (
            f"Class '{class_name}': unavailable period {slot.period} on "
            f"{slot.day.display_name} is outside {MIN_PERIOD}-{MAX_PERIOD}"
        )
    return True, None


def _duplicates(ids: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for item in ids:
        if item in seen and item not in duplicates:
            duplicates.append(item)
        seen.add(item)
    return duplicates


def validate_problem(
    faculty: Iterable["Faculty"], classes: Iterable["SchoolClass"]
) -> list[str]:
    """Validate a full input snapshot.

    Collects every problem instead of stopping at the first one.

    Args:
        faculty: Faculty roster
        classes: Classes with their subjects and blackout slots

    Returns:
        List of error messages (empty when the input is valid)
    """
    faculty = list(faculty)
    classes = list(classes)
    errors: list[str] = []

    for faculty_id in _duplicates(f.id for f in faculty):
        errors.append(f"Duplicate faculty id '{faculty_id}'")
    for class_id in _duplicates(c.id for c in classes):
        errors.append(f"Duplicate class id '{class_id}'")
    for subject_id in _duplicates(s.id for c in classes for s in c.subjects):
        errors.append(f"Duplicate subject id '{subject_id}'")
    for class_name in _duplicates(c.name for c in classes if c.name):
        errors.append(f"Duplicate class name '{class_name}'")

    for member in faculty:
        if not member.id:
            errors.append(f"Faculty '{member.name}' has an empty id")
        for is_valid, message in (
            validate_name(member.name, f"Faculty '{member.id}'"),
            validate_faculty(member),
        ):
            if not is_valid:
                errors.append(message)

    faculty_ids = {f.id for f in faculty}

    for school_class in classes:
        if not school_class.id:
            errors.append(f"Class '{school_class.name}' has an empty id")
        is_valid, message = validate_name(school_class.name, f"Class '{school_class.id}'")
        if not is_valid:
            errors.append(message)

        if not school_class.subjects:
            errors.append(f"Class '{school_class.name or school_class.id}' has no subjects")

        for subject in school_class.subjects:
            if not subject.id:
                errors.append(
                    f"Subject '{subject.name}' in class '{school_class.name}' has an empty id"
                )
            for is_valid, message in (
                validate_name(subject.name, f"Subject '{subject.id}'"),
                validate_subject(subject, school_class.name, faculty_ids),
            ):
                if not is_valid:
                    errors.append(message)

        for slot in sorted(school_class.unavailable_slots, key=lambda s: s.key):
            is_valid, message = validate_slot(slot, school_class.name)
            if not is_valid:
                errors.append(message)

    return errors
