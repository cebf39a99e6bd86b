"""Custom exceptions for the timetable generator."""


class TimetableError(Exception):
    """Base exception for timetable errors."""

    pass


class ValidationError(TimetableError):
    """Input data failed validation.

    Every problem found in one pass is collected in ``errors`` so the caller
    can show them all at once.
    """

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        if len(self.errors) == 1:
            message = f"Invalid input: {self.errors[0]}"
        else:
            message = f"Invalid input ({len(self.errors)} problems): " + "; ".join(self.errors)
        super().__init__(message)


class ConfigError(TimetableError):
    """Configuration file could not be read or understood."""

    def __init__(self, message: str, path: str | None = None):
        self.message = message
        self.path = path
        location = f" in '{path}'" if path else ""
        super().__init__(f"Configuration error{location}: {message}")


class InternalConsistencyError(TimetableError):
    """The search produced a state that violates a hard constraint.

    This is never a property of the input. It means the solver itself is
    broken, so the run is aborted instead of returning the timetable.
    """

    def __init__(self, message: str, violations: list[str] | None = None):
        self.violations = violations or []
        if self.violations:
            message += ": " + ", ".join(self.violations)
        super().__init__(message)
