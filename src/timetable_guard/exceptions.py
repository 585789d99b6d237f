"""Custom exceptions for timetable-guard.

Validation failures (time errors, room and teacher conflicts) are returned as
data. The exceptions below signal programmer errors: malformed input that the
caller was expected to reject before reaching the core.
"""


class TimetableError(Exception):
    """Base exception for timetable-guard errors."""

    pass


class InvalidTimeFormatError(TimetableError):
    """Time or time slot string is not well-formed."""

    def __init__(self, value: object, expected: str = "HH:mm"):
        self.value = value
        self.expected = expected
        super().__init__(f"Invalid time value '{value}'. Expected format: {expected}")


class InvalidLessonError(TimetableError):
    """Lesson record cannot be constructed."""

    def __init__(self, message: str, lesson_id: str | None = None):
        self.lesson_id = lesson_id
        location = f" (lesson '{lesson_id}')" if lesson_id else ""
        super().__init__(f"Invalid lesson{location}: {message}")


class InvalidBulkSpecError(TimetableError):
    """Bulk generation or template input is incomplete or out of range."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class LessonNotFoundError(TimetableError):
    """Lesson id is not part of the schedule."""

    def __init__(self, lesson_id: str, schedule_id: str):
        self.lesson_id = lesson_id
        self.schedule_id = schedule_id
        super().__init__(f"Lesson '{lesson_id}' not found in schedule '{schedule_id}'")


class ConfigError(TimetableError):
    """Configuration file contains inconsistent values."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        self.reason = message
        location = f" in '{path}'" if path else ""
        super().__init__(f"Invalid configuration{location}: {message}")
