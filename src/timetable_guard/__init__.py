"""timetable-guard - conflict detection for recurring weekly timetables.

This package checks weekly class schedules for invalid lesson times and for
room or teacher double-bookings, honouring odd/even week recurrence, and
expands bulk specifications and templates into lesson candidates that are
checked with the same rules before they are stored.

Example usage:
    from timetable_guard import Day, Lesson, Schedule, can_add_lesson

    schedule = Schedule(id="2024-1_group-a", group_id="group-a", semester_id="2024-1")
    lesson = Lesson(
        day_of_week=Day.TUESDAY,
        start_time="10:00",
        end_time="11:30",
        room="204",
        teacher_id="teacher-1",
    )

    errors = can_add_lesson(lesson, schedule, others=other_group_schedules)
    for error in errors:
        print(f"{error.type.value}: {error.message}")
"""

from .bulk import BulkGenerator, apply_template, expand
from .config import ConfigLoader, ValidatorConfig
from .conflicts import ConflictDetector, lessons_collide, validate_schedule
from .exceptions import (
    ConfigError,
    InvalidBulkSpecError,
    InvalidLessonError,
    InvalidTimeFormatError,
    LessonNotFoundError,
    TimetableError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .guard import BatchResult, ScheduleMutationGuard, can_add_lesson
from .models import (
    BulkLessonSpec,
    Day,
    ErrorType,
    Lesson,
    LessonType,
    Schedule,
    ScheduleTemplate,
    ValidationError,
    ValidationReport,
    WeekType,
)
from .time_utils import intervals_overlap, lessons_overlap, to_minutes
from .validation import validate_lesson_time
from .weeks import weeks_compatible

__version__ = "0.1.0"

__all__ = [
    # Validation
    "ConflictDetector",
    "ScheduleMutationGuard",
    "BatchResult",
    "validate_schedule",
    "can_add_lesson",
    "validate_lesson_time",
    "lessons_collide",
    # Generation
    "BulkGenerator",
    "expand",
    "apply_template",
    # Rules
    "to_minutes",
    "intervals_overlap",
    "lessons_overlap",
    "weeks_compatible",
    # Models
    "Day",
    "WeekType",
    "LessonType",
    "ErrorType",
    "Lesson",
    "Schedule",
    "ValidationError",
    "ValidationReport",
    "BulkLessonSpec",
    "ScheduleTemplate",
    # Configuration
    "ValidatorConfig",
    "ConfigLoader",
    # Exporters
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "TimetableError",
    "InvalidTimeFormatError",
    "InvalidLessonError",
    "InvalidBulkSpecError",
    "LessonNotFoundError",
    "ConfigError",
]
