"""Validation of a single lesson's own time range."""

from .config import ValidatorConfig
from .constants import ERROR_MESSAGES
from .models import ErrorType, Lesson, ValidationError
from .time_utils import to_minutes

_DEFAULT_CONFIG = ValidatorConfig()


def validate_lesson_time(
    lesson: Lesson, config: ValidatorConfig | None = None
) -> ValidationError | None:
    """Check that a lesson's time range is ordered and within operating hours.

    Args:
        lesson: Lesson to check
        config: Operating window; defaults to 08:00-20:00

    Returns:
        An invalid_time error, or None if the time range is valid
    """
    config = config or _DEFAULT_CONFIG
    start = to_minutes(lesson.start_time)
    end = to_minutes(lesson.end_time)

    if start >= end:
        return ValidationError(
            type=ErrorType.INVALID_TIME,
            message=ERROR_MESSAGES["end_before_start"],
            lesson_id=lesson.id,
        )

    if start < config.opening_minutes or end > config.closing_minutes:
        return ValidationError(
            type=ErrorType.INVALID_TIME,
            message=ERROR_MESSAGES["outside_hours"].format(
                opening=config.opening_time, closing=config.closing_time
            ),
            lesson_id=lesson.id,
        )

    return None
