"""Conflict detection for recurring weekly schedules."""

import logging
from collections.abc import Iterable, Iterator

from .config import ValidatorConfig
from .constants import ERROR_MESSAGES
from .models import ErrorType, Lesson, Schedule, ValidationError, ValidationReport
from .time_utils import lessons_overlap
from .validation import validate_lesson_time
from .weeks import lessons_share_week

logger = logging.getLogger(__name__)


def lessons_collide(first: Lesson, second: Lesson) -> bool:
    """Check whether two lessons occupy the same time on the same week.

    Room and teacher are not compared here; a collision only becomes a
    conflict when the lessons also share one of them.
    """
    return (
        first.day_of_week == second.day_of_week
        and lessons_share_week(first, second)
        and lessons_overlap(first, second)
    )


class ConflictDetector:
    """Finds invalid lesson times and room/teacher conflicts.

    The scan is exhaustive and deterministic:
    - lessons of the target schedule are visited in order
    - a lesson with an invalid time range is reported and not compared further
    - every remaining lesson is compared with the later lessons of its own
      schedule, then with every lesson of the other schedules
    - for each colliding pair the room check runs before the teacher check

    Every error is attributed to the target schedule's lesson, so validating
    schedule A against B and B against A reports each conflict once per side.
    """

    def __init__(self, config: ValidatorConfig | None = None) -> None:
        self.config = config or ValidatorConfig()

    def validate_schedule(
        self, target: Schedule, others: Iterable[Schedule] = ()
    ) -> list[ValidationError]:
        """Validate a schedule internally and against other schedules.

        Args:
            target: Schedule under validation
            others: Schedules of other groups in the same scheduling universe;
                    an entry with the target's id is ignored

        Returns:
            All errors found, in scan order. Empty if the schedule is consistent.
        """
        others = [s for s in others if s.id != target.id]
        errors: list[ValidationError] = []
        lessons = target.lessons

        for i, lesson in enumerate(lessons):
            time_error = validate_lesson_time(lesson, self.config)
            if time_error:
                logger.debug(f"Lesson {lesson.id}: {time_error.message}")
                errors.append(time_error)
                continue

            for other in lessons[i + 1 :]:
                errors.extend(self._check_pair(lesson, other, None))

            for schedule in others:
                for other in schedule.lessons:
                    errors.extend(self._check_pair(lesson, other, schedule.id))

        if errors:
            logger.info(
                f"Schedule {target.id}: {len(errors)} error(s) in {len(lessons)} lesson(s)"
            )
        return errors

    def report(self, target: Schedule, others: Iterable[Schedule] = ()) -> ValidationReport:
        """Validate a schedule and wrap the result in a ValidationReport."""
        return ValidationReport(
            schedule_id=target.id,
            errors=self.validate_schedule(target, others),
            lessons_checked=len(target.lessons),
        )

    def find_conflicting_pairs(
        self, target: Schedule, others: Iterable[Schedule] = ()
    ) -> Iterator[tuple[Lesson, Lesson, str | None]]:
        """Yield (lesson, other_lesson, other_schedule_id) for every conflicting pair.

        Uses the same scan order and time gate as validate_schedule; the
        schedule id is None for pairs inside the target schedule.
        """
        others = [s for s in others if s.id != target.id]
        lessons = target.lessons

        for i, lesson in enumerate(lessons):
            if validate_lesson_time(lesson, self.config):
                continue

            candidates = [(other, None) for other in lessons[i + 1 :]]
            for schedule in others:
                candidates.extend((other, schedule.id) for other in schedule.lessons)

            for other, schedule_id in candidates:
                if self._check_pair(lesson, other, schedule_id):
                    yield lesson, other, schedule_id

    def _check_pair(
        self, lesson: Lesson, other: Lesson, other_schedule_id: str | None
    ) -> list[ValidationError]:
        """Compare two lessons and return room/teacher conflicts for the first.

        Args:
            lesson: Lesson of the target schedule
            other: Lesson it is compared with
            other_schedule_id: Id of the other lesson's schedule, None if it
                               belongs to the target schedule

        Returns:
            Zero, one or two errors (room before teacher)
        """
        if not lessons_collide(lesson, other):
            return []

        cross = other_schedule_id is not None
        errors = []

        if lesson.room == other.room:
            key = "room_other" if cross else "room"
            errors.append(
                ValidationError(
                    type=ErrorType.ROOM_CONFLICT,
                    message=ERROR_MESSAGES[key].format(room=lesson.room),
                    lesson_id=lesson.id,
                    other_lesson_id=other.id,
                    other_schedule_id=other_schedule_id,
                )
            )

        if lesson.teacher_id == other.teacher_id:
            key = "teacher_other" if cross else "teacher"
            errors.append(
                ValidationError(
                    type=ErrorType.TEACHER_CONFLICT,
                    message=ERROR_MESSAGES[key],
                    lesson_id=lesson.id,
                    other_lesson_id=other.id,
                    other_schedule_id=other_schedule_id,
                )
            )

        for error in errors:
            logger.debug(
                f"{error.type.value}: lesson {lesson.id} vs {other.id} "
                f"(day {int(lesson.day_of_week)}, {lesson.start_time}-{lesson.end_time})"
            )
        return errors


def validate_schedule(
    target: Schedule,
    others: Iterable[Schedule] = (),
    config: ValidatorConfig | None = None,
) -> list[ValidationError]:
    """Validate a schedule with a default ConflictDetector."""
    return ConflictDetector(config).validate_schedule(target, others)
