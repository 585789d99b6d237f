"""Pre-write checks for adding, editing and batch-creating lessons.

The guard never touches storage. Its answer is advisory: validation and the
subsequent write are separate steps, so an integrating service has to
serialise writes per semester (or keep a storage-side constraint) to rule
out two concurrent writers both passing validation.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .config import ValidatorConfig
from .conflicts import ConflictDetector
from .exceptions import LessonNotFoundError
from .models import Lesson, Schedule, ValidationError

logger = logging.getLogger(__name__)


def errors_for(errors: Iterable[ValidationError], lesson_id: str) -> list[ValidationError]:
    """Filter errors attributed to one lesson."""
    return [error for error in errors if error.lesson_id == lesson_id]


def errors_involving(
    errors: Iterable[ValidationError], lesson_id: str
) -> list[ValidationError]:
    """Filter errors attributed to a lesson or naming it as the other side.

    An appended lesson is scanned last, so its intra-schedule conflicts are
    attributed to the earlier lesson it collides with.
    """
    return [
        error
        for error in errors
        if error.lesson_id == lesson_id or error.other_lesson_id == lesson_id
    ]


@dataclass
class BatchResult:
    """Outcome of checking a batch of candidate lessons."""

    accepted: list[Lesson] = field(default_factory=list)
    rejected: list[Lesson] = field(default_factory=list)
    errors: dict[str, list[ValidationError]] = field(default_factory=dict)

    @property
    def all_accepted(self) -> bool:
        return not self.rejected

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "accepted": [lesson.to_dict() for lesson in self.accepted],
            "rejected": [lesson.to_dict() for lesson in self.rejected],
            "errors": {
                lesson_id: [error.to_dict() for error in errors]
                for lesson_id, errors in self.errors.items()
            },
        }


class ScheduleMutationGuard:
    """Answers whether a schedule change would introduce errors."""

    def __init__(
        self,
        config: ValidatorConfig | None = None,
        detector: ConflictDetector | None = None,
    ) -> None:
        self.detector = detector or ConflictDetector(config)

    def can_add_lesson(
        self,
        candidate: Lesson,
        schedule: Schedule,
        others: Iterable[Schedule] = (),
    ) -> list[ValidationError]:
        """Validate the schedule as it would be with the candidate appended.

        Args:
            candidate: Lesson about to be created
            schedule: Current schedule of the candidate's group (not modified)
            others: Other schedules of the same semester

        Returns:
            Errors of the hypothetical schedule; empty authorises the write
        """
        return self.detector.validate_schedule(schedule.with_lesson(candidate), others)

    def can_replace_lesson(
        self,
        lesson_id: str,
        candidate: Lesson,
        schedule: Schedule,
        others: Iterable[Schedule] = (),
    ) -> list[ValidationError]:
        """Validate an edit: the schedule with one lesson swapped for the candidate.

        Raises:
            LessonNotFoundError: If lesson_id is not in the schedule
        """
        if schedule.get_lesson(lesson_id) is None:
            raise LessonNotFoundError(lesson_id, schedule.id)

        return self.detector.validate_schedule(
            schedule.replace_lesson(lesson_id, candidate), others
        )

    def can_add_lessons(
        self,
        candidates: Iterable[Lesson],
        schedule: Schedule,
        others: Iterable[Schedule] = (),
    ) -> BatchResult:
        """Check candidates one at a time against a growing hypothetical schedule.

        A candidate is accepted when adding it produces no error involving
        it; accepted candidates become part of the schedule the next candidate
        is checked against. Pre-existing errors between lessons already in the
        schedule do not reject it.

        Args:
            candidates: Lessons to add, in order (e.g. bulk or template output)
            schedule: Current schedule (not modified)
            others: Other schedules of the same semester

        Returns:
            BatchResult with accepted and rejected lessons
        """
        others = list(others)
        result = BatchResult()
        working = schedule

        for candidate in candidates:
            errors = errors_involving(
                self.can_add_lesson(candidate, working, others), candidate.id
            )
            if errors:
                result.rejected.append(candidate)
                result.errors[candidate.id] = errors
                continue

            result.accepted.append(candidate)
            working = working.with_lesson(candidate)

        logger.info(
            f"Schedule {schedule.id}: {len(result.accepted)} lesson(s) accepted, "
            f"{len(result.rejected)} rejected"
        )
        return result


def can_add_lesson(
    candidate: Lesson,
    schedule: Schedule,
    others: Iterable[Schedule] = (),
    config: ValidatorConfig | None = None,
) -> list[ValidationError]:
    """Check a single new lesson with a default guard."""
    return ScheduleMutationGuard(config).can_add_lesson(candidate, schedule, others)
