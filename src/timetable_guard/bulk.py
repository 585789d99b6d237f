"""Expansion of bulk specifications and templates into concrete lessons.

Generation is pure: the lessons returned here are candidates only. Run them
through ScheduleMutationGuard.can_add_lessons before handing them to storage.
"""

import logging
from collections.abc import Iterable
from itertools import product
from typing import Any, TypeVar

from .config import ValidatorConfig
from .exceptions import InvalidBulkSpecError, TimetableError
from .models import BulkLessonSpec, Lesson, ScheduleTemplate, WeekType
from .time_utils import parse_time_slot
from .weeks import week_parity, weeks_compatible

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fields a template entry must carry to become a lesson
TEMPLATE_REQUIRED_FIELDS = {
    "subjectId": str,
    "dayOfWeek": int,
    "startTime": str,
    "endTime": str,
    "room": str,
}


def _unique(items: Iterable[T]) -> list[T]:
    """Drop repeated selections, keeping first occurrence order."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


class BulkGenerator:
    """Builds lesson candidates from bulk specs and schedule templates."""

    def __init__(self, config: ValidatorConfig | None = None) -> None:
        self.config = config or ValidatorConfig()

    def expand(self, spec: BulkLessonSpec) -> list[Lesson]:
        """Expand a bulk spec into one lesson per day x slot (x week).

        With a week range and an odd or even week type, only weeks of that
        parity are generated.

        Args:
            spec: Subject, room, teacher and the selected days and time slots;
                  a slot is "HH:mm-HH:mm" or a standard pair number

        Returns:
            Lessons ordered by day, then slot, then week, each with a fresh id

        Raises:
            InvalidBulkSpecError: If a required selection is missing, or the
                                  week range is inverted, out of bounds
                                  or holds no week of the requested parity
            InvalidTimeFormatError: If a time slot is malformed
        """
        self._check_spec(spec)

        days = _unique(spec.days)
        slots = _unique(self._resolve_slot(slot) for slot in spec.time_slots)
        weeks: list[int | None] = [None]
        if spec.week_range is not None:
            start_week, end_week = spec.week_range
            weeks = [
                week
                for week in range(start_week, end_week + 1)
                if weeks_compatible(week_parity(week), spec.week_type)
            ]
            if not weeks:
                raise InvalidBulkSpecError(
                    f"Week range {start_week}-{end_week} has no "
                    f"{WeekType(spec.week_type).value} weeks",
                    field="week_range",
                )

        lessons = [
            Lesson(
                day_of_week=day,
                start_time=start,
                end_time=end,
                room=spec.room.strip(),
                teacher_id=spec.teacher_id,
                subject_id=spec.subject_id,
                group_id=spec.group_id,
                semester_id=spec.semester_id,
                lesson_type=spec.lesson_type,
                week_type=spec.week_type,
                week=week,
            )
            for day, (start, end), week in product(days, slots, weeks)
        ]

        logger.info(
            f"Expanded {len(days)} day(s) x {len(slots)} slot(s) x {len(weeks)} week(s) "
            f"into {len(lessons)} lesson(s) for subject {spec.subject_id}"
        )
        return lessons

    def apply_template(
        self, template: ScheduleTemplate, group_id: str, semester_id: str
    ) -> list[Lesson]:
        """Instantiate a template's lessons for a group and semester.

        Entries lacking a required field are skipped with a warning. Missing
        week types default to 'all' and missing teachers stay unassigned.

        Raises:
            InvalidBulkSpecError: If group or semester is missing, or no
                                  entry of the template is usable
        """
        if not group_id:
            raise InvalidBulkSpecError("Group must be selected", field="group_id")
        if not semester_id:
            raise InvalidBulkSpecError("Semester must be selected", field="semester_id")

        lessons = []
        for index, entry in enumerate(template.lessons):
            missing = self._missing_template_fields(entry)
            if missing:
                logger.warning(
                    f"Template '{template.name}': skipping lesson #{index}, "
                    f"missing or invalid {', '.join(missing)}"
                )
                continue

            try:
                lessons.append(self._lesson_from_template(entry, group_id, semester_id))
            except TimetableError as e:
                logger.warning(f"Template '{template.name}': skipping lesson #{index}: {e}")

        if not lessons:
            raise InvalidBulkSpecError(
                f"Template '{template.name}' has no valid lessons to apply", field="lessons"
            )

        logger.info(
            f"Template '{template.name}': {len(lessons)} of {len(template.lessons)} "
            f"lesson(s) prepared for group {group_id}"
        )
        return lessons

    def _check_spec(self, spec: BulkLessonSpec) -> None:
        """Reject incomplete specs before expansion."""
        if not spec.subject_id:
            raise InvalidBulkSpecError("Subject must be selected", field="subject_id")
        if not spec.room or not spec.room.strip():
            raise InvalidBulkSpecError("Room is required", field="room")
        if not spec.days:
            raise InvalidBulkSpecError("At least one day must be selected", field="days")
        if not spec.time_slots:
            raise InvalidBulkSpecError(
                "At least one time slot must be selected", field="time_slots"
            )

        if spec.week_range is not None:
            start_week, end_week = spec.week_range
            if start_week > end_week:
                raise InvalidBulkSpecError(
                    f"Week range is inverted: {start_week}-{end_week}", field="week_range"
                )
            if start_week < self.config.min_week or end_week > self.config.max_week:
                raise InvalidBulkSpecError(
                    f"Week range {start_week}-{end_week} is outside "
                    f"{self.config.min_week}-{self.config.max_week}",
                    field="week_range",
                )

    def _resolve_slot(self, slot: str | int) -> tuple[str, str]:
        """Turn a "HH:mm-HH:mm" slot or a standard pair number into (start, end).

        Pair numbers start at 1 and index the configured time slots.
        """
        is_number = isinstance(slot, int) and not isinstance(slot, bool)
        if is_number or (isinstance(slot, str) and slot.strip().isdigit()):
            number = int(slot)
            if not 1 <= number <= len(self.config.time_slots):
                raise InvalidBulkSpecError(
                    f"Unknown pair number {number}, expected 1-{len(self.config.time_slots)}",
                    field="time_slots",
                )
            slot = self.config.time_slots[number - 1]
        return parse_time_slot(slot)

    @staticmethod
    def _missing_template_fields(entry: dict[str, Any]) -> list[str]:
        """Names of required fields that are absent or of the wrong type."""
        missing = []
        for name, expected in TEMPLATE_REQUIRED_FIELDS.items():
            value = entry.get(name)
            if not isinstance(value, expected) or isinstance(value, bool):
                missing.append(name)
        return missing

    @staticmethod
    def _lesson_from_template(
        entry: dict[str, Any], group_id: str, semester_id: str
    ) -> Lesson:
        """Build a fresh lesson from a template entry."""
        return Lesson(
            day_of_week=entry["dayOfWeek"],
            start_time=entry["startTime"],
            end_time=entry["endTime"],
            room=entry["room"],
            teacher_id=entry.get("teacherId") or None,
            subject_id=entry["subjectId"],
            group_id=group_id,
            semester_id=semester_id,
            lesson_type=entry.get("type") or "lecture",
            week_type=entry.get("weekType") or "all",
            topic=entry.get("topic") or "",
        )


def expand(spec: BulkLessonSpec, config: ValidatorConfig | None = None) -> list[Lesson]:
    """Expand a bulk spec with a default generator."""
    return BulkGenerator(config).expand(spec)


def apply_template(
    template: ScheduleTemplate,
    group_id: str,
    semester_id: str,
    config: ValidatorConfig | None = None,
) -> list[Lesson]:
    """Instantiate a template with a default generator."""
    return BulkGenerator(config).apply_template(template, group_id, semester_id)
