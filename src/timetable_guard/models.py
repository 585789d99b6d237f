"""Data models for recurring weekly timetables."""

import uuid
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Self

from .exceptions import InvalidBulkSpecError, InvalidLessonError
from .time_utils import to_minutes


class Day(IntEnum):
    """Days of the teaching week (no Sunday)."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def from_name(cls, name: str) -> "Day":
        """Look up a day by its English name, e.g. 'monday'."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise InvalidLessonError(f"Unknown day name: '{name}'") from None


class WeekType(str, Enum):
    """Recurrence modifier of a lesson."""

    ALL = "all"
    ODD = "odd"
    EVEN = "even"


class LessonType(str, Enum):
    """Kind of session. Display only, conflict checks ignore it."""

    LECTURE = "lecture"
    PRACTICE = "practice"
    LABORATORY = "laboratory"
    SEMINAR = "seminar"
    EXAM = "exam"

    @classmethod
    def _missing_(cls, value: object) -> "LessonType | None":
        aliases = {"lab": cls.LABORATORY, "practical": cls.PRACTICE}
        if isinstance(value, str):
            return aliases.get(value.lower())
        return None


class ErrorType(str, Enum):
    """Kinds of validation errors."""

    INVALID_TIME = "invalid_time"
    ROOM_CONFLICT = "room_conflict"
    TEACHER_CONFLICT = "teacher_conflict"


def _pick(data: dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    """Read a key in either camelCase or snake_case."""
    if camel in data:
        return data[camel]
    return data.get(snake, default)


@dataclass(frozen=True)
class Lesson:
    """One recurring weekly class session.

    Attributes:
        day_of_week: Weekday the lesson recurs on
        start_time: Start in 24h "HH:mm"
        end_time: End in 24h "HH:mm", same calendar day
        room: Room identifier, compared by exact match
        teacher_id: Teacher reference, None when no teacher is assigned
        week_type: Every week, odd weeks or even weeks
        week: Concrete week number for week-range generated lessons
    """

    day_of_week: Day
    start_time: str
    end_time: str
    room: str
    teacher_id: str | None = None
    subject_id: str = ""
    group_id: str = ""
    semester_id: str = ""
    lesson_type: LessonType = LessonType.LECTURE
    week_type: WeekType = WeekType.ALL
    week: int | None = None
    topic: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self) -> None:
        try:
            day = Day(self.day_of_week)
        except ValueError:
            raise InvalidLessonError(
                f"day_of_week must be 1-6 (Monday-Saturday), got {self.day_of_week!r}",
                self.id,
            ) from None
        object.__setattr__(self, "day_of_week", day)

        # Raises InvalidTimeFormatError on malformed strings
        to_minutes(self.start_time)
        to_minutes(self.end_time)

        try:
            week_type = WeekType.ALL if self.week_type is None else WeekType(self.week_type)
            lesson_type = LessonType(self.lesson_type)
        except ValueError as e:
            raise InvalidLessonError(str(e), self.id) from None
        object.__setattr__(self, "week_type", week_type)
        object.__setattr__(self, "lesson_type", lesson_type)

        if self.week is not None and (
            not isinstance(self.week, int) or isinstance(self.week, bool) or self.week < 1
        ):
            raise InvalidLessonError(f"week must be a positive integer, got {self.week!r}", self.id)

    @property
    def interval(self) -> tuple[str, str]:
        """Half-open [start, end) time range."""
        return (self.start_time, self.end_time)

    def with_changes(self, **changes: Any) -> "Lesson":
        """Return an edited copy; the id is kept unless overridden."""
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict[str, Any], **defaults: Any) -> Self:
        """Create a Lesson from a store record (camelCase or snake_case keys).

        Keyword defaults (e.g. group_id, semester_id) fill keys the record lacks.
        """
        kwargs: dict[str, Any] = {
            "day_of_week": _pick(data, "dayOfWeek", "day_of_week"),
            "start_time": _pick(data, "startTime", "start_time"),
            "end_time": _pick(data, "endTime", "end_time"),
            "room": data.get("room", ""),
            "teacher_id": _pick(data, "teacherId", "teacher_id"),
            "subject_id": _pick(data, "subjectId", "subject_id", ""),
            "group_id": _pick(data, "groupId", "group_id", defaults.get("group_id", "")),
            "semester_id": _pick(
                data, "semesterId", "semester_id", defaults.get("semester_id", "")
            ),
            "lesson_type": data.get("type") or data.get("lesson_type") or LessonType.LECTURE,
            "week_type": _pick(data, "weekType", "week_type"),
            "week": data.get("week"),
            "topic": data.get("topic") or "",
        }
        if isinstance(kwargs["day_of_week"], str) and not kwargs["day_of_week"].isdigit():
            kwargs["day_of_week"] = Day.from_name(kwargs["day_of_week"])
        elif kwargs["day_of_week"] is not None:
            kwargs["day_of_week"] = int(kwargs["day_of_week"])
        if data.get("id"):
            kwargs["id"] = str(data["id"])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert lesson to a store record."""
        result = {
            "id": self.id,
            "groupId": self.group_id,
            "semesterId": self.semester_id,
            "subjectId": self.subject_id,
            "teacherId": self.teacher_id,
            "room": self.room,
            "dayOfWeek": int(self.day_of_week),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "type": self.lesson_type.value,
            "weekType": self.week_type.value,
        }
        if self.week is not None:
            result["week"] = self.week
        if self.topic:
            result["topic"] = self.topic
        return result


@dataclass
class Schedule:
    """All lessons of one group within one semester."""

    id: str
    group_id: str = ""
    semester_id: str = ""
    lessons: list[Lesson] = field(default_factory=list)

    def get_lesson(self, lesson_id: str) -> Lesson | None:
        """Get a lesson by id."""
        for lesson in self.lessons:
            if lesson.id == lesson_id:
                return lesson
        return None

    def with_lesson(self, lesson: Lesson) -> "Schedule":
        """Return a copy with the lesson appended."""
        return replace(self, lessons=[*self.lessons, lesson])

    def without_lesson(self, lesson_id: str) -> "Schedule":
        """Return a copy without the given lesson."""
        return replace(self, lessons=[item for item in self.lessons if item.id != lesson_id])

    def replace_lesson(self, lesson_id: str, lesson: Lesson) -> "Schedule":
        """Return a copy where the given lesson is swapped for a new one in place."""
        return replace(
            self, lessons=[lesson if item.id == lesson_id else item for item in self.lessons]
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a Schedule from a store record.

        Lessons inherit the schedule's group and semester when they omit them.
        A missing id is derived as "<semesterId>_<groupId>".
        """
        group_id = _pick(data, "groupId", "group_id", "")
        semester_id = _pick(data, "semesterId", "semester_id", "")
        schedule_id = data.get("id") or f"{semester_id}_{group_id}"
        lessons = [
            Lesson.from_dict(item, group_id=group_id, semester_id=semester_id)
            for item in data.get("lessons", [])
        ]
        return cls(
            id=str(schedule_id),
            group_id=group_id,
            semester_id=semester_id,
            lessons=lessons,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert schedule to dictionary."""
        return {
            "id": self.id,
            "groupId": self.group_id,
            "semesterId": self.semester_id,
            "lessons": [lesson.to_dict() for lesson in self.lessons],
        }


@dataclass(frozen=True)
class ValidationError:
    """A validation failure attributed to one lesson of the target schedule."""

    type: ErrorType
    message: str
    lesson_id: str
    other_lesson_id: str | None = None
    other_schedule_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "type": self.type.value,
            "message": self.message,
            "lessonId": self.lesson_id,
            "otherLessonId": self.other_lesson_id,
            "otherScheduleId": self.other_schedule_id,
        }


@dataclass
class BulkLessonSpec:
    """Compact description of many lessons sharing subject, room and teacher."""

    subject_id: str
    room: str
    days: list[Day]
    time_slots: list[str | int]
    teacher_id: str | None = None
    lesson_type: LessonType = LessonType.LECTURE
    week_type: WeekType = WeekType.ALL
    group_id: str = ""
    semester_id: str = ""
    week_range: tuple[int, int] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a spec from a JSON document."""
        days = []
        for day in _pick(data, "days", "days", []):
            if isinstance(day, str) and not day.isdigit():
                days.append(Day.from_name(day))
            else:
                try:
                    days.append(Day(int(day)))
                except (TypeError, ValueError):
                    raise InvalidLessonError(f"Unknown day code: {day!r}") from None

        week_range = _pick(data, "weekRange", "week_range")
        if week_range is not None:
            try:
                if isinstance(week_range, dict):
                    week_range = (week_range["start"], week_range["end"])
                start_week, end_week = week_range
                week_range = (int(start_week), int(end_week))
            except (KeyError, TypeError, ValueError):
                raise InvalidBulkSpecError(
                    f"Week range must have a numeric start and end, got {week_range!r}",
                    field="week_range",
                ) from None

        try:
            lesson_type = LessonType(data.get("type") or data.get("lesson_type") or "lecture")
            week_type = WeekType(_pick(data, "weekType", "week_type") or WeekType.ALL)
        except ValueError as e:
            raise InvalidLessonError(str(e)) from None

        return cls(
            subject_id=_pick(data, "subjectId", "subject_id", ""),
            room=data.get("room", ""),
            days=days,
            time_slots=list(_pick(data, "timeSlots", "time_slots", [])),
            teacher_id=_pick(data, "teacherId", "teacher_id"),
            lesson_type=lesson_type,
            week_type=week_type,
            group_id=_pick(data, "groupId", "group_id", ""),
            semester_id=_pick(data, "semesterId", "semester_id", ""),
            week_range=week_range,
        )


@dataclass
class ScheduleTemplate:
    """A named, reusable set of lesson blueprints.

    Lessons are kept as raw records: templates are stored loosely and
    entries may lack required fields.
    """

    name: str
    description: str = ""
    lessons: list[dict[str, Any]] = field(default_factory=list)
    id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a template from a JSON document."""
        lessons = data.get("lessons")
        if lessons is None:
            # Older templates nest lessons under "schedule"
            lessons = data.get("schedule", {}).get("lessons", [])
        return cls(
            name=data.get("name", ""),
            description=data.get("description", ""),
            lessons=list(lessons),
            id=str(data.get("id", "")),
        )


@dataclass
class ValidationReport:
    """Validation outcome for one schedule."""

    schedule_id: str
    errors: list[ValidationError] = field(default_factory=list)
    lessons_checked: int = 0
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def is_valid(self) -> bool:
        """True when no errors were found."""
        return not self.errors

    @property
    def counts_by_type(self) -> dict[str, int]:
        """Number of errors per error type."""
        counts = Counter(error.type.value for error in self.errors)
        return {error_type.value: counts.get(error_type.value, 0) for error_type in ErrorType}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "schedule_id": self.schedule_id,
            "generation_date": self.generation_date,
            "lessons_checked": self.lessons_checked,
            "is_valid": self.is_valid,
            "counts": self.counts_by_type,
            "errors": [error.to_dict() for error in self.errors],
        }
