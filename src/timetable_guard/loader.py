"""Loading schedules, bulk specs and templates from JSON files."""

import json
from pathlib import Path
from typing import Any

from .exceptions import TimetableError
from .models import BulkLessonSpec, Lesson, Schedule, ScheduleTemplate


def load_json(input_path: Path | str) -> Any:
    """Load a JSON document.

    Raises:
        TimetableError: If the file is not valid JSON
    """
    with open(input_path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise TimetableError(f"Malformed JSON in '{input_path}': {e}") from None


def load_schedules(input_path: Path | str) -> list[Schedule]:
    """Load schedules from a {"schedules": [...]} document or a bare list."""
    data = load_json(input_path)
    if isinstance(data, dict):
        data = data.get("schedules", [])
    return [Schedule.from_dict(item) for item in data]


def load_lesson(input_path: Path | str) -> Lesson:
    """Load a single lesson record."""
    return Lesson.from_dict(load_json(input_path))


def load_bulk_spec(input_path: Path | str) -> BulkLessonSpec:
    """Load a bulk generation spec."""
    return BulkLessonSpec.from_dict(load_json(input_path))


def load_template(input_path: Path | str) -> ScheduleTemplate:
    """Load a schedule template."""
    return ScheduleTemplate.from_dict(load_json(input_path))


def find_schedule(schedules: list[Schedule], schedule_id: str) -> Schedule:
    """Get a schedule by id.

    Raises:
        TimetableError: If no schedule has this id
    """
    for schedule in schedules:
        if schedule.id == schedule_id:
            return schedule
    available = ", ".join(s.id for s in schedules)
    raise TimetableError(f"Schedule '{schedule_id}' not found. Available: {available}")


def export_lessons_json(lessons: list[Lesson], output_path: Path | str) -> None:
    """Write lessons as a {"lessons": [...]} JSON document."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with open(output, "w", encoding="utf-8") as f:
        json.dump(
            {"lessons": [lesson.to_dict() for lesson in lessons]},
            f,
            ensure_ascii=False,
            indent=2,
        )
