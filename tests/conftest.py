"""Test fixtures for timetable-guard tests."""

import json

import pytest

from timetable_guard.models import Day, Lesson, Schedule, WeekType


@pytest.fixture
def make_lesson():
    """Factory for lessons with sensible defaults."""

    def _make(
        lesson_id: str,
        day: Day = Day.TUESDAY,
        start: str = "10:00",
        end: str = "11:30",
        room: str = "204",
        teacher: str | None = "teacher-1",
        week_type: WeekType = WeekType.ALL,
        **kwargs,
    ) -> Lesson:
        return Lesson(
            id=lesson_id,
            day_of_week=day,
            start_time=start,
            end_time=end,
            room=room,
            teacher_id=teacher,
            subject_id=kwargs.pop("subject_id", "math"),
            week_type=week_type,
            **kwargs,
        )

    return _make


@pytest.fixture
def group_x_schedule(make_lesson):
    """Schedule of group X with one Tuesday lesson."""
    return Schedule(
        id="2024-1_group-x",
        group_id="group-x",
        semester_id="2024-1",
        lessons=[make_lesson("x1", room="204", teacher="teacher-1")],
    )


@pytest.fixture
def group_y_schedule(make_lesson):
    """Schedule of group Y sharing teacher-1 with group X at an overlapping time."""
    return Schedule(
        id="2024-1_group-y",
        group_id="group-y",
        semester_id="2024-1",
        lessons=[
            make_lesson("y1", start="11:00", end="12:00", room="310", teacher="teacher-1")
        ],
    )


@pytest.fixture
def schedules_document():
    """Raw JSON document with two schedules as stored by the application."""
    return {
        "schedules": [
            {
                "id": "2024-1_group-x",
                "groupId": "group-x",
                "semesterId": "2024-1",
                "lessons": [
                    {
                        "id": "x1",
                        "subjectId": "math",
                        "teacherId": "teacher-1",
                        "room": "204",
                        "dayOfWeek": 2,
                        "startTime": "10:00",
                        "endTime": "11:30",
                        "type": "lecture",
                        "weekType": "all",
                    },
                    {
                        "id": "x2",
                        "subjectId": "physics",
                        "teacherId": "teacher-2",
                        "room": "105",
                        "dayOfWeek": 3,
                        "startTime": "08:00",
                        "endTime": "09:30",
                        "type": "practice",
                    },
                ],
            },
            {
                "id": "2024-1_group-y",
                "groupId": "group-y",
                "semesterId": "2024-1",
                "lessons": [
                    {
                        "id": "y1",
                        "subjectId": "history",
                        "teacherId": "teacher-1",
                        "room": "310",
                        "dayOfWeek": 2,
                        "startTime": "11:00",
                        "endTime": "12:00",
                        "type": "seminar",
                        "weekType": "odd",
                    }
                ],
            },
        ]
    }


@pytest.fixture
def schedules_file(tmp_path, schedules_document):
    """Write the schedules document to a temporary JSON file."""
    path = tmp_path / "schedules.json"
    path.write_text(json.dumps(schedules_document), encoding="utf-8")
    return path
