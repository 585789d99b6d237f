"""Tests for ConflictDetector."""

import logging

from timetable_guard.conflicts import ConflictDetector, lessons_collide, validate_schedule
from timetable_guard.config import ValidatorConfig
from timetable_guard.models import Day, ErrorType, Schedule, WeekType


def _types(errors):
    return [error.type for error in errors]


class TestIntraScheduleConflicts:
    """Tests for conflicts inside one schedule."""

    def test_empty_schedule_is_valid(self):
        assert validate_schedule(Schedule(id="s")) == []

    def test_room_conflict_only(self, make_lesson):
        schedule = Schedule(
            id="s",
            lessons=[
                make_lesson("a", start="10:00", end="11:30", room="204", teacher="t1"),
                make_lesson("b", start="11:00", end="12:00", room="204", teacher="t2"),
            ],
        )

        errors = validate_schedule(schedule)

        assert _types(errors) == [ErrorType.ROOM_CONFLICT]
        assert errors[0].lesson_id == "a"
        assert errors[0].other_lesson_id == "b"
        assert errors[0].other_schedule_id is None
        assert errors[0].message == "Room conflict: 204 is already booked at this time"

    def test_teacher_conflict_only(self, make_lesson):
        schedule = Schedule(
            id="s",
            lessons=[
                make_lesson("a", room="204", teacher="t1"),
                make_lesson("b", room="310", teacher="t1"),
            ],
        )

        assert _types(validate_schedule(schedule)) == [ErrorType.TEACHER_CONFLICT]

    def test_room_and_teacher_conflict_for_one_pair(self, make_lesson):
        schedule = Schedule(
            id="s",
            lessons=[make_lesson("a"), make_lesson("b", start="10:30", end="12:00")],
        )

        assert _types(validate_schedule(schedule)) == [
            ErrorType.ROOM_CONFLICT,
            ErrorType.TEACHER_CONFLICT,
        ]

    def test_different_days_do_not_conflict(self, make_lesson):
        schedule = Schedule(
            id="s",
            lessons=[make_lesson("a", day=Day.TUESDAY), make_lesson("b", day=Day.WEDNESDAY)],
        )

        assert validate_schedule(schedule) == []

    def test_adjacent_lessons_do_not_conflict(self, make_lesson):
        schedule = Schedule(
            id="s",
            lessons=[
                make_lesson("a", start="08:00", end="09:30"),
                make_lesson("b", start="09:30", end="11:00"),
            ],
        )

        assert validate_schedule(schedule) == []

    def test_odd_and_even_weeks_do_not_conflict(self, make_lesson):
        schedule = Schedule(
            id="s",
            lessons=[
                make_lesson("a", week_type=WeekType.ODD),
                make_lesson("b", week_type=WeekType.EVEN),
            ],
        )

        assert validate_schedule(schedule) == []

    def test_two_odd_week_lessons_conflict(self, make_lesson):
        schedule = Schedule(
            id="s",
            lessons=[
                make_lesson("a", week_type=WeekType.ODD, teacher="t1"),
                make_lesson("b", week_type=WeekType.ODD, teacher="t2"),
            ],
        )

        assert _types(validate_schedule(schedule)) == [ErrorType.ROOM_CONFLICT]

    def test_every_week_conflicts_with_even(self, make_lesson):
        schedule = Schedule(
            id="s",
            lessons=[
                make_lesson("a", teacher="t1"),
                make_lesson("b", week_type=WeekType.EVEN, teacher="t2"),
            ],
        )

        assert _types(validate_schedule(schedule)) == [ErrorType.ROOM_CONFLICT]

    def test_unassigned_teachers_compare_equal(self, make_lesson):
        schedule = Schedule(
            id="s",
            lessons=[
                make_lesson("a", room="101", teacher=None),
                make_lesson("b", room="102", teacher=None),
            ],
        )

        assert _types(validate_schedule(schedule)) == [ErrorType.TEACHER_CONFLICT]

    def test_lesson_type_is_ignored(self, make_lesson):
        schedule = Schedule(
            id="s",
            lessons=[
                make_lesson("a", teacher="t1", lesson_type="lecture"),
                make_lesson("b", teacher="t2", lesson_type="exam"),
            ],
        )

        assert _types(validate_schedule(schedule)) == [ErrorType.ROOM_CONFLICT]


class TestTimeGate:
    """Tests for invalid lesson times short-circuiting conflict checks."""

    def test_invalid_lesson_reported_once_and_skipped(self, make_lesson):
        schedule = Schedule(
            id="s",
            lessons=[
                make_lesson("a", start="07:00", end="10:30"),
                make_lesson("b", start="10:00", end="11:00"),
            ],
        )

        errors = validate_schedule(schedule)

        assert _types(errors) == [ErrorType.INVALID_TIME]
        assert errors[0].lesson_id == "a"

    def test_invalid_lesson_still_compared_from_earlier_lessons(self, make_lesson):
        schedule = Schedule(
            id="s",
            lessons=[
                make_lesson("a", start="19:00", end="19:50", teacher="t1"),
                make_lesson("b", start="19:00", end="20:30", teacher="t2"),
            ],
        )

        errors = validate_schedule(schedule)

        assert [(e.type, e.lesson_id) for e in errors] == [
            (ErrorType.ROOM_CONFLICT, "a"),
            (ErrorType.INVALID_TIME, "b"),
        ]

    def test_time_errors_for_every_bad_lesson(self, make_lesson):
        schedule = Schedule(
            id="s",
            lessons=[
                make_lesson("a", day=Day.MONDAY, start="07:00", end="08:00"),
                make_lesson("b", day=Day.TUESDAY, start="19:00", end="20:30"),
                make_lesson("c", day=Day.WEDNESDAY, start="10:00", end="10:00"),
            ],
        )

        errors = validate_schedule(schedule)

        assert _types(errors) == [ErrorType.INVALID_TIME] * 3
        assert [e.lesson_id for e in errors] == ["a", "b", "c"]


class TestCrossScheduleConflicts:
    """Tests for conflicts between different groups' schedules."""

    def test_teacher_conflict_reported_for_target(self, group_x_schedule, group_y_schedule):
        errors = validate_schedule(group_x_schedule, [group_y_schedule])

        assert _types(errors) == [ErrorType.TEACHER_CONFLICT]
        assert errors[0].lesson_id == "x1"
        assert errors[0].other_lesson_id == "y1"
        assert errors[0].other_schedule_id == "2024-1_group-y"
        assert errors[0].message == "Teacher is already scheduled in another group at this time"

    def test_symmetric_conflict(self, group_x_schedule, group_y_schedule):
        errors = validate_schedule(group_y_schedule, [group_x_schedule])

        assert _types(errors) == [ErrorType.TEACHER_CONFLICT]
        assert errors[0].lesson_id == "y1"

    def test_other_schedules_not_checked_internally(self, make_lesson, group_x_schedule):
        broken_other = Schedule(
            id="other",
            lessons=[
                make_lesson("o1", day=Day.FRIDAY, room="500", teacher="t9"),
                make_lesson("o2", day=Day.FRIDAY, room="500", teacher="t9"),
            ],
        )

        assert validate_schedule(group_x_schedule, [broken_other]) == []

    def test_same_id_in_others_is_ignored(self, group_x_schedule):
        assert validate_schedule(group_x_schedule, [group_x_schedule]) == []

    def test_room_conflict_message(self, make_lesson, group_x_schedule):
        other = Schedule(id="other", lessons=[make_lesson("o1", teacher="t9")])

        errors = validate_schedule(group_x_schedule, [other])

        assert _types(errors) == [ErrorType.ROOM_CONFLICT]
        assert errors[0].message == "Room conflict with another schedule: 204 is already booked"


class TestScanOrder:
    """Tests for deterministic, exhaustive reporting."""

    def test_all_conflicts_reported_in_scan_order(self, make_lesson):
        target = Schedule(
            id="s",
            lessons=[
                make_lesson("a", teacher="t1"),
                make_lesson("b", teacher="t1"),
                make_lesson("c", teacher="t3", room="999"),
            ],
        )
        other = Schedule(id="o", lessons=[make_lesson("o1", teacher="t3", room="204")])

        errors = validate_schedule(target, [other])

        assert [(e.lesson_id, e.other_lesson_id, e.type) for e in errors] == [
            ("a", "b", ErrorType.ROOM_CONFLICT),
            ("a", "b", ErrorType.TEACHER_CONFLICT),
            ("a", "o1", ErrorType.ROOM_CONFLICT),
            ("b", "o1", ErrorType.ROOM_CONFLICT),
            ("c", "o1", ErrorType.TEACHER_CONFLICT),
        ]

    def test_validation_is_idempotent(self, make_lesson, group_y_schedule):
        target = Schedule(
            id="s",
            lessons=[make_lesson("a"), make_lesson("b"), make_lesson("c", start="07:00")],
        )

        first = validate_schedule(target, [group_y_schedule])
        second = validate_schedule(target, [group_y_schedule])

        assert first == second
        assert len(target.lessons) == 3


class TestConflictDetector:
    """Tests for ConflictDetector helpers."""

    def test_lessons_collide(self, make_lesson):
        assert lessons_collide(make_lesson("a"), make_lesson("b", room="1", teacher="x"))
        assert not lessons_collide(make_lesson("a"), make_lesson("b", day=Day.SATURDAY))

    def test_report(self, make_lesson):
        schedule = Schedule(id="s", lessons=[make_lesson("a"), make_lesson("b")])

        report = ConflictDetector().report(schedule)

        assert report.schedule_id == "s"
        assert report.lessons_checked == 2
        assert not report.is_valid
        assert report.counts_by_type == {
            "invalid_time": 0,
            "room_conflict": 1,
            "teacher_conflict": 1,
        }

    def test_find_conflicting_pairs(self, make_lesson, group_x_schedule, group_y_schedule):
        pairs = list(
            ConflictDetector().find_conflicting_pairs(group_x_schedule, [group_y_schedule])
        )

        assert [(a.id, b.id, sid) for a, b, sid in pairs] == [
            ("x1", "y1", "2024-1_group-y")
        ]

    def test_custom_config(self, make_lesson):
        schedule = Schedule(id="s", lessons=[make_lesson("a", start="07:30", end="08:30")])
        detector = ConflictDetector(ValidatorConfig(opening_time="07:30"))

        assert detector.validate_schedule(schedule) == []

    def test_logs_summary(self, make_lesson, caplog):
        schedule = Schedule(id="s", lessons=[make_lesson("a"), make_lesson("b")])

        with caplog.at_level(logging.INFO, logger="timetable_guard.conflicts"):
            validate_schedule(schedule)

        assert "Schedule s: 2 error(s)" in caplog.text
