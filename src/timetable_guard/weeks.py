"""Week-type recurrence rules."""

from .models import Lesson, WeekType


def weeks_compatible(first: WeekType | str | None, second: WeekType | str | None) -> bool:
    """Check whether two recurrence modifiers can fall on the same week.

    Truth table:
    - either modifier missing -> True (assume a possible collision)
    - either modifier 'all'   -> True
    - odd/odd, even/even      -> True
    - odd/even                -> False

    Args:
        first: Week type of the first lesson
        second: Week type of the second lesson

    Returns:
        True if the two lessons may meet on the same calendar week
    """
    if first is None or second is None:
        return True

    first, second = WeekType(first), WeekType(second)
    if first == WeekType.ALL or second == WeekType.ALL:
        return True

    return first == second


def week_parity(week: int) -> WeekType:
    """Get the parity of a week number (week 1 is odd)."""
    return WeekType.ODD if week % 2 == 1 else WeekType.EVEN


def lessons_share_week(first: Lesson, second: Lesson) -> bool:
    """Check whether two lessons can take place on the same week.

    Lessons produced by week-range generation carry a concrete week number,
    which takes precedence over its modifier: two different concrete weeks
    never meet, and a concrete week meets recurring lessons by its parity.
    """
    if first.week is not None and second.week is not None:
        return first.week == second.week

    return weeks_compatible(_effective_week_type(first), _effective_week_type(second))


def _effective_week_type(lesson: Lesson) -> WeekType:
    if lesson.week is not None:
        return week_parity(lesson.week)
    return lesson.week_type
