"""Schedule generation for staff day plans and weeks."""

from plumbsched.scheduling.day_builder import DayScheduleBuilder, build_day_schedule
from plumbsched.scheduling.shift_management import (
    RosterRow,
    can_edit_schedules,
    can_view_schedules,
    shift_roster,
    toggle_late_shift,
    update_shift_hours,
)
from plumbsched.scheduling.weekly import (
    WeekScheduleAggregator,
    build_week_schedules,
    shift_week,
    summarize_day,
    week_days,
    week_start,
)

__all__ = [
    # Builders
    "DayScheduleBuilder",
    "WeekScheduleAggregator",
    "build_day_schedule",
    "build_week_schedules",
    # Week navigation
    "shift_week",
    "summarize_day",
    "week_days",
    "week_start",
    # Shift management
    "RosterRow",
    "can_edit_schedules",
    "can_view_schedules",
    "shift_roster",
    "toggle_late_shift",
    "update_shift_hours",
]
