"""plumbsched - staff day-schedule generation for field service teams.

Modules:
- domain: Staff, job and schedule entry models; duration, travel and shift policies
- scheduling: Day schedule builder, week aggregator, shift management
- output: CSV, PDF and text renderings of a week
- validation: Structural checks on generated day plans
"""

from plumbsched.domain.models import (
    EntryType,
    Job,
    ScheduleEntry,
    StaffMember,
    WeekSchedule,
)
from plumbsched.output.csv_exporter import export_week_csv
from plumbsched.scheduling.day_builder import DayScheduleBuilder, build_day_schedule
from plumbsched.scheduling.weekly import WeekScheduleAggregator, build_week_schedules

__version__ = "0.1.0"

__all__ = [
    "DayScheduleBuilder",
    "EntryType",
    "Job",
    "ScheduleEntry",
    "StaffMember",
    "WeekSchedule",
    "WeekScheduleAggregator",
    "build_day_schedule",
    "build_week_schedules",
    "export_week_csv",
]
