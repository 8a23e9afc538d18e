"""Domain models and business rules for schedule generation."""

from plumbsched.domain.models import (
    BaseLocation,
    Coordinates,
    DayResult,
    DaySummary,
    EntryType,
    Job,
    ScheduleEntry,
    ShiftInfo,
    StaffMember,
    StaffRole,
    StaffSchedulePrefs,
    WeekSchedule,
    schedule_key,
)
from plumbsched.domain.policies import (
    AddressHashResolver,
    AlternatingWeekShiftPolicy,
    CoordinateResolver,
    DefaultJobDurationPolicy,
    DefaultTravelTimePolicy,
    JobDurationPolicy,
    RandomJitterResolver,
    ShiftPolicy,
    TravelTimePolicy,
    estimate_travel_time,
    get_job_duration,
    resolve_shift,
)
from plumbsched.domain.timeutil import (
    add_minutes,
    compare_time,
    subtract_minutes,
)

__all__ = [
    # Models
    "BaseLocation",
    "Coordinates",
    "DayResult",
    "DaySummary",
    "EntryType",
    "Job",
    "ScheduleEntry",
    "ShiftInfo",
    "StaffMember",
    "StaffRole",
    "StaffSchedulePrefs",
    "WeekSchedule",
    "schedule_key",
    # Policies
    "AddressHashResolver",
    "AlternatingWeekShiftPolicy",
    "CoordinateResolver",
    "DefaultJobDurationPolicy",
    "DefaultTravelTimePolicy",
    "JobDurationPolicy",
    "RandomJitterResolver",
    "ShiftPolicy",
    "TravelTimePolicy",
    "estimate_travel_time",
    "get_job_duration",
    "resolve_shift",
    # Time helpers
    "add_minutes",
    "compare_time",
    "subtract_minutes",
]
