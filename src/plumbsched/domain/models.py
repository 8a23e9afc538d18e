"""Domain models for staff schedule generation.

This module contains the data structures read and produced by the schedule
builder: staff members and jobs (inputs), schedule entries (outputs), and the
per-day and per-week result containers.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional


class StaffRole(Enum):
    """Roles a user account can hold.

    Only ``STAFF`` members get a generated schedule; ``ADMIN`` and
    ``SUPERVISOR`` may view schedules, and only ``ADMIN`` may edit shifts.
    """

    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    STAFF = "staff"
    CLIENT = "client"


class EntryType(Enum):
    """Kinds of line items in a staff member's day plan."""

    BASE = "base"  # Start of shift at the depot
    TRAVEL = "travel"  # En route to the next job
    JOB = "job"  # On site
    END = "end"  # End of shift


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in degrees."""

    lat: float
    lng: float

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class BaseLocation:
    """A depot a staff member starts and ends the day at."""

    city: str
    address: str
    coordinates: Coordinates


@dataclass
class StaffSchedulePrefs:
    """Per-staff shift settings.

    Attributes:
        working_late_shift: Explicit late-shift override. None means the
            alternating-week rotation decides.
        shift_start_time: Configured shift start ("HH:MM"), display only.
        shift_end_time: Configured shift end ("HH:MM"), display only.
    """

    working_late_shift: Optional[bool] = None
    shift_start_time: Optional[str] = None
    shift_end_time: Optional[str] = None

    DEFAULT_START = "05:00"
    DEFAULT_END = "17:00"

    @property
    def display_start(self) -> str:
        return self.shift_start_time or self.DEFAULT_START

    @property
    def display_end(self) -> str:
        return self.shift_end_time or self.DEFAULT_END


@dataclass
class StaffMember:
    """A user account that may receive a schedule.

    Attributes:
        id: Opaque identifier.
        name: Display name.
        role: Account role; only "staff" members are scheduled.
        city: Base city (selects the depot).
        schedule: Shift settings.
        email: Contact email, carried through for display.
    """

    id: str
    name: str = ""
    role: str = StaffRole.STAFF.value
    city: Optional[str] = None
    schedule: StaffSchedulePrefs = field(default_factory=StaffSchedulePrefs)
    email: Optional[str] = None

    @property
    def is_staff(self) -> bool:
        return self.role == StaffRole.STAFF.value

    @property
    def is_admin(self) -> bool:
        return self.role == StaffRole.ADMIN.value

    @property
    def is_supervisor(self) -> bool:
        return self.role == StaffRole.SUPERVISOR.value


@dataclass
class Job:
    """A job visit assigned to a staff member.

    Attributes:
        id: Opaque identifier.
        assigned_to: Staff member id, or None if unassigned.
        due_date: Due timestamp. The calendar date picks the schedule day,
            the wall-clock time picks the slot.
        category: Free-text category used to look up the service duration.
        risk_address: Display address of the site.
        title: Display description.
    """

    id: str
    assigned_to: Optional[str] = None
    due_date: Optional[datetime] = None
    category: Optional[str] = None
    risk_address: Optional[str] = None
    title: Optional[str] = None

    @property
    def due_day(self) -> Optional[date]:
        return self.due_date.date() if self.due_date else None


@dataclass
class ScheduleEntry:
    """One line item in a staff member's day plan.

    Attributes:
        time: Start time as "HH:MM".
        type: Kind of entry.
        location: Address, "En route to X" or "End of shift".
        description: Display text.
        job_id: Set only on job entries.
        estimated_duration: Minutes, set on travel and job entries.
        coordinates: Set only on the base entry.
    """

    time: str
    type: EntryType
    location: str
    description: str
    job_id: Optional[str] = None
    estimated_duration: Optional[int] = None
    coordinates: Optional[Coordinates] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting unset fields."""
        data: dict[str, Any] = {
            "time": self.time,
            "type": self.type.value,
            "location": self.location,
            "description": self.description,
        }
        if self.job_id is not None:
            data["jobId"] = self.job_id
        if self.estimated_duration is not None:
            data["estimatedDuration"] = self.estimated_duration
        if self.coordinates is not None:
            data["coordinates"] = self.coordinates.to_dict()
        return data


@dataclass(frozen=True)
class ShiftInfo:
    """Resolved shift for one staff member on one day."""

    is_late: bool
    shift_end: str

    @property
    def label(self) -> str:
        return "Late Shift" if self.is_late else "Normal Shift"


def schedule_key(staff_id: str, day: date) -> str:
    """Key of a staff member's day in the schedule map."""
    return f"{staff_id}-{day.strftime('%Y-%m-%d')}"


@dataclass
class DayResult:
    """Outcome of building one staff member's day.

    A failed day carries an empty entry list and the reason it failed, so
    batch callers can tell "no jobs" apart from "build error".
    """

    staff_id: str
    day: date
    ok: bool
    entries: list[ScheduleEntry] = field(default_factory=list)
    reason: Optional[str] = None

    @classmethod
    def success(
        cls, staff_id: str, day: date, entries: list[ScheduleEntry]
    ) -> "DayResult":
        return cls(staff_id=staff_id, day=day, ok=True, entries=entries)

    @classmethod
    def failure(cls, staff_id: str, day: date, reason: str) -> "DayResult":
        return cls(staff_id=staff_id, day=day, ok=False, entries=[], reason=reason)

    @property
    def key(self) -> str:
        return schedule_key(self.staff_id, self.day)


@dataclass
class DaySummary:
    """Compact view of a day for the week grid.

    Attributes:
        day: The date summarized.
        job_count: Number of job entries.
        preview: First few entries of the day.
        hidden_count: Entries not included in the preview.
    """

    day: date
    job_count: int
    preview: list[ScheduleEntry]
    hidden_count: int

    @property
    def more_label(self) -> Optional[str]:
        if self.hidden_count <= 0:
            return None
        return f"+{self.hidden_count} more entries"


@dataclass
class WeekSchedule:
    """Schedules for every staff member across a Monday-start week.

    Attributes:
        week_start: Monday of the week.
        days: The seven dates of the week, in order.
        results: Day results keyed by ``schedule_key``.
    """

    week_start: date
    days: list[date]
    results: dict[str, DayResult] = field(default_factory=dict)

    def add(self, result: DayResult) -> None:
        self.results[result.key] = result

    @property
    def schedules(self) -> dict[str, list[ScheduleEntry]]:
        """The schedule map: key -> ordered entries (failed days are empty)."""
        return {key: result.entries for key, result in self.results.items()}

    @property
    def failures(self) -> list[DayResult]:
        return [r for r in self.results.values() if not r.ok]

    @property
    def staff_ids(self) -> list[str]:
        seen: list[str] = []
        for result in self.results.values():
            if result.staff_id not in seen:
                seen.append(result.staff_id)
        return seen

    def get(self, staff_id: str, day: date) -> list[ScheduleEntry]:
        """Entries for one staff member on one day (empty if unknown)."""
        result = self.results.get(schedule_key(staff_id, day))
        return result.entries if result else []

    def count_entries(self, staff_id: str) -> int:
        return sum(len(self.get(staff_id, d)) for d in self.days)
