"""Policy definitions for schedule generation rules.

This module contains the configurable policies the day builder relies on:
job durations, travel-time estimation, job coordinate resolution, and
late/normal shift selection. Policies are kept separate from the builder to
allow independent testing and easy substitution.
"""

import hashlib
import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional, Union

from plumbsched.config import ScheduleConfig
from plumbsched.domain.models import Coordinates, Job, ShiftInfo, StaffMember

MINUTES_PER_WEEK = 7 * 24 * 60

JOB_DURATIONS: dict[str, int] = {
    "Geyser Replacement": 180,  # 3 hours
    "Geyser Assessment": 60,  # 1 hour
    "Leak Detection": 120,  # 2 hours
    "Drain Blockage": 90,  # 1.5 hours
    "Camera Inspection": 75,  # 1.25 hours
    "Toilet/Shower": 90,  # 1.5 hours
}


class JobDurationPolicy(ABC):
    """Abstract base class for job service-duration policies."""

    @abstractmethod
    def get_job_duration(self, category: Optional[str]) -> int:
        """Get the service duration in minutes for a job category."""
        pass


class TravelTimePolicy(ABC):
    """Abstract base class for travel-time estimation."""

    @abstractmethod
    def estimate(self, origin: Coordinates, destination: Coordinates) -> int:
        """Estimate travel minutes between two points."""
        pass


class CoordinateResolver(ABC):
    """Abstract base class for resolving a job to map coordinates."""

    @abstractmethod
    def locate(self, job: Job) -> Coordinates:
        """Get the coordinates used for travel estimates to a job."""
        pass


class ShiftPolicy(ABC):
    """Abstract base class for late/normal shift selection."""

    @abstractmethod
    def is_late_shift_week(self, day: Union[date, datetime]) -> bool:
        """Check whether the rotation puts a day in a late-shift week."""
        pass

    @abstractmethod
    def resolve(self, staff: StaffMember, day: Union[date, datetime]) -> ShiftInfo:
        """Resolve the shift a staff member works on a day.

        Args:
            staff: The staff member.
            day: The schedule date.

        Returns:
            ShiftInfo with the late flag and shift end time.
        """
        pass


@dataclass
class DefaultJobDurationPolicy(JobDurationPolicy):
    """Fixed duration table keyed by job category.

    Unknown or missing categories get ``default_minutes``.
    """

    durations: dict[str, int] = field(default_factory=lambda: dict(JOB_DURATIONS))
    default_minutes: int = 60

    def get_job_duration(self, category: Optional[str]) -> int:
        if category is None:
            return self.default_minutes
        return self.durations.get(category, self.default_minutes)


def _round_half_up(value: float) -> int:
    # .5 always rounds up, also for negative values
    return int(math.floor(value + 0.5))


@dataclass
class DefaultTravelTimePolicy(TravelTimePolicy):
    """Straight-line estimate in raw degree space.

    ``clamp(round(distance * factor), min_minutes, max_minutes)``. This is a
    coarse placeholder, not a road-network or geodesic calculation.
    """

    factor: float = 3000
    min_minutes: int = 15
    max_minutes: int = 60

    def estimate(self, origin: Coordinates, destination: Coordinates) -> int:
        distance = math.sqrt(
            (destination.lat - origin.lat) ** 2 + (destination.lng - origin.lng) ** 2
        )
        minutes = _round_half_up(distance * self.factor)
        return max(self.min_minutes, min(self.max_minutes, minutes))


@dataclass
class AddressHashResolver(CoordinateResolver):
    """Deterministic pseudo-geocoding from the job's address text.

    The address is hashed into two offsets in ``[0, span)`` which are added
    to a fixed origin. The same address always maps to the same point.
    """

    origin: Coordinates = field(
        default_factory=lambda: ScheduleConfig().jitter_origin
    )
    span: float = 0.1

    def locate(self, job: Job) -> Coordinates:
        key = job.risk_address or job.id or ""
        digest = hashlib.sha256(key.encode("utf-8")).digest()
        lat_fraction = int.from_bytes(digest[:8], "big") / 2**64
        lng_fraction = int.from_bytes(digest[8:16], "big") / 2**64
        return Coordinates(
            lat=self.origin.lat + lat_fraction * self.span,
            lng=self.origin.lng + lng_fraction * self.span,
        )


@dataclass
class RandomJitterResolver(CoordinateResolver):
    """Uniform random offset from a fixed origin, drawn fresh on every call.

    Travel estimates made with this resolver are not reproducible unless a
    seeded ``rng`` is supplied.
    """

    rng: random.Random = field(default_factory=random.Random)
    origin: Coordinates = field(
        default_factory=lambda: ScheduleConfig().jitter_origin
    )
    span: float = 0.1

    def locate(self, job: Job) -> Coordinates:
        return Coordinates(
            lat=self.origin.lat + self.rng.random() * self.span,
            lng=self.origin.lng + self.rng.random() * self.span,
        )


@dataclass
class AlternatingWeekShiftPolicy(ShiftPolicy):
    """Late shift every other week, unless the staff member overrides it.

    Weeks are counted from ``reference``; odd-numbered weeks are late.
    Days before the reference date are never in a late week. There is no
    per-group offset, so every staff member without an override shares the
    same parity.
    """

    reference: date = date(2024, 1, 1)
    normal_shift_end: str = "17:00"
    late_shift_end: str = "19:00"

    @classmethod
    def from_config(cls, config: ScheduleConfig) -> "AlternatingWeekShiftPolicy":
        return cls(
            reference=config.rotation_reference,
            normal_shift_end=config.normal_shift_end,
            late_shift_end=config.late_shift_end,
        )

    def is_late_shift_week(self, day: Union[date, datetime]) -> bool:
        if isinstance(day, datetime):
            moment = day.replace(tzinfo=None)
        else:
            moment = datetime.combine(day, time())
        elapsed = moment - datetime.combine(self.reference, time())
        minutes = int(elapsed.total_seconds() // 60)
        week_number = minutes // MINUTES_PER_WEEK
        return week_number >= 0 and week_number % 2 == 1

    def resolve(self, staff: StaffMember, day: Union[date, datetime]) -> ShiftInfo:
        override = staff.schedule.working_late_shift if staff.schedule else None
        if override is not None:
            is_late = bool(override)
        else:
            is_late = self.is_late_shift_week(day)
        shift_end = self.late_shift_end if is_late else self.normal_shift_end
        return ShiftInfo(is_late=is_late, shift_end=shift_end)


def get_job_duration(category: Optional[str]) -> int:
    """Service duration in minutes for a category, using the default table."""
    return DefaultJobDurationPolicy().get_job_duration(category)


def estimate_travel_time(origin: Coordinates, destination: Coordinates) -> int:
    """Travel minutes between two points, using the default estimator."""
    return DefaultTravelTimePolicy().estimate(origin, destination)


def resolve_shift(staff: StaffMember, day: Union[date, datetime]) -> ShiftInfo:
    """Resolve a staff member's shift using the default rotation."""
    return AlternatingWeekShiftPolicy().resolve(staff, day)
