"""Validation module for checking generated day plans.

This module checks the structural rules every day plan must satisfy:
it opens at the depot, closes with the end of shift, travel always leads
straight into a job, and the day never ends before the shift does.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, Optional

from plumbsched.config import ScheduleConfig
from plumbsched.domain.models import (
    EntryType,
    ScheduleEntry,
    ShiftInfo,
    StaffMember,
    WeekSchedule,
)
from plumbsched.domain.policies import (
    AlternatingWeekShiftPolicy,
    DefaultTravelTimePolicy,
    ShiftPolicy,
)
from plumbsched.domain.timeutil import compare_time, is_valid_hhmm


class ValidationErrorType(Enum):
    """Types of validation errors."""

    EMPTY_SCHEDULE = "empty_schedule"
    MISSING_BASE = "missing_base"
    MISSING_END = "missing_end"
    INVALID_TIME = "invalid_time"
    TRAVEL_NOT_FOLLOWED_BY_JOB = "travel_not_followed_by_job"
    TRAVEL_OUT_OF_BOUNDS = "travel_out_of_bounds"
    JOB_WITHOUT_ID = "job_without_id"
    MISSING_DURATION = "missing_duration"
    MISPLACED_COORDINATES = "misplaced_coordinates"
    END_BEFORE_SHIFT_END = "end_before_shift_end"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    staff_id: Optional[str] = None
    day: Optional[date] = None
    index: Optional[int] = None

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.staff_id:
            parts.append(f"Staff {self.staff_id}:")
        if self.day:
            parts.append(f"{self.day}:")
        parts.append(self.message)
        if self.index is not None:
            parts.append(f"(entry {self.index})")
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating one or more day plans."""

    is_valid: bool = True
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)

    def merge(self, other: "ValidationResult") -> None:
        for error in other.errors:
            self.add_error(error)
        self.warnings.extend(other.warnings)


class ScheduleValidator:
    """Validates day plans against the ordering and timing rules.

    Example:
        >>> validator = ScheduleValidator()
        >>> result = validator.validate_week(week, staff_list)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(
        self,
        config: Optional[ScheduleConfig] = None,
        shift_policy: Optional[ShiftPolicy] = None,
        travel_policy: Optional[DefaultTravelTimePolicy] = None,
    ):
        """Initialize validator.

        Args:
            config: Shift end times; should match the builder's config.
            shift_policy: Late/normal shift selection. Derived from
                ``config`` when omitted.
            travel_policy: Supplies the allowed travel duration bounds.
        """
        self.config = config or ScheduleConfig()
        self.shift_policy = shift_policy or AlternatingWeekShiftPolicy.from_config(
            self.config
        )
        self.travel_policy = travel_policy or DefaultTravelTimePolicy()

    def validate_day(
        self,
        entries: list[ScheduleEntry],
        shift: ShiftInfo,
        staff_id: Optional[str] = None,
        day: Optional[date] = None,
    ) -> ValidationResult:
        """Validate one day plan.

        Args:
            entries: Day plan in generated order.
            shift: Shift the staff member works that day.
            staff_id: Used only to label errors.
            day: Used only to label errors.
        """
        result = ValidationResult()

        def error(kind: ValidationErrorType, message: str, index: Optional[int] = None):
            result.add_error(ValidationError(kind, message, staff_id, day, index))

        if not entries:
            error(ValidationErrorType.EMPTY_SCHEDULE, "Day plan has no entries")
            return result

        if entries[0].type != EntryType.BASE:
            error(ValidationErrorType.MISSING_BASE, "First entry is not the base start", 0)
        if entries[-1].type != EntryType.END:
            error(ValidationErrorType.MISSING_END, "Last entry is not the end of shift", len(entries) - 1)

        for i, entry in enumerate(entries):
            if not is_valid_hhmm(entry.time):
                error(ValidationErrorType.INVALID_TIME, f"Invalid time {entry.time!r}", i)
                continue

            if entry.coordinates is not None and entry.type != EntryType.BASE:
                error(
                    ValidationErrorType.MISPLACED_COORDINATES,
                    f"{entry.type.value} entry carries coordinates",
                    i,
                )

            if entry.type == EntryType.TRAVEL:
                self._check_travel(entries, i, error)
            elif entry.type == EntryType.JOB:
                if not entry.job_id:
                    error(ValidationErrorType.JOB_WITHOUT_ID, "Job entry has no job id", i)
                if not entry.estimated_duration:
                    error(ValidationErrorType.MISSING_DURATION, "Job entry has no duration", i)

        last = entries[-1]
        if last.type == EntryType.END and is_valid_hhmm(last.time):
            if compare_time(last.time, shift.shift_end) < 0:
                error(
                    ValidationErrorType.END_BEFORE_SHIFT_END,
                    f"Day ends at {last.time}, before shift end {shift.shift_end}",
                    len(entries) - 1,
                )

        # Ordering by time is not guaranteed; report, don't fail
        for i in range(1, len(entries)):
            prev, cur = entries[i - 1], entries[i]
            if is_valid_hhmm(prev.time) and is_valid_hhmm(cur.time):
                if compare_time(cur.time, prev.time) < 0:
                    result.add_warning(
                        f"Staff {staff_id} {day}: entry {i} at {cur.time} is earlier "
                        f"than entry {i - 1} at {prev.time}"
                    )
        return result

    def _check_travel(self, entries: list[ScheduleEntry], i: int, error) -> None:
        entry = entries[i]
        if i + 1 >= len(entries) or entries[i + 1].type != EntryType.JOB:
            error(
                ValidationErrorType.TRAVEL_NOT_FOLLOWED_BY_JOB,
                "Travel entry is not followed by a job",
                i,
            )
        duration = entry.estimated_duration
        low = self.travel_policy.min_minutes
        high = self.travel_policy.max_minutes
        if duration is None or not (low <= duration <= high):
            error(
                ValidationErrorType.TRAVEL_OUT_OF_BOUNDS,
                f"Travel duration {duration} outside [{low}, {high}]",
                i,
            )

    def validate_week(
        self,
        week: WeekSchedule,
        staff_list: Iterable[StaffMember],
    ) -> ValidationResult:
        """Validate every successful day in a week.

        Failed days are reported as warnings, not errors.
        """
        result = ValidationResult()
        staff_by_id = {s.id: s for s in staff_list}

        for day_result in week.results.values():
            if not day_result.ok:
                result.add_warning(
                    f"Staff {day_result.staff_id} {day_result.day}: "
                    f"schedule not generated ({day_result.reason})"
                )
                continue
            staff = staff_by_id.get(day_result.staff_id)
            if staff is None:
                result.add_warning(f"Unknown staff id {day_result.staff_id}")
                continue
            shift = self.shift_policy.resolve(staff, day_result.day)
            result.merge(
                self.validate_day(day_result.entries, shift, staff.id, day_result.day)
            )
        return result
