"""Day schedule generation for a single staff member.

This module provides the DayScheduleBuilder, which turns one staff member's
jobs for a date into an ordered day plan: depot start, travel and job visits
in due-time order, and end of shift.
"""

import logging
from datetime import date, datetime
from typing import Iterable, Optional

from plumbsched.config import ScheduleConfig
from plumbsched.domain.models import (
    Coordinates,
    DayResult,
    EntryType,
    Job,
    ScheduleEntry,
    StaffMember,
)
from plumbsched.domain.policies import (
    AddressHashResolver,
    AlternatingWeekShiftPolicy,
    CoordinateResolver,
    DefaultJobDurationPolicy,
    DefaultTravelTimePolicy,
    JobDurationPolicy,
    ShiftPolicy,
    TravelTimePolicy,
)
from plumbsched.domain.timeutil import add_minutes, compare_time, subtract_minutes

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Location not specified"
UNNAMED_JOB = "Unnamed Job"


def _wall_clock(job: Job) -> datetime:
    # Entries show the written local time, so order by it too
    return job.due_date.replace(tzinfo=None)


class DayScheduleBuilder:
    """Builds the ordered day plan for one staff member on one date.

    The builder is pure apart from logging and whatever randomness the
    coordinate resolver draws; staff and job inputs are never modified.

    Example:
        >>> builder = DayScheduleBuilder()
        >>> entries = builder.build(staff_member, date(2024, 6, 3), jobs)
        >>> [e.type.value for e in entries]
        ['base', 'travel', 'job', 'end']
    """

    def __init__(
        self,
        config: Optional[ScheduleConfig] = None,
        duration_policy: Optional[JobDurationPolicy] = None,
        travel_policy: Optional[TravelTimePolicy] = None,
        shift_policy: Optional[ShiftPolicy] = None,
        coordinate_resolver: Optional[CoordinateResolver] = None,
    ):
        """Initialize builder with policies.

        Args:
            config: Depots and fixed clock times.
            duration_policy: Service duration per job category.
            travel_policy: Travel-time estimator.
            shift_policy: Late/normal shift selection.
            coordinate_resolver: Maps jobs to coordinates for travel estimates.
        """
        self.config = config or ScheduleConfig()
        self.duration_policy = duration_policy or DefaultJobDurationPolicy()
        self.travel_policy = travel_policy or DefaultTravelTimePolicy()
        self.shift_policy = shift_policy or AlternatingWeekShiftPolicy.from_config(
            self.config
        )
        self.coordinate_resolver = coordinate_resolver or AddressHashResolver(
            origin=self.config.jitter_origin,
            span=self.config.jitter_span,
        )

    def jobs_for_day(
        self,
        staff: StaffMember,
        day: date,
        jobs: Iterable[Job],
    ) -> list[Job]:
        """Jobs assigned to a staff member that fall on a date, in due order.

        Jobs are ordered by the wall-clock time written on their due date,
        the same time their entries display; offsets are not compared. Ties
        keep their input order.
        """
        day_jobs = []
        for job in jobs or []:
            if not isinstance(job, Job):
                logger.warning(f"Ignoring invalid job data: {job!r}")
                continue
            if job.assigned_to != staff.id:
                continue
            if job.due_date is None:
                continue
            if not isinstance(job.due_date, datetime):
                logger.warning(f"Skipping job {job.id} with invalid due date: {job.due_date!r}")
                continue
            if job.due_day == day:
                day_jobs.append(job)
        return sorted(day_jobs, key=_wall_clock)

    def build(
        self,
        staff: Optional[StaffMember],
        day: Optional[date],
        jobs: Iterable[Job],
    ) -> list[ScheduleEntry]:
        """Generate the day plan.

        Malformed staff or date yields an empty list; a malformed job is
        skipped. Neither case raises.

        Args:
            staff: The staff member to schedule.
            day: The schedule date.
            jobs: All jobs; filtered to this staff member and date.

        Returns:
            Ordered schedule entries: base, (travel, job)*, end.
        """
        if staff is None or not staff.id or day is None:
            logger.warning(
                f"Missing required parameters for day schedule: staff={staff!r}, day={day!r}"
            )
            return []
        if not isinstance(day, date):
            logger.warning(f"Invalid schedule date for {staff.name or staff.id}: {day!r}")
            return []
        if isinstance(day, datetime):
            day = day.date()

        sorted_jobs = self.jobs_for_day(staff, day, jobs)
        base = self.config.base_for_city(staff.city)
        shift = self.shift_policy.resolve(staff, day)

        schedule = [
            ScheduleEntry(
                time=self.config.day_start,
                type=EntryType.BASE,
                location=base.address,
                description="Start shift at base location",
                coordinates=base.coordinates,
            )
        ]

        current_time = self.config.day_start
        current_location: Coordinates = base.coordinates
        scheduled = 0

        for job in sorted_jobs:
            if not job.id:
                logger.warning(f"Skipping job without id for {staff.name or staff.id} on {day}")
                continue
            try:
                visit = self._plan_visit(job, current_location)
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping job {job.id} for {staff.name or staff.id} on {day}: {e}")
                continue

            travel_entry, job_entry, end_time, next_location = visit
            if travel_entry is not None:
                schedule.append(travel_entry)
            schedule.append(job_entry)
            current_time = end_time
            current_location = next_location
            scheduled += 1

        last_job_time = current_time if scheduled else self.config.day_start
        if compare_time(last_job_time, shift.shift_end) > 0:
            end_time = last_job_time
        else:
            end_time = shift.shift_end

        schedule.append(
            ScheduleEntry(
                time=end_time,
                type=EntryType.END,
                location="End of shift",
                description=f"Shift ends ({shift.label})",
            )
        )
        return schedule

    def build_result(
        self,
        staff: StaffMember,
        day: date,
        jobs: Iterable[Job],
    ) -> DayResult:
        """Generate the day plan wrapped in a DayResult.

        A staff member without an id is reported as a failure instead of
        an empty success.
        """
        staff_id = staff.id if staff is not None else ""
        if not staff_id:
            return DayResult.failure(staff_id, day, "missing staff id")
        return DayResult.success(staff_id, day, self.build(staff, day, jobs))

    def _plan_visit(
        self,
        job: Job,
        current_location: Coordinates,
    ) -> tuple[Optional[ScheduleEntry], ScheduleEntry, str, Coordinates]:
        """Plan the travel and job entries for one job.

        Returns:
            Tuple of (travel_entry or None, job_entry, time the job finishes,
            location after the job).
        """
        if job.due_date is not None:
            job_time = job.due_date.strftime("%H:%M")
        else:
            job_time = self.config.default_job_time
        job_location = job.risk_address or UNKNOWN_LOCATION
        job_title = job.title or UNNAMED_JOB
        duration = self.duration_policy.get_job_duration(job.category)

        destination = self.coordinate_resolver.locate(job)
        travel_time = self.travel_policy.estimate(current_location, destination)

        travel_entry = None
        if travel_time > 0:
            travel_entry = ScheduleEntry(
                time=subtract_minutes(job_time, travel_time),
                type=EntryType.TRAVEL,
                location=f"En route to {job_location}",
                description=f"Travel time: {travel_time} minutes",
                estimated_duration=travel_time,
            )

        job_entry = ScheduleEntry(
            time=job_time,
            type=EntryType.JOB,
            location=job_location,
            description=job_title,
            job_id=job.id,
            estimated_duration=duration,
        )

        finished = add_minutes(job_time, duration)
        # Resolved again: the random resolver draws a new point here
        next_location = self.coordinate_resolver.locate(job)
        return travel_entry, job_entry, finished, next_location


def build_day_schedule(
    staff: StaffMember,
    day: date,
    jobs: Iterable[Job],
) -> list[ScheduleEntry]:
    """Build a day plan with the default configuration and policies."""
    return DayScheduleBuilder().build(staff, day, jobs)
