"""Week schedule aggregation.

This module provides the WeekScheduleAggregator, which runs the day builder
for every staff member across a Monday-start week, plus the week navigation
helpers the schedule screen uses.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Union

from plumbsched.domain.models import (
    DayResult,
    DaySummary,
    EntryType,
    Job,
    ScheduleEntry,
    StaffMember,
    WeekSchedule,
)
from plumbsched.scheduling.day_builder import DayScheduleBuilder

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


def _as_date(reference: Union[date, datetime]) -> date:
    if isinstance(reference, datetime):
        return reference.date()
    return reference


def week_start(reference: Union[date, datetime]) -> date:
    """Monday of the week containing the reference date."""
    day = _as_date(reference)
    return day - timedelta(days=day.weekday())


def week_days(reference: Union[date, datetime]) -> list[date]:
    """The seven dates (Monday to Sunday) of the reference week."""
    start = week_start(reference)
    return [start + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def shift_week(reference: Union[date, datetime], weeks: int) -> date:
    """Move a reference date by whole weeks (negative for earlier weeks)."""
    return _as_date(reference) + timedelta(weeks=weeks)


def summarize_day(
    day: date,
    entries: list[ScheduleEntry],
    preview: int = 3,
) -> DaySummary:
    """Summarize a day for the week grid.

    Args:
        day: The date summarized.
        entries: The day's schedule entries.
        preview: Number of leading entries to show.
    """
    job_count = sum(1 for e in entries if e.type == EntryType.JOB)
    return DaySummary(
        day=day,
        job_count=job_count,
        preview=entries[:preview],
        hidden_count=max(0, len(entries) - preview),
    )


class WeekScheduleAggregator:
    """Generates schedules for all staff across one week.

    Every (staff member, day) cell is built independently. A cell that
    raises is logged and recorded as a failed DayResult with no entries;
    the rest of the week is unaffected and nothing is raised to the caller.

    Example:
        >>> aggregator = WeekScheduleAggregator()
        >>> week = aggregator.build(staff, jobs, date(2024, 6, 5))
        >>> week.schedules["s1-2024-06-03"]
    """

    def __init__(self, builder: Optional[DayScheduleBuilder] = None):
        self.builder = builder or DayScheduleBuilder()

    def schedulable_staff(self, staff_list: Iterable[StaffMember]) -> list[StaffMember]:
        """Staff members with role "staff" and an id."""
        result = []
        for staff in staff_list:
            if not isinstance(staff, StaffMember):
                logger.warning(f"Ignoring invalid staff record: {staff!r}")
                continue
            if not staff.is_staff:
                continue
            if not staff.id:
                logger.warning(f"Staff member missing id: {staff.name!r}")
                continue
            result.append(staff)
        return result

    def build(
        self,
        staff_list: Iterable[StaffMember],
        job_list: Iterable[Job],
        reference: Union[date, datetime],
    ) -> WeekSchedule:
        """Build schedules for the week containing ``reference``.

        Args:
            staff_list: All users; only staff members are scheduled.
            job_list: All jobs.
            reference: Any date within the target week.

        Returns:
            WeekSchedule with one DayResult per staff member per day.
        """
        days = week_days(reference)
        week = WeekSchedule(week_start=days[0], days=days)
        jobs = list(job_list or [])

        if staff_list is None:
            logger.warning("Staff list is missing; returning an empty week")
            return week

        for staff in self.schedulable_staff(staff_list):
            for day in days:
                week.add(self._build_cell(staff, day, jobs))

        failed = len(week.failures)
        if failed:
            logger.warning(
                f"Week of {week.week_start}: {failed} of {len(week.results)} day schedules failed"
            )
        return week

    def _build_cell(self, staff: StaffMember, day: date, jobs: list[Job]) -> DayResult:
        try:
            return self.builder.build_result(staff, day, jobs)
        except Exception as e:
            logger.error(
                f"Error generating schedule for {staff.name or staff.id} on {day}: {e}",
                exc_info=True,
            )
            return DayResult.failure(staff.id, day, str(e) or type(e).__name__)


def build_week_schedules(
    staff_list: Iterable[StaffMember],
    job_list: Iterable[Job],
    reference: Union[date, datetime],
) -> WeekSchedule:
    """Build a week of schedules with the default builder."""
    return WeekScheduleAggregator().build(staff_list, job_list, reference)
