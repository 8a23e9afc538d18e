"""CSV export of a staff member's week.

The file layout is fixed: a header row, then one row per schedule entry,
day by day in week order. Location and description are wrapped in double
quotes exactly as stored (no escaping); the other columns are bare.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Union

from plumbsched.domain.models import ScheduleEntry, StaffMember, WeekSchedule
from plumbsched.scheduling.weekly import week_days

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Date", "Time", "Type", "Location", "Description", "Duration (min)"]


def _entry_row(day: date, entry: ScheduleEntry) -> str:
    return ",".join([
        day.strftime("%Y-%m-%d"),
        entry.time,
        entry.type.value,
        f'"{entry.location}"',
        f'"{entry.description}"',
        str(entry.estimated_duration or 0),
    ])


def export_week_csv(
    staff_id: str,
    week_schedule: WeekSchedule,
    week_start: date,
) -> str:
    """Render one staff member's week as CSV text.

    Args:
        staff_id: Staff member to export.
        week_schedule: Generated week of schedules.
        week_start: Monday of the week; the seven days from here are exported.

    Returns:
        CSV text, lines joined by "\\n" with no trailing newline.
    """
    rows = [",".join(CSV_HEADERS)]
    for day in week_days(week_start):
        for entry in week_schedule.get(staff_id, day):
            rows.append(_entry_row(day, entry))
    return "\n".join(rows)


def csv_filename(staff_name: str, week_start: date) -> str:
    """Download name for a staff member's weekly CSV."""
    return f"{staff_name}_schedule_{week_start.strftime('%Y-%m-%d')}.csv"


def write_week_csv(
    staff: StaffMember,
    week_schedule: WeekSchedule,
    output_dir: Union[str, Path],
) -> Path:
    """Write a staff member's week to ``output_dir`` and return the path."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / csv_filename(staff.name or staff.id, week_schedule.week_start)
    path.write_text(export_week_csv(staff.id, week_schedule, week_schedule.week_start))
    logger.info(f"CSV exported → {path}")
    return path
