"""Plain-text output of weekly staff schedules.

This module creates the text report the CLI prints:
- One section per staff member with their base city
- Per-day job counts and entries
- Failed day builds flagged inline
"""

from pathlib import Path
from typing import Union

from plumbsched.config import JOHANNESBURG
from plumbsched.domain.models import StaffMember, WeekSchedule, schedule_key
from plumbsched.scheduling.weekly import summarize_day


class TextReportGenerator:
    """Generates text output for a week of schedules.

    Args:
        preview: When set, show only this many entries per day followed by
            a "+N more entries" line, as the week grid does.
    """

    def __init__(self, preview: int = 0):
        self.preview = preview

    def generate(
        self,
        week: WeekSchedule,
        staff_list: list[StaffMember],
        output_path: Union[str, Path],
    ) -> str:
        """Generate the report and save it to a file.

        Returns:
            The generated text content.
        """
        content = self._generate_content(week, staff_list)
        Path(output_path).write_text(content)
        return content

    def generate_to_string(
        self,
        week: WeekSchedule,
        staff_list: list[StaffMember],
    ) -> str:
        """Generate the report and return it as a string."""
        return self._generate_content(week, staff_list)

    def _generate_content(
        self,
        week: WeekSchedule,
        staff_list: list[StaffMember],
    ) -> str:
        lines = []
        end_day = week.days[-1]

        lines.append("=" * 80)
        lines.append(
            f"STAFF SCHEDULES - Week of {week.week_start.strftime('%b %d, %Y')} "
            f"to {end_day.strftime('%b %d, %Y')}"
        )
        lines.append("=" * 80)

        scheduled_ids = set(week.staff_ids)
        for staff in staff_list:
            if staff.id not in scheduled_ids:
                continue
            lines.append("")
            lines.append("-" * 80)
            lines.append(f"{staff.name or staff.id} ({staff.city or JOHANNESBURG})")
            lines.append("-" * 80)

            for day in week.days:
                result = week.results.get(schedule_key(staff.id, day))
                entries = result.entries if result else []
                summary = summarize_day(day, entries, self.preview or len(entries))
                lines.append(f"{day.strftime('%a, %b %d')}: {summary.job_count} jobs")

                if result is not None and not result.ok:
                    lines.append(f"    !! schedule unavailable: {result.reason}")
                    continue

                for entry in summary.preview:
                    duration = (
                        f" [{entry.estimated_duration} min]"
                        if entry.estimated_duration
                        else ""
                    )
                    lines.append(
                        f"    {entry.time}  {entry.type.value:<6}  "
                        f"{entry.description}{duration}"
                    )
                    lines.append(f"                   @ {entry.location}")
                if summary.more_label:
                    lines.append(f"    {summary.more_label}")

        lines.append("")
        lines.append("=" * 80)
        failed = len(week.failures)
        lines.append(f"{len(week.results)} day schedules, {failed} failed")
        lines.append("=" * 80)

        return "\n".join(lines)
