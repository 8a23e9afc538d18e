"""PDF generation for weekly staff schedules.

This module creates printable PDF schedules showing:
- One page per staff member with a column for each day of the week
- Schedule entries colored by type (base, travel, job, end)
- A legend and page numbers
"""

from io import BytesIO
from pathlib import Path
from typing import Union

from plumbsched.config import JOHANNESBURG
from plumbsched.domain.models import (
    EntryType,
    ScheduleEntry,
    StaffMember,
    WeekSchedule,
    schedule_key,
)

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    EntryType.BASE: (0.6, 0.6, 0.6),  # Gray
    EntryType.TRAVEL: (0.8, 0.6, 0.2),  # Orange
    EntryType.JOB: (0.4, 0.7, 0.4),  # Green
    EntryType.END: (0.4, 0.4, 0.8),  # Blue
    "failed": (0.9, 0.7, 0.7),  # Light red
}


class PDFGenerator:
    """Generates printable weekly schedule PDFs.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(week, staff_list, "schedule.pdf")
    """

    def __init__(
        self,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin

    def generate(
        self,
        week: WeekSchedule,
        staff_list: list[StaffMember],
        output_path: Union[str, Path],
    ) -> None:
        """Generate PDF schedule and save to file.

        Args:
            week: The week of schedules to render.
            staff_list: Staff members; only those in ``week`` get a page.
            output_path: Path to save the PDF.
        """
        try:
            from reportlab.lib.pagesizes import letter, landscape
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        c = canvas.Canvas(str(output_path), pagesize=landscape(letter))
        self._draw_staff_pages(c, week, staff_list)
        c.save()

    def generate_to_buffer(
        self,
        week: WeekSchedule,
        staff_list: list[StaffMember],
    ) -> BytesIO:
        """Generate PDF and return as bytes buffer."""
        try:
            from reportlab.lib.pagesizes import letter, landscape
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=landscape(letter))
        self._draw_staff_pages(c, week, staff_list)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw_staff_pages(
        self,
        c,
        week: WeekSchedule,
        staff_list: list[StaffMember],
    ) -> None:
        """Draw one page per scheduled staff member."""
        scheduled_ids = set(week.staff_ids)
        pages = [s for s in staff_list if s.id in scheduled_ids]

        if not pages:
            self._draw_header(c, week, "No staff scheduled")
            c.showPage()
            return

        for page_num, staff in enumerate(pages, 1):
            self._draw_header(c, week, f"{staff.name or staff.id} ({staff.city or JOHANNESBURG})")
            self._draw_week_grid(c, week, staff)
            self._draw_legend(c, self.margin, self.margin + 10)

            c.setFont("Helvetica", 9)
            c.drawCentredString(
                self.page_width / 2,
                self.margin - 10,
                f"Page {page_num} of {len(pages)}",
            )
            c.showPage()

    def _draw_header(self, c, week: WeekSchedule, subtitle: str) -> None:
        """Draw page header with week and staff name."""
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"Staff Schedule - Week of {week.week_start.strftime('%B %d, %Y')}",
        )

        c.setFont("Helvetica", 10)
        c.drawString(self.margin, self.page_height - self.margin - 35, subtitle)

    def _draw_week_grid(self, c, week: WeekSchedule, staff: StaffMember) -> None:
        """Draw seven day columns with the staff member's entries."""
        top = self.page_height - self.margin - 60
        bottom = self.margin + 30
        column_width = (self.page_width - 2 * self.margin) / len(week.days)
        row_height = 28

        for col, day in enumerate(week.days):
            x = self.margin + col * column_width
            result = week.results.get(schedule_key(staff.id, day))
            entries = result.entries if result else []
            job_count = sum(1 for e in entries if e.type == EntryType.JOB)

            c.setFillColorRGB(0, 0, 0)
            c.setFont("Helvetica-Bold", 9)
            c.drawString(x + 4, top, day.strftime("%a, %b %d"))
            c.setFont("Helvetica", 7)
            c.drawString(x + 4, top - 10, f"{job_count} jobs")

            c.setStrokeColorRGB(0.7, 0.7, 0.7)
            c.setLineWidth(0.5)
            c.rect(x, bottom, column_width, top - bottom + 14, fill=0, stroke=1)

            if result is not None and not result.ok:
                c.setFillColorRGB(*COLORS["failed"])
                c.rect(x + 2, top - 44, column_width - 4, row_height - 4, fill=1, stroke=0)
                c.setFillColorRGB(0, 0, 0)
                c.drawString(x + 6, top - 32, "Schedule unavailable")
                continue

            y = top - 20
            for entry in entries:
                y -= row_height
                if y < bottom:
                    c.setFillColorRGB(0, 0, 0)
                    c.drawString(x + 6, bottom + 4, "...")
                    break
                self._draw_entry(c, entry, x + 2, y, column_width - 4, row_height - 4)

    def _draw_entry(
        self,
        c,
        entry: ScheduleEntry,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        """Draw a single schedule entry box."""
        c.setFillColorRGB(*COLORS.get(entry.type, (0.5, 0.5, 0.5)))
        c.rect(x, y, width, height, fill=1, stroke=0)

        max_chars = int(width / 3.6)
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 7)
        label = entry.time
        if entry.estimated_duration:
            label += f" ({entry.estimated_duration}m)"
        c.drawString(x + 3, y + height - 9, label)
        c.setFont("Helvetica", 6)
        c.drawString(x + 3, y + height - 17, entry.description[:max_chars])

    def _draw_legend(self, c, x: float, y: float) -> None:
        """Draw legend for colors."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 8)
        c.drawString(x, y, "Legend:")

        items = [
            (EntryType.BASE, "Base"),
            (EntryType.TRAVEL, "Travel"),
            (EntryType.JOB, "Job"),
            (EntryType.END, "End of shift"),
        ]

        c.setFont("Helvetica", 7)
        current_x = x + 45

        for key, label in items:
            color = COLORS.get(key, (0.5, 0.5, 0.5))
            c.setFillColorRGB(*color)
            c.rect(current_x, y - 2, 12, 10, fill=1, stroke=1)
            c.setFillColorRGB(0, 0, 0)
            c.drawString(current_x + 15, y, label)
            current_x += 70
