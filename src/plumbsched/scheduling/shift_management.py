"""Shift management operations for the schedule screen.

Admins and supervisors may view schedules; only admins may change a staff
member's late-shift flag or shift hours. Edits return updated copies and
never modify the staff records passed in.
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from plumbsched.domain.models import StaffMember
from plumbsched.domain.timeutil import compare_time, is_valid_hhmm
from plumbsched.errors import InvalidShiftHoursError, PermissionDeniedError

logger = logging.getLogger(__name__)


@dataclass
class RosterRow:
    """One staff member's line in the late-shift management roster."""

    staff_id: str
    name: str
    shift_start: str
    shift_end: str
    working_late_shift: bool

    @property
    def shift_label(self) -> str:
        return "Late Shift" if self.working_late_shift else "Normal Shift"


def can_view_schedules(user: Optional[StaffMember]) -> bool:
    """Only admins and supervisors see staff schedules."""
    return user is not None and (user.is_admin or user.is_supervisor)


def can_edit_schedules(user: Optional[StaffMember]) -> bool:
    """Only admins change shift settings."""
    return user is not None and user.is_admin


def _require_admin(actor: Optional[StaffMember], action: str) -> None:
    if not can_edit_schedules(actor):
        who = actor.name if actor is not None else "anonymous"
        logger.warning(f"Denied {action} for {who}: administrator role required")
        raise PermissionDeniedError(f"Only administrators can {action}.")


def toggle_late_shift(staff: StaffMember, actor: Optional[StaffMember]) -> StaffMember:
    """Flip a staff member's explicit late-shift override.

    An unset override is treated as "not late", so the first toggle sets it
    to True.

    Raises:
        PermissionDeniedError: If ``actor`` is not an admin.
    """
    _require_admin(actor, "modify staff schedules")
    current = bool(staff.schedule.working_late_shift)
    schedule = replace(staff.schedule, working_late_shift=not current)
    logger.info(f"Toggling late shift for {staff.name}: {current} -> {not current}")
    return replace(staff, schedule=schedule)


def update_shift_hours(
    staff: StaffMember,
    actor: Optional[StaffMember],
    start_time: str,
    end_time: str,
) -> StaffMember:
    """Set a staff member's configured shift start and end.

    Raises:
        PermissionDeniedError: If ``actor`` is not an admin.
        InvalidShiftHoursError: If either time is not "HH:MM" or the end is
            not after the start.
    """
    _require_admin(actor, "modify shift hours")
    for value in (start_time, end_time):
        if not is_valid_hhmm(value):
            raise InvalidShiftHoursError(f"Invalid shift time: {value!r}")
    if compare_time(end_time, start_time) <= 0:
        raise InvalidShiftHoursError(
            f"Shift end {end_time} must be after shift start {start_time}"
        )
    schedule = replace(
        staff.schedule, shift_start_time=start_time, shift_end_time=end_time
    )
    logger.info(f"Updating {staff.name} shift: {start_time} - {end_time}")
    return replace(staff, schedule=schedule)


def shift_roster(staff_list: Iterable[StaffMember], city: str) -> list[RosterRow]:
    """Roster rows for named staff members based in a city."""
    rows = []
    for staff in staff_list:
        if not staff.is_staff or not staff.id or not staff.name:
            continue
        if staff.city != city:
            continue
        rows.append(
            RosterRow(
                staff_id=staff.id,
                name=staff.name,
                shift_start=staff.schedule.display_start,
                shift_end=staff.schedule.display_end,
                working_late_shift=bool(staff.schedule.working_late_shift),
            )
        )
    return rows
