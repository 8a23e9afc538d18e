"""Tests for shift management and schedule permissions."""

import pytest

from plumbsched.config import CAPE_TOWN, JOHANNESBURG
from plumbsched.domain.models import StaffMember, StaffSchedulePrefs
from plumbsched.errors import (
    InvalidShiftHoursError,
    PermissionDeniedError,
    PlumbSchedError,
)
from plumbsched.scheduling.shift_management import (
    can_edit_schedules,
    can_view_schedules,
    shift_roster,
    toggle_late_shift,
    update_shift_hours,
)


@pytest.fixture
def admin():
    return StaffMember(id="a1", name="Admin", role="admin")


@pytest.fixture
def supervisor():
    return StaffMember(id="v1", name="Supervisor", role="supervisor")


@pytest.fixture
def staff():
    return StaffMember(id="s1", name="Thabo", role="staff", city=JOHANNESBURG)


class TestPermissions:
    """Who may view and edit schedules."""

    def test_admin_can_view_and_edit(self, admin):
        assert can_view_schedules(admin) is True
        assert can_edit_schedules(admin) is True

    def test_supervisor_can_view_only(self, supervisor):
        assert can_view_schedules(supervisor) is True
        assert can_edit_schedules(supervisor) is False

    def test_staff_and_clients_cannot_view(self, staff):
        client = StaffMember(id="c1", name="Client", role="client")
        assert can_view_schedules(staff) is False
        assert can_view_schedules(client) is False

    def test_anonymous(self):
        assert can_view_schedules(None) is False
        assert can_edit_schedules(None) is False


class TestToggleLateShift:
    """Tests for toggle_late_shift."""

    def test_unset_becomes_true(self, staff, admin):
        updated = toggle_late_shift(staff, admin)
        assert updated.schedule.working_late_shift is True

    def test_true_becomes_false(self, admin):
        staff = StaffMember(
            id="s1", name="Thabo", schedule=StaffSchedulePrefs(working_late_shift=True)
        )
        assert toggle_late_shift(staff, admin).schedule.working_late_shift is False

    def test_input_not_modified(self, staff, admin):
        toggle_late_shift(staff, admin)
        assert staff.schedule.working_late_shift is None

    def test_supervisor_denied(self, staff, supervisor):
        with pytest.raises(PermissionDeniedError, match="Only administrators"):
            toggle_late_shift(staff, supervisor)

    def test_anonymous_denied(self, staff):
        with pytest.raises(PlumbSchedError):
            toggle_late_shift(staff, None)


class TestUpdateShiftHours:
    """Tests for update_shift_hours."""

    def test_updates_hours(self, staff, admin):
        updated = update_shift_hours(staff, admin, "06:00", "18:00")
        assert updated.schedule.shift_start_time == "06:00"
        assert updated.schedule.shift_end_time == "18:00"
        assert staff.schedule.shift_start_time is None

    def test_keeps_late_flag(self, admin):
        staff = StaffMember(
            id="s1", name="Thabo", schedule=StaffSchedulePrefs(working_late_shift=True)
        )
        updated = update_shift_hours(staff, admin, "05:00", "19:00")
        assert updated.schedule.working_late_shift is True

    @pytest.mark.parametrize(
        "start,end",
        [("17:00", "05:00"), ("08:00", "08:00"), ("8am", "17:00"), ("05:00", "25:00")],
    )
    def test_invalid_hours(self, staff, admin, start, end):
        with pytest.raises(InvalidShiftHoursError):
            update_shift_hours(staff, admin, start, end)

    def test_invalid_hours_is_value_error(self, staff, admin):
        with pytest.raises(ValueError):
            update_shift_hours(staff, admin, "17:00", "05:00")

    def test_staff_denied(self, staff):
        with pytest.raises(PermissionDeniedError):
            update_shift_hours(staff, staff, "06:00", "18:00")


class TestShiftRoster:
    """Tests for the per-city roster."""

    @pytest.fixture
    def everyone(self, admin):
        return [
            admin,
            StaffMember(id="s1", name="Thabo", city=JOHANNESBURG),
            StaffMember(
                id="s2",
                name="Lerato",
                city=CAPE_TOWN,
                schedule=StaffSchedulePrefs(
                    working_late_shift=True, shift_start_time="06:00", shift_end_time="19:00"
                ),
            ),
            StaffMember(id="s3", name="", city=JOHANNESBURG),
            StaffMember(id="s4", name="Pieter", city=JOHANNESBURG),
        ]

    def test_filters_by_city(self, everyone):
        rows = shift_roster(everyone, JOHANNESBURG)
        assert [r.staff_id for r in rows] == ["s1", "s4"]

    def test_defaults_shown(self, everyone):
        row = shift_roster(everyone, JOHANNESBURG)[0]
        assert (row.shift_start, row.shift_end) == ("05:00", "17:00")
        assert row.shift_label == "Normal Shift"

    def test_configured_values_shown(self, everyone):
        row = shift_roster(everyone, CAPE_TOWN)[0]
        assert (row.shift_start, row.shift_end) == ("06:00", "19:00")
        assert row.shift_label == "Late Shift"

    def test_admins_excluded(self, everyone):
        ids = [r.staff_id for r in shift_roster(everyone, JOHANNESBURG)]
        assert "a1" not in ids
