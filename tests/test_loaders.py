"""Tests for loading staff and job documents."""

import json
from datetime import date, datetime, timedelta, timezone

import pytest

from plumbsched.errors import InputError
from plumbsched.loaders import (
    job_from_dict,
    load_jobs,
    load_json,
    load_staff,
    parse_timestamp,
    staff_from_dict,
)
from plumbsched.scheduling.weekly import build_week_schedules


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_naive(self):
        assert parse_timestamp("2024-06-03T08:30:00") == datetime(2024, 6, 3, 8, 30)

    def test_zulu_keeps_wall_clock(self):
        parsed = parse_timestamp("2024-06-03T08:00:00Z")
        assert parsed.hour == 8
        assert parsed.utcoffset() == timedelta(0)

    def test_offset_preserved(self):
        parsed = parse_timestamp("2024-06-03T10:00:00+02:00")
        assert parsed.hour == 10
        assert parsed.tzinfo == timezone(timedelta(hours=2))

    def test_empty_values(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None

    def test_datetime_passthrough(self):
        value = datetime(2024, 6, 3, 9, 0)
        assert parse_timestamp(value) is value

    @pytest.mark.parametrize("value", ["next tuesday", 20240603])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)


class TestStaffFromDict:
    """Tests for user document conversion."""

    def test_full_record(self):
        staff = staff_from_dict({
            "_id": "u1",
            "name": "Thabo",
            "role": "staff",
            "email": "thabo@example.com",
            "location": {"city": "Johannesburg"},
            "schedule": {
                "workingLateShift": True,
                "shiftStartTime": "06:00",
                "shiftEndTime": "19:00",
            },
        })
        assert staff.id == "u1"
        assert staff.city == "Johannesburg"
        assert staff.schedule.working_late_shift is True
        assert staff.schedule.shift_start_time == "06:00"
        assert staff.email == "thabo@example.com"

    def test_object_id(self):
        staff = staff_from_dict({"_id": {"$oid": "65a1b2c3"}, "name": "Lerato"})
        assert staff.id == "65a1b2c3"

    def test_defaults(self):
        staff = staff_from_dict({"id": "u2"})
        assert staff.role == "staff"
        assert staff.city is None
        assert staff.schedule.working_late_shift is None

    def test_explicit_false_override(self):
        staff = staff_from_dict({"id": "u3", "schedule": {"workingLateShift": False}})
        assert staff.schedule.working_late_shift is False

    def test_not_a_mapping(self):
        with pytest.raises(ValueError):
            staff_from_dict(["u1"])


class TestJobFromDict:
    """Tests for job document conversion."""

    def test_full_record(self):
        job = job_from_dict({
            "_id": "j1",
            "assignedTo": "u1",
            "dueDate": "2024-06-03T08:00:00Z",
            "category": "Leak Detection",
            "riskAddress": "12 Main Rd",
            "title": "Leak under sink",
        })
        assert job.id == "j1"
        assert job.assigned_to == "u1"
        assert job.due_date.hour == 8
        assert job.due_day == date(2024, 6, 3)
        assert job.category == "Leak Detection"
        assert job.risk_address == "12 Main Rd"

    def test_legacy_address_key(self):
        job = job_from_dict({"id": "j2", "RiskAddress": "4 Oxford Rd"})
        assert job.risk_address == "4 Oxford Rd"

    def test_object_id_assignee(self):
        job = job_from_dict({"id": "j1", "assignedTo": {"$oid": "65a1b2c3"}})
        assert job.assigned_to == "65a1b2c3"

    def test_object_id_assignee_matches_staff(self):
        staff = load_staff([{"_id": {"$oid": "abc"}, "name": "Thabo", "role": "staff"}])
        jobs = load_jobs([{
            "_id": {"$oid": "j1"},
            "assignedTo": {"$oid": "abc"},
            "dueDate": "2024-06-03T09:00:00Z",
        }])
        week = build_week_schedules(staff, jobs, date(2024, 6, 3))
        assert [e.job_id for e in week.get("abc", date(2024, 6, 3)) if e.job_id] == ["j1"]

    def test_unassigned(self):
        job = job_from_dict({"id": "j3", "assignedTo": ""})
        assert job.assigned_to is None
        assert job.due_date is None


class TestLoadRecords:
    """Tests for the tolerant list loaders."""

    def test_malformed_jobs_skipped(self, caplog):
        jobs = load_jobs([
            {"id": "j1", "dueDate": "2024-06-03T08:00:00"},
            {"id": "j2", "dueDate": "not a date"},
            "garbage",
        ])
        assert [j.id for j in jobs] == ["j1"]
        assert "Skipping malformed job record" in caplog.text

    def test_malformed_staff_skipped(self):
        staff = load_staff([{"id": "u1"}, None, 42])
        assert [s.id for s in staff] == ["u1"]

    def test_none_is_empty(self):
        assert load_jobs(None) == []
        assert load_staff(None) == []


class TestLoadJson:
    """Tests for reading input files."""

    def test_reads_array(self, tmp_path):
        path = tmp_path / "staff.json"
        path.write_text(json.dumps([{"id": "u1"}]))
        assert load_json(path) == [{"id": "u1"}]

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError, match="not found"):
            load_json(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(InputError, match="Invalid JSON"):
            load_json(path)

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "obj.json"
        path.write_text(json.dumps({"id": "u1"}))
        with pytest.raises(InputError, match="JSON array"):
            load_json(path)
