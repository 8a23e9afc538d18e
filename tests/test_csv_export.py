"""Tests for the weekly CSV export."""

import re
from datetime import date, datetime

import pytest

from plumbsched.config import JOHANNESBURG
from plumbsched.domain.models import Job, StaffMember
from plumbsched.output.csv_exporter import (
    CSV_HEADERS,
    csv_filename,
    export_week_csv,
    write_week_csv,
)
from plumbsched.scheduling.weekly import build_week_schedules

MONDAY = date(2024, 6, 3)
ROW_PATTERN = re.compile(
    r'^\d{4}-\d{2}-\d{2},\d{2}:\d{2},(base|travel|job|end),".*",".*",\d+$'
)


@pytest.fixture
def staff():
    return StaffMember(id="s1", name="Thabo", role="staff", city=JOHANNESBURG)


@pytest.fixture
def week(staff):
    jobs = [
        Job(
            id="j1",
            assigned_to="s1",
            due_date=datetime(2024, 6, 3, 8, 0),
            category="Leak Detection",
            risk_address="12 Main Rd",
            title="Leak under sink",
        ),
        Job(
            id="j2",
            assigned_to="s1",
            due_date=datetime(2024, 6, 6, 11, 30),
            category="Drain Blockage",
            risk_address="4 Oxford Rd",
            title="Blocked drain",
        ),
    ]
    return build_week_schedules([staff], jobs, MONDAY)


class TestExportWeekCsv:
    """Tests for export_week_csv."""

    def test_header_line(self, week):
        text = export_week_csv("s1", week, MONDAY)
        assert text.split("\n")[0] == "Date,Time,Type,Location,Description,Duration (min)"
        assert text.split("\n")[0] == ",".join(CSV_HEADERS)

    def test_one_line_per_entry(self, week):
        text = export_week_csv("s1", week, MONDAY)
        total = week.count_entries("s1")
        assert len(text.split("\n")) == total + 1

    def test_rows_match_layout(self, week):
        lines = export_week_csv("s1", week, MONDAY).split("\n")
        for line in lines[1:]:
            assert ROW_PATTERN.match(line), line

    def test_base_row(self, week):
        lines = export_week_csv("s1", week, MONDAY).split("\n")
        assert lines[1] == (
            '2024-06-03,05:00,base,"5 Thora Cres, Wynberg, Sandton, 2090",'
            '"Start shift at base location",0'
        )

    def test_job_row_has_duration(self, week):
        lines = export_week_csv("s1", week, MONDAY).split("\n")
        job_rows = [line for line in lines if ",job," in line]
        assert job_rows[0] == '2024-06-03,08:00,job,"12 Main Rd","Leak under sink",120'
        assert job_rows[1] == '2024-06-06,11:30,job,"4 Oxford Rd","Blocked drain",90'

    def test_days_in_week_order(self, week):
        lines = export_week_csv("s1", week, MONDAY).split("\n")[1:]
        dates = [line.split(",")[0] for line in lines]
        assert dates == sorted(dates)
        assert dates[0] == "2024-06-03"
        assert dates[-1] == "2024-06-09"

    def test_no_trailing_newline(self, week):
        assert not export_week_csv("s1", week, MONDAY).endswith("\n")

    def test_unknown_staff_is_header_only(self, week):
        assert export_week_csv("nobody", week, MONDAY) == ",".join(CSV_HEADERS)

    def test_quotes_are_not_escaped(self, staff):
        jobs = [
            Job(
                id="j1",
                assigned_to="s1",
                due_date=datetime(2024, 6, 3, 9, 0),
                title='Fix "hot" tap',
            )
        ]
        week = build_week_schedules([staff], jobs, MONDAY)
        text = export_week_csv("s1", week, MONDAY)
        assert '"Fix "hot" tap"' in text


class TestCsvFiles:
    """Tests for file naming and writing."""

    def test_filename(self):
        assert csv_filename("Thabo", MONDAY) == "Thabo_schedule_2024-06-03.csv"

    def test_write_week_csv(self, staff, week, tmp_path):
        path = write_week_csv(staff, week, tmp_path / "out")
        assert path == tmp_path / "out" / "Thabo_schedule_2024-06-03.csv"
        assert path.read_text() == export_week_csv("s1", week, MONDAY)

    def test_write_uses_id_when_name_missing(self, week, tmp_path):
        nameless = StaffMember(id="s1", role="staff", city=JOHANNESBURG)
        path = write_week_csv(nameless, week, tmp_path)
        assert path.name == "s1_schedule_2024-06-03.csv"
