"""Conversion of stored staff and job documents into domain objects.

Documents arrive in the document-store shape (camelCase keys, ``_id`` or
``id``, ISO timestamp strings). Records that cannot be converted are
skipped with a warning rather than failing the whole load.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from plumbsched.domain.models import Job, StaffMember, StaffSchedulePrefs
from plumbsched.errors import InputError

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, keeping its own wall-clock time.

    A trailing "Z" is accepted. The offset, if any, is preserved but not
    converted, so "2024-06-03T08:00:00Z" is a job at 08:00.

    Raises:
        ValueError: If the value is not a valid timestamp.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid timestamp: {value!r}")
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _object_id(raw: Any) -> str:
    if isinstance(raw, dict) and "$oid" in raw:
        raw = raw["$oid"]
    return str(raw) if raw not in (None, "") else ""


def _record_id(record: dict) -> str:
    return _object_id(record.get("id", record.get("_id")))


def _optional_bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("yes", "true", "1", "y")


def staff_from_dict(record: dict) -> StaffMember:
    """Convert a user document to a StaffMember.

    Raises:
        ValueError: If the record is not a mapping.
    """
    if not isinstance(record, dict):
        raise ValueError(f"Staff record must be an object, got {type(record).__name__}")

    location = record.get("location") or {}
    schedule = record.get("schedule") or {}
    return StaffMember(
        id=_record_id(record),
        name=record.get("name") or "",
        role=record.get("role") or "staff",
        city=location.get("city") if isinstance(location, dict) else None,
        schedule=StaffSchedulePrefs(
            working_late_shift=_optional_bool(schedule.get("workingLateShift")),
            shift_start_time=schedule.get("shiftStartTime"),
            shift_end_time=schedule.get("shiftEndTime"),
        ),
        email=record.get("email"),
    )


def job_from_dict(record: dict) -> Job:
    """Convert a job document to a Job.

    ``riskAddress`` falls back to the legacy ``RiskAddress`` key.

    Raises:
        ValueError: If the record is not a mapping or its due date is invalid.
    """
    if not isinstance(record, dict):
        raise ValueError(f"Job record must be an object, got {type(record).__name__}")

    assigned = _object_id(record.get("assignedTo"))
    return Job(
        id=_record_id(record),
        assigned_to=assigned or None,
        due_date=parse_timestamp(record.get("dueDate")),
        category=record.get("category"),
        risk_address=record.get("riskAddress") or record.get("RiskAddress"),
        title=record.get("title"),
    )


def load_staff(records: Iterable[Any]) -> list[StaffMember]:
    """Convert user documents, skipping malformed ones."""
    staff = []
    for record in records or []:
        try:
            staff.append(staff_from_dict(record))
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping malformed staff record: {e}")
    return staff


def load_jobs(records: Iterable[Any]) -> list[Job]:
    """Convert job documents, skipping malformed ones."""
    jobs = []
    for record in records or []:
        try:
            jobs.append(job_from_dict(record))
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping malformed job record: {e}")
    return jobs


def load_json(path: Union[str, Path]) -> list[Any]:
    """Read a JSON array of documents from a file.

    Raises:
        InputError: If the file is missing, not JSON, or not an array.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except FileNotFoundError:
        raise InputError(f"Input file not found: {path}")
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON in {path}: {e}")
    if not isinstance(data, list):
        raise InputError(f"Expected a JSON array in {path}")
    logger.info(f"Loaded {len(data)} records from {path}")
    return data
