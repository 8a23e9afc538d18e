"""Minute-precision arithmetic over "HH:MM" strings.

All helpers work on zero-padded 24-hour clock strings. The date is never
tracked, so ``add_minutes`` wraps past midnight while ``subtract_minutes``
clamps at 00:00.
"""

MINUTES_PER_DAY = 24 * 60


def parse_hhmm(value: str) -> int:
    """Convert an "HH:MM" string to minutes since midnight.

    Raises:
        ValueError: If the string is not of the form H:MM / HH:MM.
    """
    if not isinstance(value, str) or ":" not in value:
        raise ValueError(f"Invalid time string: {value!r}")
    hours_str, mins_str = value.split(":", 1)
    try:
        hours = int(hours_str)
        mins = int(mins_str)
    except ValueError:
        raise ValueError(f"Invalid time string: {value!r}")
    if not (0 <= hours < 24 and 0 <= mins < 60):
        raise ValueError(f"Time out of range: {value!r}")
    return hours * 60 + mins


def format_hhmm(total_minutes: int) -> str:
    """Format minutes since midnight as a zero-padded "HH:MM" string."""
    hours, mins = divmod(total_minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def is_valid_hhmm(value: str) -> bool:
    """Check whether a value parses as an "HH:MM" time."""
    try:
        parse_hhmm(value)
    except ValueError:
        return False
    return True


def add_minutes(time_str: str, minutes: int) -> str:
    """Add minutes to a time, wrapping at midnight.

    Example:
        >>> add_minutes("23:50", 20)
        '00:10'
    """
    total = (parse_hhmm(time_str) + minutes) % MINUTES_PER_DAY
    return format_hhmm(total)


def subtract_minutes(time_str: str, minutes: int) -> str:
    """Subtract minutes from a time, clamping at 00:00.

    Example:
        >>> subtract_minutes("00:10", 30)
        '00:00'
    """
    total = parse_hhmm(time_str) - minutes
    return format_hhmm(max(0, total))


def compare_time(a: str, b: str) -> int:
    """Signed difference in minutes between two times (a - b)."""
    return parse_hhmm(a) - parse_hhmm(b)
