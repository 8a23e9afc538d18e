"""Exception types raised by plumbsched.

Schedule generation itself degrades with logging instead of raising; these
exceptions cover the operations that must refuse bad requests (shift edits,
unreadable input files).
"""


class PlumbSchedError(Exception):
    """Base class for all plumbsched errors."""


class PermissionDeniedError(PlumbSchedError):
    """Raised when a user lacks the role required for an operation."""


class InvalidShiftHoursError(PlumbSchedError, ValueError):
    """Raised when shift hours are not valid HH:MM strings."""


class InputError(PlumbSchedError):
    """Raised when an input file cannot be read or has the wrong shape."""
