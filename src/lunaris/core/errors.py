class LunarisError(Exception):
    """Base error."""

class TableError(LunarisError, ValueError):
    """Raised when a time-scale table is malformed or not sorted by JD."""

class DeltaTTableUnavailable(LunarisError, RuntimeError):
    """Raised when an explicitly configured table file cannot be read."""
