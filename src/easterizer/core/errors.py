class EasterizerError(Exception):
    """Base error."""

class YearRangeError(EasterizerError, ValueError):
    """Raised when a year falls outside the supported range of the series."""

class InvalidDateError(EasterizerError, ValueError):
    """Raised when calendar fields do not name a representable instant."""

class RuleError(EasterizerError, ValueError):
    """Raised when a moveable-feast rule carries impossible values."""
