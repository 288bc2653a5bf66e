"""Diagnostics package.

- round_trip: always available, light-weight Julian Day checks
- feast_scatter: optional (requires the diagnostics extras: numpy, matplotlib)
"""

__all__ = ["round_trip", "feast_scatter"]
