"""
easterizer.engines.interfaces
-----------------------------
Boundary between the rule engines and the lunar phase service they consume.

Standard Reference Frame:
All instants crossing this boundary are continuous Julian Days (noon
referenced, UTC). Phase numbers are 0 = new, 1 = first quarter, 2 = full,
3 = last quarter.
"""

from __future__ import annotations

from typing import Protocol, Tuple

from ..core.types import LunarPhaseSet


class LunarPhaseOracle(Protocol):
    """
    Supplies exact lunar phase instants. Implementations must return phases in
    strictly increasing order with sub-day accuracy; failures propagate to the
    caller untouched.
    """

    def phase_set(self, jd: float) -> LunarPhaseSet:
        """
        Phases of the lunation surrounding jd, plus the new moon that follows
        it (next_new) for lookahead.
        """
        ...

    def phase_range(self, start_jd: float, end_jd: float, phase: int) -> Tuple[float, ...]:
        """
        Every occurrence of `phase` whose instant lies in [start_jd, end_jd],
        chronologically increasing.
        """
        ...
