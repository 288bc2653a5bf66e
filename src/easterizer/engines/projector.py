"""
easterizer.engines.projector
----------------------------
Finds other dates satisfying a moveable-feast rule, one year at a time.

The astronomical Easter is the rule "first Sunday after the first full moon
following the March equinox".
"""

from __future__ import annotations

import logging
from typing import List

from ..core.errors import EasterizerError
from ..core.time import (
    UTCDateTime,
    add_months,
    add_years,
    from_day,
    is_midnight,
    start_of_day,
    validate_year,
    weekday_of,
)
from ..core.types import Rule
from ..reference.seasons import season_instant
from .interfaces import LunarPhaseOracle

LOGGER = logging.getLogger(__name__)

# Each retry moves the search a full year; the year range check stops it first
# in practice.
_MAX_YEAR_SHIFTS = 8


def solar_crossing(date: UTCDateTime, quarter: int, forward: bool) -> float:
    """
    Instant of the first event of `quarter` at or after date (forward) or at
    or before date (backward), stepping a year at a time.
    """
    step = 1 if forward else -1
    jd = date.jd
    year = date.year
    while True:
        event = season_instant(quarter, year)
        if (event >= jd) if forward else (event <= jd):
            break
        year += step
    validate_year(year)
    return event


def lunar_anchor(event_jd: float, rule: Rule, oracle: LunarPhaseOracle) -> float:
    """
    The rule.lunar_count-th occurrence of the rule's phase after the solar
    event, or the event itself for a rule without lunar occurrences.
    """
    if rule.lunar_count == 0:
        return event_jd
    window_end = add_months(from_day(event_jd), rule.lunar_count + 1).jd
    countdown = rule.lunar_count
    for t in oracle.phase_range(event_jd - 1.0, window_end, rule.lunar.index):
        if t < event_jd:
            continue
        countdown -= 1
        if countdown == 0:
            return t
    raise EasterizerError(
        f"only {rule.lunar_count - countdown} {rule.lunar.label} phases follow "
        f"{from_day(event_jd)}, rule needs {rule.lunar_count}"
    )


def weekday_after(anchor_jd: float, rule: Rule) -> UTCDateTime:
    """Count rule.weekday_count weekdays from the first whole day at or after anchor_jd."""
    day = start_of_day(anchor_jd)
    if not is_midnight(anchor_jd):
        day += 1.0
    offset = (rule.weekday - weekday_of(day)) % 7
    return from_day(day + offset + 7 * (rule.weekday_count - 1)).start_of_day()


def project(date: UTCDateTime, rule: Rule, oracle: LunarPhaseOracle, forward: bool = True) -> UTCDateTime:
    """
    Nearest date strictly after (forward) or before (backward) date's
    calendar day that satisfies rule, at 00:00 UTC.
    """
    validate_year(date.year)
    date = date.start_of_day()
    step = 1 if forward else -1
    key = date.date_key()

    probe = date
    for _ in range(_MAX_YEAR_SHIFTS):
        event = solar_crossing(probe, rule.solar.index, forward)
        anchor = lunar_anchor(event, rule, oracle)
        result = weekday_after(anchor, rule)

        if (result.date_key() > key) if forward else (result.date_key() < key):
            LOGGER.debug("projected %s %s -> %s", date.date_iso(), "forward" if forward else "backward", result.date_iso())
            return result

        # reproduced the input day (or fell short of it): search from the next year
        LOGGER.debug("projection from %s gave %s, shifting a year", probe.date_iso(), result.date_iso())
        probe = add_years(probe, step)

    raise EasterizerError(f"no date satisfying the rule found near {date}")


def observations(
    rule: Rule,
    start: UTCDateTime,
    count: int,
    oracle: LunarPhaseOracle,
    forward: bool = True,
) -> List[UTCDateTime]:
    """
    `count` consecutive dates satisfying rule after (or before) start, in
    chronological order.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    out: List[UTCDateTime] = []
    current = start
    for _ in range(count):
        current = project(current, rule, oracle, forward=forward)
        out.append(current)
    if not forward:
        out.reverse()
    return out
