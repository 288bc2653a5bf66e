"""
easterizer.engines.deriver
--------------------------
Infers the moveable-feast rule that produces a given date: the solar event
and lunar phase anchoring it, plus the ordinal counts that reproduce it.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.errors import EasterizerError
from ..core.time import UTCDateTime, from_day, is_midnight, start_of_day, validate_year, weekday_of
from ..core.types import PHASES, Reference, Rule
from ..reference.seasons import season_instant, seasons
from .interfaces import LunarPhaseOracle

LOGGER = logging.getLogger(__name__)

# An oracle honouring its contract returns the surrounding lunation, so the
# lunar search never needs more than one step back.
_MAX_LUNAR_RETRIES = 3


def has_phase_between(start_jd: float, end_jd: float, oracle: LunarPhaseOracle) -> bool:
    """True if any lunar phase transition falls between start_jd and end_jd."""
    phases = oracle.phase_set(start_jd)
    if phases.next_new < end_jd:
        return True
    return any(start_jd <= t <= end_jd for t in phases.phases())


def find_solar_reference(date: UTCDateTime, oracle: LunarPhaseOracle) -> Reference:
    """
    Latest equinox/solstice of date's year, at or before date, that is
    followed by a lunar phase change before date. Falls back to the previous
    year's December solstice when no event of the year qualifies.
    """
    validate_year(date.year)
    jd = date.jd

    ref: Optional[Reference] = None
    for event in seasons(date.year):
        if event.jd > jd:
            break
        if not has_phase_between(event.jd, jd, oracle):
            continue
        ref = Reference(kind="solar", label=event.season, jd=event.jd)

    if ref is None:
        ref = Reference(kind="solar", label="winter", jd=season_instant(3, date.year - 1))
        LOGGER.debug("no qualifying solar event in %d, using previous December solstice", date.year)

    LOGGER.debug("solar reference for %s: %s at %s", date.date_iso(), ref.label, ref.instant)
    return ref


def find_lunar_reference(date: UTCDateTime, oracle: LunarPhaseOracle) -> Reference:
    """Latest lunar phase (any of the four) at or before date."""
    jd = date.jd
    probe = jd
    for _ in range(_MAX_LUNAR_RETRIES + 1):
        phases = oracle.phase_set(probe)
        ref: Optional[Reference] = None
        for label, t in zip(PHASES, phases.phases()):
            if t > jd:
                break
            ref = Reference(kind="lunar", label=label, jd=t)
        if ref is not None:
            LOGGER.debug("lunar reference for %s: %s at %s", date.date_iso(), ref.label, ref.instant)
            return ref
        # the whole set lies after date: retry one lunation earlier
        probe = phases.new - 1.0

    raise EasterizerError(f"lunar phase oracle returned no phase before {date}")


def weekday_occurrence_count(start_jd: float, end_jd: float, weekday: int) -> int:
    """
    Number of days with the given weekday stepping day by day from the first
    whole day at or after start_jd through the day of end_jd (inclusive).
    A start at exactly 00:00 counts its own day.
    """
    day = start_of_day(start_jd)
    if not is_midnight(start_jd):
        day += 1.0
    last = start_of_day(end_jd)
    count = 0
    while day <= last:
        if weekday_of(day) == weekday:
            count += 1
        day += 1.0
    return count


def derive_rule(date: UTCDateTime, oracle: LunarPhaseOracle) -> Rule:
    """
    Describe date as "the Nth weekday after the Mth lunar phase following a
    solar event".

    Only the calendar day of date is used. When the December solstice
    fallback leaves no lunar phase between the solstice and date, the rule
    has no lunar occurrences and the weekday is counted from the solstice.
    """
    date = date.start_of_day()
    solar = find_solar_reference(date, oracle)
    lunar = find_lunar_reference(date, oracle)

    jd = date.jd
    window = oracle.phase_range(solar.jd - 1.0, jd + 1.0, lunar.index)
    occurrences = tuple(t for t in window if solar.jd <= t <= jd)

    weekday = weekday_of(jd)
    anchor = lunar.jd if occurrences else solar.jd
    weekday_count = weekday_occurrence_count(anchor, jd, weekday)

    rule = Rule(
        solar=solar,
        lunar=lunar,
        lunar_occurrences=occurrences,
        weekday=weekday,
        weekday_count=weekday_count,
    )
    LOGGER.debug(
        "rule for %s: weekday %d #%d after %s #%d following %s (%s)",
        date.date_iso(), weekday, weekday_count, lunar.label, rule.lunar_count,
        solar.label, from_day(solar.jd).date_iso(),
    )
    return rule
