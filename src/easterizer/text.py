from __future__ import annotations

from typing import Dict, Tuple

from .core.time import UTCDateTime
from .core.types import Rule

WEEKDAYS: Tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

SEASON_LABELS: Dict[str, str] = {
    "spring": "March equinox",
    "summer": "June solstice",
    "autumn": "September equinox",
    "winter": "December solstice",
}

PHASE_LABELS: Dict[str, str] = {
    "new": "New Moon",
    "first_quarter": "First-Quarter Moon",
    "full": "Full Moon",
    "last_quarter": "Last-Quarter Moon",
}

ORDINALS: Tuple[str, ...] = (
    "first",
    "second",
    "third",
    "fourth",
    "fifth",
    "sixth",
    "seventh",
    "eighth",
    "ninth",
    "tenth",
    "eleventh",
    "twelfth",
)

TEMPLATE = "the {weekday_ordinal} {weekday} after the {lunar_ordinal} {lunar} following the {solar}"
SOLAR_TEMPLATE = "the {weekday_ordinal} {weekday} following the {solar}"


def ordinal(n: int) -> str:
    """1 -> 'first'; past twelve falls back to '13th', '21st', ..."""
    if 1 <= n <= len(ORDINALS):
        return ORDINALS[n - 1]
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def describe_rule(rule: Rule) -> str:
    if rule.lunar_count == 0:
        return SOLAR_TEMPLATE.format(
            weekday_ordinal=ordinal(rule.weekday_count),
            weekday=WEEKDAYS[rule.weekday],
            solar=SEASON_LABELS[rule.solar.label],
        )
    return TEMPLATE.format(
        weekday_ordinal=ordinal(rule.weekday_count),
        weekday=WEEKDAYS[rule.weekday],
        lunar_ordinal=ordinal(rule.lunar_count),
        lunar=PHASE_LABELS[rule.lunar.label],
        solar=SEASON_LABELS[rule.solar.label],
    )


def format_date(ts: UTCDateTime) -> str:
    """ISO date with the weekday name, e.g. 2024-03-31 (Sunday)."""
    return f"{ts.date_iso()} ({WEEKDAYS[ts.weekday()]})"
