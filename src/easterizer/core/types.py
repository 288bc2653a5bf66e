from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Literal, Tuple

from .errors import RuleError
from .time import UTCDateTime, from_day

# Fixed calendar-quarter identities: March equinox, June solstice,
# September equinox, December solstice.
SEASONS: Tuple[str, ...] = ("spring", "summer", "autumn", "winter")
PHASES: Tuple[str, ...] = ("new", "first_quarter", "full", "last_quarter")

Season = Literal["spring", "summer", "autumn", "winter"]
Phase = Literal["new", "first_quarter", "full", "last_quarter"]


@dataclass(frozen=True)
class SolarEvent:
    season: Season
    jd: float

    @property
    def quarter(self) -> int:
        return SEASONS.index(self.season)

    @property
    def instant(self) -> UTCDateTime:
        return from_day(self.jd)


@dataclass(frozen=True)
class LunarPhaseSet:
    """The four phases of one lunation plus the new moon that closes it."""
    new: float
    first_quarter: float
    full: float
    last_quarter: float
    next_new: float

    def phases(self) -> Tuple[float, float, float, float]:
        """Phase instants in canonical order (index = phase number)."""
        return (self.new, self.first_quarter, self.full, self.last_quarter)


@dataclass(frozen=True)
class Reference:
    kind: Literal["solar", "lunar"]
    label: str
    jd: float

    @property
    def index(self) -> int:
        labels = SEASONS if self.kind == "solar" else PHASES
        return labels.index(self.label)

    @property
    def instant(self) -> UTCDateTime:
        return from_day(self.jd)


@dataclass(frozen=True)
class Rule:
    """
    "The weekday_count-th weekday after the len(lunar_occurrences)-th lunar
    phase following the solar event."

    lunar_occurrences holds every instant of the lunar reference's phase
    between the solar event and the date the rule was derived from; only its
    length is used when projecting into other years. It is empty only when
    the lunar reference precedes the solar event (early January dates
    anchored to the previous December solstice); the weekday is then counted
    from the solar event itself.
    """
    solar: Reference
    lunar: Reference
    lunar_occurrences: Tuple[float, ...]
    weekday: int
    weekday_count: int

    def __post_init__(self) -> None:
        if self.solar.kind != "solar" or self.lunar.kind != "lunar":
            raise RuleError("rule needs one solar and one lunar reference")
        if not self.lunar_occurrences and self.lunar.jd >= self.solar.jd:
            raise RuleError("rule needs at least one lunar occurrence after the solar event")
        if not 0 <= self.weekday <= 6:
            raise RuleError(f"weekday must be in 0..6, got {self.weekday}")
        if self.weekday_count < 1:
            raise RuleError(f"weekday_count must be positive, got {self.weekday_count}")

    @property
    def lunar_count(self) -> int:
        return len(self.lunar_occurrences)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "solar": {"label": self.solar.label, "instant": self.solar.instant.isoformat()},
            "lunar": {"label": self.lunar.label, "instant": self.lunar.instant.isoformat()},
            "lunar_occurrences": [from_day(jd).isoformat() for jd in self.lunar_occurrences],
            "weekday": self.weekday,
            "weekday_count": self.weekday_count,
        }
