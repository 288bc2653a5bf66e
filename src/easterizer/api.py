from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Union

from .config import get_settings, load_oracle
from .core.time import UTCDateTime, validate_year
from .core.types import LunarPhaseSet, Rule, SolarEvent
from .engines import deriver, projector
from .engines.interfaces import LunarPhaseOracle
from .reference import seasons as _seasons
from .text import describe_rule

DateLike = Union[UTCDateTime, date, str]

_oracle: Optional[LunarPhaseOracle] = None


def set_oracle(oracle: Optional[LunarPhaseOracle]) -> None:
    """Replace the process default oracle; None restores the configured one."""
    global _oracle
    _oracle = oracle


def get_oracle() -> LunarPhaseOracle:
    global _oracle
    if _oracle is None:
        _oracle = load_oracle(get_settings().oracle)
    return _oracle


def _resolve(oracle: Optional[LunarPhaseOracle]) -> LunarPhaseOracle:
    return oracle if oracle is not None else get_oracle()


def _day(d: DateLike) -> UTCDateTime:
    """Calendar day of d at 00:00 UTC; rules work on whole days."""
    ts = UTCDateTime.coerce(d).start_of_day()
    validate_year(ts.year)
    return ts


# ============================================================
# Rules
# ============================================================

def derive_rule(d: DateLike, *, oracle: Optional[LunarPhaseOracle] = None) -> Rule:
    """Infer the moveable-feast rule that produces date d."""
    ts = _day(d)
    return deriver.derive_rule(ts, _resolve(oracle))


def project(
    d: DateLike,
    rule: Rule,
    *,
    forward: bool = True,
    oracle: Optional[LunarPhaseOracle] = None,
) -> UTCDateTime:
    """Nearest date after (or before) d satisfying rule."""
    ts = _day(d)
    return projector.project(ts, rule, _resolve(oracle), forward=forward)


def observations(
    rule: Rule,
    start: DateLike,
    *,
    count: Optional[int] = None,
    forward: bool = True,
    oracle: Optional[LunarPhaseOracle] = None,
) -> List[UTCDateTime]:
    """Consecutive dates satisfying rule, starting from start, in chronological order."""
    ts = _day(start)
    n = get_settings().observations if count is None else count
    return projector.observations(rule, ts, n, _resolve(oracle), forward=forward)


# ============================================================
# Astronomical primitives
# ============================================================

def seasons(year: int) -> Tuple[SolarEvent, ...]:
    return _seasons.seasons(year)


def season_start(month_index: int, year: int) -> float:
    validate_year(year)
    return _seasons.season_start(month_index, year)


def phase_set(d: DateLike, *, oracle: Optional[LunarPhaseOracle] = None) -> LunarPhaseSet:
    ts = UTCDateTime.coerce(d)
    validate_year(ts.year)
    return _resolve(oracle).phase_set(ts.jd)


def phase_range(
    start: DateLike,
    end: DateLike,
    phase: int,
    *,
    oracle: Optional[LunarPhaseOracle] = None,
) -> Tuple[float, ...]:
    s = UTCDateTime.coerce(start)
    e = UTCDateTime.coerce(end)
    validate_year(s.year)
    validate_year(e.year)
    return _resolve(oracle).phase_range(s.jd, e.jd, phase)


def explain(d: DateLike, *, oracle: Optional[LunarPhaseOracle] = None) -> Dict[str, Any]:
    """Rule for d as a JSON-ready mapping, with its English wording."""
    rule = derive_rule(d, oracle=oracle)
    out = rule.to_dict()
    out["date"] = UTCDateTime.coerce(d).date_iso()
    out["description"] = describe_rule(rule)
    return out
