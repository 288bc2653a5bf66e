"""easterizer public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    derive_rule,
    project,
    observations,
    explain,
    seasons,
    season_start,
    phase_set,
    phase_range,
    get_oracle,
    set_oracle,
)
from .core.errors import EasterizerError, InvalidDateError, RuleError, YearRangeError
from .core.time import UTCDateTime, from_day, to_day
from .core.types import LunarPhaseSet, Reference, Rule, SolarEvent
from .text import describe_rule

__all__ = [
    "derive_rule",
    "project",
    "observations",
    "explain",
    "seasons",
    "season_start",
    "phase_set",
    "phase_range",
    "get_oracle",
    "set_oracle",
    "describe_rule",
    "UTCDateTime",
    "to_day",
    "from_day",
    "SolarEvent",
    "LunarPhaseSet",
    "Reference",
    "Rule",
    "EasterizerError",
    "YearRangeError",
    "InvalidDateError",
    "RuleError",
]
