"""
easterizer.config

Environment-driven settings, read once per process.

  EASTERIZER_ORACLE        "package.module:attribute" naming a lunar phase
                           oracle class or zero-argument factory
                           (default: the built-in Meeus series)
  EASTERIZER_OBSERVATIONS  number of dates listed by observations() and the
                           CLI (default 5)
  EASTERIZER_LOG_LEVEL     CLI log level name (default WARNING)
"""

from __future__ import annotations

import importlib
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

from .core.errors import EasterizerError

DEFAULT_ORACLE = "easterizer.reference.moon_phases:MeeusPhaseOracle"
DEFAULT_OBSERVATIONS = 5
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    oracle: str = DEFAULT_ORACLE
    observations: int = DEFAULT_OBSERVATIONS
    log_level: str = DEFAULT_LOG_LEVEL


def _env(name: str) -> Optional[str]:
    v = os.environ.get(name, "").strip()
    return v or None


def settings_from_env() -> Settings:
    count = _env("EASTERIZER_OBSERVATIONS")
    observations = DEFAULT_OBSERVATIONS
    if count is not None:
        try:
            observations = int(count)
        except ValueError:
            raise EasterizerError(f"EASTERIZER_OBSERVATIONS must be an integer, got {count!r}") from None
        if observations < 1:
            raise EasterizerError(f"EASTERIZER_OBSERVATIONS must be positive, got {observations}")

    return Settings(
        oracle=_env("EASTERIZER_ORACLE") or DEFAULT_ORACLE,
        observations=observations,
        log_level=(_env("EASTERIZER_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return settings_from_env()


def load_oracle(target: str) -> Any:
    """
    Import "package.module:attribute" and build an oracle from it.

    Classes and factories are called without arguments; any other object is
    used as is.
    """
    modpath, sep, attr = target.partition(":")
    if not sep or not modpath or not attr:
        raise EasterizerError(f"oracle must look like 'package.module:attribute', got {target!r}")
    try:
        mod = importlib.import_module(modpath)
    except ImportError as e:
        raise EasterizerError(f"cannot import oracle module {modpath!r}: {e}") from e
    if not hasattr(mod, attr):
        raise EasterizerError(f"module {modpath} has no attribute {attr!r}")
    obj = getattr(mod, attr)
    return obj() if callable(obj) else obj
