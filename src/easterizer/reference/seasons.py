# reference/seasons.py

from __future__ import annotations

import math
from typing import Tuple

from ..core.time import validate_year
from ..core.types import SEASONS, SolarEvent
from . import astro_args as aa


# Mean equinox/solstice JDE0 = c0 + c1 Y + c2 Y^2 + c3 Y^3 + c4 Y^4,
# one row per quarter: March, June, September, December.

# Table 27.A, years -1000..+1000, Y = year / 1000
SEASON_TERMS_EARLY = (
    (1721139.29189, 365242.13740, 0.06134, 0.00111, -0.00071),
    (1721233.25401, 365241.72562, -0.05323, 0.00907, 0.00025),
    (1721325.70455, 365242.49558, -0.11677, -0.00297, 0.00074),
    (1721414.39987, 365242.88257, -0.00769, -0.00933, -0.00006),
)

# Table 27.B, years +1000..+3000, Y = (year - 2000) / 1000
SEASON_TERMS_LATE = (
    (2451623.80984, 365242.37404, 0.05169, -0.00411, -0.00057),
    (2451716.56767, 365241.62603, 0.00325, 0.00888, -0.00030),
    (2451810.21715, 365242.01767, -0.11575, 0.00337, 0.00078),
    (2451900.05952, 365242.74049, -0.06223, -0.00823, 0.00032),
)

# Table 27.C: (A, B deg, C deg/century), S = sum A cos(B + C T)
PERIODIC_TERMS = (
    (485, 324.96, 1934.136),
    (203, 337.23, 32964.467),
    (199, 342.08, 20.186),
    (182, 27.85, 445267.112),
    (156, 73.14, 45036.886),
    (136, 171.52, 22518.443),
    (77, 222.54, 65928.934),
    (74, 296.72, 3034.906),
    (70, 243.58, 9037.513),
    (58, 119.81, 33718.147),
    (52, 297.17, 150.678),
    (50, 21.02, 2281.226),
    (45, 247.54, 29929.562),
    (44, 325.15, 31555.956),
    (29, 60.93, 4443.417),
    (18, 155.12, 67555.328),
    (17, 288.79, 4562.452),
    (16, 198.04, 62894.029),
    (14, 199.76, 31436.921),
    (12, 95.39, 14577.848),
    (12, 287.11, 31931.756),
    (12, 320.81, 34777.259),
    (9, 227.73, 1222.114),
    (8, 15.45, 16859.074),
)


def mean_season_jde(quarter: int, year: int) -> float:
    """JDE0 of the mean equinox/solstice for quarter 0..3 of year."""
    if year >= 1000:
        Y = (year - 2000) / 1000.0
        c = SEASON_TERMS_LATE[quarter]
    else:
        Y = year / 1000.0
        c = SEASON_TERMS_EARLY[quarter]
    return c[0] + Y * (c[1] + Y * (c[2] + Y * (c[3] + Y * c[4])))


def periodic_sum(T: float) -> float:
    return sum(A * aa.cos_deg(B + C * T) for A, B, C in PERIODIC_TERMS)


def season_instant(quarter: int, year: int) -> float:
    """
    Instant (JD) of the equinox or solstice of the given quarter, rounded to
    1e-5 day (~0.9 s). The JDE is taken as the UTC instant.
    """
    if not 0 <= quarter <= 3:
        raise ValueError(f"quarter must be in 0..3, got {quarter}")
    jde0 = mean_season_jde(quarter, year)
    T = aa.T_centuries(jde0)

    # aberration/nutation scaling of the periodic correction
    W = 35999.373 * T - 2.47
    d_lambda = 1.0 + 0.0334 * aa.cos_deg(W) + 0.0007 * aa.cos_deg(2.0 * W)

    jde = jde0 + (0.00001 * periodic_sum(T)) / d_lambda
    return math.floor(jde * 100000.0 + 0.5) / 100000.0


def season_start(month_index: int, year: int) -> float:
    """
    Equinox/solstice closing the calendar quarter that holds month_index
    (0 = January .. 11 = December): months 0..2 give the March equinox,
    3..5 the June solstice, and so on.
    """
    if not 0 <= month_index <= 11:
        raise ValueError(f"month_index must be in 0..11, got {month_index}")
    return season_instant(month_index // 3, year)


def seasons(year: int) -> Tuple[SolarEvent, ...]:
    """The four solar events of year in chronological order."""
    validate_year(year)
    return tuple(SolarEvent(season=name, jd=season_instant(q, year)) for q, name in enumerate(SEASONS))
