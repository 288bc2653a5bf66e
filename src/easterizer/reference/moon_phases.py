# reference/moon_phases.py

from __future__ import annotations

from functools import lru_cache
from typing import Tuple

from ..core.types import PHASES, LunarPhaseSet
from . import astro_args as aa


# Periodic corrections to the mean phase (Meeus, Astronomical Algorithms ch. 49).
# Rows are (coefficient in days, power of E, M' multiple, M multiple, F multiple, Omega multiple).
NEW_MOON_TERMS = (
    (-0.40720, 0, 1, 0, 0, 0),
    (0.17241, 1, 0, 1, 0, 0),
    (0.01608, 0, 2, 0, 0, 0),
    (0.01039, 0, 0, 0, 2, 0),
    (0.00739, 1, 1, -1, 0, 0),
    (-0.00514, 1, 1, 1, 0, 0),
    (0.00208, 2, 0, 2, 0, 0),
    (-0.00111, 0, 1, 0, -2, 0),
    (-0.00057, 0, 1, 0, 2, 0),
    (0.00056, 1, 2, 1, 0, 0),
    (-0.00042, 0, 3, 0, 0, 0),
    (0.00042, 1, 0, 1, 2, 0),
    (0.00038, 1, 0, 1, -2, 0),
    (-0.00024, 1, 2, -1, 0, 0),
    (-0.00017, 0, 0, 0, 0, 1),
    (-0.00007, 0, 1, 2, 0, 0),
    (0.00004, 0, 2, 0, -2, 0),
    (0.00004, 0, 0, 3, 0, 0),
    (0.00003, 0, 1, 1, -2, 0),
    (0.00003, 0, 2, 0, 2, 0),
    (-0.00003, 0, 1, 1, 2, 0),
    (0.00003, 0, 1, -1, 2, 0),
    (-0.00002, 0, 1, -1, -2, 0),
    (-0.00002, 0, 3, 1, 0, 0),
    (0.00002, 0, 4, 0, 0, 0),
)

FULL_MOON_TERMS = (
    (-0.40614, 0, 1, 0, 0, 0),
    (0.17302, 1, 0, 1, 0, 0),
    (0.01614, 0, 2, 0, 0, 0),
    (0.01043, 0, 0, 0, 2, 0),
    (0.00734, 1, 1, -1, 0, 0),
    (-0.00515, 1, 1, 1, 0, 0),
    (0.00209, 2, 0, 2, 0, 0),
    (-0.00111, 0, 1, 0, -2, 0),
    (-0.00057, 0, 1, 0, 2, 0),
    (0.00056, 1, 2, 1, 0, 0),
    (-0.00042, 0, 3, 0, 0, 0),
    (0.00042, 1, 0, 1, 2, 0),
    (0.00038, 1, 0, 1, -2, 0),
    (-0.00024, 1, 2, -1, 0, 0),
    (-0.00017, 0, 0, 0, 0, 1),
    (-0.00007, 0, 1, 2, 0, 0),
    (0.00004, 0, 2, 0, -2, 0),
    (0.00004, 0, 0, 3, 0, 0),
    (0.00003, 0, 1, 1, -2, 0),
    (0.00003, 0, 2, 0, 2, 0),
    (-0.00003, 0, 1, 1, 2, 0),
    (0.00003, 0, 1, -1, 2, 0),
    (-0.00002, 0, 1, -1, -2, 0),
    (-0.00002, 0, 3, 1, 0, 0),
    (0.00002, 0, 4, 0, 0, 0),
)

QUARTER_TERMS = (
    (-0.62801, 0, 1, 0, 0, 0),
    (0.17172, 1, 0, 1, 0, 0),
    (-0.01183, 1, 1, 1, 0, 0),
    (0.00862, 0, 2, 0, 0, 0),
    (0.00804, 0, 0, 0, 2, 0),
    (0.00454, 1, 1, -1, 0, 0),
    (0.00204, 2, 0, 2, 0, 0),
    (-0.00180, 0, 1, 0, -2, 0),
    (-0.00070, 0, 1, 0, 2, 0),
    (-0.00040, 0, 3, 0, 0, 0),
    (-0.00034, 1, 2, -1, 0, 0),
    (0.00032, 1, 0, 1, 2, 0),
    (0.00032, 1, 0, 1, -2, 0),
    (-0.00028, 2, 1, 2, 0, 0),
    (0.00027, 1, 2, 1, 0, 0),
    (-0.00017, 0, 0, 0, 0, 1),
    (-0.00005, 0, 1, -1, -2, 0),
    (0.00004, 0, 2, 0, 2, 0),
    (-0.00004, 0, 1, 1, 2, 0),
    (0.00004, 0, 1, -2, 0, 0),
    (0.00003, 0, 1, 1, -2, 0),
    (0.00003, 0, 0, 3, 0, 0),
    (0.00002, 0, 2, 0, -2, 0),
    (0.00002, 0, 1, -1, 2, 0),
    (-0.00002, 0, 3, 1, 0, 0),
)

# Planetary arguments A1..A14: (coefficient in days, A0 deg, deg per lunation).
# A1 also carries -0.009173 T^2.
PLANETARY_TERMS = (
    (0.000325, 299.77, 0.107408),
    (0.000165, 251.88, 0.016321),
    (0.000164, 251.83, 26.651886),
    (0.000126, 349.42, 36.412478),
    (0.000110, 84.66, 18.206239),
    (0.000062, 141.74, 53.303771),
    (0.000060, 207.14, 2.453732),
    (0.000056, 154.84, 7.306860),
    (0.000047, 34.52, 27.261239),
    (0.000042, 207.19, 0.121824),
    (0.000040, 291.34, 1.844379),
    (0.000037, 161.72, 24.198154),
    (0.000035, 239.56, 25.513099),
    (0.000023, 331.55, 3.592518),
)


def _periodic(terms, pa: aa.PhaseArgs) -> float:
    total = 0.0
    for coef, e_pow, mp, m, f, om in terms:
        arg = mp * pa.Mp_deg + m * pa.M_deg + f * pa.F_deg + om * pa.Omega_deg
        total += coef * (pa.E ** e_pow) * aa.sin_deg(arg)
    return total


def _quarter_w(pa: aa.PhaseArgs) -> float:
    return (
        0.00306
        - 0.00038 * pa.E * aa.cos_deg(pa.M_deg)
        + 0.00026 * aa.cos_deg(pa.Mp_deg)
        - 0.00002 * aa.cos_deg(pa.Mp_deg - pa.M_deg)
        + 0.00002 * aa.cos_deg(pa.Mp_deg + pa.M_deg)
        + 0.00002 * aa.cos_deg(2.0 * pa.F_deg)
    )


def _planetary(k: float, T: float) -> float:
    total = 0.0
    for i, (coef, a0, rate) in enumerate(PLANETARY_TERMS):
        a = a0 + rate * k
        if i == 0:
            a -= 0.009173 * T * T
        total += coef * aa.sin_deg(a)
    return total


@lru_cache(maxsize=4096)
def true_phase(lunation: int, phase: int) -> float:
    """
    Instant (JD) of the given phase (0 new, 1 first quarter, 2 full,
    3 last quarter) in Meeus lunation number `lunation`.

    Accuracy is of the order of a minute over the supported years; the JDE
    is taken as the UTC instant, as for the solar events.
    """
    if not 0 <= phase <= 3:
        raise ValueError(f"phase must be in 0..3, got {phase}")
    k = lunation + phase / 4.0
    pa = aa.phase_args(k)
    jde = aa.jde_mean_phase(k)

    if phase == 0:
        jde += _periodic(NEW_MOON_TERMS, pa)
    elif phase == 2:
        jde += _periodic(FULL_MOON_TERMS, pa)
    else:
        jde += _periodic(QUARTER_TERMS, pa)
        w = _quarter_w(pa)
        jde += w if phase == 1 else -w

    return jde + _planetary(k, pa.T)


class MeeusPhaseOracle:
    """Lunar phase oracle backed by the Meeus true-phase series."""

    def phase_set(self, jd: float) -> LunarPhaseSet:
        """Phases of the lunation containing jd (new <= jd < next_new)."""
        k = aa.lunation_from_jd(jd)
        while true_phase(k, 0) > jd:
            k -= 1
        while true_phase(k + 1, 0) <= jd:
            k += 1
        return LunarPhaseSet(
            new=true_phase(k, 0),
            first_quarter=true_phase(k, 1),
            full=true_phase(k, 2),
            last_quarter=true_phase(k, 3),
            next_new=true_phase(k + 1, 0),
        )

    def phase_range(self, start_jd: float, end_jd: float, phase: int) -> Tuple[float, ...]:
        """Every occurrence of phase with start_jd <= instant <= end_jd, increasing."""
        if not 0 <= phase < len(PHASES):
            raise ValueError(f"phase must be in 0..3, got {phase}")
        out = []
        # one lunation of margin covers the true/mean phase offset
        k = aa.lunation_from_jd(start_jd) - 1
        while True:
            t = true_phase(k, phase)
            if t > end_jd:
                break
            if t >= start_jd:
                out.append(t)
            k += 1
        return tuple(out)

    def __repr__(self) -> str:
        return "MeeusPhaseOracle()"
