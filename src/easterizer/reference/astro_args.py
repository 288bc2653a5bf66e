from __future__ import annotations

from dataclasses import dataclass
from math import fmod

import math


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    # avoid slow % for huge values; fmod is fine
    y = fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    return y


def sin_deg(x_deg: float) -> float:
    return math.sin(math.radians(x_deg))


def cos_deg(x_deg: float) -> float:
    return math.cos(math.radians(x_deg))


# ------------------------------------------------------------
# Time variable (TT)
# ------------------------------------------------------------

J2000_TT = 2451545.0  # JD(TT) at J2000.0


def T_centuries(jd_tt: float) -> float:
    """Julian centuries from J2000.0 in TT."""
    return (jd_tt - J2000_TT) / 36525.0


# ------------------------------------------------------------
# Lunation numbering (Meeus ch. 49)
# ------------------------------------------------------------

# JDE of the k=0 mean new moon (2000 January 6) and the mean synodic month.
JDE_LUNATION_ZERO = 2451550.09766
SYNODIC_MONTH_DAYS = 29.530588861

# T per unit of k: k / 1236.85 is Julian centuries from J2000.0.
LUNATIONS_PER_CENTURY = 1236.85


def lunation_from_jd(jd: float) -> int:
    """Meeus lunation index k of the mean new moon at or before jd (approximate)."""
    return math.floor((jd - JDE_LUNATION_ZERO) / SYNODIC_MONTH_DAYS)


def jde_mean_phase(k: float) -> float:
    """
    Mean Julian Ephemeris Day (TT) of lunation k.

    k is an integer for a new moon and k + 0.25, 0.5, 0.75 for the first
    quarter, full moon and last quarter:
      JDE = 2451550.09766 + 29.530588861 k
            + 0.00015437 T^2 - 0.000000150 T^3 + 0.00000000073 T^4,
      T = k / 1236.85.
    """
    T = k / LUNATIONS_PER_CENTURY
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2
    return (
        JDE_LUNATION_ZERO
        + SYNODIC_MONTH_DAYS * k
        + 0.00015437 * T2
        - 0.000000150 * T3
        + 0.00000000073 * T4
    )


# ------------------------------------------------------------
# Eccentricity factor
# ------------------------------------------------------------

def eccentricity_factor(T: float) -> float:
    """
    Eccentricity factor E for the Earth's orbit.
    Used to scale analytical lunar perturbations that depend on
    the Sun's mean anomaly.
    """
    return 1.0 - 0.002516 * T - 0.0000074 * (T * T)


# ------------------------------------------------------------
# Phase arguments (Meeus 49.4 - 49.7; degrees, wrapped)
# ------------------------------------------------------------

@dataclass(frozen=True)
class PhaseArgs:
    """Arguments of the true-phase corrections at lunation k."""
    T: float
    E: float
    M_deg: float      # Sun's mean anomaly
    Mp_deg: float     # Moon's mean anomaly
    F_deg: float      # Moon's argument of latitude
    Omega_deg: float  # longitude of the ascending node


def phase_args(k: float) -> PhaseArgs:
    T = k / LUNATIONS_PER_CENTURY
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2

    M = 2.5534 + 29.10535670 * k - 0.0000014 * T2 - 0.00000011 * T3
    Mp = (
        201.5643
        + 385.81693528 * k
        + 0.0107582 * T2
        + 0.00001238 * T3
        - 0.000000058 * T4
    )
    F = (
        160.7108
        + 390.67050284 * k
        - 0.0016118 * T2
        - 0.00000227 * T3
        + 0.000000011 * T4
    )
    Omega = 124.7746 - 1.56375588 * k + 0.0020672 * T2 + 0.00000215 * T3

    return PhaseArgs(
        T=T,
        E=eccentricity_factor(T),
        M_deg=wrap_deg(M),
        Mp_deg=wrap_deg(Mp),
        F_deg=wrap_deg(F),
        Omega_deg=wrap_deg(Omega),
    )
