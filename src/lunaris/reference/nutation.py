from __future__ import annotations

"""
lunaris.reference.nutation

IAU 1980 nutation in longitude (Δψ) and obliquity (Δε), Meeus table 22.A.
Accuracy is about 0.0003" against the full theory.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from .angles import ArcSec, DEGREES_TO_RADIANS, Degrees
from .astro_args import T_centuries, mean_obliquity, nutation_args


# (D, M, M', F, Ω, A, B, C, D) with Δψ = Σ (A + B T) sin(arg),
# Δε = Σ (C + D T) cos(arg), all in units of 0.0001"
NUTATION_TERMS: Tuple[Tuple[int, int, int, int, int, float, float, float, float], ...] = (
    (0, 0, 0, 0, 1, -171996, -174.2, 92025, 8.9),
    (-2, 0, 0, 2, 2, -13187, -1.6, 5736, -3.1),
    (0, 0, 0, 2, 2, -2274, -0.2, 977, -0.5),
    (0, 0, 0, 0, 2, 2062, 0.2, -895, 0.5),
    (0, 1, 0, 0, 0, 1426, -3.4, 54, -0.1),
    (0, 0, 1, 0, 0, 712, 0.1, -7, 0),
    (-2, 1, 0, 2, 2, -517, 1.2, 224, -0.6),
    (0, 0, 0, 2, 1, -386, -0.4, 200, 0),
    (0, 0, 1, 2, 2, -301, 0, 129, -0.1),
    (-2, -1, 0, 2, 2, 217, -0.5, -95, 0.3),
    (-2, 0, 1, 0, 0, -158, 0, 0, 0),
    (-2, 0, 0, 2, 1, 129, 0.1, -70, 0),
    (0, 0, -1, 2, 2, 123, 0, -53, 0),
    (2, 0, 0, 0, 0, 63, 0, 0, 0),
    (0, 0, 1, 0, 1, 63, 0.1, -33, 0),
    (2, 0, -1, 2, 2, -59, 0, 26, 0),
    (0, 0, -1, 0, 1, -58, -0.1, 32, 0),
    (0, 0, 1, 2, 1, -51, 0, 27, 0),
    (-2, 0, 2, 0, 0, 48, 0, 0, 0),
    (0, 0, -2, 2, 1, 46, 0, -24, 0),
    (2, 0, 0, 2, 2, -38, 0, 16, 0),
    (0, 0, 2, 2, 2, -31, 0, 13, 0),
    (0, 0, 2, 0, 0, 29, 0, 0, 0),
    (-2, 0, 1, 2, 2, 29, 0, -12, 0),
    (0, 0, 0, 2, 0, 26, 0, 0, 0),
    (-2, 0, 0, 2, 0, -22, 0, 0, 0),
    (0, 0, -1, 2, 1, 21, 0, -10, 0),
    (0, 2, 0, 0, 0, 17, -0.1, 0, 0),
    (2, 0, -1, 0, 1, 16, 0, -8, 0),
    (-2, 2, 0, 2, 2, -16, 0.1, 7, 0),
    (0, 1, 0, 0, 1, -15, 0, 9, 0),
    (-2, 0, 1, 0, 1, -13, 0, 7, 0),
    (0, -1, 0, 0, 1, -12, 0, 6, 0),
    (0, 0, 2, -2, 0, 11, 0, 0, 0),
    (2, 0, -1, 2, 1, -10, 0, 5, 0),
    (2, 0, 1, 2, 2, -8, 0, 3, 0),
    (0, 1, 0, 2, 2, 7, 0, -3, 0),
    (-2, 1, 1, 0, 0, -7, 0, 0, 0),
    (0, -1, 0, 2, 2, -7, 0, 3, 0),
    (2, 0, 0, 2, 1, -7, 0, 3, 0),
    (2, 0, 1, 0, 0, 6, 0, 0, 0),
    (-2, 0, 2, 2, 2, 6, 0, -3, 0),
    (-2, 0, 1, 2, 1, 6, 0, -3, 0),
    (2, 0, -2, 0, 1, -6, 0, 3, 0),
    (2, 0, 0, 0, 1, -6, 0, 3, 0),
    (0, -1, 1, 0, 0, 5, 0, 0, 0),
    (-2, -1, 0, 2, 1, -5, 0, 3, 0),
    (-2, 0, 0, 0, 1, -5, 0, 3, 0),
    (0, 0, 2, 2, 1, -5, 0, 3, 0),
    (2, 0, 2, 0, 1, 4, 0, 0, 0),
    (2, 1, 0, 2, 1, 4, 0, 0, 0),
    (0, 0, 1, -2, 0, 4, 0, 0, 0),
    (-1, 0, 1, 0, 0, -4, 0, 0, 0),
    (-2, 1, 0, 0, 0, -4, 0, 0, 0),
    (1, 0, 0, 0, 0, -4, 0, 0, 0),
    (0, 0, 1, 2, 0, 3, 0, 0, 0),
    (0, 0, -2, 2, 2, -3, 0, 0, 0),
    (-1, -1, 1, 0, 0, -3, 0, 0, 0),
    (0, 1, 1, 0, 0, -3, 0, 0, 0),
    (0, -1, 1, 2, 2, -3, 0, 0, 0),
    (2, -1, -1, 2, 2, -3, 0, 0, 0),
    (0, 0, 3, 2, 2, -3, 0, 0, 0),
    (2, -1, 0, 2, 2, -3, 0, 0, 0),
)

_UNIT = 1e-4  # table unit in arcseconds


@dataclass(frozen=True)
class Nutation:
    longitude: ArcSec   # Δψ
    obliquity: ArcSec   # Δε


def nutation(jd_tt: float) -> Nutation:
    """Δψ and Δε from one evaluation of the argument polynomials."""
    T = T_centuries(jd_tt)
    args = nutation_args(T).as_tuple()
    dpsi = 0.0
    deps = 0.0
    for d, m, mp, f, om, a, b, c, dd in NUTATION_TERMS:
        arg = (d * args[0] + m * args[1] + mp * args[2] + f * args[3] + om * args[4]) * DEGREES_TO_RADIANS
        dpsi += (a + b * T) * math.sin(arg)
        deps += (c + dd * T) * math.cos(arg)
    return Nutation(longitude=ArcSec(dpsi * _UNIT), obliquity=ArcSec(deps * _UNIT))


def nutation_in_longitude(jd_tt: float) -> ArcSec:
    return nutation(jd_tt).longitude


def nutation_in_obliquity(jd_tt: float) -> ArcSec:
    return nutation(jd_tt).obliquity


def true_obliquity(jd_tt: float) -> Degrees:
    """ε = ε0 + Δε."""
    return mean_obliquity(jd_tt) + nutation_in_obliquity(jd_tt).to_degrees()
