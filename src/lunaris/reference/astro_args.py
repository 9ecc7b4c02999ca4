from __future__ import annotations

"""
lunaris.reference.astro_args

Time variables and fundamental arguments shared by the Sun, Moon and
nutation series. All inputs are JD(TT).
"""

from dataclasses import dataclass

from .angles import ArcSec, Degrees, map_to_0_to_360
from .calendar import centuries_from_j2000, millennia_from_j2000


# ------------------------------------------------------------
# Time variables (TT)
# ------------------------------------------------------------

def T_centuries(jd_tt: float) -> float:
    """Julian centuries from J2000.0."""
    return centuries_from_j2000(jd_tt)


def tau_millennia(jd_tt: float) -> float:
    """Julian millennia from J2000.0 (VSOP87 time variable)."""
    return millennia_from_j2000(jd_tt)


# ------------------------------------------------------------
# Nutation arguments (Meeus ch. 22; degrees)
# ------------------------------------------------------------

@dataclass(frozen=True)
class NutationArgs:
    """Mean elongation D, anomalies M and M', argument of latitude F, node Ω."""
    D: float
    M: float
    Mp: float
    F: float
    Omega: float

    def as_tuple(self) -> tuple:
        return (self.D, self.M, self.Mp, self.F, self.Omega)


def nutation_args(T: float) -> NutationArgs:
    T2 = T * T
    T3 = T2 * T
    D = 297.85036 + 445267.111480 * T - 0.0019142 * T2 + T3 / 189474.0
    M = 357.52772 + 35999.050340 * T - 0.0001603 * T2 - T3 / 300000.0
    Mp = 134.96298 + 477198.867398 * T + 0.0086972 * T2 + T3 / 56250.0
    F = 93.27191 + 483202.017538 * T - 0.0036825 * T2 + T3 / 327270.0
    Omega = 125.04452 - 1934.136261 * T + 0.0020708 * T2 + T3 / 450000.0
    return NutationArgs(
        D=map_to_0_to_360(D),
        M=map_to_0_to_360(M),
        Mp=map_to_0_to_360(Mp),
        F=map_to_0_to_360(F),
        Omega=map_to_0_to_360(Omega),
    )


# ------------------------------------------------------------
# Obliquity and eccentricity
# ------------------------------------------------------------

_EPS0_J2000 = ArcSec.from_dms(23, 26, 21.448)

# Laskar (Meeus 22.3) coefficients of u, u^2, ..., u^10 in arcseconds
_LASKAR = (-4680.93, -1.55, 1999.25, -51.38, -249.67, -39.05, 7.12, 27.87, 5.79, 2.45)


def mean_obliquity(jd_tt: float) -> Degrees:
    """
    Mean obliquity of the ecliptic (Laskar). u is in units of 10000 years,
    valid for |u| < 1.
    """
    u = T_centuries(jd_tt) / 100.0
    acc = 0.0
    for c in reversed(_LASKAR):
        acc = (acc + c) * u
    return Degrees.from_arcsec(ArcSec(_EPS0_J2000.value + acc))


def eccentricity(jd_tt: float) -> float:
    """Eccentricity of Earth's orbit (Meeus 47.6)."""
    T = T_centuries(jd_tt)
    return 1.0 - 0.002516 * T - 0.0000074 * T * T
