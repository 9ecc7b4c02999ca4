# reference/lunar.py

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from .angles import ArcSec, Degrees, Radians, map_to_0_to_360, map_to_neg90_to_90
from .astro_args import T_centuries, eccentricity
from .coordinates import ecliptical_2_equatorial, rho_phi_prime
from .nutation import nutation_in_longitude, true_obliquity
from . import solar


EARTH_RADIUS_KM = 6378.14
MOON_MEAN_DISTANCE_KM = 385000.56
SEMIDIAMETER_RATIO = 0.272481        # k = Moon radius / Earth equatorial radius
SYNODIC_MONTH_DAYS = 29.530588853
MOON_DAY = 360.0 / SYNODIC_MONTH_DAYS  # mean elongation rate, deg/day


# (D, M, M', F, Σl coefficient, Σr coefficient)
# Σl in 1e-6 degree, Σr in 1e-3 km (Meeus table 47.A)
SIGMA_L_AND_R_TERMS: Tuple[Tuple[int, int, int, int, int, int], ...] = (
    (0, 0, 1, 0, 6288774, -20905355),
    (2, 0, -1, 0, 1274027, -3699111),
    (2, 0, 0, 0, 658314, -2955968),
    (0, 0, 2, 0, 213618, -569925),
    (0, 1, 0, 0, -185116, 48888),
    (0, 0, 0, 2, -114332, -3149),
    (2, 0, -2, 0, 58793, 246158),
    (2, -1, -1, 0, 57066, -152138),
    (2, 0, 1, 0, 53322, -170733),
    (2, -1, 0, 0, 45758, -204586),
    (0, 1, -1, 0, -40923, -129620),
    (1, 0, 0, 0, -34720, 108743),
    (0, 1, 1, 0, -30383, 104755),
    (2, 0, 0, -2, 15327, 10321),
    (0, 0, 1, 2, -12528, 0),
    (0, 0, 1, -2, 10980, 79661),
    (4, 0, -1, 0, 10675, -34782),
    (0, 0, 3, 0, 10034, -23210),
    (4, 0, -2, 0, 8548, -21636),
    (2, 1, -1, 0, -7888, 24208),
    (2, 1, 0, 0, -6766, 30824),
    (1, 0, -1, 0, -5163, -8379),
    (1, 1, 0, 0, 4987, -16675),
    (2, -1, 1, 0, 4036, -12831),
    (2, 0, 2, 0, 3994, -10445),
    (4, 0, 0, 0, 3861, -11650),
    (2, 0, -3, 0, 3665, 14403),
    (0, 1, -2, 0, -2689, -7003),
    (2, 0, -1, 2, -2602, 0),
    (2, -1, -2, 0, 2390, 10056),
    (1, 0, 1, 0, -2348, 6322),
    (2, -2, 0, 0, 2236, -9884),
    (0, 1, 2, 0, -2120, 5751),
    (0, 2, 0, 0, -2069, 0),
    (2, -2, -1, 0, 2048, -4950),
    (2, 0, 1, -2, -1773, 4130),
    (2, 0, 0, 2, -1595, 0),
    (4, -1, -1, 0, 1215, -3958),
    (0, 0, 2, 2, -1110, 0),
    (3, 0, -1, 0, -892, 3258),
    (2, 1, 1, 0, -810, 2616),
    (4, -1, -2, 0, 759, -1897),
    (0, 2, -1, 0, -713, -2117),
    (2, 2, -1, 0, -700, 2354),
    (2, 1, -2, 0, 691, 0),
    (2, -1, 0, -2, 596, 0),
    (4, 0, 1, 0, 549, -1423),
    (0, 0, 4, 0, 537, -1117),
    (4, -1, 0, 0, 520, -1571),
    (1, 0, -2, 0, -487, -1739),
    (2, 1, 0, -2, -399, 0),
    (0, 0, 2, -2, -381, -4421),
    (1, 1, 1, 0, 351, 0),
    (3, 0, -2, 0, -340, 0),
    (4, 0, -3, 0, 330, 0),
    (2, -1, 2, 0, 327, 0),
    (0, 2, 1, 0, -323, 1165),
    (1, 1, -1, 0, 299, 0),
    (2, 0, 3, 0, 294, 0),
    (2, 0, -1, -2, 0, 8752),
)

# (D, M, M', F, Σb coefficient in 1e-6 degree)  (Meeus table 47.B)
SIGMA_B_TERMS: Tuple[Tuple[int, int, int, int, int], ...] = (
    (0, 0, 0, 1, 5128122),
    (0, 0, 1, 1, 280602),
    (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237),
    (2, 0, -1, 1, 55413),
    (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573),
    (0, 0, 2, 1, 17198),
    (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822),
    (2, -1, 0, -1, 8216),
    (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200),
    (2, 1, 0, -1, -3359),
    (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211),
    (2, -1, -1, -1, 2065),
    (0, 1, -1, -1, -1870),
    (4, 0, -1, -1, 1828),
    (0, 1, 0, 1, -1794),
    (0, 0, 0, 3, -1749),
    (0, 1, -1, 1, -1565),
    (1, 0, 0, 1, -1491),
    (0, 1, 1, 1, -1475),
    (0, 1, 1, -1, -1410),
    (0, 1, 0, -1, -1344),
    (1, 0, 0, -1, -1335),
    (0, 0, 3, 1, 1107),
    (4, 0, 0, -1, 1021),
    (4, 0, -1, 1, 833),
    (0, 0, 1, -3, 777),
    (4, 0, -2, 1, 671),
    (2, 0, 0, -3, 607),
    (2, 0, 2, -1, 596),
    (2, -1, 1, -1, 491),
    (2, 0, -2, 1, -451),
    (0, 0, 3, -1, 439),
    (2, 0, 2, 1, 422),
    (2, 0, -3, -1, 421),
    (2, 1, -1, 1, -366),
    (2, 1, 0, 1, -351),
    (4, 0, 0, 1, 331),
    (2, -1, 1, 1, 315),
    (2, -2, 0, -1, 302),
    (0, 0, 1, 3, -283),
    (2, 1, 1, -1, -229),
    (1, 1, 0, -1, 223),
    (1, 1, 0, 1, 223),
    (0, 1, -2, -1, -220),
    (2, 1, -1, -1, -220),
    (1, 0, 1, 1, -185),
    (2, -1, -2, -1, 181),
    (0, 1, 2, 1, -177),
    (4, 0, -2, -1, 176),
    (4, -1, -1, -1, 166),
    (1, 0, 1, -1, -164),
    (4, 0, 1, -1, 132),
    (1, 0, -1, -1, -119),
    (4, -1, 0, -1, 115),
    (2, -2, 0, 1, 107),
)


# ------------------------------------------------------------
# Mean elements (Meeus 47.1 - 47.5; degrees)
# ------------------------------------------------------------

@dataclass(frozen=True)
class LunarMeanElements:
    Lp: float   # mean longitude L'
    D: float    # mean elongation
    M: float    # Sun's mean anomaly
    Mp: float   # Moon's mean anomaly M'
    F: float    # argument of latitude


def mean_elements(jd_tt: float) -> LunarMeanElements:
    T = T_centuries(jd_tt)
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2
    Lp = 218.3164477 + 481267.88123421 * T - 0.0015786 * T2 + T3 / 538841.0 - T4 / 65194000.0
    D = 297.8501921 + 445267.1114034 * T - 0.0018819 * T2 + T3 / 545868.0 - T4 / 113065000.0
    Mp = 134.9633964 + 477198.8675055 * T + 0.0087414 * T2 + T3 / 69699.0 - T4 / 14712000.0
    F = 93.2720950 + 483202.0175233 * T - 0.0036539 * T2 - T3 / 3526000.0 + T4 / 863310000.0
    return LunarMeanElements(
        Lp=map_to_0_to_360(Lp),
        D=map_to_0_to_360(D),
        M=solar.mean_anomaly(jd_tt).value,
        Mp=map_to_0_to_360(Mp),
        F=map_to_0_to_360(F),
    )


@lru_cache(maxsize=64)
def _periodic_sums(jd_tt: float) -> Tuple[float, float, float]:
    """(Σl, Σb, Σr) including the eccentricity factor and additive terms."""
    T = T_centuries(jd_tt)
    el = mean_elements(jd_tt)
    E = eccentricity(jd_tt)

    def e_factor(m: int) -> float:
        if m == 0:
            return 1.0
        return E * E if abs(m) == 2 else E

    sl = 0.0
    sr = 0.0
    for d, m, mp, f, cl, cr in SIGMA_L_AND_R_TERMS:
        arg = Degrees(d * el.D + m * el.M + mp * el.Mp + f * el.F).to_radians().value
        k = e_factor(m)
        sl += cl * k * math.sin(arg)
        sr += cr * k * math.cos(arg)

    sb = 0.0
    for d, m, mp, f, cb in SIGMA_B_TERMS:
        arg = Degrees(d * el.D + m * el.M + mp * el.Mp + f * el.F).to_radians().value
        sb += cb * e_factor(m) * math.sin(arg)

    a1 = Degrees(119.75 + 131.849 * T)
    a2 = Degrees(53.09 + 479264.290 * T)
    a3 = Degrees(313.45 + 481266.484 * T)
    Lp = Degrees(el.Lp)
    F = Degrees(el.F)
    Mp = Degrees(el.Mp)

    sl += 3958.0 * a1.sin() + 1962.0 * (Lp - F).sin() + 318.0 * a2.sin()
    sb += (
        -2235.0 * Lp.sin()
        + 382.0 * a3.sin()
        + 175.0 * (a1 - F).sin()
        + 175.0 * (a1 + F).sin()
        + 127.0 * (Lp - Mp).sin()
        - 115.0 * (Lp + Mp).sin()
    )
    return sl, sb, sr


# ------------------------------------------------------------
# Geocentric position
# ------------------------------------------------------------

def geocentric_longitude(jd_tt: float) -> Degrees:
    """Apparent geocentric longitude (nutation included)."""
    sl, _, _ = _periodic_sums(jd_tt)
    lam = mean_elements(jd_tt).Lp + sl / 1e6 + nutation_in_longitude(jd_tt).to_degrees().value
    return Degrees(map_to_0_to_360(lam))


def geocentric_latitude(jd_tt: float) -> Degrees:
    _, sb, _ = _periodic_sums(jd_tt)
    return Degrees(map_to_neg90_to_90(sb / 1e6))


def distance_from_earth(jd_tt: float) -> float:
    """Earth–Moon centre distance in km."""
    _, _, sr = _periodic_sums(jd_tt)
    return MOON_MEAN_DISTANCE_KM + sr / 1000.0


def equatorial_coordinates(jd_tt: float) -> Tuple[Degrees, Degrees]:
    """Apparent geocentric (α, δ) using the true obliquity."""
    return ecliptical_2_equatorial(geocentric_longitude(jd_tt), geocentric_latitude(jd_tt), true_obliquity(jd_tt))


@dataclass(frozen=True)
class MoonPosition:
    longitude: Degrees
    latitude: Degrees
    distance_km: float
    right_ascension: Degrees
    declination: Degrees


def moon_position(jd_tt: float) -> MoonPosition:
    lon = geocentric_longitude(jd_tt)
    lat = geocentric_latitude(jd_tt)
    ra, dec = ecliptical_2_equatorial(lon, lat, true_obliquity(jd_tt))
    return MoonPosition(lon, lat, distance_from_earth(jd_tt), ra, dec)


# ------------------------------------------------------------
# Parallax and semidiameter
# ------------------------------------------------------------

def horizontal_equatorial_parallax(jd_tt: float) -> ArcSec:
    """π, taken as Earth radius / distance in radians."""
    return Radians(EARTH_RADIUS_KM / distance_from_earth(jd_tt)).to_arcsec()


def horizontal_parallax(jd_tt: float, altitude: Degrees) -> Degrees:
    """Parallax in altitude for an object at the given altitude: asin(sin π cos h)."""
    sin_pi = horizontal_equatorial_parallax(jd_tt).to_radians().sin()
    return Radians(math.asin(sin_pi * altitude.cos())).to_degrees()


def geocentric_semidiameter(jd_tt: float) -> Degrees:
    sin_pi = horizontal_equatorial_parallax(jd_tt).to_radians().sin()
    return Radians(math.asin(SEMIDIAMETER_RATIO * sin_pi)).to_degrees()


def topocentric_semidiameter(
    jd_tt: float,
    hour_angle: Degrees,
    declination: Degrees,
    latitude: Degrees,
    height_m: float,
) -> Degrees:
    """Semidiameter seen from the observer (Meeus 40.7 with 40.6 factors)."""
    sin_pi = horizontal_equatorial_parallax(jd_tt).to_radians().sin()
    rho_sin, rho_cos = rho_phi_prime(latitude, height_m)
    cd, sd = declination.cos(), declination.sin()
    A = cd * hour_angle.sin()
    B = cd * hour_angle.cos() - rho_cos * sin_pi
    C = sd - rho_sin * sin_pi
    q = math.sqrt(A * A + B * B + C * C)
    s = geocentric_semidiameter(jd_tt).to_radians().value
    return Radians(math.asin(math.sin(s) / q)).to_degrees()


# ------------------------------------------------------------
# Illumination (Meeus ch. 48)
# ------------------------------------------------------------

PHASE_SECTION = 22.5

_PHASE_NAMES = (
    (1 * PHASE_SECTION, "New Moon"),
    (3 * PHASE_SECTION, "Waxing Crescent"),
    (5 * PHASE_SECTION, "First Quarter"),
    (7 * PHASE_SECTION, "Waxing Gibbous"),
    (9 * PHASE_SECTION, "Full Moon"),
    (11 * PHASE_SECTION, "Waning Gibbous"),
    (13 * PHASE_SECTION, "Last Quarter"),
)


def phase_angle(jd_tt: float) -> Degrees:
    """Selenocentric Sun–Earth angle i, from the geocentric elongation ψ."""
    sun = solar.sun_position(jd_tt)
    ra, dec = equatorial_coordinates(jd_tt)
    cos_psi = (
        sun.declination.sin() * dec.sin()
        + sun.declination.cos() * dec.cos() * (sun.right_ascension - ra).cos()
    )
    psi = math.acos(max(-1.0, min(1.0, cos_psi)))
    R = sun.distance_au * solar.AU_KM
    delta = distance_from_earth(jd_tt)
    i = math.atan2(R * math.sin(psi), delta - R * math.cos(psi))
    return Degrees(map_to_0_to_360(math.degrees(i)))


def phase_angle_360(jd_tt: float) -> Degrees:
    """Moon minus Sun apparent longitude in [0, 360); 0 at new moon, 180 at full."""
    return Degrees(map_to_0_to_360(geocentric_longitude(jd_tt).value - solar.apparent_longitude(jd_tt).value))


def fraction_illuminated(jd_tt: float) -> float:
    return (1.0 + phase_angle(jd_tt).cos()) / 2.0


def phase_age(jd_tt: float) -> float:
    """Days since new moon at the mean elongation rate."""
    return phase_angle_360(jd_tt).value / MOON_DAY


def describe_phase(angle_360: float) -> str:
    for limit, name in _PHASE_NAMES:
        if angle_360 < limit:
            return name
    return "Waning Crescent"


def phase_description(jd_tt: float) -> str:
    return describe_phase(phase_angle_360(jd_tt).value)
