# reference/solar.py

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from .angles import ArcSec, Degrees, Radians, map_to_0_to_360, map_to_neg90_to_90
from .astro_args import T_centuries, tau_millennia
from .coordinates import ecliptical_2_equatorial
from .nutation import nutation_in_longitude, true_obliquity


AU_KM = 149597870.7

# ------------------------------------------------------------
# VSOP87 Earth series, truncated (Meeus, Appendix III)
# Rows are (A, B, C); term value A cos(B + C τ), τ in Julian millennia.
# Sums are scaled by 1e-8 and yield radians (L, B) or AU (R).
# ------------------------------------------------------------

Series = Tuple[Tuple[float, float, float], ...]

L0: Series = (
    (175347046, 0, 0), (3341656, 4.6692568, 6283.07585), (34894, 4.6261, 12566.1517),
    (3497, 2.7441, 5753.3849), (3418, 2.8289, 3.5231), (3136, 3.6277, 77713.7715),
    (2676, 4.4181, 7860.4194), (2343, 6.1352, 3930.2097), (1324, 0.7425, 11506.7698),
    (1273, 2.0371, 529.691), (1199, 1.1096, 1577.3435), (990, 5.233, 5884.927),
    (902, 2.045, 26.298), (857, 3.508, 398.149), (780, 1.179, 5223.694),
    (753, 2.533, 5507.553), (505, 4.583, 18849.228), (492, 4.205, 775.523),
    (357, 2.92, 0.067), (317, 5.849, 11790.629), (284, 1.899, 796.298),
    (271, 0.315, 10977.079), (243, 0.345, 5486.778), (206, 4.806, 2544.314),
    (205, 1.869, 5573.143), (202, 2.458, 6069.777), (156, 0.833, 213.299),
    (132, 3.411, 2942.463), (126, 1.083, 20.775), (115, 0.645, 0.98),
    (103, 0.636, 4694.003), (102, 0.976, 15720.839), (102, 4.267, 7.114),
    (99, 6.21, 2146.17), (98, 0.68, 155.42), (86, 5.98, 161000.69),
    (85, 1.3, 6275.96), (85, 3.67, 71430.7), (80, 1.81, 17260.15),
    (79, 3.04, 12036.46), (75, 1.76, 5088.63), (74, 3.5, 3154.69),
    (74, 4.68, 801.82), (70, 0.83, 9437.76), (62, 3.98, 8827.39),
    (61, 1.82, 7084.9), (57, 2.78, 6286.6), (56, 4.39, 14143.5),
    (56, 3.47, 6279.55), (52, 0.19, 12139.55), (52, 1.33, 1748.02),
    (51, 0.28, 5856.48), (49, 0.49, 1194.45), (41, 5.37, 8429.24),
    (41, 2.4, 19651.05), (39, 6.17, 10447.39), (37, 6.04, 10213.29),
    (37, 2.57, 1059.38), (36, 1.71, 2352.87), (36, 1.78, 6812.77),
    (33, 0.59, 17789.85), (30, 0.44, 83996.85), (30, 2.74, 1349.87),
    (25, 3.16, 4690.48),
)

L1: Series = (
    (628331966747, 0, 0), (206059, 2.678235, 6283.07585), (4303, 2.6351, 12566.1517),
    (425, 1.59, 3.523), (119, 5.796, 26.298), (109, 2.966, 1577.344),
    (93, 2.59, 18849.23), (72, 1.14, 529.69), (68, 1.87, 398.15),
    (67, 4.41, 5507.55), (59, 2.89, 5223.69), (56, 2.17, 155.42),
    (45, 0.4, 796.3), (36, 0.47, 775.52), (29, 2.65, 7.11),
    (21, 5.34, 0.98), (19, 1.85, 5486.78), (19, 4.97, 213.3),
    (17, 2.99, 6275.96), (16, 0.03, 2544.31), (16, 1.43, 2146.17),
    (15, 1.21, 10977.08), (12, 2.83, 1748.02), (12, 3.26, 5088.63),
    (12, 5.27, 1194.45), (12, 2.08, 4694), (11, 0.77, 553.57),
    (10, 1.3, 6286.6), (10, 4.24, 1349.87), (9, 2.7, 242.73),
    (9, 5.64, 951.72), (8, 5.3, 2352.87), (6, 2.65, 9437.76),
    (6, 4.67, 4690.48),
)

L2: Series = (
    (52919, 0, 0), (8720, 1.0721, 6283.0758), (309, 0.867, 12566.152),
    (27, 0.05, 3.52), (16, 5.19, 26.3), (16, 3.68, 155.42),
    (10, 0.76, 18849.23), (9, 2.06, 77713.77), (7, 0.83, 775.52),
    (5, 4.66, 1577.34), (4, 1.03, 7.11), (4, 3.44, 5573.14),
    (3, 5.14, 796.3), (3, 6.05, 5507.55), (3, 1.19, 242.73),
    (3, 6.12, 529.69), (3, 0.31, 398.15), (3, 2.28, 553.57),
    (2, 4.38, 5223.69), (2, 3.75, 0.98),
)

L3: Series = (
    (289, 5.844, 6283.076), (35, 0, 0), (17, 5.49, 12566.15),
    (3, 5.2, 155.42), (1, 4.72, 3.52), (1, 5.3, 18849.23),
    (1, 5.97, 242.73),
)

L4: Series = ((114, 3.142, 0), (8, 4.13, 6283.08), (1, 3.84, 12566.15))

L5: Series = ((1, 3.14, 0),)

B0: Series = (
    (280, 3.199, 84334.662), (102, 5.422, 5507.553), (80, 3.88, 5223.69),
    (44, 3.7, 2352.87), (32, 4.0, 1577.34),
)

B1: Series = ((9, 3.9, 5507.55), (6, 1.73, 5223.69))

R0: Series = (
    (100013989, 0, 0), (1670700, 3.0984635, 6283.07585), (13956, 3.05525, 12566.1517),
    (3084, 5.1985, 77713.7715), (1628, 1.1739, 5753.3849), (1576, 2.8469, 7860.4194),
    (925, 5.453, 11506.77), (542, 4.564, 3930.21), (472, 3.661, 5884.927),
    (346, 0.964, 5507.553), (329, 5.9, 5223.694), (307, 0.299, 5573.143),
    (243, 4.273, 11790.629), (212, 5.847, 1577.344), (186, 5.022, 10977.079),
    (175, 3.012, 18849.228), (110, 5.055, 5486.778), (98, 0.89, 6069.78),
    (86, 5.69, 15720.84), (86, 1.27, 161000.69), (65, 0.27, 17260.15),
    (63, 0.92, 529.69), (57, 2.01, 83996.85), (56, 5.24, 71430.7),
    (49, 3.25, 2544.31), (47, 2.58, 775.52), (45, 5.54, 9437.76),
    (43, 6.01, 6275.96), (39, 5.36, 4694), (38, 2.39, 8827.39),
    (37, 0.83, 19651.05), (37, 4.9, 12139.55), (36, 1.67, 12036.46),
    (35, 1.84, 2942.46), (33, 0.24, 7084.9), (32, 0.18, 5088.63),
    (32, 1.78, 398.15), (28, 1.21, 6286.6), (28, 1.9, 6279.55),
    (26, 4.59, 10447.39),
)

R1: Series = (
    (103019, 1.10749, 6283.07585), (1721, 1.0644, 12566.1517), (702, 3.142, 0),
    (32, 1.02, 18849.23), (31, 2.84, 5507.55), (25, 1.32, 5223.69),
    (18, 1.42, 1577.34), (10, 5.91, 10977.08), (9, 1.42, 6275.96),
    (9, 0.27, 5486.78),
)

R2: Series = (
    (4359, 5.7846, 6283.0758), (124, 5.579, 12566.152), (12, 3.14, 0),
    (9, 3.63, 77713.77), (6, 1.87, 5573.14), (3, 5.47, 18849.23),
)

R3: Series = ((145, 4.273, 6283.076), (7, 3.92, 12566.15))

R4: Series = ((4, 2.56, 6283.08),)


def _sum_series(series: Series, tau: float) -> float:
    return sum(a * math.cos(b + c * tau) for a, b, c in series)


def _vsop(groups: Sequence[Series], tau: float) -> float:
    """Σ_i (Σ A cos(B + C τ)) τ^i, scaled by 1e-8."""
    total = 0.0
    for i, series in enumerate(groups):
        total += _sum_series(series, tau) * tau ** i
    return total / 1e8


# ------------------------------------------------------------
# Heliocentric (Earth) and geocentric (Sun) coordinates
# ------------------------------------------------------------

def heliocentric_longitude(jd_tt: float) -> Degrees:
    tau = tau_millennia(jd_tt)
    rad = _vsop((L0, L1, L2, L3, L4, L5), tau)
    return Degrees(map_to_0_to_360(Radians(rad).to_degrees().value))


def heliocentric_latitude(jd_tt: float) -> Degrees:
    tau = tau_millennia(jd_tt)
    return Radians(_vsop((B0, B1), tau)).to_degrees()


def distance_earth_sun_au(jd_tt: float) -> float:
    return _vsop((R0, R1, R2, R3, R4), tau_millennia(jd_tt))


def distance_earth_sun(jd_tt: float) -> float:
    """Earth–Sun distance in km."""
    return distance_earth_sun_au(jd_tt) * AU_KM


def geocentric_longitude(jd_tt: float) -> Degrees:
    return Degrees(map_to_0_to_360(heliocentric_longitude(jd_tt).value + 180.0))


def geocentric_latitude(jd_tt: float) -> Degrees:
    return -heliocentric_latitude(jd_tt)


def to_fk5(jd_tt: float, longitude: Degrees, latitude: Degrees) -> Tuple[Degrees, Degrees]:
    """Convert VSOP87 dynamical-frame coordinates to FK5 (Meeus 25.9)."""
    T = T_centuries(jd_tt)
    lp = Degrees(longitude.value - 1.397 * T - 0.00031 * T * T)
    dlon = ArcSec(-0.09033 + 0.03916 * (lp.cos() + lp.sin()) * latitude.tan())
    dlat = ArcSec(0.03916 * (lp.cos() - lp.sin()))
    return longitude + dlon.to_degrees(), latitude + dlat.to_degrees()


# ------------------------------------------------------------
# Aberration
# ------------------------------------------------------------

# (amplitude ", power of τ, phase deg, rate deg/millennium)
_VARIATION_TERMS = (
    (118.568, 0, 87.5287, 359993.7286),
    (2.476, 0, 85.0561, 719987.4571),
    (1.376, 0, 27.8502, 4452671.1152),
    (0.119, 0, 73.1375, 450368.8564),
    (0.114, 0, 337.2264, 329644.6718),
    (0.086, 0, 222.5400, 659289.3436),
    (0.078, 0, 162.8136, 9224659.7915),
    (0.054, 0, 82.5823, 1079981.1857),
    (0.052, 0, 171.5189, 225184.4282),
    (0.034, 0, 30.3214, 4092677.3866),
    (0.033, 0, 119.8105, 337181.4711),
    (0.023, 0, 247.5418, 299295.6151),
    (0.023, 0, 325.1526, 315559.5560),
    (0.021, 0, 155.1241, 675553.2846),
    (7.311, 1, 333.4515, 359993.7286),
    (0.305, 1, 330.9814, 719987.4571),
    (0.010, 1, 328.5170, 1079981.1857),
    (0.309, 2, 241.4518, 359993.7286),
    (0.021, 2, 205.0482, 719987.4571),
    (0.004, 2, 297.8610, 4452671.1152),
    (0.010, 3, 154.7066, 359993.7286),
)


def variation_geocentric_longitude(jd_tt: float) -> ArcSec:
    """Daily variation of the Sun's geocentric longitude, arcsec per day (Meeus p. 168)."""
    tau = tau_millennia(jd_tt)
    total = 3548.193
    for amp, power, phase, rate in _VARIATION_TERMS:
        total += amp * tau ** power * Degrees(phase + rate * tau).sin()
    return ArcSec(total)


# ------------------------------------------------------------
# Apparent position
# ------------------------------------------------------------

def apparent_longitude(jd_tt: float) -> Degrees:
    lon, lat = to_fk5(jd_tt, geocentric_longitude(jd_tt), geocentric_latitude(jd_tt))
    dpsi = nutation_in_longitude(jd_tt).to_degrees()
    dvar = variation_geocentric_longitude(jd_tt).to_degrees()
    aberration = -0.005775518 * distance_earth_sun_au(jd_tt) * dvar.value
    return Degrees(map_to_0_to_360(lon.value + dpsi.value + aberration))


def apparent_latitude(jd_tt: float) -> Degrees:
    _, lat = to_fk5(jd_tt, geocentric_longitude(jd_tt), geocentric_latitude(jd_tt))
    return lat


def mean_anomaly(jd_tt: float) -> Degrees:
    """Sun's mean anomaly (Meeus 47.3)."""
    T = T_centuries(jd_tt)
    M = 357.5291092 + 35999.0502909 * T - 0.0001536 * T * T + T * T * T / 24490000.0
    return Degrees(map_to_0_to_360(M))


@dataclass(frozen=True)
class SunPosition:
    """Apparent geocentric position of the Sun (degrees, AU)."""
    longitude: Degrees
    latitude: Degrees
    distance_au: float
    right_ascension: Degrees
    declination: Degrees


def sun_position(jd_tt: float) -> SunPosition:
    lon = apparent_longitude(jd_tt)
    lat = apparent_latitude(jd_tt)
    ra, dec = ecliptical_2_equatorial(lon, lat, true_obliquity(jd_tt))
    return SunPosition(
        longitude=lon,
        latitude=Degrees(map_to_neg90_to_90(lat.value)),
        distance_au=distance_earth_sun_au(jd_tt),
        right_ascension=ra,
        declination=dec,
    )
