from __future__ import annotations

"""
lunaris.reference.earth

Earth rotation: Greenwich sidereal time, local sidereal time, hour angle.
Longitudes are measured positive WEST of Greenwich (Meeus convention).
"""

from .angles import Degrees, map_to_0_to_360
from .calendar import J2000
from .astro_args import T_centuries
from .nutation import nutation, true_obliquity


def mean_sidereal_time(jd_ut: float) -> Degrees:
    """Mean sidereal time at Greenwich (Meeus 12.4), for any instant of UT."""
    T = T_centuries(jd_ut)
    theta = (
        280.46061836
        + 360.98564736629 * (jd_ut - J2000)
        + 0.000387933 * T * T
        - T * T * T / 38710000.0
    )
    return Degrees(map_to_0_to_360(theta))


def apparent_sidereal_time(jd_ut: float) -> Degrees:
    """Mean sidereal time corrected by the equation of the equinoxes, Δψ cos ε."""
    dpsi = nutation(jd_ut).longitude.to_degrees()
    eps = true_obliquity(jd_ut)
    return Degrees(map_to_0_to_360(mean_sidereal_time(jd_ut).value + dpsi.value * eps.cos()))


def local_sidereal_time(theta0: Degrees, longitude: Degrees) -> Degrees:
    """θ = θ0 - L with L positive west."""
    return Degrees(map_to_0_to_360(theta0.value - longitude.value))


def hour_angle(lst: Degrees, right_ascension: Degrees) -> Degrees:
    """H = θ - α, in [0, 360)."""
    return Degrees(map_to_0_to_360(lst.value - right_ascension.value))
