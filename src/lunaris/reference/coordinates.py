from __future__ import annotations

"""
lunaris.reference.coordinates

Coordinate transforms (Meeus ch. 13, 16, 40).

Conventions:
  - azimuth is measured from North, increasing eastward, in [0, 360)
  - observer longitude is positive WEST
  - hour angle H = LST - RA
"""

import math
from typing import Optional, Tuple

from .angles import ArcSec, Degrees, Radians, map_to_0_to_360, map_to_neg90_to_90
from .earth import apparent_sidereal_time, hour_angle, local_sidereal_time


# Earth figure (IAU 1976), as used by Meeus ch. 11
EARTH_FLATTENING_RATIO = 0.99664719   # b/a
EARTH_EQUATORIAL_RADIUS_M = 6378140.0
AU_KM = 149597870.7

# equatorial horizontal parallax of the Sun at 1 AU
SOLAR_PARALLAX = ArcSec(8.794)

# below this true altitude the refraction formula turns over
REFRACTION_MIN_ALTITUDE = -1.9006387000003735

DEFAULT_PRESSURE_MB = 1010.0
DEFAULT_TEMPERATURE_C = 10.0


def _clamp1(x: float) -> float:
    if x > 1.0:
        return 1.0
    if x < -1.0:
        return -1.0
    return x


# ============================================================
# Ecliptical <-> equatorial
# ============================================================

def ecliptical_2_equatorial(longitude: Degrees, latitude: Degrees, obliquity: Degrees) -> Tuple[Degrees, Degrees]:
    """(λ, β, ε) -> (α, δ)  (Meeus 13.3, 13.4)."""
    lam = longitude.to_radians().value
    beta = latitude.to_radians().value
    eps = obliquity.to_radians().value

    ra = math.atan2(math.sin(lam) * math.cos(eps) - math.tan(beta) * math.sin(eps), math.cos(lam))
    dec = math.asin(_clamp1(
        math.sin(beta) * math.cos(eps) + math.cos(beta) * math.sin(eps) * math.sin(lam)
    ))
    return (
        Degrees(map_to_0_to_360(math.degrees(ra))),
        Degrees(map_to_neg90_to_90(math.degrees(dec))),
    )


def equatorial_2_ecliptical(ra: Degrees, dec: Degrees, obliquity: Degrees) -> Tuple[Degrees, Degrees]:
    """(α, δ, ε) -> (λ, β)  (Meeus 13.1, 13.2)."""
    a = ra.to_radians().value
    d = dec.to_radians().value
    eps = obliquity.to_radians().value

    lam = math.atan2(math.sin(a) * math.cos(eps) + math.tan(d) * math.sin(eps), math.cos(a))
    beta = math.asin(_clamp1(math.sin(d) * math.cos(eps) - math.cos(d) * math.sin(eps) * math.sin(a)))
    return (
        Degrees(map_to_0_to_360(math.degrees(lam))),
        Degrees(map_to_neg90_to_90(math.degrees(beta))),
    )


# ============================================================
# Equatorial <-> horizontal
# ============================================================

def equatorial_2_horizontal(dec: Degrees, hour_angle_: Degrees, latitude: Degrees) -> Tuple[Degrees, Degrees]:
    """(δ, H, φ) -> (azimuth, altitude). Azimuth from North, eastward."""
    d = dec.to_radians().value
    h = hour_angle_.to_radians().value
    phi = latitude.to_radians().value

    alt = math.asin(_clamp1(math.sin(phi) * math.sin(d) + math.cos(phi) * math.cos(d) * math.cos(h)))
    denom = math.cos(phi) * math.cos(alt)
    if denom == 0.0:
        # observer at a pole or object at the zenith: azimuth undefined
        az = 0.0
    else:
        az = math.acos(_clamp1((math.sin(d) - math.sin(phi) * math.sin(alt)) / denom))
    if math.sin(h) > 0.0:
        az = 2.0 * math.pi - az
    return Degrees(map_to_0_to_360(math.degrees(az))), Degrees(math.degrees(alt))


def horizontal_2_equatorial(azimuth: Degrees, altitude: Degrees, latitude: Degrees) -> Tuple[Degrees, Degrees]:
    """(azimuth from North, altitude, φ) -> (H, δ)  (Meeus 13.5, 13.6)."""
    # Meeus measures azimuth from the South
    a_s = Degrees(azimuth.value - 180.0).to_radians().value
    h = altitude.to_radians().value
    phi = latitude.to_radians().value

    H = math.atan2(math.sin(a_s), math.cos(a_s) * math.sin(phi) + math.tan(h) * math.cos(phi))
    dec = math.asin(_clamp1(math.sin(phi) * math.sin(h) - math.cos(phi) * math.cos(h) * math.cos(a_s)))
    return Degrees(map_to_0_to_360(math.degrees(H))), Degrees(math.degrees(dec))


# ============================================================
# Parallax (Meeus ch. 11, 40)
# ============================================================

def rho_phi_prime(latitude: Degrees, height_m: float) -> Tuple[float, float]:
    """(ρ sin φ', ρ cos φ') for a geodetic latitude and height above sea level."""
    phi = latitude.to_radians().value
    u = math.atan(EARTH_FLATTENING_RATIO * math.tan(phi))
    k = height_m / EARTH_EQUATORIAL_RADIUS_M
    rho_sin = EARTH_FLATTENING_RATIO * math.sin(u) + k * math.sin(phi)
    rho_cos = math.cos(u) + k * math.cos(phi)
    return rho_sin, rho_cos


def equatorial_2_topocentric(
    ra: Degrees,
    dec: Degrees,
    longitude: Degrees,
    latitude: Degrees,
    height_m: float,
    distance_km: float,
    jd: float,
    parallax: Optional[Radians] = None,
) -> Tuple[Degrees, Degrees]:
    """
    Geocentric (α, δ) -> topocentric (α', δ')  (Meeus 40.2, 40.3).

    `parallax` is the equatorial horizontal parallax π. When omitted it is
    derived from the distance: sin π = sin(8.794") / Δ[AU].
    """
    if parallax is None:
        sin_pi = math.sin(SOLAR_PARALLAX.to_radians().value) / (distance_km / AU_KM)
    else:
        sin_pi = math.sin(parallax.value)

    rho_sin, rho_cos = rho_phi_prime(latitude, height_m)
    lst = local_sidereal_time(apparent_sidereal_time(jd), longitude)
    H = hour_angle(lst, ra).to_radians().value
    d = dec.to_radians().value

    denom = math.cos(d) - rho_cos * sin_pi * math.cos(H)
    dra = math.atan2(-rho_cos * sin_pi * math.sin(H), denom)
    dec_t = math.atan2((math.sin(d) - rho_sin * sin_pi) * math.cos(dra), denom)

    return (
        Degrees(map_to_0_to_360(ra.value + math.degrees(dra))),
        Degrees(map_to_neg90_to_90(math.degrees(dec_t))),
    )


# ============================================================
# Atmospheric refraction (Meeus ch. 16)
# ============================================================

def _atmosphere(pressure_mb: float, temperature_c: float) -> float:
    return (pressure_mb / 1010.0) * (283.0 / (273.0 + temperature_c))


def refraction_for_true_altitude(
    altitude: Degrees,
    pressure_mb: float = DEFAULT_PRESSURE_MB,
    temperature_c: float = DEFAULT_TEMPERATURE_C,
) -> Degrees:
    """Refraction to add to a true (airless) altitude (Saemundsson, Meeus 16.4)."""
    h = max(altitude.value, REFRACTION_MIN_ALTITUDE)
    arcmin = 1.02 / Degrees(h + 10.3 / (h + 5.11)).tan() + 0.0019279
    return Degrees(arcmin / 60.0 * _atmosphere(pressure_mb, temperature_c))


def refraction_from_apparent_altitude(
    altitude: Degrees,
    pressure_mb: float = DEFAULT_PRESSURE_MB,
    temperature_c: float = DEFAULT_TEMPERATURE_C,
) -> Degrees:
    """Refraction to subtract from an apparent altitude (Bennett, Meeus 16.3)."""
    h0 = max(altitude.value, REFRACTION_MIN_ALTITUDE)
    arcmin = 1.0 / Degrees(h0 + 7.31 / (h0 + 4.4)).tan()
    return Degrees(arcmin / 60.0 * _atmosphere(pressure_mb, temperature_c))
