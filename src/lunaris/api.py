from __future__ import annotations

"""
Flat facade over the reference modules.

Inputs are primitive floats: JD in UTC, degrees (longitude positive WEST),
millibars and °C. Positions are evaluated in TT (via utc_2_tt); Earth
rotation (sidereal time, hour angle) is evaluated on the UTC input, taken
as UT1. Event times come back in UTC.
"""

from typing import Callable, Optional

from .core.types import MoonData, MoonInput, Observer, RiseSetTransitTime, SunData
from .reference import calendar, coordinates, earth, lunar, rise_set, solar, time_scales
from .reference.angles import Degrees


def julian_day(year: int, month: int, day: float) -> float:
    return calendar.julian_day(year, month, day)


def local_sidereal_time(jd: float, longitude: float) -> float:
    """Apparent local sidereal time in degrees."""
    return earth.local_sidereal_time(earth.apparent_sidereal_time(jd), Degrees(longitude)).value


def to_dms_str(deg: float, width: int = 2) -> str:
    return Degrees(deg).to_dms_str(width)


def to_hms_str(deg: float, width: int = 2) -> str:
    return Degrees(deg).to_hms_str(width)


# ============================================================
# Moon
# ============================================================

def moon_data(req: MoonInput) -> MoonData:
    obs = req.observer
    jd_ut = req.jd
    jd_tt = time_scales.utc_2_tt(jd_ut)
    lon, lat = Degrees(obs.longitude), Degrees(obs.latitude)

    pos = lunar.moon_position(jd_tt)
    parallax = lunar.horizontal_equatorial_parallax(jd_tt).to_radians()
    ra_t, dec_t = coordinates.equatorial_2_topocentric(
        pos.right_ascension, pos.declination, lon, lat, obs.height_m, pos.distance_km, jd_ut, parallax=parallax,
    )
    lst = earth.local_sidereal_time(earth.apparent_sidereal_time(jd_ut), lon)
    H = earth.hour_angle(lst, ra_t)
    az, alt = coordinates.equatorial_2_horizontal(dec_t, H, lat)
    alt = alt + coordinates.refraction_for_true_altitude(alt, obs.pressure_mb, obs.temperature_c)

    angle = lunar.phase_angle_360(jd_tt).value
    return MoonData(
        phase_angle=angle,
        illuminated_fraction=lunar.fraction_illuminated(jd_tt),
        phase_description=lunar.describe_phase(angle),
        phase_age=angle / lunar.MOON_DAY,
        longitude=pos.longitude.value,
        latitude=pos.latitude.value,
        distance_km=pos.distance_km,
        right_ascension=ra_t.value,
        declination=dec_t.value,
        hour_angle=H.value,
        azimuth=az.value,
        altitude=alt.value,
    )


def _event(
    solve: Callable[..., rise_set.Outcome],
    jd_utc: float,
    timezone_offset: Optional[float],
    longitude: float,
    latitude: float,
    pressure_mb: float,
    temperature_c: float,
) -> RiseSetTransitTime:
    jd_tt = time_scales.utc_2_tt(jd_utc)
    lon, lat = Degrees(longitude), Degrees(latitude)
    h0 = rise_set.target_altitude(jd_tt, Degrees(0.0), lon, lat, pressure_mb, temperature_c)
    outcome = solve(jd_tt, h0, lon, lat, timezone_offset)

    if isinstance(outcome, rise_set.NeverRises):
        return RiseSetTransitTime(is_valid=False, outcome="never_rises")
    if isinstance(outcome, rise_set.NeverSets):
        return RiseSetTransitTime(is_valid=False, outcome="never_sets")

    jd = time_scales.tt_2_utc(outcome.jd)
    date = calendar.to_calendar_date(jd)
    h, m, s = calendar.from_fract_day(date.day)
    return RiseSetTransitTime(
        is_valid=True,
        outcome="time",
        year=date.year,
        month=date.month,
        day=int(date.day),
        hours=h,
        minutes=m,
        seconds=s,
        jd=jd,
        converged=outcome.converged,
    )


def moon_rise(jd_utc: float, timezone_offset: Optional[float], longitude: float, latitude: float,
              pressure_mb: float = coordinates.DEFAULT_PRESSURE_MB,
              temperature_c: float = coordinates.DEFAULT_TEMPERATURE_C) -> RiseSetTransitTime:
    return _event(rise_set.rise, jd_utc, timezone_offset, longitude, latitude, pressure_mb, temperature_c)


def moon_set(jd_utc: float, timezone_offset: Optional[float], longitude: float, latitude: float,
             pressure_mb: float = coordinates.DEFAULT_PRESSURE_MB,
             temperature_c: float = coordinates.DEFAULT_TEMPERATURE_C) -> RiseSetTransitTime:
    return _event(rise_set.set_, jd_utc, timezone_offset, longitude, latitude, pressure_mb, temperature_c)


def moon_transit(jd_utc: float, timezone_offset: Optional[float], longitude: float, latitude: float,
                 pressure_mb: float = coordinates.DEFAULT_PRESSURE_MB,
                 temperature_c: float = coordinates.DEFAULT_TEMPERATURE_C) -> RiseSetTransitTime:
    return _event(rise_set.transit, jd_utc, timezone_offset, longitude, latitude, pressure_mb, temperature_c)


# ============================================================
# Sun
# ============================================================

def sun_data(jd_utc: float, observer: Observer) -> SunData:
    jd_tt = time_scales.utc_2_tt(jd_utc)
    pos = solar.sun_position(jd_tt)
    lon, lat = Degrees(observer.longitude), Degrees(observer.latitude)

    ra_t, dec_t = coordinates.equatorial_2_topocentric(
        pos.right_ascension, pos.declination, lon, lat, observer.height_m,
        pos.distance_au * solar.AU_KM, jd_utc,
    )
    lst = earth.local_sidereal_time(earth.apparent_sidereal_time(jd_utc), lon)
    H = earth.hour_angle(lst, ra_t)
    az, alt = coordinates.equatorial_2_horizontal(dec_t, H, lat)
    alt = alt + coordinates.refraction_for_true_altitude(alt, observer.pressure_mb, observer.temperature_c)

    return SunData(
        longitude=pos.longitude.value,
        latitude=pos.latitude.value,
        distance_au=pos.distance_au,
        right_ascension=pos.right_ascension.value,
        declination=pos.declination.value,
        azimuth=az.value,
        altitude=alt.value,
    )
