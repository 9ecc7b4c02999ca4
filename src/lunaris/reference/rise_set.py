from __future__ import annotations

"""
lunaris.reference.rise_set

Moon rise, set and transit by fixed-point iteration on the hour angle
(Meeus ch. 15, iterated on the Moon's own position instead of interpolated).

Starting at the anchor JD (normally local noon), each pass:
  1) takes the Moon's apparent (α, δ) at the trial time,
  2) solves cos H0 = (sin h0 - sin φ sin δ) / (cos φ cos δ) for the
     hour angle H0 at which the Moon reaches the target altitude h0,
  3) compares with the current local hour angle H and moves the trial
     time by the difference, converted from sidereal degrees to solar hours.

No solution for H0 means the Moon stays below (NeverRises) or above
(NeverSets) the target altitude all day. A rise or set that lands on a
different day than the one asked for is reported the same way.
"""

import enum
import logging
import math
from dataclasses import dataclass
from typing import Optional, Union

from .angles import Degrees, map_neg180_to_180
from .calendar import Date, from_date, to_calendar_date
from .coordinates import DEFAULT_PRESSURE_MB, DEFAULT_TEMPERATURE_C, refraction_for_true_altitude
from .earth import apparent_sidereal_time, local_sidereal_time
from .time_scales import tt_2_utc
from . import lunar

logger = logging.getLogger(__name__)

MAX_ITER = 10
CONVERGENCE_HOURS = 1.0 / 60.0
SIDEREAL_TO_SOLAR = 23.9344696 / 24.0


class EventKind(enum.Enum):
    RISE = "rise"
    SET = "set"
    TRANSIT = "transit"


@dataclass(frozen=True)
class EventTime:
    jd: float
    converged: bool = True


@dataclass(frozen=True)
class NeverRises:
    pass


@dataclass(frozen=True)
class NeverSets:
    pass


Outcome = Union[EventTime, NeverRises, NeverSets]


def _local_hour_angle(jd_tt: float, ra: Degrees, longitude: Degrees) -> Degrees:
    lst = local_sidereal_time(apparent_sidereal_time(jd_tt), longitude)
    return Degrees(map_neg180_to_180(lst.value - ra.value))


def target_altitude(
    jd_tt: float,
    altitude: Degrees,
    longitude: Degrees,
    latitude: Degrees,
    pressure_mb: float = DEFAULT_PRESSURE_MB,
    temperature_c: float = DEFAULT_TEMPERATURE_C,
) -> Degrees:
    """
    Geocentric altitude of the Moon's centre when its upper limb touches the
    observer's horizon: parallax - refraction - topocentric semidiameter.
    """
    parallax = lunar.horizontal_parallax(jd_tt, altitude)
    refraction = refraction_for_true_altitude(altitude, pressure_mb, temperature_c)
    ra, dec = lunar.equatorial_coordinates(jd_tt)
    H = _local_hour_angle(jd_tt, ra, longitude)
    semidiameter = lunar.topocentric_semidiameter(jd_tt, H, dec, latitude, 0.0)
    return parallax - refraction - semidiameter


def _on_requested_day(kind: EventKind, anchor_jd: float, jd: float, timezone_offset: Optional[float]) -> bool:
    # day boundaries are civil, the solver runs in TT
    anchor_jd = tt_2_utc(anchor_jd)
    jd = tt_2_utc(jd)
    if timezone_offset is None:
        return math.trunc(to_calendar_date(anchor_jd).day) == math.trunc(to_calendar_date(jd).day)
    # ±12 h around local midday of the anchor's local date
    local = to_calendar_date(anchor_jd + timezone_offset / 24.0)
    midday = from_date(Date(local.year, local.month, math.trunc(local.day) + 0.5)) - timezone_offset / 24.0
    return midday - 0.5 <= jd < midday + 0.5


def calculate_rise_set_transit(
    kind: EventKind,
    jd_tt: float,
    target_alt: Degrees,
    longitude: Degrees,
    latitude: Degrees,
    timezone_offset: Optional[float] = None,
) -> Outcome:
    """
    Iterate from `jd_tt` towards the requested event.

    timezone_offset: hours east of UTC. When given, a rise/set is accepted if
    it falls within 12 h of local midday; otherwise it must share the
    anchor's calendar day.
    """
    sin_phi = latitude.sin()
    cos_phi = latitude.cos()
    sin_h0 = target_alt.sin()

    jd = jd_tt
    converged = False
    for iteration in range(MAX_ITER):
        ra, dec = lunar.equatorial_coordinates(jd)
        cos_H0 = (sin_h0 - sin_phi * dec.sin()) / (cos_phi * dec.cos())
        if cos_H0 < -1.0:
            return NeverRises()
        if cos_H0 > 1.0:
            return NeverSets()
        H0 = math.degrees(math.acos(cos_H0))

        H = _local_hour_angle(jd, ra, longitude).value
        if kind is EventKind.RISE:
            delta = map_neg180_to_180(H + H0)
        elif kind is EventKind.SET:
            delta = map_neg180_to_180(H - H0)
        else:
            delta = H

        dt_hours = Degrees(delta).to_hours() * SIDEREAL_TO_SOLAR
        jd -= dt_hours / 24.0
        logger.debug("%s iteration %d: jd=%.6f correction=%.5f h", kind.value, iteration, jd, dt_hours)

        if abs(dt_hours) < CONVERGENCE_HOURS:
            converged = True
            break

    if not converged:
        logger.warning("%s did not converge after %d iterations; last jd=%.6f", kind.value, MAX_ITER, jd)

    if kind is EventKind.TRANSIT or _on_requested_day(kind, jd_tt, jd, timezone_offset):
        return EventTime(jd, converged)
    return NeverRises() if kind is EventKind.RISE else NeverSets()


def rise(jd_tt: float, target_alt: Degrees, longitude: Degrees, latitude: Degrees,
         timezone_offset: Optional[float] = None) -> Outcome:
    return calculate_rise_set_transit(EventKind.RISE, jd_tt, target_alt, longitude, latitude, timezone_offset)


def set_(jd_tt: float, target_alt: Degrees, longitude: Degrees, latitude: Degrees,
         timezone_offset: Optional[float] = None) -> Outcome:
    return calculate_rise_set_transit(EventKind.SET, jd_tt, target_alt, longitude, latitude, timezone_offset)


def transit(jd_tt: float, target_alt: Degrees, longitude: Degrees, latitude: Degrees,
            timezone_offset: Optional[float] = None) -> Outcome:
    return calculate_rise_set_transit(EventKind.TRANSIT, jd_tt, target_alt, longitude, latitude, timezone_offset)
