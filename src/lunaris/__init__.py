"""lunaris public API.

Sun and Moon positions, time scales and Moon rise/set/transit after Meeus,
Astronomical Algorithms. Most users need only the functions re-exported here.
"""

from .api import (
    julian_day,
    local_sidereal_time,
    to_dms_str,
    to_hms_str,
    moon_data,
    moon_rise,
    moon_set,
    moon_transit,
    sun_data,
)
from .core.types import MoonData, MoonInput, Observer, RiseSetTransitTime, SunData

__version__ = "0.1.0"

__all__ = [
    "julian_day",
    "local_sidereal_time",
    "to_dms_str",
    "to_hms_str",
    "moon_data",
    "moon_rise",
    "moon_set",
    "moon_transit",
    "sun_data",
    "MoonData",
    "MoonInput",
    "Observer",
    "RiseSetTransitTime",
    "SunData",
]
