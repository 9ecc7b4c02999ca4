from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional

from ..reference.coordinates import DEFAULT_PRESSURE_MB, DEFAULT_TEMPERATURE_C


@dataclass(frozen=True)
class Observer:
    """Observer on the Earth's surface. Longitude is positive WEST (degrees)."""
    longitude: float
    latitude: float
    height_m: float = 0.0
    pressure_mb: float = DEFAULT_PRESSURE_MB
    temperature_c: float = DEFAULT_TEMPERATURE_C


@dataclass(frozen=True)
class MoonInput:
    """Request for a Moon snapshot at a UTC instant."""
    jd: float
    observer: Observer


@dataclass(frozen=True)
class MoonData:
    """Moon snapshot (degrees, km, days)."""
    phase_angle: float
    illuminated_fraction: float
    phase_description: str
    phase_age: float
    longitude: float
    latitude: float
    distance_km: float
    right_ascension: float
    declination: float
    hour_angle: float
    azimuth: float
    altitude: float


@dataclass(frozen=True)
class SunData:
    """Sun snapshot (degrees, AU)."""
    longitude: float
    latitude: float
    distance_au: float
    right_ascension: float
    declination: float
    azimuth: float
    altitude: float


@dataclass(frozen=True)
class RiseSetTransitTime:
    """Event time in UTC. The calendar fields are only meaningful when is_valid."""
    is_valid: bool
    outcome: Literal["time", "never_rises", "never_sets"]
    year: int = 0
    month: int = 0
    day: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: float = 0.0
    jd: Optional[float] = None
    converged: bool = True
