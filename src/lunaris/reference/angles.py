from __future__ import annotations

"""
lunaris.reference.angles

Angle value types used throughout the pipeline.

Degrees, Radians and ArcSec each wrap one float. Conversions between them are
explicit (`Degrees.from_radians(r)`, `r.to_degrees()`, ...) and use the named
scale factors below, never inline literals. Arithmetic is only defined between
values of the same unit, or with a plain scalar factor.

Range normalization depends on the role of the angle:
  - longitude / right ascension / azimuth  -> [0, 360)
  - latitude / declination                 -> [-90, 90)
  - hour angle                             -> [-180, 180)
"""

import math
from dataclasses import dataclass
from math import fmod
from typing import Tuple


# ------------------------------------------------------------
# Scale factors
# ------------------------------------------------------------

ARCSEC_PER_DEGREE = 3600.0
DEGREES_TO_RADIANS = math.pi / 180.0
RADIANS_TO_DEGREES = 180.0 / math.pi
HOURS_PER_DEGREE = 24.0 / 360.0
DEGREES_PER_HOUR = 360.0 / 24.0


# ------------------------------------------------------------
# Range normalization (plain floats)
# ------------------------------------------------------------

def map_to_0_to_360(deg: float) -> float:
    """Wrap degrees to [0, 360)."""
    y = fmod(deg, 360.0)
    if y < 0.0:
        y += 360.0
        # tiny negative inputs round up to exactly 360
        if y >= 360.0:
            y = 0.0
    return y


def map_to_neg90_to_90(deg: float) -> float:
    """Wrap degrees to [-90, 90). Values already in range are returned unchanged."""
    if -90.0 <= deg < 90.0:
        return deg
    y = fmod(deg, 180.0)
    if y >= 90.0:
        y -= 180.0
    elif y < -90.0:
        y += 180.0
    return y


def map_neg180_to_180(deg: float) -> float:
    """Wrap degrees to [-180, 180). Values already in range are returned unchanged."""
    if -180.0 <= deg < 180.0:
        return deg
    y = fmod(deg, 360.0)
    if y >= 180.0:
        y -= 360.0
    elif y < -180.0:
        y += 360.0
    return y


def _sign_of_first_nonzero(*parts: float) -> float:
    for p in parts:
        if p != 0:
            return -1.0 if p < 0 else 1.0
    return 1.0


# ------------------------------------------------------------
# Value types
# ------------------------------------------------------------

@dataclass(frozen=True)
class Radians:
    value: float

    def __float__(self) -> float:
        return self.value

    @classmethod
    def from_degrees(cls, deg: "Degrees") -> "Radians":
        return cls(deg.value * DEGREES_TO_RADIANS)

    @classmethod
    def from_arcsec(cls, arcsec: "ArcSec") -> "Radians":
        return cls(arcsec.value / ARCSEC_PER_DEGREE * DEGREES_TO_RADIANS)

    def to_degrees(self) -> "Degrees":
        return Degrees.from_radians(self)

    def to_arcsec(self) -> "ArcSec":
        return ArcSec.from_radians(self)

    def sin(self) -> float:
        return math.sin(self.value)

    def cos(self) -> float:
        return math.cos(self.value)

    def tan(self) -> float:
        return math.tan(self.value)

    def __add__(self, other: "Radians") -> "Radians":
        if not isinstance(other, Radians):
            return NotImplemented
        return Radians(self.value + other.value)

    def __sub__(self, other: "Radians") -> "Radians":
        if not isinstance(other, Radians):
            return NotImplemented
        return Radians(self.value - other.value)

    def __neg__(self) -> "Radians":
        return Radians(-self.value)


@dataclass(frozen=True)
class ArcSec:
    value: float

    def __float__(self) -> float:
        return self.value

    @classmethod
    def from_degrees(cls, deg: "Degrees") -> "ArcSec":
        return cls(deg.value * ARCSEC_PER_DEGREE)

    @classmethod
    def from_radians(cls, rad: Radians) -> "ArcSec":
        return cls(rad.value * RADIANS_TO_DEGREES * ARCSEC_PER_DEGREE)

    @classmethod
    def from_dms(cls, d: int, m: int, s: float) -> "ArcSec":
        """Arc length in seconds: s + 60*(m + 60*d)."""
        return cls(s + 60.0 * (m + 60.0 * d))

    def to_degrees(self) -> "Degrees":
        return Degrees.from_arcsec(self)

    def to_radians(self) -> Radians:
        return Radians.from_arcsec(self)

    def __add__(self, other: "ArcSec") -> "ArcSec":
        if not isinstance(other, ArcSec):
            return NotImplemented
        return ArcSec(self.value + other.value)

    def __sub__(self, other: "ArcSec") -> "ArcSec":
        if not isinstance(other, ArcSec):
            return NotImplemented
        return ArcSec(self.value - other.value)

    def __neg__(self) -> "ArcSec":
        return ArcSec(-self.value)

    def __mul__(self, k: float) -> "ArcSec":
        return ArcSec(self.value * k)

    __rmul__ = __mul__


@dataclass(frozen=True)
class Degrees:
    value: float

    def __float__(self) -> float:
        return self.value

    # --- construction -------------------------------------------------

    @classmethod
    def from_radians(cls, rad: Radians) -> "Degrees":
        return cls(rad.value * RADIANS_TO_DEGREES)

    @classmethod
    def from_arcsec(cls, arcsec: ArcSec) -> "Degrees":
        return cls(arcsec.value / ARCSEC_PER_DEGREE)

    @classmethod
    def from_dms(cls, d: int, m: int, s: float) -> "Degrees":
        """
        Degrees from sexagesimal parts. The sign is taken from the first
        non-zero component, so (-6, 43, 11.61) and (0, -30, 0) are both negative.
        """
        sign = _sign_of_first_nonzero(d, m, s)
        return cls(sign * (abs(d) + (abs(m) + abs(s) / 60.0) / 60.0))

    @classmethod
    def from_hms(cls, h: int, m: int, s: float) -> "Degrees":
        """Hour angle / right ascension given as h:m:s, converted with 15 deg per hour."""
        return cls(DEGREES_PER_HOUR * (h + (m + s / 60.0) / 60.0))

    # --- conversion ---------------------------------------------------

    def to_radians(self) -> Radians:
        return Radians.from_degrees(self)

    def to_arcsec(self) -> ArcSec:
        return ArcSec.from_degrees(self)

    def to_hours(self) -> float:
        return self.value * HOURS_PER_DEGREE

    def sin(self) -> float:
        return math.sin(self.value * DEGREES_TO_RADIANS)

    def cos(self) -> float:
        return math.cos(self.value * DEGREES_TO_RADIANS)

    def tan(self) -> float:
        return math.tan(self.value * DEGREES_TO_RADIANS)

    # --- normalization ------------------------------------------------

    def map_to_0_to_360(self) -> "Degrees":
        return Degrees(map_to_0_to_360(self.value))

    def map_to_neg90_to_90(self) -> "Degrees":
        return Degrees(map_to_neg90_to_90(self.value))

    def map_neg180_to_180(self) -> "Degrees":
        return Degrees(map_neg180_to_180(self.value))

    # --- display ------------------------------------------------------

    def to_dms(self) -> Tuple[int, int, float]:
        """
        (d, m, s). The sign travels on d; m and s are magnitudes.
        No range checks: callers normalize first if they need to.
        """
        sign = -1 if self.value < 0.0 else 1
        a = abs(self.value)
        d = math.trunc(a)
        minutes = (a - d) * 60.0
        m = math.trunc(minutes)
        s = (minutes - m) * 60.0
        return sign * d, m, s

    def to_hms(self) -> Tuple[int, int, float]:
        """(h, m, s) with 360 deg = 24 h. The sign travels on h."""
        sign = -1 if self.value < 0.0 else 1
        hours = abs(self.value) * HOURS_PER_DEGREE
        h = math.trunc(hours)
        minutes = (hours - h) * 60.0
        m = math.trunc(minutes)
        s = (minutes - m) * 60.0
        return sign * h, m, s

    def to_dms_str(self, width: int = 2) -> str:
        d, m, s = self.to_dms()
        lead = "-" if (self.value < 0.0 and d == 0) else ""
        return f"{lead}{d}° {m}' {s:.{width}f}\""

    def to_hms_str(self, width: int = 2) -> str:
        h, m, s = self.to_hms()
        lead = "-" if (self.value < 0.0 and h == 0) else ""
        return f"{lead}{h}h {m}m {s:.{width}f}s"

    # --- arithmetic ---------------------------------------------------

    def __add__(self, other: "Degrees") -> "Degrees":
        if not isinstance(other, Degrees):
            return NotImplemented
        return Degrees(self.value + other.value)

    def __sub__(self, other: "Degrees") -> "Degrees":
        if not isinstance(other, Degrees):
            return NotImplemented
        return Degrees(self.value - other.value)

    def __neg__(self) -> "Degrees":
        return Degrees(-self.value)

    def __mul__(self, k: float) -> "Degrees":
        return Degrees(self.value * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> "Degrees":
        return Degrees(self.value / k)
