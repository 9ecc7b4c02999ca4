from __future__ import annotations

"""
lunaris.reference.calendar

Julian Day <-> calendar date (Meeus, Astronomical Algorithms, ch. 7).

Dates before 1582-10-15 are Julian calendar dates, later ones Gregorian.
The day of month may carry a fraction (e.g. 4.81 = 4th, 19:26:24).
JD values are plain floats in whatever time scale the caller uses.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple


MJD_OFFSET = 2400000.5
J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0
DAYS_PER_MILLENNIUM = 365250.0

# integer part of JD + 0.5 on 1582-10-15, the first Gregorian day
_GREGORIAN_START_Z = 2299161


# ============================================================
# Calendar date
# ============================================================

@dataclass(frozen=True)
class Date:
    year: int
    month: int
    day: float

    @classmethod
    def from_date_hms(cls, year: int, month: int, day: int,
                      hour: int = 0, minute: int = 0, second: float = 0.0) -> "Date":
        frac = (hour + (minute + second / 60.0) / 60.0) / 24.0
        return cls(year, month, day + frac)

    @property
    def is_gregorian(self) -> bool:
        if self.year < 1582:
            return False
        if self.year == 1582:
            if self.month < 10:
                return False
            if self.month == 10 and self.day < 5.0:
                return False
        return True

    def time_of_day(self) -> Tuple[int, int, float]:
        return from_fract_day(self.day)


def from_fract_day(day: float) -> Tuple[int, int, float]:
    """(hours, minutes, seconds) carried by the fractional part of a day number."""
    hours = 24.0 * (day - math.trunc(day))
    h = math.trunc(hours)
    minutes = (hours - h) * 60.0
    m = math.trunc(minutes)
    s = (minutes - m) * 60.0
    return h, m, s


# ============================================================
# Date <-> JD
# ============================================================

def from_date(date: Date) -> float:
    """Calendar date -> JD (Meeus 7.1). No range checks."""
    y, m = date.year, date.month
    if m < 3:
        y -= 1
        m += 12
    b = 0
    if date.is_gregorian:
        a = math.trunc(y / 100.0)
        b = 2 - a + math.trunc(a / 4.0)
    return float(
        math.trunc(365.25 * (y + 4716))
        + math.trunc(30.6001 * (m + 1))
        + date.day
        + b
        - 1524.5
    )


def julian_day(year: int, month: int, day: float) -> float:
    return from_date(Date(year, month, day))


def to_calendar_date(jd: float) -> Date:
    """JD -> calendar date (Meeus ch. 7). Not valid for negative JD."""
    x = jd + 0.5
    z = math.trunc(x)
    f = x - z
    if z < _GREGORIAN_START_Z:
        a = z
    else:
        alpha = math.trunc((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - math.trunc(alpha / 4.0)
    b = a + 1524
    c = math.trunc((b - 122.1) / 365.25)
    d = math.trunc(365.25 * c)
    e = math.trunc((b - d) / 30.6001)

    day = b - d - math.trunc(30.6001 * e) + f
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return Date(int(year), int(month), float(day))


# ============================================================
# Year helpers
# ============================================================

def is_leap_year(year: int, gregorian: Optional[bool] = None) -> bool:
    """
    Leap-year rule of the given calendar. When `gregorian` is None, the
    calendar in force on Jan 1 of `year` is used.
    """
    if gregorian is None:
        gregorian = Date(year, 1, 1.0).is_gregorian
    if gregorian:
        return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0
    return year % 4 == 0


def fractional_year(year: int, month: int, day: float) -> float:
    days = 366.0 if is_leap_year(year) else 365.0
    return year + (julian_day(year, month, day) - julian_day(year, 1, 1.0)) / days


def day_of_year(date: Date) -> int:
    """Meeus ch. 7: N = INT(275M/9) - K*INT((M+9)/12) + D - 30."""
    k = 1 if is_leap_year(date.year) else 2
    m = date.month
    return math.trunc(275 * m / 9) - k * math.trunc((m + 9) / 12) + math.trunc(date.day) - 30


def day_of_week(jd: float) -> int:
    """0 = Sunday, 1 = Monday, ... taken at 0h of the day containing jd."""
    jd0 = math.floor(jd - 0.5) + 0.5
    return int(math.fmod(jd0 + 1.5, 7.0))


# ============================================================
# Time offsets
# ============================================================

def jd_to_mjd(jd: float) -> float:
    return jd - MJD_OFFSET


def mjd_to_jd(mjd: float) -> float:
    return mjd + MJD_OFFSET


def add_hours(jd: float, hours: float) -> float:
    return jd + hours / 24.0


def centuries_from_j2000(jd: float) -> float:
    return (jd - J2000) / DAYS_PER_CENTURY


def millennia_from_j2000(jd: float) -> float:
    return (jd - J2000) / DAYS_PER_MILLENNIUM
