from __future__ import annotations

"""
lunaris.reference.time_scales

UTC / UT1 / TT conversions driven by two tables:

  leap_seconds.csv  (jd, leap_seconds, base_mjd, coefficient)
      TAI - UTC step function. Before 1972 the offset drifts linearly:
        TAI - UTC = leap_seconds + (MJD - base_mjd) * coefficient
      From 1972 on the coefficient is 0 and the offset is an integer.

  delta_t.csv       (jd, delta_t)
      ΔT = TT - UT1 in seconds, sampled on Jan 1 of each year and
      interpolated linearly in between.

Outside the tabulated span ΔT falls back to the Espenak–Meeus (NASA)
piecewise polynomials, evaluated on the integer year.

Search order for each table (first hit wins):
  1) LUNARIS_DELTAT_TABLE / LUNARIS_LEAP_SECONDS_TABLE environment variable
  2) user cache ($XDG_CACHE_HOME/lunaris/<name> or ~/.cache/lunaris/<name>)
  3) packaged data (lunaris/reference/data/<name>)
"""

import csv
import importlib.resources
import logging
import math
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from ..core.errors import DeltaTTableUnavailable, TableError
from .calendar import MJD_OFFSET, fractional_year, to_calendar_date

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400.0
TT_MINUS_TAI = 32.184  # seconds

DELTAT_ENV = "LUNARIS_DELTAT_TABLE"
LEAP_SECONDS_ENV = "LUNARIS_LEAP_SECONDS_TABLE"
DELTAT_FILENAME = "delta_t.csv"
LEAP_SECONDS_FILENAME = "leap_seconds.csv"


# ============================================================
# Table rows
# ============================================================

@dataclass(frozen=True, order=True)
class LeapSecondCoefficient:
    jd: float
    leap_seconds: float
    base_mjd: float
    coefficient: float

    def tai_minus_utc(self, jd_utc: float) -> float:
        return self.leap_seconds + (jd_utc - MJD_OFFSET - self.base_mjd) * self.coefficient


@dataclass(frozen=True, order=True)
class DeltaTValue:
    jd: float
    delta_t: float


# ============================================================
# Search
# ============================================================

def upper_bound(seq: Sequence[Any], key: Any, *, key_fn: Optional[Callable[[Any], Any]] = None) -> int:
    """
    Index of the first element strictly greater than `key` (len(seq) if none).
    Runs of equal keys are skipped, so the result is one past the last match.
    """
    kf = key_fn if key_fn is not None else (lambda x: x)
    lo, hi = 0, len(seq)
    while lo < hi:
        mid = lo + (hi - lo) // 2
        if key >= kf(seq[mid]):
            lo = mid + 1
        else:
            hi = mid
    return lo


# ============================================================
# Loading
# ============================================================

def _cache_dir() -> Path:
    xdg = os.environ.get("XDG_CACHE_HOME", "").strip()
    return (Path(xdg).expanduser() / "lunaris") if xdg else (Path.home() / ".cache" / "lunaris")


def user_cache_path(filename: str = DELTAT_FILENAME) -> Path:
    return _cache_dir() / filename


def _check_ascending(rows: List[Any], source: str) -> None:
    if not rows:
        raise TableError(f"{source}: table is empty")
    for i in range(1, len(rows)):
        if not (rows[i].jd > rows[i - 1].jd):
            raise TableError(f"{source}: jd not strictly increasing at row {i + 1} ({rows[i].jd})")


def _parse_rows(reader: Iterable[dict], build: Callable[[dict], Any], source: str) -> List[Any]:
    rows = []
    for n, r in enumerate(reader, start=2):
        try:
            rows.append(build(r))
        except (KeyError, TypeError, ValueError) as e:
            raise TableError(f"{source}: bad row {n}: {r!r}") from e
    _check_ascending(rows, source)
    return rows


def _build_leap(r: dict) -> LeapSecondCoefficient:
    return LeapSecondCoefficient(
        jd=float(r["jd"]),
        leap_seconds=float(r["leap_seconds"]),
        base_mjd=float(r["base_mjd"]),
        coefficient=float(r["coefficient"]),
    )


def _build_delta_t(r: dict) -> DeltaTValue:
    return DeltaTValue(jd=float(r["jd"]), delta_t=float(r["delta_t"]))


def _load_table(filename: str, env_var: str, build: Callable[[dict], Any], *, use_cache: bool) -> Tuple[Any, ...]:
    # 1) explicit override
    p = os.environ.get(env_var, "").strip()
    if p:
        path = Path(p).expanduser()
        if not path.is_file():
            raise DeltaTTableUnavailable(f"{env_var} points to a missing file: {path}")
        with path.open("r", encoding="utf-8", newline="") as f:
            rows = _parse_rows(csv.DictReader(f), build, str(path))
        logger.debug("loaded %d rows from %s (%s)", len(rows), path, env_var)
        return tuple(rows)

    # 2) user cache (written by `lunaris update-deltat`)
    if use_cache:
        cache_path = user_cache_path(filename)
        if cache_path.is_file():
            with cache_path.open("r", encoding="utf-8", newline="") as f:
                rows = _parse_rows(csv.DictReader(f), build, str(cache_path))
            logger.debug("loaded %d rows from user cache %s", len(rows), cache_path)
            return tuple(rows)

    # 3) packaged data
    res = importlib.resources.files("lunaris.reference").joinpath("data").joinpath(filename)
    with res.open("r", encoding="utf-8", newline="") as f:
        rows = _parse_rows(csv.DictReader(f), build, f"lunaris.reference/data/{filename}")
    logger.debug("loaded %d rows from packaged %s", len(rows), filename)
    return tuple(rows)


@lru_cache(maxsize=1)
def leap_second_table() -> Tuple[LeapSecondCoefficient, ...]:
    return _load_table(LEAP_SECONDS_FILENAME, LEAP_SECONDS_ENV, _build_leap, use_cache=False)


@lru_cache(maxsize=1)
def delta_t_table() -> Tuple[DeltaTValue, ...]:
    return _load_table(DELTAT_FILENAME, DELTAT_ENV, _build_delta_t, use_cache=True)


def clear_table_cache() -> None:
    """Forget loaded tables so the next lookup re-reads configuration."""
    leap_second_table.cache_clear()
    delta_t_table.cache_clear()


# ============================================================
# TAI - UTC
# ============================================================

def cumulative_leap_seconds(jd_utc: float) -> float:
    """TAI - UTC in seconds at the given UTC instant; 0 before the first entry."""
    table = leap_second_table()
    if jd_utc < table[0].jd:
        return 0.0
    if jd_utc >= table[-1].jd:
        return table[-1].tai_minus_utc(jd_utc)
    idx = upper_bound(table, jd_utc, key_fn=lambda r: r.jd)
    return table[idx - 1].tai_minus_utc(jd_utc)


# ============================================================
# ΔT
# ============================================================

def _poly(u: float, coeffs: Tuple[float, ...]) -> float:
    """Horner evaluation for Σ coeffs[k] u^k."""
    acc = 0.0
    for c in reversed(coeffs):
        acc = acc * u + c
    return acc


def delta_t_polynomial(year: float) -> float:
    """
    Espenak–Meeus piecewise polynomial ΔT(year) in seconds.

    Branch boundaries are strict `<` thresholds on `year`.
    """
    y = year
    if y < -500.0:
        u = (y - 1820.0) / 100.0
        return -20.0 + 32.0 * u * u
    if y < 500.0:
        u = y / 100.0
        return _poly(u, (10583.6, -1014.41, 33.78311, -5.952053,
                         -0.1798452, 0.022174192, 0.0090316521))
    if y < 1600.0:
        u = (y - 1000.0) / 100.0
        return _poly(u, (1574.2, -556.01, 71.23472, 0.319781,
                         -0.8503463, -0.005050998, 0.0083572073))
    if y < 1700.0:
        u = (y - 1600.0) / 100.0
        return 120.0 - 98.08 * u - 153.2 * u ** 2 + u ** 3 / 0.007129
    if y < 1800.0:
        u = (y - 1700.0) / 100.0
        return 8.83 + 16.03 * u - 59.285 * u ** 2 + 133.36 * u ** 3 - u ** 4 / 0.01174
    if y < 1860.0:
        u = (y - 1800.0) / 100.0
        return _poly(u, (13.72, -33.2447, 68.612, 4111.6,
                         -37436.0, 121272.0, -169900.0, 87500.0))
    if y < 1900.0:
        u = (y - 1860.0) / 100.0
        return 7.62 + 57.37 * u - 2517.54 * u ** 2 + 16806.68 * u ** 3 - 44736.24 * u ** 4 + u ** 5 / 0.0000233174
    if y < 1920.0:
        u = (y - 1900.0) / 100.0
        return -2.79 + 149.4119 * u - 598.939 * u ** 2 + 6196.6 * u ** 3 - 19700.0 * u ** 4
    if y < 1941.0:
        u = (y - 1920.0) / 100.0
        return 21.20 + 84.493 * u - 761.00 * u ** 2 + 2093.6 * u ** 3
    if y < 1961.0:
        u = (y - 1950.0) / 100.0
        return 29.07 + 40.7 * u - u ** 2 / 0.0233 + u ** 3 / 0.002547
    if y < 1986.0:
        u = (y - 1975.0) / 100.0
        return 45.45 + 106.7 * u - u ** 2 / 0.026 - u ** 3 / 0.000718
    if y < 2005.0:
        u = (y - 2000.0) / 100.0
        return _poly(u, (63.86, 33.45, -603.74, 1727.5, 65181.4, 237359.9))
    if y < 2050.0:
        u = (y - 2000.0) / 100.0
        return 62.92 + 32.217 * u + 55.89 * u ** 2
    if y < 2150.0:
        u = (y - 1820.0) / 100.0
        return -205.72 + 56.28 * u + 32.0 * u ** 2
    u = (y - 1820.0) / 100.0
    return -20.0 + 32.0 * u * u


def delta_t(jd: float) -> float:
    """ΔT = TT - UT1 in seconds."""
    table = delta_t_table()
    if table[0].jd <= jd < table[-1].jd:
        hi = upper_bound(table, jd, key_fn=lambda r: r.jd)
        a, b = table[hi - 1], table[hi]
        t = (jd - a.jd) / (b.jd - a.jd)
        return a.delta_t + t * (b.delta_t - a.delta_t)
    d = to_calendar_date(jd)
    year = math.trunc(fractional_year(d.year, d.month, d.day))
    return delta_t_polynomial(year)


# ============================================================
# Scale conversions
# ============================================================

def ut1_to_tt(jd_ut1: float) -> float:
    return jd_ut1 + delta_t(jd_ut1) / SECONDS_PER_DAY


def utc_2_tt(jd_utc: float) -> float:
    """
    JD(UTC) -> JD(TT).

    Inside the leap-second era:
      TT  = UTC + (TAI - UTC) + 32.184 s
      UT1 = TT - ΔT
    Before it, UTC did not exist and the input is taken as UT1.
    """
    table = leap_second_table()
    dt = delta_t(jd_utc)
    if jd_utc < table[0].jd:
        return jd_utc + dt / SECONDS_PER_DAY
    leap = cumulative_leap_seconds(jd_utc)
    jd_ut1 = jd_utc + (leap + TT_MINUS_TAI - dt) / SECONDS_PER_DAY
    return jd_ut1 + dt / SECONDS_PER_DAY


def tt_2_utc(jd_tt: float, *, iterations: int = 3) -> float:
    """
    Inverse of utc_2_tt by fixed-point iteration. The offset varies by well
    under a second per day, so a few passes settle to float precision.
    """
    jd_utc = jd_tt
    for _ in range(iterations):
        jd_utc = jd_tt - (utc_2_tt(jd_utc) - jd_utc)
    return jd_utc
