#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

from lunaris.ephemeris import DEFAULT_KERNEL, load_kernel
from lunaris.reference import lunar, solar
from lunaris.reference.angles import map_neg180_to_180
from lunaris.reference.calendar import J2000


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "lunaris[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "lunaris[diagnostics]"') from e


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate the Meeus Sun/Moon series against a JPL kernel.")
    p.add_argument("--year-start", type=int, default=1950)
    p.add_argument("--year-end", type=int, default=2050)
    p.add_argument("--step-days", type=float, default=10.0)
    p.add_argument("--kernel", default=DEFAULT_KERNEL, help="JPL kernel name (skyfield downloads it on first use)")
    p.add_argument("--out-png", default="reference_validation.png")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()
    from skyfield.framelib import ecliptic_frame

    print(f"Loading {args.kernel} ...")
    ts, eph = load_kernel(args.kernel)
    earth, sun, moon = eph["earth"], eph["sun"], eph["moon"]

    jd_start = J2000 + (args.year_start - 2000) * 365.25
    jd_end = J2000 + (args.year_end - 2000) * 365.25
    jds = np.arange(jd_start, jd_end, args.step_days)
    years = 2000 + (jds - J2000) / 365.25

    print(f"Validating {len(jds)} points from {years[0]:.0f} to {years[-1]:.0f} ...")

    # apparent ecliptic coordinates of date from the kernel (vectorised over t)
    t = ts.tt_jd(jds)
    e = earth.at(t)
    s_lat, s_lon, _ = e.observe(sun).apparent().frame_latlon(ecliptic_frame)
    m_lat, m_lon, m_dist = e.observe(moon).apparent().frame_latlon(ecliptic_frame)

    err_sun_lon = []
    err_moon_lon = []
    err_moon_lat = []
    err_moon_dist = []
    for i, jd in enumerate(jds):
        jd = float(jd)
        err_sun_lon.append(map_neg180_to_180(solar.apparent_longitude(jd).value - s_lon.degrees[i]) * 3600.0)
        err_moon_lon.append(map_neg180_to_180(lunar.geocentric_longitude(jd).value - m_lon.degrees[i]) * 3600.0)
        err_moon_lat.append((lunar.geocentric_latitude(jd).value - m_lat.degrees[i]) * 3600.0)
        err_moon_dist.append(lunar.distance_from_earth(jd) - m_dist.km[i])

    err_sun_lon = np.asarray(err_sun_lon)
    err_moon_lon = np.asarray(err_moon_lon)
    err_moon_lat = np.asarray(err_moon_lat)
    err_moon_dist = np.asarray(err_moon_dist)

    for name, err, unit in (
        ("Sun longitude", err_sun_lon, '"'),
        ("Moon longitude", err_moon_lon, '"'),
        ("Moon latitude", err_moon_lat, '"'),
        ("Moon distance", err_moon_dist, " km"),
    ):
        print(f"  {name:15s} rms={np.sqrt(np.mean(err ** 2)):8.3f}{unit}  max={np.max(np.abs(err)):8.3f}{unit}")

    fig, axs = plt.subplots(4, 1, figsize=(12, 12), sharex=True)

    axs[0].scatter(years, err_sun_lon, s=1, alpha=0.5, color='orange')
    axs[0].set_title(f"Solar apparent longitude error (series - {args.kernel})")
    axs[0].set_ylabel("Error (arcsec)")

    axs[1].scatter(years, err_moon_lon, s=1, alpha=0.5, color='blue')
    axs[1].set_title("Lunar apparent longitude error")
    axs[1].set_ylabel("Error (arcsec)")

    axs[2].scatter(years, err_moon_lat, s=1, alpha=0.5, color='green')
    axs[2].set_title("Lunar latitude error")
    axs[2].set_ylabel("Error (arcsec)")

    axs[3].scatter(years, err_moon_dist, s=1, alpha=0.5, color='purple')
    axs[3].set_title("Lunar distance error")
    axs[3].set_ylabel("Error (km)")
    axs[3].set_xlabel("Year")

    for ax in axs:
        ax.grid(True, alpha=0.3)

    plt.suptitle(f"Reference series validation ({years[0]:.0f} to {years[-1]:.0f})", fontsize=14)
    plt.tight_layout()
    plt.savefig(args.out_png, dpi=200)
    print(f"Validation complete. Plot saved to {args.out_png}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
