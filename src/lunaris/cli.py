from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys


_DATE_RE = re.compile(r"^(-?\d+)-(\d{1,2})-(\d{1,2}(?:\.\d+)?)$")


def _parse_date(s: str) -> tuple:
    """YYYY-MM-DD[.frac] -> (year, month, day) with fractional day."""
    m = _DATE_RE.match(s)
    if not m:
        raise SystemExit(f"bad date {s!r}; expected YYYY-MM-DD or YYYY-MM-DD.ddd")
    return int(m.group(1)), int(m.group(2)), float(m.group(3))


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _add_observer_args(p: argparse.ArgumentParser) -> None:
    from lunaris.reference.coordinates import DEFAULT_PRESSURE_MB, DEFAULT_TEMPERATURE_C

    p.add_argument("--lon", type=float, required=True, help="Observer longitude in degrees (positive WEST)")
    p.add_argument("--lat", type=float, required=True, help="Observer latitude in degrees")
    p.add_argument("--height", type=float, default=0.0, help="Height above sea level in metres")
    p.add_argument("--pressure", type=float, default=DEFAULT_PRESSURE_MB, help="Pressure in millibars")
    p.add_argument("--temperature", type=float, default=DEFAULT_TEMPERATURE_C, help="Temperature in °C")


def cmd_jd(argv: list[str]) -> int:
    from lunaris.reference import calendar

    p = argparse.ArgumentParser(prog="lunaris jd", description="Calendar date <-> Julian Day")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--date", help="YYYY-MM-DD[.frac] (Julian calendar before 1582-10-15)")
    g.add_argument("--jd", type=float, help="Julian Day")
    args = p.parse_args(argv)

    if args.date is not None:
        y, m, d = _parse_date(args.date)
        jd = calendar.julian_day(y, m, d)
    else:
        jd = args.jd
    date = calendar.to_calendar_date(jd)
    h, mi, s = calendar.from_fract_day(date.day)
    names = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

    print(f"JD        = {jd:.6f}")
    print(f"MJD       = {calendar.jd_to_mjd(jd):.6f}")
    print(f"Date      = {date.year}-{date.month:02d}-{date.day:.6f} ({'Gregorian' if date.is_gregorian else 'Julian'})")
    print(f"Time      = {h:02d}:{mi:02d}:{s:06.3f}")
    print(f"Weekday   = {names[calendar.day_of_week(jd)]}")
    print(f"Day of yr = {calendar.day_of_year(date)}")
    return 0


def cmd_deltat(argv: list[str]) -> int:
    from lunaris.reference import time_scales as ts

    p = argparse.ArgumentParser(prog="lunaris deltat", description="ΔT, TAI-UTC and TT for a UTC Julian Day")
    p.add_argument("--jd-utc", type=float, required=True)
    args = p.parse_args(argv)

    jd = args.jd_utc
    tt = ts.utc_2_tt(jd)
    print(f"JD(UTC)   = {jd:.6f}")
    print(f"TAI-UTC   = {ts.cumulative_leap_seconds(jd):.6f} s")
    print(f"ΔT        = {ts.delta_t(jd):.4f} s")
    print(f"JD(TT)    = {tt:.8f}")
    print(f"TT-UTC    = {(tt - jd) * ts.SECONDS_PER_DAY:.4f} s")
    return 0


def cmd_sidereal(argv: list[str]) -> int:
    from lunaris.reference import earth
    from lunaris.reference.angles import Degrees

    p = argparse.ArgumentParser(prog="lunaris sidereal", description="Greenwich and local sidereal time")
    p.add_argument("--jd", type=float, required=True, help="Julian Day (UT)")
    p.add_argument("--lon", type=float, default=0.0, help="Observer longitude in degrees (positive WEST)")
    args = p.parse_args(argv)

    mean = earth.mean_sidereal_time(args.jd)
    app = earth.apparent_sidereal_time(args.jd)
    lst = earth.local_sidereal_time(app, Degrees(args.lon))
    print(f"Mean GST      = {mean.to_hms_str(4)}  ({mean.value:.8f}°)")
    print(f"Apparent GST  = {app.to_hms_str(4)}  ({app.value:.8f}°)")
    print(f"Apparent LST  = {lst.to_hms_str(4)}  ({lst.value:.8f}°)")
    return 0


def cmd_sun(argv: list[str]) -> int:
    import lunaris
    from lunaris.reference.angles import Degrees

    p = argparse.ArgumentParser(prog="lunaris sun", description="Apparent Sun position for an observer")
    p.add_argument("--jd-utc", type=float, required=True)
    _add_observer_args(p)
    args = p.parse_args(argv)

    obs = lunaris.Observer(args.lon, args.lat, args.height, args.pressure, args.temperature)
    d = lunaris.sun_data(args.jd_utc, obs)
    print(f"Longitude     = {Degrees(d.longitude).to_dms_str()}  ({d.longitude:.6f}°)")
    print(f"Latitude      = {Degrees(d.latitude).to_dms_str()}")
    print(f"Distance      = {d.distance_au:.8f} AU")
    print(f"RA            = {Degrees(d.right_ascension).to_hms_str()}")
    print(f"Dec           = {Degrees(d.declination).to_dms_str()}")
    print(f"Azimuth       = {d.azimuth:.4f}°")
    print(f"Altitude      = {d.altitude:.4f}° (refracted)")
    return 0


def cmd_moon(argv: list[str]) -> int:
    import lunaris
    from lunaris.reference.angles import Degrees

    p = argparse.ArgumentParser(prog="lunaris moon", description="Moon position and phase for an observer")
    p.add_argument("--jd-utc", type=float, required=True)
    _add_observer_args(p)
    args = p.parse_args(argv)

    obs = lunaris.Observer(args.lon, args.lat, args.height, args.pressure, args.temperature)
    d = lunaris.moon_data(lunaris.MoonInput(args.jd_utc, obs))
    print(f"Phase         = {d.phase_description} ({d.phase_angle:.3f}°, age {d.phase_age:.2f} d)")
    print(f"Illuminated   = {d.illuminated_fraction * 100.0:.1f} %")
    print(f"Longitude     = {Degrees(d.longitude).to_dms_str()}  ({d.longitude:.6f}°)")
    print(f"Latitude      = {Degrees(d.latitude).to_dms_str()}")
    print(f"Distance      = {d.distance_km:.1f} km")
    print(f"RA (topo)     = {Degrees(d.right_ascension).to_hms_str()}")
    print(f"Dec (topo)    = {Degrees(d.declination).to_dms_str()}")
    print(f"Hour angle    = {d.hour_angle:.4f}°")
    print(f"Azimuth       = {d.azimuth:.4f}°")
    print(f"Altitude      = {d.altitude:.4f}° (refracted)")
    return 0


def cmd_rise_set(argv: list[str]) -> int:
    import lunaris
    from lunaris.reference import calendar

    p = argparse.ArgumentParser(prog="lunaris rise-set", description="Moon rise, set and transit (UTC)")
    p.add_argument("date", help="YYYY-MM-DD (searched from noon)")
    p.add_argument("--tz", type=float, default=None, help="Timezone offset in hours east of UTC")
    _add_observer_args(p)
    args = p.parse_args(argv)

    y, m, d = _parse_date(args.date)
    jd = calendar.julian_day(y, m, int(d) + 0.5)
    for label, fn in (("Rise", lunaris.moon_rise), ("Transit", lunaris.moon_transit), ("Set", lunaris.moon_set)):
        r = fn(jd, args.tz, args.lon, args.lat, args.pressure, args.temperature)
        if r.is_valid:
            flag = "" if r.converged else "  (not converged)"
            print(f"{label:8s} {r.year}-{r.month:02d}-{r.day:02d} {r.hours:02d}:{r.minutes:02d}:{r.seconds:05.2f} UTC{flag}")
        else:
            print(f"{label:8s} {r.outcome.replace('_', ' ')}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="lunaris", description="Sun/Moon ephemeris and time-scale toolkit.")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("jd", help="Calendar date <-> Julian Day")
    sub.add_parser("deltat", help="ΔT, leap seconds and TT for a UTC Julian Day")
    sub.add_parser("sidereal", help="Greenwich and local sidereal time")
    sub.add_parser("sun", help="Apparent Sun position for an observer")
    sub.add_parser("moon", help="Moon position and phase for an observer")
    sub.add_parser("rise-set", help="Moon rise, set and transit")

    # table tools
    sub.add_parser("update-deltat", help="Rebuild the ΔT table from IERS/USNO files")

    # ephemeris diagnostics
    sub.add_parser("validate-ref", help="Compare the series with a JPL kernel (needs extras)")

    args, rest = p.parse_known_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "jd":
        return cmd_jd(rest)

    if args.cmd == "deltat":
        return cmd_deltat(rest)

    if args.cmd == "sidereal":
        return cmd_sidereal(rest)

    if args.cmd == "sun":
        return cmd_sun(rest)

    if args.cmd == "moon":
        return cmd_moon(rest)

    if args.cmd == "rise-set":
        return cmd_rise_set(rest)

    if args.cmd == "update-deltat":
        return _run_module_main("lunaris.ephemeris.update_deltat_table", rest)

    if args.cmd == "validate-ref":
        return _run_module_main("lunaris.diagnostics.validate_reference", rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
