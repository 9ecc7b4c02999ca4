# tests/test_rise_set.py

import logging
from unittest.mock import patch

import pytest
from lunaris.reference import rise_set as rs
from lunaris.reference import time_scales as ts
from lunaris.reference.angles import Degrees
from lunaris.reference.calendar import Date, from_date

# Munich, 2000 March 23, searched from noon. The solver runs in TT, so the
# reference event times below are dynamical time, not UTC.
ANCHOR = 2451627.0
MUNICH_LON = Degrees(-11.6)
MUNICH_LAT = Degrees(48.1)

LONDON_LON = Degrees.from_dms(0, 6, 3.2)
LONDON_LAT = Degrees.from_dms(51, 31, 54.8)


def _h0(jd, lon, lat):
    return rs.target_altitude(jd, Degrees(0.0), lon, lat, 1013.0, 10.0)


def _at(h, m, s):
    return from_date(Date.from_date_hms(2000, 3, 23, h, m, s))


def test_target_altitude_is_near_horizon():
    h0 = _h0(ANCHOR, MUNICH_LON, MUNICH_LAT).value
    # parallax (~0.9°) minus refraction (~0.5°) minus semidiameter (~0.25°)
    assert 0.0 < h0 < 0.5


def test_moon_rise_munich():
    r = rs.rise(ANCHOR, _h0(ANCHOR, MUNICH_LON, MUNICH_LAT), MUNICH_LON, MUNICH_LAT)
    assert isinstance(r, rs.EventTime)
    assert r.converged
    assert r.jd == pytest.approx(_at(21, 12, 13), abs=1e-3)


def test_moon_set_munich():
    r = rs.set_(ANCHOR, _h0(ANCHOR, MUNICH_LON, MUNICH_LAT), MUNICH_LON, MUNICH_LAT)
    assert isinstance(r, rs.EventTime)
    assert r.jd == pytest.approx(_at(7, 1, 3), abs=1e-3)


def test_moon_transit_munich():
    r = rs.transit(ANCHOR, _h0(ANCHOR, MUNICH_LON, MUNICH_LAT), MUNICH_LON, MUNICH_LAT)
    assert isinstance(r, rs.EventTime)
    assert r.jd == pytest.approx(_at(1, 38, 1), abs=1e-3)


def test_dispatch_matches_wrappers():
    h0 = _h0(ANCHOR, MUNICH_LON, MUNICH_LAT)
    direct = rs.calculate_rise_set_transit(rs.EventKind.RISE, ANCHOR, h0, MUNICH_LON, MUNICH_LAT)
    assert direct == rs.rise(ANCHOR, h0, MUNICH_LON, MUNICH_LAT)


def test_timezone_window_keeps_same_events():
    h0 = _h0(ANCHOR, MUNICH_LON, MUNICH_LAT)
    r = rs.rise(ANCHOR, h0, MUNICH_LON, MUNICH_LAT, timezone_offset=1.0)
    s = rs.set_(ANCHOR, h0, MUNICH_LON, MUNICH_LAT, timezone_offset=1.0)
    assert r.jd == pytest.approx(_at(21, 12, 13), abs=1e-3)
    assert s.jd == pytest.approx(_at(7, 1, 3), abs=1e-3)


def test_london_no_moonrise():
    jd = from_date(Date(2000, 3, 25.5))
    assert isinstance(rs.rise(jd, _h0(jd, LONDON_LON, LONDON_LAT), LONDON_LON, LONDON_LAT), rs.NeverRises)


def test_london_no_moonset():
    jd = from_date(Date(2000, 4, 9.5))
    assert isinstance(rs.set_(jd, _h0(jd, LONDON_LON, LONDON_LAT), LONDON_LON, LONDON_LAT), rs.NeverSets)


def test_hour_angle_out_of_range():
    lat = Degrees(80.0)

    with patch("lunaris.reference.lunar.equatorial_coordinates") as mock:
        mock.return_value = (Degrees(0.0), Degrees(30.0))
        assert isinstance(rs.rise(ANCHOR, Degrees(0.0), Degrees(0.0), lat), rs.NeverRises)

        mock.return_value = (Degrees(0.0), Degrees(-30.0))
        assert isinstance(rs.set_(ANCHOR, Degrees(0.0), Degrees(0.0), lat), rs.NeverSets)


def test_not_converged_is_flagged(monkeypatch, caplog):
    monkeypatch.setattr(rs, "MAX_ITER", 1)
    h0 = _h0(ANCHOR, MUNICH_LON, MUNICH_LAT)
    with caplog.at_level(logging.WARNING, logger="lunaris.reference.rise_set"):
        r = rs.transit(ANCHOR, h0, MUNICH_LON, MUNICH_LAT)
    assert isinstance(r, rs.EventTime)
    assert not r.converged
    assert "did not converge" in caplog.text


@pytest.mark.parametrize("timezone_offset", [None, 0.0])
def test_day_check_uses_civil_time(timezone_offset):
    anchor = ts.utc_2_tt(2451627.0)
    midnight = 2451627.5  # end of 2000 March 23, UTC
    before = ts.utc_2_tt(midnight - 30.0 / 86400.0)
    after = ts.utc_2_tt(midnight + 30.0 / 86400.0)

    # 30 s before midnight UTC is already the next day in TT
    assert before > midnight
    assert rs._on_requested_day(rs.EventKind.RISE, anchor, before, timezone_offset)
    assert not rs._on_requested_day(rs.EventKind.RISE, anchor, after, timezone_offset)
