# tests/test_api.py

import pytest

import lunaris
from lunaris.reference import lunar, time_scales
from lunaris.reference.calendar import Date, from_date

MUNICH = lunaris.Observer(longitude=-11.6, latitude=48.1, pressure_mb=1013.0)


def test_helpers():
    assert lunaris.julian_day(1957, 10, 4.81) == pytest.approx(2436116.31, abs=1e-9)
    assert lunaris.to_dms_str(13.769657226951539) == "13° 46' 10.77\""
    assert lunaris.to_hms_str(134.68392033025296) == "8h 58m 44.14s"
    assert lunaris.local_sidereal_time(2446895.5, 0.0) == pytest.approx(197.69223, abs=1e-4)
    assert lunaris.local_sidereal_time(2446895.5, 15.0) == pytest.approx(182.69223, abs=1e-4)


def test_moon_data():
    jd_utc = 2448724.5
    d = lunaris.moon_data(lunaris.MoonInput(jd_utc, MUNICH))
    jd_tt = time_scales.utc_2_tt(jd_utc)

    assert d.longitude == pytest.approx(lunar.geocentric_longitude(jd_tt).value)
    assert d.latitude == pytest.approx(lunar.geocentric_latitude(jd_tt).value)
    assert d.distance_km == pytest.approx(lunar.distance_from_earth(jd_tt))
    assert d.illuminated_fraction == pytest.approx(lunar.fraction_illuminated(jd_tt))
    assert d.phase_angle == pytest.approx(lunar.phase_angle_360(jd_tt).value)
    assert d.phase_age == pytest.approx(d.phase_angle / lunar.MOON_DAY)
    assert d.phase_description == "First Quarter"

    assert 0.0 <= d.azimuth < 360.0
    assert 0.0 <= d.hour_angle < 360.0
    assert -90.0 <= d.altitude <= 90.0
    # topocentric position differs from the geocentric one by less than the parallax
    assert abs(d.declination - lunar.equatorial_coordinates(jd_tt)[1].value) < 1.0


def _reference_utc(h, m, s):
    # reference times come from the TT solver; the facade reports UTC
    return time_scales.tt_2_utc(from_date(Date.from_date_hms(2000, 3, 23, h, m, s)))


def test_moon_rise_set_transit():
    rise = lunaris.moon_rise(2451627.0, None, -11.6, 48.1, 1013.0, 10.0)
    assert rise.is_valid and rise.outcome == "time"
    assert (rise.year, rise.month, rise.day) == (2000, 3, 23)
    assert rise.jd == pytest.approx(_reference_utc(21, 12, 13), abs=1e-3)
    assert rise.jd == pytest.approx(from_date(Date.from_date_hms(2000, 3, 23, 21, 12, 13)), abs=1e-3)
    assert rise.hours == 21

    moon_set = lunaris.moon_set(2451627.0, None, -11.6, 48.1, 1013.0, 10.0)
    assert moon_set.is_valid
    assert moon_set.jd == pytest.approx(_reference_utc(7, 1, 3), abs=1e-3)

    transit = lunaris.moon_transit(2451627.0, None, -11.6, 48.1, 1013.0, 10.0)
    assert transit.is_valid and transit.converged
    assert transit.jd == pytest.approx(_reference_utc(1, 38, 1), abs=1e-3)


# New-moon days: the Moon rises in the morning and sets in the evening
@pytest.mark.parametrize("noon", [
    from_date(Date(2000, 4, 4.5)),
    from_date(Date(2000, 5, 4.5)),
    from_date(Date(2000, 6, 2.5)),
])
@pytest.mark.parametrize("longitude, latitude", [
    (-11.6, 48.1),        # Munich
    (0.1009, 51.5319),    # London
    (0.0, 0.0),
    (-18.4, -33.9),       # Cape Town
])
def test_set_follows_rise_on_the_same_day(noon, longitude, latitude):
    rise = lunaris.moon_rise(noon, None, longitude, latitude)
    moon_set = lunaris.moon_set(noon, None, longitude, latitude)
    assert rise.is_valid and moon_set.is_valid
    assert (rise.year, rise.month, rise.day) == (moon_set.year, moon_set.month, moon_set.day)
    assert moon_set.jd > rise.jd


def test_moon_never_rises():
    r = lunaris.moon_rise(from_date(Date(2000, 3, 25.5)), None, 0.1009, 51.5319)
    assert not r.is_valid
    assert r.outcome == "never_rises"
    assert r.jd is None


def test_sun_data():
    d = lunaris.sun_data(2448908.5, MUNICH)
    assert d.distance_au == pytest.approx(0.9976, abs=1e-3)
    assert d.longitude == pytest.approx(199.906, abs=1e-2)
    assert 0.0 <= d.azimuth < 360.0
    # midnight in Munich in October: the Sun is well below the horizon
    assert d.altitude < -30.0
