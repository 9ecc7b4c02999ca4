# tests/test_lunar.py

import pytest
from lunaris.reference import lunar, solar
from lunaris.reference.angles import Degrees

# Meeus example 47.a: 1992 April 12, 0h TD
JD = 2448724.5


def test_mean_elements():
    el = lunar.mean_elements(JD)
    assert el.Lp == pytest.approx(134.290182, abs=1e-6)
    assert el.D == pytest.approx(113.842304, abs=1e-6)
    assert el.M == pytest.approx(97.643514, abs=1e-6)
    assert el.Mp == pytest.approx(5.150833, abs=1e-6)
    assert el.F == pytest.approx(219.889721, abs=1e-6)


def test_periodic_sums():
    sl, sb, sr = lunar._periodic_sums(JD)
    assert sl == pytest.approx(-1127527, abs=2)
    assert sb == pytest.approx(-3229126, abs=2)
    assert sr == pytest.approx(-16590875, abs=2)


def test_geocentric_position():
    assert lunar.geocentric_longitude(JD).value == pytest.approx(133.167265, abs=1e-5)
    assert lunar.geocentric_latitude(JD).value == pytest.approx(-3.229126, abs=1e-6)
    assert lunar.distance_from_earth(JD) == pytest.approx(368409.7, abs=0.1)


def test_equatorial_coordinates():
    ra, dec = lunar.equatorial_coordinates(JD)
    assert ra.value == pytest.approx(134.688470, abs=1e-4)
    assert dec.value == pytest.approx(13.768368, abs=1e-4)


def test_moon_position_bundle():
    pos = lunar.moon_position(JD)
    assert pos.longitude == lunar.geocentric_longitude(JD)
    assert pos.latitude == lunar.geocentric_latitude(JD)
    assert pos.distance_km == lunar.distance_from_earth(JD)
    assert (pos.right_ascension, pos.declination) == lunar.equatorial_coordinates(JD)


def test_parallax():
    pi = lunar.horizontal_equatorial_parallax(JD).to_degrees().value
    assert pi == pytest.approx(0.99194, abs=1e-4)
    # at the horizon the parallax in altitude is the full horizontal parallax
    assert lunar.horizontal_parallax(JD, Degrees(0.0)).value == pytest.approx(pi, abs=1e-9)
    assert lunar.horizontal_parallax(JD, Degrees(60.0)).value == pytest.approx(pi / 2.0, abs=1e-4)


def test_semidiameter():
    s = lunar.geocentric_semidiameter(JD).value
    assert s == pytest.approx(0.27028, abs=1e-4)
    # seen from under the Moon it looks bigger than from the centre of the Earth
    lat = Degrees(48.0)
    overhead = lunar.topocentric_semidiameter(JD, Degrees(0.0), lat, lat, 0.0).value
    on_horizon = lunar.topocentric_semidiameter(JD, Degrees(90.0), Degrees(0.0), lat, 0.0).value
    assert overhead > s
    assert on_horizon == pytest.approx(s, abs=1e-4)


def test_phase_angle_and_illumination():
    """Meeus 48.a: i = 69.0756°, k = 0.6786."""
    assert lunar.phase_angle(JD).value == pytest.approx(69.0756, abs=5e-5)
    assert lunar.fraction_illuminated(JD) == pytest.approx(0.67857, abs=1e-5)


def test_phase_angle_360_and_age():
    angle = lunar.phase_angle_360(JD).value
    expected = (lunar.geocentric_longitude(JD).value - solar.apparent_longitude(JD).value) % 360.0
    assert angle == pytest.approx(expected, abs=1e-9)
    assert lunar.phase_age(JD) == pytest.approx(9.091, abs=0.05)
    assert lunar.phase_description(JD) == "First Quarter"


def test_phase_2015():
    jd = 2457023.5  # 2015-01-01 0h
    assert lunar.phase_angle_360(jd).value == pytest.approx(130.38, abs=0.1)
    assert lunar.phase_description(jd) == "Waxing Gibbous"


@pytest.mark.parametrize("angle, name", [
    (0.0, "New Moon"),
    (22.4, "New Moon"),
    (22.5, "Waxing Crescent"),
    (90.0, "First Quarter"),
    (135.0, "Waxing Gibbous"),
    (180.0, "Full Moon"),
    (225.0, "Waning Gibbous"),
    (270.0, "Last Quarter"),
    (292.5, "Waning Crescent"),
    (350.0, "Waning Crescent"),
])
def test_describe_phase(angle, name):
    assert lunar.describe_phase(angle) == name


def test_synodic_rate():
    assert lunar.MOON_DAY == pytest.approx(12.190749, abs=1e-6)
