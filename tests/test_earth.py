# tests/test_earth.py

import pytest
from lunaris.reference import earth
from lunaris.reference.angles import Degrees


def test_mean_sidereal_time_at_0h():
    """Meeus 12.a: 1987 April 10, 0h UT -> 13h10m46.3668s."""
    theta0 = earth.mean_sidereal_time(2446895.5)
    assert theta0.value == pytest.approx(Degrees.from_hms(13, 10, 46.3668).value, abs=1e-6)


def test_mean_sidereal_time_any_instant():
    """Meeus 12.b: 1987 April 10, 19h21m00s UT."""
    assert earth.mean_sidereal_time(2446896.30625).value == pytest.approx(128.7378734, abs=1e-6)


def test_apparent_sidereal_time():
    """Meeus 12.a: apparent sidereal time 13h10m46.1351s."""
    theta = earth.apparent_sidereal_time(2446895.5)
    assert theta.value == pytest.approx(Degrees.from_hms(13, 10, 46.1351).value, abs=1e-5)
    h, m, s = theta.to_hms()
    assert (h, m) == (13, 10)
    assert s == pytest.approx(46.1351, abs=2e-3)


def test_local_sidereal_time_positive_west():
    lst = earth.local_sidereal_time(Degrees(10.0), Degrees(20.0))
    assert lst.value == pytest.approx(350.0)
    lst = earth.local_sidereal_time(Degrees(10.0), Degrees(-20.0))
    assert lst.value == pytest.approx(30.0)


def test_hour_angle():
    """Meeus 13.b style: Venus seen from Washington (L = 77°03'56" W)."""
    lst = earth.local_sidereal_time(Degrees(128.7368875), Degrees.from_dms(77, 3, 56))
    H = earth.hour_angle(lst, Degrees.from_hms(23, 9, 16.641))
    assert H.value == pytest.approx(64.3519944, abs=1e-6)


def test_hour_angle_range():
    for lst, ra in ((0.0, 359.0), (359.0, 0.0), (180.0, 180.0)):
        H = earth.hour_angle(Degrees(lst), Degrees(ra)).value
        assert 0.0 <= H < 360.0
