# tests/test_nutation.py

import pytest
from lunaris.reference import astro_args as aa
from lunaris.reference import nutation as nut
from lunaris.reference.angles import Degrees

# Meeus example 22.a: 1987 April 10, 0h TD
JD = 2446895.5


def test_time_variables():
    assert aa.T_centuries(JD) == pytest.approx(-0.127296372348, abs=1e-12)
    assert aa.tau_millennia(JD) == pytest.approx(-0.0127296372348, abs=1e-13)


def test_nutation_args():
    a = aa.nutation_args(aa.T_centuries(JD))
    assert a.D == pytest.approx(136.9623, abs=1e-4)
    assert a.M == pytest.approx(94.9792, abs=1e-4)
    assert a.Mp == pytest.approx(229.2784, abs=1e-4)
    assert a.F == pytest.approx(143.4079, abs=1e-4)
    assert a.Omega == pytest.approx(11.2531, abs=1e-4)
    assert a.as_tuple() == (a.D, a.M, a.Mp, a.F, a.Omega)


def test_nutation_in_longitude_and_obliquity():
    n = nut.nutation(JD)
    assert n.longitude.value == pytest.approx(-3.788, abs=1e-3)
    assert n.obliquity.value == pytest.approx(9.443, abs=1e-3)
    assert nut.nutation_in_longitude(JD) == n.longitude
    assert nut.nutation_in_obliquity(JD) == n.obliquity


def test_mean_obliquity():
    # 23°26'27.407"
    assert aa.mean_obliquity(JD).value == pytest.approx(Degrees.from_dms(23, 26, 27.407).value, abs=1e-6)


def test_mean_obliquity_at_j2000():
    assert aa.mean_obliquity(2451545.0).value == pytest.approx(Degrees.from_dms(23, 26, 21.448).value, abs=1e-12)


def test_true_obliquity():
    # 23°26'36.850"
    assert nut.true_obliquity(JD).value == pytest.approx(Degrees.from_dms(23, 26, 36.850).value, abs=1e-5)


def test_eccentricity():
    """Meeus 47.a, 1992 April 12."""
    assert aa.eccentricity(2448724.5) == pytest.approx(1.000194, abs=1e-6)


def test_table_shape():
    assert len(nut.NUTATION_TERMS) == 63
    assert all(len(row) == 9 for row in nut.NUTATION_TERMS)
