"""Julian Day, Julian centuries and the Lahiri ayanamsa."""

import pytest
from hypothesis import given, strategies as st

from kundali_calc.core.ayanamsa import LAHIRI_J2000, lahiri_ayanamsa, tropical_to_sidereal
from kundali_calc.core.calendar import J2000, gregorian_to_jd, julian_centuries


JD_CASES = [
    (2000, 1, 1, 12.0, 2451545.0),    # J2000.0 definition
    (2000, 1, 1, 0.0,  2451544.5),
    (1900, 1, 1, 0.0,  2415020.5),
    (1987, 1, 27, 0.0, 2446822.5),    # Meeus example 7.b
    (1988, 6, 19, 12.0, 2447332.0),   # Meeus example 7.c
    (1600, 1, 1, 0.0,  2305447.5),
]


@pytest.mark.parametrize("year,month,day,hour,expected", JD_CASES)
def test_gregorian_to_jd(year, month, day, hour, expected):
    assert gregorian_to_jd(year, month, day, hour) == expected


def test_hour_overflow_rolls_into_next_day():
    assert gregorian_to_jd(2010, 12, 31, 29.0) == pytest.approx(gregorian_to_jd(2011, 1, 1, 5.0))


def test_negative_hour_rolls_into_previous_day():
    assert gregorian_to_jd(2000, 1, 1, -5.5) == pytest.approx(gregorian_to_jd(1999, 12, 31, 18.5))


def test_julian_centuries():
    assert julian_centuries(J2000) == 0.0
    assert julian_centuries(J2000 + 36525.0) == 1.0


# ── Ayanamsa ───────────────────────────────────────────────────

def test_lahiri_at_j2000():
    assert lahiri_ayanamsa(J2000) == LAHIRI_J2000


@pytest.mark.parametrize("year,expected", [(1900, 22.4536), (2023, 24.1712)])
def test_lahiri_drifts_linearly(year, expected):
    jd = gregorian_to_jd(year, 1, 1, 0.0 if year == 1900 else 12.0)
    assert lahiri_ayanamsa(jd) == pytest.approx(expected, abs=1e-3)


def test_sidereal_wraps_below_zero():
    assert tropical_to_sidereal(10.0, 23.85) == pytest.approx(346.15)


def test_sidereal_never_reaches_360():
    assert tropical_to_sidereal(23.85 - 1e-15, 23.85) < 360.0


@given(st.floats(0.0, 360.0, exclude_max=True), st.floats(20.0, 26.0))
def test_sidereal_conversion(longitude, ayanamsa):
    sid = tropical_to_sidereal(longitude, ayanamsa)
    assert 0.0 <= sid < 360.0
    assert sid == pytest.approx((longitude - ayanamsa) % 360.0, abs=1e-9) or sid == 0.0
