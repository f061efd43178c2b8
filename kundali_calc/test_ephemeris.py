"""Analytic ephemeris: Keplerian bodies, Sun, Moon, nodes and retrograde motion."""

import pytest

from kundali_calc.core.calendar import J2000, gregorian_to_jd
from kundali_calc.core.ayanamsa import lahiri_ayanamsa
from kundali_calc.core.ephemeris import (
    ORBITAL_ELEMENTS, OUTER_BODIES, KeplerianBody, compute_all_positions,
    geocentric_longitude, helio_to_geo, is_retrograde, keplerian_motion,
    ketu_longitude, moon_position, motion_is_retrograde,
    planet_heliocentric, rahu_longitude, sun_longitude,
)
from kundali_calc.core.zodiac import PLANETS

PLANET_TOLERANCE_DEG = 1.0      # six-term Moon and linear elements vs reference


def test_sun_at_j2000():
    # apparent longitude 280.37° (Meeus)
    assert sun_longitude(J2000) == pytest.approx(280.37, abs=0.05)


def test_moon_at_j2000():
    assert moon_position(J2000).longitude == pytest.approx(223.32, abs=PLANET_TOLERANCE_DEG)
    assert abs(moon_position(J2000).latitude) < 5.7


def test_mean_node_at_j2000():
    assert rahu_longitude(J2000) == pytest.approx(125.04452)
    assert ketu_longitude(J2000) == pytest.approx(305.04452)


@pytest.mark.parametrize("body", list(KeplerianBody))
def test_heliocentric_positions_in_range(body):
    pos = planet_heliocentric(body, J2000)
    assert 0.0 <= pos.longitude < 360.0
    assert pos.distance > 0.0


def test_earth_distance_is_semi_major_axis():
    pos = planet_heliocentric(KeplerianBody.EARTH, gregorian_to_jd(2020, 7, 4))
    assert pos.distance == ORBITAL_ELEMENTS[KeplerianBody.EARTH].a
    assert pos.latitude == 0.0


def test_body_name_strings_accepted():
    assert planet_heliocentric("Mars", J2000) == planet_heliocentric(KeplerianBody.MARS, J2000)


@pytest.mark.parametrize("name", ["Pluto", "Sun", "Moon", "Rahu", ""])
def test_unknown_body_rejected(name):
    with pytest.raises(ValueError):
        planet_heliocentric(name, J2000)


def test_helio_to_geo_opposition():
    # planet directly behind Earth, seen from Earth, lies along Earth's longitude
    assert helio_to_geo(90.0, 5.2, 90.0, 1.0) == pytest.approx(90.0)
    # planet on the far side of the Sun
    assert helio_to_geo(270.0, 5.2, 90.0, 1.0) == pytest.approx(270.0)


def test_helio_to_geo_never_returns_full_circle():
    # -1e-15 % 360 rounds to 360.0 in floating point
    lon = helio_to_geo(-1e-15, 2.0, 0.0, 1.0)
    assert 0.0 <= lon < 360.0


# ── Retrograde ─────────────────────────────────────────────────

@pytest.mark.parametrize("today,yesterday,expected", [
    (10.5, 10.0, False),
    (10.0, 10.5, True),
    (0.5, 359.5, False),     # forward through 0°
    (359.5, 0.5, True),      # backward through 0°
    (200.0, 200.0, False),
])
def test_motion_is_retrograde(today, yesterday, expected):
    assert motion_is_retrograde(today, yesterday) is expected


def test_nodes_always_retrograde_luminaries_never():
    jd = gregorian_to_jd(2023, 5, 1)
    assert is_retrograde("Rahu", jd) and is_retrograde("Ketu", jd)
    assert not is_retrograde("Sun", jd) and not is_retrograde("Moon", jd)


def test_mercury_retrograde_spring_2023():
    # station retrograde 21 April, direct 14 May
    assert is_retrograde("Mercury", gregorian_to_jd(2023, 5, 1))
    assert not is_retrograde("Mercury", gregorian_to_jd(2023, 6, 15))


def test_keplerian_motion_matches_single_body_helpers():
    jd = gregorian_to_jd(2023, 5, 1)
    lon, retro = keplerian_motion("Mercury", jd)
    assert lon == pytest.approx(geocentric_longitude("Mercury", jd))
    assert retro is True


# ── All positions ──────────────────────────────────────────────

def test_compute_all_positions():
    jd = gregorian_to_jd(1990, 6, 15, 5.0)
    positions = compute_all_positions(jd, lahiri_ayanamsa(jd))
    assert tuple(positions) == PLANETS
    rahu, ketu = positions["Rahu"], positions["Ketu"]
    assert ketu.sidereal_longitude == pytest.approx((rahu.sidereal_longitude + 180.0) % 360.0)
    assert all(p.house is None for p in positions.values())
    assert positions["Sun"].name_local == "सूर्य"
    assert positions["Sun"].degree_formatted().count("°") == 1


@pytest.mark.parametrize("when", [(1990, 6, 15, 5.0), (2023, 5, 1, 0.0), (2024, 11, 20, 12.0)])
def test_chart_positions_agree_with_single_body_helpers(when):
    jd = gregorian_to_jd(*when)
    positions = compute_all_positions(jd, lahiri_ayanamsa(jd))
    for body in OUTER_BODIES:
        pos = positions[body.value]
        assert pos.tropical_longitude == pytest.approx(geocentric_longitude(body, jd))
        assert pos.is_retrograde is is_retrograde(body.value, jd)
