"""
ephemeris.py  —  Geocentric planetary positions
================================================
Low-precision analytic ephemeris for the nine grahas.

  Sun      — mean longitude + equation of centre (Meeus Ch. 25)
  Moon     — mean elements + the six largest longitude terms and three
             latitude terms of Meeus Ch. 47
  Rahu     — mean ascending node of the Moon (Meeus Ch. 22);
             Ketu is always Rahu + 180°
  Mercury … Saturn
           — J2000 Keplerian elements with secular rates (Standish),
             Kepler's equation solved by fixed-point iteration, then
             heliocentric → geocentric by subtracting Earth's vector

  For the five Keplerian planets:
    1. Compute the planet's heliocentric ecliptic longitude and radius
    2. Compute Earth's heliocentric ecliptic longitude and radius
    3. Convert both to rectangular (x, y) in the ecliptic plane
    4. Subtract Earth from planet → geocentric rectangular
    5. Convert back with atan2

Accuracy: roughly 0.5°–1° for the outer planets over 1900–2100 and a few
arcminutes for the Sun; the Moon can be off by up to ~0.5° because only
the principal terms are kept. That is enough for sign / nakshatra
placement but not for timing-critical work. Swapping in a fuller theory
changes every downstream result and must be treated as a versioned change.
"""

import math
from dataclasses import dataclass, asdict
from enum import Enum
from types import MappingProxyType
from typing import Dict, Optional, Tuple, Union

from .ayanamsa import tropical_to_sidereal
from .calendar import julian_centuries
from .zodiac import (
    PLANETS, PLANETS_HINDI, SIGNS, SIGNS_HINDI,
    nakshatra_of, sign_of, degree_in_sign, format_dms,
)

DEG = math.pi / 180.0
RAD = 180.0 / math.pi

KEPLER_ITERATIONS = 10


def _n(x):
    """Normalize angle to [0, 360)."""
    x = x % 360.0
    # tiny negatives wrap to exactly 360.0 in floating point
    return 0.0 if x >= 360.0 else x

def _r(x):
    """Degrees to radians."""
    return x * DEG

def _d(x):
    """Radians to degrees."""
    return x * RAD


# ── Orbital elements (J2000, rates per Julian century) ─────────

class KeplerianBody(str, Enum):
    MERCURY = "Mercury"
    VENUS   = "Venus"
    EARTH   = "Earth"
    MARS    = "Mars"
    JUPITER = "Jupiter"
    SATURN  = "Saturn"


@dataclass(frozen=True)
class OrbitalElements:
    L0: float       # mean longitude
    L1: float
    e0: float       # eccentricity
    e1: float
    I0: float       # inclination
    I1: float
    node0: float    # longitude of ascending node
    node1: float
    w0: float       # longitude of perihelion
    w1: float
    a: float        # semi-major axis (AU)


ORBITAL_ELEMENTS = MappingProxyType({
    KeplerianBody.MERCURY: OrbitalElements(
        L0=252.25084, L1=149474.07078, e0=0.20563069, e1=0.00002527,
        I0=7.00487, I1=-0.00594, node0=48.33167, node1=-0.12534,
        w0=77.45645, w1=1.55469, a=0.38709893),
    KeplerianBody.VENUS: OrbitalElements(
        L0=181.97973, L1=58519.21305, e0=0.00677323, e1=-0.00004938,
        I0=3.39471, I1=-0.00079, node0=76.68069, node1=-0.27769,
        w0=131.53298, w1=0.00806, a=0.72333199),
    KeplerianBody.EARTH: OrbitalElements(
        L0=100.46435, L1=35999.37206, e0=0.01671022, e1=-0.00003804,
        I0=0.00005, I1=-0.01294, node0=-11.26064, node1=-0.18175,
        w0=102.94719, w1=1.71946, a=1.00000011),
    KeplerianBody.MARS: OrbitalElements(
        L0=355.45332, L1=19141.69551, e0=0.09341233, e1=0.00011902,
        I0=1.85061, I1=-0.00681, node0=49.57854, node1=-0.29257,
        w0=336.04084, w1=1.84064, a=1.52366231),
    KeplerianBody.JUPITER: OrbitalElements(
        L0=34.40438, L1=3036.27462, e0=0.04839266, e1=-0.00012880,
        I0=1.30530, I1=-0.00189, node0=100.55615, node1=0.39081,
        w0=14.75385, w1=0.56199, a=5.20336301),
    KeplerianBody.SATURN: OrbitalElements(
        L0=49.94432, L1=1222.49362, e0=0.05415060, e1=-0.00036762,
        I0=2.48446, I1=0.00465, node0=113.71504, node1=-0.35571,
        w0=92.43194, w1=0.97135, a=9.53707032),
})

OUTER_BODIES = (KeplerianBody.MERCURY, KeplerianBody.VENUS, KeplerianBody.MARS,
                KeplerianBody.JUPITER, KeplerianBody.SATURN)


@dataclass(frozen=True)
class HeliocentricPosition:
    longitude: float    # degrees
    latitude:  float    # degrees
    distance:  float    # AU


def planet_heliocentric(body: Union[KeplerianBody, str], jd: float) -> HeliocentricPosition:
    """
    Heliocentric ecliptic position of a Keplerian body.
    Raises ValueError for anything outside Mercury … Saturn and Earth.
    """
    body = KeplerianBody(body)
    el = ORBITAL_ELEMENTS[body]
    T = julian_centuries(jd)

    L     = _n(el.L0 + el.L1*T)
    e     = el.e0 + el.e1*T
    incl  = el.I0 + el.I1*T
    node  = el.node0 + el.node1*T
    w     = el.w0 + el.w1*T

    M_r = _r(_n(L - w))
    E = M_r
    for _ in range(KEPLER_ITERATIONS):
        E = M_r + e*math.sin(E)

    v = _d(2*math.atan(math.sqrt((1 + e)/(1 - e)) * math.tan(E/2)))
    lon = _n(v + w)

    if body is KeplerianBody.EARTH:
        return HeliocentricPosition(lon, 0.0, el.a)

    r = el.a*(1 - e*math.cos(E))
    lat = incl*math.sin(_r(lon - node))
    return HeliocentricPosition(lon, lat, r)


def helio_to_geo(body_lon: float, body_dist: float,
                 earth_lon: float, earth_dist: float) -> float:
    """Geocentric ecliptic longitude from heliocentric planet and Earth (flat ecliptic)."""
    x = body_dist*math.cos(_r(body_lon)) - earth_dist*math.cos(_r(earth_lon))
    y = body_dist*math.sin(_r(body_lon)) - earth_dist*math.sin(_r(earth_lon))
    return _n(_d(math.atan2(y, x)))


def geocentric_longitude(body: Union[KeplerianBody, str], jd: float,
                         earth: Optional[HeliocentricPosition] = None) -> float:
    """`earth` may be passed in when it was already computed for `jd`."""
    earth = earth or planet_heliocentric(KeplerianBody.EARTH, jd)
    pos = planet_heliocentric(body, jd)
    return helio_to_geo(pos.longitude, pos.distance, earth.longitude, earth.distance)


# ── Sun (Meeus Ch. 25), already geocentric ────────────────────

def sun_longitude(jd: float) -> float:
    """True tropical longitude of the Sun."""
    T = julian_centuries(jd)
    L0  = _n(280.46646 + 36000.76983*T + 0.0003032*T*T)
    M   = _n(357.52911 + 35999.05029*T - 0.0001537*T*T)
    M_r = _r(M)

    C = ((1.914602 - 0.004817*T - 0.000014*T*T)*math.sin(M_r)
         + (0.019993 - 0.000101*T)*math.sin(2*M_r)
         + 0.000289*math.sin(3*M_r))
    return _n(L0 + C)


# ── Moon (Meeus Ch. 47, principal terms) ───────────────────────

@dataclass(frozen=True)
class MoonPosition:
    longitude: float
    latitude:  float


def moon_position(jd: float) -> MoonPosition:
    T = julian_centuries(jd)
    Lp = _n(218.3164477 + 481267.88123421*T - 0.0015786*T*T + T**3/538841.0 - T**4/65194000.0)
    D  = _n(297.8501921 + 445267.1114034*T  - 0.0018819*T*T + T**3/545868.0 - T**4/113065000.0)
    M  = _n(357.5291092 + 35999.0502909*T   - 0.0001536*T*T + T**3/24490000.0)
    Mp = _n(134.9633964 + 477198.8675055*T  + 0.0087414*T*T + T**3/69699.0 - T**4/14712000.0)
    F  = _n(93.2720950  + 483202.0175233*T  - 0.0036539*T*T - T**3/3526000.0 + T**4/863310000.0)

    sl = (6288774*math.sin(_r(Mp))
         +1274027*math.sin(_r(2*D - Mp))
         + 658314*math.sin(_r(2*D))
         + 213618*math.sin(_r(2*Mp))
         - 185116*math.sin(_r(M))
         - 114332*math.sin(_r(2*F)))

    sb = (5128122*math.sin(_r(F))
         + 280602*math.sin(_r(Mp + F))
         + 277693*math.sin(_r(Mp - F)))

    return MoonPosition(_n(Lp + sl/1_000_000.0), sb/1_000_000.0)


# ── Rahu / Ketu (mean node) ─────────────────────────────────────

def rahu_longitude(jd: float) -> float:
    """Mean ascending node of the Moon. Meeus Ch. 22."""
    T = julian_centuries(jd)
    return _n(125.04452 - 1934.136261*T + 0.0020708*T*T + T*T*T/450000.0)


def ketu_longitude(jd: float) -> float:
    return _n(rahu_longitude(jd) + 180.0)


# ── Retrograde detection ────────────────────────────────────────

def motion_is_retrograde(today: float, yesterday: float) -> bool:
    """
    Apparent daily motion test. A jump beyond ±300° is a pass through 0°:
    downward jumps are forward motion, upward jumps are backward.
    """
    movement = today - yesterday
    if movement < -300:
        return False
    if movement > 300:
        return True
    return movement < 0


def keplerian_motion(body: Union[KeplerianBody, str], jd: float,
                     earth_now: Optional[HeliocentricPosition] = None,
                     earth_prev: Optional[HeliocentricPosition] = None) -> Tuple[float, bool]:
    """Geocentric longitude at `jd` and whether it moved backward over the past day."""
    now = geocentric_longitude(body, jd, earth_now)
    prev = geocentric_longitude(body, jd - 1.0, earth_prev)
    return now, motion_is_retrograde(now, prev)


def is_retrograde(planet: str, jd: float) -> bool:
    """
    Sun and Moon are never retrograde, Rahu and Ketu always are.
    The Keplerian planets are compared against their position one day earlier.
    """
    if planet in ("Rahu", "Ketu"):
        return True
    if planet in ("Sun", "Moon"):
        return False
    return keplerian_motion(planet, jd)[1]


# ── Main API ────────────────────────────────────────────────────

@dataclass(frozen=True)
class PlanetPosition:
    name:               str
    name_local:         str
    tropical_longitude: float
    sidereal_longitude: float
    sign_index:         int
    sign:               str
    sign_local:         str
    degree_in_sign:     float
    nakshatra_index:    int
    nakshatra:          str
    nakshatra_pada:     int
    nakshatra_lord:     str
    is_retrograde:      bool
    house:              Optional[int] = None

    def degree_formatted(self) -> str:
        return format_dms(self.degree_in_sign)

    def to_dict(self) -> dict:
        return asdict(self)


def _position(name: str, tropical: float, sidereal: float, retro: bool) -> PlanetPosition:
    sign_idx = sign_of(sidereal)
    nak = nakshatra_of(sidereal)
    return PlanetPosition(
        name=name,
        name_local=PLANETS_HINDI[name],
        tropical_longitude=tropical,
        sidereal_longitude=sidereal,
        sign_index=sign_idx,
        sign=SIGNS[sign_idx],
        sign_local=SIGNS_HINDI[sign_idx],
        degree_in_sign=degree_in_sign(sidereal),
        nakshatra_index=nak.index,
        nakshatra=nak.name,
        nakshatra_pada=nak.pada,
        nakshatra_lord=nak.lord,
        is_retrograde=retro,
    )


def compute_all_positions(jd: float, ayanamsa: float) -> Dict[str, PlanetPosition]:
    """
    Positions of the nine grahas in PLANETS order, houses left unset.
    `ayanamsa` must be the value for the same `jd`.
    """
    earth_now  = planet_heliocentric(KeplerianBody.EARTH, jd)
    earth_prev = planet_heliocentric(KeplerianBody.EARTH, jd - 1.0)

    tropical: Dict[str, float] = {
        "Sun":  sun_longitude(jd),
        "Moon": moon_position(jd).longitude,
    }
    retro: Dict[str, bool] = {"Sun": False, "Moon": False}

    for body in OUTER_BODIES:
        tropical[body.value], retro[body.value] = keplerian_motion(
            body, jd, earth_now, earth_prev)

    rahu_trop = rahu_longitude(jd)
    rahu_sid  = tropical_to_sidereal(rahu_trop, ayanamsa)

    positions = {}
    for planet in PLANETS:
        if planet == "Rahu":
            positions[planet] = _position(planet, rahu_trop, rahu_sid, True)
        elif planet == "Ketu":
            # Ketu is defined from Rahu, never computed on its own
            positions[planet] = _position(planet, _n(rahu_trop + 180.0),
                                          _n(rahu_sid + 180.0), True)
        else:
            trop = tropical[planet]
            positions[planet] = _position(planet, trop,
                                          tropical_to_sidereal(trop, ayanamsa),
                                          retro[planet])
    return positions
