"""
houses.py
=========
Sidereal time, Ascendant (Lagna) and whole-sign houses.

Whole Sign is the classical Vedic system: house 1 is the entire sign that
holds the Ascendant and every following house is the next sign. House
boundaries are sign boundaries; only the Ascendant itself carries a degree.

Source: Meeus Ch. 12–14
"""

import math
from dataclasses import asdict, dataclass
from typing import Tuple

from .calendar import J2000, julian_centuries
from .zodiac import SIGNS, SIGNS_HINDI, sign_of

DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi


# ---------------------------------------------------------------------------
# GMST and Local Sidereal Time
# ---------------------------------------------------------------------------

def greenwich_mean_sidereal_time(jd: float) -> float:
    """
    Greenwich Mean Sidereal Time in degrees.
    Source: Meeus Ch. 12, Eq. 12.4
    """
    T = julian_centuries(jd)
    theta = (280.46061837
             + 360.98564736629 * (jd - J2000)
             + 0.000387933 * T * T
             - T * T * T / 38710000.0)
    return theta % 360.0


def local_sidereal_time(jd: float, longitude_deg: float) -> float:
    """
    Local Mean Sidereal Time (degrees).
    longitude_deg: geographic longitude, positive East
    """
    return (greenwich_mean_sidereal_time(jd) + longitude_deg) % 360.0


def mean_obliquity(jd: float) -> float:
    """Obliquity of the ecliptic, linear in T."""
    return 23.4393 - 0.013 * julian_centuries(jd)


# ---------------------------------------------------------------------------
# Ascendant (Lagna) calculation
# ---------------------------------------------------------------------------

def compute_ascendant(jd: float, latitude_deg: float, longitude_deg: float) -> float:
    """
    Tropical Ascendant in degrees, the ecliptic point on the eastern horizon.

        asc = atan2(cos θ, -(sin θ cos ε + tan φ sin ε))

    with θ the local sidereal time, ε the obliquity and φ the latitude.
    """
    lst = local_sidereal_time(jd, longitude_deg) * DEG_TO_RAD
    e = mean_obliquity(jd) * DEG_TO_RAD
    phi = latitude_deg * DEG_TO_RAD

    y = math.cos(lst)
    x = -math.sin(lst) * math.cos(e) - math.tan(phi) * math.sin(e)
    return (math.atan2(y, x) * RAD_TO_DEG) % 360.0


# ---------------------------------------------------------------------------
# Whole-sign houses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class House:
    house:      int      # 1–12
    sign_index: int
    sign:       str
    sign_local: str
    cusp:       float    # sidereal longitude of the sign start

    def to_dict(self) -> dict:
        return asdict(self)


def whole_sign_houses(ascendant_sidereal: float) -> Tuple[House, ...]:
    lagna_sign = sign_of(ascendant_sidereal)
    houses = []
    for i in range(12):
        sign_idx = (lagna_sign + i) % 12
        houses.append(House(
            house=i + 1,
            sign_index=sign_idx,
            sign=SIGNS[sign_idx],
            sign_local=SIGNS_HINDI[sign_idx],
            cusp=sign_idx * 30.0,
        ))
    return tuple(houses)


def planet_house_number(planet_sign: int, lagna_sign: int) -> int:
    """1-based whole-sign house of a planet: (planet_sign - lagna_sign) % 12 + 1."""
    return (planet_sign - lagna_sign + 12) % 12 + 1
