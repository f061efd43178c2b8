"""
divisional_charts.py
====================
Divisional (Varga) chart calculations for Vedic astrology.

A divisional chart is computed by dividing each zodiac sign into N equal parts,
then mapping each planet to the corresponding divisional sign.

Charts implemented:
  D1  — Rasi (natal chart, identity)
  D9  — Navamsa (spouse, dharma — most important divisional)

Source: Parashara BPHS; Sanjay Rath (2002) "Crux of Vedic Astrology"
"""

import math
from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

from .zodiac import PADA_SPAN, SIGNS, degree_in_sign, sign_of, snapped_units

# one navamsa (3°20') is one nakshatra pada
NAVAMSA_SPAN = PADA_SPAN

# Navamsa counting starts by element of the natal sign:
#   Fire  (Aries, Leo, Sagittarius)       → Aries
#   Earth (Taurus, Virgo, Capricorn)      → Capricorn
#   Air   (Gemini, Libra, Aquarius)       → Libra
#   Water (Cancer, Scorpio, Pisces)       → Cancer
NAVAMSA_START_BY_ELEMENT = (0, 9, 6, 3)

CHART_NAMES = {"D1": "Rashi (D1)", "D9": "Navamsa (D9)"}


@dataclass(frozen=True)
class DivisionalPosition:
    planet:         str
    sign_index:     int      # 0–11
    sign_name:      str
    degree_in_sign: float


@dataclass(frozen=True)
class DivisionalChart:
    division:  str           # e.g. "D9"
    name:      str
    positions: Tuple[DivisionalPosition, ...]

    def to_dict(self) -> dict:
        return {
            "division": self.division,
            "name": self.name,
            "planets": [
                {"planet": p.planet, "sign": p.sign_index,
                 "sign_name": p.sign_name, "degree": p.degree_in_sign}
                for p in self.positions
            ],
        }


def rasi(sidereal_longitude: float) -> Tuple[int, float]:
    """D1 Rasi — the natal sign and degree restated."""
    return sign_of(sidereal_longitude), degree_in_sign(sidereal_longitude)


def navamsa(sidereal_longitude: float) -> Tuple[int, float]:
    """
    D9 Navamsa — each sign split into 9 × 3°20' parts, counted from the
    element's starting sign. Degree is scaled back up to a 30° sign.
    """
    q = snapped_units(sidereal_longitude, NAVAMSA_SPAN)
    sign_idx, part = divmod(int(math.floor(q)) % 108, 9)
    nav_sign = (NAVAMSA_START_BY_ELEMENT[sign_idx % 4] + part) % 12
    return nav_sign, (q - math.floor(q)) * 30.0


DIVISIONAL_FUNCTIONS = {
    "D1": rasi,
    "D9": navamsa,
}


def compute_divisional_chart(sidereal_longitudes: Mapping[str, float],
                             division: str) -> DivisionalChart:
    """
    Compute a divisional chart for all planets.

    Args:
        sidereal_longitudes: {planet_name: sidereal longitude}, in output order
        division: "D1" or "D9"
    """
    if division not in DIVISIONAL_FUNCTIONS:
        raise ValueError(f"Unknown divisional chart: {division}. "
                         f"Supported: {list(DIVISIONAL_FUNCTIONS.keys())}")

    fn = DIVISIONAL_FUNCTIONS[division]
    positions = []
    for name, lon in sidereal_longitudes.items():
        sign_idx, deg = fn(lon)
        positions.append(DivisionalPosition(name, sign_idx, SIGNS[sign_idx], deg))
    return DivisionalChart(division, CHART_NAMES[division], tuple(positions))


def compute_all_divisional_charts(sidereal_longitudes: Mapping[str, float]) -> Dict[str, DivisionalChart]:
    return {div: compute_divisional_chart(sidereal_longitudes, div)
            for div in DIVISIONAL_FUNCTIONS}
