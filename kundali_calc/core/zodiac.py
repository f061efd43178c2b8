"""
zodiac.py
=========
Sign and nakshatra classification of sidereal longitudes, plus the fixed
name tables shared by the rest of the engine.

  Sign      — 12 × 30°, Aries = 0
  Nakshatra — 27 × 13°20', Ashwini = 0, each split into 4 padas of 3°20'

Nakshatra lords cycle through the Vimshottari order
Ketu → Venus → Sun → Moon → Mars → Rahu → Jupiter → Saturn → Mercury.
"""

import math
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Tuple

SIGNS = ("Aries", "Taurus", "Gemini", "Cancer", "Leo", "Virgo",
         "Libra", "Scorpio", "Sagittarius", "Capricorn", "Aquarius", "Pisces")

SIGNS_HINDI = ("मेष", "वृषभ", "मिथुन", "कर्क", "सिंह", "कन्या",
               "तुला", "वृश्चिक", "धनु", "मकर", "कुंभ", "मीन")

PLANETS = ("Sun", "Moon", "Mercury", "Venus", "Mars", "Jupiter", "Saturn", "Rahu", "Ketu")

PLANETS_HINDI = MappingProxyType({
    "Sun": "सूर्य", "Moon": "चंद्र", "Mercury": "बुध", "Venus": "शुक्र",
    "Mars": "मंगल", "Jupiter": "गुरु", "Saturn": "शनि", "Rahu": "राहु", "Ketu": "केतु",
})

# Vimshottari order; nakshatra i is ruled by DASHA_ORDER[i % 9]
DASHA_ORDER = ("Ketu", "Venus", "Sun", "Moon", "Mars",
               "Rahu", "Jupiter", "Saturn", "Mercury")

# (name, hindi)
NAKSHATRAS: Tuple[Tuple[str, str], ...] = (
    ("Ashwini", "अश्विनी"), ("Bharani", "भरणी"), ("Krittika", "कृत्तिका"),
    ("Rohini", "रोहिणी"), ("Mrigashira", "मृगशिरा"), ("Ardra", "आर्द्रा"),
    ("Punarvasu", "पुनर्वसु"), ("Pushya", "पुष्य"), ("Ashlesha", "आश्लेषा"),
    ("Magha", "मघा"), ("Purva Phalguni", "पूर्वा फाल्गुनी"), ("Uttara Phalguni", "उत्तरा फाल्गुनी"),
    ("Hasta", "हस्त"), ("Chitra", "चित्रा"), ("Swati", "स्वाति"),
    ("Vishakha", "विशाखा"), ("Anuradha", "अनुराधा"), ("Jyeshtha", "ज्येष्ठा"),
    ("Mula", "मूल"), ("Purva Ashadha", "पूर्वाषाढ़ा"), ("Uttara Ashadha", "उत्तराषाढ़ा"),
    ("Shravana", "श्रवण"), ("Dhanishtha", "धनिष्ठा"), ("Shatabhisha", "शतभिषा"),
    ("Purva Bhadrapada", "पूर्वभाद्रपद"), ("Uttara Bhadrapada", "उत्तरभाद्रपद"), ("Revati", "रेवती"),
)

NAKSHATRA_SPAN = 360.0 / 27.0
PADA_SPAN      = NAKSHATRA_SPAN / 4.0

# Longitudes this close below a sign, nakshatra or pada boundary are read as
# the boundary itself (0.36 arcsec, well under the ephemeris precision).
BOUNDARY_TOLERANCE = 1e-4


@dataclass(frozen=True)
class NakshatraInfo:
    index:      int      # 0–26
    name:       str
    name_local: str
    lord:       str
    pada:       int      # 1–4
    fraction:   float    # part of the nakshatra already traversed, [0, 1)

    @property
    def start(self) -> float:
        return self.index * NAKSHATRA_SPAN

    def to_dict(self) -> dict:
        return asdict(self)


def snapped_units(longitude: float, span: float) -> float:
    """
    Longitude measured in units of `span` degrees from 0° Aries, pulled up to
    the next whole unit when it sits within BOUNDARY_TOLERANCE below it.
    """
    q = (longitude % 360.0) / span
    nearest = round(q)
    if 0 < nearest - q < BOUNDARY_TOLERANCE / span:
        q = float(nearest)
    return q


def _pada_count(longitude: float) -> int:
    # signs, nakshatras and navamsas all start on a pada boundary
    return int(math.floor(snapped_units(longitude, PADA_SPAN)))


def sign_of(longitude: float) -> int:
    """Sign index 0–11 of a sidereal longitude."""
    return _pada_count(longitude) // 9 % 12


def degree_in_sign(longitude: float) -> float:
    return max(0.0, longitude % 360.0 - (_pada_count(longitude) // 9) * 30.0)


def nakshatra_of(longitude: float) -> NakshatraInfo:
    q = snapped_units(longitude, PADA_SPAN)
    index, quarter = divmod(int(math.floor(q)) % 108, 4)
    fraction = (quarter + q - math.floor(q)) / 4.0
    pada = quarter + 1
    name, name_local = NAKSHATRAS[index]
    return NakshatraInfo(
        index=index,
        name=name,
        name_local=name_local,
        lord=DASHA_ORDER[index % 9],
        pada=pada,
        fraction=fraction,
    )


def format_dms(degrees: float) -> str:
    """Format decimal degrees as D°M'S\" string."""
    d = int(degrees)
    m_float = (degrees - d) * 60
    m = int(m_float)
    s = round((m_float - m) * 60, 1)
    return f"{d}°{m}'{s}\""
