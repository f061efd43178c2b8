"""
panchang.py
===========
Panchang (Hindu almanac) calculations.

Five limbs of Panchang:
  1. Vara      — Day of week
  2. Tithi     — Lunar day (1–30), 12° of Moon–Sun elongation each
  3. Nakshatra — Lunar mansion of the Moon (1–27)
  4. Yoga      — (Sun + Moon) in 13°20' steps (1–27)
  5. Karana    — Half tithi, 6° each (60 per lunar month)

Plus: Sunrise, Sunset, Rahu Kala, Moon phase

Source: Drik Panchang conventions; Meeus Ch. 15 (sunrise/sunset)
"""

import math
from dataclasses import asdict, dataclass
from typing import Optional

from .ephemeris import sun_longitude
from .houses import mean_obliquity
from .zodiac import NakshatraInfo, nakshatra_of

DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi

# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------

TITHIS = (
    "Pratipada", "Dwitiya", "Tritiya", "Chaturthi", "Panchami",
    "Shashthi", "Saptami", "Ashtami", "Navami", "Dashami",
    "Ekadashi", "Dwadashi", "Trayodashi", "Chaturdashi",
)
SHUKLA_LAST  = "Purnima"
KRISHNA_LAST = "Amavasya"

YOGAS = (
    "Vishkumbha", "Priti", "Ayushman", "Saubhagya", "Shobhana",
    "Atiganda", "Sukarma", "Dhriti", "Shula", "Ganda",
    "Vriddhi", "Dhruva", "Vyaghata", "Harshana", "Vajra",
    "Siddhi", "Vyatipata", "Variyan", "Parigha", "Shiva",
    "Siddha", "Sadhya", "Shubha", "Shukla", "Brahma",
    "Indra", "Vaidhriti",
)

# 7 movable karanas followed by the 4 fixed ones
KARANAS = (
    "Bava", "Balava", "Kaulava", "Taitila", "Gara", "Vanija", "Vishti",
    "Shakuni", "Chatushpada", "Naga", "Kimstughna",
)
MOVABLE_KARANAS = KARANAS[:7]

VARA = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

# Rahu Kala slot (1-based, out of 8 equal parts of daylight) by weekday
RAHU_KALA_SLOT = (8, 2, 7, 5, 6, 4, 3)

SUNRISE_ALTITUDE = -0.833   # refraction + solar semi-diameter
NO_SUNRISE = "No sunrise"
NO_SUNSET  = "No sunset"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Tithi:
    index:   int     # 0–29
    name:    str     # e.g. "Shukla Pratipada"
    paksha:  str     # Shukla / Krishna
    elapsed: float   # fraction of the tithi already passed

    @property
    def number(self) -> int:
        return self.index + 1


@dataclass(frozen=True)
class Yoga:
    index: int
    name:  str


@dataclass(frozen=True)
class Karana:
    index: int       # 0–59
    name:  str


@dataclass(frozen=True)
class SunTimes:
    """Sunrise/sunset in decimal hours; both None when the Sun does not cross the horizon."""
    sunrise: Optional[float]
    sunset:  Optional[float]

    @property
    def polar(self) -> bool:
        return self.sunrise is None

    def sunrise_formatted(self) -> str:
        return NO_SUNRISE if self.sunrise is None else format_hours(self.sunrise)

    def sunset_formatted(self) -> str:
        return NO_SUNSET if self.sunset is None else format_hours(self.sunset)


@dataclass(frozen=True)
class RahuKala:
    start: float
    end:   float


@dataclass(frozen=True)
class Panchang:
    vara:       str
    tithi:      Tithi
    nakshatra:  NakshatraInfo
    yoga:       Yoga
    karana:     Karana
    sun_times:  SunTimes
    rahu_kala:  Optional[RahuKala]
    moon_phase: str

    def to_dict(self) -> dict:
        return {
            "vara": self.vara,
            "tithi": asdict(self.tithi),
            "nakshatra": self.nakshatra.to_dict(),
            "yoga": asdict(self.yoga),
            "karana": asdict(self.karana),
            "sunrise": self.sun_times.sunrise_formatted(),
            "sunset": self.sun_times.sunset_formatted(),
            "rahu_kala": None if self.rahu_kala is None else {
                "start": format_hours(self.rahu_kala.start),
                "end": format_hours(self.rahu_kala.end),
            },
            "moon_phase": self.moon_phase,
        }


def format_hours(hours: float) -> str:
    total_min = int(math.floor((hours % 24.0) * 60 + 1e-9))
    h, m = divmod(total_min, 60)
    return f"{h % 24:02d}:{m:02d}"


# ---------------------------------------------------------------------------
# Core Panchang computation
# ---------------------------------------------------------------------------

def _elongation(sun_sid: float, moon_sid: float) -> float:
    return (moon_sid - sun_sid) % 360.0


def compute_tithi(sun_sid: float, moon_sid: float) -> Tithi:
    """
    Tithi = (Moon - Sun) / 12°. The first 15 belong to the waxing
    (Shukla) paksha, the rest to the waning (Krishna) paksha.
    """
    diff = _elongation(sun_sid, moon_sid)
    idx = min(int(diff / 12.0), 29)
    paksha = "Shukla" if idx < 15 else "Krishna"
    slot = idx % 15
    if slot == 14:
        base = SHUKLA_LAST if idx < 15 else KRISHNA_LAST
    else:
        base = TITHIS[slot]
    return Tithi(index=idx, name=f"{paksha} {base}", paksha=paksha,
                 elapsed=(diff % 12.0) / 12.0)


def compute_yoga(sun_sid: float, moon_sid: float) -> Yoga:
    combined = (sun_sid + moon_sid) % 360.0
    idx = int(combined / (360.0 / 27.0)) % 27
    return Yoga(index=idx, name=YOGAS[idx])


def compute_karana(sun_sid: float, moon_sid: float) -> Karana:
    """
    Karana = half-tithi, 60 per lunar month.
    The month opens with Kimstughna (0), then the seven movable karanas
    repeat eight times (1–56), and Shakuni, Chatushpada, Naga close it (57–59).
    """
    idx = int(_elongation(sun_sid, moon_sid) / 6.0) % 60
    if idx == 0:
        name = KARANAS[10]
    elif idx >= 57:
        name = KARANAS[7 + idx - 57]
    else:
        name = MOVABLE_KARANAS[(idx - 1) % 7]
    return Karana(index=idx, name=name)


def moon_phase(sun_sid: float, moon_sid: float) -> str:
    return "Waxing" if _elongation(sun_sid, moon_sid) <= 180.0 else "Waning"


def weekday(jd: float, tz_offset: float = 0.0) -> int:
    """0 = Sunday … 6 = Saturday, for the civil date at `tz_offset`."""
    return int(math.floor(jd + 1.5 + tz_offset / 24.0)) % 7


# ---------------------------------------------------------------------------
# Sunrise / Sunset
# ---------------------------------------------------------------------------

def compute_sunrise_sunset(jd: float, latitude: float, longitude: float,
                           tz_offset: float = 0.0) -> SunTimes:
    """
    Sunrise and sunset as decimal hours at `tz_offset` (0 gives UTC).
    The Sun's declination comes from its longitude and the mean obliquity;
    local noon is taken as 12h − longitude/15.
    """
    eps = mean_obliquity(jd) * DEG_TO_RAD
    sun_lon = sun_longitude(jd) * DEG_TO_RAD
    delta = math.asin(math.sin(eps) * math.sin(sun_lon))
    phi = latitude * DEG_TO_RAD

    cos_H = ((math.sin(SUNRISE_ALTITUDE * DEG_TO_RAD) - math.sin(phi) * math.sin(delta))
             / (math.cos(phi) * math.cos(delta)))
    if abs(cos_H) > 1.0:
        return SunTimes(None, None)

    H = math.acos(cos_H) * RAD_TO_DEG
    noon = 12.0 - longitude / 15.0 + tz_offset
    return SunTimes(sunrise=(noon - H / 15.0) % 24.0,
                    sunset=(noon + H / 15.0) % 24.0)


# ---------------------------------------------------------------------------
# Rahu Kala
# ---------------------------------------------------------------------------

def compute_rahu_kala(sun_times: SunTimes, day: int) -> Optional[RahuKala]:
    """
    Rahu Kala = 1/8 of daytime, slot varies by weekday.
    day: 0=Sunday … 6=Saturday
    """
    if sun_times.polar:
        return None
    day_length = (sun_times.sunset - sun_times.sunrise) % 24.0
    slot_length = day_length / 8.0
    start = sun_times.sunrise + (RAHU_KALA_SLOT[day] - 1) * slot_length
    return RahuKala(start=start % 24.0, end=(start + slot_length) % 24.0)


# ---------------------------------------------------------------------------
# Full Panchang
# ---------------------------------------------------------------------------

def compute_panchang(jd: float, sun_sid: float, moon_sid: float,
                     latitude: float, longitude: float,
                     tz_offset: float = 0.0) -> Panchang:
    day = weekday(jd, tz_offset)
    sun_times = compute_sunrise_sunset(jd, latitude, longitude, tz_offset)
    return Panchang(
        vara=VARA[day],
        tithi=compute_tithi(sun_sid, moon_sid),
        nakshatra=nakshatra_of(moon_sid),
        yoga=compute_yoga(sun_sid, moon_sid),
        karana=compute_karana(sun_sid, moon_sid),
        sun_times=sun_times,
        rahu_kala=compute_rahu_kala(sun_times, day),
        moon_phase=moon_phase(sun_sid, moon_sid),
    )
