"""
kundali.py
==========
Main Kundali (birth chart) generator.

Orchestrates ephemeris, house, panchang, dasha, and divisional chart modules
to produce a complete, structured Kundali result.

Usage:
    from kundali_calc.tools.kundali import generate_kundali

    chart = generate_kundali({
        "dateOfBirth": "1990-06-15",
        "timeOfBirth": "10:30",
        "latitude": 28.6139,          # Delhi
        "longitude": 77.2090,
        "timezone": "Asia/Kolkata",
    })
    chart.to_dict()

Order of work inside one call: Julian Day → ayanamsa → planets (Earth
before any geocentric conversion) → ascendant → houses → panchang →
dasha from the Moon → divisional charts. Nothing is shared between calls
and nothing reads the clock unless the caller asks for "now".
"""

import logging
from dataclasses import asdict, dataclass, replace
from datetime import date, datetime, timezone
from typing import Any, Callable, Mapping, Optional, Tuple, Union

from ..config import Settings
from ..core.ayanamsa import lahiri_ayanamsa, tropical_to_sidereal
from ..core.calendar import gregorian_to_jd
from ..core.dasha import (
    CurrentDasha, DashaPeriod, compute_vimshottari_dasha, get_current_dasha,
)
from ..core.divisional_charts import DivisionalChart, compute_all_divisional_charts
from ..core.ephemeris import PlanetPosition, compute_all_positions, moon_position
from ..core.houses import House, compute_ascendant, planet_house_number, whole_sign_houses
from ..core.panchang import Panchang, compute_panchang
from ..core.zodiac import (
    SIGNS, SIGNS_HINDI, NakshatraInfo, degree_in_sign, nakshatra_of, sign_of,
)
from ..timezones import resolve_utc_offset
from ..validation import (
    BirthInput, parse_birth_input, validate_date, validate_latitude,
    validate_longitude, validate_timezone,
)

logger = logging.getLogger(__name__)

BirthData = Union[BirthInput, Mapping[str, Any]]


# ---------------------------------------------------------------------------
# Result records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SignSummary:
    sign_index: int
    sign:       str
    sign_local: str

    @classmethod
    def of(cls, sidereal_longitude: float) -> "SignSummary":
        idx = sign_of(sidereal_longitude)
        return cls(idx, SIGNS[idx], SIGNS_HINDI[idx])


@dataclass(frozen=True)
class Ascendant:
    tropical:       float
    sidereal:       float
    sign_index:     int
    sign:           str
    sign_local:     str
    degree:         float
    nakshatra:      str
    nakshatra_pada: int


@dataclass(frozen=True)
class KundaliResult:
    input:          BirthInput
    julian_day:     float
    utc_offset:     float
    ayanamsa:       float
    ascendant:      Ascendant
    moon_sign:      SignSummary
    sun_sign:       SignSummary
    moon_nakshatra: NakshatraInfo
    planets:        Tuple[PlanetPosition, ...]
    houses:         Tuple[House, ...]
    panchang:       Panchang
    dashas:         Tuple[DashaPeriod, ...]
    charts:         Mapping[str, DivisionalChart]
    current_dasha:  Optional[CurrentDasha] = None

    def planet(self, name: str) -> PlanetPosition:
        return next(p for p in self.planets if p.name == name)

    def to_dict(self) -> dict:
        return {
            "input": self.input.to_dict(),
            "julian_day": self.julian_day,
            "utc_offset": self.utc_offset,
            "ayanamsa": self.ayanamsa,
            "ascendant": asdict(self.ascendant),
            "moon_sign": asdict(self.moon_sign),
            "sun_sign": asdict(self.sun_sign),
            "moon_nakshatra": self.moon_nakshatra.to_dict(),
            "planets": [p.to_dict() for p in self.planets],
            "houses": [h.to_dict() for h in self.houses],
            "panchang": self.panchang.to_dict(),
            "dashas": [d.to_dict() for d in self.dashas],
            "charts": {div.lower(): chart.to_dict() for div, chart in self.charts.items()},
            "current_dasha": None if self.current_dasha is None else self.current_dasha.to_dict(),
        }


@dataclass(frozen=True)
class Transit:
    planet:             str
    sign:               str
    sign_index:         int
    degree:             float
    sidereal_longitude: float
    is_retrograde:      bool


@dataclass(frozen=True)
class TransitReport:
    calculated_at: datetime
    julian_day:    float
    ayanamsa:      float
    transits:      Tuple[Transit, ...]

    def to_dict(self) -> dict:
        return {
            "calculated_at": self.calculated_at.isoformat(),
            "julian_day": self.julian_day,
            "ayanamsa": self.ayanamsa,
            "transits": [asdict(t) for t in self.transits],
        }


@dataclass(frozen=True)
class DailyPanchang:
    date:       str
    julian_day: float
    ayanamsa:   float
    panchang:   Panchang
    sun_sign:   SignSummary
    moon_sign:  SignSummary

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "julian_day": self.julian_day,
            "ayanamsa": self.ayanamsa,
            "panchang": self.panchang.to_dict(),
            "sun_sign": asdict(self.sun_sign),
            "moon_sign": asdict(self.moon_sign),
        }


@dataclass(frozen=True)
class DashaReport:
    moon_nakshatra: NakshatraInfo
    dashas:         Tuple[DashaPeriod, ...]
    current:        CurrentDasha

    def to_dict(self) -> dict:
        return {
            "moon_nakshatra": self.moon_nakshatra.to_dict(),
            "dashas": [d.to_dict() for d in self.dashas],
            "current": self.current.to_dict(),
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_birth_input(birth: BirthData) -> BirthInput:
    if isinstance(birth, BirthInput):
        return birth
    return parse_birth_input(birth)


def _julian_day(local_dt: datetime, offset_hours: float) -> float:
    """JD of a local wall-clock time; day rollover is left to the JD arithmetic."""
    utc_hour = (local_dt.hour + local_dt.minute / 60.0 + local_dt.second / 3600.0
                - offset_hours)
    return gregorian_to_jd(local_dt.year, local_dt.month, local_dt.day, utc_hour)


def _birth_moment(birth: BirthInput, settings: Optional[Settings]) -> Tuple[datetime, float, float]:
    local_dt = birth.local_datetime
    offset = resolve_utc_offset(birth.timezone, local_dt, settings).offset_hours
    return local_dt, offset, _julian_day(local_dt, offset)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------

def generate_kundali(birth: BirthData, as_of: Optional[datetime] = None,
                     settings: Optional[Settings] = None) -> KundaliResult:
    """
    Generate a complete Kundali (birth chart).

    Args:
        birth: BirthInput, or a mapping with dateOfBirth, timeOfBirth,
            latitude, longitude and optional timezone (default "UTC")
        as_of: when given, the dasha running at this moment is included;
            an aware moment is converted to the birth place's UTC offset
        settings: engine settings; defaults to the process settings

    Raises:
        InvalidBirthDataError: malformed or out-of-range input
        UnknownTimezoneError: unknown timezone under strict handling
    """
    birth = _as_birth_input(birth)
    logger.debug("Computing kundali for %s", birth)

    # ---- Time ----
    local_dt, offset, jd = _birth_moment(birth, settings)
    ayanamsa = lahiri_ayanamsa(jd)

    # ---- Planet positions ----
    positions = compute_all_positions(jd, ayanamsa)

    # ---- Ascendant and houses ----
    asc_tropical = compute_ascendant(jd, birth.latitude, birth.longitude)
    asc_sidereal = tropical_to_sidereal(asc_tropical, ayanamsa)
    lagna_sign = sign_of(asc_sidereal)
    lagna_nak = nakshatra_of(asc_sidereal)
    ascendant = Ascendant(
        tropical=asc_tropical,
        sidereal=asc_sidereal,
        sign_index=lagna_sign,
        sign=SIGNS[lagna_sign],
        sign_local=SIGNS_HINDI[lagna_sign],
        degree=degree_in_sign(asc_sidereal),
        nakshatra=lagna_nak.name,
        nakshatra_pada=lagna_nak.pada,
    )
    houses = whole_sign_houses(asc_sidereal)
    planets = tuple(
        replace(pos, house=planet_house_number(pos.sign_index, lagna_sign))
        for pos in positions.values()
    )

    # ---- Panchang ----
    sun = positions["Sun"]
    moon = positions["Moon"]
    panchang = compute_panchang(jd, sun.sidereal_longitude, moon.sidereal_longitude,
                                birth.latitude, birth.longitude, offset)

    # ---- Vimshottari Dasha ----
    dashas = compute_vimshottari_dasha(moon.sidereal_longitude, local_dt)
    current = get_current_dasha(dashas, as_of, offset) if as_of is not None else None

    # ---- Divisional charts ----
    charts = compute_all_divisional_charts(
        {p.name: p.sidereal_longitude for p in planets})

    return KundaliResult(
        input=birth,
        julian_day=jd,
        utc_offset=offset,
        ayanamsa=ayanamsa,
        ascendant=ascendant,
        moon_sign=SignSummary.of(moon.sidereal_longitude),
        sun_sign=SignSummary.of(sun.sidereal_longitude),
        moon_nakshatra=nakshatra_of(moon.sidereal_longitude),
        planets=planets,
        houses=houses,
        panchang=panchang,
        dashas=dashas,
        charts=charts,
        current_dasha=current,
    )


# ---------------------------------------------------------------------------
# Lighter query paths
# ---------------------------------------------------------------------------

def current_transits(at: Optional[datetime] = None,
                     clock: Callable[[], datetime] = _utc_now) -> TransitReport:
    """
    Sign, degree and retrograde state of the nine grahas at `at`
    (naive values are read as UTC). Without `at`, `clock()` supplies the moment.
    """
    moment = at if at is not None else clock()
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)

    hour = (moment.hour + moment.minute / 60.0 + moment.second / 3600.0
            + moment.microsecond / 3.6e9)
    jd = gregorian_to_jd(moment.year, moment.month, moment.day, hour)
    ayanamsa = lahiri_ayanamsa(jd)

    transits = tuple(
        Transit(
            planet=pos.name,
            sign=pos.sign,
            sign_index=pos.sign_index,
            degree=pos.degree_in_sign,
            sidereal_longitude=pos.sidereal_longitude,
            is_retrograde=pos.is_retrograde,
        )
        for pos in compute_all_positions(jd, ayanamsa).values()
    )
    return TransitReport(moment, jd, ayanamsa, transits)


def daily_panchang(date_str: str, latitude: float, longitude: float,
                   timezone: str = "UTC",
                   settings: Optional[Settings] = None) -> DailyPanchang:
    """Panchang at local noon of `date_str` (YYYY-MM-DD)."""
    day: date = validate_date(date_str)
    latitude = validate_latitude(latitude)
    longitude = validate_longitude(longitude)
    tz_name = validate_timezone(timezone)

    local_noon = datetime(day.year, day.month, day.day, 12, 0)
    offset = resolve_utc_offset(tz_name, local_noon, settings).offset_hours
    jd = _julian_day(local_noon, offset)
    ayanamsa = lahiri_ayanamsa(jd)

    positions = compute_all_positions(jd, ayanamsa)
    sun_sid = positions["Sun"].sidereal_longitude
    moon_sid = positions["Moon"].sidereal_longitude

    return DailyPanchang(
        date=date_str,
        julian_day=jd,
        ayanamsa=ayanamsa,
        panchang=compute_panchang(jd, sun_sid, moon_sid, latitude, longitude, offset),
        sun_sign=SignSummary.of(sun_sid),
        moon_sign=SignSummary.of(moon_sid),
    )


def dasha_for_birth(birth: BirthData, as_of: datetime,
                    settings: Optional[Settings] = None) -> DashaReport:
    """Vimshottari periods for a birth and the ones running at `as_of`."""
    birth = _as_birth_input(birth)
    local_dt, offset, jd = _birth_moment(birth, settings)
    moon_sid = tropical_to_sidereal(moon_position(jd).longitude, lahiri_ayanamsa(jd))

    dashas = compute_vimshottari_dasha(moon_sid, local_dt)
    return DashaReport(
        moon_nakshatra=nakshatra_of(moon_sid),
        dashas=dashas,
        current=get_current_dasha(dashas, as_of, offset),
    )
