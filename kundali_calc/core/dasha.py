"""
dasha.py
========
Vimshottari Dasha calculation system.

Vimshottari ("120 years") is the most widely used dasha system in Vedic astrology.
The dasha ruler and starting point are determined by the Moon's nakshatra at birth.

Dasha sequence: Ketu (7) → Venus (20) → Sun (6) → Moon (10) → Mars (7)
                → Rahu (18) → Jupiter (16) → Saturn (19) → Mercury (17)
Total = 120 years

Only the first Maha Dasha is shortened: the part of the Moon's nakshatra
already traversed at birth is the part of that lord's period already spent.
Dates advance by years × 365.25 days, without calendar-exact arithmetic.

Source: Parashara, B.V. "Brihat Parashara Hora Shastra" (classical text)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from itertools import accumulate
from types import MappingProxyType
from typing import Iterable, List, Optional, Sequence, Tuple

from .zodiac import DASHA_ORDER, nakshatra_of

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DASHA_YEARS = MappingProxyType({
    "Ketu":    7,
    "Venus":   20,
    "Sun":     6,
    "Moon":    10,
    "Mars":    7,
    "Rahu":    18,
    "Jupiter": 16,
    "Saturn":  19,
    "Mercury": 17,
})

TOTAL_YEARS = 120.0  # sum of all dasha periods

DAYS_PER_YEAR = 365.25


@dataclass(frozen=True)
class DashaPeriod:
    lord:           str
    start:          datetime
    end:            datetime
    duration_years: float
    antardashas:    Tuple["DashaPeriod", ...] = ()

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end

    def to_dict(self) -> dict:
        data = {
            "lord": self.lord,
            "start": self.start.strftime("%Y-%m-%d"),
            "end": self.end.strftime("%Y-%m-%d"),
            "duration_years": self.duration_years,
        }
        if self.antardashas:
            data["antardashas"] = [a.to_dict() for a in self.antardashas]
        return data


@dataclass(frozen=True)
class CurrentDasha:
    mahadasha:  Optional[DashaPeriod]
    antardasha: Optional[DashaPeriod]

    def to_dict(self) -> dict:
        def _short(p):
            if p is None:
                return None
            return {"lord": p.lord,
                    "start": p.start.strftime("%Y-%m-%d"),
                    "end": p.end.strftime("%Y-%m-%d")}
        return {"mahadasha": _short(self.mahadasha),
                "antardasha": _short(self.antardasha)}


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------

def years_to_days(years: float) -> float:
    return years * DAYS_PER_YEAR


def dasha_sequence_from(lord: str) -> List[str]:
    """Return dasha sequence starting from given lord."""
    idx = DASHA_ORDER.index(lord)
    return list(DASHA_ORDER[idx:] + DASHA_ORDER[:idx])


def _chain(lords: Sequence[str], durations: Sequence[float], start: datetime
           ) -> Iterable[Tuple[str, datetime, datetime, float]]:
    """
    Lay periods end to end from `start`. Boundaries come from the running
    total of durations, so each period's start is the previous one's end.
    """
    offsets = accumulate(durations, initial=0.0)
    bounds = [start + timedelta(days=years_to_days(o)) for o in offsets]
    return zip(lords, bounds, bounds[1:], durations)


# ---------------------------------------------------------------------------
# Core Vimshottari calculation
# ---------------------------------------------------------------------------

def compute_antardashas(maha_lord: str, start: datetime,
                        maha_years: float) -> Tuple[DashaPeriod, ...]:
    """
    Antardasha (Bhukti) periods within a Maha Dasha.
    Each sub-period is maha_years × sub-lord years / 120, and the sequence
    starts from the maha dasha lord itself.
    """
    lords = dasha_sequence_from(maha_lord)
    durations = [maha_years * DASHA_YEARS[lord] / TOTAL_YEARS for lord in lords]
    return tuple(DashaPeriod(lord, s, e, years)
                 for lord, s, e, years in _chain(lords, durations, start))


def dasha_balance(moon_sidereal_lon: float) -> Tuple[str, float]:
    """(starting lord, years of its period still to run at birth)."""
    nak = nakshatra_of(moon_sidereal_lon)
    return nak.lord, DASHA_YEARS[nak.lord] * (1.0 - nak.fraction)


def compute_vimshottari_dasha(moon_sidereal_lon: float,
                              birth_dt: datetime) -> Tuple[DashaPeriod, ...]:
    """
    Compute the nine Vimshottari Maha Dasha periods from birth.

    Args:
        moon_sidereal_lon: Moon's sidereal longitude in degrees (0–360)
        birth_dt: Birth datetime (local wall-clock time)

    Returns:
        Nine DashaPeriod records, each with nine antardashas.
    """
    first_lord, balance_years = dasha_balance(moon_sidereal_lon)
    lords = dasha_sequence_from(first_lord)
    durations = [balance_years] + [float(DASHA_YEARS[lord]) for lord in lords[1:]]

    return tuple(
        DashaPeriod(lord, s, e, years, compute_antardashas(lord, s, years))
        for lord, s, e, years in _chain(lords, durations, birth_dt)
    )


def get_current_dasha(dasha_periods: Sequence[DashaPeriod],
                      on_date: datetime, utc_offset: float = 0.0) -> CurrentDasha:
    """
    Return the active maha dasha and antardasha for a given moment.

    Period bounds are naive wall-clock times at the birth place, whose UTC
    offset is `utc_offset` hours. A naive `on_date` is read on that same
    clock; an aware one is first converted to it.
    """
    moment = on_date
    if on_date.tzinfo is not None:
        birth_zone = timezone(timedelta(hours=utc_offset))
        moment = on_date.astimezone(birth_zone).replace(tzinfo=None)
    for period in dasha_periods:
        if period.contains(moment):
            sub = next((a for a in period.antardashas if a.contains(moment)), None)
            return CurrentDasha(period, sub)
    return CurrentDasha(None, None)
