"""
Kundali Calc
============
Sidereal (Lahiri) Vedic birth-chart engine: planets, ascendant, whole-sign
houses, Panchang, Vimshottari Dasha and the D1/D9 charts.

Quick start:
    from kundali_calc import generate_kundali

    chart = generate_kundali({
        "dateOfBirth": "1990-06-15",
        "timeOfBirth": "10:30",
        "latitude": 28.6139,
        "longitude": 77.2090,
        "timezone": "Asia/Kolkata",
    })
"""

from .errors import InvalidBirthDataError, KundaliError, UnknownTimezoneError, ValidationReason
from .tools.kundali import current_transits, daily_panchang, dasha_for_birth, generate_kundali
from .validation import BirthInput, parse_birth_input

__version__ = "1.0.0"
__all__ = [
    "generate_kundali", "current_transits", "daily_panchang", "dasha_for_birth",
    "BirthInput", "parse_birth_input",
    "KundaliError", "InvalidBirthDataError", "UnknownTimezoneError", "ValidationReason",
]
