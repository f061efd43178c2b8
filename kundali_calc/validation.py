"""
Birth-data validation.

Everything here runs before any astronomy: a payload either becomes a
BirthInput or raises InvalidBirthDataError naming the failed check.
"""

import math
import re
from dataclasses import dataclass
from datetime import MAXYEAR, date, datetime
from numbers import Real
from typing import Any, Mapping, Tuple

from .errors import InvalidBirthDataError, ValidationReason

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")

# The full 120-year Vimshottari cycle from the birth date has to stay
# representable as a datetime.
MIN_YEAR = 1
MAX_YEAR = MAXYEAR - 121

# camelCase (wire) name → accepted aliases
_FIELDS = {
    "dateOfBirth": ("dateOfBirth", "date_of_birth"),
    "timeOfBirth": ("timeOfBirth", "time_of_birth"),
    "latitude":    ("latitude",),
    "longitude":   ("longitude",),
    "timezone":    ("timezone",),
}


@dataclass(frozen=True)
class BirthInput:
    date_of_birth: str     # YYYY-MM-DD
    time_of_birth: str     # HH:MM, 24h local time
    latitude:      float
    longitude:     float
    timezone:      str = "UTC"

    @property
    def local_datetime(self) -> datetime:
        return datetime.strptime(f"{self.date_of_birth} {self.time_of_birth}", "%Y-%m-%d %H:%M")

    def to_dict(self) -> dict:
        return {
            "dateOfBirth": self.date_of_birth,
            "timeOfBirth": self.time_of_birth,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timezone": self.timezone,
        }


def validate_date(value: Any) -> date:
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise InvalidBirthDataError(ValidationReason.INVALID_DATE_FORMAT,
                                    "date must be YYYY-MM-DD")
    year, month, day = (int(p) for p in value.split("-"))
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidBirthDataError(ValidationReason.INVALID_DATE,
                                    f"year must be between {MIN_YEAR} and {MAX_YEAR}")
    try:
        return date(year, month, day)
    except ValueError:
        raise InvalidBirthDataError(ValidationReason.INVALID_DATE,
                                    f"{value} is not a valid calendar date") from None


def validate_time(value: Any) -> Tuple[int, int]:
    if not isinstance(value, str) or not _TIME_RE.match(value):
        raise InvalidBirthDataError(ValidationReason.INVALID_TIME_FORMAT,
                                    "time must be HH:MM (24-hour)")
    hour, minute = (int(p) for p in value.split(":"))
    if hour > 23 or minute > 59:
        raise InvalidBirthDataError(ValidationReason.INVALID_TIME,
                                    f"{value} is not a valid 24-hour time")
    return hour, minute


def _coordinate(value: Any, limit: float, reason: ValidationReason, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (Real, str)):
        raise InvalidBirthDataError(reason, f"{label} must be a number")
    try:
        number = float(value)
    except ValueError:
        raise InvalidBirthDataError(reason, f"{label} must be a number") from None
    if math.isnan(number) or not -limit <= number <= limit:
        raise InvalidBirthDataError(reason, f"{label} must be in [{-limit:g},{limit:g}]")
    return number


def validate_latitude(value: Any) -> float:
    return _coordinate(value, 90.0, ValidationReason.INVALID_LATITUDE, "latitude")


def validate_longitude(value: Any) -> float:
    return _coordinate(value, 180.0, ValidationReason.INVALID_LONGITUDE, "longitude")


def validate_timezone(value: Any) -> str:
    if value is None:
        return "UTC"
    if not isinstance(value, str) or not value.strip():
        raise InvalidBirthDataError(ValidationReason.INVALID_TIMEZONE,
                                    "timezone must be a non-empty string")
    return value.strip()


def _pick(payload: Mapping[str, Any], key: str, required: bool = True) -> Any:
    for alias in _FIELDS[key]:
        if alias in payload and payload[alias] is not None:
            return payload[alias]
    if required:
        raise InvalidBirthDataError(ValidationReason.MISSING_FIELD,
                                    f"{key} is required")
    return None


def parse_birth_input(payload: Mapping[str, Any]) -> BirthInput:
    """Validate a raw birth-data mapping (wire field names)."""
    date_str = _pick(payload, "dateOfBirth")
    time_str = _pick(payload, "timeOfBirth")
    lat = _pick(payload, "latitude")
    lon = _pick(payload, "longitude")
    tz = _pick(payload, "timezone", required=False)

    validate_date(date_str)
    validate_time(time_str)
    return BirthInput(
        date_of_birth=date_str,
        time_of_birth=time_str,
        latitude=validate_latitude(lat),
        longitude=validate_longitude(lon),
        timezone=validate_timezone(tz),
    )
