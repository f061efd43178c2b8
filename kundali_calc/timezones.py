"""
Timezone identifier → UTC offset for a local birth moment.

Fixed offsets ("+05:30", "UTC-8", "GMT+1", "Z") are parsed directly.
Everything else goes through the IANA database (zoneinfo + tzdata), which
applies the DST rules in force at that date. An identifier nobody knows
about falls back to the configured default offset, with a warning, unless
strict timezone handling is on.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import Settings, get_settings
from .errors import UnknownTimezoneError

logger = logging.getLogger(__name__)

ALIASES = {
    "IST": "Asia/Kolkata",
}

_UTC_NAMES = {"UTC", "GMT", "Z", "UT"}
_FIXED_OFFSET = re.compile(r"^(?:UTC|GMT)?\s*([+-])(\d{1,2})(?::?(\d{2}))?$", re.IGNORECASE)


@dataclass(frozen=True)
class TimezoneResolution:
    offset_hours: float
    source:       str      # fixed | iana | fallback


def parse_fixed_offset(identifier: str) -> Optional[float]:
    """Hours east of UTC for a fixed-offset identifier, None if it is not one."""
    text = identifier.strip()
    if text.upper() in _UTC_NAMES:
        return 0.0
    m = _FIXED_OFFSET.match(text)
    if not m:
        return None
    sign, hours, minutes = m.group(1), int(m.group(2)), int(m.group(3) or 0)
    if hours > 14 or minutes >= 60:
        return None
    offset = hours + minutes / 60.0
    return -offset if sign == "-" else offset


def _iana_offset(identifier: str, local_dt: datetime) -> Optional[float]:
    name = ALIASES.get(identifier.strip().upper(), identifier.strip())
    try:
        zone = ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        # OSError covers keys naming a tzdata directory, such as "America"
        return None
    return local_dt.replace(tzinfo=zone).utcoffset().total_seconds() / 3600.0


def resolve_utc_offset(identifier: str, local_dt: datetime,
                       settings: Optional[Settings] = None) -> TimezoneResolution:
    """
    UTC offset in hours for `local_dt` (naive wall-clock time) in `identifier`.
    """
    settings = settings or get_settings()

    fixed = parse_fixed_offset(identifier)
    if fixed is not None:
        return TimezoneResolution(fixed, "fixed")

    offset = _iana_offset(identifier, local_dt)
    if offset is not None:
        return TimezoneResolution(offset, "iana")

    if settings.strict_timezones:
        raise UnknownTimezoneError(f"Unknown timezone: {identifier!r}")
    logger.warning("Unknown timezone %r, falling back to UTC%+g",
                   identifier, settings.default_tz_offset)
    return TimezoneResolution(settings.default_tz_offset, "fallback")
