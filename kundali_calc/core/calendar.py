"""
calendar.py
===========
Gregorian calendar → Julian Day, and the Julian-century time argument used
by every periodic term in the engine.

Source: Meeus "Astronomical Algorithms" 2nd ed., Ch. 7.
"""

J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0


def gregorian_to_jd(year: int, month: int, day: int, hour: float = 0.0) -> float:
    """
    Meeus Ch. 7.

    `hour` must already be UTC. Values below 0 or above 24 roll into the
    neighbouring day through the arithmetic itself.
    """
    if month <= 2:
        year -= 1
        month += 12
    A = int(year / 100)
    B = 2 - A + int(A / 4)
    return int(365.25*(year+4716)) + int(30.6001*(month+1)) + day + B - 1524.5 + hour/24.0


def julian_centuries(jd: float) -> float:
    return (jd - J2000) / DAYS_PER_CENTURY
