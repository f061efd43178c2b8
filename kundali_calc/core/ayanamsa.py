"""
ayanamsa.py
===========
Lahiri ayanamsa and the tropical → sidereal conversion.

The model is linear: 23.85° at J2000 plus 50.27"/yr of precession.
It is good to a few arcminutes over the last couple of centuries, which is
the precision this engine works to.
"""

from .calendar import J2000

LAHIRI_J2000 = 23.85                  # degrees at J2000.0
LAHIRI_RATE  = 50.27 / 3600.0         # degrees per Julian year
DAYS_PER_YEAR = 365.25


def lahiri_ayanamsa(jd: float) -> float:
    years = (jd - J2000) / DAYS_PER_YEAR
    return LAHIRI_J2000 + years * LAHIRI_RATE


def tropical_to_sidereal(longitude: float, ayanamsa: float) -> float:
    """Subtract the ayanamsa and wrap into [0, 360)."""
    sid = (longitude - ayanamsa) % 360.0
    # -1e-15 % 360 rounds to 360.0 in floating point
    return 0.0 if sid >= 360.0 else sid
