# Kundali Calc - Core modules
from .calendar import gregorian_to_jd, julian_centuries
from .ayanamsa import lahiri_ayanamsa, tropical_to_sidereal
from .ephemeris import compute_all_positions, KeplerianBody
from .houses import local_sidereal_time, compute_ascendant, whole_sign_houses
from .panchang import compute_panchang
from .dasha import compute_vimshottari_dasha, get_current_dasha
from .divisional_charts import compute_divisional_chart

__all__ = [
    "gregorian_to_jd", "julian_centuries",
    "lahiri_ayanamsa", "tropical_to_sidereal",
    "compute_all_positions", "KeplerianBody",
    "local_sidereal_time", "compute_ascendant", "whole_sign_houses",
    "compute_panchang",
    "compute_vimshottari_dasha", "get_current_dasha",
    "compute_divisional_chart",
]
