# File: skyglow/services/photometry.py

"""
Raw World Atlas brightness -> SQM -> Bortle.

Both conversions are pure and total. Anything we cannot interpret falls
back to a fixed sentinel instead of raising:
  - no light at all (raw <= 0)   -> DARKEST_SQM
  - SQM that does not parse      -> WORST_BORTLE
"""

import math
from typing import Union

from skyglow.core.numbers import parse_invariant_float

# -----------------------------
# Sentinels
# -----------------------------
DARKEST_SQM = "22.00"
WORST_BORTLE = 9.0
BEST_BORTLE = 1.0

# -----------------------------
# raw -> SQM calibration
# -----------------------------
RAW_CAP = 10.0

# Dark regime: a line through the calibrated dark-sky point.
DARK_BASE_RAW = 0.1000683605670929
DARK_BASE_SQM = 21.28
DARK_SLOPE = 5.0

# Bright regime: shallower line anchored at raw 2.0.
BRIGHT_BASE_RAW = 2.0
BRIGHT_BASE_SQM = 17.70
BRIGHT_SLOPE = 0.5

# -----------------------------
# SQM -> Bortle ladder
# -----------------------------
# Flat bands are lower SQM bounds. Linear bands are
# (lower bound, upper anchor, bortle at anchor, bortle span).
BORTLE_1_MIN = 21.99
BORTLE_2_MIN = 21.70
BORTLE_3_MIN = 21.30
RURAL_BAND = (21.00, 21.30, 4.0, 0.7)      # 4.0 .. 4.7
BORTLE_48_MIN = 20.49
BORTLE_55_MIN = 19.50
BORTLE_65_MIN = 18.50
CITY_BAND = (17.70, 18.00, 7.0, 2.0)       # 7.0 .. 9.0


def raw_to_sqm(raw: float) -> str:
    """
    Convert a raw artificial-brightness sample to an SQM reading.

    Two linear regimes; the larger magnitude (darker sky) of the two wins,
    so the curve bends at their crossover (raw ~0.68, SQM ~18.36). Raw
    values are capped at RAW_CAP, so anything brighter reads "13.70".
    """
    if math.isnan(raw) or raw <= 0:
        return DARKEST_SQM

    capped = min(raw, RAW_CAP)
    sqm_dark = DARK_BASE_SQM - DARK_SLOPE * (capped - DARK_BASE_RAW)
    sqm_bright = BRIGHT_BASE_SQM - BRIGHT_SLOPE * (capped - BRIGHT_BASE_RAW)
    sqm = max(sqm_dark, sqm_bright)

    # %-formatting is locale-independent
    return "%.2f" % sqm


def _interpolate(sqm: float, band) -> float:
    lower, anchor, base, span = band
    fraction = (anchor - sqm) / (anchor - lower)
    fraction = min(max(fraction, 0.0), 1.0)
    return base + fraction * span


def sqm_to_bortle(sqm: Union[str, float, None]) -> float:
    """
    Estimate a fractional Bortle class from an SQM reading.

    Accepts the string produced by raw_to_sqm(). Unparseable input is
    treated as the worst sky.
    """
    if isinstance(sqm, (int, float)):
        value = float(sqm)
    else:
        value = parse_invariant_float(sqm)

    if value is None or math.isnan(value):
        return WORST_BORTLE

    if value >= BORTLE_1_MIN:
        bortle = 1.0
    elif value >= BORTLE_2_MIN:
        bortle = 2.0
    elif value >= BORTLE_3_MIN:
        bortle = 3.0
    elif value >= RURAL_BAND[0]:
        bortle = _interpolate(value, RURAL_BAND)
    elif value >= BORTLE_48_MIN:
        bortle = 4.8
    elif value >= BORTLE_55_MIN:
        bortle = 5.5
    elif value >= BORTLE_65_MIN:
        bortle = 6.5
    elif value >= CITY_BAND[0]:
        # [18.00, 18.50) clamps to the 7.0 end of the band
        bortle = _interpolate(value, CITY_BAND)
    else:
        bortle = WORST_BORTLE

    return round(min(max(bortle, BEST_BORTLE), WORST_BORTLE), 1)
