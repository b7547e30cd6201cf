# coolblocks/heat_index.py
"""
Heat index (NWS Rothfusz regression)
Perceived temperature from air temperature and relative humidity
"""

import math
from typing import Optional

from coolblocks import config

# Below this the regression is not defined and air temperature is returned as is
THRESHOLD_F = 80.0


def c_to_f(temp_c: float) -> float:
    return temp_c * 9 / 5 + 32


def f_to_c(temp_f: float) -> float:
    return (temp_f - 32) * 5 / 9


def heat_index_c(temp_c: float, rh_pct: Optional[float] = None) -> float:
    """
    Compute the heat index in Celsius

    Args:
        temp_c: Air temperature in Celsius
        rh_pct: Relative humidity in percent, None means 50

    Returns:
        Heat index in Celsius, or temp_c unchanged below 80 F
    """
    t = c_to_f(temp_c)
    r = config.DEFAULT_HUMIDITY_PCT if rh_pct is None else rh_pct
    if t < THRESHOLD_F:
        return temp_c

    hi = (-42.379 + 2.04901523 * t + 10.14333127 * r - 0.22475541 * t * r
          - 0.00683783 * t * t - 0.05481717 * r * r + 0.00122874 * t * t * r
          + 0.00085282 * t * r * r - 0.00000199 * t * t * r * r)

    # Low humidity correction
    if r < 13 and 80 <= t <= 112:
        hi -= ((13 - r) / 4) * math.sqrt((17 - abs(t - 95)) / 17)
    # High humidity correction
    if r > 85 and 80 <= t <= 87:
        hi -= ((r - 85) / 10) * ((87 - t) / 5)

    return f_to_c(hi)
