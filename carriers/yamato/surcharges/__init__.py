"""
Yamato TA-Q-BIN Rules Package

    LIMITS:  acceptance limits, first match wins
             LongestSide (1) > ThreeSideSum (2) > OverWeight (3)
    EXTRAS:  standalone per-package fees (Cool, SameDay)

Usage:
    from carriers.yamato.surcharges import LIMITS, EXTRAS
"""

from shared.surcharges import Surcharge, get_exclusivity_group, validate_surcharges
from .limits import LongestSide, ThreeSideSum, OverWeight
from .cool import Cool
from .same_day import SameDay


ALL: list[type[Surcharge]] = [
    LongestSide, ThreeSideSum, OverWeight,
    Cool, SameDay,
]

LIMITS = get_exclusivity_group(ALL, "limits")
EXTRAS = [s for s in ALL if s.exclusivity_group is None]


# Run validation at import time
validate_surcharges(ALL)

__all__ = [
    "Surcharge",
    "Cool",
    "LongestSide",
    "OverWeight",
    "SameDay",
    "ThreeSideSum",
    "ALL",
    "LIMITS",
    "EXTRAS",
]
