"""
Amazon Shipping Surcharges Package

Exports all surcharge classes and processing groups.

Surcharges with the same exclusivity_group compete - only the highest
priority (lowest number) wins:

    dimensional:  ExtraHeavy (1) > LargePkg (2) > AHS-Wgt (3)
                  > AHS-Dim girth (4) > AHS-Dim length (5) > AHS-Dim width (6)
                  > NonStd (7)

A package matching none of them is "OK". DAS stands alone. Amazon has no
residential charge.

Usage:
    from carriers.amazon.surcharges import ALL, DIMENSIONAL
"""

from shared.surcharges import Surcharge, get_exclusivity_group, validate_surcharges
from .extra_heavy import ExtraHeavy
from .large_package import LargePackage
from .additional_handling_weight import AHS_Weight
from .additional_handling import AHS_Girth, AHS_Length, AHS_Width
from .nonstandard import NonStandard
from .das import DAS


ALL: list[type[Surcharge]] = [
    ExtraHeavy, LargePackage,
    AHS_Weight, AHS_Girth, AHS_Length, AHS_Width,
    NonStandard,
    DAS,
]

DIMENSIONAL = get_exclusivity_group(ALL, "dimensional")


# Run validation at import time
validate_surcharges(ALL)

__all__ = [
    "Surcharge",
    "AHS_Girth",
    "AHS_Length",
    "AHS_Weight",
    "AHS_Width",
    "DAS",
    "ExtraHeavy",
    "LargePackage",
    "NonStandard",
    "ALL",
    "DIMENSIONAL",
]
