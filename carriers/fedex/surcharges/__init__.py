"""
FedEx Ground Surcharges Package

Exports all surcharge classes and processing groups.

Surcharges with the same exclusivity_group compete - only the highest
priority (lowest number) wins:

    dimensional:  Unauthorized (1) > Oversize (2) > AHS-Wgt (3) > AHS-Dim (4)

A package matching none of them is "OK". Residential and DAS stand alone
and stack on top of whichever dimensional surcharge applies.

Usage:
    from carriers.fedex.surcharges import ALL, DIMENSIONAL
"""

from shared.surcharges import Surcharge, get_exclusivity_group, validate_surcharges
from .unauthorized import Unauthorized
from .oversize import Oversize
from .additional_handling import AHS
from .additional_handling_weight import AHS_Weight
from .residential import Residential
from .das import DAS


# All surcharges - add classes here as they are implemented
ALL: list[type[Surcharge]] = [
    Unauthorized, Oversize, AHS_Weight, AHS,
    Residential, DAS,
]

# Mutually exclusive handling group, highest priority first
DIMENSIONAL = get_exclusivity_group(ALL, "dimensional")


# Run validation at import time
validate_surcharges(ALL)

__all__ = [
    # Base
    "Surcharge",
    # Surcharge classes
    "AHS",
    "AHS_Weight",
    "DAS",
    "Oversize",
    "Residential",
    "Unauthorized",
    # Lists
    "ALL",
    "DIMENSIONAL",
]
