"""
Shared Surcharges

Base class and rule application for carrier surcharges.
"""

from .base import Surcharge
from .apply import (
    OK_TYPE,
    OK_REASON,
    apply_surcharges,
    apply_min_billable_weights,
    classify,
    cost_column,
    flag_column,
    get_exclusivity_group,
    get_unique_exclusivity_groups,
    validate_surcharges,
)

__all__ = [
    "Surcharge",
    "OK_TYPE",
    "OK_REASON",
    "apply_surcharges",
    "apply_min_billable_weights",
    "classify",
    "cost_column",
    "flag_column",
    "get_exclusivity_group",
    "get_unique_exclusivity_groups",
    "validate_surcharges",
]
