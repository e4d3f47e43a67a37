"""
Yamato TA-Q-BIN Data

Quote settings, the reference table bundle and its loader.

Structure:
    - reference/: Static reference data (zones, rates, cool fees, discounts, size tiers)
"""

from typing import NamedTuple

import polars as pl

from .reference import (
    load_zones,
    load_rates,
    load_intrapref_rates,
    load_cool,
    load_discounts,
    REFERENCE_DIR,
    PAYMENT_METHODS,
    SIZE_TIERS,
    WEIGHT_LIMITS_KG,
    MAX_LONGEST_CM,
    MAX_THREE_SIDE_CM,
    MAX_WEIGHT_KG,
    MAX_COOL_SIZE,
    SAME_DAY_STANDARD,
    SAME_DAY_REMOTE,
    REMOTE_ZONE,
)


COOL_TYPES = ["none", "chilled", "frozen"]


class YamatoSettings(NamedTuple):
    """Batch-level quote settings, broadcast onto every line."""
    origin: str = "kanto"
    destination: str = "kansai"
    payment: str = "cash"
    same_prefecture: bool = False
    cool_type: str = "none"
    same_day: bool = False
    discounts: tuple[str, ...] = ()


class YamatoTables(NamedTuple):
    """
    Reference data for one calculation.

    rates              - origin, size, destination, payment, rate (long format)
    intrapref_rates    - size, payment, rate
    zones              - id, name_ja, name_en
    cool               - size, amount
    discounts          - key, name_ja, name_en, amount (negative)
    same_day_standard  - same-day fee
    same_day_remote    - same-day fee when either endpoint is the remote zone
    """
    rates: pl.DataFrame
    intrapref_rates: pl.DataFrame
    zones: pl.DataFrame
    cool: pl.DataFrame
    discounts: pl.DataFrame
    same_day_standard: int = SAME_DAY_STANDARD
    same_day_remote: int = SAME_DAY_REMOTE


def load_tables() -> YamatoTables:
    """Load the default reference tables from data/reference/."""
    return YamatoTables(
        rates=load_rates(),
        intrapref_rates=load_intrapref_rates(),
        zones=load_zones(),
        cool=load_cool(),
        discounts=load_discounts(),
    )


__all__ = [
    "YamatoSettings",
    "YamatoTables",
    "load_tables",
    "load_zones",
    "load_rates",
    "load_intrapref_rates",
    "load_cool",
    "load_discounts",
    "REFERENCE_DIR",
    "COOL_TYPES",
    "PAYMENT_METHODS",
    "SIZE_TIERS",
    "WEIGHT_LIMITS_KG",
    "MAX_LONGEST_CM",
    "MAX_THREE_SIDE_CM",
    "MAX_WEIGHT_KG",
    "MAX_COOL_SIZE",
    "REMOTE_ZONE",
]
