"""
FedEx Ground Data

Quote settings, the reference table bundle and its loader.

Structure:
    - reference/: Static reference data (rates, surcharge amounts, config)
"""

from typing import NamedTuple

import polars as pl

from .reference import (
    load_rates,
    load_surcharge_amounts,
    load_das,
    REFERENCE_DIR,
    DIM_FACTOR,
    MAX_TABLE_LB,
    DEFAULT_FUEL_PCT,
    RESIDENTIAL_FEE,
)


DAS_TIERS = ["None", "Base", "Extended", "Remote", "Alaska", "Hawaii", "Intra-Hawaii"]


class FedExSettings(NamedTuple):
    """Batch-level quote settings, broadcast onto every line."""
    zone: int = 5
    fuel_pct: float = DEFAULT_FUEL_PCT
    residential: bool = False
    das_tier: str = "None"


class FedExTables(NamedTuple):
    """
    Reference data for one calculation.

    rates              - weight_lbs, zone, rate (long format)
    surcharge_amounts  - zone, ahs_dim, ahs_weight, oversize, unauthorized
    das                - tier, residential, commercial
    residential_fee    - flat per-package residential charge
    """
    rates: pl.DataFrame
    surcharge_amounts: pl.DataFrame
    das: pl.DataFrame
    residential_fee: float = RESIDENTIAL_FEE


def load_tables() -> FedExTables:
    """Load the default reference tables from data/reference/."""
    return FedExTables(
        rates=load_rates(),
        surcharge_amounts=load_surcharge_amounts(),
        das=load_das(),
    )


__all__ = [
    "FedExSettings",
    "FedExTables",
    "load_tables",
    "load_rates",
    "load_surcharge_amounts",
    "load_das",
    "REFERENCE_DIR",
    "DAS_TIERS",
    "DIM_FACTOR",
    "MAX_TABLE_LB",
    "DEFAULT_FUEL_PCT",
    "RESIDENTIAL_FEE",
]
