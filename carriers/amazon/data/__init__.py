"""
Amazon Shipping Data

Quote settings, the reference table bundle and its loader.

Structure:
    - reference/: Static reference data (rates, zone groups, surcharge amounts, fuel)
"""

from typing import NamedTuple

import polars as pl

from .reference import (
    load_rates,
    load_zone_groups,
    load_surcharge_amounts,
    load_das,
    load_fuel_table,
    REFERENCE_DIR,
    DIM_FACTOR,
    MAX_TABLE_LB,
    DEFAULT_DIESEL_PRICE,
    INCREMENT_PRICE,
    INCREMENT_PCT,
    DEFAULT_ZONE_GROUP,
)


DAS_TIERS = ["None", "Delivery Area", "Extended Delivery Area", "Remote Area"]


class AmazonSettings(NamedTuple):
    """Batch-level quote settings, broadcast onto every line."""
    zone: int = 5
    diesel_price: float = DEFAULT_DIESEL_PRICE
    das_tier: str = "None"


class FuelExtension(NamedTuple):
    """How the diesel table extends past its first and last band."""
    increment_price: float = INCREMENT_PRICE
    increment_pct: float = INCREMENT_PCT


class AmazonTables(NamedTuple):
    """
    Reference data for one calculation.

    rates              - weight_lbs, zone, rate (long format)
    zone_groups        - zone, zone_group
    surcharge_amounts  - zone_group, nonstandard, ahs_dim, ahs_weight,
                         large_package, extra_heavy
    das                - tier, amount
    fuel_table         - min, max, pct (diesel bands)
    fuel_extension     - extension rule past the table edges (None disables it)
    """
    rates: pl.DataFrame
    zone_groups: pl.DataFrame
    surcharge_amounts: pl.DataFrame
    das: pl.DataFrame
    fuel_table: pl.DataFrame
    fuel_extension: FuelExtension | None = FuelExtension()


def load_tables() -> AmazonTables:
    """Load the default reference tables from data/reference/."""
    return AmazonTables(
        rates=load_rates(),
        zone_groups=load_zone_groups(),
        surcharge_amounts=load_surcharge_amounts(),
        das=load_das(),
        fuel_table=load_fuel_table(),
    )


__all__ = [
    "AmazonSettings",
    "AmazonTables",
    "FuelExtension",
    "load_tables",
    "load_rates",
    "load_zone_groups",
    "load_surcharge_amounts",
    "load_das",
    "load_fuel_table",
    "REFERENCE_DIR",
    "DAS_TIERS",
    "DIM_FACTOR",
    "MAX_TABLE_LB",
    "DEFAULT_DIESEL_PRICE",
    "DEFAULT_ZONE_GROUP",
]
