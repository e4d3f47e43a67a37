"""Amazon Shipping reference data: rates, zone groups, surcharge amounts and fuel."""

from pathlib import Path

import polars as pl

from carriers.amazon.data.reference.billable_weight import DIM_FACTOR, MAX_TABLE_LB
from carriers.amazon.data.reference.fuel import DEFAULT_DIESEL_PRICE, INCREMENT_PRICE, INCREMENT_PCT
from carriers.amazon.data.reference.zones import DEFAULT_ZONE_GROUP

REFERENCE_DIR = Path(__file__).parent


def load_rates() -> pl.DataFrame:
    """
    Load the weight x zone rate table in long format, ready for joining.

    Returns:
        DataFrame with columns:
            - weight_lbs: Whole-pound billable weight (1-150)
            - zone: Shipping zone (2-8)
            - rate: Base rate in USD
    """
    df = pl.read_csv(REFERENCE_DIR / "rates.csv")

    zone_cols = [c for c in df.columns if c.startswith("zone_")]
    return df.unpivot(
        index="weight_lbs",
        on=zone_cols,
        variable_name="zone_col",
        value_name="rate"
    ).with_columns(
        pl.col("weight_lbs").cast(pl.Int64),
        pl.col("zone_col").str.replace("zone_", "").cast(pl.Int64).alias("zone"),
        pl.col("rate").cast(pl.Float64),
    ).select(["weight_lbs", "zone", "rate"])


def load_zone_groups() -> pl.DataFrame:
    """
    Load the zone -> zone group map.

    Returns:
        DataFrame with columns: zone, zone_group
    """
    return pl.read_csv(
        REFERENCE_DIR / "zone_groups.csv",
        schema_overrides={"zone": pl.Int64, "zone_group": pl.Utf8}
    )


def load_surcharge_amounts() -> pl.DataFrame:
    """
    Load per-zone-group surcharge amounts.

    Returns:
        DataFrame with columns: zone_group, nonstandard, ahs_dim, ahs_weight,
        large_package, extra_heavy
    """
    return pl.read_csv(
        REFERENCE_DIR / "surcharge_amounts.csv",
        schema_overrides={
            "zone_group": pl.Utf8,
            "nonstandard": pl.Float64,
            "ahs_dim": pl.Float64,
            "ahs_weight": pl.Float64,
            "large_package": pl.Float64,
            "extra_heavy": pl.Float64,
        }
    )


def load_das() -> pl.DataFrame:
    """
    Load Delivery Area Surcharge tiers.

    Returns:
        DataFrame with columns: tier, amount
    """
    return pl.read_csv(
        REFERENCE_DIR / "das.csv",
        schema_overrides={"tier": pl.Utf8, "amount": pl.Float64}
    )


def load_fuel_table() -> pl.DataFrame:
    """
    Load the diesel price -> fuel percentage bands, sorted by price.

    Returns:
        DataFrame with columns: min, max, pct
    """
    return pl.read_csv(
        REFERENCE_DIR / "fuel_diesel.csv",
        schema_overrides={"min": pl.Float64, "max": pl.Float64, "pct": pl.Float64}
    ).sort("min")


__all__ = [
    "REFERENCE_DIR",
    "load_rates",
    "load_zone_groups",
    "load_surcharge_amounts",
    "load_das",
    "load_fuel_table",
    "DIM_FACTOR",
    "MAX_TABLE_LB",
    "DEFAULT_DIESEL_PRICE",
    "INCREMENT_PRICE",
    "INCREMENT_PCT",
    "DEFAULT_ZONE_GROUP",
]
