"""FedEx Ground reference data: rates, surcharge amounts and configuration."""

from pathlib import Path

import polars as pl

from carriers.fedex.data.reference.billable_weight import DIM_FACTOR, MAX_TABLE_LB
from carriers.fedex.data.reference.fuel import DEFAULT_FUEL_PCT
from carriers.fedex.data.reference.residential import RESIDENTIAL_FEE

REFERENCE_DIR = Path(__file__).parent


def load_rates() -> pl.DataFrame:
    """
    Load the weight x zone rate table in long format, ready for joining.

    Transforms wide CSV format (zone_2, zone_3, ...) to long format.

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


def load_surcharge_amounts() -> pl.DataFrame:
    """
    Load per-zone surcharge amounts.

    Returns:
        DataFrame with columns: zone, ahs_dim, ahs_weight, oversize, unauthorized
    """
    return pl.read_csv(
        REFERENCE_DIR / "surcharge_amounts.csv",
        schema_overrides={
            "zone": pl.Int64,
            "ahs_dim": pl.Float64,
            "ahs_weight": pl.Float64,
            "oversize": pl.Float64,
            "unauthorized": pl.Float64,
        }
    )


def load_das() -> pl.DataFrame:
    """
    Load Delivery Area Surcharge tiers.

    Returns:
        DataFrame with columns: tier, residential, commercial
    """
    return pl.read_csv(
        REFERENCE_DIR / "das.csv",
        schema_overrides={
            "tier": pl.Utf8,
            "residential": pl.Float64,
            "commercial": pl.Float64,
        }
    )


__all__ = [
    "REFERENCE_DIR",
    "load_rates",
    "load_surcharge_amounts",
    "load_das",
    "DIM_FACTOR",
    "MAX_TABLE_LB",
    "DEFAULT_FUEL_PCT",
    "RESIDENTIAL_FEE",
]
