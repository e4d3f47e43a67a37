"""
FedEx Ground Shipping Cost Calculator

Line items in, DataFrame out. Items can be LineItems, dicts or a polars
DataFrame with the item columns (see shared.items). The output is one row
per item with calculation columns and costs appended.

REQUIRED INPUT COLUMNS
----------------------
    length_cm, width_cm, height_cm  - Package dimensions in centimeters
    weight_kg                       - Actual weight in kilograms
    quantity                        - Number of packages (>= 0)

SETTINGS (FedExSettings, broadcast onto every row unless already a column)
--------------------------------------------------------------------------
    shipping_zone   - FedEx zone (2-8)
    fuel_pct        - Fuel surcharge percentage, applied to the base rate
    is_residential  - Residential delivery
    das_tier        - None/Base/Extended/Remote/Alaska/Hawaii/Intra-Hawaii

OUTPUT COLUMNS ADDED
--------------------
    supplement_shipments() adds:
        - length_in, width_in, height_in (whole inches, rounded up)
        - longest_side_in, second_longest_in, third_longest_in
        - length_plus_girth, cubic_in, weight_lbs
        - dim_weight_lbs, uses_dim_weight, billable_weight_lbs
        - amount_* (zone surcharge amounts), das_amount

    calculate() adds:
        - surcharge_* flags, cost_* amounts per surcharge
        - surcharge_type, surcharge_reason, cost_surcharge
        - cost_base_rate, cost_fuel, cost_rate_subtotal
        - cost_per_package, cost_line_total
        - calculator_version

USAGE
-----
    from carriers.fedex.calculate_costs import calculate_costs, summarize
    result = calculate_costs(items, FedExSettings(zone=5, fuel_pct=18.0))
    totals = summarize(result)
"""

import logging

import polars as pl

from shared.batch import summarize as summarize_batch
from shared.items import to_frame, broadcast_settings
from shared.surcharges import apply_surcharges, apply_min_billable_weights, classify
from shared.units import add_inch_dimensions, add_billable_weight

from .data import (
    FedExSettings,
    FedExTables,
    load_tables,
    DIM_FACTOR,
    MAX_TABLE_LB,
)
from .surcharges import ALL, DIMENSIONAL
from .version import VERSION


logger = logging.getLogger(__name__)

# Subtotal key -> per-package cost column
SUBTOTALS = {
    "rate_subtotal": "cost_rate_subtotal",
    "surcharge_subtotal": "cost_surcharge",
    "residential_subtotal": "cost_residential",
    "das_subtotal": "cost_das",
}


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def calculate_costs(
    items,
    settings: FedExSettings | None = None,
    tables: FedExTables | None = None
) -> pl.DataFrame:
    """
    Calculate FedEx Ground shipping costs for a batch of line items.

    This is the main entry point. Takes raw line items and returns one row
    per item with all calculation columns and costs appended.

    Args:
        items: Line items (see module docstring)
        settings: Zone, fuel, delivery type and DAS tier (defaults if not provided)
        tables: Reference tables (loaded from data/reference if not provided)

    Returns:
        DataFrame with supplemented data, surcharge flags, and costs
    """
    if tables is None:
        tables = load_tables()

    df = supplement_shipments(items, settings, tables)
    df = calculate(df, tables)
    return df


def summarize(df: pl.DataFrame) -> dict:
    """
    Batch totals for a calculated DataFrame.

    Returns:
        Dict with grand_total, rate_subtotal, surcharge_subtotal,
        residential_subtotal, das_subtotal, line_count, package_count
    """
    return summarize_batch(df, SUBTOTALS, decimals=2)


# =============================================================================
# SUPPLEMENT SHIPMENTS
# =============================================================================

def supplement_shipments(
    items,
    settings: FedExSettings | None = None,
    tables: FedExTables | None = None
) -> pl.DataFrame:
    """
    Supplement line items with settings, inch dimensions and weights.

    Args:
        items: Line items
        settings: Quote settings (defaults if not provided)
        tables: Reference tables (loaded if not provided)

    Returns:
        DataFrame with normalized dimensions, billable weight and the
        zone-resolved surcharge amounts
    """
    if settings is None:
        settings = FedExSettings()
    if tables is None:
        tables = load_tables()

    df = to_frame(items)
    logger.debug("Supplementing %d FedEx Ground line(s)", len(df))

    df = _add_settings(df, settings, tables)
    df = add_inch_dimensions(df)
    df = add_billable_weight(df, DIM_FACTOR)
    df = _lookup_surcharge_amounts(df, tables.surcharge_amounts)
    df = _lookup_das(df, tables.das)

    return df.sort("line_no")


def _add_settings(df: pl.DataFrame, settings: FedExSettings, tables: FedExTables) -> pl.DataFrame:
    """Broadcast batch settings and the residential fee onto every line."""
    df = broadcast_settings(df, {
        "shipping_zone": settings.zone,
        "fuel_pct": settings.fuel_pct,
        "is_residential": settings.residential,
        "das_tier": settings.das_tier,
        "residential_fee": tables.residential_fee,
    })

    return df.with_columns([
        pl.col("shipping_zone").cast(pl.Int64, strict=False),
        pl.col("fuel_pct").cast(pl.Float64),
        pl.col("is_residential").cast(pl.Boolean),
        pl.col("das_tier").cast(pl.Utf8),
        pl.col("residential_fee").cast(pl.Float64),
    ])


def _lookup_surcharge_amounts(df: pl.DataFrame, amounts: pl.DataFrame) -> pl.DataFrame:
    """
    Add the zone's surcharge amounts as amount_* columns.

    Unknown zones get null amounts, which surcharges treat as 0.0.
    """
    amounts = amounts.select([
        pl.col("zone").cast(pl.Int64).alias("shipping_zone"),
        pl.col("ahs_dim").alias("amount_ahs_dim"),
        pl.col("ahs_weight").alias("amount_ahs_weight"),
        pl.col("oversize").alias("amount_oversize"),
        pl.col("unauthorized").alias("amount_unauthorized"),
    ])

    return df.join(amounts, on="shipping_zone", how="left")


def _lookup_das(df: pl.DataFrame, das: pl.DataFrame) -> pl.DataFrame:
    """
    Resolve the DAS amount for the tier and delivery type.

    Adds das_amount (null for "None" and unmapped tiers).
    """
    das = das.select([
        pl.col("tier").alias("das_tier"),
        pl.col("residential").alias("_das_residential"),
        pl.col("commercial").alias("_das_commercial"),
    ])

    df = df.join(das, on="das_tier", how="left")

    df = df.with_columns(
        pl.when(pl.col("is_residential"))
        .then(pl.col("_das_residential"))
        .otherwise(pl.col("_das_commercial"))
        .alias("das_amount")
    )

    return df.drop(["_das_residential", "_das_commercial"])


# =============================================================================
# CALCULATE COSTS
# =============================================================================

def calculate(df: pl.DataFrame, tables: FedExTables | None = None) -> pl.DataFrame:
    """
    Calculate shipping costs for supplemented line items.

    Args:
        df: Supplemented DataFrame from supplement_shipments
        tables: Reference tables (loaded if not provided)

    Returns:
        DataFrame with surcharge flags, costs, and totals

    Processing order:
        1. Surcharges       - dimensional group (first match wins) + standalone
        2. Billable weight  - raised to the triggered surcharge's minimum
        3. Base rate        - weight x zone lookup, proportional above 150 lb
        4. Fuel and totals
    """
    if tables is None:
        tables = load_tables()

    # Phase 1: Apply surcharges and collapse the dimensional group
    df = apply_surcharges(df, ALL)
    df = classify(df, DIMENSIONAL)

    # Phase 2: Adjust billable weights based on triggered surcharges
    df = apply_min_billable_weights(df, ALL)

    # Phase 3: Look up base shipping rate
    df = _lookup_base_rate(df, tables.rates)

    # Phase 4: Calculate costs
    df = _apply_fuel(df)
    df = _calculate_total(df)
    df = _round_outputs(df)

    # Phase 5: Stamp version
    df = _stamp_version(df)

    return df


def _lookup_base_rate(df: pl.DataFrame, rates: pl.DataFrame) -> pl.DataFrame:
    """
    Look up base shipping rate by zone and billable weight.

    Up to 150 lbs the exact whole-pound row is used. Heavier packages are
    priced proportionally from the 150 lb row:
        rate = rate(150) x (billable_weight / 150)

    Missing table entries resolve to 0.0 and are logged.
    """
    rates = rates.select([
        pl.col("weight_lbs").cast(pl.Int64).alias("_rate_weight"),
        pl.col("zone").cast(pl.Int64).alias("shipping_zone"),
        pl.col("rate").cast(pl.Float64).alias("_table_rate"),
    ])

    df = df.with_columns(
        pl.col("billable_weight_lbs").clip(None, MAX_TABLE_LB).alias("_rate_weight")
    )

    df = df.join(rates, on=["_rate_weight", "shipping_zone"], how="left").sort("line_no")

    missing = df["_table_rate"].null_count()
    if missing:
        logger.warning(
            "%d FedEx Ground line(s) have no rate for their zone/weight; using 0.0",
            missing
        )

    df = df.with_columns(
        (
            pl.col("_table_rate").fill_null(0.0) *
            (pl.max_horizontal("billable_weight_lbs", pl.lit(MAX_TABLE_LB)) / MAX_TABLE_LB)
        ).alias("cost_base_rate")
    )

    return df.drop(["_rate_weight", "_table_rate"])


def _apply_fuel(df: pl.DataFrame) -> pl.DataFrame:
    """Apply fuel surcharge as a percentage of the base rate only."""
    df = df.with_columns(
        (pl.col("cost_base_rate") * pl.col("fuel_pct") / 100).alias("cost_fuel")
    )
    return df.with_columns(
        (pl.col("cost_base_rate") + pl.col("cost_fuel")).alias("cost_rate_subtotal")
    )


def _calculate_total(df: pl.DataFrame) -> pl.DataFrame:
    """
    Calculate per-package and line totals.

    cost_per_package = (base + fuel) + surcharge + residential + DAS
    cost_line_total  = cost_per_package x quantity
    """
    df = df.with_columns(
        pl.sum_horizontal([
            "cost_rate_subtotal",
            "cost_surcharge",
            "cost_residential",
            "cost_das",
        ]).alias("cost_per_package")
    )
    return df.with_columns(
        (pl.col("cost_per_package") * pl.col("quantity")).alias("cost_line_total")
    )


def _round_outputs(df: pl.DataFrame) -> pl.DataFrame:
    """Round weights and money to cents at the output boundary, halves up."""
    money_cols = [c for c in df.columns if c.startswith("cost_")]
    return df.with_columns([
        pl.col(c).round(2, mode="half_away_from_zero")
        for c in ["weight_lbs", "dim_weight_lbs", *money_cols]
    ])


def _stamp_version(df: pl.DataFrame) -> pl.DataFrame:
    """Stamp calculator version on output."""
    return df.with_columns(pl.lit(VERSION).alias("calculator_version"))


__all__ = [
    "calculate_costs",
    "supplement_shipments",
    "calculate",
    "summarize",
    "SUBTOTALS",
]
