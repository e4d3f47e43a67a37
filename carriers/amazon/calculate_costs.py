"""
Amazon Shipping Cost Calculator

Line items in, DataFrame out. Same pipeline as the FedEx Ground calculator
with Amazon's surcharge hierarchy, zone-group pricing and diesel-indexed
fuel.

REQUIRED INPUT COLUMNS
----------------------
    length_cm, width_cm, height_cm  - Package dimensions in centimeters
    weight_kg                       - Actual weight in kilograms
    quantity                        - Number of packages (>= 0)

SETTINGS (AmazonSettings, broadcast onto every row unless already a column)
---------------------------------------------------------------------------
    shipping_zone   - Amazon zone (2-8)
    diesel_price    - $/gallon, resolved to fuel_pct through the diesel table
                      (per distinct price when given as an item column)
    das_tier        - None/Delivery Area/Extended Delivery Area/Remote Area

OUTPUT COLUMNS ADDED
--------------------
    supplement_shipments() adds:
        - length_in, width_in, height_in (whole inches, rounded up)
        - longest_side_in, second_longest_in, third_longest_in
        - length_plus_girth, cubic_in, weight_lbs
        - dim_weight_lbs, uses_dim_weight, billable_weight_lbs
        - fuel_pct, zone_group, amount_* (zone group amounts), das_amount

    calculate() adds:
        - surcharge_* flags, cost_* amounts per surcharge
        - surcharge_type, surcharge_reason, cost_surcharge
        - cost_base_rate, cost_fuel, cost_rate_subtotal
        - cost_residential (always 0.0), cost_per_package, cost_line_total
        - calculator_version

USAGE
-----
    from carriers.amazon.calculate_costs import calculate_costs, summarize
    result = calculate_costs(items, AmazonSettings(zone=5, diesel_price=3.85))
    totals = summarize(result)
"""

import logging

import polars as pl

from shared.batch import summarize as summarize_batch
from shared.items import to_frame, broadcast_settings
from shared.surcharges import apply_surcharges, apply_min_billable_weights, classify
from shared.units import add_inch_dimensions, add_billable_weight

from .data import (
    AmazonSettings,
    AmazonTables,
    load_tables,
    DIM_FACTOR,
    MAX_TABLE_LB,
    DEFAULT_ZONE_GROUP,
)
from .fuel import get_fuel_pct
from .surcharges import ALL, DIMENSIONAL
from .version import VERSION


logger = logging.getLogger(__name__)

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
    settings: AmazonSettings | None = None,
    tables: AmazonTables | None = None
) -> pl.DataFrame:
    """
    Calculate Amazon Shipping costs for a batch of line items.

    Args:
        items: Line items (see module docstring)
        settings: Zone, diesel price and DAS tier (defaults if not provided)
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

    residential_subtotal is always 0.0; it is kept so Amazon and FedEx
    summaries line up.
    """
    return summarize_batch(df, SUBTOTALS, decimals=2)


# =============================================================================
# SUPPLEMENT SHIPMENTS
# =============================================================================

def supplement_shipments(
    items,
    settings: AmazonSettings | None = None,
    tables: AmazonTables | None = None
) -> pl.DataFrame:
    """
    Supplement line items with settings, inch dimensions and weights.

    Returns:
        DataFrame with normalized dimensions, billable weight, fuel
        percentage and the zone-group surcharge amounts
    """
    if settings is None:
        settings = AmazonSettings()
    if tables is None:
        tables = load_tables()

    df = to_frame(items)
    logger.debug("Supplementing %d Amazon Shipping line(s)", len(df))

    df = broadcast_settings(df, {
        "shipping_zone": settings.zone,
        "diesel_price": settings.diesel_price,
        "das_tier": settings.das_tier,
    })
    df = df.with_columns([
        pl.col("shipping_zone").cast(pl.Int64, strict=False),
        pl.col("diesel_price").cast(pl.Float64),
        pl.col("das_tier").cast(pl.Utf8),
    ])

    if "fuel_pct" in df.columns:
        df = df.with_columns(pl.col("fuel_pct").cast(pl.Float64))
    else:
        df = _resolve_fuel_pct(df, tables)

    df = add_inch_dimensions(df)
    df = add_billable_weight(df, DIM_FACTOR)
    df = _lookup_zone_group(df, tables.zone_groups)
    df = _lookup_surcharge_amounts(df, tables.surcharge_amounts)
    df = _lookup_das(df, tables.das)

    return df.sort("line_no")


def _resolve_fuel_pct(df: pl.DataFrame, tables: AmazonTables) -> pl.DataFrame:
    """
    Resolve fuel_pct for each distinct diesel price on the batch.

    Lines without a diesel price get 0.0.
    """
    prices = df["diesel_price"].drop_nulls().unique().to_list()
    fuel = pl.DataFrame(
        {
            "diesel_price": prices,
            "fuel_pct": [
                get_fuel_pct(price, tables.fuel_table, tables.fuel_extension)
                for price in prices
            ],
        },
        schema={"diesel_price": pl.Float64, "fuel_pct": pl.Float64},
    )

    df = df.join(fuel, on="diesel_price", how="left")
    return df.with_columns(pl.col("fuel_pct").fill_null(0.0))


def _lookup_zone_group(df: pl.DataFrame, zone_groups: pl.DataFrame) -> pl.DataFrame:
    """
    Map each zone to its surcharge zone group.

    Unmapped zones fall into DEFAULT_ZONE_GROUP ("5+").
    """
    zone_groups = zone_groups.select([
        pl.col("zone").cast(pl.Int64).alias("shipping_zone"),
        pl.col("zone_group").cast(pl.Utf8),
    ])

    df = df.join(zone_groups, on="shipping_zone", how="left")

    unmapped = df["zone_group"].null_count()
    if unmapped:
        logger.warning(
            "%d Amazon line(s) have a zone with no zone group; using '%s'",
            unmapped, DEFAULT_ZONE_GROUP
        )

    return df.with_columns(pl.col("zone_group").fill_null(DEFAULT_ZONE_GROUP))


def _lookup_surcharge_amounts(df: pl.DataFrame, amounts: pl.DataFrame) -> pl.DataFrame:
    """Add the zone group's surcharge amounts as amount_* columns."""
    amounts = amounts.select([
        pl.col("zone_group").cast(pl.Utf8),
        pl.col("nonstandard").alias("amount_nonstandard"),
        pl.col("ahs_dim").alias("amount_ahs_dim"),
        pl.col("ahs_weight").alias("amount_ahs_weight"),
        pl.col("large_package").alias("amount_large_package"),
        pl.col("extra_heavy").alias("amount_extra_heavy"),
    ])

    df = df.join(amounts, on="zone_group", how="left")

    missing = df["amount_ahs_dim"].null_count()
    if missing:
        logger.warning("%d Amazon line(s) have a zone group with no surcharge amounts", missing)

    return df


def _lookup_das(df: pl.DataFrame, das: pl.DataFrame) -> pl.DataFrame:
    """Resolve the flat DAS amount for the tier (null for "None" and unknown tiers)."""
    das = das.select([
        pl.col("tier").alias("das_tier"),
        pl.col("amount").alias("das_amount"),
    ])
    return df.join(das, on="das_tier", how="left")


# =============================================================================
# CALCULATE COSTS
# =============================================================================

def calculate(df: pl.DataFrame, tables: AmazonTables | None = None) -> pl.DataFrame:
    """
    Calculate shipping costs for supplemented line items.

    Processing order:
        1. Surcharges       - dimensional group (first match wins) + DAS
        2. Billable weight  - LargePkg raises it to 90 lbs
        3. Base rate        - weight x zone lookup, clamped to 150 lbs
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

    Billable weights above 150 lbs use the 150 lb row unscaled.
    Missing table entries resolve to 0.0 and are logged.
    """
    rates = rates.select([
        pl.col("weight_lbs").cast(pl.Int64).alias("_rate_weight"),
        pl.col("zone").cast(pl.Int64).alias("shipping_zone"),
        pl.col("rate").cast(pl.Float64).alias("cost_base_rate"),
    ])

    df = df.with_columns(
        pl.col("billable_weight_lbs").clip(None, MAX_TABLE_LB).alias("_rate_weight")
    )

    df = df.join(rates, on=["_rate_weight", "shipping_zone"], how="left").sort("line_no")

    missing = df["cost_base_rate"].null_count()
    if missing:
        logger.warning(
            "%d Amazon line(s) have no rate for their zone/weight; using 0.0",
            missing
        )

    return df.with_columns(pl.col("cost_base_rate").fill_null(0.0)).drop("_rate_weight")


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

    cost_per_package = (base + fuel) + surcharge + DAS
    cost_line_total  = cost_per_package x quantity
    """
    df = df.with_columns(pl.lit(0.0).alias("cost_residential"))
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
