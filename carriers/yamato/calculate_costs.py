"""
Yamato TA-Q-BIN Shipping Cost Calculator

Line items in, DataFrame out. Sizes are in centimeters, rates in JPY (tax
included). There is no dimensional weight: the applied size is the larger
of the three-side-sum tier and the weight tier.

REQUIRED INPUT COLUMNS
----------------------
    length_cm, width_cm, height_cm  - Package dimensions in centimeters
    weight_kg                       - Actual weight in kilograms
    quantity                        - Number of packages (>= 0)

SETTINGS (YamatoSettings, broadcast onto every row unless already a column)
---------------------------------------------------------------------------
    origin, destination  - Zone ids (see data/reference/zones.csv)
    payment              - "cash" or "cashless"
    same_prefecture      - Use the intra-prefecture table when possible
    cool_type            - "none", "chilled" or "frozen"
    is_same_day          - Same-day delivery
    discount_amount      - Selected discounts, resolved to one amount
    discounts_applied    - Comma-separated keys of the discounts counted

OUTPUT COLUMNS ADDED
--------------------
    supplement_shipments() adds:
        - three_side_sum_cm, longest_side_cm
        - cool_requested, same_day_amount

    calculate() adds:
        - error_type, error_reason, size_error
        - sum_tier, weight_tier, applied_size, size_source, size_reason
        - is_intrapref, cost_base_rate
        - cool_error, surcharge_cool, cost_cool
        - surcharge_same_day, cost_same_day
        - discount_total, cost_per_package, cost_line_total
        - calculator_version

    Lines with size_error keep every column but cost nothing.

USAGE
-----
    from carriers.yamato.calculate_costs import calculate_costs, summarize
    result = calculate_costs(items, YamatoSettings(origin="kanto", destination="kansai"))
    totals = summarize(result)
"""

import logging

import polars as pl

from shared.batch import summarize as summarize_batch
from shared.items import to_frame, broadcast_settings
from shared.surcharges import apply_surcharges, classify, cost_column

from .data import (
    YamatoSettings,
    YamatoTables,
    load_tables,
    SIZE_TIERS,
    WEIGHT_LIMITS_KG,
    MAX_COOL_SIZE,
    REMOTE_ZONE,
)
from .discounts import calc_discounts
from .surcharges import LIMITS, EXTRAS
from .version import VERSION


logger = logging.getLogger(__name__)

SUBTOTALS = {
    "base_subtotal": "cost_base_rate",
    "cool_subtotal": "cost_cool",
    "same_day_subtotal": "cost_same_day",
    "discount_subtotal": "discount_total",
}


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def calculate_costs(
    items,
    settings: YamatoSettings | None = None,
    tables: YamatoTables | None = None
) -> pl.DataFrame:
    """
    Calculate TA-Q-BIN shipping costs for a batch of line items.

    Args:
        items: Line items (see module docstring)
        settings: Route, payment and service options (defaults if not provided)
        tables: Reference tables (loaded from data/reference if not provided)

    Returns:
        DataFrame with size classification, fees, discounts and totals
    """
    if tables is None:
        tables = load_tables()

    df = supplement_shipments(items, settings, tables)
    df = calculate(df, tables)
    return df


def summarize(df: pl.DataFrame) -> dict:
    """
    Batch totals for a calculated DataFrame, in whole yen.

    Returns:
        Dict with grand_total, base_subtotal, cool_subtotal,
        same_day_subtotal, discount_subtotal, line_count, package_count
        and error_count (included lines that could not be shipped)
    """
    summary = summarize_batch(df, SUBTOTALS, decimals=0)
    summary["error_count"] = df.filter(pl.col("included") & pl.col("size_error")).height
    return summary


# =============================================================================
# SUPPLEMENT SHIPMENTS
# =============================================================================

def supplement_shipments(
    items,
    settings: YamatoSettings | None = None,
    tables: YamatoTables | None = None
) -> pl.DataFrame:
    """
    Supplement line items with route settings, measurements and discounts.

    Returns:
        DataFrame with three-side sum, longest side and the per-line
        settings needed by calculate()
    """
    if settings is None:
        settings = YamatoSettings()
    if tables is None:
        tables = load_tables()

    df = to_frame(items)
    logger.debug("Supplementing %d TA-Q-BIN line(s)", len(df))

    discount_amount, applied = calc_discounts(settings.discounts, tables.discounts)

    df = broadcast_settings(df, {
        "origin": settings.origin,
        "destination": settings.destination,
        "payment": settings.payment,
        "same_prefecture": settings.same_prefecture,
        "cool_type": settings.cool_type,
        "is_same_day": settings.same_day,
        "discount_amount": discount_amount,
        "discounts_applied": ",".join(applied),
    })
    df = df.with_columns([
        pl.col("origin").cast(pl.Utf8),
        pl.col("destination").cast(pl.Utf8),
        pl.col("payment").cast(pl.Utf8),
        pl.col("same_prefecture").cast(pl.Boolean),
        pl.col("cool_type").cast(pl.Utf8),
        pl.col("is_same_day").cast(pl.Boolean),
        pl.col("discount_amount").cast(pl.Int64),
        pl.col("discounts_applied").cast(pl.Utf8),
    ])

    _warn_unknown_zones(df, tables.zones)

    df = df.with_columns([
        (pl.col("length_cm") + pl.col("width_cm") + pl.col("height_cm")).alias("three_side_sum_cm"),
        pl.max_horizontal("length_cm", "width_cm", "height_cm").alias("longest_side_cm"),
        (
            pl.col("cool_type").is_not_null() & (pl.col("cool_type") != "none")
        ).alias("cool_requested"),
        pl.when(
            (pl.col("origin") == REMOTE_ZONE) | (pl.col("destination") == REMOTE_ZONE)
        )
        .then(pl.lit(tables.same_day_remote))
        .otherwise(pl.lit(tables.same_day_standard))
        .cast(pl.Int64)
        .alias("same_day_amount"),
    ])

    return df.sort("line_no")


def _warn_unknown_zones(df: pl.DataFrame, zones: pl.DataFrame) -> None:
    known = set(zones["id"].to_list())
    used = set(df["origin"].drop_nulls().to_list()) | set(df["destination"].drop_nulls().to_list())
    unknown = sorted(used - known)
    if unknown:
        logger.warning("Unknown TA-Q-BIN zone(s): %s; their rates resolve to 0", ", ".join(unknown))


# =============================================================================
# CALCULATE COSTS
# =============================================================================

def calculate(df: pl.DataFrame, tables: YamatoTables | None = None) -> pl.DataFrame:
    """
    Calculate shipping costs for supplemented line items.

    Processing order:
        1. Limits      - longest side > sum > weight, first match is the error
        2. Size        - applied size = max(sum tier, weight tier)
        3. Base rate   - intra-prefecture table, else origin x destination
        4. Extras      - cool (size <= 120), same-day
        5. Discounts and totals (per package floored at 0)
    """
    if tables is None:
        tables = load_tables()

    # Phase 1: Acceptance limits
    df = _check_limits(df)

    # Phase 2: Size classification
    df = _classify_size(df)

    # Phase 3: Rate and cool lookups
    df = _lookup_rates(df, tables)

    # Phase 4: Cool and same-day fees
    df = apply_surcharges(df, EXTRAS)

    # Phase 5: Discounts and totals
    df = _calculate_total(df)
    df = _round_outputs(df)

    # Phase 6: Stamp version
    df = _stamp_version(df)

    return df


def _check_limits(df: pl.DataFrame) -> pl.DataFrame:
    """Flag packages beyond the acceptance limits (size_error, error_reason)."""
    df = apply_surcharges(df, LIMITS)
    df = classify(
        df, LIMITS,
        type_col="error_type",
        reason_col="error_reason",
        cost_col=None,
        default_type=None,
        default_reason=None,
    )
    df = df.drop([cost_column(s) for s in LIMITS])

    return df.with_columns(pl.col("error_type").is_not_null().alias("size_error"))


def _tier(value: pl.Expr, ceilings: dict[int, float]) -> pl.Expr:
    """Smallest tier whose ceiling covers the value (null above the largest)."""
    expr = pl.lit(None, dtype=pl.Int64)
    for tier in reversed(SIZE_TIERS):
        expr = pl.when(value <= ceilings[tier]).then(pl.lit(tier, dtype=pl.Int64)).otherwise(expr)
    return expr


def _classify_size(df: pl.DataFrame) -> pl.DataFrame:
    """
    Determine the applied size.

    Adds sum_tier, weight_tier, applied_size = max of both, size_source
    ("sum" when sum_tier >= weight_tier, else "weight") and size_reason.
    All null on lines with a size_error.
    """
    ok = ~pl.col("size_error")

    df = df.with_columns([
        pl.when(ok).then(_tier(pl.col("three_side_sum_cm"), {t: t for t in SIZE_TIERS})).alias("sum_tier"),
        pl.when(ok).then(_tier(pl.col("weight_kg"), WEIGHT_LIMITS_KG)).alias("weight_tier"),
    ])

    df = df.with_columns([
        pl.when(ok).then(pl.max_horizontal("sum_tier", "weight_tier")).alias("applied_size"),
        pl.when(ok).then(
            pl.when(pl.col("sum_tier") >= pl.col("weight_tier"))
            .then(pl.lit("sum"))
            .otherwise(pl.lit("weight"))
        ).alias("size_source"),
    ])

    return df.with_columns(
        pl.when(pl.col("size_source") == "sum")
        .then(pl.format(
            "three-side sum {} cm -> size {}",
            pl.col("three_side_sum_cm").round(0).cast(pl.Int64),
            pl.col("sum_tier"),
        ))
        .when(pl.col("size_source") == "weight")
        .then(pl.format("weight {} kg -> size {}", pl.col("weight_kg").round(1), pl.col("weight_tier")))
        .alias("size_reason")
    )


def _lookup_rates(df: pl.DataFrame, tables: YamatoTables) -> pl.DataFrame:
    """
    Look up the base rate and the cool fee for the applied size.

    Same-prefecture shipments use the intra-prefecture table when it has the
    size, except from the remote zone. Missing rates resolve to 0 and are
    logged.
    """
    rates = tables.rates.select([
        pl.col("origin").cast(pl.Utf8),
        pl.col("size").cast(pl.Int64).alias("_size"),
        pl.col("destination").cast(pl.Utf8),
        pl.col("payment").cast(pl.Utf8),
        pl.col("rate").cast(pl.Int64).alias("_route_rate"),
    ])
    intrapref = tables.intrapref_rates.select([
        pl.col("size").cast(pl.Int64).alias("_size"),
        pl.col("payment").cast(pl.Utf8),
        pl.col("rate").cast(pl.Int64).alias("_intrapref_rate"),
    ])
    cool = tables.cool.select([
        pl.col("size").cast(pl.Int64).alias("_size"),
        pl.col("amount").cast(pl.Int64).alias("cool_amount"),
    ])

    df = (
        df
        .with_columns(pl.col("applied_size").alias("_size"))
        .join(rates, on=["origin", "_size", "destination", "payment"], how="left")
        .join(intrapref, on=["_size", "payment"], how="left")
        .join(cool, on="_size", how="left")
        .sort("line_no")
    )

    ok = ~pl.col("size_error")

    df = df.with_columns(
        (
            ok &
            pl.col("same_prefecture") &
            (pl.col("origin") != REMOTE_ZONE) &
            pl.col("_intrapref_rate").is_not_null()
        ).fill_null(False).alias("is_intrapref")
    )

    missing = df.filter(ok & ~pl.col("is_intrapref") & pl.col("_route_rate").is_null()).height
    if missing:
        logger.warning("%d TA-Q-BIN line(s) have no rate for their route/size/payment; using 0", missing)

    df = df.with_columns([
        pl.when(~ok).then(pl.lit(0))
        .when(pl.col("is_intrapref")).then(pl.col("_intrapref_rate"))
        .otherwise(pl.col("_route_rate").fill_null(0))
        .cast(pl.Int64)
        .alias("cost_base_rate"),
        (
            ok &
            pl.col("cool_requested") &
            (pl.col("applied_size") > MAX_COOL_SIZE)
        ).fill_null(False).alias("cool_error"),
    ])

    cool_errors = df["cool_error"].sum()
    if cool_errors:
        logger.debug("%d TA-Q-BIN line(s) request cool above size %d", cool_errors, MAX_COOL_SIZE)

    return df.drop(["_size", "_route_rate", "_intrapref_rate"])


def _calculate_total(df: pl.DataFrame) -> pl.DataFrame:
    """
    Calculate per-package and line totals.

    cost_per_package = max(0, base + cool + same-day + discounts)
    cost_line_total  = cost_per_package x quantity
    Lines with a size_error are 0.
    """
    ok = ~pl.col("size_error")

    df = df.with_columns([
        pl.when(ok).then(pl.col("discount_amount")).otherwise(pl.lit(0)).cast(pl.Int64).alias("discount_total"),
        pl.when(ok).then(pl.col("discounts_applied")).otherwise(pl.lit("")).alias("discounts_applied"),
    ])

    df = df.with_columns(
        pl.when(ok)
        .then(pl.max_horizontal(
            pl.lit(0.0),
            pl.col("cost_base_rate") + pl.col("cost_cool") + pl.col("cost_same_day") + pl.col("discount_total"),
        ))
        .otherwise(pl.lit(0.0))
        .alias("cost_per_package")
    )
    return df.with_columns(
        (pl.col("cost_per_package") * pl.col("quantity")).alias("cost_line_total")
    )


def _round_outputs(df: pl.DataFrame) -> pl.DataFrame:
    """Whole yen at the output boundary."""
    money_cols = [c for c in df.columns if c.startswith("cost_")]
    return df.with_columns([
        pl.col(c).round(0, mode="half_away_from_zero").cast(pl.Int64)
        for c in money_cols
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
