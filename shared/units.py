"""
Unit Normalization

Polars expressions shared by the US carriers (FedEx Ground, Amazon Shipping),
which bill in whole inches and pounds.

Each centimeter dimension is converted to inches and rounded UP to the next
whole inch independently, before any other math (carrier tariff
convention). Sides are then sorted so every threshold check is independent
of how the caller oriented the box.
"""

import polars as pl


CM_PER_INCH = 2.54
KG_TO_LB = 2.2046


def cm_to_inch_ceil(column: str) -> pl.Expr:
    """Centimeters -> whole inches, rounded up."""
    return (pl.col(column) / CM_PER_INCH).ceil().cast(pl.Int64)


def kg_to_lb(column: str) -> pl.Expr:
    return pl.col(column) * KG_TO_LB


def add_inch_dimensions(df: pl.DataFrame) -> pl.DataFrame:
    """
    Add whole-inch dimensions and derived measures.

    Adds columns:
        - length_in, width_in, height_in (ceiling inches)
        - longest_side_in, second_longest_in, third_longest_in
        - length_plus_girth (longest + 2 x (second + third))
        - cubic_in
        - weight_lbs
    """
    df = df.with_columns([
        cm_to_inch_ceil("length_cm").alias("length_in"),
        cm_to_inch_ceil("width_cm").alias("width_in"),
        cm_to_inch_ceil("height_cm").alias("height_in"),
        kg_to_lb("weight_kg").alias("weight_lbs"),
    ])

    sorted_sides = pl.concat_list(["length_in", "width_in", "height_in"]).list.sort(descending=True)

    df = df.with_columns([
        sorted_sides.list.get(0).alias("longest_side_in"),
        sorted_sides.list.get(1).alias("second_longest_in"),
        sorted_sides.list.get(2).alias("third_longest_in"),
        (pl.col("length_in") * pl.col("width_in") * pl.col("height_in")).alias("cubic_in"),
    ])

    return df.with_columns(
        (
            pl.col("longest_side_in") +
            2 * (pl.col("second_longest_in") + pl.col("third_longest_in"))
        ).alias("length_plus_girth")
    )


def add_billable_weight(df: pl.DataFrame, dim_factor: int) -> pl.DataFrame:
    """
    Calculate dimensional weight and billable weight.

    Billable weight is the greater of actual and dimensional weight,
    rounded up to a whole pound, never below 1 lb. Surcharge minimums are
    applied later, once the surcharge is known.
    """
    df = df.with_columns(
        (pl.col("cubic_in") / dim_factor).alias("dim_weight_lbs")
    )

    return df.with_columns([
        (pl.col("dim_weight_lbs") > pl.col("weight_lbs")).alias("uses_dim_weight"),
        pl.max_horizontal("weight_lbs", "dim_weight_lbs")
        .ceil()
        .clip(1, None)
        .cast(pl.Int64)
        .alias("billable_weight_lbs"),
    ])


__all__ = [
    "CM_PER_INCH",
    "KG_TO_LB",
    "cm_to_inch_ceil",
    "kg_to_lb",
    "add_inch_dimensions",
    "add_billable_weight",
]
