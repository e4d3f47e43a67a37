"""
Line Items

Converts caller-supplied line items into the DataFrame every carrier
calculator consumes.

ITEM COLUMNS
------------
    name        - Free-text label (optional, defaults to "")
    length_cm   - Package length in centimeters
    width_cm    - Package width in centimeters
    height_cm   - Package height in centimeters
    weight_kg   - Actual weight in kilograms
    quantity    - Number of identical packages (>= 0)

Columns added by to_frame():
    line_no     - 0-based position in the input (output is sorted by it)
    included    - quantity > 0; excluded lines stay in the output but are
                  left out of batch totals
"""

from typing import Iterable, NamedTuple

import polars as pl


class LineItem(NamedTuple):
    """One line of a quote: a package description and how many to ship."""
    length_cm: float
    width_cm: float
    height_cm: float
    weight_kg: float
    quantity: int = 1
    name: str = ""


ITEM_SCHEMA = {
    "name": pl.Utf8,
    "length_cm": pl.Float64,
    "width_cm": pl.Float64,
    "height_cm": pl.Float64,
    "weight_kg": pl.Float64,
    "quantity": pl.Int64,
}

REQUIRED_COLUMNS = ["length_cm", "width_cm", "height_cm", "weight_kg", "quantity"]


def to_frame(items: pl.DataFrame | Iterable) -> pl.DataFrame:
    """
    Build a validated item DataFrame.

    Args:
        items: polars DataFrame, or an iterable of LineItem / dicts

    Returns:
        DataFrame with ITEM_SCHEMA columns (plus any extra input columns),
        line_no and included

    Raises:
        ValueError: If required columns/values are missing or a quantity
            is negative
    """
    if isinstance(items, pl.DataFrame):
        df = items
    else:
        rows = [
            item._asdict() if hasattr(item, "_asdict") else dict(item)
            for item in items
        ]
        df = (
            pl.DataFrame(rows, schema=ITEM_SCHEMA, strict=False)
            if rows else pl.DataFrame(schema=ITEM_SCHEMA)
        )

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Line items are missing required columns: {', '.join(missing)}")

    if "name" not in df.columns:
        df = df.with_columns(pl.lit("").alias("name"))

    df = df.with_columns([
        pl.col(column).cast(dtype) for column, dtype in ITEM_SCHEMA.items()
    ]).with_columns(pl.col("name").fill_null(""))

    null_counts = df.select([pl.col(c).null_count() for c in REQUIRED_COLUMNS]).row(0, named=True)
    incomplete = [c for c, count in null_counts.items() if count > 0]
    if incomplete:
        raise ValueError(f"Line items have empty values in: {', '.join(incomplete)}")

    negative = df.filter(pl.col("quantity") < 0)
    if len(negative) > 0:
        raise ValueError(
            f"{len(negative)} line item(s) have a negative quantity. "
            f"Quantity must be 0 or more."
        )

    if "line_no" in df.columns:
        df = df.drop("line_no")

    return (
        df
        .with_row_index("line_no")
        .with_columns([
            pl.col("line_no").cast(pl.Int64),
            (pl.col("quantity") > 0).alias("included"),
        ])
    )


def broadcast_settings(df: pl.DataFrame, settings: dict) -> pl.DataFrame:
    """
    Add batch settings as literal columns.

    Columns already present in the item frame win, so callers can override
    a setting per line.
    """
    return df.with_columns([
        pl.lit(value).alias(column)
        for column, value in settings.items()
        if column not in df.columns
    ])


__all__ = [
    "LineItem",
    "ITEM_SCHEMA",
    "REQUIRED_COLUMNS",
    "to_frame",
    "broadcast_settings",
]
