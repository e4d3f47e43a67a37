"""
Batch Aggregation

Rolls a calculated line DataFrame up into batch totals. Only lines with
included=True (quantity > 0) contribute; excluded lines stay visible in the
line output but never reach a subtotal.
"""

import math

import polars as pl


def summarize(
    df: pl.DataFrame,
    subtotals: dict[str, str],
    decimals: int = 2,
    total_col: str = "cost_line_total",
) -> dict:
    """
    Aggregate line results into a batch summary.

    Args:
        df: Calculated DataFrame (needs quantity, included and the cost columns)
        subtotals: Output key -> per-package cost column. Each subtotal is
            sum(column * quantity) over included lines.
        decimals: Rounding for money (2 for USD, 0 for JPY)
        total_col: Per-line total column summed into grand_total

    Returns:
        Dict with grand_total, each subtotal, line_count and package_count
    """
    counted = df.filter(pl.col("included"))

    exprs = [pl.col(total_col).sum().alias("grand_total")]
    exprs += [
        (pl.col(column) * pl.col("quantity")).sum().alias(key)
        for key, column in subtotals.items()
    ]
    exprs += [
        pl.len().alias("line_count"),
        pl.col("quantity").sum().alias("package_count"),
    ]

    row = counted.select(exprs).row(0, named=True)

    summary = {}
    for key in ["grand_total", *subtotals]:
        summary[key] = _round_money(row[key], decimals)
    summary["line_count"] = int(row["line_count"])
    summary["package_count"] = int(row["package_count"] or 0)

    return summary


def _round_money(value, decimals: int):
    """
    Round a money sum, halves away from zero (as the line columns are).

    JPY (decimals=0) comes back as int.
    """
    value = float(value or 0)
    factor = 10 ** decimals
    rounded = math.copysign(math.floor(abs(value) * factor + 0.5), value) / factor + 0.0
    if decimals == 0:
        return int(rounded)
    return rounded


__all__ = ["summarize"]
