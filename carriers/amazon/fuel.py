"""
Amazon Shipping Fuel Percentage

Resolves the fuel surcharge percentage for a diesel price from the banded
table in data/reference/fuel_diesel.csv.

    In table:    band with min <= price < max
    Below table: step down from the first band's min, one increment at a time
    Above table: step up from the last band's max, one increment at a time

The calculator resolves each distinct diesel price on a batch once and
joins the result back as the fuel_pct column.
"""

import logging

import polars as pl

from .data import FuelExtension


logger = logging.getLogger(__name__)


def get_fuel_pct(
    diesel_price: float | None,
    fuel_table: pl.DataFrame,
    extension: FuelExtension | None = FuelExtension()
) -> float:
    """
    Fuel surcharge percentage for a diesel price.

    Args:
        diesel_price: $/gallon. Missing or zero prices give 0.0
        fuel_table: Bands with columns min, max, pct
        extension: Extension rule past the table edges (None gives 0.0
            outside the table)

    Returns:
        Percentage rounded to 2 decimals, never negative
    """
    if not diesel_price or fuel_table.is_empty():
        return 0.0

    band = fuel_table.filter(
        (pl.col("min") <= diesel_price) & (pl.col("max") > diesel_price)
    )
    if band.height > 0:
        pct = float(band["pct"][0])
        logger.debug("Diesel $%.3f in table band: fuel %.2f%%", diesel_price, pct)
        return pct

    if extension is None:
        logger.warning("Diesel $%.3f is outside the fuel table and no extension rule is set", diesel_price)
        return 0.0

    if extension.increment_price <= 0:
        logger.warning(
            "Fuel extension increment_price must be positive, got %s; fuel for diesel $%.3f is 0.0",
            extension.increment_price, diesel_price
        )
        return 0.0

    table = fuel_table.sort("min")
    first = table.row(0, named=True)
    last = table.row(-1, named=True)

    if diesel_price < first["min"]:
        price = first["min"]
        pct = first["pct"]
        while price > diesel_price:
            price -= extension.increment_price
            pct -= extension.increment_pct
        pct = max(0.0, round(pct, 2))
    else:
        price = last["max"]
        pct = last["pct"] + extension.increment_pct
        while diesel_price >= price:
            price += extension.increment_price
            pct += extension.increment_pct
        pct = round(pct - extension.increment_pct, 2)

    logger.debug("Diesel $%.3f extrapolated past the fuel table: fuel %.2f%%", diesel_price, pct)
    return pct


__all__ = ["get_fuel_pct"]
