"""
Same-Day Delivery Fee

Flat per-package fee; routes starting or ending in Okinawa pay the reduced
fee. same_day_amount is resolved per line in calculate_costs.py.
"""

import polars as pl
from shared.surcharges import Surcharge


class SameDay(Surcharge):
    """Same-day delivery requested."""

    name = "Same_Day"

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    amount_column = "same_day_amount"

    @classmethod
    def conditions(cls) -> pl.Expr:
        return pl.col("is_same_day") & ~pl.col("size_error")
