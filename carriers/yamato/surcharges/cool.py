"""
Cool TA-Q-BIN Fee

Refrigerated (chilled) or frozen handling, priced by applied size. Only
offered up to size 120; a larger package with cool requested is flagged
with cool_error and ships without the fee.

The cool_amount column is joined by applied size in calculate_costs.py.
"""

import polars as pl
from shared.surcharges import Surcharge


class Cool(Surcharge):
    """Cool TA-Q-BIN fee - cool handling requested on an eligible size."""

    name = "Cool"

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    amount_column = "cool_amount"

    @classmethod
    def conditions(cls) -> pl.Expr:
        return (
            pl.col("cool_requested") &
            ~pl.col("cool_error") &
            ~pl.col("size_error")
        )
