"""
Delivery Area Surcharge (DAS)

Amazon Shipping has three flat DAS tiers, not split by delivery type:

    Delivery Area, Extended Delivery Area, Remote Area

The das_amount column is resolved by _lookup_das() in calculate_costs.py.
"None" and unknown tiers resolve to null and never trigger.
"""

import polars as pl
from shared.surcharges import Surcharge


class DAS(Surcharge):
    """Delivery Area Surcharge - destination is in a DAS tier."""

    name = "DAS"

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    amount_column = "das_amount"

    @classmethod
    def conditions(cls) -> pl.Expr:
        return pl.col("das_amount").is_not_null()
