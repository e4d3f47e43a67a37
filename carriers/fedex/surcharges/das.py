"""
Delivery Area Surcharge (DAS)

Applies to deliveries in designated remote/extended areas. FedEx has
multiple DAS tiers, each with a residential and a commercial price:

    Base, Extended, Remote, Alaska, Hawaii, Intra-Hawaii

The das_amount column is resolved by _lookup_das() in calculate_costs.py
from the selected tier and delivery type. "None" and unknown tiers resolve
to null and never trigger.
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
        """Triggers when das_amount was resolved (any known tier)."""
        return pl.col("das_amount").is_not_null()
