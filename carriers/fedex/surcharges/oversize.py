"""
Oversize Surcharge

Applies to packages that exceed size limits requiring special handling as
oversized freight.

Triggers when ANY of the following conditions are met:
- Length (longest side) > 96 inches
- Length + Girth > 130 inches

Notes:
- Loses to Unauthorized, wins over AHS (both weight and dimensions)

Side effect: Minimum billable weight of 90 lbs when triggered.
"""

import polars as pl
from shared.surcharges import Surcharge


class Oversize(Surcharge):
    """
    Oversize Surcharge.

    Mutually exclusive with AHS - if Oversize applies, AHS does not.
    """

    name = "Oversize"
    label = "Oversize"

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    amount_column = "amount_oversize"

    # -------------------------------------------------------------------------
    # EXCLUSIVITY
    # -------------------------------------------------------------------------
    exclusivity_group = "dimensional"
    priority = 2  # Loses to Unauthorized (1)

    # -------------------------------------------------------------------------
    # SIDE EFFECTS
    # -------------------------------------------------------------------------
    min_billable_weight = 90

    # -------------------------------------------------------------------------
    # THRESHOLDS
    # -------------------------------------------------------------------------
    LONGEST_IN = 96             # Length > 96"
    LENGTH_PLUS_GIRTH_IN = 130  # Length + Girth > 130"

    @classmethod
    def conditions(cls) -> pl.Expr:
        return (
            (pl.col("longest_side_in") > cls.LONGEST_IN) |
            (pl.col("length_plus_girth") > cls.LENGTH_PLUS_GIRTH_IN)
        )

    @classmethod
    def reason(cls) -> pl.Expr:
        return (
            pl.when(pl.col("longest_side_in") > cls.LONGEST_IN)
            .then(pl.format("longest side {} in > {} in", pl.col("longest_side_in"), pl.lit(cls.LONGEST_IN)))
            .otherwise(pl.format(
                "length+girth {} in > {} in", pl.col("length_plus_girth"), pl.lit(cls.LENGTH_PLUS_GIRTH_IN)
            ))
        )
