"""
Large Package Surcharge

Triggers when ANY of the following conditions are met:
- Length + Girth > 130 inches
- Length (longest side) > 96 inches

Notes:
- Loses to ExtraHeavy, wins over AHS and NonStandard

Side effect: Minimum billable weight of 90 lbs when triggered.
"""

import polars as pl
from shared.surcharges import Surcharge


class LargePackage(Surcharge):
    """Large Package Surcharge."""

    name = "LargePackage"
    label = "LargePkg"

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    amount_column = "amount_large_package"

    # -------------------------------------------------------------------------
    # EXCLUSIVITY
    # -------------------------------------------------------------------------
    exclusivity_group = "dimensional"
    priority = 2  # Loses to ExtraHeavy (1)

    # -------------------------------------------------------------------------
    # SIDE EFFECTS
    # -------------------------------------------------------------------------
    min_billable_weight = 90

    # -------------------------------------------------------------------------
    # THRESHOLDS
    # -------------------------------------------------------------------------
    LENGTH_PLUS_GIRTH_IN = 130
    LONGEST_IN = 96

    @classmethod
    def conditions(cls) -> pl.Expr:
        return (
            (pl.col("length_plus_girth") > cls.LENGTH_PLUS_GIRTH_IN) |
            (pl.col("longest_side_in") > cls.LONGEST_IN)
        )

    @classmethod
    def reason(cls) -> pl.Expr:
        return (
            pl.when(pl.col("length_plus_girth") > cls.LENGTH_PLUS_GIRTH_IN)
            .then(pl.format(
                "length+girth {} in > {} in", pl.col("length_plus_girth"), pl.lit(cls.LENGTH_PLUS_GIRTH_IN)
            ))
            .otherwise(pl.format("longest side {} in > {} in", pl.col("longest_side_in"), pl.lit(cls.LONGEST_IN)))
        )
