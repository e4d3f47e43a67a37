"""
Extra Heavy Surcharge

Packages beyond Amazon Shipping's standard limits.

Triggers when ANY of the following conditions are met:
- Actual weight > 150 lbs
- Length + Girth > 165 inches
- Length (longest side) > 108 inches

Notes:
- Highest priority in the dimensional group
- Flat fee in every zone group; the rate itself is looked up at 150 lbs
  instead of scaling
"""

import polars as pl
from shared.surcharges import Surcharge


class ExtraHeavy(Surcharge):
    """Extra Heavy Surcharge - over maximum weight or size."""

    name = "ExtraHeavy"

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    amount_column = "amount_extra_heavy"

    # -------------------------------------------------------------------------
    # EXCLUSIVITY
    # -------------------------------------------------------------------------
    exclusivity_group = "dimensional"
    priority = 1

    # -------------------------------------------------------------------------
    # THRESHOLDS
    # -------------------------------------------------------------------------
    WEIGHT_LBS = 150
    LENGTH_PLUS_GIRTH_IN = 165
    LONGEST_IN = 108

    @classmethod
    def conditions(cls) -> pl.Expr:
        return (
            (pl.col("weight_lbs") > cls.WEIGHT_LBS) |
            (pl.col("length_plus_girth") > cls.LENGTH_PLUS_GIRTH_IN) |
            (pl.col("longest_side_in") > cls.LONGEST_IN)
        )

    @classmethod
    def reason(cls) -> pl.Expr:
        return (
            pl.when(pl.col("weight_lbs") > cls.WEIGHT_LBS)
            .then(pl.format("weight {} lb > {} lb", pl.col("weight_lbs").round(1), pl.lit(cls.WEIGHT_LBS)))
            .when(pl.col("length_plus_girth") > cls.LENGTH_PLUS_GIRTH_IN)
            .then(pl.format(
                "length+girth {} in > {} in", pl.col("length_plus_girth"), pl.lit(cls.LENGTH_PLUS_GIRTH_IN)
            ))
            .otherwise(pl.format("longest side {} in > {} in", pl.col("longest_side_in"), pl.lit(cls.LONGEST_IN)))
        )
