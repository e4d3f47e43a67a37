"""
Unauthorized Package Charge

Applies to packages FedEx Ground does not accept under normal terms.

Triggers when ANY of the following conditions are met:
- Actual weight > 150 lbs
- Length (longest side) > 108 inches
- Length + Girth > 165 inches

Notes:
- Highest priority in the dimensional group (beats Oversize and AHS)
- Flat fee, the same in every zone

Side effect: Minimum billable weight of 90 lbs when triggered.
"""

import polars as pl
from shared.surcharges import Surcharge


class Unauthorized(Surcharge):
    """Unauthorized Package Charge - over maximum weight or size."""

    name = "Unauthorized"
    label = "Unauthorized"

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    amount_column = "amount_unauthorized"

    # -------------------------------------------------------------------------
    # EXCLUSIVITY
    # -------------------------------------------------------------------------
    exclusivity_group = "dimensional"
    priority = 1

    # -------------------------------------------------------------------------
    # SIDE EFFECTS
    # -------------------------------------------------------------------------
    min_billable_weight = 90

    # -------------------------------------------------------------------------
    # THRESHOLDS
    # -------------------------------------------------------------------------
    WEIGHT_LBS = 150
    LONGEST_IN = 108
    LENGTH_PLUS_GIRTH_IN = 165

    @classmethod
    def conditions(cls) -> pl.Expr:
        return (
            (pl.col("weight_lbs") > cls.WEIGHT_LBS) |
            (pl.col("longest_side_in") > cls.LONGEST_IN) |
            (pl.col("length_plus_girth") > cls.LENGTH_PLUS_GIRTH_IN)
        )

    @classmethod
    def reason(cls) -> pl.Expr:
        return (
            pl.when(pl.col("weight_lbs") > cls.WEIGHT_LBS)
            .then(pl.format("weight {} lb > {} lb", pl.col("weight_lbs").round(1), pl.lit(cls.WEIGHT_LBS)))
            .when(pl.col("longest_side_in") > cls.LONGEST_IN)
            .then(pl.format("longest side {} in > {} in", pl.col("longest_side_in"), pl.lit(cls.LONGEST_IN)))
            .otherwise(pl.format(
                "length+girth {} in > {} in", pl.col("length_plus_girth"), pl.lit(cls.LENGTH_PLUS_GIRTH_IN)
            ))
        )
