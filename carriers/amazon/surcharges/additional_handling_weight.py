"""
Additional Handling Surcharge - Weight (AHS-Wgt)

Triggers when:
- Actual weight > 50 lbs

Notes:
- First in the AHS sub-priority (Weight > Girth > Length > Width)
- Priced separately from the dimensional AHS variants
- No minimum billable weight
"""

import polars as pl
from shared.surcharges import Surcharge


class AHS_Weight(Surcharge):
    """Additional Handling Surcharge - Weight."""

    name = "AHS_Weight"
    label = "AHS-Wgt"

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    amount_column = "amount_ahs_weight"

    # -------------------------------------------------------------------------
    # EXCLUSIVITY
    # -------------------------------------------------------------------------
    exclusivity_group = "dimensional"
    priority = 3

    # -------------------------------------------------------------------------
    # THRESHOLDS
    # -------------------------------------------------------------------------
    WEIGHT_LBS = 50

    @classmethod
    def conditions(cls) -> pl.Expr:
        return pl.col("weight_lbs") > cls.WEIGHT_LBS

    @classmethod
    def reason(cls) -> pl.Expr:
        return pl.format("weight {} lb > {} lb", pl.col("weight_lbs").round(1), pl.lit(cls.WEIGHT_LBS))
