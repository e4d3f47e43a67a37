"""
Additional Handling Surcharge - Weight (AHS-Wgt)

Applies to packages that exceed the weight threshold requiring special
handling.

Triggers when:
- Actual weight > 50 lbs

Notes:
- Mutually exclusive with Unauthorized and Oversize (both win)
- When the dimensional AHS also applies, the higher amount for the
  shipping zone is charged. Equal amounts go to AHS - Weight.
- No minimum billable weight
"""

import polars as pl
from shared.surcharges import Surcharge

from .additional_handling import AHS, AHS_WEIGHT_LBS


class AHS_Weight(Surcharge):
    """
    Additional Handling Surcharge - Weight.

    FedEx charges AHS - Weight for packages over 50 lbs,
    requiring additional handling during transit.
    """

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
    priority = 3  # Wins over AHS - Dimensions (4) unless dimensions cost more

    # -------------------------------------------------------------------------
    # THRESHOLDS
    # -------------------------------------------------------------------------
    WEIGHT_LBS = AHS_WEIGHT_LBS  # Actual weight > 50 lbs

    @classmethod
    def conditions(cls) -> pl.Expr:
        """
        Triggers when actual weight exceeds threshold, unless the dimensional
        AHS also applies and is strictly more expensive for the zone.
        """
        over_weight = pl.col("weight_lbs") > cls.WEIGHT_LBS
        dim_costs_more = (
            pl.col("amount_ahs_dim").fill_null(0.0) >
            pl.col("amount_ahs_weight").fill_null(0.0)
        )
        return over_weight & ~(AHS.conditions() & dim_costs_more)

    @classmethod
    def reason(cls) -> pl.Expr:
        return (
            pl.when(AHS.conditions())
            .then(pl.format(
                "dim+weight both apply, weight (${}) >= dim (${})",
                pl.col("amount_ahs_weight").fill_null(0.0),
                pl.col("amount_ahs_dim").fill_null(0.0),
            ))
            .otherwise(pl.format("weight {} lb > {} lb", pl.col("weight_lbs").round(1), pl.lit(cls.WEIGHT_LBS)))
        )
