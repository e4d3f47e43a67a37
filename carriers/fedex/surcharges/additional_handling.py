"""
Additional Handling Surcharge - Dimensions (AHS-Dim)

Applies to packages that exceed dimensional thresholds and require special
handling due to their size.

Triggers when ANY of the following conditions are met:
- Length (longest side) > 48 inches
- Second longest side > 30 inches
- Length + Girth > 105 inches

Notes:
- Mutually exclusive with Unauthorized and Oversize (both win)
- When AHS - Weight also applies, the costlier of the two for the zone is
  charged (AHS - Weight on a tie), see AHS_Weight

Side effect: Minimum billable weight of 40 lbs when triggered.
"""

import polars as pl
from shared.surcharges import Surcharge


AHS_WEIGHT_LBS = 50  # AHS - Weight threshold, see AHS_Weight


class AHS(Surcharge):
    """
    Additional Handling Surcharge - Dimensions.

    FedEx charges AHS for packages that exceed size thresholds,
    requiring additional handling during transit.
    """

    name = "AHS"
    label = "AHS-Dim"

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    amount_column = "amount_ahs_dim"

    # -------------------------------------------------------------------------
    # EXCLUSIVITY
    # -------------------------------------------------------------------------
    exclusivity_group = "dimensional"
    priority = 4  # Loses to Unauthorized (1), Oversize (2), AHS - Weight (3)

    # -------------------------------------------------------------------------
    # SIDE EFFECTS
    # -------------------------------------------------------------------------
    min_billable_weight = 40  # 40 lbs minimum when AHS triggers

    # -------------------------------------------------------------------------
    # THRESHOLDS
    # -------------------------------------------------------------------------
    LONGEST_IN = 48         # Length > 48"
    SECOND_LONGEST_IN = 30  # Second longest > 30"
    GIRTH_IN = 105          # Length + 2x(W+H) > 105"

    @classmethod
    def conditions(cls) -> pl.Expr:
        """
        Triggers when package exceeds any dimensional threshold.

        Uses length_plus_girth column which is calculated as:
        longest_side + 2 x (sum of other two sides)
        """
        return (
            (pl.col("longest_side_in") > cls.LONGEST_IN) |
            (pl.col("second_longest_in") > cls.SECOND_LONGEST_IN) |
            (pl.col("length_plus_girth") > cls.GIRTH_IN)
        )

    @classmethod
    def reason(cls) -> pl.Expr:
        dim_reason = (
            pl.when(pl.col("longest_side_in") > cls.LONGEST_IN)
            .then(pl.format("longest side {} in > {} in", pl.col("longest_side_in"), pl.lit(cls.LONGEST_IN)))
            .when(pl.col("second_longest_in") > cls.SECOND_LONGEST_IN)
            .then(pl.format(
                "second side {} in > {} in", pl.col("second_longest_in"), pl.lit(cls.SECOND_LONGEST_IN)
            ))
            .otherwise(pl.format("length+girth {} in > {} in", pl.col("length_plus_girth"), pl.lit(cls.GIRTH_IN)))
        )

        # Both AHS conditions held and dimensions cost more in this zone
        return (
            pl.when(pl.col("weight_lbs") > AHS_WEIGHT_LBS)
            .then(pl.format(
                "dim+weight both apply, dim (${}) > weight (${})",
                pl.col("amount_ahs_dim").fill_null(0.0),
                pl.col("amount_ahs_weight").fill_null(0.0),
            ))
            .otherwise(dim_reason)
        )
