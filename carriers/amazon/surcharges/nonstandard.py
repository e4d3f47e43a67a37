"""
Non-Standard Package Surcharge

Lowest rule in the dimensional group. Triggers when ANY of:
- Length (longest side) > 37 inches
- Second longest side > 30 inches
- Third longest side > 24 inches
"""

import polars as pl
from shared.surcharges import Surcharge


class NonStandard(Surcharge):
    """Non-Standard Package Surcharge."""

    name = "NonStandard"
    label = "NonStd"

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    amount_column = "amount_nonstandard"

    # -------------------------------------------------------------------------
    # EXCLUSIVITY
    # -------------------------------------------------------------------------
    exclusivity_group = "dimensional"
    priority = 7

    # -------------------------------------------------------------------------
    # THRESHOLDS
    # -------------------------------------------------------------------------
    LONGEST_IN = 37
    SECOND_LONGEST_IN = 30
    THIRD_LONGEST_IN = 24

    @classmethod
    def conditions(cls) -> pl.Expr:
        return (
            (pl.col("longest_side_in") > cls.LONGEST_IN) |
            (pl.col("second_longest_in") > cls.SECOND_LONGEST_IN) |
            (pl.col("third_longest_in") > cls.THIRD_LONGEST_IN)
        )

    @classmethod
    def reason(cls) -> pl.Expr:
        return (
            pl.when(pl.col("longest_side_in") > cls.LONGEST_IN)
            .then(pl.format("longest side {} in > {} in", pl.col("longest_side_in"), pl.lit(cls.LONGEST_IN)))
            .when(pl.col("second_longest_in") > cls.SECOND_LONGEST_IN)
            .then(pl.format(
                "second side {} in > {} in", pl.col("second_longest_in"), pl.lit(cls.SECOND_LONGEST_IN)
            ))
            .otherwise(pl.format(
                "third side {} in > {} in", pl.col("third_longest_in"), pl.lit(cls.THIRD_LONGEST_IN)
            ))
        )
