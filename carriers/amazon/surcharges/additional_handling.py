"""
Additional Handling Surcharge - Dimensions (AHS-Dim)

Three variants, checked in sub-priority order after AHS - Weight:
- AHS_Girth:  Length + Girth > 105 inches
- AHS_Length: Length (longest side) > 47 inches
- AHS_Width:  Second longest side > 42 inches

All three report as "AHS-Dim" and charge the zone group's ahs_dim amount.
The split keeps the reported reason tied to the first threshold crossed.

No minimum billable weight.
"""

import polars as pl
from shared.surcharges import Surcharge


class _AHSDimension(Surcharge):
    """Shared pricing and reporting for the dimensional AHS variants."""

    label = "AHS-Dim"

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    amount_column = "amount_ahs_dim"

    # -------------------------------------------------------------------------
    # EXCLUSIVITY
    # -------------------------------------------------------------------------
    exclusivity_group = "dimensional"


class AHS_Girth(_AHSDimension):
    """AHS - Dimensions, length + girth."""

    name = "AHS_Girth"
    priority = 4

    LENGTH_PLUS_GIRTH_IN = 105

    @classmethod
    def conditions(cls) -> pl.Expr:
        return pl.col("length_plus_girth") > cls.LENGTH_PLUS_GIRTH_IN

    @classmethod
    def reason(cls) -> pl.Expr:
        return pl.format(
            "length+girth {} in > {} in", pl.col("length_plus_girth"), pl.lit(cls.LENGTH_PLUS_GIRTH_IN)
        )


class AHS_Length(_AHSDimension):
    """AHS - Dimensions, longest side."""

    name = "AHS_Length"
    priority = 5

    LONGEST_IN = 47

    @classmethod
    def conditions(cls) -> pl.Expr:
        return pl.col("longest_side_in") > cls.LONGEST_IN

    @classmethod
    def reason(cls) -> pl.Expr:
        return pl.format("longest side {} in > {} in", pl.col("longest_side_in"), pl.lit(cls.LONGEST_IN))


class AHS_Width(_AHSDimension):
    """AHS - Dimensions, second longest side."""

    name = "AHS_Width"
    priority = 6

    SECOND_LONGEST_IN = 42

    @classmethod
    def conditions(cls) -> pl.Expr:
        return pl.col("second_longest_in") > cls.SECOND_LONGEST_IN

    @classmethod
    def reason(cls) -> pl.Expr:
        return pl.format(
            "second side {} in > {} in", pl.col("second_longest_in"), pl.lit(cls.SECOND_LONGEST_IN)
        )
