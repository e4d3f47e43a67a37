"""
TA-Q-BIN Acceptance Limits

Packages beyond any of these are not accepted, so the line gets a
size_error instead of a rate. Checked in order, first match is reported:

1. Longest side > 170 cm
2. Three-side sum > 200 cm
3. Weight > 30 kg

The rules share the Surcharge interface so the same first-match applier
evaluates them; they carry no cost.
"""

import polars as pl
from shared.surcharges import Surcharge

from ..data.reference import MAX_LONGEST_CM, MAX_THREE_SIDE_CM, MAX_WEIGHT_KG


class LongestSide(Surcharge):
    """Longest side over the limit."""

    name = "Limit_Longest"
    label = "longest_side"

    exclusivity_group = "limits"
    priority = 1

    LONGEST_CM = MAX_LONGEST_CM

    @classmethod
    def conditions(cls) -> pl.Expr:
        return pl.col("longest_side_cm") > cls.LONGEST_CM

    @classmethod
    def reason(cls) -> pl.Expr:
        return pl.format(
            "longest side {} cm > {} cm",
            pl.col("longest_side_cm").round(0).cast(pl.Int64),
            pl.lit(cls.LONGEST_CM),
        )


class ThreeSideSum(Surcharge):
    """Sum of the three sides over the limit."""

    name = "Limit_Sum"
    label = "three_side_sum"

    exclusivity_group = "limits"
    priority = 2

    THREE_SIDE_CM = MAX_THREE_SIDE_CM

    @classmethod
    def conditions(cls) -> pl.Expr:
        return pl.col("three_side_sum_cm") > cls.THREE_SIDE_CM

    @classmethod
    def reason(cls) -> pl.Expr:
        return pl.format(
            "three-side sum {} cm > {} cm",
            pl.col("three_side_sum_cm").round(0).cast(pl.Int64),
            pl.lit(cls.THREE_SIDE_CM),
        )


class OverWeight(Surcharge):
    """Actual weight over the limit."""

    name = "Limit_Weight"
    label = "weight"

    exclusivity_group = "limits"
    priority = 3

    WEIGHT_KG = MAX_WEIGHT_KG

    @classmethod
    def conditions(cls) -> pl.Expr:
        return pl.col("weight_kg") > cls.WEIGHT_KG

    @classmethod
    def reason(cls) -> pl.Expr:
        return pl.format("weight {} kg > {} kg", pl.col("weight_kg").round(1), pl.lit(cls.WEIGHT_KG))
