"""
Surcharge Base Class

Shared base class for all carrier surcharge rules.
"""

from abc import ABC
import polars as pl


# =============================================================================
# BASE CLASS
# =============================================================================

class Surcharge(ABC):
    """
    Base class for all surcharges.

    A surcharge is a predicate -> outcome rule evaluated against the
    supplemented shipment DataFrame. Rules sharing an exclusivity group are
    evaluated in priority order and only the first match applies.

    Attributes:
        IDENTITY
            name            - Short code, used for column names (e.g., "AHS")
            label           - Reported surcharge type (e.g., "AHS-Dim")

        PRICING
            amount_column   - Column holding the zone-resolved amount

        EXCLUSIVITY (for mutually exclusive surcharges)
            exclusivity_group - Group name (e.g., "dimensional")
            priority          - Rank within group (1 = highest, wins ties)

        SIDE EFFECTS
            min_billable_weight - Minimum billable weight when triggered
    """

    # -------------------------------------------------------------------------
    # IDENTITY
    # -------------------------------------------------------------------------
    name: str
    label: str | None = None

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    amount_column: str | None = None

    # -------------------------------------------------------------------------
    # EXCLUSIVITY
    # -------------------------------------------------------------------------
    exclusivity_group: str | None = None
    priority: int | None = None

    # -------------------------------------------------------------------------
    # SIDE EFFECTS
    # -------------------------------------------------------------------------
    min_billable_weight: int | None = None

    # -------------------------------------------------------------------------
    # METHODS
    # -------------------------------------------------------------------------

    @classmethod
    def type_name(cls) -> str:
        """Surcharge type reported on the line (label, falling back to name)."""
        return cls.label or cls.name

    @classmethod
    def cost(cls) -> pl.Expr | float:
        """
        Cost per package when triggered.

        Defaults to the amount column joined during supplement_shipments().
        Missing amounts (unmapped zone, tier or group) cost nothing.
        """
        if cls.amount_column is None:
            return 0.0
        return pl.col(cls.amount_column).fill_null(0.0)

    @classmethod
    def conditions(cls) -> pl.Expr:
        """
        Polars expression for when this surcharge triggers.

        Default returns False. Override with the carrier thresholds.
        """
        return pl.lit(False)

    @classmethod
    def reason(cls) -> pl.Expr:
        """Human-readable explanation of why the surcharge triggered."""
        return pl.lit(cls.type_name())
