"""
Residential Delivery Charge

Flat per-package charge for FedEx Ground deliveries to residential
addresses. Commercial deliveries are not charged.

The fee comes from the reference tables (residential_fee column, default
$5.95) so a different tariff year can be quoted without code changes.
"""

import polars as pl
from shared.surcharges import Surcharge


class Residential(Surcharge):
    """Residential Delivery Charge - applies when delivering to a residence."""

    name = "Residential"

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    amount_column = "residential_fee"

    @classmethod
    def conditions(cls) -> pl.Expr:
        """Triggers for residential deliveries."""
        return pl.col("is_residential")
