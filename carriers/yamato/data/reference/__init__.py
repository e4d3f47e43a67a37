"""Yamato TA-Q-BIN reference data: zones, rates, cool fees and discounts."""

from pathlib import Path

import polars as pl

from carriers.yamato.data.reference.size_tiers import (
    SIZE_TIERS,
    WEIGHT_LIMITS_KG,
    MAX_LONGEST_CM,
    MAX_THREE_SIDE_CM,
    MAX_WEIGHT_KG,
    MAX_COOL_SIZE,
)
from carriers.yamato.data.reference.same_day import SAME_DAY_STANDARD, SAME_DAY_REMOTE, REMOTE_ZONE

REFERENCE_DIR = Path(__file__).parent

PAYMENT_METHODS = ["cash", "cashless"]


def load_zones() -> pl.DataFrame:
    """
    Load the delivery zones.

    Returns:
        DataFrame with columns: id, name_ja, name_en
    """
    return pl.read_csv(
        REFERENCE_DIR / "zones.csv",
        schema_overrides={"id": pl.Utf8, "name_ja": pl.Utf8, "name_en": pl.Utf8}
    )


def load_rates() -> pl.DataFrame:
    """
    Load the cash and cashless route tables in long format, ready for joining.

    Each wide CSV has one row per origin x size and one column per
    destination zone.

    Returns:
        DataFrame with columns:
            - origin: Origin zone id
            - size: Size tier (60-200)
            - destination: Destination zone id
            - payment: "cash" or "cashless"
            - rate: Rate in JPY
    """
    frames = []
    for payment in PAYMENT_METHODS:
        df = pl.read_csv(REFERENCE_DIR / f"rates_{payment}.csv")
        dest_cols = [c for c in df.columns if c not in ("origin", "size")]
        frames.append(
            df.unpivot(
                index=["origin", "size"],
                on=dest_cols,
                variable_name="destination",
                value_name="rate"
            ).with_columns(pl.lit(payment).alias("payment"))
        )

    return pl.concat(frames).with_columns(
        pl.col("origin").cast(pl.Utf8),
        pl.col("size").cast(pl.Int64),
        pl.col("destination").cast(pl.Utf8),
        pl.col("rate").cast(pl.Int64),
    ).select(["origin", "size", "destination", "payment", "rate"])


def load_intrapref_rates() -> pl.DataFrame:
    """
    Load the intra-prefecture table in long format.

    Returns:
        DataFrame with columns: size, payment, rate
    """
    df = pl.read_csv(REFERENCE_DIR / "rates_intrapref.csv")
    return df.unpivot(
        index="size",
        on=PAYMENT_METHODS,
        variable_name="payment",
        value_name="rate"
    ).with_columns(
        pl.col("size").cast(pl.Int64),
        pl.col("rate").cast(pl.Int64),
    ).select(["size", "payment", "rate"])


def load_cool() -> pl.DataFrame:
    """
    Load Cool TA-Q-BIN fees by size.

    Returns:
        DataFrame with columns: size, amount
    """
    return pl.read_csv(
        REFERENCE_DIR / "cool.csv",
        schema_overrides={"size": pl.Int64, "amount": pl.Int64}
    )


def load_discounts() -> pl.DataFrame:
    """
    Load discount definitions. Amounts are negative JPY per package.

    Returns:
        DataFrame with columns: key, name_ja, name_en, amount
    """
    return pl.read_csv(
        REFERENCE_DIR / "discounts.csv",
        schema_overrides={"key": pl.Utf8, "name_ja": pl.Utf8, "name_en": pl.Utf8, "amount": pl.Int64}
    )


__all__ = [
    "REFERENCE_DIR",
    "PAYMENT_METHODS",
    "load_zones",
    "load_rates",
    "load_intrapref_rates",
    "load_cool",
    "load_discounts",
    "SIZE_TIERS",
    "WEIGHT_LIMITS_KG",
    "MAX_LONGEST_CM",
    "MAX_THREE_SIDE_CM",
    "MAX_WEIGHT_KG",
    "MAX_COOL_SIZE",
    "SAME_DAY_STANDARD",
    "SAME_DAY_REMOTE",
    "REMOTE_ZONE",
]
