"""
TA-Q-BIN Discounts

Discounts are named toggles with a fixed negative amount per package
(data/reference/discounts.csv). They stack, except that the member
drop-off discount replaces the plain drop-off discount.
"""

import logging

import polars as pl


logger = logging.getLogger(__name__)

# Selecting the key replaces the value
SUPERSEDES = {"member_dropoff": "dropoff"}


def calc_discounts(selected, discounts: pl.DataFrame) -> tuple[int, list[str]]:
    """
    Total discount for the selected keys.

    Args:
        selected: Discount keys, in selection order. Duplicates count once.
        discounts: Definitions with columns key, amount

    Returns:
        (total, applied keys) - total is <= 0 JPY per package
    """
    amounts = dict(zip(discounts["key"].to_list(), discounts["amount"].to_list()))

    chosen = list(dict.fromkeys(selected))
    replaced = {SUPERSEDES[key] for key in chosen if key in SUPERSEDES}

    total = 0
    applied = []
    for key in chosen:
        if key in replaced:
            continue
        if key not in amounts:
            logger.warning("Unknown TA-Q-BIN discount '%s' ignored", key)
            continue
        total += int(amounts[key])
        applied.append(key)

    return total, applied


__all__ = ["calc_discounts", "SUPERSEDES"]
