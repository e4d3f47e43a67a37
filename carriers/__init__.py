"""
Carrier Calculators

Each carrier package is an independent engine with the same surface:

    calculate_costs(items, settings=None, tables=None) -> pl.DataFrame
    summarize(df) -> dict
    load_tables() -> <Carrier>Tables
    <Carrier>Settings

CALCULATORS registers them by name so callers can run one item list
through several carriers.

Usage:
    from carriers import CALCULATORS
    calc = CALCULATORS["fedex"]
    totals = calc.summarize(calc.calculate_costs(items, calc.settings(zone=5)))
"""

from typing import Callable, NamedTuple

from . import amazon, fedex, yamato


class Calculator(NamedTuple):
    """A registered carrier engine."""
    name: str
    label: str
    currency: str
    settings: type
    load_tables: Callable
    calculate_costs: Callable
    summarize: Callable


CALCULATORS: dict[str, Calculator] = {
    "fedex": Calculator(
        name="fedex",
        label="FedEx Ground",
        currency="USD",
        settings=fedex.FedExSettings,
        load_tables=fedex.load_tables,
        calculate_costs=fedex.calculate_costs,
        summarize=fedex.summarize,
    ),
    "amazon": Calculator(
        name="amazon",
        label="Amazon Shipping",
        currency="USD",
        settings=amazon.AmazonSettings,
        load_tables=amazon.load_tables,
        calculate_costs=amazon.calculate_costs,
        summarize=amazon.summarize,
    ),
    "yamato": Calculator(
        name="yamato",
        label="Yamato TA-Q-BIN",
        currency="JPY",
        settings=yamato.YamatoSettings,
        load_tables=yamato.load_tables,
        calculate_costs=yamato.calculate_costs,
        summarize=yamato.summarize,
    ),
}

__all__ = ["Calculator", "CALCULATORS"]
