"""
Amazon Shipping Carrier Module

Shipping cost calculator for Amazon Shipping ground quotes.
Surcharges priced by zone group, fuel indexed to the diesel price.
"""

from .calculate_costs import calculate_costs, summarize
from .data import AmazonSettings, AmazonTables, load_tables
from .version import VERSION

__all__ = ["calculate_costs", "summarize", "AmazonSettings", "AmazonTables", "load_tables", "VERSION"]
