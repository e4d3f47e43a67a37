"""
FedEx Ground Carrier Module

Shipping cost calculator for FedEx Ground / Home Delivery quotes.
"""

from .calculate_costs import calculate_costs, summarize
from .data import FedExSettings, FedExTables, load_tables
from .version import VERSION

__all__ = ["calculate_costs", "summarize", "FedExSettings", "FedExTables", "load_tables", "VERSION"]
