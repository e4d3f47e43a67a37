"""
Yamato TA-Q-BIN Carrier Module

Shipping cost calculator for Yamato Transport TA-Q-BIN (domestic Japan).
Size-tier pricing in JPY, no dimensional weight.
"""

from .calculate_costs import calculate_costs, summarize
from .data import YamatoSettings, YamatoTables, load_tables
from .version import VERSION

__all__ = ["calculate_costs", "summarize", "YamatoSettings", "YamatoTables", "load_tables", "VERSION"]
