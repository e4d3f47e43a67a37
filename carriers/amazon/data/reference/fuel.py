"""
Amazon Shipping Fuel Surcharge Configuration

The fuel percentage follows the weekly U.S. national average diesel price
($/gallon) through the banded table in fuel_diesel.csv. Each band covers
min <= price < max.

Prices outside the table extend the nearest edge band: every
INCREMENT_PRICE step moves the percentage by INCREMENT_PCT (down below the
table, up above it). The percentage never goes below zero.

Applied to the base rate only.

Last updated: 2026-01-05
"""

DEFAULT_DIESEL_PRICE = 3.60  # $/gallon

INCREMENT_PRICE = 0.25       # $/gallon per extension step
INCREMENT_PCT = 0.25         # Percentage points per extension step
