"""
FedEx Fuel Surcharge Configuration

FedEx publishes weekly fuel surcharge rates based on the U.S. Energy
Information Administration's weekly national average diesel fuel price.
The quote takes the published percentage as a setting.

The fuel surcharge is applied to the base rate only (not to AHS, Oversize,
residential or DAS charges).

Source: https://www.fedex.com/en-us/shipping/fuel-surcharge.html
Last updated: 2025-12-01
"""

DEFAULT_FUEL_PCT = 18.0      # Percent of base rate
