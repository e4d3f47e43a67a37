"""
FedEx Residential Delivery Charge

Flat per-package charge for Ground deliveries to residential addresses.
"""

RESIDENTIAL_FEE = 5.95
