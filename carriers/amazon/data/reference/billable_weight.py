"""
Amazon Shipping Billable Weight Configuration

Same whole-inch, whole-pound convention as FedEx Ground:
    dim_weight      = ceil(L_in) x ceil(W_in) x ceil(H_in) / DIM_FACTOR
    billable_weight = max(ceil(max(actual_weight, dim_weight)), 1)

LargePkg raises the billable weight to 90 lbs. Packages over 150 lbs are
rated at the 150 lb row; ExtraHeavy covers the excess as a flat fee.

Reference: Amazon Shipping 2026 rate card
"""

# Dimensional weight divisor (cubic inches per pound)
DIM_FACTOR = 139

# Rate lookups are clamped to this row
MAX_TABLE_LB = 150
