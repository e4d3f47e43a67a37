"""
FedEx Ground Billable Weight Configuration

FedEx Ground bills on whole inches and whole pounds:
    dim_weight      = ceil(L_in) x ceil(W_in) x ceil(H_in) / DIM_FACTOR
    billable_weight = max(ceil(max(actual_weight, dim_weight)), 1)

No threshold - dimensional weight is always considered. Surcharges can
raise the billable weight further (Oversize/Unauthorized 90 lb, AHS-Dim 40 lb).

Reference: FedEx Service Guide 2025, Ground / Home Delivery
"""

# Dimensional weight divisor (cubic inches per pound)
DIM_FACTOR = 139

# Last row of the weight x zone rate table; heavier packages scale
# proportionally from this row
MAX_TABLE_LB = 150
