"""
Yamato TA-Q-BIN Size Tiers

TA-Q-BIN has no dimensional weight divisor. Each size tier has a
three-side-sum ceiling (the tier itself, in cm) and a weight ceiling (kg);
the applied size is the larger of the two tiers a package falls into.

    Size    Sum (cm)    Weight (kg)
    60      <= 60       <= 2
    80      <= 80       <= 5
    100     <= 100      <= 10
    120     <= 120      <= 15
    140     <= 140      <= 20
    160     <= 160      <= 25
    180     <= 180      <= 30
    200     <= 200      <= 30

Packages beyond the hard limits are not accepted at all.

Effective: 2025-12-01
"""

SIZE_TIERS = [60, 80, 100, 120, 140, 160, 180, 200]

WEIGHT_LIMITS_KG = {
    60: 2,
    80: 5,
    100: 10,
    120: 15,
    140: 20,
    160: 25,
    180: 30,
    200: 30,
}

# Hard limits, checked in this order
MAX_LONGEST_CM = 170
MAX_THREE_SIDE_CM = 200
MAX_WEIGHT_KG = 30

# Cool TA-Q-BIN is offered up to this size
MAX_COOL_SIZE = 120
