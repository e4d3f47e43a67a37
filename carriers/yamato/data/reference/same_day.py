"""
Yamato Same-Day Delivery Fees (JPY, tax included)

Flat per-package fee. Routes touching REMOTE_ZONE pay the reduced fee.
REMOTE_ZONE is also excluded from the intra-prefecture rate table.
"""

SAME_DAY_STANDARD = 550
SAME_DAY_REMOTE = 330

REMOTE_ZONE = "okinawa"
