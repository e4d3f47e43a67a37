"""
Amazon Shipping Zone Groups

Surcharge amounts are priced per zone group, not per zone
(zone_groups.csv maps 2 -> "2", 3-4 -> "3-4", 5-8 -> "5+").
Zones missing from the map fall into DEFAULT_ZONE_GROUP.
"""

DEFAULT_ZONE_GROUP = "5+"
