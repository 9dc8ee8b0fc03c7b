"""
Vehicle-related enumerations.
"""

import enum


class VehicleType(str, enum.Enum):
    PLANE = "plane"
    SHIP = "ship"
    TRAIN = "train"
    TRUCK = "truck"


class VehicleStatus(str, enum.Enum):
    """Fleet status. Any status is reachable from any other."""
    OPERATING = "operating"
    MAINTENANCE = "maintenance"
    GROUNDED = "grounded"
