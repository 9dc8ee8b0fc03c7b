"""
Trip-related enumerations.
"""

import enum


class TripStatus(str, enum.Enum):
    """Trip status enumeration."""
    SCHEDULED = "scheduled"  # Created, not yet departed
    IN_PROGRESS = "in-progress"  # Underway
    COMPLETED = "completed"
    CANCELLED = "cancelled"
