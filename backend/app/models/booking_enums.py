"""
Booking-related enumerations.
"""

import enum


class BookingStatus(str, enum.Enum):
    """
    Booking status enumeration.

    No transition table: any status may be set from any status.
    """
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_TRANSIT = "in-transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    """Booking payment status enumeration."""
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class CargoType(str, enum.Enum):
    """Cargo handling class."""
    GENERAL = "general"
    HAZARDOUS = "hazardous"
    PERISHABLE = "perishable"
    VALUABLE = "valuable"
