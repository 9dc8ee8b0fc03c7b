"""
User roles enumeration.

Defines the role types for the cargo management system.
"""

import enum


class UserRole(str, enum.Enum):
    """
    User role enumeration.

    Roles:
        ADMIN: Sees and manages every booking
        USER: Cargo client, sees only own bookings (default role)
        DRIVER: Road/rail vehicle operator
        PILOT: Aircraft operator
    """
    ADMIN = "admin"
    USER = "user"
    DRIVER = "driver"
    PILOT = "pilot"

    @classmethod
    def coerce(cls, value) -> "UserRole":
        """Map an arbitrary value to a role, falling back to USER."""
        try:
            return cls(value)
        except ValueError:
            return cls.USER
