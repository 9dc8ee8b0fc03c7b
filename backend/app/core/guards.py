"""
Security guards for role-based and ownership-based access control.
"""

from typing import List, Optional
from fastapi import Depends
from backend.app.models.enums import UserRole
from backend.app.core.dependencies import get_current_user
from backend.app.core.exceptions import InsufficientPermissionsError


def is_admin(current_user: dict) -> bool:
    return current_user.get("role") == UserRole.ADMIN.value


def require_role(allowed_roles: List[UserRole]):
    """
    Dependency factory for role-based access control.

    Usage:
        @router.put("/bookings/{booking_id}/payment-status")
        async def update_payment(current_user: dict = Depends(require_role([UserRole.ADMIN]))):
            ...

    Raises:
        InsufficientPermissionsError (403) if the token role is not allowed
    """
    allowed_values = {role.value for role in allowed_roles}

    async def role_checker(current_user: dict = Depends(get_current_user)) -> dict:
        if current_user.get("role") not in allowed_values:
            raise InsufficientPermissionsError(
                f"Access denied. Required role: {', '.join(sorted(allowed_values))}"
            )
        return current_user

    return role_checker


class OwnershipGuard:
    """
    Ownership checks for records that belong to one identity.

    Admins can access everything; everyone else only what they own.
    """

    def can_access(self, resource_owner_id: int, current_user: dict) -> bool:
        if is_admin(current_user):
            return True
        return resource_owner_id == current_user.get("user_id")

    def enforce(self, resource_owner_id: int, current_user: dict):
        """
        Raise 403 if the caller is neither admin nor the owner.
        """
        if not self.can_access(resource_owner_id, current_user):
            raise InsufficientPermissionsError()

    def filter_by_ownership(self, current_user: dict) -> Optional[int]:
        """
        Get the owner_id to filter list queries by.

        Returns:
            None for admins (no filtering), the caller's user_id otherwise
        """
        if is_admin(current_user):
            return None
        return current_user.get("user_id")
