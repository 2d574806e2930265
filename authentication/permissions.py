"""
DRF permission classes for the marketplace roles.

The role is re-read from the database on every check so that a vendor demoted
or rejected by an admin loses access without waiting for the session to expire.
"""

from typing import Tuple

from rest_framework.permissions import BasePermission

from utils.rbac import ROLE_ADMIN, ROLE_VENDOR, is_admin


def current_role(user) -> str:
    """Persisted role of an authenticated user; admins resolve to ``admin``."""
    if is_admin(user):
        return ROLE_ADMIN
    return user.__class__.objects.filter(pk=user.pk).values_list("role", flat=True).first() or ""


class RoleRequired(BasePermission):
    allowed_roles: Tuple[str, ...] = ()
    message = "Insufficient role to access this resource."

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if user is None or not user.is_authenticated:
            return False
        return current_role(user) in self.allowed_roles


class VendorRequired(RoleRequired):
    allowed_roles = (ROLE_VENDOR,)
    message = "Vendor access required."


class AdminRequired(RoleRequired):
    allowed_roles = (ROLE_ADMIN,)
    message = "Admin access required."
