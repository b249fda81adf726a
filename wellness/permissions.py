"""
Custom permission classes for role based access control.
"""
from rest_framework.permissions import BasePermission

ADMIN_ROLES = {"counselor", "admin"}


def is_admin_user(user) -> bool:
    return bool(user and getattr(user, "is_authenticated", False) and getattr(user, "role", None) in ADMIN_ROLES)


class IsAdminRole(BasePermission):
    """Allow access only to users with an administrative role."""
    message = "You do not have admin privileges"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return is_admin_user(getattr(request, "user", None))
