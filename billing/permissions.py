"""
Custom permission classes for role based access control.
"""
from rest_framework.permissions import BasePermission

BILLING_ROLES = {"clerk", "admin"}


class IsBillingRole(BasePermission):
    """Allow access only to users with a billing role."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) in BILLING_ROLES)
