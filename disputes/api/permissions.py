from rest_framework.permissions import BasePermission

from orders import policies


class IsDisputeAdmin(BasePermission):
    """Admin dispute endpoints are restricted to staff users."""

    message = "Only admin staff users may arbitrate disputes."

    def has_permission(self, request, view):
        return policies.can_arbitrate(request.user)
