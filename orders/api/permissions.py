"""Orders API permissions.

Request-level permission classes used by the orders and responses endpoints.
They wrap the predicates in `orders.policies`; object-level checks that need
the locked order live in the services and raise `ForbiddenError` there.
"""

from rest_framework.permissions import BasePermission

from orders import policies


class IsClientUser(BasePermission):
    """Allows access only to authenticated users with profile.type == 'client'.

    Intended for POST /api/orders/ to ensure only clients can create orders.
    """

    message = "Only users with type 'client' can create orders."

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated) and policies.is_client_user(request.user)


class IsExecutorUser(BasePermission):
    """Allows access only to authenticated users with profile.type == 'executor'."""

    message = "Only users with type 'executor' can do this."

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated) and policies.is_executor_user(request.user)


class IsAdminStaff(BasePermission):
    """Allows access only to authenticated staff (admin) users."""

    message = "Only admin staff users may do this."

    def has_permission(self, request, view):
        return policies.is_admin(request.user)
