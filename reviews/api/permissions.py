"""Reviews API permissions.

Contains request-level permissions for review endpoints. Ownership of a review
is checked by `reviews.services`.
"""

from rest_framework.permissions import BasePermission

from orders import policies


class IsClientReviewer(BasePermission):
    """Allow creating reviews only for authenticated users with profile.type == 'client'.

    Note:
        - 401 (unauthorized) is handled by IsAuthenticated at the view level.
        - This permission returns 403 if the user is authenticated but not a client.
    """

    message = "Only users with a 'client' profile can create reviews."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return policies.is_client_user(user)


class IsModerator(BasePermission):
    """Review moderation is restricted to staff users."""

    message = "Only admin staff users may moderate reviews."

    def has_permission(self, request, view):
        return policies.is_admin(request.user)
