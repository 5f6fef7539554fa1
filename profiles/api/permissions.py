"""Profiles API permissions."""

from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsProfileOwner(BasePermission):
    """
    Writes are limited to `/profile/<own user id>/`.

    The path is checked before the profile is loaded, so a PATCH aimed at
    another user's id is refused even when that user has no profile yet.
    Staff get no exception.
    """

    message = "You are only allowed to update your own profile."

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return str(request.user.pk) == str(view.kwargs.get("pk"))

    def has_object_permission(self, request, view, obj):
        return request.method in SAFE_METHODS or obj.user_id == request.user.pk
