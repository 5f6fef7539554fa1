"""Profiles API views.

Provides endpoints to retrieve a single profile (by user id) and to update the
owner's own profile. Also exposes list endpoints for executor and client
profiles. Authentication is required for all endpoints; write access is limited
to the profile owner.
"""

from django.shortcuts import get_object_or_404
from rest_framework import generics
from rest_framework.permissions import IsAuthenticated

from ..models import Profile
from .permissions import IsProfileOwner
from .serializers import (
    ClientProfileListSerializer,
    ExecutorProfileListSerializer,
    ProfileDetailSerializer,
    ProfilePatchSerializer,
)


class ProfileView(generics.RetrieveUpdateAPIView):
    """
    API endpoint for retrieving or partially updating a single profile.

    - GET `/api/profile/{pk}/` returns the profile for the given user id (`pk`).
    - PATCH `/api/profile/{pk}/` updates only the fields provided and is restricted
      to the owner of the profile (the authenticated user with id `pk`).

    Notes:
    - On PATCH, if the profile does not exist for the owner yet, a new profile is
      lazily created for that user.
    - Statistics, verification and type are never taken from the payload.
    """

    queryset = Profile.objects.select_related("user")
    serializer_class = ProfileDetailSerializer
    http_method_names = ["get", "patch", "head", "options"]

    def get_permissions(self):
        """Require ownership for PATCH; otherwise authentication only."""
        if self.request.method == "PATCH":
            return [IsAuthenticated(), IsProfileOwner()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        """Use the patch serializer for PATCH; the detail serializer otherwise."""
        if self.request.method == "PATCH":
            return ProfilePatchSerializer
        return ProfileDetailSerializer

    def get_object(self):
        """
        Return the profile by user id.

        - For PATCH: `IsProfileOwner` has already matched the path `pk` to the
          caller. If the profile does not exist yet, lazily create it before
          applying object-level permission checks.
        - For GET: fetch the profile by user id or return 404 if it does not exist.
        """
        user_id = int(self.kwargs["pk"])

        if self.request.method == "PATCH":
            obj, _ = Profile.objects.get_or_create(user=self.request.user)
            self.check_object_permissions(self.request, obj)
            return obj

        return get_object_or_404(self.queryset, user_id=user_id)


class ExecutorProfileListView(generics.ListAPIView):
    """
    GET `/api/profiles/executors/` lists executor profiles, best rated first.
    Optional `?specialization=` filters by a case-insensitive substring.
    """

    serializer_class = ExecutorProfileListSerializer

    def get_queryset(self):
        qs = Profile.objects.select_related("user").filter(type=Profile.Type.EXECUTOR)
        specialization = self.request.query_params.get("specialization")
        if specialization:
            qs = qs.filter(specialization__icontains=specialization)
        return qs.order_by("-rating", "-completed_orders", "user_id")


class ClientProfileListView(generics.ListAPIView):
    """GET `/api/profiles/clients/` lists client profiles."""

    serializer_class = ClientProfileListSerializer

    def get_queryset(self):
        return (
            Profile.objects.select_related("user")
            .filter(type=Profile.Type.CLIENT)
            .order_by("-created_at", "-id")
        )
