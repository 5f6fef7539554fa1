"""Notifications API views.

Every endpoint only ever touches the authenticated user's own notifications;
another user's notification id behaves as not found.
"""

from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import NotFoundError
from common.pagination import StandardPagination
from notifications import services
from notifications.models import Notification
from .serializers import NotificationSerializer


class NotificationListAPIView(generics.ListAPIView):
    """GET /api/notifications/ -> own notifications, newest first (`?unread=true` filter)."""

    serializer_class = NotificationSerializer
    pagination_class = StandardPagination
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        qs = Notification.objects.filter(recipient=self.request.user)
        if self.request.query_params.get("unread", "").lower() in ("1", "true"):
            qs = qs.filter(is_read=False)
        return qs


class UnreadCountAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({"unread_count": services.unread_count(request.user)})


class MarkReadAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk: int):
        notification = Notification.objects.filter(pk=pk, recipient=request.user).first()
        if notification is None:
            raise NotFoundError.for_resource("Notification", "id", pk)
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read"])
        return Response(NotificationSerializer(notification).data)


class MarkAllReadAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        updated = services.mark_all_read(request.user)
        return Response({"updated": updated}, status=status.HTTP_200_OK)
