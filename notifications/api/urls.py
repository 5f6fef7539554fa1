from django.urls import path

from .views import MarkAllReadAPIView, MarkReadAPIView, NotificationListAPIView, UnreadCountAPIView

urlpatterns = [
    path("notifications/", NotificationListAPIView.as_view(), name="notification-list"),
    path("notifications/unread-count/", UnreadCountAPIView.as_view(), name="notification-unread-count"),
    path("notifications/read-all/", MarkAllReadAPIView.as_view(), name="notification-read-all"),
    path("notifications/<int:pk>/read/", MarkReadAPIView.as_view(), name="notification-read"),
]
