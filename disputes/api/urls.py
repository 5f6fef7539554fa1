from django.urls import path

from .views import (
    AdminActiveDisputeListAPIView,
    AdminDisputeDetailAPIView,
    AdminDisputeListAPIView,
    AdminNotesAPIView,
    DisputeDetailAPIView,
    DisputeEvidenceAPIView,
    DisputeMessagesAPIView,
    OpenDisputeAPIView,
    OrderDisputeAPIView,
    ResolveDisputeAPIView,
    TakeDisputeAPIView,
)

urlpatterns = [
    path("orders/<int:pk>/dispute/", OpenDisputeAPIView.as_view(), name="order-dispute-open"),
    path("disputes/orders/<int:order_id>/", OrderDisputeAPIView.as_view(), name="order-dispute"),
    path("disputes/<int:pk>/", DisputeDetailAPIView.as_view(), name="dispute-detail"),
    path("disputes/<int:pk>/evidence/", DisputeEvidenceAPIView.as_view(), name="dispute-evidence"),
    path("admin/disputes/", AdminDisputeListAPIView.as_view(), name="admin-dispute-list"),
    path("admin/disputes/active/", AdminActiveDisputeListAPIView.as_view(), name="admin-dispute-active"),
    path("admin/disputes/<int:pk>/", AdminDisputeDetailAPIView.as_view(), name="admin-dispute-detail"),
    path("admin/disputes/<int:pk>/take/", TakeDisputeAPIView.as_view(), name="admin-dispute-take"),
    path("admin/disputes/<int:pk>/notes/", AdminNotesAPIView.as_view(), name="admin-dispute-notes"),
    path("admin/disputes/<int:pk>/resolve/", ResolveDisputeAPIView.as_view(), name="admin-dispute-resolve"),
    path("admin/disputes/<int:pk>/messages/", DisputeMessagesAPIView.as_view(), name="admin-dispute-messages"),
]
