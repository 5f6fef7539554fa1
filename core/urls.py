"""Root URL configuration. Every app mounts its API routes under `/api/`."""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("common.api.urls")),
    path("api/", include("profiles.api.urls")),
    path("api/", include("orders.api.urls")),
    path("api/", include("disputes.api.urls")),
    path("api/", include("reviews.api.urls")),
    path("api/", include("notifications.api.urls")),
]
