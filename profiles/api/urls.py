from django.urls import path
from .views import ProfileView, ExecutorProfileListView, ClientProfileListView

urlpatterns = [
    path("profile/<int:pk>/", ProfileView.as_view(), name="profile"),
    path("profiles/executors/", ExecutorProfileListView.as_view(), name="executor-profiles"),
    path("profiles/clients/", ClientProfileListView.as_view(), name="client-profiles"),
]
