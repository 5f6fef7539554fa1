from django.urls import path

from .views import (
    ApproveWorkAPIView,
    CancelOrderAPIView,
    MyClientOrdersAPIView,
    MyExecutorOrdersAPIView,
    MyResponsesAPIView,
    OrderDetailAPIView,
    OrderListCreateAPIView,
    OrderResponsesAPIView,
    RequestRevisionAPIView,
    ResponseDetailAPIView,
    SelectExecutorAPIView,
    SubmitForReviewAPIView,
)

urlpatterns = [
    path("orders/", OrderListCreateAPIView.as_view(), name="order-list"),
    path("orders/my/as-client/", MyClientOrdersAPIView.as_view(), name="my-orders-client"),
    path("orders/my/as-executor/", MyExecutorOrdersAPIView.as_view(), name="my-orders-executor"),
    path("orders/<int:pk>/", OrderDetailAPIView.as_view(), name="order-detail"),
    path("orders/<int:pk>/select-executor/", SelectExecutorAPIView.as_view(), name="order-select-executor"),
    path("orders/<int:pk>/submit-for-review/", SubmitForReviewAPIView.as_view(), name="order-submit-for-review"),
    path("orders/<int:pk>/approve/", ApproveWorkAPIView.as_view(), name="order-approve"),
    path("orders/<int:pk>/request-revision/", RequestRevisionAPIView.as_view(), name="order-request-revision"),
    path("orders/<int:pk>/cancel/", CancelOrderAPIView.as_view(), name="order-cancel"),
    path("orders/<int:pk>/responses/", OrderResponsesAPIView.as_view(), name="order-responses"),
    path("responses/my/", MyResponsesAPIView.as_view(), name="my-responses"),
    path("responses/<int:pk>/", ResponseDetailAPIView.as_view(), name="response-detail"),
]
