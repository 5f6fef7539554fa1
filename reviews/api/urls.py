from django.urls import path

from .views import ExecutorReviewListAPIView, ModerateReviewAPIView, OrderReviewAPIView, ReviewDetailAPIView

urlpatterns = [
    path("reviews/orders/<int:order_id>/", OrderReviewAPIView.as_view(), name="order-review"),
    path("reviews/executors/<int:executor_id>/", ExecutorReviewListAPIView.as_view(), name="executor-reviews"),
    path("reviews/<int:pk>/", ReviewDetailAPIView.as_view(), name="review-detail"),
    path("admin/reviews/<int:pk>/moderate/", ModerateReviewAPIView.as_view(), name="admin-review-moderate"),
]
