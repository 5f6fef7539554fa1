from django.db.models import Avg
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework import status

from orders.models import Order
from profiles.models import Profile
from reviews.models import Review


class BaseInfoAPIView(APIView):
    """
    GET /api/base-info/

    Returns platform-wide aggregate statistics:
    - review_count: number of visible reviews
    - average_rating: average rating across visible reviews (rounded to 1 decimal)
    - executor_profile_count: number of profiles with type="executor"
    - client_profile_count: number of profiles with type="client"
    - open_order_count: orders currently listed in the marketplace feed
    - completed_order_count: completed orders (soft-deleted ones excluded)

    Authentication: none
    Permissions: AllowAny
    """

    authentication_classes = []          # No authentication required
    permission_classes = [AllowAny]      # Explicitly allow public access

    def get(self, request):
        """
        Compute and return the aggregate counters. If there are no reviews,
        average_rating is 0.0 (not null).
        """
        visible = Review.objects.filter(is_visible=True)
        avg = visible.aggregate(avg=Avg("rating"))["avg"] or 0.0
        data = {
            "review_count": visible.count(),
            "average_rating": round(float(avg), 1),
            "executor_profile_count": Profile.objects.filter(type=Profile.Type.EXECUTOR).count(),
            "client_profile_count": Profile.objects.filter(type=Profile.Type.CLIENT).count(),
            "open_order_count": Order.objects.feed().count(),
            "completed_order_count": Order.objects.alive().filter(status=Order.Status.COMPLETED).count(),
        }
        return Response(data, status=status.HTTP_200_OK)
