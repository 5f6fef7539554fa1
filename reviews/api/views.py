"""Reviews API views.

Read and create the review of an order, edit or delete an own review, list an
executor's visible reviews, and moderate a review (staff only).
"""

from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.pagination import StandardPagination
from reviews import services
from .permissions import IsClientReviewer, IsModerator
from .serializers import (
    AdminReviewSerializer,
    ModerateReviewSerializer,
    ReviewCreateSerializer,
    ReviewOutputSerializer,
    ReviewPatchSerializer,
)


# ----------------------------- helpers (module-level) -----------------------------

def _validate_patch_fields(data: dict):
    """Allow only rating/comment; return Response(400) if extra fields present."""
    allowed = {"rating", "comment"}
    extra = set(data.keys()) - allowed
    if extra:
        return Response(
            {
                "detail": (
                    "Only 'rating' and 'comment' may be updated. "
                    f"Invalid: {', '.join(sorted(extra))}."
                )
            },
            status=status.HTTP_400_BAD_REQUEST,
        )
    return None


# --------------------------------------- views ---------------------------------------

class OrderReviewAPIView(APIView):
    """GET: the review of an order. POST: review a completed order (client-only)."""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), IsClientReviewer()]
        return [IsAuthenticated()]

    def get(self, request, order_id: int):
        return Response(ReviewOutputSerializer(services.get_review_for_order(order_id)).data)

    def post(self, request, order_id: int):
        ser = ReviewCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        review = services.create_review(
            request.user, order_id, ser.validated_data["rating"], ser.validated_data.get("comment", "")
        )
        return Response(ReviewOutputSerializer(review).data, status=status.HTTP_201_CREATED)


class ReviewDetailAPIView(APIView):
    """GET a review. PATCH/DELETE: owner-only."""

    permission_classes = [IsAuthenticated]

    def get(self, request, pk: int):
        return Response(ReviewOutputSerializer(services.get_review(pk)).data)

    def patch(self, request, pk: int):
        bad = _validate_patch_fields(request.data)
        if bad is not None:
            return bad
        ser = ReviewPatchSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        review = services.update_review(request.user, pk, **ser.validated_data)
        return Response(ReviewOutputSerializer(review).data, status=status.HTTP_200_OK)

    def delete(self, request, pk: int):
        services.delete_review(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ExecutorReviewListAPIView(generics.ListAPIView):
    """Visible reviews about one executor, newest first."""

    serializer_class = ReviewOutputSerializer
    pagination_class = StandardPagination
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return services.list_executor_reviews(self.kwargs["executor_id"])


class ModerateReviewAPIView(APIView):
    permission_classes = [IsAuthenticated, IsModerator]

    def put(self, request, pk: int):
        ser = ModerateReviewSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        review = services.moderate_review(
            request.user,
            pk,
            ser.validated_data["is_visible"],
            ser.validated_data.get("moderator_comment"),
        )
        return Response(AdminReviewSerializer(review).data)
