"""Reviews API serializers.

Provide serializers for creating and patching a review, for returning review
data publicly, and for the admin moderation payload.
"""

from rest_framework import serializers

from reviews.models import Review


class ReviewCreateSerializer(serializers.Serializer):
    """Input serializer for creating a new review."""

    rating = serializers.IntegerField(min_value=1, max_value=5, required=True)
    comment = serializers.CharField(allow_blank=True, required=False, default="")


class ReviewPatchSerializer(serializers.Serializer):
    """Patch serializer for updating rating/comment only."""

    rating = serializers.IntegerField(min_value=1, max_value=5, required=False)
    comment = serializers.CharField(allow_blank=True, required=False)


class ModerateReviewSerializer(serializers.Serializer):
    is_visible = serializers.BooleanField()
    moderator_comment = serializers.CharField(allow_blank=True, required=False, allow_null=True)


class ReviewOutputSerializer(serializers.ModelSerializer):
    """Read serializer for returning a review."""

    order_title = serializers.CharField(source="order.title", read_only=True)
    client_username = serializers.CharField(source="client.username", read_only=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "order",
            "order_title",
            "client",
            "client_username",
            "executor",
            "rating",
            "comment",
            "created_at",
            "updated_at",
        ]


class AdminReviewSerializer(ReviewOutputSerializer):
    class Meta(ReviewOutputSerializer.Meta):
        fields = ReviewOutputSerializer.Meta.fields + ["is_visible", "is_moderated", "moderator_comment"]
