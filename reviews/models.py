"""Reviews app models.

Defines the Review model. A client can leave at most one review per completed
order, about the order's executor. Ratings are constrained between 1 and 5;
hidden reviews (moderation) do not count towards the executor's rating.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Review(models.Model):
    """Represents a review written by a client about the executor of an order."""

    order = models.OneToOneField(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="review",
    )
    client = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="reviews_written",
    )
    executor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="reviews_received",
    )

    rating = models.IntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    comment = models.TextField(blank=True, default="")

    is_visible = models.BooleanField(default=True)
    is_moderated = models.BooleanField(default=False)
    moderator_comment = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return (
            f"Review<{self.id} {self.client_id}->{self.executor_id} "
            f"{self.rating}>"
        )
