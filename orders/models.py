"""Orders app models.

Defines the Order aggregate and the executor responses (proposals) attached to
it. Status is only ever written by `orders.lifecycle`; the counters are bumped
with `F()` expressions outside of the status flow.
"""

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q


class OrderQuerySet(models.QuerySet):
    def alive(self):
        return self.filter(is_deleted=False)

    def feed(self):
        """Orders visible in the marketplace feed."""
        return self.alive().filter(is_public=True, status=Order.Status.NEW)


class Order(models.Model):
    """A unit of work posted by a client and fulfilled by at most one executor."""

    class Status(models.TextChoices):
        NEW = "new", "new"
        IN_PROGRESS = "in_progress", "in_progress"
        REVISION = "revision", "revision"
        ON_REVIEW = "on_review", "on_review"
        COMPLETED = "completed", "completed"
        DISPUTED = "disputed", "disputed"
        CANCELLED = "cancelled", "cancelled"

    client = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders_posted",
    )
    executor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders_assigned",
        null=True,
        blank=True,
    )

    title = models.CharField(max_length=200)
    description = models.TextField()
    location = models.CharField(max_length=255, blank=True, default="")
    attachments = models.JSONField(default=list, blank=True)

    budget_min = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0)],
    )
    budget_max = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0)],
    )
    agreed_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    deadline = models.DateField(null=True, blank=True)
    agreed_deadline = models.DateField(null=True, blank=True)

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.NEW)
    is_public = models.BooleanField(default=True)
    is_deleted = models.BooleanField(default=False)

    view_count = models.PositiveIntegerField(default=0)
    response_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    objects = OrderQuerySet.as_manager()

    class Meta:
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Order<{self.id} {self.title} {self.status}>"


class OrderResponse(models.Model):
    """An executor's proposal against an open order."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="responses")
    executor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="order_responses",
    )
    cover_letter = models.TextField()
    proposed_price = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0)],
    )
    proposed_days = models.PositiveIntegerField(null=True, blank=True)
    is_selected = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("created_at", "id")
        constraints = [
            models.UniqueConstraint(
                fields=["order", "executor"],
                name="unique_response_per_order_and_executor",
            ),
            models.UniqueConstraint(
                fields=["order"],
                condition=Q(is_selected=True),
                name="single_selected_response_per_order",
            ),
        ]

    def __str__(self) -> str:
        return f"OrderResponse<{self.id} order={self.order_id} executor={self.executor_id}>"
