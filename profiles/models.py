"""Profiles app models.

Defines the Profile model that extends the base user with marketplace role
information (client/executor), executor statistics maintained by the order
lifecycle, and the verification/subscription flags consulted before an executor
may respond to orders. String fields default to empty strings to avoid nulls in
API responses.
"""

from decimal import Decimal

from django.conf import settings
from django.db import models


class ReputationLevel(models.TextChoices):
    NEWCOMER = "newcomer", "Newcomer"
    BEGINNER = "beginner", "Beginner"
    EXPERIENCED = "experienced", "Experienced"
    PROFESSIONAL = "professional", "Professional"
    EXPERT = "expert", "Expert"

    @classmethod
    def calculate(cls, completed_orders: int, rating) -> "ReputationLevel":
        r = float(rating or 0)
        if completed_orders >= 50 and r >= 4.5:
            return cls.EXPERT
        if completed_orders >= 20 and r >= 4.0:
            return cls.PROFESSIONAL
        if completed_orders >= 5 and r >= 3.0:
            return cls.EXPERIENCED
        if completed_orders >= 1:
            return cls.BEGINNER
        return cls.NEWCOMER


class Profile(models.Model):
    """
    Profile for a single user.

    A profile is created at most once per user (OneToOne relationship). The
    executor counters are only written by the order lifecycle, dispute flow and
    rating aggregator.
    """

    class Type(models.TextChoices):
        CLIENT = "client", "client"
        EXECUTOR = "executor", "executor"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    file = models.CharField(max_length=255, blank=True, default="")
    location = models.CharField(max_length=255, blank=True, default="")
    tel = models.CharField(max_length=50, blank=True, default="")
    description = models.TextField(blank=True, default="")
    specialization = models.CharField(max_length=255, blank=True, default="")
    type = models.CharField(
        max_length=20,
        choices=Type.choices,
        blank=True,
        default="",
    )

    # access
    is_verified = models.BooleanField(default=False)
    subscription_expires_at = models.DateTimeField(null=True, blank=True)

    # executor statistics
    total_orders = models.PositiveIntegerField(default=0)
    completed_orders = models.PositiveIntegerField(default=0)
    disputed_orders = models.PositiveIntegerField(default=0)
    avg_completion_days = models.FloatField(default=0.0)
    rating = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    review_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    @property
    def is_executor(self) -> bool:
        return self.type == self.Type.EXECUTOR

    @property
    def is_client(self) -> bool:
        return self.type == self.Type.CLIENT

    @property
    def reputation_level(self) -> str:
        return ReputationLevel.calculate(self.completed_orders, self.rating).value

    def __str__(self):
        """Readable representation for admin and debugging."""
        return f"Profile<{self.user_id}:{self.user.username}>"
