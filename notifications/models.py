"""Notifications app models.

In-app notifications written when an order or dispute changes state.
"""

from django.conf import settings
from django.db import models


class Notification(models.Model):
    """A message addressed to a single user, optionally tied to an order."""

    class Type(models.TextChoices):
        EXECUTOR_SELECTED = "executor_selected", "executor_selected"
        WORK_SUBMITTED = "work_submitted", "work_submitted"
        WORK_APPROVED = "work_approved", "work_approved"
        REVISION_REQUESTED = "revision_requested", "revision_requested"
        NEW_RESPONSE = "new_response", "new_response"
        DISPUTE_OPENED = "dispute_opened", "dispute_opened"
        DISPUTE_UNDER_REVIEW = "dispute_under_review", "dispute_under_review"
        DISPUTE_RESOLVED = "dispute_resolved", "dispute_resolved"

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    type = models.CharField(max_length=30, choices=Type.choices)
    title = models.CharField(max_length=200)
    message = models.TextField()
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications",
    )
    link = models.CharField(max_length=255, blank=True, default="")
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        return f"Notification<{self.id} {self.type} -> {self.recipient_id}>"
