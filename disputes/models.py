"""Disputes app models.

A Dispute is the arbitration case attached to a single order (at most one per
order, ever). Evidence items are append-only and frozen once the dispute is
resolved.
"""

from django.conf import settings
from django.db import models


class Dispute(models.Model):
    class Status(models.TextChoices):
        OPEN = "open", "open"
        UNDER_REVIEW = "under_review", "under_review"
        RESOLVED = "resolved", "resolved"

    class Resolution(models.TextChoices):
        FAVOR_CLIENT = "favor_client", "favor_client"
        FAVOR_EXECUTOR = "favor_executor", "favor_executor"

    order = models.OneToOneField(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="dispute",
    )
    opened_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="disputes_opened",
    )
    reason = models.TextField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.OPEN)
    admin = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="disputes_handled",
    )
    admin_notes = models.TextField(blank=True, default="")
    resolution = models.CharField(max_length=20, choices=Resolution.choices, blank=True, default="")
    resolution_notes = models.TextField(blank=True, default="")
    chat_room = models.ForeignKey(
        "chat.ChatRoom",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="disputes",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    resolved_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ("-created_at", "-id")

    @property
    def is_resolved(self) -> bool:
        return self.status == self.Status.RESOLVED

    def __str__(self) -> str:
        return f"Dispute<{self.id} order={self.order_id} {self.status}>"


class DisputeEvidence(models.Model):
    dispute = models.ForeignKey(Dispute, on_delete=models.CASCADE, related_name="evidence")
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="dispute_evidence",
    )
    file_url = models.CharField(max_length=500)
    file_name = models.CharField(max_length=255)
    file_type = models.CharField(max_length=100, blank=True, default="")
    file_size = models.PositiveBigIntegerField(null=True, blank=True)
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("created_at", "id")

    def __str__(self) -> str:
        return f"DisputeEvidence<{self.id} dispute={self.dispute_id} {self.file_name}>"
