"""Chat app models.

A ChatRoom connects the client and the selected executor of one order. The
lifecycle and the dispute flow post system messages into it; the realtime
transport that delivers messages to browsers is not part of this app.
"""

from django.conf import settings
from django.db import models


class ChatRoom(models.Model):
    """Conversation between an order's client and one executor."""

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="chat_rooms",
    )
    client = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="chat_rooms_as_client",
    )
    executor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="chat_rooms_as_executor",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    last_message_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["order", "executor"],
                name="unique_chat_room_per_order_and_executor",
            )
        ]

    def __str__(self) -> str:
        return f"ChatRoom<{self.id} order={self.order_id}>"


class Message(models.Model):
    """A single chat message; system messages are generated by workflow events."""

    room = models.ForeignKey(ChatRoom, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="chat_messages",
    )
    content = models.TextField()
    is_system = models.BooleanField(default=False)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("created_at", "id")

    def __str__(self) -> str:
        return f"Message<{self.id} room={self.room_id}>"
