"""Chat collaborator used by the order lifecycle and the dispute flow."""

import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from .models import ChatRoom, Message

logger = logging.getLogger(__name__)


def get_or_create_chat_room(order, executor) -> ChatRoom:
    """Return the room for (order, executor), creating it once.

    A concurrent creator that loses the unique-constraint race gets the
    winner's room instead of an error.
    """
    room = ChatRoom.objects.filter(order=order, executor=executor).first()
    if room is not None:
        return room
    try:
        with transaction.atomic():
            room = ChatRoom.objects.create(order=order, client_id=order.client_id, executor=executor)
    except IntegrityError:
        return ChatRoom.objects.get(order=order, executor=executor)
    logger.info("Opened chat room %s for order %s", room.id, order.id)
    return room


def find_chat_room(order):
    """Room between the order's client and its assigned executor, if any."""
    if order.executor_id is None:
        return None
    return ChatRoom.objects.filter(order=order, executor_id=order.executor_id).first()


def post_system_message(room, sender, content: str) -> Message:
    message = Message.objects.create(room=room, sender=sender, content=content, is_system=True)
    ChatRoom.objects.filter(pk=room.pk).update(last_message_at=timezone.now())
    return message
