"""Notification sink used by the order lifecycle and the dispute flow.

Delivery is fire-and-forget: it is deferred until the surrounding transaction
commits, and any failure is logged and swallowed so a state transition is never
rolled back or reported as failed because a notification could not be stored.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from .models import Notification

logger = logging.getLogger(__name__)


def order_link(order_id) -> str:
    return f"/orders/{order_id}"


def deliver(recipient_id, type, title, message, order_id=None, link="") -> None:
    """Persist one notification; never raises."""
    try:
        Notification.objects.create(
            recipient_id=recipient_id,
            type=type,
            title=title,
            message=message,
            order_id=order_id,
            link=link,
        )
    except Exception:
        logger.exception(
            "Notification %s for user %s (order %s) could not be delivered",
            type, recipient_id, order_id,
        )


def notify(recipient, type, title, message, order=None, link="") -> None:
    """Schedule a notification for after the current transaction commits."""
    if recipient is None:
        return
    recipient_id = getattr(recipient, "pk", recipient)
    order_id = getattr(order, "pk", order)
    if not link and order_id is not None:
        link = order_link(order_id)
    transaction.on_commit(
        lambda: deliver(recipient_id, type, title, message, order_id=order_id, link=link)
    )


def notify_admins(type, title, message, order=None) -> None:
    """Notify every active staff user."""
    User = get_user_model()
    for admin_id in User.objects.filter(is_staff=True, is_active=True).values_list("id", flat=True):
        notify(admin_id, type, title, message, order=order)


def unread_count(user) -> int:
    return Notification.objects.filter(recipient=user, is_read=False).count()


def mark_all_read(user) -> int:
    return Notification.objects.filter(recipient=user, is_read=False).update(is_read=True)
