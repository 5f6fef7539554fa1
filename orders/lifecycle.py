"""Order lifecycle engine.

The only module that writes `Order.status`. Every transition runs inside
`transaction.atomic`, re-reads the order under a row lock, checks the actor and
the current status, and then writes the new status with a conditional update
(`WHERE status = expected`). A transition whose conditional update matches no
row raises `ConflictError` and its transaction is rolled back as a whole.

Side effects (chat messages, executor counters, notifications) run in the same
transaction; notifications are only delivered once it commits.
"""

import logging
from datetime import timedelta

from django.db import IntegrityError, transaction
from django.utils import timezone

from chat.services import find_chat_room, get_or_create_chat_room, post_system_message
from common import validation
from common.exceptions import ConflictError, ForbiddenError, NotFoundError
from notifications.models import Notification
from notifications.services import notify
from profiles.stats import record_order_completed, record_order_disputed, record_order_started

from . import policies
from .models import Order, OrderResponse

logger = logging.getLogger(__name__)

Status = Order.Status

TRANSITIONS = {
    Status.NEW: {Status.IN_PROGRESS, Status.DISPUTED, Status.CANCELLED},
    Status.IN_PROGRESS: {Status.ON_REVIEW, Status.DISPUTED},
    Status.REVISION: {Status.ON_REVIEW, Status.DISPUTED},
    Status.ON_REVIEW: {Status.COMPLETED, Status.REVISION, Status.DISPUTED},
    Status.DISPUTED: {Status.COMPLETED, Status.CANCELLED},
    Status.COMPLETED: set(),
    Status.CANCELLED: set(),
}

DISPUTABLE_STATUSES = (Status.NEW, Status.IN_PROGRESS, Status.REVISION, Status.ON_REVIEW)
TERMINAL_STATUSES = (Status.COMPLETED, Status.CANCELLED)


def can_transition(current, target) -> bool:
    return target in TRANSITIONS.get(current, ())


# ---- helpers ----

def locked_order(order_id) -> Order:
    """Load a live order under a row lock; must be called inside an atomic block."""
    order = Order.objects.alive().select_for_update().filter(pk=order_id).first()
    if order is None:
        raise NotFoundError.for_resource("Order", "id", order_id)
    return order


def _require(allowed: bool, message: str):
    if not allowed:
        raise ForbiddenError(message)


def _require_status(order, *statuses):
    if order.status not in statuses:
        raise ConflictError(
            f"Order {order.id} is '{order.status}'; expected one of: {', '.join(statuses)}."
        )


def _swap_status(order, expected, target, actor, **fields):
    """Write `target` only if the stored status still equals `expected`."""
    if not can_transition(expected, target):
        raise ConflictError(f"Order cannot move from '{expected}' to '{target}'.")
    now = timezone.now()
    updated = Order.objects.filter(pk=order.pk, status=expected, is_deleted=False).update(
        status=target, updated_at=now, **fields
    )
    if updated != 1:
        logger.info("Order %s changed concurrently; %s -> %s rejected", order.pk, expected, target)
        raise ConflictError(f"Order {order.pk} was modified concurrently.")
    order.status = target
    order.updated_at = now
    for name, value in fields.items():
        setattr(order, name, value)
    logger.info(
        "Order %s: %s -> %s by user %s", order.pk, expected, target, getattr(actor, "pk", None)
    )
    return order


def _chat_note(order, sender, content: str):
    room = find_chat_room(order)
    if room is not None:
        post_system_message(room, sender, content)


# ---- transitions ----

def select_executor(client, order_id, response_id, agreed_price=None, agreed_deadline=None) -> Order:
    """NEW -> IN_PROGRESS: the client picks one response and its executor."""
    agreed_price = validation.positive_amount("agreed_price", agreed_price)
    with transaction.atomic():
        order = locked_order(order_id)
        _require(policies.can_select_executor(client, order), "Only the order's client may select an executor.")
        _require_status(order, Status.NEW)

        response = (
            OrderResponse.objects.select_for_update()
            .select_related("executor")
            .filter(pk=response_id, order=order)
            .first()
        )
        if response is None:
            raise NotFoundError.for_resource("Response", "id", response_id)
        if response.is_selected or OrderResponse.objects.filter(order=order, is_selected=True).exists():
            raise ConflictError("An executor has already been selected for this order.")

        price = agreed_price if agreed_price is not None else response.proposed_price
        if agreed_deadline is None and response.proposed_days:
            agreed_deadline = timezone.localdate() + timedelta(days=response.proposed_days)
        if agreed_deadline is None:
            agreed_deadline = order.deadline

        _swap_status(
            order, Status.NEW, Status.IN_PROGRESS, client,
            executor_id=response.executor_id,
            agreed_price=price,
            agreed_deadline=agreed_deadline,
            started_at=timezone.now(),
        )
        try:
            with transaction.atomic():
                OrderResponse.objects.filter(pk=response.pk).update(is_selected=True)
        except IntegrityError:
            raise ConflictError("An executor has already been selected for this order.")

        record_order_started(response.executor_id)
        room = get_or_create_chat_room(order, response.executor)
        post_system_message(room, client, f"Executor selected for order \"{order.title}\". Work has started.")
        notify(
            response.executor,
            Notification.Type.EXECUTOR_SELECTED,
            "You were selected",
            f"You were selected as the executor for \"{order.title}\".",
            order=order,
        )
    return order


def submit_for_review(executor, order_id) -> Order:
    """IN_PROGRESS / REVISION -> ON_REVIEW."""
    with transaction.atomic():
        order = locked_order(order_id)
        _require(policies.can_submit_for_review(executor, order), "Only the assigned executor may submit work.")
        _require_status(order, Status.IN_PROGRESS, Status.REVISION)
        _swap_status(order, order.status, Status.ON_REVIEW, executor)
        _chat_note(order, executor, "Work submitted for review.")
        notify(
            order.client_id,
            Notification.Type.WORK_SUBMITTED,
            "Work submitted for review",
            f"The executor submitted \"{order.title}\" for your review.",
            order=order,
        )
    return order


def approve_work(client, order_id) -> Order:
    """ON_REVIEW -> COMPLETED. Status is checked before the actor."""
    with transaction.atomic():
        order = locked_order(order_id)
        _require_status(order, Status.ON_REVIEW)
        _require(policies.can_approve_work(client, order), "Only the order's client may approve the work.")
        completed_at = timezone.now()
        _swap_status(order, Status.ON_REVIEW, Status.COMPLETED, client, completed_at=completed_at)
        record_order_completed(order.executor_id, order.started_at, completed_at)
        _chat_note(order, client, "Work approved. The order is completed.")
        notify(
            order.executor_id,
            Notification.Type.WORK_APPROVED,
            "Work approved",
            f"The client approved your work on \"{order.title}\".",
            order=order,
        )
    return order


def request_revision(client, order_id, reason) -> Order:
    """ON_REVIEW -> REVISION with a reason passed on to the executor."""
    reason = validation.require_text("reason", reason)
    with transaction.atomic():
        order = locked_order(order_id)
        _require(policies.can_request_revision(client, order), "Only the order's client may request a revision.")
        _require_status(order, Status.ON_REVIEW)
        _swap_status(order, Status.ON_REVIEW, Status.REVISION, client)
        _chat_note(order, client, f"Revision requested: {reason}")
        notify(
            order.executor_id,
            Notification.Type.REVISION_REQUESTED,
            "Revision requested",
            f"The client requested a revision of \"{order.title}\": {reason}",
            order=order,
        )
    return order


def cancel_order(client, order_id) -> Order:
    """NEW -> CANCELLED while no executor is assigned."""
    with transaction.atomic():
        order = locked_order(order_id)
        _require(policies.can_cancel_order(client, order), "Only the order's client may cancel it.")
        _require_status(order, Status.NEW)
        if order.executor_id is not None:
            raise ConflictError("An order with an assigned executor cannot be cancelled.")
        _swap_status(order, Status.NEW, Status.CANCELLED, client)
    return order


# ---- dispute entry and exit (called by disputes.services with the order locked) ----

def mark_disputed(actor, order) -> Order:
    _require_status(order, *DISPUTABLE_STATUSES)
    _swap_status(order, order.status, Status.DISPUTED, actor)
    if order.executor_id is not None:
        record_order_disputed(order.executor_id)
    return order


def settle_dispute(admin, order, favor_client: bool) -> Order:
    """DISPUTED -> CANCELLED (client wins) or COMPLETED (executor wins)."""
    _require_status(order, Status.DISPUTED)
    if favor_client:
        return _swap_status(order, Status.DISPUTED, Status.CANCELLED, admin)
    if order.executor_id is None:
        raise ConflictError("Cannot resolve in favor of the executor: the order has no executor.")
    completed_at = timezone.now()
    _swap_status(order, Status.DISPUTED, Status.COMPLETED, admin, completed_at=completed_at)
    record_order_completed(order.executor_id, order.started_at, completed_at)
    return order
