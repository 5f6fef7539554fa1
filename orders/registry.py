"""Response registry: executor proposals against open orders.

One response per executor per order; responses can only be changed while the
order is NEW and nobody has been selected yet.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import F

from common import validation
from common.exceptions import ConflictError, ForbiddenError, NotFoundError
from notifications.models import Notification
from notifications.services import notify
from profiles.access import can_access_orders

from . import policies
from .models import Order, OrderResponse

logger = logging.getLogger(__name__)


# ---- helpers ----

def _live_order(order_id, lock=False) -> Order:
    qs = Order.objects.alive()
    if lock:
        qs = qs.select_for_update()
    order = qs.filter(pk=order_id).first()
    if order is None:
        raise NotFoundError.for_resource("Order", "id", order_id)
    return order


def _owned_response(executor, response_id) -> OrderResponse:
    response = (
        OrderResponse.objects.select_related("order")
        .filter(pk=response_id, order__is_deleted=False)
        .first()
    )
    if response is None:
        raise NotFoundError.for_resource("Response", "id", response_id)
    if not policies.can_manage_response(executor, response):
        raise ForbiddenError("Only the executor who wrote this response may change it.")
    return response


def _ensure_editable(order):
    if order.status != Order.Status.NEW:
        raise ConflictError("Responses can only be changed while the order is new.")
    if OrderResponse.objects.filter(order=order, is_selected=True).exists():
        raise ConflictError("An executor has already been selected for this order.")


# ---- commands ----

def create_response(executor, order_id, cover_letter, proposed_price=None, proposed_days=None) -> OrderResponse:
    cover_letter = validation.cover_letter(cover_letter)
    proposed_price = validation.positive_amount("proposed_price", proposed_price)
    proposed_days = validation.positive_int("proposed_days", proposed_days)

    with transaction.atomic():
        order = _live_order(order_id, lock=True)
        if order.status != Order.Status.NEW or not order.is_public:
            raise ConflictError("This order is not accepting responses.")
        if policies.is_order_client(executor, order):
            raise ForbiddenError("You cannot respond to your own order.")
        if not policies.can_respond_to_order(executor, order):
            raise ForbiddenError("Only executors can respond to orders.")
        if not can_access_orders(executor):
            raise ForbiddenError("A verified profile with an active subscription is required to respond.")
        if OrderResponse.objects.filter(order=order, executor=executor).exists():
            raise ConflictError("You have already responded to this order.")

        try:
            with transaction.atomic():
                response = OrderResponse.objects.create(
                    order=order,
                    executor=executor,
                    cover_letter=cover_letter,
                    proposed_price=proposed_price,
                    proposed_days=proposed_days,
                )
        except IntegrityError:
            raise ConflictError("You have already responded to this order.")

        Order.objects.filter(pk=order.pk).update(response_count=F("response_count") + 1)
        notify(
            order.client_id,
            Notification.Type.NEW_RESPONSE,
            "New response",
            f"{executor.username} responded to your order \"{order.title}\".",
            order=order,
        )
    logger.info("Executor %s responded to order %s", executor.pk, order.pk)
    return response


def update_response(executor, response_id, cover_letter=None, proposed_price=None, proposed_days=None) -> OrderResponse:
    changes = {}
    if cover_letter is not None:
        changes["cover_letter"] = validation.cover_letter(cover_letter)
    if proposed_price is not None:
        changes["proposed_price"] = validation.positive_amount("proposed_price", proposed_price)
    if proposed_days is not None:
        changes["proposed_days"] = validation.positive_int("proposed_days", proposed_days)

    with transaction.atomic():
        response = _owned_response(executor, response_id)
        _ensure_editable(_live_order(response.order_id, lock=True))
        for name, value in changes.items():
            setattr(response, name, value)
        if changes:
            response.save(update_fields=[*changes, "updated_at"])
    return response


def delete_response(executor, response_id) -> None:
    with transaction.atomic():
        response = _owned_response(executor, response_id)
        _ensure_editable(_live_order(response.order_id, lock=True))
        response.delete()
    logger.info("Executor %s withdrew response %s", executor.pk, response_id)


# ---- queries ----

def list_order_responses(actor, order_id):
    order = _live_order(order_id)
    if not policies.can_list_order_responses(actor, order):
        raise ForbiddenError("Only the order's client may view its responses.")
    return order.responses.select_related("executor", "executor__profile")


def list_my_responses(executor):
    return (
        OrderResponse.objects.filter(executor=executor, order__is_deleted=False)
        .select_related("order")
        .order_by("-created_at", "-id")
    )
