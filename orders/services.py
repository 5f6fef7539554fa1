"""Order management outside of the status flow.

Creating, editing and soft-deleting orders, the detail read with its view
counter and description gating, and the marketplace feed / "my orders" lists.
"""

import logging

from django.conf import settings
from django.db import transaction
from django.db.models import Exists, F, OuterRef, Q

from common import validation
from common.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from profiles.access import can_access_orders, get_profile, has_active_subscription

from . import policies
from .models import Order, OrderResponse

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "location", "attachments", "budget_min", "budget_max", "deadline", "is_public")

FEED_ORDERING = {
    "newest": ("-created_at", "-id"),
    "budget": ("-budget_max", "-id"),
    "deadline": ("deadline", "-id"),
}


# ---- helpers ----

def _live_order(order_id) -> Order:
    order = Order.objects.alive().select_related("client", "executor").filter(pk=order_id).first()
    if order is None:
        raise NotFoundError.for_resource("Order", "id", order_id)
    return order


def _clean_fields(data: dict, current=None) -> dict:
    cleaned = {}
    if "title" in data:
        cleaned["title"] = validation.require_text("title", data["title"], 200)
    if "description" in data:
        cleaned["description"] = validation.require_text("description", data["description"])
    if "location" in data:
        cleaned["location"] = (data["location"] or "").strip()
    if "attachments" in data:
        attachments = data["attachments"] or []
        if not isinstance(attachments, list):
            raise ValidationError({"attachments": "Must be a list of file references."})
        cleaned["attachments"] = attachments
    if "budget_min" in data or "budget_max" in data:
        low = data.get("budget_min", getattr(current, "budget_min", None))
        high = data.get("budget_max", getattr(current, "budget_max", None))
        cleaned["budget_min"], cleaned["budget_max"] = validation.budget_range(low, high)
    if "deadline" in data:
        cleaned["deadline"] = data["deadline"]
    if "is_public" in data:
        cleaned["is_public"] = bool(data["is_public"])
    return cleaned


# ---- commands ----

def create_order(client, **fields) -> Order:
    if not policies.is_client_user(client):
        raise ForbiddenError("Only clients can create orders.")
    for required in ("title", "description"):
        fields.setdefault(required, None)
    cleaned = _clean_fields({k: v for k, v in fields.items() if k in EDITABLE_FIELDS})
    order = Order.objects.create(client=client, **cleaned)
    logger.info("Client %s created order %s", client.pk, order.pk)
    return order


def update_order(client, order_id, **fields) -> Order:
    with transaction.atomic():
        order = Order.objects.alive().select_for_update().filter(pk=order_id).first()
        if order is None:
            raise NotFoundError.for_resource("Order", "id", order_id)
        if not policies.can_edit_order(client, order):
            raise ForbiddenError("Only the order's client may edit it.")
        if order.status != Order.Status.NEW:
            raise ConflictError("Only new orders can be edited.")
        cleaned = _clean_fields({k: v for k, v in fields.items() if k in EDITABLE_FIELDS}, current=order)
        for name, value in cleaned.items():
            setattr(order, name, value)
        if cleaned:
            order.save(update_fields=[*cleaned, "updated_at"])
    return order


def admin_delete_order(admin, order_id) -> None:
    if not policies.is_admin(admin):
        raise ForbiddenError("Only admin staff users may delete orders.")
    # A disputed order stays visible until its dispute is resolved.
    updated = (
        Order.objects.alive()
        .filter(pk=order_id)
        .exclude(status=Order.Status.DISPUTED)
        .update(is_deleted=True)
    )
    if not updated:
        if Order.objects.alive().filter(pk=order_id).exists():
            raise ConflictError("A disputed order cannot be deleted before its dispute is resolved.")
        raise NotFoundError.for_resource("Order", "id", order_id)
    logger.info("Admin %s soft-deleted order %s", admin.pk, order_id)


# ---- reads ----

def description_access(actor, order) -> dict:
    """Decide whether `actor` sees the full description and why not."""
    limit = settings.MARKETPLACE["DESCRIPTION_PREVIEW_LENGTH"]
    access = {
        "description": order.description,
        "description_truncated": False,
        "requires_verification": False,
        "requires_subscription": False,
    }
    if policies.can_view_full_order(actor, order) or can_access_orders(actor):
        return access
    if len(order.description or "") <= limit:
        return access
    access["description"] = order.description[:limit] + "..."
    access["description_truncated"] = True
    profile = get_profile(actor)
    if profile is None or not profile.is_verified:
        access["requires_verification"] = True
    elif settings.MARKETPLACE["SUBSCRIPTION_REQUIRED"] and not has_active_subscription(profile):
        access["requires_subscription"] = True
    return access


def get_order(actor, order_id) -> Order:
    """Load an order for display; views by non-parties are counted."""
    order = _live_order(order_id)
    if not policies.is_order_party(actor, order):
        Order.objects.filter(pk=order.pk).update(view_count=F("view_count") + 1)
        order.refresh_from_db(fields=["view_count"])
    return order


def feed(params=None):
    """Public NEW orders, filtered and ordered from query parameters."""
    params = params or {}
    qs = Order.objects.feed().select_related("client")

    budget_min = validation.positive_amount("budget_min", params.get("budget_min"))
    budget_max = validation.positive_amount("budget_max", params.get("budget_max"))
    if budget_min is not None:
        qs = qs.filter(Q(budget_max__isnull=True) | Q(budget_max__gte=budget_min))
    if budget_max is not None:
        qs = qs.filter(Q(budget_min__isnull=True) | Q(budget_min__lte=budget_max))

    search = (params.get("search") or "").strip()
    if search:
        qs = qs.filter(Q(title__icontains=search) | Q(description__icontains=search))
    location = (params.get("location") or "").strip()
    if location:
        qs = qs.filter(location__icontains=location)
    client_id = params.get("client_id")
    if client_id not in (None, ""):
        qs = qs.filter(client_id=validation.positive_int("client_id", client_id))

    ordering = FEED_ORDERING.get(params.get("ordering") or "newest", FEED_ORDERING["newest"])
    return qs.order_by(*ordering)


def my_orders_as_client(client, status=None):
    qs = Order.objects.alive().filter(client=client).select_related("executor")
    if status:
        qs = qs.filter(status=status)
    return qs.order_by("-created_at", "-id")


def my_orders_as_executor(executor, status=None):
    """Orders the executor responded to, flagged with whether they were selected."""
    responded = OrderResponse.objects.filter(order=OuterRef("pk"), executor=executor)
    qs = (
        Order.objects.alive()
        .filter(Exists(responded))
        .annotate(is_executor_selected=Exists(responded.filter(is_selected=True)))
        .select_related("client")
    )
    if status:
        qs = qs.filter(status=status)
    return qs.order_by("-created_at", "-id")
