"""Dispute sub-flow.

A dispute is opened by a party to an order and moves OPEN -> UNDER_REVIEW ->
RESOLVED under an admin. Entering and leaving the dispute changes the order's
status, which is delegated to `orders.lifecycle` so the order row is locked and
compare-and-swapped the same way as for every other transition. Resolution and
the order's terminal status commit in one transaction.

Locks are always taken order first, dispute second.
"""

import logging

from django.db import transaction
from django.utils import timezone

from chat.models import Message
from chat.services import find_chat_room, post_system_message
from common import validation
from common.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from notifications.models import Notification
from notifications.services import notify, notify_admins
from orders import lifecycle, policies

from .models import Dispute, DisputeEvidence

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (Dispute.Status.OPEN, Dispute.Status.UNDER_REVIEW)


# ---- helpers ----

def _dispute(dispute_id, lock=False) -> Dispute:
    qs = Dispute.objects.select_related("order", "chat_room")
    if lock:
        qs = qs.select_for_update(of=("self",))
    dispute = qs.filter(pk=dispute_id).first()
    if dispute is None:
        raise NotFoundError.for_resource("Dispute", "id", dispute_id)
    return dispute


def _require_admin(user):
    if not policies.can_arbitrate(user):
        raise ForbiddenError("Only admin staff users may arbitrate disputes.")


def _require_unresolved(dispute):
    if dispute.is_resolved:
        raise ConflictError("The dispute is already resolved.")


def _chat_note(dispute, sender, content: str):
    if dispute.chat_room_id is not None:
        post_system_message(dispute.chat_room, sender, content)


def _notify_parties(order, type, title, message):
    for recipient_id in (order.client_id, order.executor_id):
        notify(recipient_id, type, title, message, order=order)


# ---- participant commands ----

def open_dispute(actor, order_id, reason) -> Dispute:
    """Move the order to DISPUTED and open its (only) dispute."""
    reason = validation.dispute_reason(reason)
    with transaction.atomic():
        order = lifecycle.locked_order(order_id)
        if not policies.can_open_dispute(actor, order):
            raise ForbiddenError("Only the order's client or executor may open a dispute.")
        if Dispute.objects.filter(order=order).exists():
            raise ConflictError("A dispute already exists for this order.")

        lifecycle.mark_disputed(actor, order)
        room = find_chat_room(order)
        dispute = Dispute.objects.create(order=order, opened_by=actor, reason=reason, chat_room=room)

        role = "client" if policies.is_order_client(actor, order) else "executor"
        if room is not None:
            post_system_message(
                room, actor,
                f"The {role} opened a dispute on \"{order.title}\".\n\nReason: {reason}\n\n"
                "A moderator will review the case and decide.",
            )
        other_party = order.executor_id if role == "client" else order.client_id
        message = f"The {role} opened a dispute on \"{order.title}\". Reason: {reason}"
        notify(other_party, Notification.Type.DISPUTE_OPENED, "Dispute opened", message, order=order)
        notify_admins(Notification.Type.DISPUTE_OPENED, "New dispute", message, order=order)
    logger.info("Dispute %s opened on order %s by user %s", dispute.pk, order.pk, actor.pk)
    return dispute


def add_evidence(actor, dispute_id, file_url, file_name, file_type=None, file_size=None, description="") -> DisputeEvidence:
    cleaned = validation.evidence(file_url, file_name, file_size=file_size, description=description)
    with transaction.atomic():
        dispute = _dispute(dispute_id, lock=True)
        if not policies.can_add_evidence(actor, dispute):
            raise ForbiddenError("Only dispute participants may add evidence.")
        _require_unresolved(dispute)
        evidence = DisputeEvidence.objects.create(
            dispute=dispute,
            uploaded_by=actor,
            file_type=(file_type or "").strip(),
            **cleaned,
        )
        note = f"{actor.username} uploaded evidence: {evidence.file_name}"
        if evidence.description:
            note += f"\nDescription: {evidence.description}"
        _chat_note(dispute, actor, note)
    return evidence


# ---- admin commands ----

def take_dispute(admin, dispute_id) -> Dispute:
    """Claim a dispute for review; a later admin taking it over replaces the first."""
    _require_admin(admin)
    with transaction.atomic():
        dispute = _dispute(dispute_id, lock=True)
        _require_unresolved(dispute)
        dispute.status = Dispute.Status.UNDER_REVIEW
        dispute.admin = admin
        dispute.save(update_fields=["status", "admin", "updated_at"])
        _chat_note(dispute, admin, f"Moderator {admin.username} took the dispute under review.")
        _notify_parties(
            dispute.order,
            Notification.Type.DISPUTE_UNDER_REVIEW,
            "Dispute under review",
            f"A moderator is reviewing the dispute on \"{dispute.order.title}\".",
        )
    logger.info("Dispute %s taken by admin %s", dispute.pk, admin.pk)
    return dispute


def add_admin_notes(admin, dispute_id, notes) -> Dispute:
    _require_admin(admin)
    with transaction.atomic():
        dispute = _dispute(dispute_id, lock=True)
        _require_unresolved(dispute)
        dispute.admin_notes = (notes or "").strip()
        dispute.save(update_fields=["admin_notes", "updated_at"])
    return dispute


def resolve_dispute(admin, dispute_id, favor_client, resolution_notes="", admin_notes=None) -> Dispute:
    """Close the dispute and move its order to CANCELLED (client) or COMPLETED (executor)."""
    _require_admin(admin)
    if not isinstance(favor_client, bool):
        raise ValidationError({"favor_client": "Must be true or false."})
    order_id = _dispute(dispute_id).order_id
    with transaction.atomic():
        order = lifecycle.locked_order(order_id)
        dispute = _dispute(dispute_id, lock=True)
        _require_unresolved(dispute)

        lifecycle.settle_dispute(admin, order, favor_client)

        dispute.order = order
        dispute.status = Dispute.Status.RESOLVED
        dispute.admin = admin
        dispute.resolution = (
            Dispute.Resolution.FAVOR_CLIENT if favor_client else Dispute.Resolution.FAVOR_EXECUTOR
        )
        dispute.resolution_notes = (resolution_notes or "").strip()
        dispute.resolved_at = timezone.now()
        if admin_notes is not None:
            dispute.admin_notes = admin_notes.strip()
        dispute.save()

        verdict = "in favor of the client" if favor_client else "in favor of the executor"
        note = f"The dispute was resolved {verdict} by moderator {admin.username}."
        if dispute.resolution_notes:
            note += f"\nComment: {dispute.resolution_notes}"
        _chat_note(dispute, admin, note)
        _notify_parties(
            order,
            Notification.Type.DISPUTE_RESOLVED,
            "Dispute resolved",
            f"The dispute on \"{order.title}\" was resolved {verdict}.",
        )
    logger.info("Dispute %s resolved (%s) by admin %s", dispute.pk, dispute.resolution, admin.pk)
    return dispute


# ---- reads ----

def get_dispute(actor, dispute_id) -> Dispute:
    dispute = _dispute(dispute_id)
    if not policies.can_view_dispute(actor, dispute):
        raise ForbiddenError("Only dispute participants may view this dispute.")
    return dispute


def get_dispute_for_order(actor, order_id) -> Dispute:
    dispute = Dispute.objects.select_related("order", "chat_room").filter(order_id=order_id).first()
    if dispute is None:
        raise NotFoundError.for_resource("Dispute", "order id", order_id)
    if not policies.can_view_dispute(actor, dispute):
        raise ForbiddenError("Only dispute participants may view this dispute.")
    return dispute


def list_evidence(actor, dispute_id):
    dispute = get_dispute(actor, dispute_id)
    return dispute.evidence.select_related("uploaded_by")


def list_disputes(admin, status=None):
    _require_admin(admin)
    qs = Dispute.objects.select_related("order", "opened_by", "admin")
    if status:
        status = status.lower()
        if status not in Dispute.Status.values:
            raise ValidationError({"status": f"Unknown dispute status '{status}'."})
        qs = qs.filter(status=status)
    return qs.order_by("-created_at", "-id")


def list_active_disputes(admin):
    _require_admin(admin)
    return (
        Dispute.objects.filter(status__in=ACTIVE_STATUSES)
        .select_related("order", "opened_by", "admin")
        .order_by("created_at", "id")
    )


def list_dispute_messages(admin, dispute_id):
    """Chat history between the parties, for the arbitrating admin."""
    _require_admin(admin)
    dispute = _dispute(dispute_id)
    if dispute.chat_room_id is None:
        return Message.objects.none()
    return Message.objects.filter(room_id=dispute.chat_room_id).select_related("sender")
