"""Reviews and the executor rating aggregate.

Every review write ends with `recalculate_executor_rating`, which recomputes
the executor's rating and review count from scratch over visible reviews, so
running it twice changes nothing.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db import IntegrityError, transaction
from django.db.models import Avg, Count

from common import validation
from common.exceptions import ConflictError, ForbiddenError, NotFoundError
from orders import policies
from orders.models import Order
from profiles.models import Profile

from .models import Review

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def recalculate_executor_rating(executor_id) -> None:
    stats = Review.objects.filter(executor_id=executor_id, is_visible=True).aggregate(
        avg=Avg("rating"), count=Count("id")
    )
    avg = stats["avg"]
    rating = Decimal(str(avg)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP) if avg is not None else Decimal("0.00")
    updated = Profile.objects.filter(user_id=executor_id).update(rating=rating, review_count=stats["count"])
    if not updated:
        logger.warning("No profile for executor %s; rating not stored", executor_id)


# ---- helpers ----

def _review(review_id) -> Review:
    review = Review.objects.select_related("order", "client", "executor").filter(pk=review_id).first()
    if review is None:
        raise NotFoundError.for_resource("Review", "id", review_id)
    return review


def _own_review(client, review_id) -> Review:
    review = _review(review_id)
    if review.client_id != client.id:
        raise ForbiddenError("Only the review owner may modify this review.")
    return review


# ---- commands ----

def create_review(client, order_id, rating, comment="") -> Review:
    rating = validation.rating(rating)
    with transaction.atomic():
        order = Order.objects.alive().filter(pk=order_id).first()
        if order is None:
            raise NotFoundError.for_resource("Order", "id", order_id)
        if not policies.is_order_client(client, order):
            raise ForbiddenError("Only the order's client can leave a review.")
        if order.status != Order.Status.COMPLETED:
            raise ConflictError("Only completed orders can be reviewed.")
        if order.executor_id is None:
            raise ConflictError("The order has no executor to review.")
        if Review.objects.filter(order=order).exists():
            raise ConflictError("A review already exists for this order.")
        try:
            with transaction.atomic():
                review = Review.objects.create(
                    order=order,
                    client=client,
                    executor_id=order.executor_id,
                    rating=rating,
                    comment=(comment or "").strip(),
                )
        except IntegrityError:
            raise ConflictError("A review already exists for this order.")
        recalculate_executor_rating(order.executor_id)
    logger.info("Client %s reviewed order %s (%s stars)", client.pk, order.pk, rating)
    return review


def update_review(client, review_id, rating=None, comment=None) -> Review:
    """Edit an own review; any edit sends it back to moderation."""
    if rating is not None:
        rating = validation.rating(rating)
    with transaction.atomic():
        review = _own_review(client, review_id)
        if rating is not None:
            review.rating = rating
        if comment is not None:
            review.comment = comment.strip()
        review.is_moderated = False
        review.save()
        recalculate_executor_rating(review.executor_id)
    return review


def delete_review(client, review_id) -> None:
    with transaction.atomic():
        review = _own_review(client, review_id)
        executor_id = review.executor_id
        review.delete()
        recalculate_executor_rating(executor_id)


def moderate_review(admin, review_id, is_visible, moderator_comment=None) -> Review:
    if not policies.is_admin(admin):
        raise ForbiddenError("Only admin staff users may moderate reviews.")
    with transaction.atomic():
        review = _review(review_id)
        review.is_visible = bool(is_visible)
        review.is_moderated = True
        if moderator_comment is not None:
            review.moderator_comment = moderator_comment.strip()
        review.save()
        recalculate_executor_rating(review.executor_id)
    logger.info("Admin %s set review %s visible=%s", admin.pk, review.pk, review.is_visible)
    return review


# ---- reads ----

def get_review(review_id) -> Review:
    return _review(review_id)


def get_review_for_order(order_id) -> Review:
    review = Review.objects.select_related("order", "client").filter(order_id=order_id).first()
    if review is None:
        raise NotFoundError.for_resource("Review", "order id", order_id)
    return review


def list_executor_reviews(executor_id):
    return (
        Review.objects.filter(executor_id=executor_id, is_visible=True)
        .select_related("order", "client")
        .order_by("-created_at", "-id")
    )
