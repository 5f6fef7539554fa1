"""Executor counters written by the order lifecycle and the dispute flow.

All functions expect to run inside the caller's transaction so the counters
commit or roll back together with the status change that caused them.
"""

import logging

from django.db.models import F

from .models import Profile

logger = logging.getLogger(__name__)


def _executor_profiles(executor_id):
    return Profile.objects.filter(user_id=executor_id)


def record_order_started(executor_id) -> None:
    _executor_profiles(executor_id).update(total_orders=F("total_orders") + 1)


def record_order_disputed(executor_id) -> None:
    _executor_profiles(executor_id).update(disputed_orders=F("disputed_orders") + 1)


def record_order_completed(executor_id, started_at=None, completed_at=None) -> None:
    """Increment completed orders and fold the order's duration into the running average."""
    profile = _executor_profiles(executor_id).select_for_update().first()
    if profile is None:
        logger.warning("No profile for executor %s; completion not recorded", executor_id)
        return
    completed = profile.completed_orders + 1
    fields = {"completed_orders": completed}
    if started_at and completed_at:
        days = max(1, (completed_at - started_at).days)
        old_avg = profile.avg_completion_days or 0.0
        fields["avg_completion_days"] = ((old_avg * (completed - 1)) + days) / completed
    _executor_profiles(executor_id).update(**fields)
