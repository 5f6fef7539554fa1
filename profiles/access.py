"""Subscription gate consulted before executors may browse or respond to orders."""

from django.conf import settings
from django.utils import timezone


def get_profile(user):
    """Return the user's profile or None (unauthenticated users have none)."""
    if not user or not getattr(user, "is_authenticated", False):
        return None
    return getattr(user, "profile", None)


def has_active_subscription(profile, now=None) -> bool:
    expires = profile.subscription_expires_at
    return expires is not None and expires > (now or timezone.now())


def can_access_orders(user) -> bool:
    """Verified executors may access orders; a live subscription is needed when required."""
    profile = get_profile(user)
    if profile is None or not profile.is_verified:
        return False
    if not settings.MARKETPLACE["SUBSCRIPTION_REQUIRED"]:
        return True
    return has_active_subscription(profile)
