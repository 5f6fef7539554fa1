from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import Profile

User = get_user_model()

# Falls User bereits registriert ist, zuerst deregistrieren (idempotent).
try:
    admin.site.unregister(User)
except admin.sites.NotRegistered:
    pass


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    """
    User list with id, marketplace role (Profile.type) and admin flags.
    """
    list_display = (
        "id",
        "username",
        "email",
        "profile_type_display",
        "is_staff",
        "is_active",
        "date_joined",
    )
    list_select_related = ("profile",)
    ordering = ("-date_joined", "-id")
    search_fields = ("username", "email", "profile__type")
    list_filter = ("is_staff", "is_active", "profile__type")

    def profile_type_display(self, obj):
        prof = getattr(obj, "profile", None)
        return getattr(prof, "type", "") or ""
    profile_type_display.short_description = "profile type"
    profile_type_display.admin_order_field = "profile__type"


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """
    Profiles with verification/subscription flags and executor statistics.
    Statistics are maintained by the order lifecycle and are read-only here.
    """
    list_display = (
        "id",
        "user",
        "type",
        "is_verified",
        "subscription_expires_at",
        "completed_orders",
        "rating",
        "review_count",
        "created_at",
    )
    list_select_related = ("user",)
    search_fields = ("user__username", "user__email", "specialization")
    list_filter = ("type", "is_verified", "created_at")
    list_editable = ("is_verified",)
    ordering = ("-created_at", "-id")
    autocomplete_fields = ("user",)
    readonly_fields = (
        "total_orders",
        "completed_orders",
        "disputed_orders",
        "avg_completion_days",
        "rating",
        "review_count",
        "created_at",
    )
