from django.contrib import admin
from django.utils.html import format_html

from .models import Order, OrderResponse


class OrderResponseInline(admin.TabularInline):
    model = OrderResponse
    extra = 0
    fields = ("executor", "proposed_price", "proposed_days", "is_selected", "created_at")
    readonly_fields = fields
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Order overview:
    - list: id, title, status badge, client, executor, budget, agreed price
    - status, parties and the deleted flag are read-only; they only change through the services
    - soft-deleted orders stay listed and can be filtered
    """
    list_display = (
        "id",
        "title",
        "status_badge",
        "client_username",
        "executor_username",
        "budget_min",
        "budget_max",
        "agreed_price",
        "is_deleted",
        "created_at",
    )
    list_select_related = ("client", "executor")
    list_filter = ("status", "is_public", "is_deleted", "created_at")
    date_hierarchy = "created_at"
    ordering = ("-created_at", "-id")
    search_fields = ("title", "client__username", "executor__username")
    inlines = [OrderResponseInline]

    readonly_fields = (
        "status",
        "client",
        "executor",
        "is_deleted",
        "agreed_price",
        "agreed_deadline",
        "view_count",
        "response_count",
        "created_at",
        "updated_at",
        "started_at",
        "completed_at",
    )

    def status_badge(self, obj):
        color = {
            "new": "#6366f1",
            "in_progress": "#0ea5e9",
            "revision": "#f59e0b",
            "on_review": "#a855f7",
            "completed": "#22c55e",
            "disputed": "#f97316",
            "cancelled": "#ef4444",
        }.get(obj.status, "#9ca3af")
        return format_html(
            '<span style="display:inline-block;padding:2px 8px;border-radius:999px;'
            'font-size:12px;font-weight:600;color:#fff;background:{};">{}</span>',
            color,
            obj.status,
        )
    status_badge.short_description = "status"
    status_badge.admin_order_field = "status"

    def client_username(self, obj):
        return obj.client.username if obj.client_id else ""
    client_username.short_description = "client"

    def executor_username(self, obj):
        return obj.executor.username if obj.executor_id else ""
    executor_username.short_description = "executor"
