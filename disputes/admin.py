from django.contrib import admin

from .models import Dispute, DisputeEvidence


class DisputeEvidenceInline(admin.TabularInline):
    model = DisputeEvidence
    extra = 0
    fields = ("uploaded_by", "file_name", "file_url", "file_size", "created_at")
    readonly_fields = fields
    can_delete = False


@admin.register(Dispute)
class DisputeAdmin(admin.ModelAdmin):
    """Read-mostly view; resolution goes through the API so the order moves with it."""
    list_display = ("id", "order", "opened_by", "status", "admin", "resolution", "created_at", "resolved_at")
    list_filter = ("status", "resolution", "created_at")
    list_select_related = ("order", "opened_by", "admin")
    search_fields = ("order__title", "opened_by__username", "reason")
    ordering = ("-created_at", "-id")
    readonly_fields = (
        "order",
        "opened_by",
        "reason",
        "status",
        "admin",
        "resolution",
        "resolution_notes",
        "chat_room",
        "created_at",
        "updated_at",
        "resolved_at",
    )
    inlines = [DisputeEvidenceInline]
