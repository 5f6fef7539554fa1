from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "order", "client", "executor", "rating", "is_visible", "is_moderated", "created_at")
    list_filter = ("rating", "is_visible", "is_moderated")
    list_select_related = ("order", "client", "executor")
    search_fields = ("comment", "client__username", "executor__username")
    ordering = ("-created_at", "-id")
