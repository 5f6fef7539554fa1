from django.contrib import admin

from .models import ChatRoom, Message


class MessageInline(admin.TabularInline):
    model = Message
    extra = 0
    fields = ("sender", "content", "is_system", "is_read", "created_at")
    readonly_fields = fields
    can_delete = False


@admin.register(ChatRoom)
class ChatRoomAdmin(admin.ModelAdmin):
    list_display = ("id", "order", "client", "executor", "created_at", "last_message_at")
    list_select_related = ("order", "client", "executor")
    search_fields = ("order__title", "client__username", "executor__username")
    readonly_fields = ("order", "client", "executor", "created_at", "last_message_at")
    inlines = [MessageInline]
