from django.contrib import admin

from notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["created_at", "user", "kind", "level", "title", "is_read"]
    list_filter = ["kind", "level", "is_read"]
    search_fields = ["user__email", "title"]
