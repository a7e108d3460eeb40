from django.contrib import admin

from ledger.models import GoalsLedgerEntry, PointsLedgerEntry


class ReadOnlyLedgerAdmin(admin.ModelAdmin):
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(PointsLedgerEntry)
class PointsLedgerEntryAdmin(ReadOnlyLedgerAdmin):
    list_display = ["created_at", "user", "deal", "points", "description"]
    search_fields = ["user__email", "description"]
    list_select_related = ["user", "deal"]


@admin.register(GoalsLedgerEntry)
class GoalsLedgerEntryAdmin(ReadOnlyLedgerAdmin):
    list_display = ["created_at", "user", "deal", "goals", "month", "year", "region_config"]
    list_filter = ["year", "month", "region_config"]
    search_fields = ["user__email", "description"]
    list_select_related = ["user", "deal", "region_config"]
