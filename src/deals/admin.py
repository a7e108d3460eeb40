from django.contrib import admin, messages

from deals.models import Deal
from deals.services import approve_deal, reject_deal


@admin.register(Deal)
class DealAdmin(admin.ModelAdmin):
    list_display = [
        "product_name", "user", "deal_type", "deal_value", "close_date",
        "status", "points_earned", "goals_earned",
    ]
    list_filter = ["status", "deal_type", "product_type"]
    search_fields = ["product_name", "user__email", "license_agreement_number"]
    list_select_related = ["user"]
    readonly_fields = [
        "status", "points_earned", "goals_earned", "region_config",
        "approved_by", "approved_at", "created_at", "updated_at",
    ]
    actions = ["approve_selected", "reject_selected"]

    @admin.action(description="Approuver les ventes selectionnees")
    def approve_selected(self, request, queryset):
        for deal_id in queryset.values_list("pk", flat=True):
            approve_deal(deal_id, request.user)
        self.message_user(request, "Ventes approuvees.", messages.SUCCESS)

    @admin.action(description="Rejeter les ventes selectionnees")
    def reject_selected(self, request, queryset):
        for deal_id in queryset.values_list("pk", flat=True):
            reject_deal(deal_id)
        self.message_user(request, "Ventes rejetees.", messages.SUCCESS)
