from django.contrib import admin

from prizes.models import GrandPrizeCriteria, GrandPrizeWinner, MonthlyRegionPrize
from prizes.services import activate_criteria


@admin.register(GrandPrizeCriteria)
class GrandPrizeCriteriaAdmin(admin.ModelAdmin):
    list_display = ["name", "criteria_type", "region", "market_segment", "start_date", "end_date", "is_active"]
    list_filter = ["criteria_type", "region", "is_active"]
    search_fields = ["name"]
    readonly_fields = ["is_active"]
    actions = ["activate"]

    @admin.action(description="Activer ce critere")
    def activate(self, request, queryset):
        criteria = queryset.first()
        if criteria is not None:
            activate_criteria(criteria.pk)


@admin.register(GrandPrizeWinner)
class GrandPrizeWinnerAdmin(admin.ModelAdmin):
    list_display = ["criteria", "rank", "user", "points", "deals", "goals", "score"]
    list_filter = ["criteria"]


@admin.register(MonthlyRegionPrize)
class MonthlyRegionPrizeAdmin(admin.ModelAdmin):
    list_display = ["prize_name", "region_config", "month", "year", "rank", "goal_target", "is_active"]
    list_filter = ["year", "month", "region_config"]
