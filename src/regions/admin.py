from django.contrib import admin

from regions.models import PointsConfig, RegionConfig


@admin.register(RegionConfig)
class RegionConfigAdmin(admin.ModelAdmin):
    list_display = [
        "name", "region", "category", "subcategory",
        "new_customer_goal_rate", "renewal_goal_rate", "monthly_goal_target", "is_active",
    ]
    list_filter = ["region", "category", "is_active"]
    search_fields = ["name", "subcategory"]


@admin.register(PointsConfig)
class PointsConfigAdmin(admin.ModelAdmin):
    list_display = ["region", "new_customer_rate", "renewal_rate", "grand_prize_threshold", "is_active", "updated_at"]
    list_filter = ["region", "is_active"]
    readonly_fields = ["updated_by", "created_at", "updated_at"]
