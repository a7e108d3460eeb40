from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin configuration for the custom User model."""

    list_display = (
        "email",
        "first_name",
        "last_name",
        "role",
        "region",
        "region_category",
        "region_subcategory",
        "is_approved",
        "is_active",
    )
    list_filter = ("role", "region", "region_category", "is_approved", "is_active")
    search_fields = ("email", "first_name", "last_name", "company_name")
    ordering = ("last_name", "first_name")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            _("Informations personnelles"),
            {"fields": ("first_name", "last_name", "company_name", "country")},
        ),
        (
            _("Segmentation"),
            {"fields": ("region", "region_category", "region_subcategory", "partner_category")},
        ),
        (
            _("Role et permissions"),
            {"fields": ("role", "is_approved", "is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "first_name", "last_name", "role", "password1", "password2"),
            },
        ),
    )
