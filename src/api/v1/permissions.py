"""Custom DRF permissions for the partner program API."""
from rest_framework.permissions import SAFE_METHODS, BasePermission


class IsProgramAdmin(BasePermission):
    """Allow access to ADMIN, REGIONAL_ADMIN and SUPER_ADMIN users."""

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_program_admin)


class IsProgramAdminOrReadOnly(IsProgramAdmin):
    """Any authenticated user may read; writes need a program admin."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return super().has_permission(request, view)


class IsOwnerOrProgramAdmin(BasePermission):
    """Object-level: sellers only see their own records."""

    def has_object_permission(self, request, view, obj):
        user = request.user
        if user.is_program_admin:
            return True
        return getattr(obj, "user_id", None) == user.pk
