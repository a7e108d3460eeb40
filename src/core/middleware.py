"""Core middleware."""
import threading

from django.utils.cache import patch_cache_control

_thread_locals = threading.local()


def get_current_user():
    return getattr(_thread_locals, "user", None)


def get_client_ip(request):
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")


class AuditLogMiddleware:
    """Store current user in thread-local for audit logging."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        user = getattr(request, "user", None)
        _thread_locals.user = user if user is not None and user.is_authenticated else None
        try:
            return self.get_response(request)
        finally:
            _thread_locals.user = None


class NoStoreAPIMiddleware:
    """Force no-store headers on API responses so rankings are never served stale."""

    API_PREFIX = "/api/"

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        if request.path.startswith(self.API_PREFIX):
            patch_cache_control(
                response,
                private=True,
                no_cache=True,
                no_store=True,
                must_revalidate=True,
                max_age=0,
            )
        return response
