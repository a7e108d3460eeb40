"""Pagination utilities for API v1."""

from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """Page number pagination with client-controlled page size."""

    page_size = 25
    page_size_query_param = "page_size"
    max_page_size = 200


def paginate_list(view, request, items, serialize):
    """Paginate an in-memory list (e.g. ranking entries) with the view's paginator."""
    paginator = StandardResultsSetPagination()
    page = paginator.paginate_queryset(items, request, view=view)
    return paginator.get_paginated_response([serialize(item) for item in page])
