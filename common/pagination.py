"""Shared page-number pagination for list endpoints."""

from rest_framework.pagination import PageNumberPagination


class StandardPagination(PageNumberPagination):
    """Default pagination with an adjustable page size via query param."""

    page_size = 10
    page_size_query_param = "page_size"
    max_page_size = 100
