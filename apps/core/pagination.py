"""
Pagination classes shared by every list endpoint.

Both classes read `page` and `limit` query parameters (limit defaults to 50,
capped at 100) and wrap results as::

    {"data": [...], "pagination": {"page", "limit", "total", "total_pages", "has_more"}}
"""

import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardPagination(PageNumberPagination):
    """Offset pagination that counts the full result set."""

    page_size = 50
    page_size_query_param = 'limit'
    max_page_size = 100

    def get_page_number_value(self, request):
        raw = request.query_params.get(self.page_query_param)
        try:
            page = int(raw)
        except (TypeError, ValueError):
            return 1
        return max(page, 1)

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        self.limit = self.get_page_size(request)
        self.page_number = self.get_page_number_value(request)
        offset = (self.page_number - 1) * self.limit

        self.total = queryset.count()
        self.has_more = offset + self.limit < self.total
        return list(queryset[offset:offset + self.limit])

    def get_pagination_meta(self):
        total_pages = math.ceil(self.total / self.limit) if self.total is not None else None
        return {
            'page': self.page_number,
            'limit': self.limit,
            'total': self.total,
            'total_pages': total_pages,
            'has_more': self.has_more,
        }

    def get_paginated_response(self, data):
        return Response({
            'data': data,
            'pagination': self.get_pagination_meta(),
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'data': schema,
                'pagination': {
                    'type': 'object',
                    'properties': {
                        'page': {'type': 'integer'},
                        'limit': {'type': 'integer'},
                        'total': {'type': 'integer', 'nullable': True},
                        'total_pages': {'type': 'integer', 'nullable': True},
                        'has_more': {'type': 'boolean'},
                    },
                },
            },
        }


class LookaheadPagination(StandardPagination):
    """
    Pagination without COUNT(*).

    Fetches one row more than the page size to learn whether another page
    exists. `total` and `total_pages` are reported as null.
    """

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        self.limit = self.get_page_size(request)
        self.page_number = self.get_page_number_value(request)
        offset = (self.page_number - 1) * self.limit

        rows = list(queryset[offset:offset + self.limit + 1])
        self.total = None
        self.has_more = len(rows) > self.limit
        return rows[:self.limit]
