"""Shared helpers for filtered, sorted and paginated list endpoints.

Query parameters are validated with serializers (400 on bad input) except
``sortBy`` and ``sortOrder``, which are resolved leniently against an explicit
allow-list. Only allow-listed field names ever reach ``order_by``; filter
values are always passed to the ORM as bound parameters.
"""

import math

from rest_framework import serializers

DEFAULT_SORT_FIELD = "name"
MAX_PAGE_SIZE = 100
MAX_PAGE_NUMBER = 1000


class ListQuerySerializer(serializers.Serializer):
    """Pagination and sorting parameters shared by all list endpoints."""

    page = serializers.IntegerField(min_value=1, max_value=MAX_PAGE_NUMBER, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=MAX_PAGE_SIZE, default=10)
    sortBy = serializers.CharField(required=False, allow_blank=True, max_length=50)
    sortOrder = serializers.CharField(required=False, allow_blank=True, max_length=10)


def text_filter(max_length=100):
    """Optional free-text filter with a length cap."""
    return serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=max_length,
        trim_whitespace=True,
    )


def resolve_sorting(raw_sort_by, raw_sort_order, allowed, default=DEFAULT_SORT_FIELD):
    """Map raw query values onto an allowed sort key and ASC/DESC.

    Unknown sort keys fall back to ``default``; any order other than a
    case-insensitive ``asc`` is ``DESC``.
    """
    sort_by = raw_sort_by if raw_sort_by in allowed else default
    sort_order = "ASC" if (raw_sort_order or "").upper() == "ASC" else "DESC"
    return sort_by, sort_order


def order_queryset(qs, sort_by, sort_order, field_map):
    """Apply ordering for an allow-listed key, with ``id`` as a stable tie-breaker."""
    field = field_map[sort_by]
    prefix = "-" if sort_order == "DESC" else ""
    ordering = [f"{prefix}{field}"]
    if field != "id":
        ordering.append(f"{prefix}id")
    return qs.order_by(*ordering)


def paginate(qs, page: int, limit: int, total_key: str):
    """Slice ``qs`` for ``page`` and return ``(rows, pagination)``.

    The total comes from the same queryset that produces the rows, so both
    always apply the same filters (including filters on aggregates).
    """
    total = qs.count()
    offset = (page - 1) * limit
    rows = list(qs[offset:offset + limit])
    total_pages = math.ceil(total / limit) if total else 0
    pagination = {
        "currentPage": page,
        "totalPages": total_pages,
        total_key: total,
        "limit": limit,
        "hasNextPage": page < total_pages,
        "hasPrevPage": page > 1,
    }
    return rows, pagination
