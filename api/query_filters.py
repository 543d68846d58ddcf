"""
Translation of list query parameters into a filter/pagination/sort descriptor.

``page`` and ``limit`` select the page, ``sortBy`` and ``sortOrder`` the
ordering, and every other parameter is a field filter:

* integer-looking values compare as integers,
* ``true`` / ``false`` (any case) compare as booleans,
* anything else is a case-insensitive substring match.

Reference filters (lookups on a ``*_id`` column) always compare exactly.
Empty values are ignored.
"""

import math
import re
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from django.conf import settings
from rest_framework.exceptions import ValidationError

INTEGER_RE = re.compile(r'^-?\d+$')
SORT_ORDERS = ('asc', 'desc')
# Largest OFFSET + LIMIT the database accepts (signed 64-bit).
MAX_ROW_OFFSET = 2 ** 63 - 1
# Parameters that control the listing itself or are consumed by DRF.
RESERVED_PARAMS = frozenset({'page', 'limit', 'sortBy', 'sortOrder', 'format'})


@dataclass(frozen=True)
class QueryDescriptor:
    page: int
    limit: int
    filters: Dict[str, Any] = field(default_factory=dict)
    ordering: Tuple[str, ...] = ()

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def apply(self, queryset):
        """Filters and orders ``queryset``; pagination is left to the caller."""
        queryset = queryset.filter(**self.filters)
        if self.ordering:
            queryset = queryset.order_by(*self.ordering)
        return queryset

    def page_of(self, queryset):
        return queryset[self.offset:self.offset + self.limit]

    def meta(self, total: int) -> Dict[str, int]:
        return {
            'total': total,
            'page': self.page,
            'limit': self.limit,
            'totalPages': math.ceil(total / self.limit),
        }


def coerce_filter(lookup: str, raw: str) -> Tuple[str, Any]:
    """Returns the ORM keyword argument for one filter value."""
    if lookup.endswith('_id'):
        try:
            return lookup, uuid.UUID(raw)
        except ValueError:
            raise ValidationError({lookup: [f"'{raw}' is not a valid identifier"]}) from None
    if INTEGER_RE.match(raw):
        return lookup, int(raw)
    if raw.lower() in ('true', 'false'):
        return lookup, raw.lower() == 'true'
    return f"{lookup}__icontains", raw


def _positive_int(params: Mapping, name: str, default: int, maximum: Optional[int] = None) -> int:
    raw = params.get(name)
    if raw in (None, ''):
        return default
    if not INTEGER_RE.match(str(raw)) or int(raw) < 1:
        raise ValidationError({name: [f"{name} must be a positive integer"]})
    value = int(raw)
    if maximum is not None and value > maximum:
        raise ValidationError({name: [f"{name} must not exceed {maximum}"]})
    return value


def build_query(params: Mapping, filter_fields: Mapping[str, str],
                sort_fields: Optional[Mapping[str, str]] = None) -> QueryDescriptor:
    """
    Builds a QueryDescriptor from request query parameters.

    ``filter_fields`` and ``sort_fields`` map public parameter names to ORM
    lookups; ``sort_fields`` defaults to ``filter_fields``. Unknown names are
    rejected with a ValidationError.
    """
    default_limit = getattr(settings, 'API_DEFAULT_PAGE_SIZE', 25)
    max_limit = getattr(settings, 'API_MAX_PAGE_SIZE', 100)
    sort_fields = filter_fields if sort_fields is None else sort_fields

    limit = _positive_int(params, 'limit', default_limit, max_limit)
    page = _positive_int(params, 'page', 1, MAX_ROW_OFFSET // limit)

    sort_order = (params.get('sortOrder') or 'asc').lower()
    if sort_order not in SORT_ORDERS:
        raise ValidationError({'sortOrder': ["sortOrder must be 'asc' or 'desc'"]})

    ordering = ()
    sort_by = params.get('sortBy')
    if sort_by:
        if sort_by not in sort_fields:
            raise ValidationError({'sortBy': [f"Cannot sort by '{sort_by}'"]})
        prefix = '-' if sort_order == 'desc' else ''
        ordering = (f"{prefix}{sort_fields[sort_by]}", 'pk')

    filters = {}
    unknown = []
    for name in params.keys():
        if name in RESERVED_PARAMS:
            continue
        if name not in filter_fields:
            unknown.append(name)
            continue
        raw = params.get(name)
        if not raw:
            continue
        key, value = coerce_filter(filter_fields[name], raw)
        filters[key] = value

    if unknown:
        raise ValidationError({name: [f"Unknown filter '{name}'"] for name in unknown})

    return QueryDescriptor(page=page, limit=limit, filters=filters, ordering=ordering)
