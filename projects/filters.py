"""
django-filter FilterSet definitions for the projects app.

``ProjectFilter`` drives the public project listing: ``category``
narrows by exact category (the pseudo-category ``All`` disables the
filter), ``search`` matches title or description case-insensitively,
and ``sort_by`` picks one of the listing orders.  Unknown ``sort_by``
values fall back to newest first.
"""
from django.db.models import Q
from django_filters import rest_framework as filters

from .models import Project

SORT_ORDERS = {
    "trending": ("-backers", "-created_at"),
    "newest": ("-created_at", "-id"),
    "ending": ("end_date", "id"),
    "funded": ("-raised", "-created_at"),
}


class ProjectFilter(filters.FilterSet):
    """Filter set for the public project listing."""

    category = filters.CharFilter(method="filter_category")
    search = filters.CharFilter(method="filter_search")
    sort_by = filters.CharFilter(method="filter_sort_by")

    class Meta:
        model = Project
        fields = []

    def filter_category(self, queryset, name, value):
        if not value or value == "All":
            return queryset
        return queryset.filter(category=value)

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(title__icontains=value) | Q(description__icontains=value))

    def filter_sort_by(self, queryset, name, value):
        return queryset.order_by(*SORT_ORDERS.get(value, SORT_ORDERS["newest"]))
