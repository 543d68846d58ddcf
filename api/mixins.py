"""
Behaviour shared by the API views: access to the storage client, guarded
writes and the filtered/paginated list response.
"""

from django.apps import apps
from django.utils.text import capfirst
from rest_framework.response import Response

from .exceptions import to_api_exception
from .query_filters import build_query
from .storage import StorageError


class StorageMixin:
    """
    Gives a view the process-wide StorageClient. A different client can be
    injected with ``View.as_view(storage=...)``.
    """
    storage = None
    entity_label = 'Resource'

    def get_storage(self):
        if self.storage is None:
            self.storage = apps.get_app_config('api').storage
        return self.storage

    def guarded(self, operation, *args, label=None, **kwargs):
        """Runs a storage operation and re-raises its StorageError as an API error."""
        try:
            with self.get_storage().translate_errors():
                return operation(*args, **kwargs)
        except StorageError as error:
            raise to_api_exception(error, label or self.entity_label) from error

    def fetch(self, queryset, label=None, **lookup):
        try:
            return self.get_storage().fetch(queryset, **lookup)
        except StorageError as error:
            raise to_api_exception(error, label or capfirst(queryset.model._meta.verbose_name)) from error


class FilteredListMixin:
    """
    List action driven by the query filter builder. Views declare which
    public names can be filtered (``filter_fields``) and sorted
    (``sort_fields``, defaulting to the filters plus the timestamps).
    """
    filter_fields = {}
    sort_fields = None

    def get_sort_fields(self):
        if self.sort_fields is not None:
            return self.sort_fields
        return {**self.filter_fields, 'createdAt': 'created_at', 'updatedAt': 'updated_at'}

    def list(self, request, *args, **kwargs):
        descriptor = build_query(request.query_params, self.filter_fields, self.get_sort_fields())
        queryset = descriptor.apply(self.filter_queryset(self.get_queryset()))
        total = queryset.count()
        serializer = self.get_serializer(descriptor.page_of(queryset), many=True)
        return Response({
            'data': serializer.data,
            'meta': descriptor.meta(total),
        })
