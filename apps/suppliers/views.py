from rest_framework import viewsets, status
from rest_framework.response import Response

from apps.core.cache import CachedResponseMixin
from apps.core.pagination import StandardPagination
from .serializers import SupplierSerializer, SupplierSearchQuerySerializer
from .services import (
    search_suppliers,
    create_supplier,
    update_supplier,
    delete_supplier,
)
from .exceptions import SupplierNotFoundError, SupplierValidationError


class SupplierViewSet(CachedResponseMixin, viewsets.ModelViewSet):
    """Suppliers of the authenticated user, ordered by name."""

    serializer_class = SupplierSerializer
    pagination_class = StandardPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    cache_resource = 'suppliers'
    cache_invalidates = ('stock',)

    def get_queryset(self):
        query = SupplierSearchQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return search_suppliers(
            user=self.request.user,
            search=query.validated_data.get('search'),
        )

    def create(self, request, *args, **kwargs):
        serializer = SupplierSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            supplier = create_supplier(user=request.user, **serializer.validated_data)
        except SupplierValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SupplierSerializer(supplier).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = SupplierSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            supplier = update_supplier(
                user=request.user,
                supplier_id=kwargs['pk'],
                data=serializer.validated_data,
            )
        except SupplierNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except SupplierValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SupplierSerializer(supplier).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_supplier(user=request.user, supplier_id=kwargs['pk'])
        except SupplierNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'message': 'Supplier deleted successfully'})
