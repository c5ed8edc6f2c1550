from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.core.cache import CachedResponseMixin
from apps.core.pagination import StandardPagination
from .serializers import (
    StockItemSerializer,
    StockItemInputSerializer,
    StockBatchSerializer,
    StockQuerySerializer,
)
from .services import (
    search_stock,
    get_categories,
    create_stock_item,
    update_stock_item,
    delete_stock_item,
    batch_create_stock_items,
    StockItemNotFoundError,
    StockValidationError,
)


class StockItemViewSet(CachedResponseMixin, viewsets.ModelViewSet):
    """
    Stock items of the authenticated user.

    list: Search and filter (category, supplier, low_stock), with totals
    categories: Distinct categories in use
    batch: Import many items in one transaction
    """

    serializer_class = StockItemSerializer
    pagination_class = StandardPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    cache_resource = 'stock'
    cache_invalidates = ('documents',)

    def get_queryset(self):
        query = StockQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return search_stock(user=self.request.user, **query.validated_data)

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return StockItemInputSerializer
        return StockItemSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter('search', OpenApiTypes.STR),
            OpenApiParameter('category', OpenApiTypes.STR),
            OpenApiParameter('supplier', OpenApiTypes.UUID),
            OpenApiParameter('low_stock', OpenApiTypes.BOOL),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        serializer = StockItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = create_stock_item(user=request.user, **serializer.validated_data)
        except StockValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(StockItemSerializer(item).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = StockItemInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            item = update_stock_item(
                user=request.user,
                item_id=kwargs['pk'],
                data=serializer.validated_data,
            )
        except StockItemNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except StockValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(StockItemSerializer(item).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_stock_item(user=request.user, item_id=kwargs['pk'])
        except StockItemNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'message': 'Stock item deleted successfully'})

    @extend_schema(request=StockBatchSerializer, responses={201: StockItemSerializer(many=True)})
    @action(detail=False, methods=['post'])
    def batch(self, request):
        """Create many stock items at once. Either all are created or none."""
        serializer = StockBatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            items = batch_create_stock_items(
                user=request.user,
                items=serializer.validated_data['items'],
            )
        except StockValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            StockItemSerializer(items, many=True).data,
            status=status.HTTP_201_CREATED
        )

    @action(detail=False, methods=['get'])
    def categories(self, request):
        """Get list of all categories in use."""
        return Response(get_categories(user=request.user))
