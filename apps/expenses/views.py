from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.core.cache import CachedResponseMixin
from apps.core.pagination import StandardPagination
from .serializers import (
    ExpenseSerializer,
    ExpenseQuerySerializer,
    SummaryQuerySerializer,
    ExpenseSummarySerializer,
)
from .services import (
    search_expenses,
    create_expense,
    update_expense,
    delete_expense,
    get_expenses_summary,
)
from .exceptions import ExpenseNotFoundError, ExpenseValidationError


class ExpenseViewSet(CachedResponseMixin, viewsets.ModelViewSet):
    """
    Business expenses of the authenticated user.

    summary: Total and per-category totals for a date range
    """

    serializer_class = ExpenseSerializer
    pagination_class = StandardPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    cache_resource = 'expenses'
    cached_actions = ('list', 'retrieve', 'summary')

    def get_queryset(self):
        query = ExpenseQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return search_expenses(user=self.request.user, **query.validated_data)

    @extend_schema(
        parameters=[
            OpenApiParameter('search', OpenApiTypes.STR),
            OpenApiParameter('category', OpenApiTypes.STR),
            OpenApiParameter('date_from', OpenApiTypes.DATE),
            OpenApiParameter('date_to', OpenApiTypes.DATE),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        serializer = ExpenseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            expense = create_expense(user=request.user, **serializer.validated_data)
        except ExpenseValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = ExpenseSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            expense = update_expense(
                user=request.user,
                expense_id=kwargs['pk'],
                data=serializer.validated_data,
            )
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ExpenseValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseSerializer(expense).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_expense(user=request.user, expense_id=kwargs['pk'])
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'message': 'Expense deleted successfully'})

    @extend_schema(
        parameters=[
            OpenApiParameter('date_from', OpenApiTypes.DATE),
            OpenApiParameter('date_to', OpenApiTypes.DATE),
        ],
        responses={200: ExpenseSummarySerializer},
    )
    @action(detail=False, methods=['get'])
    def summary(self, request):
        query = SummaryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        def build():
            summary = get_expenses_summary(user=request.user, **query.validated_data)
            return Response(ExpenseSummarySerializer(summary).data)

        return self.cached_response(request, build)
