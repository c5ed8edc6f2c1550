from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.core.cache import CachedResponseMixin
from apps.core.pagination import StandardPagination
from .serializers import (
    PaymentSerializer,
    PaymentInputSerializer,
    RecordPaymentSerializer,
    RecordPaymentResponseSerializer,
    PaymentQuerySerializer,
    ReceiptSerializer,
)
from .services import (
    search_payments,
    create_payment,
    update_payment,
    delete_payment,
    record_invoice_payment,
    get_payment_receipt,
    PaymentNotFoundError,
    PaymentValidationError,
    InvoiceNotFoundError,
    PaymentNotAllowedError,
    InsufficientBalanceError,
)


class PaymentViewSet(CachedResponseMixin, viewsets.ModelViewSet):
    """
    Payments of the authenticated user.

    Every write recomputes total_paid of the documents involved.

    record: Pay an invoice with new money or from the client's balance
    receipt: Data for a printable receipt
    """

    serializer_class = PaymentSerializer
    pagination_class = StandardPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    cache_resource = 'payments'
    cache_invalidates = ('documents', 'clients')

    def get_queryset(self):
        query = PaymentQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return search_payments(user=self.request.user, **query.validated_data)

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return PaymentInputSerializer
        return PaymentSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter('client', OpenApiTypes.UUID),
            OpenApiParameter('document', OpenApiTypes.UUID),
            OpenApiParameter('unallocated', OpenApiTypes.BOOL),
            OpenApiParameter('date_from', OpenApiTypes.DATE),
            OpenApiParameter('date_to', OpenApiTypes.DATE),
            OpenApiParameter('search', OpenApiTypes.STR),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        serializer = PaymentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            payment = create_payment(user=request.user, **serializer.validated_data)
        except PaymentValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = PaymentInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            payment = update_payment(
                user=request.user,
                payment_id=kwargs['pk'],
                data=serializer.validated_data,
            )
        except PaymentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except PaymentValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PaymentSerializer(payment).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_payment(user=request.user, payment_id=kwargs['pk'])
        except PaymentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'message': 'Payment deleted successfully'})

    @extend_schema(request=RecordPaymentSerializer, responses={201: RecordPaymentResponseSerializer})
    @action(detail=False, methods=['post'])
    def record(self, request):
        """Record a payment on an invoice."""
        serializer = RecordPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = record_invoice_payment(user=request.user, **serializer.validated_data)
        except InvoiceNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (PaymentNotAllowedError, PaymentValidationError, InsufficientBalanceError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            RecordPaymentResponseSerializer(result).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: ReceiptSerializer})
    @action(detail=True, methods=['get'])
    def receipt(self, request, pk=None):
        """Payment with its document and company details for printing."""
        try:
            receipt = get_payment_receipt(user=request.user, payment_id=pk)
        except PaymentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ReceiptSerializer(receipt).data)
