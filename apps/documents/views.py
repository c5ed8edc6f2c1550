from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.core.cache import CachedResponseMixin
from apps.core.pagination import StandardPagination
from .models import DocumentType
from .serializers import (
    DocumentSerializer,
    DocumentDetailSerializer,
    DocumentInputSerializer,
    DocumentUpdateSerializer,
    DocumentBatchSerializer,
    ConvertDocumentSerializer,
    DocumentQuerySerializer,
    NextNumberSerializer,
    DocumentSummarySerializer,
    ErrorSerializer,
)
from .services import (
    search_documents,
    get_document,
    create_document,
    update_document,
    delete_document,
    cancel_document,
    restore_document,
    batch_create_documents,
    convert_proforma_to_invoice,
    next_document_number,
    get_documents_summary,
    DocumentNotFoundError,
    DocumentValidationError,
    DuplicateDocumentNumberError,
    DocumentLockedError,
    InvalidConversionError,
    InvalidStatusTransitionError,
)


def _error(exc):
    """Map a documents service exception to an error response."""
    if isinstance(exc, DocumentNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, DuplicateDocumentNumberError):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(exc)}, status=code)


CLIENT_ERRORS = (
    DocumentNotFoundError,
    DocumentValidationError,
    DuplicateDocumentNumberError,
    DocumentLockedError,
    InvalidConversionError,
    InvalidStatusTransitionError,
)


class DocumentViewSet(CachedResponseMixin, viewsets.ModelViewSet):
    """
    Proformas and invoices of the authenticated user.

    list: Filter by type, status, client, date range; search number/client name
    create/update: Totals are always computed server-side
    convert: Turn a proforma into an invoice
    cancel/restore: Cancel a document or bring it back as draft
    next_number: Reserve the next number for a type
    summary: Counts, sums and receivables
    """

    serializer_class = DocumentSerializer
    pagination_class = StandardPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    cache_resource = 'documents'
    cache_invalidates = ('payments', 'clients')

    def get_queryset(self):
        query = DocumentQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return search_documents(user=self.request.user, **query.validated_data)

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return DocumentDetailSerializer
        if self.action == 'create':
            return DocumentInputSerializer
        if self.action in ('update', 'partial_update'):
            return DocumentUpdateSerializer
        return DocumentSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter('type', OpenApiTypes.STR, enum=DocumentType.values),
            OpenApiParameter('status', OpenApiTypes.STR),
            OpenApiParameter('client', OpenApiTypes.UUID),
            OpenApiParameter('date_from', OpenApiTypes.DATE),
            OpenApiParameter('date_to', OpenApiTypes.DATE),
            OpenApiParameter('search', OpenApiTypes.STR),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        handler = self._build_detail
        return self.cached_response(request, lambda: handler(kwargs['pk']))

    def _build_detail(self, document_id):
        try:
            document = get_document(user=self.request.user, document_id=document_id)
        except DocumentNotFoundError as e:
            return _error(e)
        return Response(DocumentDetailSerializer(document).data)

    @extend_schema(
        request=DocumentInputSerializer,
        responses={201: DocumentDetailSerializer, 400: ErrorSerializer, 409: ErrorSerializer},
    )
    def create(self, request, *args, **kwargs):
        serializer = DocumentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            document = create_document(user=request.user, **serializer.validated_data)
        except CLIENT_ERRORS as e:
            return _error(e)

        document = get_document(user=request.user, document_id=document.id)
        return Response(DocumentDetailSerializer(document).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=DocumentUpdateSerializer,
        responses={200: DocumentDetailSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    )
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = DocumentUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            document = update_document(
                user=request.user,
                document_id=kwargs['pk'],
                data=serializer.validated_data,
            )
        except CLIENT_ERRORS as e:
            return _error(e)

        document = get_document(user=request.user, document_id=document.id)
        return Response(DocumentDetailSerializer(document).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_document(user=request.user, document_id=kwargs['pk'])
        except DocumentNotFoundError as e:
            return _error(e)

        return Response({'message': 'Document deleted successfully'})

    @extend_schema(
        request=ConvertDocumentSerializer,
        responses={201: DocumentDetailSerializer, 400: ErrorSerializer, 404: ErrorSerializer, 409: ErrorSerializer},
    )
    @action(detail=True, methods=['post'])
    def convert(self, request, pk=None):
        """Convert a proforma into an invoice."""
        serializer = ConvertDocumentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            invoice = convert_proforma_to_invoice(
                user=request.user,
                proforma_id=pk,
                document_number=serializer.validated_data.get('document_number') or None,
            )
        except CLIENT_ERRORS as e:
            return _error(e)

        invoice = get_document(user=request.user, document_id=invoice.id)
        return Response(DocumentDetailSerializer(invoice).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: DocumentSerializer, 400: ErrorSerializer})
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        """Mark the document cancelled."""
        try:
            document = cancel_document(user=request.user, document_id=pk)
        except CLIENT_ERRORS as e:
            return _error(e)

        return Response(DocumentSerializer(document).data)

    @extend_schema(request=None, responses={200: DocumentSerializer, 400: ErrorSerializer})
    @action(detail=True, methods=['post'])
    def restore(self, request, pk=None):
        """Bring a cancelled document back."""
        try:
            document = restore_document(user=request.user, document_id=pk)
        except CLIENT_ERRORS as e:
            return _error(e)

        return Response(DocumentSerializer(document).data)

    @extend_schema(request=DocumentBatchSerializer, responses={201: DocumentSerializer(many=True)})
    @action(detail=False, methods=['post'])
    def batch(self, request):
        """Import many documents. Either all are created or none."""
        serializer = DocumentBatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            documents = batch_create_documents(
                user=request.user,
                documents=serializer.validated_data['documents'],
            )
        except CLIENT_ERRORS as e:
            return _error(e)

        return Response(
            DocumentSerializer(documents, many=True).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=None, responses={200: NextNumberSerializer, 400: ErrorSerializer})
    @action(detail=False, methods=['get'], url_path=r'next-number/(?P<doc_type>[A-Za-z]+)')
    def next_number(self, request, doc_type=None):
        """Reserve the next document number for a type (proforma or invoice)."""
        document_type = doc_type.upper()
        if document_type not in DocumentType.values:
            return Response(
                {'error': 'Type must be PROFORMA or INVOICE'},
                status=status.HTTP_400_BAD_REQUEST
            )

        number = next_document_number(user=request.user, document_type=document_type)
        return Response({'document_number': number})

    @extend_schema(responses={200: DocumentSummarySerializer})
    @action(detail=False, methods=['get'])
    def summary(self, request):
        """Counts, sums and receivables over all documents."""
        return Response(DocumentSummarySerializer(get_documents_summary(user=request.user)).data)
