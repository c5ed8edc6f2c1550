from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.core.cache import CachedResponseMixin
from apps.core.pagination import LookaheadPagination
from .serializers import (
    ClientSerializer,
    ClientInputSerializer,
    ClientBatchSerializer,
    ClientSearchQuerySerializer,
    ClientBalanceSerializer,
    NextClientNumberSerializer,
)
from .services import (
    search_clients,
    next_client_number,
    create_client,
    update_client,
    delete_client,
    batch_create_clients,
    get_client_balance,
    ClientNotFoundError,
    ClientValidationError,
)


class ClientViewSet(CachedResponseMixin, viewsets.ModelViewSet):
    """
    Clients of the authenticated user.

    list: Search clients (name, email, phone, location), newest first
    create: Create a client (number assigned when omitted)
    retrieve/update/partial_update/destroy: Single client operations
    next_id: Reserve the next client number
    batch: Import many clients in one transaction
    balance: Unallocated credit on the client's account
    """

    serializer_class = ClientSerializer
    pagination_class = LookaheadPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    cache_resource = 'clients'
    cache_invalidates = ('documents', 'payments')

    def get_queryset(self):
        query = ClientSearchQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return search_clients(
            user=self.request.user,
            search=query.validated_data.get('search'),
        )

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return ClientInputSerializer
        return ClientSerializer

    @extend_schema(
        parameters=[OpenApiParameter('search', OpenApiTypes.STR)],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        serializer = ClientInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            client = create_client(user=request.user, **serializer.validated_data)
        except ClientValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ClientSerializer(client).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = ClientInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            client = update_client(
                user=request.user,
                client_id=kwargs['pk'],
                data=serializer.validated_data,
            )
        except ClientNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ClientValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ClientSerializer(client).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_client(user=request.user, client_id=kwargs['pk'])
        except ClientNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'message': 'Client deleted successfully'})

    @extend_schema(request=None, responses={200: NextClientNumberSerializer})
    @action(detail=False, methods=['get'], url_path='next-id')
    def next_id(self, request):
        """Reserve the next client number. Each call consumes a number."""
        return Response({'id': next_client_number(user=request.user)})

    @extend_schema(request=ClientBatchSerializer, responses={201: ClientSerializer(many=True)})
    @action(detail=False, methods=['post'])
    def batch(self, request):
        """Create many clients at once. Either all are created or none."""
        serializer = ClientBatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            clients = batch_create_clients(
                user=request.user,
                clients=serializer.validated_data['clients'],
            )
        except ClientValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            ClientSerializer(clients, many=True).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: ClientBalanceSerializer})
    @action(detail=True, methods=['get'])
    def balance(self, request, pk=None):
        """Unallocated payments a client can spend on invoices."""
        try:
            balance = get_client_balance(user=request.user, client_id=pk)
        except ClientNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ClientBalanceSerializer(balance).data)
