from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsDashboardAdmin
from apps.accounts.services import (
    set_user_password,
    delete_user_account,
    UserNotFoundError,
    WeakPasswordError,
    ProtectedAccountError,
)
from .analytics import DashboardQueries
from .serializers import (
    # Input serializers
    UserFilterQuerySerializer,
    DocumentFilterQuerySerializer,
    DeleteUserQuerySerializer,
    IdsSerializer,
    SetPasswordSerializer,
    # Response serializers
    UserStatsSerializer,
    SystemStatsSerializer,
    UserDetailSerializer,
    UnusedStockSerializer,
    UnusedClientSerializer,
    AdminDocumentSerializer,
    CleanupResultSerializer,
    DeletedUserSerializer,
    MessageSerializer,
    ErrorSerializer,
)
from .services import delete_unused_stock, delete_unused_clients, delete_documents
from .exceptions import NothingToDeleteError

User = get_user_model()

ADMIN_PERMISSIONS = [IsAuthenticated, IsDashboardAdmin]

user_filter = OpenApiParameter('user', OpenApiTypes.UUID, description='Only rows owned by this user')


@extend_schema(
    responses={200: UserStatsSerializer(many=True), 403: ErrorSerializer},
    description="Every user with record counts, revenue and last activity.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes(ADMIN_PERMISSIONS)
def users_list(request):
    return Response(UserStatsSerializer(DashboardQueries.users_with_stats(), many=True).data)


@extend_schema(
    responses={200: SystemStatsSerializer, 403: ErrorSerializer},
    description="System-wide totals and activity of the last 7 days.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes(ADMIN_PERMISSIONS)
def system_stats(request):
    return Response(SystemStatsSerializer(DashboardQueries.system_stats()).data)


@extend_schema(
    methods=['GET'],
    responses={200: UserDetailSerializer, 404: ErrorSerializer},
    description="User with their ten most recent clients, documents, payments and stock items.",
    tags=['admin'],
)
@extend_schema(
    methods=['DELETE'],
    parameters=[OpenApiParameter('confirm', OpenApiTypes.BOOL, required=True)],
    responses={200: DeletedUserSerializer, 400: ErrorSerializer, 403: ErrorSerializer, 404: ErrorSerializer},
    description="Delete a user and all of their data. Requires ?confirm=true.",
    tags=['admin'],
)
@api_view(['GET', 'DELETE'])
@permission_classes(ADMIN_PERMISSIONS)
def user_detail(request, user_id):
    if request.method == 'GET':
        user = get_object_or_404(User, id=user_id)
        return Response(UserDetailSerializer(DashboardQueries.user_detail(user)).data)

    query = DeleteUserQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    if not query.validated_data['confirm']:
        return Response(
            {'error': 'Confirmation required. Add ?confirm=true to the URL'},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        email = delete_user_account(user_id=user_id)
    except UserNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except ProtectedAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response({
        'message': 'User and all associated data deleted successfully',
        'deleted_user': email,
    })


@extend_schema(
    request=SetPasswordSerializer,
    responses={200: MessageSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    description="Set a new password for any user.",
    tags=['admin'],
)
@api_view(['PUT'])
@permission_classes(ADMIN_PERMISSIONS)
def user_password(request, user_id):
    serializer = SetPasswordSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        set_user_password(user_id=user_id, **serializer.validated_data)
    except WeakPasswordError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except UserNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response({'message': 'Password updated successfully'})


def _cleanup(request, delete, noun, message):
    """Run a bulk delete on the `ids` in the body and report the counts."""
    serializer = IdsSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(
            {'error': f'Array of {noun} IDs is required'},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        result = delete(ids=serializer.validated_data['ids'])
    except NothingToDeleteError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'message': message.format(**result), **result})


@extend_schema(
    methods=['GET'],
    parameters=[user_filter],
    responses={200: UnusedStockSerializer(many=True)},
    description="Stock items not used on any document line.",
    tags=['admin'],
)
@extend_schema(
    methods=['DELETE'],
    request=IdsSerializer,
    responses={200: CleanupResultSerializer, 400: ErrorSerializer},
    description="Delete the selected stock items that are still unused.",
    tags=['admin'],
)
@api_view(['GET', 'DELETE'])
@permission_classes(ADMIN_PERMISSIONS)
def unused_stock(request):
    if request.method == 'GET':
        query = UserFilterQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        rows = DashboardQueries.unused_stock(user_id=query.validated_data.get('user'))
        return Response(UnusedStockSerializer(rows, many=True).data)

    return _cleanup(
        request, delete_unused_stock, 'stock',
        'Successfully deleted {deleted} unused stock item(s)',
    )


@extend_schema(
    methods=['GET'],
    parameters=[user_filter],
    responses={200: UnusedClientSerializer(many=True)},
    description="Clients not referenced by any document.",
    tags=['admin'],
)
@extend_schema(
    methods=['DELETE'],
    request=IdsSerializer,
    responses={200: CleanupResultSerializer, 400: ErrorSerializer},
    description="Delete the selected clients that are still unused.",
    tags=['admin'],
)
@api_view(['GET', 'DELETE'])
@permission_classes(ADMIN_PERMISSIONS)
def unused_clients(request):
    if request.method == 'GET':
        query = UserFilterQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        rows = DashboardQueries.unused_clients(user_id=query.validated_data.get('user'))
        return Response(UnusedClientSerializer(rows, many=True).data)

    return _cleanup(
        request, delete_unused_clients, 'client',
        'Successfully deleted {deleted} unused client(s)',
    )


@extend_schema(
    methods=['GET'],
    parameters=[
        user_filter,
        OpenApiParameter('type', OpenApiTypes.STR, enum=['INVOICE', 'PROFORMA']),
    ],
    responses={200: AdminDocumentSerializer(many=True)},
    description="Documents of all users, optionally filtered by owner and type.",
    tags=['admin'],
)
@extend_schema(
    methods=['DELETE'],
    request=IdsSerializer,
    responses={200: CleanupResultSerializer, 400: ErrorSerializer},
    description="Delete the selected documents with their items and payments.",
    tags=['admin'],
)
@api_view(['GET', 'DELETE'])
@permission_classes(ADMIN_PERMISSIONS)
def admin_documents(request):
    if request.method == 'GET':
        query = DocumentFilterQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        rows = DashboardQueries.documents(
            user_id=query.validated_data.get('user'),
            document_type=query.validated_data.get('type'),
        )
        return Response(AdminDocumentSerializer(rows, many=True).data)

    return _cleanup(
        request, delete_documents, 'document',
        'Successfully deleted {deleted} document(s)',
    )
