from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .serializers import UserSettingsSerializer, SettingsQuerySerializer
from .services import get_user_settings, update_user_settings


@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('exclude_logo', OpenApiTypes.BOOL, description='Leave the logo out of the response'),
    ],
    responses={200: UserSettingsSerializer},
    description="Get the current user's company settings (defaults when never saved).",
    tags=['settings'],
)
@extend_schema(
    methods=['PUT', 'PATCH'],
    request=UserSettingsSerializer,
    responses={200: UserSettingsSerializer},
    description="Create or update the current user's company settings.",
    tags=['settings'],
)
@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def user_settings(request):
    """Read or upsert the current user's settings."""
    if request.method == 'GET':
        query = SettingsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = get_user_settings(
            user=request.user,
            exclude_logo=query.validated_data['exclude_logo'],
        )
        return Response(UserSettingsSerializer(data).data)

    serializer = UserSettingsSerializer(data=request.data, partial=True)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    update_user_settings(user=request.user, data=serializer.validated_data)
    return Response(UserSettingsSerializer(get_user_settings(user=request.user)).data)
