"""Permission classes shared by the admin dashboard."""
from rest_framework.permissions import BasePermission


class IsDashboardAdmin(BasePermission):
    """
    Allows access to staff users and to emails listed in ADMIN_EMAILS.

    Usage:
        class AdminStatsView(APIView):
            permission_classes = [IsAuthenticated, IsDashboardAdmin]
    """

    message = 'Admin access required'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_dashboard_admin)
