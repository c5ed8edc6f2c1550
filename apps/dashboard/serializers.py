"""
Serializers for the admin dashboard.

Input serializers validate query parameters and bodies; response
serializers document the plain dicts returned by DashboardQueries.
"""

from rest_framework import serializers

from apps.documents.models import DocumentType


# =============================================================================
# Input Serializers
# =============================================================================

class UserFilterQuerySerializer(serializers.Serializer):
    user = serializers.UUIDField(required=False)


class DocumentFilterQuerySerializer(UserFilterQuerySerializer):
    type = serializers.CharField(required=False, allow_blank=True)

    def validate_type(self, value):
        value = (value or '').upper()
        if value and value not in DocumentType.values:
            raise serializers.ValidationError(f"Must be one of {', '.join(DocumentType.values)}.")
        return value


class DeleteUserQuerySerializer(serializers.Serializer):
    confirm = serializers.BooleanField(required=False, default=False)


class IdsSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)


class SetPasswordSerializer(serializers.Serializer):
    new_password = serializers.CharField(write_only=True, style={'input_type': 'password'})


# =============================================================================
# Response Serializers
# =============================================================================

class UserCountsSerializer(serializers.Serializer):
    clients = serializers.IntegerField()
    documents = serializers.IntegerField()
    payments = serializers.IntegerField()
    stock = serializers.IntegerField()
    expenses = serializers.IntegerField()


class UserStatsSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    email = serializers.EmailField()
    name = serializers.CharField()
    is_admin = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    counts = UserCountsSerializer()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_payments = serializers.DecimalField(max_digits=14, decimal_places=2)
    last_activity = serializers.DateTimeField(allow_null=True)
    last_document_type = serializers.CharField(allow_null=True)
    last_document_number = serializers.CharField(allow_null=True)


class OverviewSerializer(serializers.Serializer):
    total_users = serializers.IntegerField()
    total_clients = serializers.IntegerField()
    total_documents = serializers.IntegerField()
    total_invoices = serializers.IntegerField()
    total_proformas = serializers.IntegerField()
    total_payments = serializers.IntegerField()
    total_stock = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_payments_amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class RecentActivitySerializer(serializers.Serializer):
    documents_last_7_days = serializers.IntegerField()
    payments_last_7_days = serializers.IntegerField()
    new_users_last_7_days = serializers.IntegerField()


class SystemStatsSerializer(serializers.Serializer):
    overview = OverviewSerializer()
    recent_activity = RecentActivitySerializer()


class RecentClientSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    created_at = serializers.DateTimeField()


class RecentDocumentSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    type = serializers.CharField()
    document_number = serializers.CharField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    status = serializers.CharField()
    created_at = serializers.DateTimeField()


class RecentPaymentSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    payment_date = serializers.DateField()
    created_at = serializers.DateTimeField()


class RecentStockSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    quantity = serializers.DecimalField(max_digits=12, decimal_places=3)
    created_at = serializers.DateTimeField()


class UserDetailSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    email = serializers.EmailField()
    name = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    clients = RecentClientSerializer(many=True)
    documents = RecentDocumentSerializer(many=True)
    payments = RecentPaymentSerializer(many=True)
    stock = RecentStockSerializer(many=True)
    counts = UserCountsSerializer()


class OwnedRowSerializer(serializers.Serializer):
    """Fields shared by every cross-tenant listing."""

    id = serializers.UUIDField()
    user_id = serializers.UUIDField()
    user_email = serializers.EmailField(source='user__email')
    created_at = serializers.DateTimeField()


class UnusedStockSerializer(OwnedRowSerializer):
    name = serializers.CharField()
    description = serializers.CharField()
    category = serializers.CharField()
    brand = serializers.CharField()
    model = serializers.CharField()
    part_number = serializers.CharField()
    sku = serializers.CharField()
    quantity = serializers.DecimalField(max_digits=12, decimal_places=3)
    buying_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    selling_price = serializers.DecimalField(max_digits=12, decimal_places=2)


class UnusedClientSerializer(OwnedRowSerializer):
    client_number = serializers.IntegerField(allow_null=True)
    name = serializers.CharField()
    email = serializers.CharField()
    phone = serializers.CharField()
    location = serializers.CharField()


class AdminDocumentSerializer(OwnedRowSerializer):
    type = serializers.CharField()
    document_number = serializers.CharField()
    date = serializers.DateField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    status = serializers.CharField()
    client_name = serializers.CharField()


class CleanupResultSerializer(serializers.Serializer):
    message = serializers.CharField()
    deleted = serializers.IntegerField()
    skipped = serializers.IntegerField(required=False)


class DeletedUserSerializer(serializers.Serializer):
    message = serializers.CharField()
    deleted_user = serializers.EmailField()


class MessageSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
