from rest_framework import serializers
from .models import Supplier


class SupplierSerializer(serializers.ModelSerializer):

    class Meta:
        model = Supplier
        fields = [
            'id',
            'name',
            'contact_name',
            'email',
            'phone',
            'address',
            'website',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'contact_name': {'required': False, 'allow_blank': True},
            'email': {'required': False, 'allow_blank': True},
            'phone': {'required': False, 'allow_blank': True},
            'address': {'required': False, 'allow_blank': True},
            'website': {'required': False, 'allow_blank': True},
            'notes': {'required': False, 'allow_blank': True},
        }


class SupplierSummarySerializer(serializers.ModelSerializer):
    """Compact supplier shown inside stock items."""

    class Meta:
        model = Supplier
        fields = ['id', 'name', 'email', 'phone']
        read_only_fields = fields


class SupplierSearchQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
