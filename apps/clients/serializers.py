from rest_framework import serializers
from apps.payments.models import Payment
from .models import Client


class ClientSerializer(serializers.ModelSerializer):
    """Client output serializer."""

    class Meta:
        model = Client
        fields = [
            'id',
            'client_number',
            'name',
            'email',
            'phone',
            'location',
            'vat_number',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ClientInputSerializer(serializers.ModelSerializer):
    """Input for creating and updating clients."""

    name = serializers.CharField(max_length=255)
    client_number = serializers.IntegerField(min_value=1, required=False, allow_null=True)

    class Meta:
        model = Client
        fields = [
            'client_number',
            'name',
            'email',
            'phone',
            'location',
            'vat_number',
        ]
        extra_kwargs = {
            'email': {'required': False, 'allow_blank': True},
            'phone': {'required': False, 'allow_blank': True},
            'location': {'required': False, 'allow_blank': True},
            'vat_number': {'required': False, 'allow_blank': True},
        }


class ClientBatchSerializer(serializers.Serializer):
    """Input for POST /api/clients/batch/"""

    clients = ClientInputSerializer(many=True, allow_empty=False)


class ClientSearchQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)


class CreditPaymentSerializer(serializers.ModelSerializer):
    """Unallocated payment forming part of a client's balance."""

    class Meta:
        model = Payment
        fields = [
            'id',
            'amount',
            'payment_date',
            'payment_method',
            'reference',
            'notes',
        ]
        read_only_fields = fields


class ClientBalanceSerializer(serializers.Serializer):
    client = ClientSerializer()
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)
    payments = CreditPaymentSerializer(many=True)


class NextClientNumberSerializer(serializers.Serializer):
    id = serializers.IntegerField()
