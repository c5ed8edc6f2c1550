from decimal import Decimal
from rest_framework import serializers
from apps.preferences.serializers import UserSettingsSerializer
from .models import Payment, PaymentMethod


class PaymentSerializer(serializers.ModelSerializer):
    """Payment output."""

    is_unallocated = serializers.BooleanField(read_only=True)
    document_type = serializers.CharField(source='document.type', read_only=True, default=None)

    class Meta:
        model = Payment
        fields = [
            'id',
            'document',
            'document_type',
            'client',
            'client_name',
            'invoice_number',
            'amount',
            'payment_date',
            'payment_method',
            'reference',
            'notes',
            'is_unallocated',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PaymentInputSerializer(serializers.Serializer):
    """Input for creating and updating payments."""

    document_id = serializers.UUIDField(required=False, allow_null=True)
    client_id = serializers.UUIDField(required=False, allow_null=True)
    client_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    invoice_number = serializers.CharField(max_length=50, required=False, allow_blank=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    payment_date = serializers.DateField(required=False)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False)
    reference = serializers.CharField(max_length=100, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class RecordPaymentSerializer(serializers.Serializer):
    """Input for POST /api/payments/record/"""

    document_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'), required=False)
    payment_date = serializers.DateField(required=False)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False)
    reference = serializers.CharField(max_length=100, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    use_client_balance = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        if attrs.get('amount') is None and not attrs.get('use_client_balance'):
            raise serializers.ValidationError({'amount': 'This field is required.'})
        return attrs


class PaymentQuerySerializer(serializers.Serializer):
    """Validate payment list query parameters."""

    client = serializers.UUIDField(required=False)
    document = serializers.UUIDField(required=False)
    unallocated = serializers.BooleanField(required=False, allow_null=True, default=None)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    search = serializers.CharField(required=False, allow_blank=True)


class InvoicePaymentStateSerializer(serializers.Serializer):
    """Invoice figures after recording a payment."""

    id = serializers.UUIDField()
    document_number = serializers.CharField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_paid = serializers.DecimalField(max_digits=12, decimal_places=2)
    outstanding = serializers.DecimalField(max_digits=12, decimal_places=2)
    status = serializers.CharField()


class RecordPaymentResponseSerializer(serializers.Serializer):
    invoice = InvoicePaymentStateSerializer()
    payments = PaymentSerializer(many=True)
    credit = PaymentSerializer(allow_null=True)


class ReceiptDocumentSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    type = serializers.CharField()
    document_number = serializers.CharField()
    date = serializers.DateField()
    client_name = serializers.CharField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_paid = serializers.DecimalField(max_digits=12, decimal_places=2)


class ReceiptSerializer(serializers.Serializer):
    payment = PaymentSerializer()
    document = ReceiptDocumentSerializer(allow_null=True)
    company = UserSettingsSerializer()
    remaining_balance = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
