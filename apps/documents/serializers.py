"""
Serializers for documents app.

Input serializers never accept amounts: subtotal, tax and totals are
computed by the services. Output serializers expose the derived payment
state (`outstanding`, `payment_status`).
"""

from rest_framework import serializers
from apps.clients.serializers import ClientSerializer
from apps.payments.models import Payment
from .models import Document, DocumentItem, DocumentType, DocumentStatus
from .services import get_payment_status


# =============================================================================
# Output Serializers
# =============================================================================

class DocumentItemSerializer(serializers.ModelSerializer):

    class Meta:
        model = DocumentItem
        fields = [
            'id',
            'stock_item',
            'name',
            'description',
            'unit',
            'quantity',
            'unit_price',
            'total',
            'position',
        ]
        read_only_fields = fields


class DocumentPaymentSerializer(serializers.ModelSerializer):
    """Payment as listed on a document."""

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


class DocumentSerializer(serializers.ModelSerializer):
    """Document with items and payment state."""

    items = DocumentItemSerializer(many=True, read_only=True)
    client = ClientSerializer(read_only=True)
    outstanding = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    payment_status = serializers.SerializerMethodField()
    converted_to = serializers.SerializerMethodField()

    class Meta:
        model = Document
        fields = [
            'id',
            'type',
            'document_number',
            'client',
            'client_name',
            'date',
            'due_date',
            'subtotal',
            'tax_rate',
            'tax_amount',
            'total',
            'total_paid',
            'outstanding',
            'payment_status',
            'labor_price',
            'mandays',
            'real_mandays',
            'vat_applied',
            'notes',
            'status',
            'converted_from',
            'converted_to',
            'converted_at',
            'items',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_payment_status(self, obj) -> str:
        return get_payment_status(obj)

    def get_converted_to(self, obj):
        invoice = obj.converted_to
        return str(invoice.id) if invoice else None


class DocumentDetailSerializer(DocumentSerializer):
    """Single document including its payments."""

    payments = DocumentPaymentSerializer(many=True, read_only=True)

    class Meta(DocumentSerializer.Meta):
        fields = DocumentSerializer.Meta.fields + ['payments']
        read_only_fields = fields


# =============================================================================
# Input Serializers
# =============================================================================

class MandaysSerializer(serializers.Serializer):
    days = serializers.FloatField(min_value=0)
    people = serializers.IntegerField(min_value=0)
    cost_per_day = serializers.FloatField(min_value=0, required=False, default=0)


class DocumentItemInputSerializer(serializers.Serializer):
    stock_item_id = serializers.UUIDField(required=False, allow_null=True)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    unit = serializers.CharField(max_length=30, required=False, allow_blank=True)
    quantity = serializers.DecimalField(max_digits=12, decimal_places=3, min_value=0)
    unit_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True
    )


class DocumentInputSerializer(serializers.Serializer):
    """Input for creating a document."""

    EDITABLE_STATUSES = [DocumentStatus.DRAFT, DocumentStatus.SENT]

    type = serializers.ChoiceField(choices=DocumentType.choices)
    document_number = serializers.CharField(max_length=50, required=False, allow_blank=True)
    client_id = serializers.UUIDField(required=False, allow_null=True)
    client_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    date = serializers.DateField(required=False)
    due_date = serializers.DateField(required=False, allow_null=True)
    labor_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    mandays = MandaysSerializer(required=False, allow_null=True)
    real_mandays = MandaysSerializer(required=False, allow_null=True)
    vat_applied = serializers.BooleanField(required=False)
    tax_rate = serializers.DecimalField(
        max_digits=6, decimal_places=4, min_value=0, max_value=1, required=False, allow_null=True
    )
    notes = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=EDITABLE_STATUSES, required=False)
    items = DocumentItemInputSerializer(many=True, required=False)

    def validate(self, attrs):
        for key in ('mandays', 'real_mandays'):
            if attrs.get(key) is not None:
                attrs[key] = dict(attrs[key])
        if attrs.get('items') is not None:
            attrs['items'] = [dict(item) for item in attrs['items']]
        due_date = attrs.get('due_date')
        if due_date and attrs.get('date') and due_date < attrs['date']:
            raise serializers.ValidationError({'due_date': 'Due date cannot be before the document date'})
        return attrs


class DocumentUpdateSerializer(DocumentInputSerializer):
    """Input for updating a document; its type is fixed."""

    type = None


class DocumentBatchSerializer(serializers.Serializer):
    """Input for POST /api/documents/batch/"""

    documents = DocumentInputSerializer(many=True, allow_empty=False)


class ConvertDocumentSerializer(serializers.Serializer):
    document_number = serializers.CharField(max_length=50, required=False, allow_blank=True)


class DocumentQuerySerializer(serializers.Serializer):
    """Validate document list query parameters."""

    type = serializers.ChoiceField(choices=DocumentType.choices, required=False)
    status = serializers.ChoiceField(choices=DocumentStatus.choices, required=False)
    client = serializers.UUIDField(required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    search = serializers.CharField(required=False, allow_blank=True)

    def to_internal_value(self, data):
        data = data.copy()
        for key in ('type', 'status'):
            if data.get(key):
                data[key] = data[key].upper()
        return super().to_internal_value(data)


class NextNumberSerializer(serializers.Serializer):
    document_number = serializers.CharField()


class TypeFiguresSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    total = serializers.DecimalField(max_digits=14, decimal_places=2)


class DocumentSummarySerializer(serializers.Serializer):
    proformas = TypeFiguresSerializer()
    invoices = TypeFiguresSerializer()
    total_paid = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_outstanding = serializers.DecimalField(max_digits=14, decimal_places=2)
    overdue_count = serializers.IntegerField()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()


