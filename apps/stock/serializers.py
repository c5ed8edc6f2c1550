from rest_framework import serializers
from apps.suppliers.serializers import SupplierSummarySerializer
from .models import StockItem


class StockItemSerializer(serializers.ModelSerializer):
    """Stock item output, with the linked supplier."""

    supplier = SupplierSummarySerializer(read_only=True)
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = StockItem
        fields = [
            'id',
            'name',
            'description',
            'category',
            'unit',
            'buying_price',
            'selling_price',
            'quantity',
            'min_quantity',
            'is_low_stock',
            'brand',
            'model',
            'part_number',
            'sku',
            'specifications',
            'voltage',
            'power',
            'material',
            'size',
            'weight',
            'color',
            'supplier',
            'supplier_name',
            'supplier_code',
            'warranty',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


def _text(max_length=None):
    kwargs = {'required': False, 'allow_blank': True, 'allow_null': True}
    if max_length:
        kwargs['max_length'] = max_length
    return serializers.CharField(**kwargs)


def _money():
    return serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)


def _quantity():
    return serializers.DecimalField(max_digits=12, decimal_places=3, required=False)


class StockItemInputSerializer(serializers.Serializer):
    """
    Input for creating and updating stock items.

    Legacy payloads are accepted: `unit_price` is stored as selling_price
    and a textual `supplier` is stored as supplier_name.
    """

    name = serializers.CharField(max_length=255)
    description = _text()
    category = _text(100)
    unit = _text(30)
    buying_price = _money()
    selling_price = _money()
    unit_price = _money()
    quantity = _quantity()
    min_quantity = _quantity()
    brand = _text(100)
    model = _text(100)
    part_number = _text(100)
    sku = _text(100)
    specifications = _text()
    voltage = _text(50)
    power = _text(50)
    material = _text(100)
    size = _text(100)
    weight = _text(50)
    color = _text(50)
    supplier_id = serializers.UUIDField(required=False, allow_null=True)
    supplier = _text(255)
    supplier_name = _text(255)
    supplier_code = _text(100)
    warranty = _text(100)
    notes = _text()

    def validate(self, attrs):
        unit_price = attrs.pop('unit_price', None)
        if unit_price is not None and 'selling_price' not in attrs:
            attrs['selling_price'] = unit_price

        legacy_supplier = attrs.pop('supplier', None)
        if legacy_supplier is not None and 'supplier_name' not in attrs:
            attrs['supplier_name'] = legacy_supplier

        return attrs


class StockBatchSerializer(serializers.Serializer):
    """Input for POST /api/stock/batch/"""

    items = StockItemInputSerializer(many=True, allow_empty=False)


class StockQuerySerializer(serializers.Serializer):
    """Validate stock list query parameters."""

    search = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    supplier = serializers.UUIDField(required=False)
    low_stock = serializers.BooleanField(required=False, default=False)
