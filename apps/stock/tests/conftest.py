import pytest
from decimal import Decimal
from apps.stock.models import StockItem
from apps.suppliers.models import Supplier


@pytest.fixture
def supplier(user):
    return Supplier.objects.create(user=user, name='Bright Lighting')


@pytest.fixture
def stock_item(user):
    return StockItem.objects.create(
        user=user,
        name='LED panel',
        category='Lighting',
        unit='pcs',
        selling_price=Decimal('29.00'),
        quantity=Decimal('4'),
        min_quantity=Decimal('5'),
    )


@pytest.fixture
def other_stock_item(other_user):
    return StockItem.objects.create(user=other_user, name='Not yours')
