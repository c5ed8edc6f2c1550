import pytest
from datetime import date
from decimal import Decimal
from apps.clients.services import create_client
from apps.documents.models import DocumentStatus, DocumentType
from apps.documents.services import create_document
from apps.payments.models import Payment
from apps.stock.models import StockItem


@pytest.fixture
def used_stock(user):
    return StockItem.objects.create(user=user, name='Breaker', selling_price=Decimal('9.90'))


@pytest.fixture
def unused_stock(user):
    return StockItem.objects.create(user=user, name='Old lamp', selling_price=Decimal('5.00'))


@pytest.fixture
def other_unused_stock(other_user):
    return StockItem.objects.create(user=other_user, name='Spare fuse', selling_price=Decimal('1.00'))


@pytest.fixture
def used_client(user):
    return create_client(user=user, name='Acme Corp')


@pytest.fixture
def unused_client(user):
    return create_client(user=user, name='Never Billed')


@pytest.fixture
def invoice(user, used_client, used_stock):
    """Sent invoice of 100.00 using `used_stock` on one line."""
    return create_document(
        user=user,
        type=DocumentType.INVOICE,
        client_id=used_client.id,
        items=[{'stock_item_id': used_stock.id, 'quantity': Decimal('1'), 'unit_price': Decimal('100.00')}],
        status=DocumentStatus.SENT,
    )


@pytest.fixture
def payment(user, invoice):
    return Payment.objects.create(
        user=user, document=invoice, client=invoice.client,
        amount=Decimal('40.00'), payment_date=date(2025, 1, 1),
    )


@pytest.fixture
def other_proforma(other_user):
    foreign_client = create_client(user=other_user, name='Foreign Ltd')
    return create_document(
        user=other_user,
        type=DocumentType.PROFORMA,
        client_id=foreign_client.id,
        labor_price=Decimal('25.00'),
    )
