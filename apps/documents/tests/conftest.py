import pytest
from decimal import Decimal
from apps.clients.services import create_client
from apps.documents.models import DocumentStatus, DocumentType
from apps.documents.services import create_document
from apps.stock.models import StockItem


@pytest.fixture
def client_obj(user):
    return create_client(user=user, name='Acme Corp')


@pytest.fixture
def other_client_obj(other_user):
    return create_client(user=other_user, name='Foreign Ltd')


@pytest.fixture
def stock_item(user):
    return StockItem.objects.create(
        user=user, name='LED panel', unit='pcs', selling_price=Decimal('29.00')
    )


@pytest.fixture
def proforma(user, client_obj):
    """A sent proforma: 2 x 50.00 + 20.00 labor."""
    return create_document(
        user=user,
        type=DocumentType.PROFORMA,
        client_id=client_obj.id,
        items=[{'name': 'Socket', 'quantity': Decimal('2'), 'unit_price': Decimal('50.00')}],
        labor_price=Decimal('20.00'),
        status=DocumentStatus.SENT,
    )


@pytest.fixture
def invoice(user, client_obj):
    """An unpaid invoice with a total of 100.00."""
    return create_document(
        user=user,
        type=DocumentType.INVOICE,
        client_id=client_obj.id,
        items=[{'name': 'Service', 'quantity': Decimal('1'), 'unit_price': Decimal('100.00')}],
        status=DocumentStatus.SENT,
    )


@pytest.fixture
def other_invoice(other_user, other_client_obj):
    return create_document(
        user=other_user,
        type=DocumentType.INVOICE,
        client_id=other_client_obj.id,
        labor_price=Decimal('10.00'),
    )
