import pytest
from datetime import date
from decimal import Decimal
from apps.clients.services import create_client
from apps.documents.models import DocumentStatus
from apps.documents.services import create_document
from apps.payments.models import Payment


@pytest.fixture
def client_obj(user):
    return create_client(user=user, name='Acme Corp')


@pytest.fixture
def invoice(user, client_obj):
    """Sent invoice with a total of 100.00."""
    return create_document(
        user=user,
        type='INVOICE',
        client_id=client_obj.id,
        labor_price=Decimal('100.00'),
        status=DocumentStatus.SENT,
    )


@pytest.fixture
def proforma(user, client_obj):
    return create_document(
        user=user, type='PROFORMA', client_id=client_obj.id, labor_price=Decimal('50.00')
    )


@pytest.fixture
def other_invoice(other_user):
    foreign_client = create_client(user=other_user, name='Foreign')
    return create_document(
        user=other_user, type='INVOICE', client_id=foreign_client.id, labor_price=Decimal('10.00')
    )


@pytest.fixture
def make_credit(user, client_obj):
    """Factory for unallocated client payments."""
    def _make(amount, payment_date, notes=''):
        return Payment.objects.create(
            user=user,
            client=client_obj,
            client_name=client_obj.name,
            amount=Decimal(amount),
            payment_date=payment_date,
            notes=notes,
        )
    return _make


@pytest.fixture
def credits(make_credit):
    """Client credit of 70.00: 30.00 (oldest) then 40.00."""
    return [
        make_credit('30.00', date(2025, 1, 1), notes='First'),
        make_credit('40.00', date(2025, 2, 1), notes='Second'),
    ]
