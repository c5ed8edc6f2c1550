import pytest
from datetime import date
from decimal import Decimal
from apps.clients.services import create_client
from apps.payments.models import Payment


@pytest.fixture
def client_obj(user):
    """A client owned by the test user."""
    return create_client(user=user, name='Acme Corp', email='billing@acme.example', location='Beirut')


@pytest.fixture
def other_client_obj(other_user):
    """A client owned by another user."""
    return create_client(user=other_user, name='Foreign Ltd')


@pytest.fixture
def credit_payments(user, client_obj):
    """Two unallocated payments forming the client's balance."""
    return [
        Payment.objects.create(
            user=user, client=client_obj, client_name=client_obj.name,
            amount=Decimal('30.00'), payment_date=date(2025, 1, 5),
        ),
        Payment.objects.create(
            user=user, client=client_obj, client_name=client_obj.name,
            amount=Decimal('20.00'), payment_date=date(2025, 2, 1),
        ),
    ]
