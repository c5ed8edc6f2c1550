import pytest
from apps.suppliers.models import Supplier


@pytest.fixture
def supplier(user):
    return Supplier.objects.create(user=user, name='Cable World', email='sales@cables.example')


@pytest.fixture
def other_supplier(other_user):
    return Supplier.objects.create(user=other_user, name='Their Supplier')
