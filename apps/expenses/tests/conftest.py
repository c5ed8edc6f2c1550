import pytest
from datetime import date
from decimal import Decimal
from apps.expenses.models import Expense


@pytest.fixture
def expenses(user):
    """Three expenses across two categories plus one uncategorised."""
    return [
        Expense.objects.create(user=user, description='Copper wire', category='Materials',
                               amount=Decimal('120.00'), expense_date=date(2025, 1, 10)),
        Expense.objects.create(user=user, description='Conduit', category='Materials',
                               amount=Decimal('30.50'), expense_date=date(2025, 2, 5)),
        Expense.objects.create(user=user, description='Diesel', category='Fuel',
                               amount=Decimal('60.00'), expense_date=date(2025, 2, 20)),
        Expense.objects.create(user=user, description='Parking',
                               amount=Decimal('4.00'), expense_date=date(2025, 3, 1)),
    ]


@pytest.fixture
def other_expense(other_user):
    return Expense.objects.create(user=other_user, description='Foreign', category='Materials',
                                  amount=Decimal('999.00'), expense_date=date(2025, 1, 1))
