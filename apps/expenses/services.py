"""Expense CRUD and per-category summary."""

import logging
from datetime import date as date_type
from decimal import Decimal

from django.db import transaction
from django.db.models import Q, Sum, Count
from django.contrib.auth import get_user_model
from django.utils import timezone
from uuid import UUID
from typing import Optional, Dict, Any

from .exceptions import ExpenseNotFoundError, ExpenseValidationError
from .models import Expense

logger = logging.getLogger(__name__)

User = get_user_model()

EDITABLE_FIELDS = ['description', 'category', 'amount', 'expense_date', 'notes']


def search_expenses(
    *,
    user: User,
    search: Optional[str] = None,
    category: Optional[str] = None,
    date_from: Optional[date_type] = None,
    date_to: Optional[date_type] = None
):
    """Filter the user's expenses, newest first."""
    queryset = Expense.objects.filter(user=user)

    if search:
        queryset = queryset.filter(
            Q(description__icontains=search) |
            Q(category__icontains=search)
        )
    if category:
        queryset = queryset.filter(category__iexact=category)
    if date_from:
        queryset = queryset.filter(expense_date__gte=date_from)
    if date_to:
        queryset = queryset.filter(expense_date__lte=date_to)

    return queryset.order_by('-expense_date', '-created_at')


def get_expense(*, user: User, expense_id: UUID) -> Expense:
    try:
        return Expense.objects.get(id=expense_id, user=user)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError("Expense not found")


def _validate(expense: Expense) -> None:
    if not expense.description:
        raise ExpenseValidationError("Description is required")
    if expense.amount is None or expense.amount <= 0:
        raise ExpenseValidationError("Amount must be greater than zero")


@transaction.atomic
def create_expense(
    *,
    user: User,
    description: str,
    amount: Decimal,
    category: str = '',
    expense_date: Optional[date_type] = None,
    notes: str = ''
) -> Expense:
    """
    Raises:
        ExpenseValidationError: If description is blank or amount not positive
    """
    expense = Expense(
        user=user,
        description=(description or '').strip(),
        category=(category or '').strip(),
        amount=amount,
        expense_date=expense_date or timezone.localdate(),
        notes=notes or '',
    )
    _validate(expense)
    expense.save()
    return expense


@transaction.atomic
def update_expense(*, user: User, expense_id: UUID, data: Dict[str, Any]) -> Expense:
    try:
        expense = Expense.objects.select_for_update().get(id=expense_id, user=user)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError("Expense not found")

    for field in EDITABLE_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if field in ('description', 'category'):
            value = (value or '').strip()
        elif field == 'notes':
            value = value or ''
        elif field == 'expense_date' and value is None:
            continue
        setattr(expense, field, value)

    _validate(expense)
    expense.save()
    return expense


@transaction.atomic
def delete_expense(*, user: User, expense_id: UUID) -> None:
    try:
        expense = Expense.objects.select_for_update().get(id=expense_id, user=user)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError("Expense not found")

    expense.delete()
    logger.info("User %s deleted expense %s", user.pk, expense_id)


def get_expenses_summary(
    *,
    user: User,
    date_from: Optional[date_type] = None,
    date_to: Optional[date_type] = None
) -> dict:
    """
    Total spent in the range and the breakdown per category, largest first.
    Expenses without a category are grouped under an empty string.
    """
    queryset = search_expenses(user=user, date_from=date_from, date_to=date_to)

    rows = (
        queryset
        .order_by()
        .values('category')
        .annotate(total=Sum('amount'), count=Count('id'))
        .order_by('-total', 'category')
    )
    totals = queryset.aggregate(total=Sum('amount'), count=Count('id'))

    return {
        'total': totals['total'] or Decimal('0.00'),
        'count': totals['count'],
        'by_category': [
            {'category': row['category'], 'total': row['total'], 'count': row['count']}
            for row in rows
        ],
    }
