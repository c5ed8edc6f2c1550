"""
Document amount calculations.

All money is Decimal and rounded half-up to cents. The subtotal is the sum
of line totals plus labor price plus billed mandays; tax is applied to the
whole subtotal when VAT is applied.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Iterable, Dict, Any

from django.conf import settings

from apps.preferences.models import UserSettings

CENTS = Decimal('0.01')
ZERO = Decimal('0.00')


def quantize_money(value) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def line_total(quantity, unit_price) -> Decimal:
    return quantize_money(Decimal(quantity) * Decimal(unit_price))


def mandays_cost(mandays: Optional[Dict[str, Any]]) -> Decimal:
    """Billed cost of a {days, people, cost_per_day} block (missing values count as 0)."""
    if not mandays:
        return ZERO
    days = Decimal(str(mandays.get('days') or 0))
    people = Decimal(str(mandays.get('people') or 0))
    cost_per_day = Decimal(str(mandays.get('cost_per_day') or 0))
    return quantize_money(days * people * cost_per_day)


def resolve_tax_rate(*, user, vat_applied: bool, requested: Optional[Decimal] = None) -> Decimal:
    """
    Pick the tax rate for a document.

    Order: explicit rate from the request, the user's configured tax rate,
    then DEFAULT_VAT_RATE. Documents without VAT always get 0.
    """
    if not vat_applied:
        return Decimal('0')
    if requested is not None:
        return Decimal(requested)

    configured = (
        UserSettings.objects
        .filter(user=user)
        .values_list('tax_rate', flat=True)
        .first()
    )
    if configured:
        return configured
    return settings.DEFAULT_VAT_RATE


def calculate_totals(
    *,
    line_totals: Iterable[Decimal],
    labor_price=ZERO,
    mandays: Optional[Dict[str, Any]] = None,
    vat_applied: bool = False,
    tax_rate=Decimal('0')
) -> Dict[str, Decimal]:
    """Return subtotal, tax_amount and total for the given components."""
    subtotal = quantize_money(
        sum(line_totals, ZERO) + Decimal(labor_price or 0) + mandays_cost(mandays)
    )
    tax_amount = quantize_money(subtotal * Decimal(tax_rate)) if vat_applied else ZERO
    return {
        'subtotal': subtotal,
        'tax_amount': tax_amount,
        'total': subtotal + tax_amount,
    }
