import pytest
from datetime import date
from decimal import Decimal
from apps.clients.services import create_client
from apps.documents.models import DocumentStatus
from apps.documents.services import create_document
from apps.payments.models import Payment
from apps.payments.services import (
    record_invoice_payment,
    create_payment,
    update_payment,
    delete_payment,
    get_payment_receipt,
    InvoiceNotFoundError,
    PaymentNotAllowedError,
    PaymentValidationError,
    InsufficientBalanceError,
)
from apps.payments.services.payment_recording import lockable_invoices
from apps.preferences.services import update_user_settings


# =============================================================================
# Recording new money
# =============================================================================

@pytest.mark.django_db
class TestRecordPayment:

    def test_partial_payment(self, user, invoice):
        result = record_invoice_payment(user=user, document_id=invoice.id, amount=Decimal('40.00'))

        assert result['credit'] is None
        assert len(result['payments']) == 1
        payment = result['payments'][0]
        assert payment.amount == Decimal('40.00')
        assert payment.invoice_number == invoice.document_number
        assert payment.client_name == 'Acme Corp'
        invoice.refresh_from_db()
        assert invoice.total_paid == Decimal('40.00')
        assert invoice.status == DocumentStatus.SENT

    def test_full_payment_marks_paid(self, user, invoice):
        record_invoice_payment(user=user, document_id=invoice.id, amount=Decimal('100.00'))

        invoice.refresh_from_db()
        assert invoice.status == DocumentStatus.PAID

    def test_overpayment_becomes_credit(self, user, invoice, client_obj):
        result = record_invoice_payment(
            user=user, document_id=invoice.id, amount=Decimal('130.00'), notes='Cash'
        )

        assert result['payments'][0].amount == Decimal('100.00')
        credit = result['credit']
        assert credit.amount == Decimal('30.00')
        assert credit.document_id is None
        assert credit.client_id == client_obj.id
        assert credit.notes == 'Cash | Excess payment added to client account (invoice fully paid)'
        assert result['invoice'].status == DocumentStatus.PAID

    def test_fully_paid_invoice_rejected(self, user, invoice):
        record_invoice_payment(user=user, document_id=invoice.id, amount=Decimal('100.00'))

        with pytest.raises(PaymentNotAllowedError):
            record_invoice_payment(user=user, document_id=invoice.id, amount=Decimal('1.00'))

    def test_proforma_rejected(self, user, proforma):
        with pytest.raises(PaymentNotAllowedError):
            record_invoice_payment(user=user, document_id=proforma.id, amount=Decimal('1.00'))

    def test_cancelled_invoice_rejected(self, user, invoice):
        invoice.status = DocumentStatus.CANCELLED
        invoice.save()

        with pytest.raises(PaymentNotAllowedError):
            record_invoice_payment(user=user, document_id=invoice.id, amount=Decimal('1.00'))

    def test_other_users_invoice(self, user, other_invoice):
        with pytest.raises(InvoiceNotFoundError):
            record_invoice_payment(user=user, document_id=other_invoice.id, amount=Decimal('1.00'))

    def test_amount_required_without_balance(self, user, invoice):
        with pytest.raises(PaymentValidationError):
            record_invoice_payment(user=user, document_id=invoice.id)


# =============================================================================
# Paying from client balance
# =============================================================================

@pytest.mark.django_db
class TestPayFromBalance:

    def test_fifo_with_split(self, user, invoice, credits):
        """30.00 is used whole, 20.00 of the 40.00 credit is split off."""
        result = record_invoice_payment(
            user=user, document_id=invoice.id, amount=Decimal('50.00'), use_client_balance=True
        )

        first, second = credits
        first.refresh_from_db()
        second.refresh_from_db()
        assert [p.id for p in result['payments']] == [first.id, second.id]

        assert first.document_id == invoice.id
        assert first.amount == Decimal('30.00')
        assert first.notes == f'First | Allocated to invoice {invoice.document_number}'

        assert second.document_id == invoice.id
        assert second.amount == Decimal('20.00')
        assert second.notes == f'Second | Partially allocated to invoice {invoice.document_number}'

        leftover = Payment.objects.unallocated().get(user=user)
        assert leftover.amount == Decimal('20.00')
        assert leftover.notes == 'Second | Split from original payment'
        assert leftover.payment_date == date(2025, 2, 1)

        invoice.refresh_from_db()
        assert invoice.total_paid == Decimal('50.00')
        assert result['credit'] is None

    def test_amount_defaults_to_outstanding(self, user, invoice, make_credit):
        make_credit('150.00', date(2025, 1, 1))

        record_invoice_payment(user=user, document_id=invoice.id, use_client_balance=True)

        invoice.refresh_from_db()
        assert invoice.status == DocumentStatus.PAID
        assert Payment.objects.unallocated().get(user=user).amount == Decimal('50.00')

    def test_amount_capped_at_outstanding(self, user, invoice, make_credit):
        make_credit('500.00', date(2025, 1, 1))

        record_invoice_payment(
            user=user, document_id=invoice.id, amount=Decimal('300.00'), use_client_balance=True
        )

        invoice.refresh_from_db()
        assert invoice.total_paid == Decimal('100.00')
        assert Payment.objects.unallocated().get(user=user).amount == Decimal('400.00')

    def test_insufficient_balance(self, user, invoice, credits):
        with pytest.raises(InsufficientBalanceError) as excinfo:
            record_invoice_payment(
                user=user, document_id=invoice.id, amount=Decimal('80.00'), use_client_balance=True
            )

        assert str(excinfo.value) == 'Insufficient client balance. Available: 70.00, Required: 80.00'
        assert Payment.objects.unallocated().filter(user=user).count() == 2

    def test_other_clients_credit_not_used(self, user, invoice, credits):
        stranger = create_client(user=user, name='Stranger')
        Payment.objects.create(user=user, client=stranger, amount=Decimal('500.00'),
                               payment_date=date(2024, 1, 1))

        with pytest.raises(InsufficientBalanceError):
            record_invoice_payment(
                user=user, document_id=invoice.id, amount=Decimal('100.00'), use_client_balance=True
            )


# =============================================================================
# CRUD
# =============================================================================

@pytest.mark.django_db
class TestPaymentCrud:

    def test_create_linked_payment_updates_document(self, user, invoice):
        payment = create_payment(user=user, amount=Decimal('25.00'), document_id=invoice.id)

        invoice.refresh_from_db()
        assert invoice.total_paid == Decimal('25.00')
        assert payment.client_name == 'Acme Corp'
        assert payment.invoice_number == invoice.document_number

    def test_create_unallocated(self, user, client_obj):
        payment = create_payment(user=user, amount=Decimal('25.00'), client_id=client_obj.id)

        assert payment.is_unallocated
        assert payment.client_name == 'Acme Corp'

    def test_create_for_other_users_document(self, user, other_invoice):
        with pytest.raises(PaymentValidationError):
            create_payment(user=user, amount=Decimal('5.00'), document_id=other_invoice.id)

    def test_moving_payment_refreshes_both_documents(self, user, invoice, client_obj):
        second = create_document(user=user, type='INVOICE', client_id=client_obj.id,
                                 labor_price=Decimal('10.00'))
        payment = create_payment(user=user, amount=Decimal('10.00'), document_id=invoice.id)

        update_payment(user=user, payment_id=payment.id, data={'document_id': second.id})

        invoice.refresh_from_db()
        second.refresh_from_db()
        assert invoice.total_paid == Decimal('0.00')
        assert second.total_paid == Decimal('10.00')
        assert second.status == DocumentStatus.PAID

    def test_delete_reopens_invoice(self, user, invoice):
        payment = create_payment(user=user, amount=Decimal('100.00'), document_id=invoice.id)
        invoice.refresh_from_db()
        assert invoice.status == DocumentStatus.PAID

        delete_payment(user=user, payment_id=payment.id)

        invoice.refresh_from_db()
        assert invoice.status == DocumentStatus.SENT
        assert invoice.total_paid == Decimal('0.00')


@pytest.mark.django_db
def test_receipt(user, invoice):
    update_user_settings(user=user, data={'company_name': 'Alice Electric'})
    payment = create_payment(user=user, amount=Decimal('40.00'), document_id=invoice.id)

    receipt = get_payment_receipt(user=user, payment_id=payment.id)

    assert receipt['payment'] == payment
    assert receipt['document'] == invoice
    assert receipt['company']['company_name'] == 'Alice Electric'
    assert receipt['remaining_balance'] == Decimal('60.00')


@pytest.mark.django_db
def test_invoice_lock_skips_joined_client(user, invoice):
    """Only the document row is locked when the nullable client is joined."""
    queryset = lockable_invoices(user=user)

    assert queryset.query.select_for_update
    assert queryset.query.select_for_update_of == ('self',)
    assert queryset.get(id=invoice.id).client.name == 'Acme Corp'
