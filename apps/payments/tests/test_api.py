import pytest
from datetime import date
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.documents.models import DocumentStatus
from apps.payments.models import Payment


# =============================================================================
# List Tests
# =============================================================================

@pytest.mark.django_db
class TestPaymentList:
    """Tests for GET /api/payments/"""

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('payments:payment-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_only_own_payments(self, authenticated_client, credits, other_invoice, other_user):
        Payment.objects.create(user=other_user, document=other_invoice, amount=Decimal('5.00'),
                               payment_date=date(2025, 1, 1))

        response = authenticated_client.get(reverse('payments:payment-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['pagination']['total'] == 2
        # Newest first
        assert [p['notes'] for p in response.data['data']] == ['Second', 'First']

    def test_unallocated_filter(self, authenticated_client, user, invoice, credits):
        Payment.objects.create(user=user, document=invoice, amount=Decimal('5.00'),
                               payment_date=date(2025, 3, 1))
        url = reverse('payments:payment-list')

        unallocated = authenticated_client.get(url, {'unallocated': 'true'})
        allocated = authenticated_client.get(url, {'unallocated': 'false'})

        assert len(unallocated.data['data']) == 2
        assert all(p['is_unallocated'] for p in unallocated.data['data'])
        assert len(allocated.data['data']) == 1
        assert allocated.data['data'][0]['document_type'] == 'INVOICE'

    def test_date_range(self, authenticated_client, credits):
        response = authenticated_client.get(
            reverse('payments:payment-list'),
            {'date_from': '2025-01-15', 'date_to': '2025-12-31'}
        )

        assert [p['notes'] for p in response.data['data']] == ['Second']


# =============================================================================
# CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestPaymentCrud:

    def test_create_linked(self, authenticated_client, invoice):
        data = {'document_id': str(invoice.id), 'amount': '25.00', 'payment_method': 'bank_transfer'}
        response = authenticated_client.post(reverse('payments:payment-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['invoice_number'] == invoice.document_number
        assert response.data['client_name'] == 'Acme Corp'
        invoice.refresh_from_db()
        assert invoice.total_paid == Decimal('25.00')

    def test_create_zero_amount_rejected(self, authenticated_client, invoice):
        data = {'document_id': str(invoice.id), 'amount': '0'}
        response = authenticated_client.post(reverse('payments:payment-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_for_foreign_document(self, authenticated_client, other_invoice):
        data = {'document_id': str(other_invoice.id), 'amount': '5.00'}
        response = authenticated_client.post(reverse('payments:payment-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Document not found'

    def test_patch_amount_refreshes_invoice(self, authenticated_client, user, invoice):
        payment = Payment.objects.create(user=user, document=invoice, amount=Decimal('10.00'),
                                         payment_date=date(2025, 1, 1))
        url = reverse('payments:payment-detail', kwargs={'pk': payment.id})

        response = authenticated_client.patch(url, {'amount': '100.00'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        invoice.refresh_from_db()
        assert invoice.status == DocumentStatus.PAID

    def test_delete(self, authenticated_client, credits):
        url = reverse('payments:payment-detail', kwargs={'pk': credits[0].id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Payment deleted successfully'
        assert not Payment.objects.filter(id=credits[0].id).exists()

    def test_delete_other_users_payment(self, other_client, credits):
        url = reverse('payments:payment-detail', kwargs={'pk': credits[0].id})
        response = other_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Record Tests
# =============================================================================

@pytest.mark.django_db
class TestRecordPayment:
    """Tests for POST /api/payments/record/"""

    @pytest.fixture
    def url(self):
        return reverse('payments:payment-record')

    def test_new_money_with_excess(self, authenticated_client, url, invoice):
        data = {'document_id': str(invoice.id), 'amount': '120.00'}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['invoice']['status'] == 'PAID'
        assert response.data['invoice']['outstanding'] == '0.00'
        assert response.data['payments'][0]['amount'] == '100.00'
        assert response.data['credit']['amount'] == '20.00'
        assert response.data['credit']['is_unallocated'] is True

    def test_from_balance(self, authenticated_client, url, invoice, credits):
        data = {'document_id': str(invoice.id), 'amount': '50.00', 'use_client_balance': True}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert [p['amount'] for p in response.data['payments']] == ['30.00', '20.00']
        assert response.data['invoice']['total_paid'] == '50.00'
        assert response.data['credit'] is None

    def test_insufficient_balance(self, authenticated_client, url, invoice, credits):
        data = {'document_id': str(invoice.id), 'amount': '90.00', 'use_client_balance': True}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'Insufficient client balance' in response.data['error']

    def test_amount_required_for_new_money(self, authenticated_client, url, invoice):
        response = authenticated_client.post(url, {'document_id': str(invoice.id)}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'amount' in response.data

    def test_proforma_rejected(self, authenticated_client, url, proforma):
        data = {'document_id': str(proforma.id), 'amount': '10.00'}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_fully_paid_rejected(self, authenticated_client, url, user, invoice):
        Payment.objects.create(user=user, document=invoice, amount=Decimal('100.00'),
                               payment_date=date(2025, 1, 1))

        response = authenticated_client.post(
            url, {'document_id': str(invoice.id), 'amount': '1.00'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Invoice is already fully paid'

    def test_foreign_invoice(self, authenticated_client, url, other_invoice):
        data = {'document_id': str(other_invoice.id), 'amount': '1.00'}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_invalidates_cached_client_balance(self, authenticated_client, url, invoice,
                                               client_obj, credits):
        balance_url = reverse('clients:client-balance', kwargs={'pk': client_obj.id})
        before = authenticated_client.get(balance_url)

        authenticated_client.post(
            url,
            {'document_id': str(invoice.id), 'amount': '30.00', 'use_client_balance': True},
            format='json'
        )
        after = authenticated_client.get(balance_url)

        assert before.data['balance'] == '70.00'
        assert after.data['balance'] == '40.00'


# =============================================================================
# Receipt Tests
# =============================================================================

@pytest.mark.django_db
class TestReceipt:

    def test_receipt(self, authenticated_client, user, invoice):
        payment = Payment.objects.create(user=user, document=invoice, amount=Decimal('40.00'),
                                         payment_date=date(2025, 1, 1))
        invoice.total_paid = Decimal('40.00')
        invoice.save()

        response = authenticated_client.get(
            reverse('payments:payment-receipt', kwargs={'pk': payment.id})
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['payment']['amount'] == '40.00'
        assert response.data['document']['document_number'] == invoice.document_number
        assert response.data['remaining_balance'] == '60.00'
        assert 'company_name' in response.data['company']

    def test_receipt_for_credit(self, authenticated_client, credits):
        response = authenticated_client.get(
            reverse('payments:payment-receipt', kwargs={'pk': credits[0].id})
        )

        assert response.data['document'] is None
        assert response.data['remaining_balance'] is None

    def test_receipt_not_found(self, other_client, credits):
        response = other_client.get(
            reverse('payments:payment-receipt', kwargs={'pk': credits[0].id})
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
