import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.clients.models import Client
from apps.documents.models import Document, DocumentStatus
from apps.documents.services import create_document, convert_proforma_to_invoice
from apps.payments.models import Payment
from apps.stock.models import StockItem


# =============================================================================
# Permission Tests
# =============================================================================

@pytest.mark.django_db
class TestDashboardPermissions:

    @pytest.mark.parametrize('name', [
        'dashboard:users',
        'dashboard:stats',
        'dashboard:unused-stock',
        'dashboard:unused-clients',
        'dashboard:documents',
    ])
    def test_regular_user_forbidden(self, authenticated_client, name):
        response = authenticated_client.get(reverse(name))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['detail'] == 'Admin access required'

    def test_anonymous_rejected(self, api_client):
        response = api_client.get(reverse('dashboard:stats'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_staff_user_allowed(self, api_client, db):
        staff = User.objects.create_user(email='staff@example.com', password='StaffPass1', is_staff=True)
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {RefreshToken.for_user(staff).access_token}')

        response = api_client.get(reverse('dashboard:stats'))

        assert response.status_code == status.HTTP_200_OK


# =============================================================================
# Users and Stats
# =============================================================================

@pytest.mark.django_db
class TestUsersAndStats:

    def test_users_list(self, admin_client, user, other_user, payment):
        response = admin_client.get(reverse('dashboard:users'))

        assert response.status_code == status.HTTP_200_OK
        rows = {row['email']: row for row in response.data}
        assert set(rows) == {'admin@example.com', 'test@example.com', 'other@example.com'}
        assert rows['admin@example.com']['is_admin'] is True

        alice = rows['test@example.com']
        assert alice['is_admin'] is False
        assert alice['counts'] == {'clients': 1, 'documents': 1, 'payments': 1, 'stock': 1, 'expenses': 0}
        assert alice['total_revenue'] == '100.00'
        assert alice['total_payments'] == '40.00'
        assert alice['last_document_type'] == 'INVOICE'
        assert alice['last_document_number'].startswith('INV-')

        assert rows['other@example.com']['last_activity'] is None
        assert rows['other@example.com']['total_revenue'] == '0.00'

    def test_system_stats(self, admin_client, payment, other_proforma):
        response = admin_client.get(reverse('dashboard:stats'))

        overview = response.data['overview']
        assert overview['total_users'] == 3
        assert overview['total_clients'] == 2
        assert overview['total_documents'] == 2
        assert overview['total_invoices'] == 1
        assert overview['total_proformas'] == 1
        assert overview['total_payments'] == 1
        assert overview['total_revenue'] == '100.00'
        assert overview['total_payments_amount'] == '40.00'
        assert response.data['recent_activity'] == {
            'documents_last_7_days': 2,
            'payments_last_7_days': 1,
            'new_users_last_7_days': 3,
        }

    def test_system_stats_without_data(self, admin_client):
        response = admin_client.get(reverse('dashboard:stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['overview']['total_documents'] == 0
        assert response.data['overview']['total_revenue'] == '0.00'
        assert response.data['overview']['total_payments_amount'] == '0.00'

    def test_cancelled_invoices_not_revenue(self, admin_client, invoice):
        invoice.status = DocumentStatus.CANCELLED
        invoice.save()

        response = admin_client.get(reverse('dashboard:stats'))

        assert response.data['overview']['total_revenue'] == '0.00'


# =============================================================================
# User Detail, Delete and Password
# =============================================================================

@pytest.mark.django_db
class TestUserDetail:

    def test_detail(self, admin_client, user, payment):
        response = admin_client.get(reverse('dashboard:user-detail', kwargs={'user_id': user.id}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == 'test@example.com'
        assert len(response.data['documents']) == 1
        assert response.data['payments'][0]['amount'] == '40.00'
        assert response.data['counts']['documents'] == 1

    def test_detail_not_found(self, admin_client, user):
        url = reverse('dashboard:user-detail', kwargs={'user_id': '00000000-0000-0000-0000-000000000000'})
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_requires_confirmation(self, admin_client, user):
        response = admin_client.delete(reverse('dashboard:user-detail', kwargs={'user_id': user.id}))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Confirmation required. Add ?confirm=true to the URL'
        assert User.objects.filter(id=user.id).exists()

    def test_delete_cascades(self, admin_client, user, payment, unused_client):
        url = reverse('dashboard:user-detail', kwargs={'user_id': user.id}) + '?confirm=true'
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'message': 'User and all associated data deleted successfully',
            'deleted_user': 'test@example.com',
        }
        assert not User.objects.filter(id=user.id).exists()
        assert not Client.objects.exists()
        assert not Document.objects.exists()
        assert not Payment.objects.exists()

    def test_admin_account_protected(self, admin_client, admin_user):
        url = reverse('dashboard:user-detail', kwargs={'user_id': admin_user.id}) + '?confirm=true'
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error'] == 'Cannot delete admin account'

    def test_set_password(self, admin_client, user):
        url = reverse('dashboard:user-password', kwargs={'user_id': user.id})
        response = admin_client.put(url, {'new_password': 'BrandNew1'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.check_password('BrandNew1')

    def test_set_weak_password(self, admin_client, user):
        url = reverse('dashboard:user-password', kwargs={'user_id': user.id})
        response = admin_client.put(url, {'new_password': '123'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Password must be at least 6 characters'


# =============================================================================
# Cleanup
# =============================================================================

@pytest.mark.django_db
class TestUnusedStock:

    def test_lists_only_unused(self, admin_client, invoice, unused_stock, other_unused_stock):
        response = admin_client.get(reverse('dashboard:unused-stock'))

        assert {row['name'] for row in response.data} == {'Old lamp', 'Spare fuse'}
        fuse = next(row for row in response.data if row['name'] == 'Spare fuse')
        assert fuse['user_email'] == 'other@example.com'

    def test_filter_by_user(self, admin_client, user, unused_stock, other_unused_stock):
        response = admin_client.get(reverse('dashboard:unused-stock'), {'user': str(user.id)})

        assert [row['name'] for row in response.data] == ['Old lamp']

    def test_delete_skips_used(self, admin_client, invoice, used_stock, unused_stock):
        response = admin_client.delete(
            reverse('dashboard:unused-stock'),
            {'ids': [str(used_stock.id), str(unused_stock.id)]},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['deleted'] == 1
        assert response.data['skipped'] == 1
        assert response.data['message'] == 'Successfully deleted 1 unused stock item(s)'
        assert list(StockItem.objects.values_list('name', flat=True)) == ['Breaker']

    def test_delete_all_in_use(self, admin_client, invoice, used_stock):
        response = admin_client.delete(
            reverse('dashboard:unused-stock'), {'ids': [str(used_stock.id)]}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'None of the selected items can be deleted (they are in use)'

    def test_delete_requires_ids(self, admin_client):
        response = admin_client.delete(reverse('dashboard:unused-stock'), {'ids': []}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Array of stock IDs is required'

    def test_delete_invalidates_owner_cache(self, admin_client, authenticated_client, unused_stock):
        stock_url = reverse('stock:stockitem-list')
        assert authenticated_client.get(stock_url).data['pagination']['total'] == 1

        admin_client.delete(
            reverse('dashboard:unused-stock'), {'ids': [str(unused_stock.id)]}, format='json'
        )

        assert authenticated_client.get(stock_url).data['pagination']['total'] == 0


@pytest.mark.django_db
class TestUnusedClients:

    def test_lists_only_unused(self, admin_client, invoice, unused_client):
        response = admin_client.get(reverse('dashboard:unused-clients'))

        assert [row['name'] for row in response.data] == ['Never Billed']
        assert response.data[0]['user_email'] == 'test@example.com'

    def test_delete(self, admin_client, invoice, used_client, unused_client):
        response = admin_client.delete(
            reverse('dashboard:unused-clients'),
            {'ids': [str(used_client.id), str(unused_client.id)]},
            format='json'
        )

        assert response.data == {
            'message': 'Successfully deleted 1 unused client(s)',
            'deleted': 1,
            'skipped': 1,
        }
        assert list(Client.objects.values_list('name', flat=True)) == ['Acme Corp']

    def test_invalid_ids(self, admin_client):
        response = admin_client.delete(
            reverse('dashboard:unused-clients'), {'ids': ['not-a-uuid']}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Array of client IDs is required'


@pytest.mark.django_db
class TestAdminDocuments:

    def test_list_with_type_filter(self, admin_client, invoice, other_proforma):
        url = reverse('dashboard:documents')

        everything = admin_client.get(url)
        proformas = admin_client.get(url, {'type': 'proforma'})

        assert len(everything.data) == 2
        assert [row['user_email'] for row in proformas.data] == ['other@example.com']

    def test_invalid_type(self, admin_client):
        response = admin_client.get(reverse('dashboard:documents'), {'type': 'receipt'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_cascades_payments(self, admin_client, invoice, payment):
        response = admin_client.delete(
            reverse('dashboard:documents'), {'ids': [str(invoice.id)]}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Successfully deleted 1 document(s)'
        assert not Document.objects.exists()
        assert not Payment.objects.exists()

    def test_deleting_invoice_reverts_proforma(self, admin_client, user, used_client):
        proforma = create_document(
            user=user, type='PROFORMA', client_id=used_client.id, labor_price=Decimal('10.00')
        )
        converted = convert_proforma_to_invoice(user=user, proforma_id=proforma.id)

        admin_client.delete(
            reverse('dashboard:documents'), {'ids': [str(converted.id)]}, format='json'
        )

        proforma.refresh_from_db()
        assert proforma.status == DocumentStatus.DRAFT
        assert proforma.converted_at is None
