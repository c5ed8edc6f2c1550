import pytest
from django.urls import reverse
from rest_framework import status
from apps.clients.models import Client


# =============================================================================
# List / Search Tests
# =============================================================================

@pytest.mark.django_db
class TestClientList:
    """Tests for GET /api/clients/"""

    def test_list_only_own_clients(self, authenticated_client, client_obj, other_client_obj):
        response = authenticated_client.get(reverse('clients:client-list'))

        assert response.status_code == status.HTTP_200_OK
        ids = [row['id'] for row in response.data['data']]
        assert ids == [str(client_obj.id)]

    def test_list_pagination_has_no_total(self, authenticated_client, client_obj):
        """Client listing skips the COUNT query."""
        response = authenticated_client.get(reverse('clients:client-list'))

        pagination = response.data['pagination']
        assert pagination['total'] is None
        assert pagination['has_more'] is False
        assert pagination['limit'] == 50

    def test_list_has_more(self, authenticated_client, user):
        for i in range(3):
            Client.objects.create(user=user, name=f'Client {i}')

        response = authenticated_client.get(reverse('clients:client-list'), {'limit': 2})

        assert len(response.data['data']) == 2
        assert response.data['pagination']['has_more'] is True

    def test_search(self, authenticated_client, user, client_obj):
        Client.objects.create(user=user, name='Zeta', location='Tripoli')

        response = authenticated_client.get(reverse('clients:client-list'), {'search': 'tripoli'})

        assert [row['name'] for row in response.data['data']] == ['Zeta']

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('clients:client-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestClientCrud:

    def test_create_assigns_number(self, authenticated_client):
        """A number is taken from the counter when none is given."""
        url = reverse('clients:client-list')
        first = authenticated_client.post(url, {'name': 'First'})
        second = authenticated_client.post(url, {'name': 'Second'})

        assert first.status_code == status.HTTP_201_CREATED
        assert first.data['client_number'] == 1
        assert second.data['client_number'] == 2

    def test_create_with_explicit_number_moves_counter(self, authenticated_client):
        url = reverse('clients:client-list')
        authenticated_client.post(url, {'name': 'Imported', 'client_number': 10})

        response = authenticated_client.post(url, {'name': 'Next'})

        assert response.data['client_number'] == 11

    def test_create_requires_name(self, authenticated_client):
        response = authenticated_client.post(reverse('clients:client-list'), {'email': 'a@b.c'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_blank_name(self, authenticated_client):
        response = authenticated_client.post(reverse('clients:client-list'), {'name': '   '})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_retrieve_other_users_client(self, authenticated_client, other_client_obj):
        url = reverse('clients:client-detail', args=[other_client_obj.id])
        response = authenticated_client.get(url)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update(self, authenticated_client, client_obj):
        url = reverse('clients:client-detail', args=[client_obj.id])
        response = authenticated_client.patch(url, {'phone': '+961 1 234'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['phone'] == '+961 1 234'
        assert response.data['name'] == 'Acme Corp'

    def test_update_other_users_client(self, authenticated_client, other_client_obj):
        url = reverse('clients:client-detail', args=[other_client_obj.id])
        response = authenticated_client.patch(url, {'name': 'Stolen'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        other_client_obj.refresh_from_db()
        assert other_client_obj.name == 'Foreign Ltd'

    def test_delete(self, authenticated_client, client_obj):
        url = reverse('clients:client-detail', args=[client_obj.id])
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Client deleted successfully'
        assert not Client.objects.filter(id=client_obj.id).exists()

    def test_list_reflects_create_after_cached_read(self, authenticated_client):
        """A write invalidates the cached list."""
        url = reverse('clients:client-list')
        assert authenticated_client.get(url).data['data'] == []

        authenticated_client.post(url, {'name': 'Fresh'})

        assert len(authenticated_client.get(url).data['data']) == 1


# =============================================================================
# Actions
# =============================================================================

@pytest.mark.django_db
class TestClientActions:

    def test_next_id_consumes_numbers(self, authenticated_client):
        url = reverse('clients:client-next-id')

        assert authenticated_client.get(url).data == {'id': 1}
        assert authenticated_client.get(url).data == {'id': 2}

    def test_next_id_is_per_user(self, authenticated_client, other_client):
        url = reverse('clients:client-next-id')
        authenticated_client.get(url)

        assert other_client.get(url).data == {'id': 1}

    def test_batch_creates_all(self, authenticated_client):
        response = authenticated_client.post(
            reverse('clients:client-batch'),
            {'clients': [{'name': 'A'}, {'name': 'B'}]},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert len(response.data) == 2

    def test_batch_is_all_or_nothing(self, authenticated_client, user):
        response = authenticated_client.post(
            reverse('clients:client-batch'),
            {'clients': [{'name': 'Good'}, {'name': ''}]},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Client.objects.filter(user=user).exists()

    def test_batch_requires_list(self, authenticated_client):
        response = authenticated_client.post(
            reverse('clients:client-batch'),
            {'clients': {'name': 'A'}},
            format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_balance(self, authenticated_client, client_obj, credit_payments):
        response = authenticated_client.get(reverse('clients:client-balance', args=[client_obj.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['balance'] == '50.00'
        assert [p['amount'] for p in response.data['payments']] == ['30.00', '20.00']

    def test_balance_other_users_client(self, authenticated_client, other_client_obj):
        response = authenticated_client.get(
            reverse('clients:client-balance', args=[other_client_obj.id])
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND
