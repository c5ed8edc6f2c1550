import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.clients.services import create_client
from apps.documents.services import create_document
from apps.preferences.models import UserSettings
from apps.preferences.services import get_user_settings, update_user_settings

LOGO = 'data:image/png;base64,iVBORw0KGgo='


@pytest.mark.django_db
class TestGetSettings:
    """Tests for GET /api/settings/"""

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('preferences:user-settings'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_defaults_when_never_saved(self, authenticated_client, user):
        response = authenticated_client.get(reverse('preferences:user-settings'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_default'] is True
        assert response.data['footer_message'] == 'Thank you for your business!'
        assert response.data['currency'] == 'USD'
        assert response.data['tax_rate'] == '0.0000'
        # Reading must not create a row
        assert not UserSettings.objects.filter(user=user).exists()

    def test_exclude_logo(self, authenticated_client, user):
        update_user_settings(user=user, data={'logo': LOGO})
        url = reverse('preferences:user-settings')

        full = authenticated_client.get(url)
        slim = authenticated_client.get(url, {'exclude_logo': 'true'})

        assert full.data['logo'] == LOGO
        assert 'logo' not in slim.data
        assert slim.data['is_default'] is False


@pytest.mark.django_db
class TestUpdateSettings:
    """Tests for PUT/PATCH /api/settings/"""

    def test_put_creates_row(self, authenticated_client, user):
        data = {'company_name': 'Alice Electric', 'tax_rate': '0.2', 'currency': 'EUR'}
        response = authenticated_client.put(reverse('preferences:user-settings'), data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['company_name'] == 'Alice Electric'
        assert response.data['tax_rate'] == '0.2000'
        assert response.data['is_default'] is False
        assert UserSettings.objects.get(user=user).currency == 'EUR'

    def test_patch_keeps_other_fields(self, authenticated_client, user):
        update_user_settings(user=user, data={'company_name': 'Alice Electric', 'company_phone': '555'})

        response = authenticated_client.patch(
            reverse('preferences:user-settings'), {'company_phone': '777'}, format='json'
        )

        assert response.data['company_name'] == 'Alice Electric'
        assert response.data['company_phone'] == '777'
        assert UserSettings.objects.filter(user=user).count() == 1

    def test_tax_rate_out_of_range(self, authenticated_client):
        response = authenticated_client.put(
            reverse('preferences:user-settings'), {'tax_rate': '1.5'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'tax_rate' in response.data

    def test_settings_are_per_user(self, authenticated_client, other_client, user):
        authenticated_client.put(
            reverse('preferences:user-settings'), {'company_name': 'Alice Electric'}, format='json'
        )

        response = other_client.get(reverse('preferences:user-settings'))

        assert response.data['company_name'] == ''
        assert response.data['is_default'] is True


@pytest.mark.django_db
def test_service_defaults(user):
    data = get_user_settings(user=user, exclude_logo=True)

    assert data['is_default'] is True
    assert data['tax_rate'] == Decimal('0')
    assert 'logo' not in data


@pytest.mark.django_db
def test_stored_rate_drives_document_vat(user):
    update_user_settings(user=user, data={'tax_rate': Decimal('0.2')})
    document = create_document(
        user=user,
        type='INVOICE',
        client_id=create_client(user=user, name='Acme').id,
        labor_price=Decimal('100.00'),
        vat_applied=True,
    )

    assert document.tax_rate == Decimal('0.2')
    assert document.total == Decimal('120.00')
