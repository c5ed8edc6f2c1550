import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new user."""
        url = reverse('users:register')
        data = {
            'email': 'newuser@example.com',
            'password': 'SecurePass123!',
            'name': 'New User',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['name'] == 'New User'
        assert User.objects.filter(email='newuser@example.com').exists()

    def test_register_normalizes_email(self, api_client):
        """Email is trimmed and lower-cased before storing."""
        url = reverse('users:register')
        data = {
            'email': 'Mixed.Case@Example.COM',
            'password': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user']['email'] == 'mixed.case@example.com'

    def test_register_without_name(self, api_client):
        """Name is optional."""
        url = reverse('users:register')
        response = api_client.post(url, {
            'email': 'minimal@example.com',
            'password': 'SecurePass123!',
        })

        assert response.status_code == status.HTTP_201_CREATED

    def test_register_duplicate_email_case_insensitive(self, api_client, user):
        """Cannot register the same email with different casing."""
        url = reverse('users:register')
        response = api_client.post(url, {
            'email': user.email.upper(),
            'password': 'SecurePass123!',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already exists' in response.data['error']

    def test_register_short_password(self, api_client):
        """Passwords shorter than six characters are rejected."""
        url = reverse('users:register')
        response = api_client.post(url, {
            'email': 'weak@example.com',
            'password': '12345',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not User.objects.filter(email='weak@example.com').exists()

    def test_register_invalid_email(self, api_client):
        """Registration fails with invalid email format."""
        url = reverse('users:register')
        response = api_client.post(url, {
            'email': 'not-an-email',
            'password': 'SecurePass123!',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        """Successfully login with valid credentials."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': user.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert response.data['user']['email'] == user.email

    def test_login_email_case_insensitive(self, api_client, user):
        """Email lookup ignores case."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': 'TEST@example.com',
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK

    def test_login_sets_last_login(self, api_client, user):
        url = reverse('users:login')
        api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        user.refresh_from_db()
        assert user.last_login is not None

    def test_login_wrong_password(self, api_client, user):
        """Wrong password returns 401."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': user.email,
            'password': 'WrongPassword!',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_unknown_email_same_message(self, api_client, user):
        """Unknown email and wrong password share one message."""
        url = reverse('users:login')
        wrong_password = api_client.post(url, {
            'email': user.email,
            'password': 'WrongPassword!',
        })
        unknown_email = api_client.post(url, {
            'email': 'nobody@example.com',
            'password': 'WrongPassword!',
        })

        assert unknown_email.status_code == status.HTTP_401_UNAUTHORIZED
        assert unknown_email.data['error'] == wrong_password.data['error']

    def test_login_inactive_user(self, api_client, inactive_user):
        """Inactive accounts are refused with 403."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': inactive_user.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Profile Tests
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:
    """Tests for GET /api/auth/me/ and PATCH /api/auth/me/update/"""

    def test_get_current_user(self, authenticated_client, user):
        url = reverse('users:current-user')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert 'password' not in response.data

    def test_get_current_user_unauthenticated(self, api_client):
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_name(self, authenticated_client, user):
        url = reverse('users:update-profile')
        response = authenticated_client.patch(url, {'name': 'Renamed'})

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.name == 'Renamed'

    def test_email_is_read_only(self, authenticated_client, user):
        url = reverse('users:update-profile')
        authenticated_client.patch(url, {'email': 'changed@example.com'})

        user.refresh_from_db()
        assert user.email == 'test@example.com'


# =============================================================================
# Password Tests
# =============================================================================

@pytest.mark.django_db
class TestUpdatePassword:
    """Tests for PUT /api/auth/update-password/"""

    def test_update_password_success(self, authenticated_client, user):
        url = reverse('users:update-password')
        response = authenticated_client.put(url, {
            'current_password': 'TestPass123!',
            'new_password': 'BrandNew456',
        })

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.check_password('BrandNew456')

    def test_update_password_wrong_current(self, authenticated_client, user):
        url = reverse('users:update-password')
        response = authenticated_client.put(url, {
            'current_password': 'nope-nope',
            'new_password': 'BrandNew456',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Current password is incorrect'

    def test_update_password_too_short(self, authenticated_client, user):
        url = reverse('users:update-password')
        response = authenticated_client.put(url, {
            'current_password': 'TestPass123!',
            'new_password': 'abc',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        user.refresh_from_db()
        assert user.check_password('TestPass123!')


@pytest.mark.django_db
class TestLogout:
    """Tests for POST /api/auth/logout/"""

    def test_logout(self, api_client):
        url = reverse('users:logout')
        response = api_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Logged out successfully'
