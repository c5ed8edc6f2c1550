import pytest
from django.core.cache import cache
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User


@pytest.fixture(autouse=True)
def clear_cache():
    """Cached responses must not leak between tests."""
    cache.clear()
    yield
    cache.clear()


def _authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a regular test user."""
    return User.objects.create_user(
        email='test@example.com',
        password='TestPass123!',
        name='Test User',
    )


@pytest.fixture
def other_user(db):
    """Create and return a second, unrelated user."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        name='Other User',
    )


@pytest.fixture
def admin_user(db):
    """User whose email is listed in ADMIN_EMAILS."""
    return User.objects.create_user(
        email='admin@example.com',
        password='AdminPass123!',
        name='Admin',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as regular user."""
    return _authenticate(api_client, user)


@pytest.fixture
def other_client(user, other_user):
    """Return a separate API client authenticated as other_user."""
    return _authenticate(APIClient(), other_user)


@pytest.fixture
def admin_client(admin_user):
    """Return a separate API client authenticated as the dashboard admin."""
    return _authenticate(APIClient(), admin_user)
