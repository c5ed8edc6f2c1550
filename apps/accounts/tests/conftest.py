import pytest
from apps.accounts.models import User


@pytest.fixture
def inactive_user(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        is_active=False,
    )
