"""Per-user company settings."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from typing import Dict, Any

from .models import UserSettings

logger = logging.getLogger(__name__)

User = get_user_model()

SETTINGS_FIELDS = [
    'company_name',
    'company_address',
    'company_phone',
    'company_email',
    'company_vat_number',
    'logo',
    'footer_message',
    'tax_rate',
    'currency',
]


def get_user_settings(*, user: User, exclude_logo: bool = False) -> Dict[str, Any]:
    """
    Stored settings as a dict, or the defaults when the user never saved any.

    The logo is a data URL and can be large, so callers that only need the
    text fields can leave it out.
    """
    stored = UserSettings.objects.filter(user=user).first()
    source = stored if stored is not None else UserSettings(user=user)

    data = {field: getattr(source, field) for field in SETTINGS_FIELDS}
    data['is_default'] = stored is None
    if exclude_logo:
        data.pop('logo')
    return data


@transaction.atomic
def update_user_settings(*, user: User, data: Dict[str, Any]) -> UserSettings:
    """Create or update the user's settings with the given fields."""
    settings_row, created = (
        UserSettings.objects
        .select_for_update()
        .get_or_create(user=user)
    )

    for field in SETTINGS_FIELDS:
        if field in data:
            value = data[field]
            if field != 'tax_rate':
                value = value or ''
            setattr(settings_row, field, value)

    settings_row.save()
    if created:
        logger.info("Created settings for user %s", user.pk)
    return settings_row
