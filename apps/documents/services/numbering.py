"""Document number generation."""

import re

from django.conf import settings
from django.utils import timezone

from apps.core.services import next_counter_value, ensure_counter_at_least

NUMBER_PATTERN = re.compile(r'^(?P<prefix>[A-Z]+)-(?P<year>\d{4})-(?P<sequence>\d+)$')


def format_document_number(prefix: str, year: int, sequence: int) -> str:
    """INV-2025-007; sequences above 999 simply get more digits."""
    return f"{prefix}-{year}-{sequence:03d}"


def next_document_number(*, user, document_type: str) -> str:
    """
    Reserve the next number for a document type.

    The sequence is per user and type and keeps growing across years;
    the year part is the current year.
    """
    sequence = next_counter_value(user=user, key=document_type)
    prefix = settings.DOCUMENT_NUMBER_PREFIXES[document_type]
    return format_document_number(prefix, timezone.localdate().year, sequence)


def register_manual_number(*, user, document_type: str, document_number: str) -> None:
    """Move the counter past a hand-picked number that follows our format."""
    match = NUMBER_PATTERN.match(document_number or '')
    if not match:
        return
    if match.group('prefix') != settings.DOCUMENT_NUMBER_PREFIXES[document_type]:
        return
    ensure_counter_at_least(
        user=user,
        key=document_type,
        value=int(match.group('sequence')),
    )
