"""
Management command to rebuild stock items from document lines.

Document lines keep their own name and price. Lines without a stock link
are grouped by name; each group becomes one stock item (selling price
from the most recent line) and the lines are linked to it.

Usage:
    python manage.py reconstruct_stock
    python manage.py reconstruct_stock --user someone@example.com --dry-run
"""

import logging

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.core.cache import invalidate_user_cache
from apps.documents.models import DocumentItem
from apps.stock.models import StockItem
from apps.stock.services import create_stock_item

logger = logging.getLogger(__name__)

User = get_user_model()


class Command(BaseCommand):
    help = 'Create stock items from document lines that have no stock link'

    def add_arguments(self, parser):
        parser.add_argument(
            '--user',
            help='Only process the user with this email',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be created without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        users = User.objects.order_by('email')
        if options['user']:
            users = users.filter(email__iexact=options['user'])
            if not users.exists():
                raise CommandError(f"User {options['user']} not found")

        created = linked = 0
        for user in users:
            user_created, user_linked = self.reconstruct_for_user(user, dry_run)
            created += user_created
            linked += user_linked

        if dry_run:
            self.stdout.write(self.style.WARNING('\n--dry-run mode: No changes made.'))
        elif created == 0 and linked == 0:
            self.stdout.write(self.style.SUCCESS('Every document line is linked to stock. All good!'))
        else:
            self.stdout.write(self.style.SUCCESS(
                f'\nCreated {created} stock item(s) and linked {linked} document line(s).'
            ))

    def reconstruct_for_user(self, user, dry_run):
        lines = (
            DocumentItem.objects
            .filter(document__user=user, stock_item__isnull=True)
            .exclude(name='')
            .select_related('document')
            .order_by('-document__date', '-created_at')
        )

        groups = {}
        for line in lines:
            groups.setdefault(line.name.strip().lower(), []).append(line)

        if not groups:
            return 0, 0

        self.stdout.write(f'\n{user.email}: {len(groups)} item name(s) without stock')

        created = linked = 0
        for group in groups.values():
            latest = group[0]
            name = latest.name.strip()
            item = StockItem.objects.filter(user=user, name__iexact=name).first()
            action = 'link to existing' if item else f'create at {latest.unit_price}'
            self.stdout.write(f'  - {name} ({len(group)} line(s), {action})')

            if dry_run:
                continue

            with transaction.atomic():
                if item is None:
                    item = create_stock_item(
                        user=user,
                        name=name,
                        description=latest.description,
                        unit=latest.unit,
                        selling_price=latest.unit_price,
                    )
                    created += 1

                linked += DocumentItem.objects.filter(
                    id__in=[line.id for line in group]
                ).update(stock_item=item)

        if not dry_run and (created or linked):
            invalidate_user_cache(user.pk, 'stock', 'documents')
            logger.info("Reconstructed %s stock items for user %s", created, user.pk)
        return created, linked
