"""
Management command to rebuild missing clients from documents.

Documents keep a snapshot of the client's name. When a client row is lost
(deleted, or never created during an import) the documents still carry
that name but no client link. This command creates one client per distinct
name and links the documents and payments back to it.

Usage:
    python manage.py reconstruct_clients
    python manage.py reconstruct_clients --user someone@example.com --dry-run
"""

import logging

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.clients.models import Client
from apps.clients.services import create_client
from apps.core.cache import invalidate_user_cache
from apps.documents.models import Document
from apps.payments.models import Payment

logger = logging.getLogger(__name__)

User = get_user_model()


class Command(BaseCommand):
    help = 'Recreate clients from documents that lost their client link'

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
            return

        if created == 0 and linked == 0:
            self.stdout.write(self.style.SUCCESS('No documents need a client. All good!'))
            return

        self.stdout.write(self.style.SUCCESS(
            f'\nCreated {created} client(s) and relinked {linked} document(s).'
        ))

    def reconstruct_for_user(self, user, dry_run):
        orphans = (
            Document.objects
            .filter(user=user, client__isnull=True)
            .exclude(client_name='')
            .order_by('created_at')
        )

        names = {}
        for document in orphans:
            names.setdefault(document.client_name.strip().lower(), []).append(document)

        if not names:
            return 0, 0

        self.stdout.write(f'\n{user.email}: {len(names)} client name(s) without a client')

        created = linked = 0
        for documents in names.values():
            name = documents[0].client_name.strip()
            client = Client.objects.filter(user=user, name__iexact=name).first()
            action = 'link to existing' if client else 'create'
            self.stdout.write(f'  - {name} ({len(documents)} document(s), {action})')

            if dry_run:
                continue

            with transaction.atomic():
                if client is None:
                    client = create_client(user=user, name=name)
                    created += 1

                linked += Document.objects.filter(
                    id__in=[document.id for document in documents]
                ).update(client=client)
                Payment.objects.filter(
                    user=user, client__isnull=True, client_name__iexact=name
                ).update(client=client)

        if not dry_run and (created or linked):
            invalidate_user_cache(user.pk, 'clients', 'documents', 'payments')
            logger.info("Reconstructed %s clients for user %s", created, user.pk)
        return created, linked
