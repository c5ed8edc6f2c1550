"""
Management command to audit per-user data consistency.

Checks, for every user:
- payments linked to a document owned by someone else
- payments carrying an invoice number but no document
- document lines linked to another user's stock item
- documents whose stored totals disagree with their lines
- documents whose total_paid disagrees with their payments

Usage:
    python manage.py audit_data
    python manage.py audit_data --user someone@example.com --fix
    python manage.py audit_data --fix --dry-run
"""

import logging
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.db.models import Sum

from apps.core.cache import invalidate_user_cache
from apps.documents.models import Document, DocumentItem, DocumentType
from apps.documents.services import calculate_totals, line_total, refresh_payment_totals
from apps.payments.models import Payment

logger = logging.getLogger(__name__)

User = get_user_model()


class Command(BaseCommand):
    help = 'Report (and optionally repair) inconsistent documents and payments'

    def add_arguments(self, parser):
        parser.add_argument(
            '--user',
            help='Only audit the user with this email',
        )
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Repair the problems that can be repaired',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='With --fix, show what would be repaired without making changes',
        )

    def handle(self, *args, **options):
        fix = options['fix'] and not options['dry_run']

        users = User.objects.order_by('email')
        if options['user']:
            users = users.filter(email__iexact=options['user'])
            if not users.exists():
                raise CommandError(f"User {options['user']} not found")

        total = 0
        for user in users:
            with transaction.atomic():
                problems = self.audit_user(user, fix)
            if problems and fix:
                invalidate_user_cache(user.pk, 'documents', 'payments', 'clients', 'stock')
            total += problems

        if total == 0:
            self.stdout.write(self.style.SUCCESS('No problems found. All good!'))
            return

        if options['fix'] and options['dry_run']:
            self.stdout.write(self.style.WARNING(f'\n{total} problem(s). --dry-run mode: No changes made.'))
        elif fix:
            self.stdout.write(self.style.SUCCESS(f'\n✓ Processed {total} problem(s).'))
        else:
            self.stdout.write(self.style.WARNING(f'\n{total} problem(s) found. Run with --fix to repair.'))

    def report(self, user, title, rows):
        if not rows:
            return 0
        self.stdout.write(f'\n{user.email}: {title} ({len(rows)})')
        for row in rows:
            self.stdout.write(f'  - {row}')
        return len(rows)

    def audit_user(self, user, fix):
        problems = 0

        # Payments pointing at another user's document
        foreign = list(
            Payment.objects
            .filter(user=user, document__isnull=False)
            .exclude(document__user=user)
        )
        problems += self.report(user, "payments linked to another user's document", [
            f'{p.id} {p.amount} -> {p.invoice_number or p.document_id}' for p in foreign
        ])
        if fix and foreign:
            Payment.objects.filter(id__in=[p.id for p in foreign]).update(document=None)

        # Payments with an invoice number but no document
        dangling = list(
            Payment.objects
            .filter(user=user, document__isnull=True)
            .exclude(invoice_number='')
        )
        problems += self.report(user, 'payments with an invoice number but no document', [
            f'{p.id} {p.amount} ({p.invoice_number})' for p in dangling
        ])
        if fix:
            for payment in dangling:
                self.relink_payment(user, payment)

        # Lines using another user's stock
        foreign_lines = list(
            DocumentItem.objects
            .filter(document__user=user, stock_item__isnull=False)
            .exclude(stock_item__user=user)
            .select_related('document')
        )
        problems += self.report(user, "document lines linked to another user's stock", [
            f'{line.document.document_number}: {line.name}' for line in foreign_lines
        ])
        if fix and foreign_lines:
            DocumentItem.objects.filter(id__in=[line.id for line in foreign_lines]).update(stock_item=None)

        documents = list(Document.objects.filter(user=user).prefetch_related('items'))

        # Stored totals vs lines
        wrong_totals = [d for d in documents if self.expected_totals(d) != self.stored_totals(d)]
        problems += self.report(user, 'documents with totals that disagree with their lines', [
            f'{d.document_number}: stored {d.total}, expected {self.expected_totals(d)["total"]}'
            for d in wrong_totals
        ])
        if fix:
            for document in wrong_totals:
                self.repair_totals(document)

        # total_paid vs payments
        paid = dict(
            Payment.objects
            .filter(document__user=user)
            .values('document_id')
            .annotate(total=Sum('amount'))
            .values_list('document_id', 'total')
        )
        stale = [
            d for d in documents
            if d.total_paid != (paid.get(d.id) or Decimal('0.00'))
        ]
        problems += self.report(user, 'documents with a stale total_paid', [
            f'{d.document_number}: stored {d.total_paid}, payments {paid.get(d.id) or Decimal("0.00")}'
            for d in stale
        ])
        if fix:
            for document in stale:
                refresh_payment_totals(document)

        if fix and problems:
            logger.info("Audit repaired data of user %s (%s problems)", user.pk, problems)
        return problems

    def relink_payment(self, user, payment):
        document = (
            Document.objects
            .filter(user=user, document_number=payment.invoice_number)
            .order_by('type')  # INVOICE before PROFORMA
            .first()
        )
        if document is None:
            self.stdout.write(self.style.WARNING(
                f'  ! no document {payment.invoice_number} for payment {payment.id}'
            ))
            return

        if document.type != DocumentType.INVOICE:
            self.stdout.write(f'  linking payment {payment.id} to proforma {document.document_number}')
        payment.document = document
        if payment.client_id is None:
            payment.client_id = document.client_id
        payment.save(update_fields=['document', 'client', 'updated_at'])
        refresh_payment_totals(document)

    @staticmethod
    def expected_totals(document):
        return calculate_totals(
            line_totals=[line_total(item.quantity, item.unit_price) for item in document.items.all()],
            labor_price=document.labor_price,
            mandays=document.mandays,
            vat_applied=document.vat_applied,
            tax_rate=document.tax_rate,
        )

    @staticmethod
    def stored_totals(document):
        return {
            'subtotal': document.subtotal,
            'tax_amount': document.tax_amount,
            'total': document.total,
        }

    def repair_totals(self, document):
        for item in document.items.all():
            expected = line_total(item.quantity, item.unit_price)
            if item.total != expected:
                item.total = expected
                item.save(update_fields=['total', 'updated_at'])

        totals = self.expected_totals(document)
        for field, value in totals.items():
            setattr(document, field, value)
        document.save(update_fields=['subtotal', 'tax_amount', 'total', 'updated_at'])
        refresh_payment_totals(document)
