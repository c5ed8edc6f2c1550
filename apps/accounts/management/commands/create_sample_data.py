"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data
    python manage.py create_sample_data --clear

This creates:
- 3 users (admin, alice, bob)
- Company settings for alice
- Suppliers, stock items and clients
- Proformas, an invoice converted from a proforma and a direct invoice
- Payments, including an overpayment left as client credit
- Expenses
"""

from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.clients.services import create_client
from apps.documents.models import DocumentStatus, DocumentType
from apps.documents.services import create_document, convert_proforma_to_invoice
from apps.expenses.services import create_expense
from apps.payments.services import record_invoice_payment
from apps.preferences.services import update_user_settings
from apps.stock.services import create_stock_item
from apps.suppliers.services import create_supplier

SAMPLE_EMAILS = ['admin@example.com', 'alice@example.com', 'bob@example.com']


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete the sample users (and all their data) first',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing sample data...')
            User.objects.filter(email__in=SAMPLE_EMAILS).delete()

        if User.objects.filter(email='alice@example.com').exists():
            self.stdout.write(self.style.WARNING(
                'Sample data already exists. Use --clear to recreate it.'
            ))
            return

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        alice = users['alice']

        update_user_settings(user=alice, data={
            'company_name': 'Alice Electric',
            'company_address': '12 Harbour Street',
            'company_phone': '+1 555 0100',
            'company_email': 'billing@alice-electric.example',
            'tax_rate': Decimal('0.11'),
            'currency': 'USD',
        })

        stock = self.create_stock(alice)
        clients = self.create_clients(alice)
        self.create_documents(alice, clients, stock)
        self.create_expenses(alice)

        create_client(user=users['bob'], name='Bob Client', email='client@bob.example')

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (staff, dashboard access)')
        self.stdout.write('  alice@example.com / password123')
        self.stdout.write('  bob@example.com / password123')

    def create_users(self):
        self.stdout.write('  Creating users...')

        admin = User.objects.create_superuser('admin@example.com', 'admin123', name='Admin User')
        alice = User.objects.create_user('alice@example.com', 'password123', name='Alice')
        bob = User.objects.create_user('bob@example.com', 'password123', name='Bob')

        return {'admin': admin, 'alice': alice, 'bob': bob}

    def create_stock(self, user):
        self.stdout.write('  Creating suppliers and stock...')

        cables = create_supplier(user=user, name='Cable World', email='sales@cableworld.example')
        lighting = create_supplier(user=user, name='Bright Lighting', phone='+1 555 0199')

        return [
            create_stock_item(
                user=user, name='Copper cable 2.5mm', category='Cables', unit='m',
                buying_price=Decimal('0.80'), selling_price=Decimal('1.20'),
                quantity=Decimal('500'), min_quantity=Decimal('100'),
                supplier_id=cables.id,
            ),
            create_stock_item(
                user=user, name='Circuit breaker 16A', category='Protection', unit='pcs',
                brand='Schneider', part_number='A9F74116',
                buying_price=Decimal('6.50'), selling_price=Decimal('9.90'),
                quantity=Decimal('3'), min_quantity=Decimal('10'),
            ),
            create_stock_item(
                user=user, name='LED panel 60x60', category='Lighting', unit='pcs',
                power='40W', color='4000K',
                buying_price=Decimal('18.00'), selling_price=Decimal('29.00'),
                quantity=Decimal('24'), min_quantity=Decimal('5'),
                supplier_id=lighting.id,
            ),
        ]

    def create_clients(self, user):
        self.stdout.write('  Creating clients...')

        return [
            create_client(user=user, name='Northwind Offices', email='office@northwind.example',
                          location='Beirut', vat_number='NW-123'),
            create_client(user=user, name='Harbour Cafe', phone='+1 555 0123', location='Jounieh'),
            create_client(user=user, name='Cedar School', email='admin@cedar.example'),
        ]

    def create_documents(self, user, clients, stock):
        self.stdout.write('  Creating proformas, invoices and payments...')

        today = timezone.localdate()
        cable, breaker, panel = stock

        proforma = create_document(
            user=user,
            type=DocumentType.PROFORMA,
            client_id=clients[0].id,
            date=today - timedelta(days=10),
            items=[
                {'stock_item_id': panel.id, 'quantity': Decimal('12')},
                {'stock_item_id': cable.id, 'quantity': Decimal('150')},
            ],
            labor_price=Decimal('250.00'),
            vat_applied=True,
            status=DocumentStatus.SENT,
        )
        invoice = convert_proforma_to_invoice(user=user, proforma_id=proforma.id)
        record_invoice_payment(
            user=user,
            document_id=invoice.id,
            amount=Decimal('300.00'),
            payment_method='bank_transfer',
            reference='TRX-1001',
        )

        cafe_invoice = create_document(
            user=user,
            type=DocumentType.INVOICE,
            client_id=clients[1].id,
            date=today - timedelta(days=45),
            items=[{'stock_item_id': breaker.id, 'quantity': Decimal('4')}],
            mandays={'days': 2, 'people': 1, 'cost_per_day': 120},
            status=DocumentStatus.SENT,
        )
        # Pays more than the invoice: the rest stays as credit
        record_invoice_payment(
            user=user,
            document_id=cafe_invoice.id,
            amount=cafe_invoice.total + Decimal('50.00'),
            payment_method='cash',
        )

        create_document(
            user=user,
            type=DocumentType.PROFORMA,
            client_id=clients[2].id,
            items=[{'name': 'Emergency lighting survey', 'quantity': Decimal('1'),
                    'unit_price': Decimal('180.00')}],
            notes='Valid for 30 days',
        )

        # Old unpaid invoice, shows up as overdue
        create_document(
            user=user,
            type=DocumentType.INVOICE,
            client_id=clients[2].id,
            date=today - timedelta(days=60),
            labor_price=Decimal('90.00'),
            status=DocumentStatus.SENT,
        )

    def create_expenses(self, user):
        self.stdout.write('  Creating expenses...')

        today = timezone.localdate()
        for description, category, amount, days_ago in [
            ('Van fuel', 'Transport', Decimal('65.00'), 3),
            ('Multimeter', 'Tools', Decimal('89.90'), 12),
            ('Workshop rent', 'Rent', Decimal('400.00'), 20),
            ('Van service', 'Transport', Decimal('150.00'), 35),
        ]:
            create_expense(
                user=user,
                description=description,
                category=category,
                amount=amount,
                expense_date=today - timedelta(days=days_ago),
            )
