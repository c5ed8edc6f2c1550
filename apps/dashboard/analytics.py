"""
Read-only queries behind the admin dashboard.

Unlike every other module these queries cross tenant boundaries: they
look at all users' data, so they are only reachable through endpoints
guarded by IsDashboardAdmin.

Classes:
    DashboardQueries: Static methods returning plain dicts and lists.
"""

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Sum, Count, Q, OuterRef, Subquery
from django.utils import timezone

from apps.clients.models import Client
from apps.documents.models import Document, DocumentItem, DocumentType, DocumentStatus
from apps.expenses.models import Expense
from apps.payments.models import Payment
from apps.stock.models import StockItem

User = get_user_model()

RECENT_LIMIT = 10
RECENT_DAYS = 7


def _revenue_filter():
    return Q(type=DocumentType.INVOICE) & ~Q(status=DocumentStatus.CANCELLED)


class DashboardQueries:
    """
    Aggregations over the whole system.

    Methods:
        users_with_stats: Every user with record counts and money totals.
        system_stats: Global counts plus activity of the last seven days.
        user_detail: One user with their most recent records.
        unused_stock: Stock items no document line refers to.
        unused_clients: Clients no document refers to.
        documents: Documents of any user, for bulk cleanup.
    """

    @staticmethod
    def _counts(user_id):
        return {
            'clients': Client.objects.filter(user_id=user_id).count(),
            'documents': Document.objects.filter(user_id=user_id).count(),
            'payments': Payment.objects.filter(user_id=user_id).count(),
            'stock': StockItem.objects.filter(user_id=user_id).count(),
            'expenses': Expense.objects.filter(user_id=user_id).count(),
        }

    @staticmethod
    def users_with_stats():
        """
        List all users, newest first.

        Returns:
            list of dicts with id, email, name, timestamps, `counts`,
            `total_revenue` (non-cancelled invoices), `total_payments` and
            the last created document (`last_activity`,
            `last_document_type`, `last_document_number`).
        """
        last_document = Document.objects.filter(user=OuterRef('pk')).order_by('-created_at')

        users = (
            User.objects
            .annotate(
                last_activity=Subquery(last_document.values('created_at')[:1]),
                last_document_type=Subquery(last_document.values('type')[:1]),
                last_document_number=Subquery(last_document.values('document_number')[:1]),
            )
            .order_by('-created_at')
        )

        revenue = dict(
            Document.objects
            .filter(_revenue_filter())
            .values('user_id')
            .annotate(revenue=Sum('total'))
            .values_list('user_id', 'revenue')
        )
        payments = dict(
            Payment.objects
            .values('user_id')
            .annotate(received=Sum('amount'))
            .values_list('user_id', 'received')
        )

        result = []
        for user in users:
            result.append({
                'id': user.id,
                'email': user.email,
                'name': user.name,
                'is_admin': user.is_dashboard_admin,
                'created_at': user.created_at,
                'updated_at': user.updated_at,
                'counts': DashboardQueries._counts(user.id),
                'total_revenue': revenue.get(user.id) or Decimal('0.00'),
                'total_payments': payments.get(user.id) or Decimal('0.00'),
                'last_activity': user.last_activity,
                'last_document_type': user.last_document_type,
                'last_document_number': user.last_document_number,
            })
        return result

    @staticmethod
    def system_stats():
        """Global overview and the number of records created in the last week."""
        since = timezone.now() - timedelta(days=RECENT_DAYS)

        documents = Document.objects.aggregate(
            count=Count('id'),
            invoices=Count('id', filter=Q(type=DocumentType.INVOICE)),
            proformas=Count('id', filter=Q(type=DocumentType.PROFORMA)),
            revenue=Sum('total', filter=_revenue_filter()),
        )
        payments = Payment.objects.aggregate(count=Count('id'), received=Sum('amount'))

        return {
            'overview': {
                'total_users': User.objects.count(),
                'total_clients': Client.objects.count(),
                'total_documents': documents['count'],
                'total_invoices': documents['invoices'],
                'total_proformas': documents['proformas'],
                'total_payments': payments['count'],
                'total_stock': StockItem.objects.count(),
                'total_revenue': documents['revenue'] or Decimal('0.00'),
                'total_payments_amount': payments['received'] or Decimal('0.00'),
            },
            'recent_activity': {
                'documents_last_7_days': Document.objects.filter(created_at__gte=since).count(),
                'payments_last_7_days': Payment.objects.filter(created_at__gte=since).count(),
                'new_users_last_7_days': User.objects.filter(created_at__gte=since).count(),
            },
        }

    @staticmethod
    def user_detail(user):
        """User profile with the ten most recent rows of each kind."""
        return {
            'id': user.id,
            'email': user.email,
            'name': user.name,
            'created_at': user.created_at,
            'updated_at': user.updated_at,
            'clients': list(
                Client.objects.filter(user=user)
                .order_by('-created_at')
                .values('id', 'name', 'created_at')[:RECENT_LIMIT]
            ),
            'documents': list(
                Document.objects.filter(user=user)
                .order_by('-created_at')
                .values('id', 'type', 'document_number', 'total', 'status', 'created_at')[:RECENT_LIMIT]
            ),
            'payments': list(
                Payment.objects.filter(user=user)
                .order_by('-created_at')
                .values('id', 'amount', 'payment_date', 'created_at')[:RECENT_LIMIT]
            ),
            'stock': list(
                StockItem.objects.filter(user=user)
                .order_by('-created_at')
                .values('id', 'name', 'quantity', 'created_at')[:RECENT_LIMIT]
            ),
            'counts': DashboardQueries._counts(user.id),
        }

    @staticmethod
    def unused_stock(user_id=None):
        used = DocumentItem.objects.filter(stock_item_id__isnull=False).values('stock_item_id')
        queryset = StockItem.objects.exclude(id__in=used)
        if user_id:
            queryset = queryset.filter(user_id=user_id)

        return list(
            queryset
            .order_by('-created_at')
            .values(
                'id', 'name', 'description', 'category', 'brand', 'model',
                'part_number', 'sku', 'quantity', 'buying_price', 'selling_price',
                'user_id', 'user__email', 'created_at',
            )
        )

    @staticmethod
    def unused_clients(user_id=None):
        used = Document.objects.filter(client_id__isnull=False).values('client_id')
        queryset = Client.objects.exclude(id__in=used)
        if user_id:
            queryset = queryset.filter(user_id=user_id)

        return list(
            queryset
            .order_by('-created_at')
            .values(
                'id', 'client_number', 'name', 'email', 'phone', 'location',
                'user_id', 'user__email', 'created_at',
            )
        )

    @staticmethod
    def documents(user_id=None, document_type=None):
        queryset = Document.objects.all()
        if user_id:
            queryset = queryset.filter(user_id=user_id)
        if document_type:
            queryset = queryset.filter(type=document_type)

        return list(
            queryset
            .order_by('-created_at')
            .values(
                'id', 'type', 'document_number', 'date', 'total', 'status',
                'client_name', 'user_id', 'user__email', 'created_at',
            )
        )
