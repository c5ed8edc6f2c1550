import pytest
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory
from apps.core.pagination import StandardPagination, LookaheadPagination
from apps.suppliers.models import Supplier


def paginate(pagination_class, queryset, **params):
    request = Request(APIRequestFactory().get('/', params))
    paginator = pagination_class()
    rows = paginator.paginate_queryset(queryset, request)
    return rows, paginator.get_paginated_response([r.name for r in rows]).data


@pytest.fixture
def suppliers(user):
    Supplier.objects.bulk_create([
        Supplier(user=user, name=f'Supplier {i:03d}') for i in range(120)
    ])
    return Supplier.objects.filter(user=user).order_by('name')


@pytest.mark.django_db
class TestStandardPagination:

    def test_defaults(self, suppliers):
        rows, data = paginate(StandardPagination, suppliers)

        assert len(rows) == 50
        assert data['pagination'] == {
            'page': 1,
            'limit': 50,
            'total': 120,
            'total_pages': 3,
            'has_more': True,
        }

    def test_limit_capped_at_100(self, suppliers):
        rows, data = paginate(StandardPagination, suppliers, limit='500')

        assert len(rows) == 100
        assert data['pagination']['limit'] == 100
        assert data['pagination']['total_pages'] == 2

    def test_last_page(self, suppliers):
        rows, data = paginate(StandardPagination, suppliers, page='3')

        assert len(rows) == 20
        assert data['data'][0] == 'Supplier 100'
        assert data['pagination']['has_more'] is False

    @pytest.mark.parametrize('page', ['0', '-4', 'abc', ''])
    def test_invalid_page_falls_back_to_first(self, suppliers, page):
        rows, data = paginate(StandardPagination, suppliers, page=page)

        assert data['pagination']['page'] == 1
        assert data['data'][0] == 'Supplier 000'

    def test_page_past_the_end_is_empty(self, suppliers):
        rows, data = paginate(StandardPagination, suppliers, page='9')

        assert rows == []
        assert data['pagination']['total'] == 120
        assert data['pagination']['has_more'] is False

    def test_empty_queryset(self, user):
        rows, data = paginate(StandardPagination, Supplier.objects.filter(user=user))

        assert data['pagination']['total'] == 0
        assert data['pagination']['total_pages'] == 0


@pytest.mark.django_db
class TestLookaheadPagination:

    def test_reports_no_totals(self, suppliers):
        rows, data = paginate(LookaheadPagination, suppliers, limit='100')

        assert len(rows) == 100
        assert data['pagination']['total'] is None
        assert data['pagination']['total_pages'] is None
        assert data['pagination']['has_more'] is True

    def test_exact_fit_has_no_more(self, suppliers):
        rows, data = paginate(LookaheadPagination, suppliers, page='2', limit='60')

        assert len(rows) == 60
        assert data['pagination']['has_more'] is False
