"""
Archived school years: the data builder and the archives page.
"""
from datetime import date
from decimal import Decimal

import pytest
from django.urls import reverse

from school_admin.models import SchoolYear
from school_admin.utils.archive_utils import build_archives_data


@pytest.mark.django_db
class TestBuildArchivesData:

    def test_only_inactive_years_are_included(self, archived_year, active_year):
        groups = build_archives_data()
        assert [g['school_year']['name'] for g in groups] == ['2023-2024']

    def test_group_contents(self, archived_year):
        group = build_archives_data()[0]
        assert {s['first_name'] for s in group['students']} == {'Juan', 'Maria'}
        assert len(group['payments']) == 2
        assert [d['donated_by'] for d in group['donations']] == ['PTA']

    def test_payment_without_student_or_date(self, archived_year):
        payments = build_archives_data()[0]['payments']
        orphan = [p for p in payments if p['student'] is None]
        assert len(orphan) == 1
        assert orphan[0]['amount_paid'] == Decimal('250.50')
        assert orphan[0]['payment_date'] is None

    def test_most_recent_year_first(self, archived_year):
        SchoolYear.objects.create(
            name='2022-2023', start_date=date(2022, 6, 1), end_date=date(2023, 5, 31), is_active=False,
        )
        names = [g['school_year']['name'] for g in build_archives_data()]
        assert names == ['2023-2024', '2022-2023']

    def test_no_archives(self, active_year):
        assert build_archives_data() == []


@pytest.mark.django_db
class TestArchivesPage:

    def test_empty_state(self, admin_client, active_year):
        html = admin_client.get(reverse('archives')).content.decode()
        assert 'id="no-archives"' in html
        assert 'No archived school years found.' in html

    def test_all_tabs_closed_by_default(self, admin_client, archived_year):
        response = admin_client.get(reverse('archives'))
        assert response.status_code == 200
        html = response.content.decode()
        assert '2023-2024' in html
        assert 'data-open-tab' not in html
        assert 'tab-active' not in html

    def test_open_payments_tab(self, admin_client, archived_year):
        response = admin_client.get(reverse('archives'), {'year': archived_year.id, 'tab': 'payments'})
        html = response.content.decode()
        assert 'data-open-tab="payments"' in html
        assert 'Juan Dela Cruz' in html
        assert '₱1,000.00' in html
        assert '8/15/2023' in html
        assert 'Unknown Student' in html
        assert '₱250.50' in html
        assert '—' in html

    def test_open_tab_links_back_to_closed(self, admin_client, archived_year):
        response = admin_client.get(reverse('archives'), {'year': archived_year.id, 'tab': 'students'})
        tabs = {tab['kind']: tab for tab in response.context['panels'][0]['tabs']}
        assert tabs['students']['active'] is True
        assert tabs['students']['target'] is None
        assert tabs['donations']['target'].tab_kind == 'donations'
        assert 'href="?"' in response.content.decode()

    def test_donations_tab_formats_amounts(self, admin_client, archived_year):
        response = admin_client.get(reverse('archives'), {'year': archived_year.id, 'tab': 'donations'})
        html = response.content.decode()
        assert '₱5,000.00' in html
        assert '9/1/2023' in html
        assert 'Alumni' not in html

    def test_unknown_tab_or_year_opens_nothing(self, admin_client, archived_year):
        for query in ({'year': archived_year.id, 'tab': 'grades'}, {'year': 9999, 'tab': 'students'}, {'year': 'x'}):
            response = admin_client.get(reverse('archives'), query)
            assert response.context['browser'].selection is None

    def test_archives_payload_embedded(self, admin_client, archived_year):
        html = admin_client.get(reverse('archives')).content.decode()
        assert 'id="archives-data"' in html

    def test_empty_tab_message(self, admin_client, db):
        year = SchoolYear.objects.create(
            name='2019-2020', start_date=date(2019, 6, 1), end_date=date(2020, 5, 31), is_active=False,
        )
        response = admin_client.get(reverse('archives'), {'year': year.id, 'tab': 'students'})
        assert 'No students' in response.content.decode()
