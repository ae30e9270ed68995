"""
Shared fixtures for the admin portal tests.

Database fixtures depend on pytest-django's ``db`` fixture; screen tests
use FakeTransport and need no database at all.
"""
from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from djmoney.money import Money

from school_admin.models import (
    GradeLevel, Section, SchoolYear, Student, Payment, Donation,
    ROLE_ADMIN, ROLE_TREASURER, STATUS_ACTIVE, STATUS_INACTIVE,
)
from school_admin.screens.transport import TransportResult, OutcomeKind

ADMIN_PASSWORD = 'admin11-secret'

AJAX = {'HTTP_X_REQUESTED_WITH': 'XMLHttpRequest'}


# ── Users ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def admin_user(db):
    return get_user_model().objects.create_user(
        username='admin', password=ADMIN_PASSWORD,
        first_name='System', last_name='Administrator',
        role=ROLE_ADMIN, status=STATUS_ACTIVE,
    )


@pytest.fixture
def treasurer_user(db):
    return get_user_model().objects.create_user(
        username='treasurer', password=ADMIN_PASSWORD, role=ROLE_TREASURER, status=STATUS_ACTIVE,
    )


@pytest.fixture
def inactive_admin(db):
    return get_user_model().objects.create_user(
        username='former', password=ADMIN_PASSWORD, role=ROLE_ADMIN, status=STATUS_INACTIVE,
    )


@pytest.fixture
def admin_client(client, admin_user):
    client.force_login(admin_user)
    return client


# ── Reference data ────────────────────────────────────────────────────────────

@pytest.fixture
def grade_levels(db):
    return {
        number: GradeLevel.objects.create(name=str(number))
        for number in (7, 8, 10)
    }


@pytest.fixture
def sections(grade_levels):
    return {
        'diamond': Section.objects.create(name='Diamond', grade_level=grade_levels[7]),
        'amethyst': Section.objects.create(name='Amethyst', grade_level=grade_levels[7]),
        'rizal': Section.objects.create(name='Rizal', grade_level=grade_levels[10]),
        'bonifacio': Section.objects.create(name='Bonifacio', grade_level=grade_levels[8]),
    }


@pytest.fixture
def archived_year(db):
    year = SchoolYear.objects.create(
        name='2023-2024', start_date=date(2023, 6, 1), end_date=date(2024, 5, 31), is_active=False,
    )
    student = Student.objects.create(first_name='Juan', last_name='Dela Cruz', lrn='1001', school_year=year)
    Student.objects.create(first_name='Maria', last_name='Santos', lrn='1002', school_year=year)
    Payment.objects.create(
        student=student, school_year=year,
        amount_paid=Money(Decimal('1000.00'), 'PHP'), payment_date=date(2023, 8, 15),
    )
    Payment.objects.create(student=None, school_year=year, amount_paid=Money(Decimal('250.50'), 'PHP'), payment_date=None)
    Donation.objects.create(donated_by='PTA', donation_amount=Money(Decimal('5000'), 'PHP'), donation_date=date(2023, 9, 1))
    # Outside the school year's date range
    Donation.objects.create(donated_by='Alumni', donation_amount=Money(Decimal('300'), 'PHP'), donation_date=date(2024, 7, 1))
    return year


@pytest.fixture
def active_year(db):
    return SchoolYear.objects.create(
        name='2024-2025', start_date=date(2024, 6, 1), end_date=date(2025, 5, 31), is_active=True,
    )


# ── Screen doubles ────────────────────────────────────────────────────────────

class FakeTransport:
    """
    Records every call and answers with queued TransportResults.

    ``on_call`` (optional) runs while a request is "in flight", which lets a
    test try to resubmit in the middle of a request.
    """

    def __init__(self, *results, on_call=None):
        self.results = list(results)
        self.calls = []
        self.on_call = on_call

    def _answer(self, name, *args):
        self.calls.append((name,) + args)
        if self.on_call is not None:
            self.on_call()
        if self.results:
            return self.results.pop(0)
        return TransportResult(kind=OutcomeKind.SUCCESS, status_code=200)

    def login(self, credentials):
        return self._answer('login', credentials)

    def store_section(self, draft):
        return self._answer('store_section', draft)

    def update_section(self, edit):
        return self._answer('update_section', edit)

    def delete_section(self, section_id):
        return self._answer('delete_section', section_id)


class RecordingNotifier:

    def __init__(self):
        self.toasts = []
        self.alerts = []

    def toast(self, title, icon='success'):
        self.toasts.append((title, icon))

    def alert(self, title, text, icon='info'):
        self.alerts.append((title, text, icon))


@pytest.fixture
def notifier():
    return RecordingNotifier()
