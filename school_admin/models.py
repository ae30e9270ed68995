# school_admin/models.py

import re

from django.db import models
from django.contrib.auth.models import AbstractUser
from django.utils.translation import gettext_lazy as _
from djmoney.models.fields import MoneyField

# --- Role / status constants (login is restricted to active admins) ---

ROLE_ADMIN = 'admin'
ROLE_TREASURER = 'treasurer'
ROLE_AUDITOR = 'auditor'
ROLE_GUARDIAN = 'guardian'

STATUS_ACTIVE = 'active'
STATUS_INACTIVE = 'inactive'

_GRADE_NUMBER_RE = re.compile(r'(\d+)')


# --- Custom User Model ---
class AdminUser(AbstractUser):
    ROLES = [
        (ROLE_ADMIN, _('Admin')),
        (ROLE_TREASURER, _('Treasurer')),
        (ROLE_AUDITOR, _('Auditor')),
        (ROLE_GUARDIAN, _('Guardian')),
    ]
    STATUSES = [
        (STATUS_ACTIVE, _('Active')),
        (STATUS_INACTIVE, _('Inactive')),
    ]

    role = models.CharField(max_length=10, choices=ROLES, default=ROLE_ADMIN)
    status = models.CharField(max_length=10, choices=STATUSES, default=STATUS_ACTIVE)

    @property
    def can_use_admin_portal(self):
        return self.role == ROLE_ADMIN and self.status == STATUS_ACTIVE and self.is_active


# --- School reference data ---

class SchoolYear(models.Model):
    """A school year; inactive years are browsed read-only as archives."""
    name = models.CharField(max_length=50)
    start_date = models.DateField()
    end_date = models.DateField()
    is_active = models.BooleanField(default=False)

    class Meta:
        ordering = ['-start_date']

    def __str__(self):
        return self.name

    def to_payload(self):
        return {
            'id': self.id,
            'name': self.name,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'end_date': self.end_date.isoformat() if self.end_date else None,
            'is_active': self.is_active,
        }


class GradeLevel(models.Model):
    name = models.CharField(max_length=50, unique=True)
    description = models.CharField(max_length=100, blank=True, default='')

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def grade_number(self):
        """Numeric part of the name ("Grade 10" -> 10); unnumbered levels sort last."""
        match = _GRADE_NUMBER_RE.search(self.name or '')
        return int(match.group(1)) if match else float('inf')

    def to_payload(self):
        return {'id': self.id, 'name': self.name, 'description': self.description}


class SectionQuerySet(models.QuerySet):

    def ordered(self):
        """Sections by grade number, then alphabetically by section name."""
        sections = list(self.select_related('grade_level'))
        sections.sort(key=lambda s: (s.grade_level.grade_number, s.grade_level.name, s.name.lower()))
        return sections


class Section(models.Model):
    """A named subdivision of a grade level (e.g. "7-Diamond")."""
    name = models.CharField(max_length=50)
    grade_level = models.ForeignKey(GradeLevel, on_delete=models.CASCADE, related_name='sections')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = SectionQuerySet.as_manager()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['name', 'grade_level'], name='unique_section_per_grade_level'),
        ]

    def __str__(self):
        return f"{self.grade_level.name} - {self.name}"

    def to_payload(self):
        return {
            'id': self.id,
            'name': self.name,
            'grade_level_id': self.grade_level_id,
            'grade_level': self.grade_level.to_payload() if self.grade_level_id else None,
        }


# --- Archived records ---

class Student(models.Model):
    lrn = models.CharField(max_length=20, blank=True, default='', help_text=_("Learner Reference Number"))
    first_name = models.CharField(max_length=255)
    middle_name = models.CharField(max_length=255, blank=True, default='')
    last_name = models.CharField(max_length=255)
    school_year = models.ForeignKey(SchoolYear, on_delete=models.CASCADE, related_name='students')
    grade_level = models.ForeignKey(GradeLevel, on_delete=models.SET_NULL, null=True, blank=True, related_name='students')
    section = models.ForeignKey(Section, on_delete=models.SET_NULL, null=True, blank=True, related_name='students')

    class Meta:
        ordering = ['last_name', 'first_name']

    def __str__(self):
        return f"{self.first_name} {self.last_name}"

    def to_payload(self):
        return {
            'id': self.id,
            'lrn': self.lrn,
            'first_name': self.first_name,
            'middle_name': self.middle_name,
            'last_name': self.last_name,
        }


class Payment(models.Model):
    student = models.ForeignKey(Student, on_delete=models.SET_NULL, null=True, blank=True, related_name='payments')
    school_year = models.ForeignKey(SchoolYear, on_delete=models.CASCADE, related_name='payments')
    amount_paid = MoneyField(max_digits=12, decimal_places=2, default_currency='PHP', default=0)
    payment_date = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ['payment_date', 'id']

    def __str__(self):
        return f"{self.amount_paid} on {self.payment_date}"

    def to_payload(self):
        return {
            'id': self.id,
            'student': self.student.to_payload() if self.student_id else None,
            'amount_paid': self.amount_paid.amount if self.amount_paid is not None else None,
            'payment_date': self.payment_date.isoformat() if self.payment_date else None,
        }


class Donation(models.Model):
    donated_by = models.CharField(max_length=255)
    donation_amount = MoneyField(max_digits=12, decimal_places=2, default_currency='PHP', null=True, blank=True)
    donation_date = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ['donation_date', 'id']

    def __str__(self):
        return f"{self.donated_by} ({self.donation_date})"

    def to_payload(self):
        return {
            'id': self.id,
            'donated_by': self.donated_by,
            'donation_amount': self.donation_amount.amount if self.donation_amount is not None else None,
            'donation_date': self.donation_date.isoformat() if self.donation_date else None,
        }
