"""
Archive data builder.

An archive group is a frozen snapshot of one inactive school year: its
students, the payments recorded against it, and the donations dated inside
its start/end range.
"""

import logging
from ..models import SchoolYear, Student, Payment, Donation

logger = logging.getLogger(__name__)


def build_archive_group(school_year):
    """Builds the payload of a single archived school year."""
    students = Student.objects.filter(school_year=school_year)

    payments = Payment.objects.filter(school_year=school_year).select_related('student')

    donations = Donation.objects.filter(
        donation_date__gte=school_year.start_date,
        donation_date__lte=school_year.end_date,
    )

    return {
        'school_year': school_year.to_payload(),
        'students': [s.to_payload() for s in students],
        'payments': [p.to_payload() for p in payments],
        'donations': [d.to_payload() for d in donations],
    }


def build_archives_data():
    """
    Returns the ordered list of archive groups (most recent school year first).
    Active school years are never included.
    """
    archived_years = SchoolYear.objects.filter(is_active=False).order_by('-start_date', '-id')
    groups = [build_archive_group(year) for year in archived_years]
    logger.debug(f"Built {len(groups)} archive group(s)")
    return groups
