"""
Django management command to create (or reset) the portal's admin account.

Usage:
    python manage.py create_admin
    python manage.py create_admin --username admin --password 's3cret'

The password falls back to the ACNHS_ADMIN_PASSWORD environment variable.
"""
import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from school_admin.models import ROLE_ADMIN, STATUS_ACTIVE


class Command(BaseCommand):
    help = 'Create or update the admin account used to log into the portal'

    def add_arguments(self, parser):
        parser.add_argument('--username', default='admin')
        parser.add_argument('--password', default=None)
        parser.add_argument('--first-name', default='System')
        parser.add_argument('--last-name', default='Administrator')

    def handle(self, *args, **options):
        password = options['password'] or os.environ.get('ACNHS_ADMIN_PASSWORD')
        if not password:
            raise CommandError("No password given. Use --password or set ACNHS_ADMIN_PASSWORD.")

        UserModel = get_user_model()
        user, created = UserModel.objects.update_or_create(
            username=options['username'],
            defaults={
                'first_name': options['first_name'],
                'last_name': options['last_name'],
                'role': ROLE_ADMIN,
                'status': STATUS_ACTIVE,
                'is_active': True,
            },
        )
        user.set_password(password)
        user.save()

        action = 'Created' if created else 'Updated'
        self.stdout.write(self.style.SUCCESS(f"[OK] {action} admin account '{user.username}'"))
