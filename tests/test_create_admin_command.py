import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError

from school_admin.models import ROLE_ADMIN, STATUS_ACTIVE


@pytest.mark.django_db
class TestCreateAdminCommand:

    def test_creates_admin(self, capsys):
        call_command('create_admin', '--password', 'first-pass')
        user = get_user_model().objects.get(username='admin')
        assert user.role == ROLE_ADMIN
        assert user.status == STATUS_ACTIVE
        assert user.check_password('first-pass')
        assert user.can_use_admin_portal
        assert "[OK] Created admin account 'admin'" in capsys.readouterr().out

    def test_rerun_resets_password(self, capsys):
        call_command('create_admin', '--password', 'first-pass')
        call_command('create_admin', '--password', 'second-pass')
        user = get_user_model().objects.get(username='admin')
        assert user.check_password('second-pass')
        assert get_user_model().objects.count() == 1
        assert "[OK] Updated admin account 'admin'" in capsys.readouterr().out

    def test_password_from_environment(self, monkeypatch):
        monkeypatch.setenv('ACNHS_ADMIN_PASSWORD', 'env-pass')
        call_command('create_admin', '--username', 'registrar')
        assert get_user_model().objects.get(username='registrar').check_password('env-pass')

    def test_missing_password(self, monkeypatch):
        monkeypatch.delenv('ACNHS_ADMIN_PASSWORD', raising=False)
        with pytest.raises(CommandError):
            call_command('create_admin')

    def test_created_admin_can_log_in(self, client):
        call_command('create_admin', '--password', 'first-pass')
        response = client.post('/admin/login', {'username': 'admin', 'password': 'first-pass'})
        assert response.status_code == 302
