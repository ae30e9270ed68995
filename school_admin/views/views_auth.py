import logging

from django.contrib import messages
from django.contrib.auth import authenticate, login, logout as auth_logout
from django.http import JsonResponse
from django.shortcuts import render, redirect
from django.utils.translation import gettext as _
from django.views.decorators.http import require_POST, require_http_methods

from ..forms import AdminLoginForm, flatten_errors
from ..security_logger import SecurityLogger, get_client_ip
from .views_utils import wants_json, get_request_data

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = _('Invalid credentials')


@require_http_methods(['GET', 'POST'])
def admin_login_view(request):
    """
    Admin login screen.

    Success redirects to the dashboard. Failures come back as field errors:
    re-rendered under the inputs for browser posts, or as a 422
    ``{"errors": {...}}`` map for screen clients.
    """
    if request.user.is_authenticated and getattr(request.user, 'can_use_admin_portal', False):
        return redirect('admin_dashboard')

    if request.method == 'POST':
        try:
            data = get_request_data(request)
        except ValueError as e:
            return JsonResponse({'errors': {'error': str(e)}}, status=400)

        form = AdminLoginForm(data)

        if form.is_valid():
            username = form.cleaned_data['username']
            user = authenticate(request, username=username, password=form.cleaned_data['password'])

            if user is None:
                SecurityLogger.log_auth_failure(username, 'Invalid username or password', get_client_ip(request))
                form.add_error('username', INVALID_CREDENTIALS)
            elif not user.can_use_admin_portal:
                SecurityLogger.log_auth_failure(username, f'Not an active admin (role={user.role}, status={user.status})', get_client_ip(request))
                form.add_error('username', INVALID_CREDENTIALS)
            else:
                login(request, user)
                # Session key was already rotated by login()
                SecurityLogger.log_login_success(user.id, user.username, get_client_ip(request))
                return redirect('admin_dashboard')

        if wants_json(request):
            return JsonResponse({'errors': flatten_errors(form)}, status=422)

        return render(request, 'school_admin/login.html', {
            'form': form,
            'errors': flatten_errors(form),
        })

    return render(request, 'school_admin/login.html', {'form': AdminLoginForm(), 'errors': {}})


@require_POST
def logout_view(request):
    """Logs the admin out and returns to the login screen."""
    if request.user.is_authenticated:
        SecurityLogger.log_logout(request.user.id, request.user.username)
    auth_logout(request)
    messages.success(request, _('You have been logged out.'))
    return redirect('admin_login')
