import json
import logging
from functools import wraps

from django.contrib import messages
from django.contrib.auth import logout
from django.http import JsonResponse, QueryDict
from django.shortcuts import redirect
from django.utils.translation import gettext as _

from ..security_logger import SecurityLogger

logger = logging.getLogger(__name__)


def wants_json(request):
    """True for requests made by screen code (XHR / fetch) rather than a browser form."""
    if request.headers.get('x-requested-with') == 'XMLHttpRequest':
        return True
    if request.content_type == 'application/json':
        return True
    return 'application/json' in request.headers.get('Accept', '')


def get_request_data(request):
    """
    Returns the submitted fields as a dict-like object.

    Accepts JSON bodies, form posts, and form-encoded bodies sent with a
    real PUT / PATCH (Django only parses form data for POST).
    Raises ValueError when a JSON body cannot be decoded.
    """
    if request.content_type == 'application/json':
        if not request.body:
            return {}
        try:
            data = json.loads(request.body)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON body: {e}") from e
        if not isinstance(data, dict):
            raise ValueError("JSON body must be an object.")
        return data

    if request.POST:
        return request.POST

    if request.method in ('PUT', 'PATCH') and request.body:
        return QueryDict(request.body, encoding=request.encoding)

    return request.POST


def admin_required(view_func):
    """
    Decorator for views that need a logged-in, active admin.

    Page views send everyone else to the login screen; AJAX views answer
    with a JSON 401/403 so screen clients never mistake the login page for
    a successful response.
    """

    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        user = request.user
        if not user.is_authenticated:
            if wants_json(request):
                return JsonResponse({'error': _('Unauthenticated.')}, status=401)
            return redirect('admin_login')

        if not getattr(user, 'can_use_admin_portal', False):
            SecurityLogger.log_security_event(
                'ACCESS_DENIED',
                f"{user.username} (role={user.role}, status={user.status}) tried {request.path}",
                level=1, severity='warning',
            )
            logout(request)
            if wants_json(request):
                return JsonResponse({'error': _('This account cannot access the admin portal.')}, status=403)
            messages.error(request, _('This account cannot access the admin portal.'))
            return redirect('admin_login')

        return view_func(request, *args, **kwargs)

    return _wrapped


def get_section_context(sections, grade_levels, editing_id=None):
    """Row dicts for the sections table with alternating shading and edit state."""
    rows = []
    for index, section in enumerate(sections):
        rows.append({
            'section': section,
            'row_class': 'bg-white' if index % 2 == 0 else 'bg-gray-50',
            'is_editing': editing_id == section.id,
        })
    return {
        'rows': rows,
        'grade_levels': grade_levels,
        'editing_id': editing_id,
    }
