# school_admin/middleware.py

import logging

logger = logging.getLogger(__name__)


class MethodOverrideMiddleware:
    """
    Lets a POST stand in for PUT / PATCH / DELETE.

    The overridden verb is taken from the X-HTTP-Method-Override header or
    from a ``_method`` form field. Must be placed after CsrfViewMiddleware:
    the swap happens in ``process_view`` so the CSRF check still sees a POST
    and reads ``csrfmiddlewaretoken`` from the form body.
    """
    OVERRIDABLE_METHODS = ('PUT', 'PATCH', 'DELETE')
    FORM_CONTENT_TYPES = ('application/x-www-form-urlencoded', 'multipart/form-data')

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_view(self, request, view_func, view_args, view_kwargs):
        if request.method != 'POST':
            return None

        override = request.headers.get('X-HTTP-Method-Override', '')
        if not override and request.content_type in self.FORM_CONTENT_TYPES:
            override = request.POST.get('_method', '')

        override = override.strip().upper()
        if override in self.OVERRIDABLE_METHODS:
            logger.debug(f"[METHOD_OVERRIDE] POST {request.path} handled as {override}")
            request.original_method = 'POST'
            request.method = override
        return None
