from django.conf import settings

#Files version
VERSION = "1.0.0"


def app_version(request):
    """Context processor that provides the application version."""
    return {'app_version': VERSION}


def school_info(request):
    """School branding for the login screen and the admin layout header."""
    return {'school_name': getattr(settings, 'SCHOOL_NAME', '')}
