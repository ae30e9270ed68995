# Copy to config/local_settings.py and adjust. Executed at the end of
# acnhs_project/settings.py, so anything defined there can be overridden.

SECRET_KEY = 'replace-with-a-long-random-string'
DEBUG = False
ALLOWED_HOSTS = ['portal.example.edu.ph']
CSRF_TRUSTED_ORIGINS = ['https://portal.example.edu.ph']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': '/app/data/acnhs.sqlite3',
    }
}

SECURITY_LOG_LEVEL = 2
