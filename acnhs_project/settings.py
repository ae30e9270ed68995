"""
Django settings for acnhs_project project.

Values come from environment variables. An optional ``config/local_settings.py``
is executed last and may override anything defined here.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_list(name, default=''):
    return [item.strip() for item in os.environ.get(name, default).split(',') if item.strip()]


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-acnhs-portal-dev-key-change-me')

DEBUG = _env_bool('DJANGO_DEBUG', False)

ALLOWED_HOSTS = _env_list('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver')

CSRF_TRUSTED_ORIGINS = _env_list('CSRF_TRUSTED_ORIGINS')

# The section manager sends the anti-forgery token as X-CSRF-TOKEN
CSRF_HEADER_NAME = 'HTTP_X_CSRF_TOKEN'


# Application definition

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'djmoney',
    'school_admin',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'school_admin.middleware.MethodOverrideMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'acnhs_project.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
                'school_admin.context_processors.app_version',
                'school_admin.context_processors.school_info',
            ],
        },
    },
]

WSGI_APPLICATION = 'acnhs_project.wsgi.application'


# Database

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.environ.get('DATABASE_PATH', str(BASE_DIR / 'db.sqlite3')),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

AUTH_USER_MODEL = 'school_admin.AdminUser'

LOGIN_URL = 'admin_login'
LOGIN_REDIRECT_URL = 'admin_dashboard'


# Password validation

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
]


# Internationalization

LANGUAGE_CODE = 'en-us'

TIME_ZONE = os.environ.get('TIME_ZONE', 'Asia/Manila')

USE_I18N = True

USE_TZ = True


# Money

DEFAULT_CURRENCY = 'PHP'
CURRENCIES = ('PHP',)
CURRENCY_CHOICES = [('PHP', 'PHP - Philippine Peso')]

# Babel locale used for peso formatting on every screen
CURRENCY_LOCALE = 'en_PH'


# Static files

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# School branding shown on the login screen

SCHOOL_NAME = os.environ.get('ACNHS_SCHOOL_NAME', 'Alubijid Comprehensive National Highschool')


# Logging

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

# 0=disabled, 1=basic, 2=standard, 3=detailed (see school_admin/security_logger.py)
SECURITY_LOG_LEVEL = int(os.environ.get('SECURITY_LOG_LEVEL', '2'))

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
        'security': {
            'level': 'INFO',
            'propagate': True,
        },
    },
}


# Local overrides (config/local_settings.py is not tracked)

LOCAL_SETTINGS_PATH = Path(os.environ.get('LOCAL_SETTINGS_PATH', BASE_DIR / 'config' / 'local_settings.py'))

if LOCAL_SETTINGS_PATH.exists():
    with open(LOCAL_SETTINGS_PATH, 'r', encoding='utf-8') as fh:
        exec(fh.read(), globals())
